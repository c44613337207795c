from __future__ import annotations

import asyncio

from beechase.core.events import Event, EventBus, EventType, jump_event, start_event


def test_subscribe_and_emit() -> None:
    bus = EventBus()
    received = []
    bus.subscribe(EventType.JUMP, received.append)

    bus.emit(jump_event())
    bus.emit(start_event())

    assert [e.type for e in received] == [EventType.JUMP]
    assert received[0].source == "input"


def test_unsubscribe() -> None:
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(EventType.START, received.append)

    unsubscribe()
    bus.emit(start_event())
    unsubscribe()

    assert received == []


def test_failing_handler_does_not_stop_others() -> None:
    bus = EventBus()
    received = []

    def broken(event: Event) -> None:
        raise ValueError("boom")

    bus.subscribe(EventType.JUMP, broken)
    bus.subscribe(EventType.JUMP, received.append)
    bus.emit(jump_event())

    assert len(received) == 1


def test_queued_events_wait_for_processing() -> None:
    bus = EventBus()
    received = []
    bus.subscribe(EventType.START, lambda e: received.append(e.type))
    bus.subscribe(EventType.JUMP, lambda e: received.append(e.type))

    bus.queue_event(start_event())
    bus.queue_event(jump_event())
    assert received == []

    asyncio.run(bus.process_queue())
    assert received == [EventType.START, EventType.JUMP]
    assert bus.queue.empty()


def test_async_handlers_run_only_from_queue() -> None:
    bus = EventBus()
    received = []

    async def handler(event: Event) -> None:
        received.append(event.source)

    bus.subscribe(EventType.START, handler)

    bus.emit(start_event("direct"))
    assert received == []

    bus.queue_event(start_event("queued"))
    asyncio.run(bus.process_queue())
    assert received == ["queued"]


def test_history_is_bounded_and_filterable() -> None:
    bus = EventBus(history_limit=5)
    for _ in range(8):
        bus.emit(start_event())
    bus.emit(jump_event("last"))

    history = bus.get_history(limit=100)
    assert len(history) == 5
    assert history[-1].source == "last"
    assert len(bus.get_history(EventType.START, limit=2)) == 2
    assert len(bus.get_history(EventType.START, limit=100)) == 4
