"""Fixed-step clock and one-shot timers.

The clock turns variable frame deltas into fixed simulation steps.
Timers are scheduled against the clock's time base and carry the
session generation that created them, so a timer that outlives its
session is dropped instead of touching the next one.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional
import itertools
import logging

logger = logging.getLogger(__name__)


@dataclass
class Timer:
    """A scheduled one-shot callback.

    Attributes:
        name: Label used in logs and lookups ("settle", "restart_gate", ...)
        due_ms: Clock time at which the timer fires
        callback: Called with no arguments when the timer fires
        generation: Session generation that scheduled the timer
    """

    name: str
    due_ms: float
    callback: Callable[[], None]
    generation: int
    seq: int = 0
    cancelled: bool = field(default=False, repr=False)

    def cancel(self) -> None:
        self.cancelled = True


class TimerQueue:
    """One-shot timers fired in due order as time advances."""

    def __init__(self) -> None:
        self._timers: List[Timer] = []
        self._now_ms = 0.0
        self._seq = itertools.count()

    def schedule(
        self,
        name: str,
        delay_ms: float,
        callback: Callable[[], None],
        generation: int,
    ) -> Timer:
        """Schedule a callback delay_ms after the current time."""
        timer = Timer(
            name=name,
            due_ms=self._now_ms + max(0.0, delay_ms),
            callback=callback,
            generation=generation,
            seq=next(self._seq),
        )
        self._timers.append(timer)
        logger.debug(f"Timer scheduled: {name} in {delay_ms:.0f}ms (gen={generation})")
        return timer

    def pending(self, name: Optional[str] = None) -> List[Timer]:
        """Get timers that have not fired or been cancelled."""
        return [
            t for t in self._timers
            if not t.cancelled and (name is None or t.name == name)
        ]

    def cancel_all(self) -> int:
        """Cancel every outstanding timer.

        Returns:
            Number of timers cancelled
        """
        count = len(self.pending())
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()
        if count:
            logger.debug(f"Cancelled {count} timers")
        return count

    def advance_to(self, now_ms: float, current_generation: int) -> int:
        """Move time forward and fire every timer due by now_ms.

        Timers from another generation are discarded without running.
        A callback may schedule new timers; those fire in the same call
        if they are already due.

        Returns:
            Number of callbacks that ran
        """
        self._now_ms = max(self._now_ms, now_ms)
        fired = 0

        while True:
            due = [t for t in self._timers if t.due_ms <= self._now_ms]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due_ms, t.seq))
            self._timers.remove(timer)

            if timer.cancelled:
                continue
            if timer.generation != current_generation:
                logger.debug(
                    f"Dropped stale timer {timer.name} "
                    f"(gen={timer.generation}, current={current_generation})"
                )
                continue

            timer.callback()
            fired += 1

        return fired


class Clock:
    """Accumulates frame time and yields fixed simulation steps.

    Args:
        tick_ms: Length of one simulation step
        max_steps: Upper bound of steps per advance call; extra time
            is dropped so a long stall cannot trigger a burst of ticks
    """

    def __init__(self, tick_ms: float = 16.0, max_steps: int = 8) -> None:
        self.tick_ms = tick_ms
        self.max_steps = max_steps
        self._accumulator = 0.0
        self._now_ms = 0.0

    @property
    def now_ms(self) -> float:
        """Simulation time in milliseconds."""
        return self._now_ms

    def advance(self, delta_ms: float) -> Iterator[float]:
        """Feed elapsed frame time, yielding the time of each fixed step."""
        self._accumulator += max(0.0, delta_ms)

        produced = 0
        while self._accumulator >= self.tick_ms:
            if produced >= self.max_steps:
                logger.debug(f"Clock behind, dropping {self._accumulator:.1f}ms")
                self._accumulator = 0.0
                break
            self._accumulator -= self.tick_ms
            self._now_ms += self.tick_ms
            produced += 1
            yield self._now_ms

    def reset(self) -> None:
        self._accumulator = 0.0
