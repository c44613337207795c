from __future__ import annotations

from beechase.game.score import ScoreKeeper
from beechase.storage.memory import MemoryHighScoreStore


def test_loads_high_score_from_store() -> None:
    keeper = ScoreKeeper(MemoryHighScoreStore(42))
    assert keeper.high == 42
    assert keeper.raw == 0


def test_missing_value_means_zero() -> None:
    assert ScoreKeeper(MemoryHighScoreStore()).high == 0


def test_tick_and_catch_bonus() -> None:
    keeper = ScoreKeeper(MemoryHighScoreStore())
    for _ in range(9):
        keeper.tick()
    assert keeper.display == 0

    keeper.tick()
    assert (keeper.raw, keeper.display) == (10, 1)

    keeper.tick(caught=True)
    assert keeper.raw == 111
    assert keeper.display == 11


def test_reset_keeps_high_score() -> None:
    keeper = ScoreKeeper(MemoryHighScoreStore(7))
    keeper.tick()
    keeper.reset()
    assert keeper.raw == 0
    assert keeper.high == 7


def test_finalize_new_record_writes_once() -> None:
    store = MemoryHighScoreStore(10)
    keeper = ScoreKeeper(store)

    result = keeper.finalize(raw=125)

    assert result.display_score == 12
    assert result.high_score == 12
    assert result.previous_high == 10
    assert result.is_new_record
    assert result.persisted
    assert keeper.high == 12
    assert store.writes == 1
    assert store.read_high_score() == 12


def test_tie_is_not_a_record() -> None:
    store = MemoryHighScoreStore(12)
    result = ScoreKeeper(store).finalize(raw=129)

    assert result.display_score == 12
    assert not result.is_new_record
    assert result.high_score == 12
    assert store.writes == 0


def test_lower_score_keeps_high() -> None:
    store = MemoryHighScoreStore(50)
    keeper = ScoreKeeper(store)
    result = keeper.finalize(raw=30)

    assert result.display_score == 3
    assert result.high_score == 50
    assert keeper.high == 50
    assert store.writes == 0


def test_first_session_with_zero_score_is_not_a_record() -> None:
    store = MemoryHighScoreStore()
    result = ScoreKeeper(store).finalize(raw=5)
    assert result.display_score == 0
    assert not result.is_new_record
    assert store.writes == 0


def test_read_failure_starts_from_zero_and_reports(broken_store) -> None:
    reports = []
    keeper = ScoreKeeper(broken_store(fail_read=True), on_persistence_error=reports.append)

    assert keeper.high == 0
    assert len(reports) == 1
    assert "storage unavailable" in reports[0]


def test_write_failure_keeps_record_in_memory(broken_store) -> None:
    reports = []
    store = broken_store()
    keeper = ScoreKeeper(store, on_persistence_error=reports.append)

    result = keeper.finalize(raw=200)

    assert result.is_new_record
    assert not result.persisted
    assert keeper.high == 20
    assert store.attempts == 1
    assert reports and "quota exceeded" in reports[0]


def test_refused_write_is_reported(broken_store) -> None:
    reports = []
    keeper = ScoreKeeper(broken_store(refuse_write=True), on_persistence_error=reports.append)

    result = keeper.finalize(raw=200)

    assert not result.persisted
    assert keeper.high == 20
    assert len(reports) == 1
