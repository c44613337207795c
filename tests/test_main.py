from __future__ import annotations

from beechase.config.settings import GameSettings, Settings
from beechase.core.state import GameState
from beechase.main import autopilot, create_game, run_headless
from beechase.storage.memory import MemoryHighScoreStore


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, env="headless", **overrides)


def test_create_game_uses_settings() -> None:
    settings = _settings(game=GameSettings(speed_floor=3.0))
    game = create_game(settings, store=MemoryHighScoreStore(9))

    assert game.scores.high == 9
    assert game.speed == 3.0
    assert game.state == GameState.START


def test_autopilot_jumps_just_before_an_obstacle() -> None:
    game = create_game(_settings(), store=MemoryHighScoreStore())
    game.on_start()

    game.world.add_obstacle(300)
    autopilot(game)
    assert not game.world.player.airborne

    game.world.obstacles[0].x = 140
    autopilot(game)
    assert game.world.player.airborne


def test_run_headless_stops_at_max_ticks() -> None:
    store = MemoryHighScoreStore()
    settings = _settings(max_ticks=50, seed=1, game=GameSettings(spawn_probability=0.0))

    assert run_headless(settings, store=store) is None
    assert store.writes == 0


def test_run_headless_plays_a_session() -> None:
    store = MemoryHighScoreStore()
    settings = _settings(max_ticks=20000, seed=3)

    result = run_headless(settings, store=store)

    if result is not None:
        assert result.high_score >= result.display_score
        assert store.writes <= 1
        if result.is_new_record:
            assert store.read_high_score() == result.display_score
