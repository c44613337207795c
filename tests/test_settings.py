from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from beechase.config.settings import GameSettings, Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.env == "simulator"
    assert settings.is_simulator
    assert not settings.debug
    assert settings.seed is None
    assert settings.game.tick_ms == 16.0
    assert settings.game.speed_cap == 5.0
    assert settings.storage.high_score_path == Path("data/high_score.json")
    assert settings.storage.high_score_key == "bitcoinChaseHighScore"
    assert (settings.simulator.width, settings.simulator.height) == (800, 600)


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BEECHASE_ENV", "headless")
    monkeypatch.setenv("BEECHASE_SEED", "7")
    monkeypatch.setenv("BEECHASE_GAME__SPEED_CAP", "6")

    settings = Settings(_env_file=None)

    assert settings.is_headless
    assert settings.seed == 7
    assert settings.game.speed_cap == 6.0


def test_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("BEECHASE_DEBUG=true\nBEECHASE_MAX_TICKS=50\n")

    settings = Settings(_env_file=env_file)

    assert settings.debug
    assert settings.max_ticks == 50


def test_unknown_env_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BEECHASE_ENV", "arcade")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize(
    "field, value",
    [("spawn_probability", 1.5), ("tick_ms", 0), ("score_divisor", 0), ("player_size", -1)],
)
def test_game_settings_validation(field: str, value) -> None:
    with pytest.raises(ValidationError):
        GameSettings(**{field: value})
