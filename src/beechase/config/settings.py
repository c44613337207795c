"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested values use a double underscore, e.g. BEECHASE_GAME__SPEED_CAP=6.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameSettings(BaseSettings):
    """Simulation constants (pixels, pixels per tick, milliseconds)."""

    # Clock
    tick_ms: float = Field(default=16.0, gt=0.0)

    # Viewport / ground
    viewport_height: int = Field(default=600, gt=0)
    ground_margin: int = Field(default=250, ge=0)

    # Player
    player_x: float = 100.0
    player_size: int = Field(default=40, gt=0)
    jump_height: float = Field(default=120.0, gt=0.0)
    jump_duration_ms: float = Field(default=600.0, gt=0.0)

    # Obstacles
    obstacle_width: int = Field(default=30, gt=0)
    obstacle_height: int = Field(default=60, gt=0)
    spawn_x: float = 800.0
    spawn_trailing_x: float = 500.0
    spawn_probability: float = Field(default=0.25, ge=0.0, le=1.0)

    # Collectible
    collectible_start_x: float = 700.0
    collectible_clearance: float = 70.0
    collectible_size: int = Field(default=30, gt=0)
    collectible_hover: float = 30.0
    collectible_speed_factor: float = Field(default=0.8, ge=0.0)
    bob_amplitude: float = 20.0
    bob_frequency: float = 0.01
    respawn_jitter: float = Field(default=200.0, ge=0.0)

    # Collision
    hit_padding: float = Field(default=16.0, ge=0.0)
    catch_radius: float = Field(default=50.0, gt=0.0)

    # Scoring
    catch_bonus: int = Field(default=100, ge=0)
    catch_cooldown_ms: float = Field(default=200.0, ge=0.0)
    score_divisor: int = Field(default=10, gt=0)

    # Difficulty
    speed_floor: float = Field(default=2.0, gt=0.0)
    speed_step: float = Field(default=0.001, ge=0.0)
    speed_cap: float = Field(default=5.0, gt=0.0)

    # Session timers
    restart_delay_ms: float = Field(default=500.0, ge=0.0)
    record_banner_ms: float = Field(default=3000.0, ge=0.0)


class StorageSettings(BaseSettings):
    """High score persistence."""

    high_score_path: Path = Path("data/high_score.json")
    high_score_key: str = "bitcoinChaseHighScore"


class SimulatorSettings(BaseSettings):
    """Desktop simulator window."""

    width: int = 800
    height: int = 600
    fps: int = 60
    title: str = "Bee Chase"
    resizable: bool = True


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="BEECHASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False

    # Headless runs
    max_ticks: int = Field(default=20000, gt=0)
    seed: int | None = None

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running with a window."""
        return self.env == "simulator"

    @property
    def is_headless(self) -> bool:
        """Check if running without a display."""
        return self.env == "headless"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
