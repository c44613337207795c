"""Configuration for Bee Chase."""

from beechase.config.settings import (
    GameSettings,
    Settings,
    SimulatorSettings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "GameSettings",
    "Settings",
    "SimulatorSettings",
    "StorageSettings",
    "get_settings",
]
