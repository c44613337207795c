"""Bee Chase simulation: entities, spawning, collision, scoring, session flow."""

from beechase.game.entities import (
    Collectible,
    EntityModel,
    Obstacle,
    Player,
    ground_level_for,
)
from beechase.game.collision import catches_collectible, first_hit, hits_obstacle
from beechase.game.spawn import SpawnController
from beechase.game.score import FinalizeResult, ScoreKeeper, ScoreState
from beechase.game.snapshot import GameSnapshot
from beechase.game.machine import GameStateMachine, TickOutcome

__all__ = [
    "Collectible",
    "EntityModel",
    "Obstacle",
    "Player",
    "ground_level_for",
    "catches_collectible",
    "first_hit",
    "hits_obstacle",
    "SpawnController",
    "FinalizeResult",
    "ScoreKeeper",
    "ScoreState",
    "GameSnapshot",
    "GameStateMachine",
    "TickOutcome",
]
