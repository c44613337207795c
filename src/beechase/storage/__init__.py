"""High score persistence for Bee Chase."""

from beechase.storage.base import HighScoreStore, PersistenceError, parse_score
from beechase.storage.json_store import JsonHighScoreStore
from beechase.storage.memory import MemoryHighScoreStore

__all__ = [
    "HighScoreStore",
    "PersistenceError",
    "parse_score",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
]
