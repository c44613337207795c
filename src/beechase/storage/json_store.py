"""JSON file backed high score store."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from beechase.storage.base import HighScoreStore, PersistenceError, parse_score

logger = logging.getLogger(__name__)

DEFAULT_KEY = "bitcoinChaseHighScore"


class JsonHighScoreStore(HighScoreStore):
    """Keeps the high score as {key: value} in a JSON file.

    With strict=False (the default) I/O and decode problems are logged
    and reported as None/False. With strict=True they raise
    PersistenceError so the caller can decide.
    """

    def __init__(
        self,
        path: Path | str,
        key: str = DEFAULT_KEY,
        strict: bool = False,
    ) -> None:
        self.path = Path(path)
        self.key = key
        self.strict = strict

    def read_high_score(self) -> Optional[int]:
        try:
            if not self.path.exists():
                return None
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            if self.strict:
                raise PersistenceError(f"Cannot read {self.path}: {e}") from e
            logger.warning(f"Failed to load high score from {self.path}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed high score file {self.path}")
            return None

        raw = data.get(self.key)
        score = parse_score(raw)
        if raw is not None and score is None:
            logger.warning(f"Ignoring malformed high score value: {raw!r}")
        return score

    def write_high_score(self, score: int) -> bool:
        data = self._load_document()
        data[self.key] = int(score)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            if self.strict:
                raise PersistenceError(f"Cannot write {self.path}: {e}") from e
            logger.error(f"Failed to save high score to {self.path}: {e}")
            return False

        logger.info(f"High score saved: {score}")
        return True

    def _load_document(self) -> dict:
        """Existing document, so other keys in the file survive a write."""
        try:
            if not self.path.exists():
                return {}
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}
