"""Persisted high score: one big-endian 32-bit integer in a small file."""

from __future__ import annotations

import logging
import os
import struct

from .config import HIGH_SCORE_FILE

logger = logging.getLogger(__name__)

_FORMAT = ">i"


class HighScoreStore:
    def __init__(self, path: str | os.PathLike[str] = HIGH_SCORE_FILE) -> None:
        self.path = os.fspath(path)

    def load(self) -> int:
        """Read the stored score; a missing or corrupt file counts as 0."""
        try:
            with open(self.path, "rb") as fh:
                (value,) = struct.unpack(_FORMAT, fh.read(struct.calcsize(_FORMAT)))
        except FileNotFoundError:
            return 0
        except (OSError, struct.error) as exc:
            logger.debug("Ignoring unreadable high score file %s: %s", self.path, exc)
            return 0
        return max(0, value)

    def save(self, value: int) -> bool:
        """Write the score. Failures are logged and reported, never raised."""
        try:
            with open(self.path, "wb") as fh:
                fh.write(struct.pack(_FORMAT, value))
        except OSError as exc:
            logger.warning("Could not save high score: %s", exc)
            return False
        return True
