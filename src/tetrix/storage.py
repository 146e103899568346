"""Persistence for the high score and the tutorial flag.

Two scalar values live under fixed keys.  On the desktop they are kept in a
small JSON file; in the browser they go to ``window.localStorage``.  Reading
a missing or damaged store yields the defaults and write failures are only
logged, so losing the high score never interrupts a game.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional


LOGGER = logging.getLogger(__name__)

BEST_KEY = "tetrixapp_best"
TUTORIAL_KEY = "tetrixapp_tutorial_seen"
SCORES_PATH_ENV = "TETRIX_SCORES_PATH"


def _parse_best(raw: Any) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return 0
    return max(0, value)


def default_scores_path() -> Path:
    """Return the JSON store location, honouring ``TETRIX_SCORES_PATH``."""

    override = os.getenv(SCORES_PATH_ENV)
    if override:
        return Path(override)
    return Path.home() / ".tetrixapp.json"


class JsonScoreStore:
    """Key-value store backed by a JSON file."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else default_scores_path()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            LOGGER.warning("Ignoring unreadable score file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            LOGGER.warning("Ignoring malformed score file %s", self.path)
            return {}
        return data

    def _write(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("Could not save %s to %s: %s", key, self.path, exc)

    def load_best(self) -> int:
        return _parse_best(self._read().get(BEST_KEY))

    def save_best(self, value: int) -> None:
        self._write(BEST_KEY, int(value))

    def tutorial_seen(self) -> bool:
        return bool(self._read().get(TUTORIAL_KEY))

    def mark_tutorial_seen(self) -> None:
        self._write(TUTORIAL_KEY, "1")


class LocalStorageStore:
    """Same interface over a browser ``localStorage``-like object.

    Browsers may refuse storage access (private mode, quota); such errors
    surface as JS exceptions and are logged like file errors.
    """

    def __init__(self, storage: Any) -> None:
        self._storage = storage

    def _get(self, key: str) -> Any:
        try:
            return self._storage.getItem(key)
        except Exception as exc:
            LOGGER.warning("Could not read %s from localStorage: %s", key, exc)
            return None

    def _set(self, key: str, value: str) -> None:
        try:
            self._storage.setItem(key, value)
        except Exception as exc:
            LOGGER.warning("Could not save %s to localStorage: %s", key, exc)

    def load_best(self) -> int:
        return _parse_best(self._get(BEST_KEY))

    def save_best(self, value: int) -> None:
        self._set(BEST_KEY, str(int(value)))

    def tutorial_seen(self) -> bool:
        return bool(self._get(TUTORIAL_KEY))

    def mark_tutorial_seen(self) -> None:
        self._set(TUTORIAL_KEY, "1")


__all__ = [
    "BEST_KEY",
    "TUTORIAL_KEY",
    "JsonScoreStore",
    "LocalStorageStore",
    "default_scores_path",
]
