"""Flat key-value blob store for Spark.

Each key is one file under ``<root>/storage/``. Values are opaque strings;
callers decide how to encode them (JSON arrays for the collections, a bare
word for the theme).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from spark.fileio import read_json_array, read_text, write_json_atomic, write_text_atomic
from spark.workspace import storage_dir

HABITS_KEY = "spark_habits"
NOTES_KEY = "spark_notes"
THEME_KEY = "spark_theme"

THEMES = ("dark", "light")

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")

logger = logging.getLogger(__name__)


class LocalStorage:
    """Synchronous key-value store backed by one file per key."""

    def __init__(self, root: Path | None = None) -> None:
        self.directory = storage_dir(root)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / key

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return read_text(path)
        except UnicodeDecodeError:
            logger.warning("Ignoring %s: not valid UTF-8", key, exc_info=True)
            return None

    def set_item(self, key: str, value: str) -> None:
        write_text_atomic(self._path(key), value)

    def get_json_array(self, key: str) -> list[Any]:
        """The JSON array stored under *key*; [] when absent or unreadable."""
        return read_json_array(self._path(key))

    def set_json(self, key: str, data: Any) -> None:
        write_json_atomic(self._path(key), data)

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()

    def keys(self) -> list[str]:
        if not self.directory.exists():
            return []
        return sorted(p.name for p in self.directory.iterdir() if p.is_file() and not p.name.startswith("."))


def load_theme(storage: LocalStorage) -> str | None:
    """Stored theme preference, or None when absent or unrecognised."""
    value = (storage.get_item(THEME_KEY) or "").strip()
    return value if value in THEMES else None


def save_theme(storage: LocalStorage, theme: str) -> None:
    if theme not in THEMES:
        raise ValueError(f"Invalid theme: {theme!r}")
    storage.set_item(THEME_KEY, theme)
