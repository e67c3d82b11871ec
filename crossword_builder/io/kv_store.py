"""Key-value session store backed by a single JSON file.

Holds the working puzzle (size, grid, clue texts) between runs so an editing
session can resume where it stopped. Every write is flushed to disk.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.exceptions import StorageError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_SESSION_FILE = Path("local_db/crossword-session.json")


class JsonKeyValueStore:
    """Persist JSON-compatible values under string keys."""

    def __init__(self, path: Path | str = DEFAULT_SESSION_FILE) -> None:
        self.path = Path(path)
        self._values: Optional[Dict[str, Any]] = None

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        value = self._load().get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        values = dict(self._load())
        values[key] = value
        self._write(values)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _load(self) -> Dict[str, Any]:
        if self._values is not None:
            return self._values
        if not self.path.exists():
            LOGGER.debug("Session store %s does not exist yet", self.path)
            self._values = {}
            return self._values
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read session store {self.path}: {exc}") from exc
        if not isinstance(doc, dict):
            raise StorageError(f"Session store {self.path} is not a JSON object")
        self._values = doc
        return self._values

    def _write(self, values: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(values, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot write session store {self.path}: {exc}") from exc
        self._values = values
