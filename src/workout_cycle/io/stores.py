"""
Key-value persistence for workout-cycle.

The engine needs only three operations from its storage: get, set and
delete of JSON-compatible values under string keys.  ``MemoryStore`` backs
tests and one-off runs; ``JsonFileStore`` keeps one JSON document per key in
a data directory.

Session history is stored as a single list under one key and rewritten
wholesale on every append.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Protocol

from ..core.models import SessionRecord
from .serializers import ValidationError, dict_to_session_record, session_record_to_dict

logger = logging.getLogger(__name__)

HISTORY_KEY = "workout_history"

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    """Minimal storage interface used by the engine."""

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""
        ...


class MemoryStore:
    """In-process store.  Values are JSON round-tripped so callers never share objects."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def set_raw(self, key: str, raw: str) -> None:
        """Store a raw string as-is (used to simulate corrupt documents)."""
        self._data[key] = raw

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class JsonFileStore:
    """
    One ``<key>.json`` document per key inside a directory.

    Reads propagate ``OSError`` and ``json.JSONDecodeError``; callers decide
    how to degrade.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid store key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def set(self, key: str, value: Any) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self._path(key), "w", encoding="utf-8") as f:
            json.dump(value, f, indent=2)

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


class SessionHistoryStore:
    """
    Append-only log of completed sessions on top of a KeyValueStore.

    Corrupt entries are skipped (with a warning) when loading; the rest of
    the history stays usable.
    """

    def __init__(self, kv: KeyValueStore, key: str = HISTORY_KEY) -> None:
        self.kv = kv
        self.key = key

    def _load_raw(self) -> list[Any]:
        raw = self.kv.get(self.key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise ValidationError(
                f"Session history must be a list, got {type(raw).__name__}"
            )
        return raw

    def load_all(self) -> list[SessionRecord]:
        """
        Load all sessions, sorted by date.

        Returns:
            Valid sessions; an unreadable history document yields [].
        """
        try:
            raw = self._load_raw()
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Session history unreadable, treating as empty: %s", e)
            return []

        sessions: list[SessionRecord] = []
        for i, entry in enumerate(raw):
            try:
                sessions.append(dict_to_session_record(entry))
            except ValidationError as e:
                logger.warning("Skipping corrupt session entry %d: %s", i, e)
        return sorted(sessions, key=lambda s: s.date)

    def save_all(self, sessions: list[SessionRecord]) -> None:
        """Replace the stored history."""
        ordered = sorted(sessions, key=lambda s: s.date)
        self.kv.set(self.key, [session_record_to_dict(s) for s in ordered])

    def append(self, session: SessionRecord) -> None:
        """
        Add one session.

        Raises:
            ValidationError: If the stored history is not a list (it is left
                untouched rather than overwritten)
        """
        raw = self._load_raw()
        raw.append(session_record_to_dict(session))
        raw.sort(key=lambda d: d.get("date", "") if isinstance(d, dict) else "")
        self.kv.set(self.key, raw)
        logger.info("Logged session on %s (%d total)", session.date, len(raw))

    def clear(self) -> None:
        """Remove the stored history."""
        self.kv.delete(self.key)
