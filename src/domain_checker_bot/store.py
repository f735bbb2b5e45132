"""
Key-Value State Store

Backing store for rate-limit state and cached TLD lists. Entries carry an
absolute expiry; an expired entry reads as absent. Nothing here is a source
of truth, so read and write failures degrade to "no state".

Two backends:
- MemoryStore: process-local dict (default, and used by the tests)
- FileStore: JSON file in the user's cache directory, shared across restarts
"""

import json
import logging
import os
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Key = tuple[str, ...]
Clock = Callable[[], float]


class KeyValueStore(Protocol):
    """Minimal get/set/delete store with per-entry TTL (seconds)."""

    def get(self, key: Key) -> Any | None:
        ...

    def set(self, key: Key, value: Any, ttl: float | None = None) -> None:
        ...

    def delete(self, key: Key) -> None:
        ...


def _encode_key(key: Key) -> str:
    # JSON object keys must be strings
    return "/".join(key)


class MemoryStore:
    """In-process store. Expiry is checked lazily on read."""

    def __init__(self, clock: Clock = time.time) -> None:
        self._clock = clock
        self._entries: dict[Key, tuple[Any, float | None]] = {}

    def get(self, key: Key) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires = entry
        if expires is not None and self._clock() >= expires:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: Key, value: Any, ttl: float | None = None) -> None:
        expires = self._clock() + ttl if ttl is not None else None
        self._entries[key] = (value, expires)

    def delete(self, key: Key) -> None:
        self._entries.pop(key, None)


def get_default_state_path() -> Path:
    """Get the state file path in the user's cache directory."""
    if os.name == 'nt':  # Windows
        base = Path(os.environ.get('APPDATA', Path.home()))
    else:  # macOS, Linux
        base = Path(os.environ.get('XDG_CACHE_HOME', Path.home() / '.cache'))

    return base / 'domain-checker-bot' / 'state.json'


class FileStore:
    """
    JSON-file store.

    The whole file is re-read on every operation so concurrent processes see
    each other's writes (last write wins).
    """

    def __init__(self, path: Path | None = None, clock: Clock = time.time) -> None:
        self.path = path or get_default_state_path()
        self._clock = clock

    def _load(self) -> dict:
        """Load entries from disk, returning {} if not found or invalid."""
        try:
            if self.path.exists():
                with open(self.path, "r") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, e)
        return {}

    def _save(self, entries: dict) -> bool:
        """Save entries to disk. Returns True on success."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(entries, f, indent=2)
            return True
        except OSError as e:
            logger.error("Failed to write state file %s: %s", self.path, e)
            return False

    def get(self, key: Key) -> Any | None:
        entry = self._load().get(_encode_key(key))
        if not isinstance(entry, dict):
            return None
        expires = entry.get("expires")
        if expires is not None and self._clock() >= expires:
            return None
        return entry.get("value")

    def set(self, key: Key, value: Any, ttl: float | None = None) -> None:
        entries = self._load()
        now = self._clock()

        # Drop expired entries so the file doesn't grow without bound
        entries = {
            k: v for k, v in entries.items()
            if isinstance(v, dict) and (v.get("expires") is None or v["expires"] > now)
        }
        entries[_encode_key(key)] = {
            "value": value,
            "expires": now + ttl if ttl is not None else None,
        }
        self._save(entries)

    def delete(self, key: Key) -> None:
        entries = self._load()
        if entries.pop(_encode_key(key), None) is not None:
            self._save(entries)


def open_store(state: str | None = None, state_file: str | None = None) -> KeyValueStore:
    """
    Pick a store backend.

    An explicit state file always means FileStore; ``state == "file"`` uses
    the default cache path; anything else is an in-memory store.
    """
    if state_file:
        return FileStore(Path(state_file).expanduser())
    if (state or "").lower() == "file":
        return FileStore()
    return MemoryStore()
