"""Persisted key-value cache backing the state store.

Storage backends are plain passthroughs: they hold JSON text per key and
never inspect or transform it. Decoding (and evicting entries that no
longer decode) is the state store's job.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from ticketsync.exceptions import TicketSyncStorageError

_logger = logging.getLogger(__name__)


class CacheKey(StrEnum):
    """Well-known cache slots."""

    SUBJECT_ID = "userId"
    SUBJECT = "userData"
    SUBJECTS = "allUsersData"
    TICKET = "ticketData"
    TICKETS = "allTicketsData"


class CacheStorage(Protocol):
    """Structural storage interface.

    Backends are synchronous; reads happen during hydration before any
    fetch is issued.
    """

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryCacheStorage:
    """Process-local storage; contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileCacheStorage:
    """Durable storage in a single JSON file: ``{key: text, ...}``.

    The file is loaded lazily on first access and rewritten atomically on
    every mutation. An unreadable or corrupt file is treated as empty.
    """

    def __init__(self, path: os.PathLike[str] | str) -> None:
        self._path = Path(path)
        self._data: dict[str, str] = {}
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        if not self._path.exists():
            return
        try:
            with self._path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError):
            _logger.warning("Cache file %s is unreadable; starting empty", self._path, exc_info=True)
            return
        if not isinstance(raw, dict):
            _logger.warning("Cache file %s does not hold an object; starting empty", self._path)
            return
        self._data = {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _save(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, sort_keys=True)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise TicketSyncStorageError(f"Could not write cache file {self._path}: {exc}") from exc

    def get(self, key: str) -> str | None:
        self._ensure_loaded()
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._ensure_loaded()
        updated = {**self._data, key: value}
        self._save(updated)
        self._data = updated

    def remove(self, key: str) -> None:
        self._ensure_loaded()
        if key not in self._data:
            return
        updated = {k: v for k, v in self._data.items() if k != key}
        self._save(updated)
        self._data = updated
