"""In-memory state store mirrored to the persisted cache.

This is the only component allowed to mutate the live subject/ticket
state and the only writer of the cache.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ticketsync._cache import CacheKey, CacheStorage
from ticketsync.exceptions import TicketSyncError, TicketSyncStorageError
from ticketsync.fetcher import RemoteFetcher
from ticketsync.models.subject import Subject
from ticketsync.models.ticket import Ticket
from ticketsync.state.events import ChangeOrigin, StateChange, StateSection

_logger = logging.getLogger(__name__)

Listener = Callable[[StateChange], None]

_SUBJECT_ID = TypeAdapter(str)
_SUBJECT = TypeAdapter(Subject)
_SUBJECTS = TypeAdapter(list[Subject])
_TICKET = TypeAdapter(Ticket)
_TICKETS = TypeAdapter(list[Ticket])

# Cache slot -> (decoder, in-memory section). The resolved id has no section.
_SLOTS: dict[CacheKey, tuple[TypeAdapter[Any], StateSection | None]] = {
    CacheKey.SUBJECT_ID: (_SUBJECT_ID, None),
    CacheKey.SUBJECT: (_SUBJECT, StateSection.SUBJECT),
    CacheKey.SUBJECTS: (_SUBJECTS, StateSection.SUBJECTS),
    CacheKey.TICKET: (_TICKET, StateSection.TICKET),
    CacheKey.TICKETS: (_TICKETS, StateSection.TICKETS),
}


class SyncState(BaseModel):
    """Immutable snapshot of the store."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    subject: Subject | None = None
    ticket: Ticket | None = None
    subjects: list[Subject] = Field(default_factory=list)
    tickets: list[Ticket] = Field(default_factory=list)
    loading: bool = True


class StateStore:
    """Current subject/ticket, both collections, and a loading flag.

    Refresh operations never raise for fetch failures: the prior state is
    kept, the failure is logged, and ``loading`` is cleared either way.
    """

    def __init__(self, fetcher: RemoteFetcher, cache: CacheStorage) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._subject: Subject | None = None
        self._ticket: Ticket | None = None
        self._subjects: list[Subject] = []
        self._tickets: list[Ticket] = []
        self._loading = True
        self._closed = False
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def subject(self) -> Subject | None:
        return self._subject

    @property
    def ticket(self) -> Ticket | None:
        return self._ticket

    @property
    def subjects(self) -> list[Subject]:
        return list(self._subjects)

    @property
    def tickets(self) -> list[Ticket]:
        return list(self._tickets)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> SyncState:
        return SyncState(
            subject=self._subject,
            ticket=self._ticket,
            subjects=list(self._subjects),
            tickets=list(self._tickets),
            loading=self._loading,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Local mutators (memory only, never persisted)
    # ------------------------------------------------------------------

    def set_subject(self, subject: Subject | None) -> None:
        self._assign(StateSection.SUBJECT, subject, ChangeOrigin.LOCAL)

    def set_subjects(self, subjects: list[Subject]) -> None:
        self._assign(StateSection.SUBJECTS, list(subjects), ChangeOrigin.LOCAL)

    def set_ticket(self, ticket: Ticket | None) -> None:
        self._assign(StateSection.TICKET, ticket, ChangeOrigin.LOCAL)

    def set_tickets(self, tickets: list[Ticket]) -> None:
        self._assign(StateSection.TICKETS, list(tickets), ChangeOrigin.LOCAL)

    def mark_loaded(self) -> None:
        """Clear the loading flag without fetching."""
        self._settle()

    def close(self) -> None:
        """Detach the store; late completions are dropped from here on."""
        self._closed = True

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def hydrate(self) -> set[CacheKey]:
        """Adopt every decodable cache entry; evict the rest.

        Each entry is handled independently. Returns the evicted keys.
        """
        evicted: set[CacheKey] = set()
        for key, (adapter, section) in _SLOTS.items():
            raw = self._cache.get(key)
            if raw is None:
                continue
            try:
                value = adapter.validate_json(raw)
            except ValidationError:
                _logger.warning("Error parsing cached %s; evicting", key.value, exc_info=True)
                self._evict(key)
                evicted.add(key)
                continue
            if section is not None:
                self._assign(section, value, ChangeOrigin.CACHE)
        return evicted

    def load_subject_id(self) -> str | None:
        """Return the persisted resolved subject id, evicting it if corrupt."""
        raw = self._cache.get(CacheKey.SUBJECT_ID)
        if raw is None:
            return None
        try:
            subject_id = _SUBJECT_ID.validate_json(raw)
        except ValidationError:
            _logger.warning("Error parsing cached %s; evicting", CacheKey.SUBJECT_ID.value)
            self._evict(CacheKey.SUBJECT_ID)
            return None
        return subject_id or None

    def remember_subject_id(self, subject_id: str) -> None:
        if self._closed:
            return
        self._write(CacheKey.SUBJECT_ID, _SUBJECT_ID, subject_id)

    def _write(self, key: CacheKey, adapter: TypeAdapter[Any], value: Any) -> None:
        try:
            self._cache.set(key, adapter.dump_json(value).decode("utf-8"))
        except TicketSyncStorageError:
            _logger.warning("Could not persist %s", key.value, exc_info=True)

    def _evict(self, key: CacheKey) -> None:
        try:
            self._cache.remove(key)
        except TicketSyncStorageError:
            _logger.warning("Could not evict %s", key.value, exc_info=True)

    # ------------------------------------------------------------------
    # Remote refresh
    # ------------------------------------------------------------------

    async def refresh_subject(self, subject_id: str) -> bool:
        """Fetch the subject collection and adopt the row for *subject_id*.

        Returns ``True`` when the current subject was replaced.
        """
        try:
            subject = await self._fetcher.find_subject(subject_id)
            if subject is None:
                _logger.debug("Subject %s not present in collection", subject_id)
                return False
            return self._adopt(StateSection.SUBJECT, CacheKey.SUBJECT, _SUBJECT, subject)
        except TicketSyncError as exc:
            _logger.warning("Error fetching subject %s: %s", subject_id, exc)
            return False
        finally:
            self._settle()

    async def refresh_all_subjects(self) -> bool:
        try:
            subjects = await self._fetcher.fetch_subjects()
            return self._adopt(StateSection.SUBJECTS, CacheKey.SUBJECTS, _SUBJECTS, subjects)
        except TicketSyncError as exc:
            _logger.warning("Error fetching all subjects: %s", exc)
            return False
        finally:
            self._settle()

    async def refresh_ticket(self, ticket_id: str) -> bool:
        """Fetch the ticket collection and adopt the row for *ticket_id*."""
        try:
            ticket = await self._fetcher.find_ticket(ticket_id)
            if ticket is None:
                _logger.debug("Ticket %s not present in collection", ticket_id)
                return False
            return self._adopt(StateSection.TICKET, CacheKey.TICKET, _TICKET, ticket)
        except TicketSyncError as exc:
            _logger.warning("Error fetching ticket %s: %s", ticket_id, exc)
            return False
        finally:
            self._settle()

    async def refresh_all_tickets(self) -> bool:
        try:
            tickets = await self._fetcher.fetch_tickets()
            return self._adopt(StateSection.TICKETS, CacheKey.TICKETS, _TICKETS, tickets)
        except TicketSyncError as exc:
            _logger.warning("Error fetching all tickets: %s", exc)
            return False
        finally:
            self._settle()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _adopt(self, section: StateSection, key: CacheKey, adapter: TypeAdapter[Any], value: Any) -> bool:
        """Apply a fetched value and persist it, unless the store is closed."""
        if self._closed:
            _logger.debug("Dropping %s update after close", section.value)
            return False
        self._assign(section, value, ChangeOrigin.REMOTE)
        self._write(key, adapter, value)
        return True

    def _assign(self, section: StateSection, value: Any, origin: ChangeOrigin) -> None:
        if self._closed:
            return
        if section == StateSection.SUBJECT:
            self._subject = value
        elif section == StateSection.SUBJECTS:
            self._subjects = value
        elif section == StateSection.TICKET:
            self._ticket = value
        elif section == StateSection.TICKETS:
            self._tickets = value
        self._notify(StateChange(section=section, origin=origin))

    def _settle(self) -> None:
        if self._closed or not self._loading:
            return
        self._loading = False
        self._notify(StateChange(section=StateSection.LOADING, origin=ChangeOrigin.LOCAL))

    def _notify(self, change: StateChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                _logger.exception("State listener failed for %s", change.section.value)
