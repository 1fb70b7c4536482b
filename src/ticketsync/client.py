"""High-level async client tying cache, fetcher, resolver and poller together."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp

from ticketsync._cache import CacheStorage, FileCacheStorage, MemoryCacheStorage
from ticketsync._transport import HttpTransport
from ticketsync.config import SyncConfig
from ticketsync.exceptions import TicketSyncError
from ticketsync.fetcher import RemoteFetcher
from ticketsync.identity import (
    IdentitySource,
    Resolution,
    ResolutionOutcome,
    poll_subject_id,
    resolve_identity,
)
from ticketsync.location import Location
from ticketsync.scheduler import PollScheduler
from ticketsync.state.events import StateChange
from ticketsync.state.store import StateStore, SyncState

_logger = logging.getLogger(__name__)


def _default_storage(config: SyncConfig) -> CacheStorage:
    if config.cache_path:
        return FileCacheStorage(config.cache_path)
    return MemoryCacheStorage()


class TicketSyncClient:
    """Keeps subject/ticket state in sync with the sheet endpoints.

    Usage::

        async with TicketSyncClient(config, on_redirect=navigate) as client:
            await client.activate("https://app.example/view?id=u1")
            ...
            await client.reconfigure("https://app.example/view?id=u2")

    Leaving the context tears the client down: the poll timer stops,
    refreshes still in flight complete but no longer touch the state.
    """

    def __init__(
        self,
        config: SyncConfig,
        *,
        storage: CacheStorage | None = None,
        session: aiohttp.ClientSession | None = None,
        on_redirect: Callable[[str], None] | None = None,
        on_change: Callable[[StateChange], None] | None = None,
    ) -> None:
        self._config = config
        self._storage = storage if storage is not None else _default_storage(config)
        self._external_session = session is not None
        self._http_session = session
        self._on_redirect = on_redirect
        self._on_change = on_change
        self._transport: HttpTransport | None = None
        self._store: StateStore | None = None
        self._scheduler = PollScheduler(name="ticketsync-poll")
        self._location: Location | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TicketSyncClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._config.http_timeout),
            )
        self._transport = HttpTransport(self._http_session)
        self._store = StateStore(RemoteFetcher(self._config, self._transport), self._storage)
        if self._on_change is not None:
            self._store.subscribe(self._on_change)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.teardown()
        await self._scheduler.drain()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Public accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> SyncConfig:
        return self._config

    @property
    def store(self) -> StateStore:
        return self._require_store()

    @property
    def scheduler(self) -> PollScheduler:
        return self._scheduler

    @property
    def location(self) -> Location | None:
        return self._location

    @property
    def state(self) -> SyncState:
        return self._require_store().snapshot()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def activate(self, location: Location | str) -> Resolution:
        """Hydrate from the cache, then run the first resolution cycle."""
        store = self._require_live_store()
        evicted = store.hydrate()
        if evicted:
            _logger.info("Evicted corrupt cache entries: %s", sorted(key.value for key in evicted))
        return await self.reconfigure(location)

    async def reconfigure(self, location: Location | str) -> Resolution:
        """Replace the schedule for a new location.

        The previous timer is cancelled before anything else happens, so
        at most one timer is ever live.
        """
        store = self._require_live_store()
        self._scheduler.cancel()
        loc = self._coerce_location(location)
        self._location = loc

        resolution = resolve_identity(loc, store.load_subject_id(), admin_prefix=self._config.admin_prefix)
        _logger.debug("Resolved %s for %s", resolution, loc.path)

        pending: list[Awaitable[bool]] = []
        if resolution.outcome == ResolutionOutcome.FOUND and resolution.subject_id is not None:
            if resolution.source == IdentitySource.URL:
                store.remember_subject_id(resolution.subject_id)
            pending.append(store.refresh_subject(resolution.subject_id))
        elif resolution.outcome == ResolutionOutcome.REDIRECT:
            self._redirect()
            store.mark_loaded()
        else:
            store.mark_loaded()

        if resolution.ticket_id:
            pending.append(store.refresh_ticket(resolution.ticket_id))

        self._scheduler.arm(self._config.poll_interval, self._tick)

        if pending:
            await asyncio.gather(*pending)
        return resolution

    def teardown(self) -> None:
        """Stop polling and detach the store. Safe to call repeatedly."""
        self._scheduler.cancel()
        if self._store is not None:
            self._store.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_store(self) -> StateStore:
        if self._store is None:
            raise TicketSyncError("Client not initialized. Use 'async with TicketSyncClient(...) as client:'")
        return self._store

    def _require_live_store(self) -> StateStore:
        store = self._require_store()
        if store.closed:
            raise TicketSyncError("Client has been torn down; open a new TicketSyncClient")
        return store

    def _coerce_location(self, location: Location | str) -> Location:
        if isinstance(location, Location):
            return location
        return Location.from_url(
            location,
            subject_param=self._config.subject_param,
            ticket_param=self._config.ticket_param,
        )

    def _redirect(self) -> None:
        if self._store is None or self._store.closed:
            return
        target = self._config.fallback_path
        _logger.info("No subject identifier; redirecting to %s", target)
        if self._on_redirect is None:
            return
        try:
            self._on_redirect(target)
        except Exception:
            _logger.exception("Redirect callback failed")

    async def _tick(self) -> None:
        store = self._store
        location = self._location
        if store is None or location is None or store.closed:
            return
        subject_id = poll_subject_id(location, store.load_subject_id())
        jobs: list[Awaitable[bool]] = []
        if subject_id:
            jobs.append(store.refresh_subject(subject_id))
        jobs.append(store.refresh_all_subjects())
        jobs.append(store.refresh_all_tickets())
        await asyncio.gather(*jobs)
