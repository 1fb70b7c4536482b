"""ticketsync - Async client-side state sync for sheet-backed subjects and tickets."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ticketsync")
except PackageNotFoundError:
    __version__ = "0+local"
from ticketsync._cache import CacheKey, CacheStorage, FileCacheStorage, MemoryCacheStorage
from ticketsync.client import TicketSyncClient
from ticketsync.config import SyncConfig
from ticketsync.exceptions import (
    TicketSyncConfigError,
    TicketSyncDecodeError,
    TicketSyncError,
    TicketSyncStorageError,
    TicketSyncTransportError,
)
from ticketsync.fetcher import RemoteFetcher
from ticketsync.identity import IdentitySource, Resolution, ResolutionOutcome
from ticketsync.location import Location
from ticketsync.models import Subject, Ticket
from ticketsync.scheduler import PollScheduler, SchedulerState
from ticketsync.state.events import ChangeOrigin, StateChange, StateSection
from ticketsync.state.store import StateStore, SyncState

__all__ = [
    "__version__",
    "CacheKey",
    "CacheStorage",
    "ChangeOrigin",
    "FileCacheStorage",
    "IdentitySource",
    "Location",
    "MemoryCacheStorage",
    "PollScheduler",
    "RemoteFetcher",
    "Resolution",
    "ResolutionOutcome",
    "SchedulerState",
    "StateChange",
    "StateSection",
    "StateStore",
    "Subject",
    "SyncConfig",
    "SyncState",
    "Ticket",
    "TicketSyncClient",
    "TicketSyncConfigError",
    "TicketSyncDecodeError",
    "TicketSyncError",
    "TicketSyncStorageError",
    "TicketSyncTransportError",
]
