"""Custom exception hierarchy for ticketsync."""

from __future__ import annotations


class TicketSyncError(Exception):
    """Base exception for all ticketsync errors."""


class TicketSyncConfigError(TicketSyncError):
    """Invalid or missing configuration."""


class TicketSyncTransportError(TicketSyncError):
    """HTTP-level failure (network, timeout, non-2xx)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class TicketSyncDecodeError(TicketSyncError):
    """Remote payload is not JSON or not the expected collection shape."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class TicketSyncStorageError(TicketSyncError):
    """The persisted cache could not be written.

    Raised by storage backends; the state store logs it and keeps the
    in-memory update.
    """
