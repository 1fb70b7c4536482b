"""Client configuration for ticketsync."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from ticketsync._constants import (
    ADMIN_PREFIX,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    FALLBACK_PATH,
    SUBJECT_PARAM,
    SUBJECTS_URL,
    TICKET_PARAM,
    TICKETS_URL,
)
from ticketsync.exceptions import TicketSyncConfigError


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise TicketSyncConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class SyncConfig:
    """Client configuration.

    Parameters
    ----------
    subjects_url : str
        Read endpoint returning the full subject (user) collection.
    tickets_url : str
        Read endpoint returning the full ticket collection.
    poll_interval : float
        Seconds between refresh ticks.  Defaults to 2 seconds.
    admin_prefix : str
        Path prefix of the administrative area, where an unresolved
        subject is a valid state instead of a redirect.
    fallback_path : str
        Path handed to the redirect callback when no subject resolves.
    subject_param : str
        URL query parameter carrying the subject identifier.
    ticket_param : str
        URL query parameter carrying the ticket identifier.
    cache_path : str or None
        JSON file backing the persisted cache.  ``None`` keeps the
        cache in memory for the lifetime of the process.
    http_timeout : float
        Total timeout in seconds applied by the HTTP transport.
    """

    subjects_url: str = SUBJECTS_URL
    tickets_url: str = TICKETS_URL
    poll_interval: float = DEFAULT_POLL_INTERVAL
    admin_prefix: str = ADMIN_PREFIX
    fallback_path: str = FALLBACK_PATH
    subject_param: str = SUBJECT_PARAM
    ticket_param: str = TICKET_PARAM
    cache_path: str | None = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise TicketSyncConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.http_timeout <= 0:
            raise TicketSyncConfigError(f"http_timeout must be positive, got {self.http_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> SyncConfig:
        """Create configuration from environment variables.

        Reads optional ``TICKETSYNC_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        SyncConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TICKETSYNC_SUBJECTS_URL": "subjects_url",
            "TICKETSYNC_TICKETS_URL": "tickets_url",
            "TICKETSYNC_ADMIN_PREFIX": "admin_prefix",
            "TICKETSYNC_FALLBACK_PATH": "fallback_path",
            "TICKETSYNC_SUBJECT_PARAM": "subject_param",
            "TICKETSYNC_TICKET_PARAM": "ticket_param",
            "TICKETSYNC_CACHE_PATH": "cache_path",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric fields, handled separately
        _ENV_FLOAT_MAP = {
            "TICKETSYNC_POLL_INTERVAL": "poll_interval",
            "TICKETSYNC_HTTP_TIMEOUT": "http_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
