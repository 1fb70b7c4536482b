"""Subject identity resolution.

Resolution is a pure decision. The caller persists URL-sourced
identifiers, issues the refreshes, and performs any redirect; nothing in
this module touches storage, the network, or navigation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ticketsync.location import Location


class ResolutionOutcome(StrEnum):
    FOUND = "found"
    REDIRECT = "redirect"
    UNRESOLVED = "unresolved"


class IdentitySource(StrEnum):
    URL = "url"
    CACHE = "cache"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result of one resolution cycle.

    ``ticket_id`` is independent of the subject outcome: a ticket named in
    the URL is refreshed whatever happened to the subject.
    """

    outcome: ResolutionOutcome
    subject_id: str | None = None
    source: IdentitySource | None = None
    ticket_id: str | None = None

    @property
    def found(self) -> bool:
        return self.outcome == ResolutionOutcome.FOUND


def is_admin_path(path: str, admin_prefix: str) -> bool:
    return path.startswith(admin_prefix)


def resolve_identity(
    location: Location,
    cached_subject_id: str | None,
    *,
    admin_prefix: str,
) -> Resolution:
    """Decide the current subject for an activation or reconfiguration.

    Priority: URL parameter, then cached identifier. Without either, a
    view outside the administrative area must be redirected; inside it,
    "no subject selected" is a valid state.
    """
    ticket_id = location.ticket_id
    if location.subject_id:
        return Resolution(
            ResolutionOutcome.FOUND,
            subject_id=location.subject_id,
            source=IdentitySource.URL,
            ticket_id=ticket_id,
        )
    if cached_subject_id:
        return Resolution(
            ResolutionOutcome.FOUND,
            subject_id=cached_subject_id,
            source=IdentitySource.CACHE,
            ticket_id=ticket_id,
        )
    if not is_admin_path(location.path, admin_prefix):
        return Resolution(ResolutionOutcome.REDIRECT, ticket_id=ticket_id)
    return Resolution(ResolutionOutcome.UNRESOLVED, ticket_id=ticket_id)


def poll_subject_id(location: Location, cached_subject_id: str | None) -> str | None:
    """Subject identifier for a poll tick: URL else cache, never a redirect."""
    return location.subject_id or cached_subject_id or None
