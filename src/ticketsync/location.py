"""URL-derived identity inputs."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit

from ticketsync._constants import SUBJECT_PARAM, TICKET_PARAM


def _first_param(query: dict[str, list[str]], name: str) -> str | None:
    values = query.get(name)
    if not values:
        return None
    value = values[0].strip()
    return value or None


@dataclass(frozen=True, slots=True)
class Location:
    """The parts of the current view URL the sync engine reads.

    Empty query values are treated as absent.
    """

    path: str = "/"
    subject_id: str | None = None
    ticket_id: str | None = None

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        subject_param: str = SUBJECT_PARAM,
        ticket_param: str = TICKET_PARAM,
    ) -> Location:
        """Parse a full URL or a path with query string."""
        parts = urlsplit(url)
        query = parse_qs(parts.query, keep_blank_values=True)
        return cls(
            path=parts.path or "/",
            subject_id=_first_param(query, subject_param),
            ticket_id=_first_param(query, ticket_param),
        )
