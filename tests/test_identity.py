from __future__ import annotations

import pytest

from ticketsync.identity import (
    IdentitySource,
    ResolutionOutcome,
    is_admin_path,
    poll_subject_id,
    resolve_identity,
)
from ticketsync.location import Location

ADMIN = "/admin"


class TestLocation:
    def test_parses_full_url(self) -> None:
        loc = Location.from_url("https://app.example/ticket/view?id=u1&ticketId=T9&x=1")
        assert loc == Location(path="/ticket/view", subject_id="u1", ticket_id="T9")

    def test_blank_params_are_absent(self) -> None:
        loc = Location.from_url("/view?id=&ticketId=%20")
        assert loc.subject_id is None
        assert loc.ticket_id is None

    def test_custom_param_names(self) -> None:
        loc = Location.from_url("/view?user=u7&t=T1", subject_param="user", ticket_param="t")
        assert (loc.subject_id, loc.ticket_id) == ("u7", "T1")

    def test_empty_path_defaults_to_root(self) -> None:
        assert Location.from_url("https://app.example").path == "/"


def test_url_identifier_wins_over_cache() -> None:
    resolution = resolve_identity(Location(path="/view", subject_id="u1"), "u-cached", admin_prefix=ADMIN)
    assert resolution.outcome == ResolutionOutcome.FOUND
    assert resolution.subject_id == "u1"
    assert resolution.source == IdentitySource.URL


def test_cached_identifier_used_outside_admin_without_redirect() -> None:
    resolution = resolve_identity(Location(path="/view"), "u1", admin_prefix=ADMIN)
    assert resolution.found
    assert resolution.subject_id == "u1"
    assert resolution.source == IdentitySource.CACHE


def test_unresolved_outside_admin_redirects() -> None:
    resolution = resolve_identity(Location(path="/view"), None, admin_prefix=ADMIN)
    assert resolution.outcome == ResolutionOutcome.REDIRECT
    assert resolution.subject_id is None
    assert not resolution.found


@pytest.mark.parametrize("path", ["/admin", "/admin/tickets", "/administrator"])
def test_unresolved_inside_admin_is_accepted(path: str) -> None:
    resolution = resolve_identity(Location(path=path), None, admin_prefix=ADMIN)
    assert resolution.outcome == ResolutionOutcome.UNRESOLVED


@pytest.mark.parametrize(
    ("location", "cached"),
    [
        (Location(path="/view", subject_id="u1", ticket_id="T9"), None),
        (Location(path="/view", ticket_id="T9"), "u1"),
        (Location(path="/view", ticket_id="T9"), None),
        (Location(path="/admin", ticket_id="T9"), None),
    ],
)
def test_ticket_identifier_is_independent_of_subject_outcome(location: Location, cached: str | None) -> None:
    assert resolve_identity(location, cached, admin_prefix=ADMIN).ticket_id == "T9"


def test_poll_identifier_prefers_url_then_cache() -> None:
    assert poll_subject_id(Location(subject_id="u1"), "u2") == "u1"
    assert poll_subject_id(Location(), "u2") == "u2"
    assert poll_subject_id(Location(), None) is None


def test_admin_path_is_a_prefix_match() -> None:
    assert is_admin_path("/admin/users", ADMIN)
    assert not is_admin_path("/view/admin", ADMIN)
