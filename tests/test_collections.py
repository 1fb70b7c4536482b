from __future__ import annotations

from typing import Any

import pytest

from ticketsync._api.collections import find_record, parse_collection
from ticketsync.config import SyncConfig
from ticketsync.exceptions import TicketSyncDecodeError
from ticketsync.fetcher import RemoteFetcher
from ticketsync.models import Subject, Ticket


@pytest.mark.parametrize("payload", [{"userId": "u1"}, "u1", None, 3])
def test_non_array_payload_is_a_decode_error(payload: Any) -> None:
    with pytest.raises(TicketSyncDecodeError, match="did not return an array"):
        parse_collection(payload, Subject, endpoint="/users")


def test_blank_and_malformed_rows_are_skipped_in_order() -> None:
    payload = [
        {"userId": "u2", "fullName": "Second"},
        {"userId": "", "fullName": ""},
        "junk",
        {"userId": "u1", "fullName": "First"},
    ]
    subjects = parse_collection(payload, Subject, endpoint="/users")
    assert [s.subject_id for s in subjects] == ["u2", "u1"]


def test_find_record_returns_first_match_or_none() -> None:
    tickets = [
        Ticket.model_validate({"ticketId": "T1", "sn": 1}),
        Ticket.model_validate({"ticketId": "T2", "sn": 2}),
        Ticket.model_validate({"ticketId": "T2", "sn": 3}),
    ]
    found = find_record(tickets, lambda t: t.ticket_id, "T2")
    assert found is not None
    assert found.sn == "2"
    assert find_record(tickets, lambda t: t.ticket_id, "T404") is None


class _StaticTransport:
    def __init__(self, payloads: dict[str, Any]) -> None:
        self.payloads = payloads
        self.calls: list[str] = []

    async def get_json(self, url: str) -> Any:
        self.calls.append(url)
        return self.payloads[url]


@pytest.mark.asyncio
async def test_fetcher_reads_full_collection_on_every_lookup() -> None:
    config = SyncConfig(subjects_url="https://sheets.test/users", tickets_url="https://sheets.test/tickets")
    transport = _StaticTransport(
        {
            config.subjects_url: [{"userId": "u1"}, {"userId": "u2"}],
            config.tickets_url: [{"ticketId": "T1"}],
        }
    )
    fetcher = RemoteFetcher(config, transport)

    subject = await fetcher.find_subject("u2")
    assert subject is not None and subject.subject_id == "u2"
    assert await fetcher.find_subject("missing") is None
    ticket = await fetcher.find_ticket("T1")
    assert ticket is not None and ticket.ticket_id == "T1"

    assert transport.calls == [config.subjects_url, config.subjects_url, config.tickets_url]
