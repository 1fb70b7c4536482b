"""Tests for sheet record parsing."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from ticketsync.models import Subject, Ticket

USER_ROW = {
    "sn": 3,
    "userId": "u1",
    "admin": "ops@example.com",
    "fullName": "Ada Lovelace",
    "phoneNumber": 5550100,
    "emailAddress": "ada@example.com",
    "ticketId": "T-9",
    "seatNumbers": "12, 13",
    "eventName": "Symphony No. 9",
    "ticketStatus": "",
    "approvalSTAMP": "2026-10-01T10:00:00.000Z",
    "customColumn": "kept in raw",
}

TICKET_ROW = {
    "sn": 1,
    "ticketId": "T-9",
    "eventName": "Symphony No. 9",
    "ticketFolderId": "folder-1",
    "newSTAMP": "",
    "deletedSTAMP": None,
}


class TestSubject:
    def test_parses_user_sheet_row(self) -> None:
        subject = Subject.model_validate(USER_ROW)
        assert subject.subject_id == "u1"
        assert subject.sn == "3"
        assert subject.phone_number == "5550100"
        assert subject.full_name == "Ada Lovelace"
        assert subject.ticket_id == "T-9"
        assert subject.approval_stamp == "2026-10-01T10:00:00.000Z"
        assert subject.ticket_status == ""
        assert subject.raw["customColumn"] == "kept in raw"

    def test_accepts_subject_id_key(self) -> None:
        subject = Subject.model_validate({"subjectId": " u2 "})
        assert subject.subject_id == "u2"

    @pytest.mark.parametrize("row", [{}, {"userId": ""}, {"userId": "   "}, {"fullName": "No Id"}])
    def test_requires_identifier(self, row: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            Subject.model_validate(row)

    def test_is_frozen(self) -> None:
        subject = Subject.model_validate(USER_ROW)
        with pytest.raises(ValidationError):
            subject.subject_id = "other"  # type: ignore[misc]


class TestTicket:
    def test_parses_ticket_sheet_row(self) -> None:
        ticket = Ticket.model_validate(TICKET_ROW)
        assert ticket.ticket_id == "T-9"
        assert ticket.sn == "1"
        assert ticket.ticket_folder_id == "folder-1"
        assert ticket.new_stamp == ""
        assert ticket.deleted_stamp == ""
        assert ticket.raw == TICKET_ROW

    def test_numeric_ticket_id_is_coerced(self) -> None:
        assert Ticket.model_validate({"ticketId": 42}).ticket_id == "42"


class TestSerialisationRoundTrip:
    def test_subject_round_trips_through_json(self) -> None:
        adapter = TypeAdapter(Subject)
        original = Subject.model_validate(USER_ROW)
        restored = adapter.validate_json(adapter.dump_json(original))
        assert restored == original
        assert restored.raw == original.raw

    def test_collections_round_trip_through_json(self) -> None:
        subjects = [Subject.model_validate(USER_ROW), Subject.model_validate({"userId": "u2", "sn": 4})]
        tickets = [Ticket.model_validate(TICKET_ROW)]

        subjects_adapter = TypeAdapter(list[Subject])
        tickets_adapter = TypeAdapter(list[Ticket])
        assert subjects_adapter.validate_json(subjects_adapter.dump_json(subjects)) == subjects
        assert tickets_adapter.validate_json(tickets_adapter.dump_json(tickets)) == tickets
