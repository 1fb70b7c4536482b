"""Ticket (ticket sheet row) model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from ticketsync.models._base import SheetId, SheetRecord, SheetStr


class Ticket(SheetRecord):
    """A row of the ``ticket`` sheet."""

    ticket_id: SheetId = Field(validation_alias=AliasChoices("ticketId", "ticket_id"))
    """Unique key selecting the current ticket."""
    sn: SheetStr = Field(default="", validation_alias=AliasChoices("sn"))
    admin: SheetStr = Field(default="", validation_alias=AliasChoices("admin"))
    cover_image: SheetStr = Field(default="", validation_alias=AliasChoices("coverImage", "cover_image"))
    event_name: SheetStr = Field(default="", validation_alias=AliasChoices("eventName", "event_name"))
    date_time: SheetStr = Field(default="", validation_alias=AliasChoices("dateTime", "date_time"))
    door_time: SheetStr = Field(default="", validation_alias=AliasChoices("doorTime", "door_time"))
    venue: SheetStr = Field(default="", validation_alias=AliasChoices("venue"))
    location: SheetStr = Field(default="", validation_alias=AliasChoices("location"))
    section: SheetStr = Field(default="", validation_alias=AliasChoices("section"))
    section_no: SheetStr = Field(default="", validation_alias=AliasChoices("sectionNo", "section_no"))
    row: SheetStr = Field(default="", validation_alias=AliasChoices("row"))
    ticket_folder_id: SheetStr = Field(default="", validation_alias=AliasChoices("ticketFolderId", "ticket_folder_id"))
    """Drive folder holding the ticket assets."""
    age_restriction: SheetStr = Field(default="", validation_alias=AliasChoices("ageRestriction", "age_restriction"))
    description: SheetStr = Field(default="", validation_alias=AliasChoices("description"))
    terms: SheetStr = Field(default="", validation_alias=AliasChoices("terms"))
    new_stamp: SheetStr = Field(default="", validation_alias=AliasChoices("newSTAMP", "new_stamp"))
    deleted_stamp: SheetStr = Field(default="", validation_alias=AliasChoices("deletedSTAMP", "deleted_stamp"))
    event_status: SheetStr = Field(default="", validation_alias=AliasChoices("eventStatus", "event_status"))
    ticket_status: SheetStr = Field(default="", validation_alias=AliasChoices("ticketStatus", "ticket_status"))
