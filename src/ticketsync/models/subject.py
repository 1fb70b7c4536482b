"""Subject (user sheet row) model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from ticketsync.models._base import SheetId, SheetRecord, SheetStr


class Subject(SheetRecord):
    """A row of the ``user`` sheet.

    Only :attr:`subject_id` is inspected by the sync engine; the remaining
    columns are carried for consumers.
    """

    subject_id: SheetId = Field(validation_alias=AliasChoices("subjectId", "userId", "subject_id"))
    """Unique key selecting the current subject."""
    sn: SheetStr = Field(default="", validation_alias=AliasChoices("sn"))
    """Sheet serial number."""
    admin: SheetStr = Field(default="", validation_alias=AliasChoices("admin"))
    sender_name: SheetStr = Field(default="", validation_alias=AliasChoices("senderName", "sender_name"))
    sender_email: SheetStr = Field(default="", validation_alias=AliasChoices("senderEmail", "sender_email"))
    timestamp: SheetStr = Field(default="", validation_alias=AliasChoices("timestamp"))
    full_name: SheetStr = Field(default="", validation_alias=AliasChoices("fullName", "full_name"))
    phone_number: SheetStr = Field(default="", validation_alias=AliasChoices("phoneNumber", "phone_number"))
    email_address: SheetStr = Field(default="", validation_alias=AliasChoices("emailAddress", "email_address"))
    ticket_id: SheetStr = Field(default="", validation_alias=AliasChoices("ticketId", "ticket_id"))
    """Ticket assigned to this subject, if any."""
    seat_numbers: SheetStr = Field(default="", validation_alias=AliasChoices("seatNumbers", "seat_numbers"))
    cover_image: SheetStr = Field(default="", validation_alias=AliasChoices("coverImage", "cover_image"))
    event_name: SheetStr = Field(default="", validation_alias=AliasChoices("eventName", "event_name"))
    date_time: SheetStr = Field(default="", validation_alias=AliasChoices("dateTime", "date_time"))
    door_time: SheetStr = Field(default="", validation_alias=AliasChoices("doorTime", "door_time"))
    venue: SheetStr = Field(default="", validation_alias=AliasChoices("venue"))
    location: SheetStr = Field(default="", validation_alias=AliasChoices("location"))
    section: SheetStr = Field(default="", validation_alias=AliasChoices("section"))
    section_no: SheetStr = Field(default="", validation_alias=AliasChoices("sectionNo", "section_no"))
    row: SheetStr = Field(default="", validation_alias=AliasChoices("row"))
    age_restriction: SheetStr = Field(default="", validation_alias=AliasChoices("ageRestriction", "age_restriction"))
    description: SheetStr = Field(default="", validation_alias=AliasChoices("description"))
    terms: SheetStr = Field(default="", validation_alias=AliasChoices("terms"))
    event_status: SheetStr = Field(default="", validation_alias=AliasChoices("eventStatus", "event_status"))
    ticket_status: SheetStr = Field(default="", validation_alias=AliasChoices("ticketStatus", "ticket_status"))
    link: SheetStr = Field(default="", validation_alias=AliasChoices("link"))
    approval_stamp: SheetStr = Field(default="", validation_alias=AliasChoices("approvalSTAMP", "approval_stamp"))
    completed_stamp: SheetStr = Field(default="", validation_alias=AliasChoices("completedSTAMP", "completed_stamp"))
    returned_stamp: SheetStr = Field(default="", validation_alias=AliasChoices("returnedSTAMP", "returned_stamp"))
    route: SheetStr = Field(default="", validation_alias=AliasChoices("route"))
    title_status: SheetStr = Field(default="", validation_alias=AliasChoices("titleStatus", "title_status"))
    message_status: SheetStr = Field(default="", validation_alias=AliasChoices("messageStatus", "message_status"))
    warning_status: SheetStr = Field(default="", validation_alias=AliasChoices("warningStatus", "warning_status"))
    system_status: SheetStr = Field(default="", validation_alias=AliasChoices("systemStatus", "system_status"))
    percentage_status: SheetStr = Field(
        default="",
        validation_alias=AliasChoices("percentageStatus", "percentage_status"),
    )
    admin_status: SheetStr = Field(default="", validation_alias=AliasChoices("adminStatus", "admin_status"))
