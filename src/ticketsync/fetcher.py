"""Remote collection reads for subjects and tickets."""

from __future__ import annotations

import logging

from ticketsync._api.collections import find_record, parse_collection
from ticketsync._redact import redact_for_log
from ticketsync._transport import Transport
from ticketsync.config import SyncConfig
from ticketsync.models.subject import Subject
from ticketsync.models.ticket import Ticket

_logger = logging.getLogger(__name__)


class RemoteFetcher:
    """Fetch whole collections and look records up by identifier.

    Every call issues a fresh read of the full collection; nothing is
    memoised here. Failures surface as
    :class:`~ticketsync.exceptions.TicketSyncTransportError` or
    :class:`~ticketsync.exceptions.TicketSyncDecodeError` and are
    contained by the caller.
    """

    def __init__(self, config: SyncConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    async def fetch_subjects(self) -> list[Subject]:
        url = self._config.subjects_url
        payload = await self._transport.get_json(url)
        _logger.debug("Subjects payload: %s", redact_for_log(payload))
        return parse_collection(payload, Subject, endpoint=url)

    async def fetch_tickets(self) -> list[Ticket]:
        url = self._config.tickets_url
        payload = await self._transport.get_json(url)
        _logger.debug("Tickets payload: %s", redact_for_log(payload))
        return parse_collection(payload, Ticket, endpoint=url)

    async def find_subject(self, subject_id: str) -> Subject | None:
        """Fetch the subject collection and return the row for *subject_id*."""
        subjects = await self.fetch_subjects()
        return find_record(subjects, lambda s: s.subject_id, subject_id)

    async def find_ticket(self, ticket_id: str) -> Ticket | None:
        """Fetch the ticket collection and return the row for *ticket_id*."""
        tickets = await self.fetch_tickets()
        return find_record(tickets, lambda t: t.ticket_id, ticket_id)
