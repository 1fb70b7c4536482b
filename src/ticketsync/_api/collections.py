"""Collection endpoint helpers.

The sheet endpoints have no query capability: every read returns the
whole collection as a JSON array of flat rows, and lookups by identifier
happen client-side.

It is internal to ticketsync and may change at any time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from pydantic import ValidationError

from ticketsync._redact import redact_for_log
from ticketsync.exceptions import TicketSyncDecodeError
from ticketsync.models._base import SheetRecord

_logger = logging.getLogger(__name__)

R = TypeVar("R", bound=SheetRecord)


def parse_collection(payload: Any, model: type[R], *, endpoint: str) -> list[R]:
    """Validate a decoded collection payload into records.

    Raises
    ------
    TicketSyncDecodeError
        If the payload is not a JSON array.
    """
    if not isinstance(payload, list):
        raise TicketSyncDecodeError(
            f"{endpoint} did not return an array (got {type(payload).__name__})",
            endpoint=endpoint,
        )

    records: list[R] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            _logger.debug("Skipping non-object row %d from %s", index, endpoint)
            continue
        try:
            records.append(model.model_validate(item))
        except ValidationError as exc:
            # Blank sheet rows have no identifier.
            _logger.debug(
                "Skipping invalid %s row %d from %s: %s row=%s",
                model.__name__,
                index,
                endpoint,
                exc.errors(include_url=False, include_input=False),
                redact_for_log(item),
            )
    return records


def find_record(records: Iterable[R], key: Callable[[R], str], wanted: str) -> R | None:
    """Return the first record whose identifier equals *wanted* (linear scan)."""
    for record in records:
        if key(record) == wanted:
            return record
    return None
