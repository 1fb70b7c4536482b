#!/usr/bin/env python3
"""Run the sync engine against a view URL and print state changes.

Usage
-----
::

    python scripts/watch_state.py "https://app.example/ticket?id=U123&ticketId=T9"

Options::

    --duration SECONDS   Stop after this many seconds (default: run until Ctrl-C)
    --interval SECONDS   Poll interval (default: TICKETSYNC_POLL_INTERVAL or 2)
    --cache FILE         Persist the cache to FILE between runs
    --json               Print the final state as JSON
    --verbose, -v        Enable debug logging

Endpoints and other settings come from ``TICKETSYNC_*`` environment
variables (see ``SyncConfig.from_env``).
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
from datetime import UTC, datetime
from typing import Any

from ticketsync import StateChange, SyncConfig, SyncState, TicketSyncClient


def _summary(state: SyncState) -> str:
    subject = state.subject.subject_id if state.subject is not None else "-"
    ticket = state.ticket.ticket_id if state.ticket is not None else "-"
    return (
        f"subject={subject} ticket={ticket} "
        f"subjects={len(state.subjects)} tickets={len(state.tickets)} loading={state.loading}"
    )


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Watch subject/ticket state for a view URL.",
    )
    parser.add_argument("url", help="View URL (path and query are what matter)")
    parser.add_argument("--duration", type=float, help="Stop after this many seconds")
    parser.add_argument("--interval", type=float, help="Poll interval in seconds")
    parser.add_argument("--cache", help="Persist the cache to this JSON file")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Print the final state as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    if args.cache:
        overrides["cache_path"] = args.cache
    config = SyncConfig.from_env(**overrides)

    client: TicketSyncClient | None = None

    def _on_change(change: StateChange) -> None:
        stamp = change.observed_at.astimezone(UTC).strftime("%H:%M:%S")
        line = f"[{stamp}] {change.section.value:<8} ({change.origin.value})"
        if client is not None:
            line = f"{line}  {_summary(client.state)}"
        print(line)

    def _on_redirect(target: str) -> None:
        print(f"[{datetime.now(UTC):%H:%M:%S}] redirect -> {target}")

    async with TicketSyncClient(config, on_change=_on_change, on_redirect=_on_redirect) as client:
        resolution = await client.activate(args.url)
        print(f"resolution: {resolution.outcome.value} subject={resolution.subject_id} ticket={resolution.ticket_id}")
        with contextlib.suppress(asyncio.CancelledError):
            if args.duration is not None:
                await asyncio.sleep(args.duration)
            else:
                await asyncio.Event().wait()
        final = client.state

    if args.json_mode:
        print(final.model_dump_json(indent=2, exclude={"subjects": {"__all__": {"raw"}}, "tickets": {"__all__": {"raw"}}}))
    else:
        print(_summary(final))


if __name__ == "__main__":
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())
