"""HTTP transport for the read-only collection endpoints."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

import aiohttp

from ticketsync._constants import USER_AGENT
from ticketsync.exceptions import TicketSyncDecodeError, TicketSyncTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the fetcher.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str) -> Any:
        ...


class HttpTransport:
    """Plain GET + JSON decode over a shared aiohttp session."""

    def __init__(self, http_session: aiohttp.ClientSession) -> None:
        self._http = http_session

    async def get_json(self, url: str) -> Any:
        """GET *url* and return the decoded JSON body.

        Redirects are followed (the sheet endpoint answers with a 302
        to the rendered content).
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers) as resp:
                body = await resp.read()
                if not 200 <= resp.status < 300:
                    raise TicketSyncTransportError(
                        f"HTTP {resp.status} from {url}: {_preview(body)}",
                        status_code=resp.status,
                        endpoint=url,
                    )
        except TicketSyncTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise TicketSyncTransportError(
                f"Request to {url} failed: {exc}",
                endpoint=url,
            ) from exc
        except asyncio.TimeoutError as exc:
            raise TicketSyncTransportError(
                f"Request to {url} timed out",
                endpoint=url,
            ) from exc

        try:
            return json.loads(body.decode("utf-8"), parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            # UnicodeDecodeError and JSONDecodeError are both ValueErrors.
            raise TicketSyncDecodeError(
                f"Invalid JSON from {url}: {_preview(body)}",
                endpoint=url,
            ) from exc


def _preview(body: bytes) -> str:
    return body[:200].decode("utf-8", errors="replace")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name} in JSON body")
