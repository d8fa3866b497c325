# BeoSound 5c
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
Fan-out dispatcher: writes one event to every destination repository.

All PUT requests run concurrently and are awaited under a single deadline
for the whole batch.  The per-destination responses collapse into one
DispatchOutcome; callers are never told which destination failed.

Usage:
    dispatcher = Dispatcher()
    await dispatcher.start()
    outcome = await dispatcher.dispatch(event, destinations)
    await dispatcher.stop()

or ``async with Dispatcher() as dispatcher: ...``.  A dispatcher that was
never started opens a short-lived session for each call.
"""

import asyncio
import json
import logging
from typing import Iterable

import aiohttp

from .config import cfg
from .destinations import Destination, DestinationConfig
from .models import DispatchOutcome, Event
from .request import DEFAULT_API_URL, build_request_body, build_target_url, derive_path

logger = logging.getLogger("beo-scrobbler.dispatch")

DEFAULT_TIMEOUT = 15.0  # seconds, whole batch
USER_AGENT = "BeoSound5c-Scrobbler/1.0"


def aggregate(responses: Iterable[tuple[str, int]]) -> DispatchOutcome:
    """Reduce ``(url, status)`` pairs to one outcome.

    The first non-200 response is logged and decides the result; anything
    after it is not inspected.
    """
    for url, status in responses:
        if status != 200:
            logger.error("Error in %s (HTTP %d)", url, status)
            return DispatchOutcome.TRANSPORT_OR_STATUS_ERROR
    return DispatchOutcome.OK


class Dispatcher:
    """Concurrent PUT of one event to many content repositories."""

    def __init__(self, api_url: str | None = None, timeout: float | None = None):
        self.api_url = api_url or cfg("scrobbler", "github", "api_url", default=DEFAULT_API_URL)
        if timeout is None:
            timeout = cfg("scrobbler", "github", "timeout", default=DEFAULT_TIMEOUT)
        self.timeout = float(timeout)
        self._session: aiohttp.ClientSession | None = None

    def _new_session(self) -> aiohttp.ClientSession:
        connector = aiohttp.TCPConnector(
            limit=10,
            ttl_dns_cache=300,
            keepalive_timeout=60,
            force_close=False,
        )
        return aiohttp.ClientSession(
            connector=connector,
            headers={"User-Agent": USER_AGENT},
        )

    async def start(self):
        if self._session is None:
            self._session = self._new_session()
            logger.info("Dispatcher ready -> %s", self.api_url)

    async def stop(self):
        if self._session:
            await self._session.close()
            self._session = None
            logger.info("Dispatcher stopped")

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, *exc):
        await self.stop()

    async def dispatch(self, event: Event, destinations: DestinationConfig,
                       timeout: float | None = None) -> DispatchOutcome:
        """Write *event* to every destination and return the aggregate outcome."""
        if destinations.is_empty():
            return DispatchOutcome.AUTH_MISSING

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("GitHub - sendRequest: %s", json.dumps(event.to_dict(), indent=2))

        try:
            body = build_request_body(event)
            path = derive_path(event.name, event.timestamp_millis)
        except ValueError as e:
            logger.warning("Cannot build request for %s: %s", event.name, e)
            return DispatchOutcome.TRANSPORT_OR_STATUS_ERROR
        timeout = self.timeout if timeout is None else timeout

        if self._session is not None:
            return await self._fan_out(self._session, body, path, destinations, timeout)
        async with self._new_session() as session:
            return await self._fan_out(session, body, path, destinations, timeout)

    async def _fan_out(self, session: aiohttp.ClientSession, body: dict, path: str,
                       destinations: DestinationConfig, timeout: float) -> DispatchOutcome:
        tasks = [
            asyncio.create_task(self._put(session, dest, path, body))
            for dest in destinations
        ]
        try:
            responses = await asyncio.wait_for(asyncio.gather(*tasks), timeout)
        except asyncio.TimeoutError:
            logger.warning("Timed out after %.1fs writing to %d destination(s)",
                           timeout, len(tasks))
            return DispatchOutcome.TRANSPORT_OR_STATUS_ERROR
        except aiohttp.ClientError as e:
            logger.warning("Error while sending request: %s", e)
            return DispatchOutcome.TRANSPORT_OR_STATUS_ERROR
        except ValueError as e:
            # aiohttp rejects malformed URLs and headers (e.g. control characters in a token)
            logger.warning("Invalid request: %s", e)
            return DispatchOutcome.TRANSPORT_OR_STATUS_ERROR
        finally:
            pending = [t for t in tasks if not t.done()]
            for t in pending:
                t.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
        return aggregate(responses)

    async def _put(self, session: aiohttp.ClientSession, dest: Destination,
                   path: str, body: dict) -> tuple[str, int]:
        url = build_target_url(self.api_url, dest, path)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {dest.access_token}",
        }
        async with session.put(url, json=body, headers=headers) as resp:
            logger.debug("PUT %s (HTTP %d)", dest.locator, resp.status)
            return url, resp.status
