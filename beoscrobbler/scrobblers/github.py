# BeoSound 5c
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
GitHub scrobbler: stores every playback event as a JSON file committed to
one or more GitHub repositories through the contents API.

There is no real session; "connected" just means at least one destination
repository is configured.
"""

import logging
import time
from typing import Callable, Sequence

from ..destinations import DestinationConfig
from ..dispatch import Dispatcher
from ..models import AuthError, DispatchOutcome, Event, Session, SessionResult, Song
from .base import Scrobbler

log = logging.getLogger("beo-scrobbler.github")

SESSION_ID = "webhook"


def _now_millis() -> int:
    return int(time.time() * 1000)


class GitHubScrobbler(Scrobbler):
    label = "GitHub"
    storage_name = "GitHub"
    status_url = ""
    is_local_only = True
    user_defined_array_properties = ("applicationName", "userApiUrl")

    def __init__(self, destinations: DestinationConfig, dispatcher: Dispatcher,
                 clock: Callable[[], int] = _now_millis):
        self.destinations = destinations
        self.dispatcher = dispatcher
        self._clock = clock

    async def get_session(self) -> SessionResult:
        if self.destinations.is_empty():
            return SessionResult(error=AuthError("No GitHub destinations configured"))
        return SessionResult(session=Session(SESSION_ID))

    async def _send(self, name: str, payload: dict) -> DispatchOutcome:
        event = Event(name=name, timestamp_millis=self._clock(), payload=payload)
        outcome = await self.dispatcher.dispatch(event, self.destinations)
        if outcome is not DispatchOutcome.OK:
            log.info("GitHub %s -> %s", name, outcome.value)
        return outcome

    async def send_now_playing(self, song: Song) -> DispatchOutcome:
        return await self._send("nowplaying", {"song": song.to_dict()})

    async def send_paused(self, song: Song) -> DispatchOutcome:
        return await self._send("paused", {"song": song.to_dict()})

    async def send_resumed_playing(self, song: Song) -> DispatchOutcome:
        return await self._send("resumedplaying", {"song": song.to_dict()})

    async def scrobble(self, songs: Sequence[Song],
                       currently_playing: bool) -> list[DispatchOutcome]:
        """One write for the whole batch; every song shares its outcome."""
        payload = {}
        if songs:
            # first song kept as "song" for consumers of the single-song format
            payload["song"] = songs[0].to_dict()
        payload["songs"] = [s.to_dict() for s in songs]
        payload["currentlyPlaying"] = currently_playing
        outcome = await self._send("scrobble", payload)
        return [outcome] * len(songs)

    async def toggle_love(self, song: Song, is_loved: bool) -> DispatchOutcome:
        return await self._send("loved", {"song": song.to_dict(), "isLoved": is_loved})
