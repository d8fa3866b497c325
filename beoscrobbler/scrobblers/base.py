# BeoSound 5c
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
Abstract base class for BeoSound 5c scrobblers.

Every scrobbler family must implement the session check and the five
playback events.  Auth, profile and song-info lookups have defaults for
families that have no such concept (write-only destinations).
"""

from abc import ABC, abstractmethod
from typing import Sequence

from ..models import DispatchOutcome, SessionResult, Song


class Scrobbler(ABC):
    """Interface every scrobbler family must implement."""

    label: str = ""
    storage_name: str = ""
    status_url: str = ""
    is_local_only: bool = False
    user_defined_array_properties: tuple[str, ...] = ()

    @abstractmethod
    async def get_session(self) -> SessionResult: ...

    @abstractmethod
    async def send_now_playing(self, song: Song) -> DispatchOutcome: ...

    @abstractmethod
    async def send_paused(self, song: Song) -> DispatchOutcome: ...

    @abstractmethod
    async def send_resumed_playing(self, song: Song) -> DispatchOutcome: ...

    @abstractmethod
    async def scrobble(self, songs: Sequence[Song],
                       currently_playing: bool) -> list[DispatchOutcome]: ...

    @abstractmethod
    async def toggle_love(self, song: Song, is_loved: bool) -> DispatchOutcome: ...

    # -- Optional: override in families with a user-facing auth flow --

    async def get_auth_url(self) -> str:
        return ""

    async def is_ready_for_grant_access(self) -> bool:
        return False

    async def get_profile_url(self) -> str:
        return ""

    async def get_song_info(self, song: Song) -> dict:
        return {}
