# BeoSound 5c
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
Value types shared by the scrobbler: songs, events, outcomes and sessions.

Events are serialized on the wire as ``{"eventName", "time", "data"}`` so
files already written to destination repositories keep the same shape.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum


class DispatchOutcome(str, Enum):
    """Aggregate result of one dispatch call."""

    OK = "ok"
    AUTH_MISSING = "error-auth"
    TRANSPORT_OR_STATUS_ERROR = "error-other"


class ScrobblerError(Exception):
    """Base class for scrobbler errors."""


class AuthError(ScrobblerError):
    """No destinations (credentials) are configured."""


@dataclass(frozen=True)
class Song:
    artist: str
    track: str
    album: str | None = None
    album_artist: str | None = None
    duration: float | None = None  # seconds
    unique_id: str | None = None
    origin_url: str | None = None
    connector: str | None = None

    # attribute name -> wire key
    _KEYS = (
        ("artist", "artist"),
        ("track", "track"),
        ("album", "album"),
        ("album_artist", "albumArtist"),
        ("duration", "duration"),
        ("unique_id", "uniqueID"),
        ("origin_url", "originUrl"),
        ("connector", "connector"),
    )

    def to_dict(self) -> dict:
        out = {}
        for attr, key in self._KEYS:
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "Song":
        return cls(**{attr: data.get(key) for attr, key in cls._KEYS})


@dataclass(frozen=True)
class Event:
    """A named, timestamped playback-state change.

    ``payload`` must be JSON-serializable; it is written verbatim as the
    event's ``data`` field.  The event keeps its own deep copy of the payload,
    so later changes to the caller's dict do not leak in.  Do not mutate
    ``event.payload``; hashing covers only name and timestamp.
    """

    name: str
    timestamp_millis: int
    payload: dict = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "payload", copy.deepcopy(self.payload))

    def to_dict(self) -> dict:
        return {"eventName": self.name, "time": self.timestamp_millis,
                "data": copy.deepcopy(self.payload)}

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        return cls(name=data["eventName"], timestamp_millis=int(data["time"]),
                   payload=data.get("data") or {})


@dataclass(frozen=True)
class Session:
    session_id: str


@dataclass(frozen=True)
class SessionResult:
    """Either a session or the reason there is none."""

    session: Session | None = None
    error: AuthError | None = None

    @property
    def ok(self) -> bool:
        return self.session is not None

    def unwrap(self) -> Session:
        """Return the session, or raise the stored error."""
        if self.session is None:
            raise self.error or AuthError("no session")
        return self.session
