"""BeoSound 5c scrobbler: playback events fanned out to content repositories."""

from .destinations import Destination, DestinationConfig, load_destinations
from .dispatch import Dispatcher, aggregate
from .models import (
    AuthError,
    DispatchOutcome,
    Event,
    ScrobblerError,
    Session,
    SessionResult,
    Song,
)
from .request import build_request_body, build_target_url, derive_path
from .scrobblers import GitHubScrobbler, Scrobbler, create_scrobblers

__all__ = [
    "AuthError",
    "Destination",
    "DestinationConfig",
    "DispatchOutcome",
    "Dispatcher",
    "Event",
    "GitHubScrobbler",
    "Scrobbler",
    "ScrobblerError",
    "Session",
    "SessionResult",
    "Song",
    "aggregate",
    "build_request_body",
    "build_target_url",
    "create_scrobblers",
    "derive_path",
    "load_destinations",
]
