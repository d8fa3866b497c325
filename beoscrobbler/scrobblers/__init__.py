"""
Pluggable scrobblers for BeoSound 5c playback events.

Each scrobbler family implements the ``Scrobbler`` capability set.  The
factory function ``create_scrobblers`` reads config.json and returns the
scrobblers that have something to write to.

Supported families:
  - ``github`` – JSON files committed to GitHub repositories (contents API)
"""

import logging

from ..config import cfg
from ..destinations import load_destinations
from ..dispatch import Dispatcher
from .base import Scrobbler
from .github import GitHubScrobbler

logger = logging.getLogger("beo-scrobbler.scrobblers")

__all__ = [
    "Scrobbler",
    "GitHubScrobbler",
    "create_scrobblers",
]


def create_scrobblers(dispatcher: Dispatcher) -> list[Scrobbler]:
    """Create the configured scrobblers.

    Reads from config.json "scrobbler" section:
      github.destinations – list of {applicationName: "owner/repo",
                            userApiUrl: "<token>"}
      github.enabled      – force the GitHub scrobbler on even with no
                            destinations (every call then reports missing auth)
    """
    scrobblers: list[Scrobbler] = []
    destinations = load_destinations()
    if not destinations.is_empty() or cfg("scrobbler", "github", "enabled", default=False):
        logger.info("Scrobbler: GitHub -> %s",
                    ", ".join(d.locator for d in destinations) or "(none)")
        scrobblers.append(GitHubScrobbler(destinations, dispatcher))
    else:
        logger.info("Scrobbler: GitHub disabled (no destinations)")
    return scrobblers
