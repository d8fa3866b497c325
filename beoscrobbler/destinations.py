# BeoSound 5c
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
Destination repositories that scrobble events are written to.

Each configured entry names a repository as ``applicationName`` ("owner/repo")
and carries its access token in ``userApiUrl`` (the two user-defined fields
the host exposes per destination).
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from .config import cfg

logger = logging.getLogger("beo-scrobbler.destinations")


@dataclass(frozen=True)
class Destination:
    owner: str
    repo: str
    access_token: str

    @property
    def locator(self) -> str:
        return f"{self.owner}/{self.repo}"

    def __repr__(self):
        # keep tokens out of logs and tracebacks
        return f"Destination({self.locator!r})"


@dataclass(frozen=True)
class DestinationConfig:
    """Immutable set of peer destinations for one scrobbler."""

    destinations: tuple[Destination, ...] = ()

    def is_empty(self) -> bool:
        return not self.destinations

    def __iter__(self) -> Iterator[Destination]:
        return iter(self.destinations)

    def __len__(self) -> int:
        return len(self.destinations)

    @classmethod
    def from_entries(cls, entries: Iterable[dict] | None) -> "DestinationConfig":
        """Build from ``{applicationName, userApiUrl}`` entries, skipping bad ones."""
        destinations = []
        for entry in entries or ():
            if not isinstance(entry, dict):
                logger.warning("Skipping destination entry %r: not an object", entry)
                continue
            name = str(entry.get("applicationName") or "").strip()
            token = str(entry.get("userApiUrl") or "").strip()
            owner, _, repo = name.partition("/")
            if not owner or not repo:
                logger.warning("Skipping destination %r: expected 'owner/repo'", name)
                continue
            if not token:
                logger.warning("Skipping destination %s: no access token", name)
                continue
            destinations.append(Destination(owner, repo, token))
        return cls(tuple(destinations))


def load_destinations() -> DestinationConfig:
    """Read destinations from config.json (scrobbler.github.destinations)."""
    config = DestinationConfig.from_entries(cfg("scrobbler", "github", "destinations"))
    logger.info("Loaded %d GitHub destination(s)", len(config))
    return config
