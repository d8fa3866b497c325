# BeoSound 5c
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""Storage paths and request bodies for repository content writes."""

import base64
import json
from datetime import datetime, timedelta, timezone

from .destinations import Destination
from .models import Event

DEFAULT_API_URL = "https://api.github.com/"
CONTENTS_PATH = "repos/{owner}/{repo}/contents/{path}"

COMMITTER = {"name": "WebScrobbler", "email": "webscrobbler@github.com"}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def derive_path(event_name: str, timestamp_millis: int) -> str:
    """Return ``<year>/<month>/<weekday>/<millis>-<event>.json`` for an event.

    Month is zero-based (January = 0) and the third segment is the UTC day
    of the week (Sunday = 0), matching the layout of already stored files.

    Raises ValueError for timestamps outside datetime's range (years
    1..9999), which JavaScript dates would still accept.
    """
    try:
        when = _EPOCH + timedelta(milliseconds=timestamp_millis)
    except OverflowError:
        raise ValueError(f"timestamp out of range: {timestamp_millis}") from None
    weekday = (when.weekday() + 1) % 7  # Monday=0 -> Sunday=0
    return f"{when.year}/{when.month - 1}/{weekday}/{timestamp_millis}-{event_name}.json"


def encode_content(event: Event) -> str:
    raw = json.dumps(event.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def build_request_body(event: Event) -> dict:
    """JSON body shared by every destination of one dispatch call."""
    return {
        "message": f"{event.name} at {event.timestamp_millis}",
        "committer": dict(COMMITTER),
        "content": encode_content(event),
    }


def build_target_url(api_url: str, destination: Destination, path: str) -> str:
    if not api_url.endswith("/"):
        api_url += "/"
    return api_url + CONTENTS_PATH.format(
        owner=destination.owner, repo=destination.repo, path=path,
    )
