# BeoSound 5c
# Copyright (C) 2024-2026 Markus Kirsten
# SPDX-License-Identifier: GPL-3.0-or-later
#
# Attribution required — see LICENSE, Section 7(b).

"""
Configuration loader for the BeoSound 5c scrobbler.

Loads a single JSON config file per device.  Search order:
  1. /etc/beosound5c/config.json   (deployed by deploy.sh)
  2. config.json                    (CWD — handy for local dev)
  3. ../config/default.json         (repo fallback)

The scrobbler reads the "scrobbler" section:

    "scrobbler": {
        "github": {
            "api_url": "https://api.github.com/",
            "timeout": 15,
            "destinations": [
                {"applicationName": "owner/repo", "userApiUrl": "<token>"}
            ]
        }
    }

Usage:
    from beoscrobbler.config import cfg

    timeout = cfg("scrobbler", "github", "timeout", default=15)
"""

import json
import logging
import os

logger = logging.getLogger("beo-scrobbler.config")

_config: dict | None = None

_SEARCH_PATHS = [
    "/etc/beosound5c/config.json",
    "config.json",
    os.path.join(os.path.dirname(__file__), "..", "config", "default.json"),
]


def _validate(config: dict, path: str) -> None:
    """Warn about missing or suspicious scrobbler config values."""
    scrobbler = config.get("scrobbler")
    if not scrobbler:
        logger.warning("Config %s: missing 'scrobbler' section — scrobbling disabled", path)
        return
    github = scrobbler.get("github") or {}
    entries = github.get("destinations") or []
    if not isinstance(entries, list):
        logger.warning("Config %s: scrobbler.github.destinations must be a list", path)
        return
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning("Config %s: scrobbler.github.destinations[%d] is not an object", path, i)
            continue
        if "/" not in str(entry.get("applicationName", "")):
            logger.warning("Config %s: scrobbler.github.destinations[%d] applicationName "
                           "should be 'owner/repo'", path, i)
        if not entry.get("userApiUrl"):
            logger.warning("Config %s: scrobbler.github.destinations[%d] has no token", path, i)


def _read(path: str) -> dict | None:
    """Parse one candidate file; None if it is absent or unusable."""
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.error("Config %s: top level must be an object", path)
        return None
    return data


def load_config() -> dict:
    """Return the parsed config, reading the first usable file on first use."""
    global _config
    if _config is None:
        for path in _SEARCH_PATHS:
            data = _read(path)
            if data is not None:
                logger.info("Config loaded from %s", path)
                _validate(data, path)
                _config = data
                break
        else:
            logger.warning("No config.json found — using empty config")
            _config = {}
    return _config


def cfg(*keys: str, default=None):
    """Walk nested sections; *default* if any step is missing or null.

    cfg("device")                                 → config["device"]
    cfg("scrobbler", "github")                    → config["scrobbler"]["github"]
    cfg("scrobbler", "github", "timeout", default=15)
    """
    val = load_config()
    for key in keys:
        if not isinstance(val, dict):
            return default
        val = val.get(key)
    return default if val is None else val


def reload_config() -> dict:
    """Drop the cached config and read it again (tests, hot-reload)."""
    global _config
    _config = None
    return load_config()
