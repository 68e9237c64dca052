"""Logging setup for the ``friend-links`` CLI.

One pass writes log lines to stderr while rich output goes to stdout. Per-area
levels come from ``LOG_LEVEL_<AREA>`` env vars, where AREA is the upper-cased
sub-package name (``LOG_LEVEL_SERVICES`` for ``Friend_Links.services``).
"""

from __future__ import annotations

import logging
import os
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

PACKAGE_LOGGER: Final[str] = "Friend_Links"
LOG_AREAS: Final[tuple[str, ...]] = ("services", "data", "analysis", "pipeline")

# HTTP client libraries log each request at INFO/DEBUG; probe latencies are
# reported by the progress observer instead.
_HTTP_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore")


def _level_from_name(name: str | None) -> int | None:
    """Map ``"debug"``/``"WARNING"``/... to a logging level, None if unknown."""
    if not name:
        return None
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def resolve_level(*, level: str = "", verbose: bool = False, quiet: bool = False) -> int:
    """Root level: verbose > quiet > *level* > ``LOG_LEVEL`` env > INFO."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    for candidate in (level, os.environ.get("LOG_LEVEL")):
        resolved = _level_from_name(candidate)
        if resolved is not None:
            return resolved
    return logging.INFO


def configure_logging(
    *,
    level: str = "",
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Configure the root logger for one CLI invocation.

    Replaces any handlers already installed (``force=True``), caps the HTTP
    client loggers at WARNING, then applies per-area overrides. Unknown level
    names are ignored.
    """
    root_level = resolve_level(level=level, verbose=verbose, quiet=quiet)
    logging.basicConfig(level=root_level, format=LOG_FORMAT, force=True)

    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    for area in LOG_AREAS:
        override = _level_from_name(os.environ.get(f"LOG_LEVEL_{area.upper()}"))
        if override is not None:
            logging.getLogger(f"{PACKAGE_LOGGER}.{area}").setLevel(override)
