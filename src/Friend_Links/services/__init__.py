"""Probing and checking services.

Re-exports all public service classes so consumers can import directly:
    from Friend_Links.services import Prober, ResourceChecker, EntryChecker
"""

from Friend_Links.services.checker import (
    EntryChecker,
    ResourceChecker,
    backoff_delay_ms,
)
from Friend_Links.services.probe import Prober
from Friend_Links.services.progress import LoggingObserver, ProgressObserver

__all__ = [
    # Probe
    "Prober",
    # Checkers
    "EntryChecker",
    "ResourceChecker",
    "backoff_delay_ms",
    # Progress
    "LoggingObserver",
    "ProgressObserver",
]
