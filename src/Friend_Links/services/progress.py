"""Progress observation channel for link checks.

Checkers report latency readings, retry warnings and skips through a
``ProgressObserver``. Nothing downstream consumes these; the default observer
just logs them.
"""

from __future__ import annotations

import logging
from typing import Protocol

from Friend_Links.models.check import ProbeOutcome, ResourceStatus
from Friend_Links.models.enums import ResourceKind

logger = logging.getLogger(__name__)


class ProgressObserver(Protocol):
    """Receives progress events from ResourceChecker and EntryChecker."""

    def on_skip(self, subject: str) -> None: ...

    def on_attempt(
        self,
        subject: str,
        kind: ResourceKind,
        attempt: int,
        outcome: ProbeOutcome,
    ) -> None: ...

    def on_retry(
        self,
        subject: str,
        kind: ResourceKind,
        attempt: int,
        attempts: int,
        delay_ms: int,
        error_message: str,
    ) -> None: ...

    def on_resource_done(
        self,
        subject: str,
        kind: ResourceKind,
        status: ResourceStatus,
    ) -> None: ...


class LoggingObserver:
    """Default observer: writes every event to the module logger."""

    def on_skip(self, subject: str) -> None:
        logger.info("%s is flagged disconnected, skipping check", subject)

    def on_attempt(
        self,
        subject: str,
        kind: ResourceKind,
        attempt: int,
        outcome: ProbeOutcome,
    ) -> None:
        if outcome.http_status is not None:
            logger.info(
                "%s %s responded HTTP %d in %dms (attempt %d)",
                subject,
                kind,
                outcome.http_status,
                outcome.latency_ms,
                attempt,
            )

    def on_retry(
        self,
        subject: str,
        kind: ResourceKind,
        attempt: int,
        attempts: int,
        delay_ms: int,
        error_message: str,
    ) -> None:
        logger.warning(
            "%s %s retry (%d/%d) in %dms: %s",
            subject,
            kind,
            attempt,
            attempts,
            delay_ms,
            error_message,
        )

    def on_resource_done(
        self,
        subject: str,
        kind: ResourceKind,
        status: ResourceStatus,
    ) -> None:
        if not status.ok:
            logger.warning("%s %s failed: %s", subject, kind, status.describe())
