"""Retrying resource checks and per-entry checks.

``ResourceChecker`` wraps the prober with a fixed attempt budget and
exponential backoff with jitter. ``EntryChecker`` runs it against an entry's
URL and then its avatar, strictly one after the other.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

from Friend_Links.config import CheckerConfig
from Friend_Links.models.check import CheckResult, ProbeOutcome, ResourceStatus
from Friend_Links.models.entry import FriendLink
from Friend_Links.models.enums import ResourceKind, StatusKind
from Friend_Links.services.progress import LoggingObserver, ProgressObserver

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class SupportsProbe(Protocol):
    """Anything with an async ``probe(url) -> ProbeOutcome`` (usually a Prober)."""

    async def probe(self, target: str) -> ProbeOutcome: ...


def backoff_delay_ms(
    attempt_index: int,
    *,
    base_delay_ms: int,
    jitter_ms: int,
    rng: random.Random | None = None,
) -> int:
    """Delay before the attempt after *attempt_index* (zero-based) failed.

    ``base_delay_ms * 2**attempt_index`` plus a uniform jitter in
    ``[0, jitter_ms)``.
    """
    jitter = 0
    if jitter_ms > 0:
        jitter = (rng or random).randrange(jitter_ms)
    return base_delay_ms * 2**attempt_index + jitter


class ResourceChecker:
    """Check one resource with retries and produce a terminal ResourceStatus.

    Usage::

        async with Prober(config) as prober:
            checker = ResourceChecker(prober, config)
            status = await checker.check_resource("https://example.com/avatar.png")
    """

    def __init__(
        self,
        prober: SupportsProbe,
        config: CheckerConfig | None = None,
        *,
        observer: ProgressObserver | None = None,
        sleep: SleepFn = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self._prober = prober
        self._config = config if config is not None else CheckerConfig()
        self._observer: ProgressObserver = observer if observer is not None else LoggingObserver()
        self._sleep = sleep
        self._rng = rng if rng is not None else random.Random()

    @property
    def observer(self) -> ProgressObserver:
        return self._observer

    async def check_resource(
        self,
        target: str,
        attempts: int | None = None,
        *,
        subject: str = "",
        kind: ResourceKind = ResourceKind.URL,
    ) -> ResourceStatus:
        """Probe *target* up to *attempts* times, stopping at the first success.

        Args:
            target: URL to check.
            attempts: Attempt ceiling; defaults to ``config.max_attempts``.
            subject: Entry name used in progress events.
            kind: Which side of the entry *target* is, for progress events.

        Returns:
            OK with the successful attempt's status and latency, otherwise
            TIMEOUT when the last failure was a timeout and ERROR for anything
            else. A fully failed resource reports latency 0.

        Raises:
            ValueError: If *attempts* is less than 1.
        """
        max_attempts = self._config.max_attempts if attempts is None else attempts
        if max_attempts < 1:
            raise ValueError(f"attempts must be at least 1, got {max_attempts}")

        label = subject or target
        last: ProbeOutcome | None = None
        last_http_status: int | None = None

        for attempt in range(max_attempts):
            outcome = await self._prober.probe(target)
            self._observer.on_attempt(label, kind, attempt + 1, outcome)
            if outcome.http_status is not None:
                last_http_status = outcome.http_status

            if outcome.reachable:
                status = ResourceStatus(
                    kind=StatusKind.OK,
                    http_status=outcome.http_status,
                    latency_ms=outcome.latency_ms,
                    attempts=attempt + 1,
                )
                self._observer.on_resource_done(label, kind, status)
                return status

            last = outcome
            if attempt < max_attempts - 1:
                delay_ms = backoff_delay_ms(
                    attempt,
                    base_delay_ms=self._config.base_delay_ms,
                    jitter_ms=self._config.jitter_ms,
                    rng=self._rng,
                )
                self._observer.on_retry(
                    label,
                    kind,
                    attempt + 1,
                    max_attempts,
                    delay_ms,
                    outcome.error_message or "",
                )
                await self._sleep(delay_ms / 1000)

        assert last is not None  # noqa: S101
        status = ResourceStatus(
            kind=StatusKind.TIMEOUT if last.timed_out else StatusKind.ERROR,
            http_status=last_http_status,
            latency_ms=0,
            error_message=last.error_message,
            attempts=max_attempts,
        )
        self._observer.on_resource_done(label, kind, status)
        return status


class EntryChecker:
    """Check an entry's URL and avatar, skipping entries already flagged.

    A disconnected entry yields a synthetic OK/OK result without touching the
    network; it stays flagged until a later reconciliation clears it.
    """

    def __init__(self, resource_checker: ResourceChecker) -> None:
        self._resources = resource_checker

    async def check_entry(self, entry: FriendLink) -> CheckResult:
        """Check one entry: URL first, then avatar."""
        if entry.is_disconnected:
            self._resources.observer.on_skip(entry.name)
            return CheckResult.skipped_for(entry)

        url_status = await self._resources.check_resource(
            entry.url, subject=entry.name, kind=ResourceKind.URL
        )
        avatar_status = await self._resources.check_resource(
            entry.avatar, subject=entry.name, kind=ResourceKind.AVATAR
        )
        return CheckResult(
            name=entry.name,
            url=entry.url,
            avatar=entry.avatar,
            url_status=url_status,
            avatar_status=avatar_status,
        )

    async def check_all(self, entries: Sequence[FriendLink]) -> list[CheckResult]:
        """Check every entry in order, one at a time."""
        results: list[CheckResult] = []
        for index, entry in enumerate(entries, start=1):
            logger.debug("Checking %d/%d: %s", index, len(entries), entry.name)
            results.append(await self.check_entry(entry))
        return results
