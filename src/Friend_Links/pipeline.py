"""One checking pass: check every entry, reconcile, persist.

Shared by the CLI commands. ``run_check`` performs no file I/O and returns a
``RunResult``; ``persist_run`` applies the persistence policy to it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

import httpx

from Friend_Links.analysis.reconciliation import (
    PersistencePlan,
    decide_persistence,
    ensure_unique_names,
    reconcile,
)
from Friend_Links.config import CheckerConfig
from Friend_Links.data.repository import EntryRepository, write_failure_report
from Friend_Links.models.check import RunResult
from Friend_Links.models.entry import FriendLink
from Friend_Links.services.checker import EntryChecker, ResourceChecker, SleepFn
from Friend_Links.services.probe import Prober
from Friend_Links.services.progress import ProgressObserver

logger = logging.getLogger(__name__)


async def run_check(
    entries: Sequence[FriendLink],
    *,
    config: CheckerConfig | None = None,
    observer: ProgressObserver | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> RunResult:
    """Check all entries sequentially and reconcile the results.

    Args:
        entries: Entries in file order.
        config: Timeout and retry settings; defaults to ``CheckerConfig()``.
        observer: Receives progress events; defaults to logging.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
        sleep: Backoff sleep function.

    Returns:
        RunResult whose ``ok`` is False iff at least one entry failed.

    Raises:
        DuplicateEntryError: If two entries share a name. Raised before any
            request is made.
    """
    ensure_unique_names(entry.name for entry in entries)
    resolved = config if config is not None else CheckerConfig()

    logger.info("Checking %d friend links", len(entries))
    async with Prober(resolved, transport=transport) as prober:
        checker = EntryChecker(
            ResourceChecker(prober, resolved, observer=observer, sleep=sleep)
        )
        results = await checker.check_all(entries)

    report = reconcile(entries, results)
    if report.newly_failing:
        logger.error("Found %d failing friend link(s)", len(report.newly_failing))
        for record in report.newly_failing:
            logger.error("  - %s: %s", record.name, record.reason)
    else:
        logger.info("All friend links are reachable")

    return RunResult(ok=not report.newly_failing, report=report, results=results)


def persist_run(
    result: RunResult,
    repository: EntryRepository,
    report_path: str | Path,
) -> PersistencePlan:
    """Write the failure report and/or the updated entries as the policy requires.

    Returns:
        The plan that was carried out.
    """
    plan = decide_persistence(result.report)
    if plan.write_failure_report:
        write_failure_report(result.report.newly_failing, report_path)
    if plan.write_entries:
        repository.save(result.report.updated_entries)
        if result.report.recovered:
            logger.info(
                "%d friend link(s) recovered: %s",
                len(result.report.recovered),
                ", ".join(result.report.recovered),
            )
    return plan
