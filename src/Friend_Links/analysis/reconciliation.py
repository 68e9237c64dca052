"""Reconcile check results against the persisted disconnected flags.

Pure functions: given entries and their check results, compute which flags flip,
which entries failed and what the caller should persist.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from Friend_Links.models.check import (
    CheckResult,
    FailureRecord,
    ReconciliationReport,
)
from Friend_Links.models.entry import FriendLink
from Friend_Links.models.enums import ResourceKind
from Friend_Links.utils.exceptions import DuplicateEntryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersistencePlan:
    """What the runner should write after a reconciliation."""

    write_failure_report: bool
    write_entries: bool
    exit_ok: bool


def ensure_unique_names(names: Iterable[str], *, what: str = "entry") -> None:
    """Raise DuplicateEntryError on the first repeated name."""
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise DuplicateEntryError(f"duplicate {what} name: {name!r}", name=name)
        seen.add(name)


def failure_reason(result: CheckResult) -> str:
    """Human-readable reason, e.g. ``URL: timeout (timeout after 15000ms), Avatar: error``.

    The URL side carries its error text; the avatar side only its status kind.
    """
    issues: list[str] = []
    if not result.url_status.ok:
        issues.append(f"{ResourceKind.URL}: {result.url_status.describe()}")
    if not result.avatar_status.ok:
        issues.append(f"{ResourceKind.AVATAR}: {result.avatar_status.kind}")
    return ", ".join(issues)


def reconcile(
    entries: Sequence[FriendLink],
    results: Sequence[CheckResult],
) -> ReconciliationReport:
    """Apply check results to entries.

    A failing result flags its entry disconnected and adds a FailureRecord. A
    passing result clears an existing flag. Entries without a result pass
    through untouched.

    Raises:
        DuplicateEntryError: If entry names or result names are not unique.
    """
    ensure_unique_names(entry.name for entry in entries)
    ensure_unique_names((result.name for result in results), what="result")
    by_name = {result.name: result for result in results}

    updated: list[FriendLink] = []
    newly_failing: list[FailureRecord] = []
    flagged: list[str] = []
    recovered: list[str] = []

    for entry in entries:
        result = by_name.get(entry.name)
        if result is None:
            updated.append(entry)
            continue

        if result.failed:
            newly_failing.append(
                FailureRecord(name=entry.name, url=entry.url, reason=failure_reason(result))
            )
            if not entry.is_disconnected:
                flagged.append(entry.name)
            updated.append(entry.mark_disconnected())
        elif entry.is_disconnected:
            recovered.append(entry.name)
            updated.append(entry.clear_disconnected())
        else:
            updated.append(entry)

    changed = any(
        before.is_disconnected != after.is_disconnected
        for before, after in zip(entries, updated, strict=True)
    )

    logger.info(
        "Reconciled %d entries: %d failing, %d newly flagged, %d recovered",
        len(entries),
        len(newly_failing),
        len(flagged),
        len(recovered),
    )

    return ReconciliationReport(
        changed=changed,
        newly_failing=newly_failing,
        updated_entries=updated,
        flagged=flagged,
        recovered=recovered,
    )


def decide_persistence(report: ReconciliationReport) -> PersistencePlan:
    """Map a report to the writes the runner must perform.

    Failures always produce a failure report and a non-ok exit, whether or not
    other entries were skipped. Changed flags are written back in either case.
    """
    if report.newly_failing:
        return PersistencePlan(
            write_failure_report=True,
            write_entries=report.changed,
            exit_ok=False,
        )
    return PersistencePlan(
        write_failure_report=False,
        write_entries=report.changed,
        exit_ok=True,
    )
