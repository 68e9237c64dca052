"""Rich-based terminal output for entry lists and check results.

Color scheme: green = OK, red = error, yellow = timeout or skipped.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from Friend_Links.models.check import CheckResult, ReconciliationReport, ResourceStatus
from Friend_Links.models.entry import FriendLink
from Friend_Links.models.enums import StatusKind

# Shared console instance for terminal output
console = Console()

# --- Color scheme ---
COLOR_OK: str = "green"
COLOR_ERROR: str = "red"
COLOR_WARN: str = "yellow"
COLOR_MUTED: str = "dim"

_STATUS_COLORS: dict[StatusKind, str] = {
    StatusKind.OK: COLOR_OK,
    StatusKind.TIMEOUT: COLOR_WARN,
    StatusKind.ERROR: COLOR_ERROR,
}


def format_status(status: ResourceStatus, *, skipped: bool = False) -> str:
    """One table cell: colored kind plus HTTP status and latency when known."""
    if skipped:
        return f"[{COLOR_WARN}]skipped[/{COLOR_WARN}]"
    color = _STATUS_COLORS[status.kind]
    parts = [f"[{color}]{status.kind.value.upper()}[/{color}]"]
    if status.http_status is not None:
        parts.append(str(status.http_status))
    if status.ok:
        parts.append(f"{status.latency_ms}ms")
    return " ".join(parts)


def render_check_results(
    results: Sequence[CheckResult],
    *,
    target: Console | None = None,
) -> None:
    """Render per-entry URL and avatar statuses as a table."""
    out = target or console
    if not results:
        out.print(f"[{COLOR_WARN}]No entries to check.[/{COLOR_WARN}]")
        return

    table = Table(title="Friend Link Check", show_lines=False)
    table.add_column("Name", style="bold")
    table.add_column("URL")
    table.add_column("URL Status")
    table.add_column("Avatar Status")

    for result in results:
        table.add_row(
            escape(result.name),
            escape(result.url),
            format_status(result.url_status, skipped=result.skipped),
            format_status(result.avatar_status, skipped=result.skipped),
        )

    out.print(table)


def render_report(
    report: ReconciliationReport,
    *,
    target: Console | None = None,
) -> None:
    """Summarise failures and flag changes after a run."""
    out = target or console
    if report.newly_failing:
        out.print(
            f"\n[{COLOR_ERROR}][bold]{len(report.newly_failing)} failing friend link(s):"
            f"[/bold][/{COLOR_ERROR}]"
        )
        for record in report.newly_failing:
            out.print(f"  - {escape(record.name)}: {escape(record.reason)}")
    if report.recovered:
        out.print(
            f"\n[{COLOR_OK}]Recovered: {escape(', '.join(report.recovered))}[/{COLOR_OK}]"
        )
    if not report.newly_failing:
        out.print(f"\n[{COLOR_OK}]All friend links are reachable.[/{COLOR_OK}]")


def render_entries(
    entries: Sequence[FriendLink],
    *,
    target: Console | None = None,
) -> None:
    """Render the entry list with its flags."""
    out = target or console
    if not entries:
        out.print(f"[{COLOR_WARN}]No entries.[/{COLOR_WARN}]")
        return

    table = Table(title=f"Friend Links ({len(entries)})")
    table.add_column("#", justify="right", style=COLOR_MUTED, width=4)
    table.add_column("Name", style="bold")
    table.add_column("URL")
    table.add_column("Added", style=COLOR_MUTED)
    table.add_column("Flags")

    for index, entry in enumerate(entries, start=1):
        flags: list[str] = []
        if entry.is_recommended:
            flags.append(f"[{COLOR_OK}]recommended[/{COLOR_OK}]")
        if entry.is_disconnected:
            flags.append(f"[{COLOR_ERROR}]disconnected[/{COLOR_ERROR}]")
        table.add_row(
            str(index),
            escape(entry.name),
            escape(entry.url),
            entry.add_date or "---",
            " ".join(flags) or "---",
        )

    out.print(table)
