"""CLI entry point for friend-links: reachability checks for a friend-link list.

Provides the ``friend-links`` command with subcommands for checking every entry,
probing a single URL, listing entries and rewriting the entry file canonically.

This is the only module besides ``reporting.terminal`` where console output is
allowed. All other modules use ``logging``. Async internals are bridged to
typer's synchronous interface via ``asyncio.run()``.

Exit codes: 0 when nothing fails, 1 when at least one link fails, 2 when the
entry file or configuration is unusable.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, Final

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from Friend_Links.config import CheckerConfig, resolve_data_path, resolve_report_path
from Friend_Links.data.codec import codec_for_path
from Friend_Links.data.repository import EntryRepository
from Friend_Links.logging_config import configure_logging
from Friend_Links.models.check import ResourceStatus
from Friend_Links.pipeline import persist_run, run_check
from Friend_Links.reporting.terminal import (
    format_status,
    render_check_results,
    render_entries,
    render_report,
)
from Friend_Links.services.checker import ResourceChecker
from Friend_Links.services.probe import Prober
from Friend_Links.utils.exceptions import EntrySourceError

# ---------------------------------------------------------------------------
# Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(name="friend-links", help="Check and maintain a friend-link list")

# Rich console for formatted output
console = Console()

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK: Final[int] = 0
EXIT_LINK_FAILURES: Final[int] = 1
EXIT_SOURCE_ERROR: Final[int] = 2


def _build_config(*, attempts: int | None, timeout_ms: int | None) -> CheckerConfig:
    """Resolve the checker config or exit with EXIT_SOURCE_ERROR."""
    try:
        return CheckerConfig.from_env(max_attempts=attempts, timeout_ms=timeout_ms)
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red]\n{escape(str(exc))}")
        raise typer.Exit(code=EXIT_SOURCE_ERROR) from exc


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@app.command()
def check(
    data: Annotated[Path | None, typer.Option(help="Entry file (.ts or .jsonl)")] = None,
    report: Annotated[Path | None, typer.Option(help="Where to write the failure report")] = None,
    attempts: Annotated[int | None, typer.Option(help="Probe attempts per resource")] = None,
    timeout_ms: Annotated[int | None, typer.Option(help="Per-probe timeout in ms")] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Check and report without writing files")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Suppress info logging")] = False,
) -> None:
    """Check every friend link, flag unreachable ones and write the results."""
    configure_logging(verbose=verbose, quiet=quiet)
    config = _build_config(attempts=attempts, timeout_ms=timeout_ms)
    data_path = resolve_data_path(data)
    report_path = resolve_report_path(report)

    try:
        repository = EntryRepository(data_path)
        entries = repository.load()
        console.print(f"\n[bold]Checking {len(entries)} friend links...[/bold]\n")
        result = asyncio.run(run_check(entries, config=config))

        render_check_results(result.results, target=console)
        render_report(result.report, target=console)

        if dry_run:
            console.print("\n[dim]Dry run: no files written.[/dim]")
        else:
            plan = persist_run(result, repository, report_path)
            if plan.write_failure_report:
                console.print(f"[dim]Failure report saved to {escape(str(report_path))}[/dim]")
            if plan.write_entries:
                console.print(f"[dim]Updated {escape(str(data_path))}[/dim]")
    except EntrySourceError as exc:
        console.print(f"[red]Entry file error: {escape(str(exc))}[/red]")
        raise typer.Exit(code=EXIT_SOURCE_ERROR) from exc

    if not result.ok:
        raise typer.Exit(code=EXIT_LINK_FAILURES)


# ---------------------------------------------------------------------------
# probe command
# ---------------------------------------------------------------------------


@app.command()
def probe(
    url: Annotated[str, typer.Argument(help="URL to check")],
    attempts: Annotated[int | None, typer.Option(help="Probe attempts")] = None,
    timeout_ms: Annotated[int | None, typer.Option(help="Per-probe timeout in ms")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Check a single URL with the same retry policy as ``check``."""
    configure_logging(verbose=verbose)
    config = _build_config(attempts=attempts, timeout_ms=timeout_ms)

    status = asyncio.run(_probe_async(url, config))

    console.print(f"{escape(url)}: {format_status(status)} after {status.attempts} attempt(s)")
    if status.error_message:
        console.print(f"[dim]{escape(status.error_message)}[/dim]")
    if not status.ok:
        raise typer.Exit(code=EXIT_LINK_FAILURES)


async def _probe_async(url: str, config: CheckerConfig) -> ResourceStatus:
    """Run one retrying resource check."""
    async with Prober(config) as prober:
        checker = ResourceChecker(prober, config)
        return await checker.check_resource(url)


# ---------------------------------------------------------------------------
# list command
# ---------------------------------------------------------------------------


@app.command("list")
def list_entries(
    data: Annotated[Path | None, typer.Option(help="Entry file (.ts or .jsonl)")] = None,
) -> None:
    """Show the entries and their flags."""
    configure_logging(quiet=True)
    try:
        entries = EntryRepository(resolve_data_path(data)).load()
    except EntrySourceError as exc:
        console.print(f"[red]Entry file error: {escape(str(exc))}[/red]")
        raise typer.Exit(code=EXIT_SOURCE_ERROR) from exc
    render_entries(entries, target=console)


# ---------------------------------------------------------------------------
# format command
# ---------------------------------------------------------------------------


@app.command("format")
def format_entries(
    data: Annotated[Path | None, typer.Option(help="Entry file to read")] = None,
    output: Annotated[
        Path | None, typer.Option(help="File to write (defaults to the input file)")
    ] = None,
) -> None:
    """Rewrite the entry file canonically, or convert between .ts and .jsonl."""
    configure_logging(quiet=True)
    source = resolve_data_path(data)
    target = output or source
    try:
        entries = EntryRepository(source).load()
        EntryRepository(target, codec_for_path(target)).save(entries)
    except EntrySourceError as exc:
        console.print(f"[red]Entry file error: {escape(str(exc))}[/red]")
        raise typer.Exit(code=EXIT_SOURCE_ERROR) from exc
    console.print(f"[green]Wrote {len(entries)} entries to {escape(str(target))}[/green]")
