"""Reporting module: rich terminal output.

Re-exports all public functions so consumers can import directly:
    from Friend_Links.reporting import render_check_results, render_report
"""

from Friend_Links.reporting.terminal import (
    format_status,
    render_check_results,
    render_entries,
    render_report,
)

__all__ = [
    "format_status",
    "render_check_results",
    "render_entries",
    "render_report",
]
