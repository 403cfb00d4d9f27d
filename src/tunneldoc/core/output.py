"""Rich terminal formatting for tunneldoc output."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from tunneldoc.core.models import DiagnosticReport, RepairLog
from tunneldoc.report.aggregator import ReportAggregator

console = Console()
error_console = Console(stderr=True)

SECTION_STYLES = {
    "SERVER ACCESSIBILITY:": "bold cyan",
    "CORS TEST RESULTS:": "bold cyan",
    "CONFIGURATION ISSUES:": "bold yellow",
    "RECOMMENDATIONS:": "bold green",
    "NOTES:": "bold blue",
    "STANDARD TROUBLESHOOTING STEPS:": "bold",
    "CHANGES MADE:": "bold green",
    "ERRORS:": "bold red",
    "WARNINGS:": "bold yellow",
    "NEXT STEPS": "bold",
}


def setup_logging(level: str = "WARNING") -> None:
    """Send log records to stderr through rich, at *level*."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def _styled(lines: list[str]) -> Text:
    """Colour section headings and pass/fail marks; content is never parsed as markup."""
    text = Text()
    for n, line in enumerate(lines):
        if n:
            text.append("\n")
        style = SECTION_STYLES.get(line.strip())
        if style is None and line.lstrip().startswith("FAIL "):
            style = "red"
        elif style is None and line.lstrip().startswith("OK "):
            style = "green"
        text.append(line, style=style)
    return text


def report_color(report: DiagnosticReport) -> str:
    """Return border colour based on what the run found."""
    if report.reachable_count == 0:
        return "red"
    if report.cors.skipped or report.cors_success_count < len(report.cors.outcomes):
        return "yellow"
    if report.issues:
        return "yellow"
    return "green"


def print_diagnostic_report(report: DiagnosticReport) -> None:
    """Print the full diagnostic report to terminal."""
    lines = ReportAggregator().render_lines(report)
    console.print(Panel(
        _styled(lines),
        title="[bold]tunneldoc Final Report[/bold]",
        border_style=report_color(report),
        padding=(0, 1),
    ))


def print_repair_summary(log: RepairLog) -> None:
    """Print the change summary of a repair run."""
    lines = ReportAggregator().render_repair_lines(log)
    color = "red" if log.errors else "green" if log.entries else "blue"
    console.print(Panel(
        _styled(lines),
        title="[bold]tunneldoc Repair[/bold]",
        border_style=color,
        padding=(0, 1),
    ))
