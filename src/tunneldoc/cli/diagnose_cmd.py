"""tunneldoc diagnose command."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from tunneldoc.core.config import load_config
from tunneldoc.core.output import console, error_console, print_diagnostic_report, setup_logging
from tunneldoc.runner import run_diagnostics


@click.command()
def diagnose():
    """Check config files, probe dev server ports and test CORS (read-only)."""
    try:
        project_path = Path.cwd()
        config = load_config(project_path)
        setup_logging(config.general.log_level)

        console.print("\n  [bold]Expo Dev Server Connectivity Tester[/bold]")
        ports = ", ".join(str(p) for p in config.probe.ports)
        with console.status(f"Probing ports {ports}..."):
            report = run_diagnostics(project_path, config)

        print_diagnostic_report(report)
    except Exception:
        error_console.print("\n  [red]tunneldoc diagnose failed unexpectedly:[/red]")
        error_console.print_exception()
        sys.exit(1)
