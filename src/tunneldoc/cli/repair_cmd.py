"""tunneldoc repair command."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from tunneldoc.core.config import load_config
from tunneldoc.core.output import console, error_console, print_repair_summary, setup_logging
from tunneldoc.runner import run_repair


@click.command()
def repair():
    """Patch app.json and package.json for external access and write a launch script.

    Every modified file is backed up first as <file>.backup.<epoch-millis>.
    """
    try:
        project_path = Path.cwd()
        config = load_config(project_path)
        setup_logging(config.general.log_level)

        console.print("\n  [bold]Expo CORS & Connectivity Fixer[/bold]")
        console.print("  Analyzing and fixing Expo configuration for external access...\n")
        log = run_repair(project_path, config)

        print_repair_summary(log)
    except Exception:
        error_console.print("\n  [red]tunneldoc repair failed unexpectedly:[/red]")
        error_console.print_exception()
        sys.exit(1)
