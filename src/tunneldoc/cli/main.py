"""Click CLI entry point for tunneldoc."""

from __future__ import annotations

import click

from tunneldoc._version import __version__


@click.group()
@click.version_option(version=__version__, prog_name="tunneldoc")
def cli():
    """tunneldoc - tunnel reachability and CORS doctor for Expo dev servers.

    Diagnose why a tunnel cannot reach your local dev server, then repair
    app.json and package.json in one step.
    """
    pass


# Import and register subcommands
from tunneldoc.cli.diagnose_cmd import diagnose  # noqa: E402
from tunneldoc.cli.repair_cmd import repair  # noqa: E402

cli.add_command(diagnose)
cli.add_command(repair)


if __name__ == "__main__":
    cli()
