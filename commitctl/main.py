#!/usr/bin/env python3
"""
commitctl - Commit Store administration CLI

Main entrypoint for the commitctl command-line tool.
"""

import os

import typer
from rich.console import Console
from rich.table import Table

from commitstore.logging_config import setup_logging
from commitstore.metrics import start_metrics_server

from .commands import log, schema

app = typer.Typer(
    name="commitctl",
    help="DynamoDB commit store administration",
    add_completion=False,
)

console = Console()

app.add_typer(schema.app, name="schema", help="Table provisioning")
app.add_typer(log.app, name="log", help="Commit log operations")


@app.callback()
def init():
    """Configure logging and, if enabled, the metrics endpoint."""
    setup_logging()
    start_metrics_server(
        enabled=os.getenv("COMMITSTORE_METRICS_ENABLED", "false").lower() == "true",
        port=int(os.getenv("COMMITSTORE_METRICS_PORT", "8080")),
    )


@app.command()
def version():
    """Show version information."""
    from commitctl import __version__
    from commitstore import __version__ as store_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]commitctl[/bold]", f"v{__version__}")
    table.add_row("commitstore", f"v{store_version}")
    table.add_row("Sequence", os.getenv("COMMITSTORE_SEQUENCE", "counter"))

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
