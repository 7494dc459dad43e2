"""
Schema commands: create, drop, status
"""

import json
from typing import Optional

import typer

from commitstore.core.errors import CommitStoreError

from ..context import ENDPOINT_OPTION, REGION_OPTION, console, fail, open_store

app = typer.Typer()


@app.command()
def create(
    no_wait: bool = typer.Option(False, "--no-wait", help="Return before tables are ACTIVE"),
    endpoint: Optional[str] = ENDPOINT_OPTION,
    region: Optional[str] = REGION_OPTION,
):
    """
    Create the commit table, its global index and (counter strategy) the counter table.

    Examples:
        commitctl schema create
        COMMITSTORE_SEQUENCE=timestamp commitctl schema create
    """
    try:
        store = open_store(endpoint, region)
        store.schema().create_schema(wait=not no_wait)
    except CommitStoreError as e:
        fail(e, json_output=False)

    config = store.config
    console.print(f"[green]Created[/green] {config.commit_table} (index {config.commit_index})")
    if config.uses_counter:
        console.print(f"[green]Created[/green] {config.counter_table}")


@app.command()
def drop(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    missing_ok: bool = typer.Option(False, "--missing-ok", help="Ignore tables that do not exist"),
    endpoint: Optional[str] = ENDPOINT_OPTION,
    region: Optional[str] = REGION_OPTION,
):
    """
    Delete the commit store tables. All commits are lost.

    Examples:
        commitctl schema drop --yes
    """
    try:
        store = open_store(endpoint, region)
    except CommitStoreError as e:
        fail(e, json_output=False)

    if not yes:
        typer.confirm(f"Delete table {store.config.commit_table} and all its commits?", abort=True)

    try:
        store.schema().drop_schema(missing_ok=missing_ok)
    except CommitStoreError as e:
        fail(e, json_output=False)

    console.print(f"[yellow]Dropped[/yellow] commit store tables ({store.config.sequence} strategy)")


@app.command()
def status(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    endpoint: Optional[str] = ENDPOINT_OPTION,
    region: Optional[str] = REGION_OPTION,
):
    """
    Report whether the commit store tables exist. Exits 1 when they do not.
    """
    try:
        store = open_store(endpoint, region)
        exists = store.schema().schema_exists()
    except CommitStoreError as e:
        fail(e, json_output)

    if json_output:
        print(json.dumps({"exists": exists, "sequence": store.config.sequence}))
    elif exists:
        console.print(f"[green]Schema present[/green] ({store.config.sequence} strategy)")
    else:
        console.print("[yellow]Schema missing[/yellow]")

    raise typer.Exit(0 if exists else 1)
