"""
Commit log commands: append, query, scan
"""

import json
from typing import Optional

import typer
from rich.syntax import Syntax
from rich.table import Table

from commitstore.core.commit import Commit
from commitstore.core.errors import CommitStoreError, VersionConflict

from ..context import (
    ENDPOINT_OPTION,
    REGION_OPTION,
    commit_to_dict,
    console,
    fail,
    open_store,
    print_commits_json,
)

app = typer.Typer()


def _render(commits, title: str, show_events: bool) -> None:
    if not commits:
        console.print("[yellow]No commits match[/yellow]")
        return

    table = Table(title=title)
    table.add_column("Commit ID", style="cyan")
    table.add_column("Aggregate ID", style="yellow")
    table.add_column("Version", style="green")
    table.add_column("Committed At", style="dim")
    table.add_column("Events")

    for commit in commits:
        table.add_row(
            str(commit.commit_id),
            commit.aggregate_id,
            str(commit.version),
            str(commit.committed_at),
            str(len(commit.events)),
        )
    console.print(table)

    if show_events:
        for commit in commits:
            console.print(f"\n[bold cyan]{commit.aggregate_id} v{commit.version}[/bold cyan]")
            console.print(Syntax(json.dumps(commit.events, indent=2), "json", theme="monokai"))

    console.print(f"\n[bold]Total commits:[/bold] {len(commits)}")


@app.command()
def append(
    aggregate_id: str = typer.Option(..., "--aggregate", "-a", help="Aggregate ID"),
    version: int = typer.Option(..., "--version", "-v", help="Expected next version"),
    events: str = typer.Option("[]", "--events", help="Events as a JSON list"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    endpoint: Optional[str] = ENDPOINT_OPTION,
    region: Optional[str] = REGION_OPTION,
):
    """
    Append one commit. Exits 1 on a version conflict.

    Examples:
        commitctl log append -a order-1 -v 0 --events '[{"type": "Created"}]'
    """
    try:
        parsed = json.loads(events)
    except json.JSONDecodeError as e:
        fail(e, json_output)

    try:
        committed = open_store(endpoint, region).append(
            Commit(aggregate_id=aggregate_id, version=version, events=parsed)
        )
    except VersionConflict as e:
        fail(e, json_output, exit_code=1)
    except CommitStoreError as e:
        fail(e, json_output)

    if json_output:
        print(json.dumps(commit_to_dict(committed), indent=2))
    else:
        console.print(
            f"[green]Committed[/green] {committed.aggregate_id} v{committed.version} "
            f"as {committed.commit_id}"
        )


@app.command()
def query(
    aggregate_id: str = typer.Option(..., "--aggregate", "-a", help="Aggregate ID"),
    from_version: int = typer.Option(0, "--from-version", help="Lowest version (inclusive)"),
    show_events: bool = typer.Option(False, "--events", help="Show event payloads"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    endpoint: Optional[str] = ENDPOINT_OPTION,
    region: Optional[str] = REGION_OPTION,
):
    """
    Read the commits of one aggregate in version order.

    Examples:
        commitctl log query -a order-1
        commitctl log query -a order-1 --from-version 5 --json
    """
    try:
        commits = open_store(endpoint, region).query(aggregate_id, from_version)
    except CommitStoreError as e:
        fail(e, json_output)

    if json_output:
        print_commits_json(commits)
    else:
        _render(commits, f"Aggregate: {aggregate_id}", show_events)


@app.command()
def scan(
    from_commit: Optional[str] = typer.Option(None, "--from", help="Lowest commit ID (inclusive)"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum commits to return"),
    show_events: bool = typer.Option(False, "--events", help="Show event payloads"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    endpoint: Optional[str] = ENDPOINT_OPTION,
    region: Optional[str] = REGION_OPTION,
):
    """
    Read commits of all aggregates in global commit order.

    Commit IDs are integers under the counter strategy and strings under the
    timestamp strategy.

    Examples:
        commitctl log scan
        commitctl log scan --from 42 --limit 10 --json
    """
    try:
        store = open_store(endpoint, region)
    except CommitStoreError as e:
        fail(e, json_output)

    min_commit_id = None
    if from_commit is not None:
        if store.config.uses_counter:
            try:
                min_commit_id = int(from_commit)
            except ValueError:
                raise typer.BadParameter(
                    f"commit IDs are integers under the counter strategy, got {from_commit!r}",
                    param_hint="--from",
                )
        else:
            min_commit_id = from_commit

    try:
        commits = store.scan(min_commit_id, limit=limit)
    except CommitStoreError as e:
        fail(e, json_output)

    if json_output:
        print_commits_json(commits)
    else:
        _render(commits, "Global commit log", show_events)
