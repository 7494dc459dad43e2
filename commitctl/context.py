"""
Shared CLI plumbing: store construction and output helpers.
"""

import json
from dataclasses import asdict, replace
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from commitstore.config import CommitStoreConfig
from commitstore.core.commit import Commit
from commitstore.core.errors import CommitStoreError
from commitstore.log import DynamoDBCommitStore

console = Console()

ENDPOINT_OPTION = typer.Option(
    None,
    "--endpoint",
    "-e",
    help="DynamoDB endpoint URL (overrides COMMITSTORE_DYNAMODB_ENDPOINT)",
)
REGION_OPTION = typer.Option(
    None,
    "--region",
    "-r",
    help="AWS region (overrides COMMITSTORE_REGION)",
)


def load_config(endpoint: Optional[str] = None, region: Optional[str] = None) -> CommitStoreConfig:
    config = CommitStoreConfig.from_env()
    if endpoint:
        config = replace(config, endpoint_url=endpoint)
    if region:
        config = replace(config, region=region)
    return config


def open_store(endpoint: Optional[str] = None, region: Optional[str] = None) -> DynamoDBCommitStore:
    return DynamoDBCommitStore(load_config(endpoint, region))


def commit_to_dict(commit: Commit) -> Dict[str, Any]:
    return asdict(commit)


def print_commits_json(commits: List[Commit]) -> None:
    print(json.dumps({"commits": [commit_to_dict(c) for c in commits], "count": len(commits)}, indent=2))


def fail(error: Exception, json_output: bool, exit_code: int = 2) -> None:
    """Report error and exit with exit_code."""
    code = error.code if isinstance(error, CommitStoreError) else "invalid_input"
    if json_output:
        print(json.dumps({"error": str(error), "code": code}))
    else:
        console.print(f"[red]Error ({code}):[/red] {escape(str(error))}")
    raise typer.Exit(exit_code)
