"""
Replay runner: rebuild aggregate state and drive projections from the log.

Replay is a pure fold: the handler is applied to each commit in order.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..core.commit import Commit, CommitId
from ..log.store import CommitStore

Handler = Callable[[Any, Commit], Any]


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of an aggregate replay.

    Fields:
        state: Final state after applying commits
        applied: Number of commits applied
        last_version: Version of the last commit applied (None if none)
    """
    state: Any
    applied: int
    last_version: Optional[int]


@dataclass(frozen=True)
class ProjectionResult:
    """
    Result of a projection run over the global feed.

    last_commit_id is the checkpoint to resume from (exclusive); None when
    no commit was applied.
    """
    state: Any
    applied: int
    last_commit_id: Optional[CommitId]


def replay_aggregate(
    store: CommitStore,
    aggregate_id: str,
    apply: Handler,
    initial: Any = None,
    from_version: int = 0,
) -> ReplayResult:
    """
    Rebuild one aggregate from its commits.

    Args:
        store: Commit store to read from
        aggregate_id: Aggregate to replay
        apply: (state, commit) -> state
        initial: State to start from (e.g. a state known at from_version - 1)
        from_version: First version to apply

    Returns:
        ReplayResult with final state and count
    """
    state = initial
    count = 0
    last_version = None

    for commit in store.query(aggregate_id, from_version):
        state = apply(state, commit)
        count += 1
        last_version = commit.version

    return ReplayResult(state=state, applied=count, last_version=last_version)


def project(
    store: CommitStore,
    handler: Handler,
    state: Any = None,
    from_commit_id: Optional[CommitId] = None,
    page_size: int = 100,
) -> ProjectionResult:
    """
    Fold every commit of every aggregate, in global order, into state.

    Reads the global feed page by page; each page after the first resumes
    strictly after the last commit id seen.

    Args:
        store: Commit store to read from
        handler: (state, commit) -> state
        state: Initial projection state
        from_commit_id: First commit id to include (None = beginning)
        page_size: Commits per scan call

    Returns:
        ProjectionResult with final state, count and resume checkpoint
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")

    count = 0
    last_commit_id = None
    page = store.scan(from_commit_id, limit=page_size)

    while page:
        for commit in page:
            state = handler(state, commit)
            count += 1
            last_commit_id = commit.commit_id
        if len(page) < page_size:
            break
        page = store.scan(last_commit_id, limit=page_size, exclusive=True)

    return ProjectionResult(state=state, applied=count, last_commit_id=last_commit_id)
