"""
Commit model.

A commit is an immutable batch of events appended atomically for one
aggregate at one version.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from .canonical import canonicalize

CommitId = Union[int, str]


@dataclass(frozen=True)
class Commit:
    """
    Immutable commit record.

    Fields:
        aggregate_id: Aggregate the events belong to
        version: Caller-assigned version, unique per aggregate
        events: Ordered, JSON-representable event values
        commit_id: Global ordering key (assigned by the store on append)
        committed_at: Append time in ms since epoch (assigned by the store)
    """
    aggregate_id: str
    version: int
    events: List[Any] = field(default_factory=list)
    commit_id: Optional[CommitId] = None
    committed_at: Optional[int] = None

    def __post_init__(self) -> None:
        # Normalize to the shape the store reads back (nested tuples become lists).
        if isinstance(self.events, (list, tuple)):
            object.__setattr__(self, "events", canonicalize(self.events))

    @property
    def is_committed(self) -> bool:
        return self.commit_id is not None and self.committed_at is not None

    def require_commit_id(self) -> CommitId:
        """
        Get commit id or raise error if not assigned.

        Raises:
            ValueError: If commit_id is None
        """
        if self.commit_id is None:
            raise ValueError("Commit.commit_id is required but None")
        return self.commit_id

    def require_committed_at(self) -> int:
        """
        Get commit timestamp or raise error if not assigned.

        Raises:
            ValueError: If committed_at is None
        """
        if self.committed_at is None:
            raise ValueError("Commit.committed_at is required but None")
        return self.committed_at
