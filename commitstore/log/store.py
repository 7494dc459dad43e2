"""
CommitStore abstract interface.

Defines the contract for commit storage implementations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.commit import Commit, CommitId


class CommitStore(ABC):
    """
    Abstract commit storage interface.

    All implementations must guarantee:
    - Append-only (no updates, no deletes)
    - At most one commit per (aggregate_id, version)
    - query() ordered by version, scan() ordered by commit_id
    """

    @abstractmethod
    def append(self, commit: Commit) -> Commit:
        """
        Append commit to the log.

        Returns:
            Committed record with commit_id and committed_at assigned

        Raises:
            VersionConflict: If (aggregate_id, version) is already taken
            ValidationError: If the commit is malformed
            StorageFault: If the storage layer fails
        """
        ...

    @abstractmethod
    def query(self, aggregate_id: str, min_version: int = 0) -> List[Commit]:
        """Commits of aggregate_id with version >= min_version, ascending."""
        ...

    @abstractmethod
    def scan(
        self,
        min_commit_id: Optional[CommitId] = None,
        *,
        limit: Optional[int] = None,
        exclusive: bool = False,
    ) -> List[Commit]:
        """Commits of all aggregates with commit_id >= min_commit_id, ascending."""
        ...
