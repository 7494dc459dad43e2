"""
DynamoDB-backed commit store.

Tables (see SchemaManager):
- commit table: aggregateId (HASH) + version (RANGE)
- global commit index: active (HASH, constant "t") + commitId (RANGE)
- counter table (counter strategy only): name (HASH), one row per counter

The store holds no mutable state of its own: all coordination between
writers happens in DynamoDB (conditional put, atomic counter).
"""

from typing import Any, List, Optional

from ..config import CommitStoreConfig
from ..core.clock import Clock, system_clock
from ..core.commit import Commit, CommitId
from .client import make_client
from .reader import CommitReader
from .schema import SchemaManager
from .sequence import SequenceAllocator, make_allocator
from .store import CommitStore
from .writer import CommitWriter


class DynamoDBCommitStore(CommitStore):
    """
    Commit store on DynamoDB.

    Args:
        config: Store configuration (default: CommitStoreConfig())
        client: boto3 DynamoDB client (default: built from config)
        clock: Millisecond clock for committed_at and timestamp ids
            (default: system_clock)

    The schema must exist before append/query/scan are used; the store never
    creates tables on its own (see schema()).
    """

    def __init__(
        self,
        config: Optional[CommitStoreConfig] = None,
        client: Optional[Any] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or CommitStoreConfig()
        self.client = client if client is not None else make_client(self.config)
        self.clock = clock or system_clock

        self.allocator: SequenceAllocator = make_allocator(self.config, self.client)
        self.writer = CommitWriter(
            self.client,
            self.config.commit_table,
            self.allocator,
            self.clock,
        )
        self.reader = CommitReader(
            self.client,
            self.config.commit_table,
            self.config.commit_index,
            min_commit_id=self.allocator.min_commit_id,
        )

    @classmethod
    def from_env(cls, clock: Optional[Clock] = None) -> "DynamoDBCommitStore":
        return cls(CommitStoreConfig.from_env(), clock=clock)

    def schema(self) -> SchemaManager:
        """Schema manager bound to this store's client and configuration."""
        return SchemaManager(self.client, self.config)

    def append(self, commit: Commit) -> Commit:
        return self.writer.append(commit)

    def query(self, aggregate_id: str, min_version: int = 0) -> List[Commit]:
        return self.reader.query(aggregate_id, min_version)

    def scan(
        self,
        min_commit_id: Optional[CommitId] = None,
        *,
        limit: Optional[int] = None,
        exclusive: bool = False,
    ) -> List[Commit]:
        return self.reader.scan(min_commit_id, limit=limit, exclusive=exclusive)
