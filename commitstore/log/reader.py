"""
Commit reader: by-aggregate and global reads.

query() reads the commit table with ConsistentRead, so a commit is visible as
soon as append() returns. scan() reads the global commit index, which DynamoDB
propagates asynchronously: a fresh commit may be briefly missing from scan()
while already visible to query().

Both reads fetch every page, then decode every item before returning. A single
undecodable item fails the whole read; a replay must never silently skip a
commit.
"""

import logging
from typing import Any, Dict, List, Optional

from .. import metrics
from ..logging_config import get_logger
from ..core.codec import (
    ACTIVE,
    ACTIVE_MARKER,
    AGGREGATE_ID,
    COMMIT_ID,
    VERSION,
    decode_commit,
    encode_commit_id,
)
from ..core.commit import Commit, CommitId
from .client import STORAGE_ERRORS, translate_error

logger = logging.getLogger(__name__)


class CommitReader:
    def __init__(
        self,
        client: Any,
        table_name: str,
        index_name: str,
        min_commit_id: CommitId = 0,
    ) -> None:
        self.client = client
        self.table_name = table_name
        self.index_name = index_name
        self.min_commit_id = min_commit_id

    def query(self, aggregate_id: str, min_version: int = 0) -> List[Commit]:
        """
        Read commits of one aggregate (strongly consistent).

        Args:
            aggregate_id: Aggregate to read
            min_version: Lowest version to return (inclusive)

        Returns:
            Commits with version >= min_version, ascending by version

        Raises:
            DecodeError: If any stored commit cannot be decoded
            ValidationError: If DynamoDB rejects the request
            StorageFault: If the storage layer fails
        """
        params = {
            "TableName": self.table_name,
            "ConsistentRead": True,
            "KeyConditionExpression": "#agg = :a AND #ver >= :v",
            "ExpressionAttributeNames": {"#agg": AGGREGATE_ID, "#ver": VERSION},
            "ExpressionAttributeValues": {
                ":a": {"S": aggregate_id},
                ":v": {"N": str(min_version)},
            },
        }
        with metrics.track_read_duration("query"):
            commits = self._run(params, limit=None, operation=f"Query on {self.table_name}")
        get_logger(__name__, trace_id=aggregate_id).debug(
            "Queried commits",
            extra={"min_version": min_version, "count": len(commits)},
        )
        return commits

    def scan(
        self,
        min_commit_id: Optional[CommitId] = None,
        *,
        limit: Optional[int] = None,
        exclusive: bool = False,
    ) -> List[Commit]:
        """
        Read commits of all aggregates in global order (eventually consistent).

        Args:
            min_commit_id: Lower bound (default: smallest possible id)
            limit: Maximum number of commits to return (None = all)
            exclusive: Exclude min_commit_id itself; pass the last commit id of
                the previous page to resume the feed

        Returns:
            Commits with commit_id >= min_commit_id (> if exclusive),
            ascending by commit_id

        Raises:
            DecodeError: If any stored commit cannot be decoded
            ValidationError: If DynamoDB rejects the request
            StorageFault: If the storage layer fails
        """
        if limit is not None and limit <= 0:
            return []
        bound = self.min_commit_id if min_commit_id is None else min_commit_id
        op = ">" if exclusive else ">="
        params = {
            "TableName": self.table_name,
            "IndexName": self.index_name,
            "KeyConditionExpression": f"#act = :t AND #cid {op} :c",
            "ExpressionAttributeNames": {"#act": ACTIVE, "#cid": COMMIT_ID},
            "ExpressionAttributeValues": {
                ":t": {"S": ACTIVE_MARKER},
                ":c": encode_commit_id(bound),
            },
        }
        with metrics.track_read_duration("scan"):
            commits = self._run(params, limit=limit, operation=f"Query on {self.index_name}")
        logger.debug(
            "Scanned commits",
            extra={"min_commit_id": bound, "exclusive": exclusive, "count": len(commits)},
        )
        return commits

    def _run(self, params: Dict[str, Any], limit: Optional[int], operation: str) -> List[Commit]:
        items = []
        paginator = self.client.get_paginator("query")
        if limit is not None:
            params = dict(params, PaginationConfig={"PageSize": limit})
        try:
            for page in paginator.paginate(**params):
                items.extend(page.get("Items", []))
                if limit is not None and len(items) >= limit:
                    del items[limit:]
                    break
        except STORAGE_ERRORS as e:
            raise translate_error(e, operation) from e

        return [decode_commit(item) for item in items]
