"""
Commit writer: the append path.

One append = allocate a commit id, stamp the commit, and issue a single
conditional PutItem guarded by attribute_not_exists(version). The guard is the
only concurrency control: of two appends racing for the same
(aggregate_id, version), exactly one succeeds.
"""

from dataclasses import replace
from typing import Any

from .. import metrics
from ..logging_config import get_logger
from ..core.clock import Clock
from ..core.codec import MAX_VERSION, VERSION, encode_commit, encode_events
from ..core.commit import Commit
from ..core.errors import ValidationError, VersionConflict
from .client import CONDITIONAL_CHECK_FAILED, STORAGE_ERRORS, error_code, translate_error
from .sequence import SequenceAllocator


class CommitWriter:
    """
    Appends commits to the commit table.

    No retries: a VersionConflict, ValidationError or StorageFault is raised
    to the caller as-is. Retry policy belongs to the caller.
    """

    def __init__(
        self,
        client: Any,
        table_name: str,
        allocator: SequenceAllocator,
        clock: Clock,
    ) -> None:
        self.client = client
        self.table_name = table_name
        self.allocator = allocator
        self.clock = clock

    def append(self, commit: Commit) -> Commit:
        """
        Append commit.

        Args:
            commit: Commit to append (commit_id and committed_at are assigned)

        Returns:
            The committed record

        Raises:
            ValidationError: If the commit is malformed
            VersionConflict: If a commit already exists at (aggregate_id, version)
            StorageFault: If the storage layer fails
        """
        self._validate(commit)

        # one clock read per append: the timestamp id and committed_at agree
        now = self.clock()
        commit_id = self.allocator.allocate(commit, now)
        record = replace(commit, commit_id=commit_id, committed_at=now)

        try:
            self.client.put_item(
                TableName=self.table_name,
                Item=encode_commit(record),
                ConditionExpression="attribute_not_exists(#ver)",
                ExpressionAttributeNames={"#ver": VERSION},
                ReturnValues="NONE",
            )
        except STORAGE_ERRORS as e:
            if error_code(e) == CONDITIONAL_CHECK_FAILED:
                metrics.track_conflict()
                raise VersionConflict(commit.aggregate_id, commit.version) from e
            raise translate_error(e, f"PutItem on {self.table_name}") from e

        metrics.track_append()
        get_logger(__name__, trace_id=record.aggregate_id).debug(
            "Appended commit",
            extra={"version": record.version, "commit_id": record.commit_id},
        )
        return record

    def _validate(self, commit: Commit) -> None:
        """Reject malformed input before it can consume a commit id."""
        if not isinstance(commit.aggregate_id, str) or not commit.aggregate_id:
            raise ValidationError("aggregate_id must be a non-empty string")
        if isinstance(commit.version, bool) or not isinstance(commit.version, int):
            raise ValidationError(
                f"version must be an integer, got {type(commit.version).__name__}"
            )
        if commit.version < 0:
            raise ValidationError(f"version must be non-negative, got {commit.version}")
        if commit.version > MAX_VERSION:
            raise ValidationError(f"version must fit in a DynamoDB number, got {commit.version}")
        if not isinstance(commit.events, (list, tuple)):
            raise ValidationError(
                f"events must be a list, got {type(commit.events).__name__}"
            )
        try:
            encode_events(commit.events)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"events are not JSON-serializable: {e}") from e
