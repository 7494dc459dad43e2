"""
Commit id allocation.

Two interchangeable strategies produce the global ordering key:

- CounterSequence: atomic ADD on a one-row counter table. Strict total order
  across writers; two round trips per append; the counter row is a single
  point of write contention.
- TimestampSequence: id derived from the clock and the commit. No shared
  resource and no extra round trip; monotonic per process only.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from ..config import CommitStoreConfig
from ..core.codec import MAX_NUMBER_DIGITS
from ..core.commit import Commit, CommitId
from .client import STORAGE_ERRORS, translate_error

STAMP_WIDTH = 17
VERSION_WIDTH = MAX_NUMBER_DIGITS


class SequenceAllocator(ABC):
    """
    Produces the commit id used as the global ordering key.

    attribute_type is the DynamoDB type of the id ("N" or "S"); it also types
    the sort key of the global commit index. min_commit_id is the smallest
    possible id, the default lower bound of a scan.
    """

    attribute_type: str
    min_commit_id: CommitId

    @abstractmethod
    def allocate(self, commit: Commit, now: int) -> CommitId:
        """
        Allocate a commit id for commit.

        Args:
            commit: Commit being appended
            now: Append time in ms since epoch, the same value the writer
                stores as committed_at

        Raises:
            StorageFault: If the storage layer fails
        """
        ...


class CounterSequence(SequenceAllocator):
    """
    Strategy A: atomic counter.

    Each allocation issues ADD id :1 on the counter row and returns the
    post-increment value. Ids are strictly increasing across all writers. A
    commit that then fails its conditional insert leaves a gap; ids are
    ordered, not dense.
    """

    attribute_type = "N"
    min_commit_id = 0

    def __init__(self, client: Any, table_name: str, counter_name: str = "commits") -> None:
        self.client = client
        self.table_name = table_name
        self.counter_name = counter_name

    def allocate(self, commit: Commit, now: int) -> int:
        try:
            response = self.client.update_item(
                TableName=self.table_name,
                Key={"name": {"S": self.counter_name}},
                UpdateExpression="ADD #id :n",
                ExpressionAttributeNames={"#id": "id"},
                ExpressionAttributeValues={":n": {"N": "1"}},
                ReturnValues="UPDATED_NEW",
            )
        except STORAGE_ERRORS as e:
            raise translate_error(e, f"Counter increment on {self.table_name}") from e
        return int(response["Attributes"]["id"]["N"])


class TimestampSequence(SequenceAllocator):
    """
    Strategy B: derived key.

    id = YYYYMMDDHHMMSSfff (UTC) + version (38 digits) + aggregate_id

    Fixed-width prefixes make lexical order match time order, then version
    order within an aggregate. Monotonic per process if the clock is. The
    version field is as wide as a DynamoDB number, so every storable version
    keeps the id fixed-width.
    Writers that obtain the same millisecond are ordered by version and
    aggregate id, which is arbitrary rather than causal: callers that need
    strict cross-aggregate order must use CounterSequence.
    """

    attribute_type = "S"
    min_commit_id = "0"

    def allocate(self, commit: Commit, now: int) -> str:
        if commit.version >= 10**VERSION_WIDTH:
            raise ValueError(f"version {commit.version} exceeds {VERSION_WIDTH} digits")
        return (
            format_commit_stamp(now)
            + f"{commit.version:0{VERSION_WIDTH}d}"
            + commit.aggregate_id
        )


def format_commit_stamp(ms: int) -> str:
    """
    Format ms since epoch as a 17-digit UTC stamp (YYYYMMDDHHMMSSfff).

    Raises:
        ValueError: If ms is negative
    """
    if ms < 0:
        raise ValueError(f"clock value must be non-negative, got {ms}")
    seconds, millis = divmod(ms, 1000)
    stamp = datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"{stamp}{millis:03d}"


def make_allocator(config: CommitStoreConfig, client: Any) -> SequenceAllocator:
    """Select the allocator for config.sequence."""
    if config.uses_counter:
        return CounterSequence(client, config.counter_table, config.counter_name)
    return TimestampSequence()
