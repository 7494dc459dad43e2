"""
Test helpers shared across modules.
"""

import itertools

from commitstore.config import CommitStoreConfig
from commitstore.log import DynamoDBCommitStore

# 2017-07-14T02:40:00.000Z
BASE_MS = 1_500_000_000_000


def stepping_clock(start: int = BASE_MS, step: int = 1):
    """Clock that advances by step ms on every call."""
    return itertools.count(start, step).__next__


def make_store(client, sequence: str, clock=None) -> DynamoDBCommitStore:
    store = DynamoDBCommitStore(
        CommitStoreConfig(sequence=sequence),
        client=client,
        clock=clock or stepping_clock(),
    )
    store.schema().create_schema()
    return store
