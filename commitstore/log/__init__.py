"""
Commit storage on DynamoDB.

This module provides:
- CommitStore: Abstract interface for commit persistence
- DynamoDBCommitStore: DynamoDB implementation (writer + reader)
- CounterSequence / TimestampSequence: Commit id strategies
- SchemaManager: Table and index provisioning
"""

from .store import CommitStore
from .dynamodb_store import DynamoDBCommitStore
from .reader import CommitReader
from .writer import CommitWriter
from .schema import SchemaManager
from .sequence import (
    CounterSequence,
    SequenceAllocator,
    TimestampSequence,
    format_commit_stamp,
    make_allocator,
)
from .client import make_client

__all__ = [
    "CommitStore",
    "DynamoDBCommitStore",
    "CommitReader",
    "CommitWriter",
    "SchemaManager",
    "CounterSequence",
    "SequenceAllocator",
    "TimestampSequence",
    "format_commit_stamp",
    "make_allocator",
    "make_client",
]
