"""
Core commit store primitives.

- Commit: Immutable batch of events for one aggregate version
- Codec: Commit <-> DynamoDB typed attributes
- Canonical: Deterministic JSON for the events blob
- Clock: Injectable millisecond time source
- Errors: Tagged error taxonomy
"""

from .commit import Commit, CommitId
from .canonical import canonicalize, canonical_json_str
from .clock import Clock, DeterministicClock, system_clock
from .codec import decode_commit, encode_commit
from .errors import (
    CommitStoreError,
    ConfigurationError,
    DecodeError,
    StorageFault,
    ValidationError,
    VersionConflict,
)

__all__ = [
    "Commit",
    "CommitId",
    "canonicalize",
    "canonical_json_str",
    "Clock",
    "DeterministicClock",
    "system_clock",
    "decode_commit",
    "encode_commit",
    "CommitStoreError",
    "ConfigurationError",
    "DecodeError",
    "StorageFault",
    "ValidationError",
    "VersionConflict",
]
