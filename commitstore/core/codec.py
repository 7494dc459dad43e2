"""
Attribute codec: Commit <-> DynamoDB typed-attribute item.

Item layout:
    aggregateId  S   aggregate identity (table partition key)
    version      N   per-aggregate version (table sort key)
    commitId     N|S global ordering key (index sort key)
    committedAt  N   append time, ms since epoch
    events       S   canonical JSON of the event list
    active       S   constant "t" (index partition key)

Numbers travel as decimal strings so large integers stay exact.
"""

import json
from typing import Any, Dict, List

from .canonical import canonical_json_str
from .commit import Commit, CommitId
from .errors import DecodeError

AGGREGATE_ID = "aggregateId"
VERSION = "version"
COMMIT_ID = "commitId"
COMMITTED_AT = "committedAt"
EVENTS = "events"
ACTIVE = "active"

# Single-valued partition of the global commit index.
ACTIVE_MARKER = "t"

# DynamoDB numbers carry at most 38 significant digits.
MAX_NUMBER_DIGITS = 38
MAX_VERSION = 10**MAX_NUMBER_DIGITS - 1

Item = Dict[str, Dict[str, str]]


def encode_events(events: List[Any]) -> str:
    return canonical_json_str(events)


def decode_events(text: str) -> List[Any]:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"events blob is not valid JSON: {e}") from e


def encode_commit_id(commit_id: CommitId) -> Dict[str, str]:
    """Numeric ids (counter strategy) map to N, string ids (timestamp strategy) to S."""
    if isinstance(commit_id, bool):
        raise TypeError("commit id must be int or str, not bool")
    if isinstance(commit_id, int):
        return {"N": str(commit_id)}
    if isinstance(commit_id, str):
        return {"S": commit_id}
    raise TypeError(f"commit id must be int or str, got {type(commit_id).__name__}")


def decode_commit_id(attr: Dict[str, str]) -> CommitId:
    if "N" in attr:
        return _parse_int(COMMIT_ID, attr["N"])
    if "S" in attr:
        return attr["S"]
    raise DecodeError(f"attribute '{COMMIT_ID}' must be N or S, got {sorted(attr)}")


def encode_commit(commit: Commit) -> Item:
    """
    Encode a committed Commit as a DynamoDB item.

    Raises:
        ValueError: If commit_id or committed_at has not been assigned
    """
    return {
        COMMIT_ID: encode_commit_id(commit.require_commit_id()),
        COMMITTED_AT: {"N": str(commit.require_committed_at())},
        AGGREGATE_ID: {"S": commit.aggregate_id},
        VERSION: {"N": str(commit.version)},
        EVENTS: {"S": encode_events(commit.events)},
        ACTIVE: {"S": ACTIVE_MARKER},
    }


def decode_commit(item: Item) -> Commit:
    """
    Decode a DynamoDB item into a Commit.

    Raises:
        DecodeError: If a required attribute is missing or malformed
    """
    if COMMIT_ID not in item:
        raise DecodeError(f"missing attribute '{COMMIT_ID}'")
    return Commit(
        aggregate_id=_typed(item, AGGREGATE_ID, "S"),
        version=_parse_int(VERSION, _typed(item, VERSION, "N")),
        events=decode_events(_typed(item, EVENTS, "S")),
        commit_id=decode_commit_id(item[COMMIT_ID]),
        committed_at=_parse_int(COMMITTED_AT, _typed(item, COMMITTED_AT, "N")),
    )


def _typed(item: Item, name: str, type_tag: str) -> str:
    attr = item.get(name)
    if attr is None:
        raise DecodeError(f"missing attribute '{name}'")
    if type_tag not in attr:
        raise DecodeError(f"attribute '{name}' must be {type_tag}, got {sorted(attr)}")
    return attr[type_tag]


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"attribute '{name}' is not an integer: {raw!r}") from e
