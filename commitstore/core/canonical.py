"""
Canonical JSON serialization for the events blob.

Commits store their events as a single JSON string. Serializing through these
functions keeps the stored text identical for equal event values.
"""

import json
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested dict/list to canonical form.

    Rules:
    - dict keys sorted alphabetically
    - tuples converted to lists
    - recursive normalization
    """
    if isinstance(obj, dict):
        return {k: canonicalize(obj[k]) for k in sorted(obj.keys())}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def canonical_json_str(obj: Any) -> str:
    """
    Deterministic JSON string.

    Guarantees:
    - sort_keys=True
    - separators remove whitespace
    - ensure_ascii=False keeps UTF-8 text as-is
    - NaN and Infinity are rejected (not valid JSON)

    Raises:
        TypeError: If obj contains values JSON cannot represent
        ValueError: If obj contains NaN or Infinity
    """
    canon = canonicalize(obj)
    return json.dumps(
        canon,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
