"""
Commit store configuration.

Environment Variables:
    COMMITSTORE_COMMIT_TABLE: Commit table name - default: commits
    COMMITSTORE_COMMIT_INDEX: Global commit index name - default: byCommitId
    COMMITSTORE_COUNTER_TABLE: Counter table name (counter strategy) - default: counters
    COMMITSTORE_COUNTER_NAME: Counter row key - default: commits
    COMMITSTORE_SEQUENCE: Commit id strategy (counter, timestamp) - default: counter
    COMMITSTORE_DYNAMODB_ENDPOINT: DynamoDB endpoint URL (DynamoDB Local, localstack)
    COMMITSTORE_REGION: AWS region - default: us-east-1
    COMMITSTORE_BILLING_MODE: PROVISIONED or PAY_PER_REQUEST - default: PROVISIONED
    COMMITSTORE_READ_CAPACITY: Provisioned read capacity - default: 15
    COMMITSTORE_WRITE_CAPACITY: Provisioned write capacity - default: 15

Sequence strategies:
    counter    Atomic counter row. Strictly increasing ids across all writers,
               at the cost of an extra round trip and a single contended row.
    timestamp  Derived from the clock and the aggregate. One write per append,
               but ordering is only monotonic within one process. Ids sharing a
               millisecond sort by version, then by aggregate id: within one
               aggregate that is append order, across aggregates and writers it
               is arbitrary, not causal.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .core.errors import ConfigurationError

SEQUENCE_COUNTER = "counter"
SEQUENCE_TIMESTAMP = "timestamp"
SEQUENCES = (SEQUENCE_COUNTER, SEQUENCE_TIMESTAMP)

BILLING_PROVISIONED = "PROVISIONED"
BILLING_PAY_PER_REQUEST = "PAY_PER_REQUEST"
BILLING_MODES = (BILLING_PROVISIONED, BILLING_PAY_PER_REQUEST)


@dataclass(frozen=True)
class CommitStoreConfig:
    commit_table: str = "commits"
    commit_index: str = "byCommitId"
    counter_table: str = "counters"
    counter_name: str = "commits"
    sequence: str = SEQUENCE_COUNTER
    endpoint_url: Optional[str] = None
    region: str = "us-east-1"
    billing_mode: str = BILLING_PROVISIONED
    read_capacity: int = 15
    write_capacity: int = 15

    def __post_init__(self) -> None:
        if self.sequence not in SEQUENCES:
            raise ConfigurationError(
                f"unsupported sequence strategy: {self.sequence!r} (expected one of {SEQUENCES})"
            )
        if self.billing_mode not in BILLING_MODES:
            raise ConfigurationError(
                f"unsupported billing mode: {self.billing_mode!r} (expected one of {BILLING_MODES})"
            )
        for name in ("read_capacity", "write_capacity"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        for name in ("commit_table", "commit_index", "counter_table", "counter_name"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} must not be empty")

    @property
    def uses_counter(self) -> bool:
        return self.sequence == SEQUENCE_COUNTER

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CommitStoreConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Raises:
            ConfigurationError: If a value is invalid
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            commit_table=env.get("COMMITSTORE_COMMIT_TABLE", defaults.commit_table),
            commit_index=env.get("COMMITSTORE_COMMIT_INDEX", defaults.commit_index),
            counter_table=env.get("COMMITSTORE_COUNTER_TABLE", defaults.counter_table),
            counter_name=env.get("COMMITSTORE_COUNTER_NAME", defaults.counter_name),
            sequence=env.get("COMMITSTORE_SEQUENCE", defaults.sequence).strip().lower(),
            endpoint_url=env.get("COMMITSTORE_DYNAMODB_ENDPOINT") or None,
            region=env.get("COMMITSTORE_REGION", defaults.region),
            billing_mode=env.get("COMMITSTORE_BILLING_MODE", defaults.billing_mode).strip().upper(),
            read_capacity=_env_int(env, "COMMITSTORE_READ_CAPACITY", defaults.read_capacity),
            write_capacity=_env_int(env, "COMMITSTORE_WRITE_CAPACITY", defaults.write_capacity),
        )


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    val = env.get(key)
    if not val:
        return default
    try:
        return int(val)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {val!r}") from e
