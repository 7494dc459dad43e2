"""
Exception types for the commit store.

Every error carries a stable ``code`` tag so callers can branch on the kind of
failure without matching class names or storage client error names.
"""

from typing import Optional


class CommitStoreError(Exception):
    """Base class for all commit store failures."""

    code = "commit_store"


class VersionConflict(CommitStoreError):
    """
    Raised when a commit already exists at (aggregate_id, version).

    Recoverable: re-read the aggregate and retry with a fresh version.
    """

    code = "version_conflict"

    def __init__(self, aggregate_id: str, version: int) -> None:
        super().__init__(
            f"commit already exists for aggregate '{aggregate_id}' at version {version}"
        )
        self.aggregate_id = aggregate_id
        self.version = version


class ValidationError(CommitStoreError):
    """Raised when input is malformed, locally or by the storage layer."""

    code = "validation"


class DecodeError(CommitStoreError):
    """Raised when a persisted record cannot be decoded (corruption or schema drift)."""

    code = "decode"


class StorageFault(CommitStoreError):
    """
    Opaque storage-layer failure.

    The original exception is kept on ``cause`` (and chained as ``__cause__``).
    """

    code = "storage_fault"

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        error_code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.error_code = error_code


class ConfigurationError(CommitStoreError):
    """Raised when configuration values are invalid."""

    code = "configuration"
