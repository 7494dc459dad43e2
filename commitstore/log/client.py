"""
DynamoDB client construction and error classification.

botocore error codes are mapped to the commit store taxonomy here and nowhere
else, so the rest of the package never inspects client error names.
"""

from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import CommitStoreConfig
from ..core.errors import CommitStoreError, StorageFault, ValidationError

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"
VALIDATION_EXCEPTION = "ValidationException"
RESOURCE_NOT_FOUND = "ResourceNotFoundException"

# Errors the substrate can raise from any call.
STORAGE_ERRORS = (BotoCoreError, ClientError)


def make_client(config: CommitStoreConfig) -> Any:
    """
    Create a low-level DynamoDB client.

    Credentials come from the environment (AWS_ACCESS_KEY_ID,
    AWS_SECRET_ACCESS_KEY, profiles, instance roles).

    Raises:
        StorageFault: If the client cannot be created
    """
    try:
        return boto3.client(
            "dynamodb",
            endpoint_url=config.endpoint_url,
            region_name=config.region,
        )
    except BotoCoreError as e:
        raise StorageFault(f"Failed to create DynamoDB client: {e}", cause=e) from e


def error_code(error: BaseException) -> Optional[str]:
    """AWS error code of a ClientError, None for anything else."""
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return None


def translate_error(error: BaseException, operation: str) -> CommitStoreError:
    """
    Map a substrate exception to the commit store taxonomy.

    Conditional check failures are not handled here: only the writer knows
    which (aggregate_id, version) conflicted.

    Args:
        error: Exception raised by the DynamoDB client
        operation: Short description used in the message

    Returns:
        ValidationError for malformed input, StorageFault otherwise
    """
    code = error_code(error)
    if code == VALIDATION_EXCEPTION:
        return ValidationError(f"{operation} rejected by DynamoDB: {error}")
    return StorageFault(f"{operation} failed: {error}", cause=error, error_code=code)
