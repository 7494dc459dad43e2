"""
Schema management: create and destroy the commit store tables.

These are out-of-band provisioning calls, run before the store is used and
after it is retired. Creation is not idempotent against concurrent creators.
"""

import logging
from typing import Any, Dict

from ..config import BILLING_PROVISIONED, CommitStoreConfig
from ..core.codec import ACTIVE, AGGREGATE_ID, COMMIT_ID, VERSION
from .client import RESOURCE_NOT_FOUND, STORAGE_ERRORS, error_code, translate_error
from .sequence import CounterSequence, TimestampSequence

logger = logging.getLogger(__name__)


class SchemaManager:
    """
    Creates and drops the commit table, its global commit index and, under
    the counter strategy, the counter table.
    """

    def __init__(self, client: Any, config: CommitStoreConfig) -> None:
        self.client = client
        self.config = config

    @property
    def commit_id_type(self) -> str:
        if self.config.uses_counter:
            return CounterSequence.attribute_type
        return TimestampSequence.attribute_type

    def _throughput(self) -> Dict[str, int]:
        return {
            "ReadCapacityUnits": self.config.read_capacity,
            "WriteCapacityUnits": self.config.write_capacity,
        }

    def _billing(self) -> Dict[str, Any]:
        if self.config.billing_mode == BILLING_PROVISIONED:
            return {"ProvisionedThroughput": self._throughput()}
        return {"BillingMode": self.config.billing_mode}

    def commit_table_definition(self) -> Dict[str, Any]:
        index: Dict[str, Any] = {
            "IndexName": self.config.commit_index,
            "KeySchema": [
                {"AttributeName": ACTIVE, "KeyType": "HASH"},
                {"AttributeName": COMMIT_ID, "KeyType": "RANGE"},
            ],
            "Projection": {"ProjectionType": "ALL"},
        }
        if self.config.billing_mode == BILLING_PROVISIONED:
            index["ProvisionedThroughput"] = self._throughput()

        return {
            "TableName": self.config.commit_table,
            "AttributeDefinitions": [
                {"AttributeName": AGGREGATE_ID, "AttributeType": "S"},
                {"AttributeName": COMMIT_ID, "AttributeType": self.commit_id_type},
                {"AttributeName": ACTIVE, "AttributeType": "S"},
                {"AttributeName": VERSION, "AttributeType": "N"},
            ],
            "KeySchema": [
                {"AttributeName": AGGREGATE_ID, "KeyType": "HASH"},
                {"AttributeName": VERSION, "KeyType": "RANGE"},
            ],
            "GlobalSecondaryIndexes": [index],
            **self._billing(),
        }

    def counter_table_definition(self) -> Dict[str, Any]:
        return {
            "TableName": self.config.counter_table,
            "AttributeDefinitions": [{"AttributeName": "name", "AttributeType": "S"}],
            "KeySchema": [{"AttributeName": "name", "KeyType": "HASH"}],
            **self._billing(),
        }

    def create_commit_table(self, wait: bool = True) -> None:
        self._create(self.commit_table_definition(), wait)

    def create_counter_table(self, wait: bool = True) -> None:
        self._create(self.counter_table_definition(), wait)

    def delete_commit_table(self, wait: bool = True, missing_ok: bool = False) -> None:
        self._delete(self.config.commit_table, wait, missing_ok)

    def delete_counter_table(self, wait: bool = True, missing_ok: bool = False) -> None:
        self._delete(self.config.counter_table, wait, missing_ok)

    def create_schema(self, wait: bool = True) -> None:
        """
        Create every table the configured strategy needs.

        Args:
            wait: Block until tables are ACTIVE

        Raises:
            StorageFault: If a table already exists or creation fails
        """
        self.create_commit_table(wait)
        if self.config.uses_counter:
            self.create_counter_table(wait)

    def drop_schema(self, wait: bool = True, missing_ok: bool = False) -> None:
        """
        Delete every table the configured strategy uses.

        Args:
            wait: Block until tables are gone
            missing_ok: Ignore tables that do not exist
        """
        self.delete_commit_table(wait, missing_ok)
        if self.config.uses_counter:
            self.delete_counter_table(wait, missing_ok)

    def schema_exists(self) -> bool:
        """True if every table the configured strategy needs exists."""
        tables = [self.config.commit_table]
        if self.config.uses_counter:
            tables.append(self.config.counter_table)
        for table in tables:
            try:
                self.client.describe_table(TableName=table)
            except STORAGE_ERRORS as e:
                if error_code(e) == RESOURCE_NOT_FOUND:
                    return False
                raise translate_error(e, f"DescribeTable on {table}") from e
        return True

    def _create(self, definition: Dict[str, Any], wait: bool) -> None:
        table = definition["TableName"]
        try:
            self.client.create_table(**definition)
            if wait:
                self.client.get_waiter("table_exists").wait(TableName=table)
        except STORAGE_ERRORS as e:
            raise translate_error(e, f"CreateTable {table}") from e
        logger.info(f"Created table {table}")

    def _delete(self, table: str, wait: bool, missing_ok: bool) -> None:
        try:
            self.client.delete_table(TableName=table)
            if wait:
                self.client.get_waiter("table_not_exists").wait(TableName=table)
        except STORAGE_ERRORS as e:
            if missing_ok and error_code(e) == RESOURCE_NOT_FOUND:
                return
            raise translate_error(e, f"DeleteTable {table}") from e
        logger.info(f"Deleted table {table}")
