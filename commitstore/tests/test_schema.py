"""
Tests for table provisioning.
"""

import pytest

from commitstore.config import CommitStoreConfig
from commitstore.core.errors import StorageFault
from commitstore.log.schema import SchemaManager


def _describe(client, table):
    return client.describe_table(TableName=table)["Table"]


def _index_key_type(client, config):
    table = _describe(client, config.commit_table)
    types = {a["AttributeName"]: a["AttributeType"] for a in table["AttributeDefinitions"]}
    return types["commitId"]


def test_counter_strategy_creates_both_tables(dynamodb):
    config = CommitStoreConfig()

    SchemaManager(dynamodb, config).create_schema()

    assert sorted(dynamodb.list_tables()["TableNames"]) == ["commits", "counters"]
    assert _index_key_type(dynamodb, config) == "N"


def test_timestamp_strategy_creates_only_commit_table(dynamodb):
    config = CommitStoreConfig(sequence="timestamp")

    SchemaManager(dynamodb, config).create_schema()

    assert dynamodb.list_tables()["TableNames"] == ["commits"]
    assert _index_key_type(dynamodb, config) == "S"


def test_commit_table_keys_and_index(dynamodb):
    config = CommitStoreConfig()
    SchemaManager(dynamodb, config).create_schema()

    table = _describe(dynamodb, "commits")

    assert table["KeySchema"] == [
        {"AttributeName": "aggregateId", "KeyType": "HASH"},
        {"AttributeName": "version", "KeyType": "RANGE"},
    ]
    (index,) = table["GlobalSecondaryIndexes"]
    assert index["IndexName"] == "byCommitId"
    assert index["KeySchema"] == [
        {"AttributeName": "active", "KeyType": "HASH"},
        {"AttributeName": "commitId", "KeyType": "RANGE"},
    ]
    assert index["Projection"] == {"ProjectionType": "ALL"}
    assert table["ProvisionedThroughput"]["ReadCapacityUnits"] == 15


def test_custom_names_and_capacity(dynamodb):
    config = CommitStoreConfig(
        commit_table="orders",
        commit_index="ordersById",
        counter_table="order-counters",
        read_capacity=3,
        write_capacity=4,
    )

    SchemaManager(dynamodb, config).create_schema()

    table = _describe(dynamodb, "orders")
    assert table["GlobalSecondaryIndexes"][0]["IndexName"] == "ordersById"
    assert table["ProvisionedThroughput"]["ReadCapacityUnits"] == 3
    assert table["ProvisionedThroughput"]["WriteCapacityUnits"] == 4
    assert _describe(dynamodb, "order-counters")["TableName"] == "order-counters"


def test_pay_per_request_definition():
    definition = SchemaManager(None, CommitStoreConfig(billing_mode="PAY_PER_REQUEST")).commit_table_definition()

    assert definition["BillingMode"] == "PAY_PER_REQUEST"
    assert "ProvisionedThroughput" not in definition
    assert "ProvisionedThroughput" not in definition["GlobalSecondaryIndexes"][0]


def test_pay_per_request_tables(dynamodb):
    config = CommitStoreConfig(billing_mode="PAY_PER_REQUEST")

    SchemaManager(dynamodb, config).create_schema()

    assert _describe(dynamodb, "commits")["BillingModeSummary"]["BillingMode"] == "PAY_PER_REQUEST"


def test_create_twice_is_storage_fault(dynamodb):
    manager = SchemaManager(dynamodb, CommitStoreConfig())
    manager.create_schema()

    with pytest.raises(StorageFault) as exc_info:
        manager.create_schema()

    assert exc_info.value.error_code == "ResourceInUseException"


def test_schema_exists(dynamodb):
    manager = SchemaManager(dynamodb, CommitStoreConfig())
    assert not manager.schema_exists()

    manager.create_commit_table()
    assert not manager.schema_exists()  # counter table still missing

    manager.create_counter_table()
    assert manager.schema_exists()


def test_drop_schema(dynamodb):
    manager = SchemaManager(dynamodb, CommitStoreConfig())
    manager.create_schema()

    manager.drop_schema()

    assert dynamodb.list_tables()["TableNames"] == []
    assert not manager.schema_exists()


def test_drop_missing_schema(dynamodb):
    manager = SchemaManager(dynamodb, CommitStoreConfig())

    with pytest.raises(StorageFault) as exc_info:
        manager.drop_schema()
    assert exc_info.value.error_code == "ResourceNotFoundException"

    manager.drop_schema(missing_ok=True)
