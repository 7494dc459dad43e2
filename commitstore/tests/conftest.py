"""
Shared fixtures: moto-backed DynamoDB and ready-to-use stores.
"""

import boto3
import pytest
from moto import mock_aws

from .helpers import make_store


@pytest.fixture(autouse=True)
def aws_env(monkeypatch):
    """Fake credentials so no test can reach a real AWS account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("COMMITSTORE_LOG_LEVEL", "WARNING")
    for key in (
        "COMMITSTORE_SEQUENCE",
        "COMMITSTORE_DYNAMODB_ENDPOINT",
        "COMMITSTORE_COMMIT_TABLE",
        "COMMITSTORE_BILLING_MODE",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def dynamodb():
    with mock_aws():
        yield boto3.client("dynamodb", region_name="us-east-1")


@pytest.fixture
def counter_store(dynamodb):
    return make_store(dynamodb, "counter")


@pytest.fixture
def timestamp_store(dynamodb):
    return make_store(dynamodb, "timestamp")


@pytest.fixture(params=["counter", "timestamp"])
def store(request, dynamodb):
    return make_store(dynamodb, request.param)
