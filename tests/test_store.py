# tests/test_store.py
"""Tests for the DynamoDB and in-memory stores."""
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError, NoCredentialsError

from env_registry import DynamoEnvironmentStore, InMemoryEnvironmentStore, StorageError


def _client_error(code, message, op):
    return ClientError({"Error": {"Code": code, "Message": message}}, op)


class TestDynamoEnvironmentStore:
    def test_get_returns_item(self):
        table = MagicMock()
        table.get_item.return_value = {"Item": {"envName": "prod"}}
        assert DynamoEnvironmentStore(table).get("prod") == {"envName": "prod"}

    def test_get_absent(self):
        table = MagicMock()
        table.get_item.return_value = {}
        assert DynamoEnvironmentStore(table).get("prod") is None

    def test_put_and_delete_calls(self):
        table = MagicMock()
        store = DynamoEnvironmentStore(table)
        store.put({"envName": "dev", "x": 1})
        store.delete("dev")

        table.put_item.assert_called_once_with(Item={"envName": "dev", "x": 1})
        table.delete_item.assert_called_once_with(Key={"envName": "dev"})

    def test_client_error_message(self):
        table = MagicMock()
        table.delete_item.side_effect = _client_error("ThrottlingException", "slow down", "DeleteItem")

        with pytest.raises(StorageError, match="slow down"):
            DynamoEnvironmentStore(table).delete("dev")

    def test_botocore_error(self):
        table = MagicMock()
        table.scan.side_effect = NoCredentialsError()

        with pytest.raises(StorageError, match="credentials"):
            DynamoEnvironmentStore(table).list()


class TestInMemoryEnvironmentStore:
    def test_seeded_records(self):
        store = InMemoryEnvironmentStore([{"envName": "a"}, {"envName": "b"}])
        assert sorted(r["envName"] for r in store.list()) == ["a", "b"]

    def test_records_are_copied(self):
        record = {"envName": "a", "tags": ["x"]}
        store = InMemoryEnvironmentStore()
        store.put(record)
        record["tags"].append("y")
        store.get("a")["tags"].append("z")

        assert store.get("a") == {"envName": "a", "tags": ["x"]}

    def test_delete_absent(self):
        store = InMemoryEnvironmentStore()
        store.delete("missing")
        assert store.get("missing") is None


def _offline_table():
    # boto3 serializes the item before any request is signed or sent
    resource = boto3.resource(
        "dynamodb",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )
    return resource.Table("test-environments")


class TestDynamoSerialization:
    def test_float_rejected_by_serializer(self):
        with pytest.raises(StorageError, match="Float types"):
            DynamoEnvironmentStore(_offline_table()).put({"envName": "x", "v": 1.5})

    def test_integer_beyond_precision(self):
        record = {"envName": "x", "v": 12345678901234567890123456789012345678901}
        with pytest.raises(StorageError, match="precision"):
            DynamoEnvironmentStore(_offline_table()).put(record)
