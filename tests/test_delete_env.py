# tests/test_delete_env.py
"""Unit tests for the delete-env Lambda handler."""
import importlib
import importlib.util
import json
import os
from unittest.mock import patch, MagicMock

import pytest
from botocore.exceptions import ClientError

from env_registry import EnvironmentRegistry, InMemoryEnvironmentStore

_delete_dir = os.path.join(os.path.dirname(__file__), "..", "app", "lambdas", "delete_env")

mock_table = MagicMock()
mock_ddb_resource = MagicMock()
mock_ddb_resource.Table.return_value = mock_table

with patch.dict(os.environ, {"TABLE_NAME": "test-environments"}):
    with patch("boto3.resource", return_value=mock_ddb_resource):
        spec = importlib.util.spec_from_file_location("delete_env_handler", os.path.join(_delete_dir, "handler.py"))
        delete_env = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(delete_env)


@pytest.fixture(autouse=True)
def _reset_table():
    mock_table.reset_mock(return_value=True, side_effect=True)
    yield


def _make_event(env_name=None):
    return {
        "version": "2.0",
        "routeKey": "DELETE /environments/{envName}",
        "requestContext": {"http": {"method": "DELETE"}},
        "pathParameters": {"envName": env_name} if env_name else None,
    }


class TestLambdaHandler:
    def test_delete_environment(self):
        result = delete_env.lambda_handler(_make_event("prod"), None)

        assert result["statusCode"] == 200
        assert json.loads(result["body"]) == "Deleted env prod"
        mock_table.delete_item.assert_called_once_with(Key={"envName": "prod"})

    def test_missing_env_name(self):
        result = delete_env.lambda_handler(_make_event(), None)

        assert result["statusCode"] == 400
        assert "envName" in json.loads(result["body"])
        mock_table.delete_item.assert_not_called()

    def test_storage_failure(self):
        mock_table.delete_item.side_effect = ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "Requested resource not found"}},
            "DeleteItem",
        )
        result = delete_env.lambda_handler(_make_event("prod"), None)

        assert result["statusCode"] == 400
        assert json.loads(result["body"]) == "Requested resource not found"

    def test_delete_absent_name_is_idempotent(self):
        store = InMemoryEnvironmentStore()
        with patch.object(delete_env, "registry", EnvironmentRegistry(store)):
            first = delete_env.lambda_handler(_make_event("ghost"), None)
            second = delete_env.lambda_handler(_make_event("ghost"), None)

        assert first["statusCode"] == second["statusCode"] == 200
        assert json.loads(second["body"]) == "Deleted env ghost"
        assert store.list() == []
