"""
Shared fixtures for unit tests.
"""

from __future__ import annotations

import os
import types
import uuid
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

# Set before any test module imports hello_world.app, which reads the
# environment and runs the cold-start sequence at import time.
os.environ.setdefault("COLD_START_LOGGING", "false")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "hello-world-test")


@pytest.fixture(scope="session", autouse=True)
def _env_vars():
    """
    Ensures a deterministic environment for every test run.
    Overwrite *only* the variables needed by the handler.
    """
    original = os.environ.copy()
    os.environ.setdefault("POWERTOOLS_LOG_LEVEL", "INFO")
    yield
    os.environ.clear()
    os.environ.update(original)


@pytest.fixture
def client_error():
    """Factory for the botocore error boto3 raises for a failed API call."""

    def _make(code: str, operation: str, message: str = "boom") -> ClientError:
        return ClientError({"Error": {"Code": code, "Message": message}}, operation)

    return _make


@pytest.fixture
def mock_boto_logs_client() -> MagicMock:
    """A boto3 'logs' client stand-in where nothing exists yet."""
    client = MagicMock()
    client.describe_log_groups.return_value = {"logGroups": []}
    client.describe_log_streams.return_value = {"logStreams": []}
    client.put_log_events.return_value = {"nextSequenceToken": "token-1"}
    return client


@pytest.fixture
def template_dir(tmp_path):
    """A template directory with a small template and matching parameters."""
    directory = tmp_path / "templates"
    directory.mkdir()
    (directory / "log.template").write_text(
        "{{ AppName }} {{ Version }} ({{ Env }}) first={{ Items[0] }} n={{ Items | length }}"
    )
    (directory / "log.parameters").write_text(
        "appName: modamodApp\n"
        "version: 1.0.1.0\n"
        "appFullName: My Awesome App\n"
        "client: modamod\n"
        "env: dev\n"
    )
    return directory


@pytest.fixture
def lambda_context():
    """A *very* small stand-in for the LambdaContext object."""
    return types.SimpleNamespace(
        function_name="hello-world",
        function_version="$LATEST",
        memory_limit_in_mb=128,
        aws_request_id="req-" + uuid.uuid4().hex,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:hello-world",
        tenant_id=None,
        get_remaining_time_in_millis=lambda: 3000,
    )


@pytest.fixture
def apigw_event() -> dict:
    """A minimal API Gateway proxy request for GET /hello."""
    return {
        "resource": "/hello",
        "path": "/hello",
        "httpMethod": "GET",
        "headers": {"Accept": "*/*"},
        "queryStringParameters": None,
        "pathParameters": None,
        "requestContext": {
            "requestId": str(uuid.uuid4()),
            "stage": "Prod",
            "identity": {"sourceIp": "203.0.113.7"},
        },
        "body": None,
        "isBase64Encoded": False,
    }
