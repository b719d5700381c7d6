# src/hello_world/clients.py

"""
Client wrappers for the two external services this function talks to:
CloudWatch Logs (through boto3) and the checkip HTTP endpoint (through
requests).

The wrappers translate library exceptions into the typed errors in
`exceptions.py` so the callers never have to inspect botocore error codes.
"""

import logging
import time
from typing import TYPE_CHECKING, Any

import pydantic
import requests
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import (
    CreateError,
    DescribeError,
    EmptyBodyError,
    PutEventError,
    TransportError,
    UnexpectedStatusError,
)
from .schemas import LogEvent

if TYPE_CHECKING:
    from mypy_boto3_logs.client import CloudWatchLogsClient as LogsClientType

logger = logging.getLogger(__name__)

ALREADY_EXISTS = "ResourceAlreadyExistsException"


def _aws_error_context(e: Exception) -> dict[str, Any]:
    if isinstance(e, ClientError):
        return {
            "aws_error_code": e.response["Error"]["Code"],
            "aws_error_message": e.response["Error"]["Message"],
        }
    return {"aws_error_message": str(e)}


class CloudWatchLogsClient:
    """
    A wrapper for the CloudWatch Logs calls made during cold start:
    idempotent group/stream provisioning and single-event publishing.
    """

    def __init__(self, logs_client: "LogsClientType"):
        """
        Initializes the CloudWatchLogsClient.

        Args:
            logs_client: A boto3 "logs" client.
        """
        self._client = logs_client

    def log_group_exists(self, log_group: str) -> bool:
        """Returns True if a log group with exactly this name is listed."""
        try:
            response = self._client.describe_log_groups(logGroupNamePrefix=log_group)
        except (ClientError, BotoCoreError) as e:
            raise DescribeError(
                "group", log_group, context=_aws_error_context(e)
            ) from e
        return any(
            group.get("logGroupName") == log_group
            for group in response.get("logGroups", [])
        )

    def log_stream_exists(self, log_group: str, log_stream: str) -> bool:
        """Returns True if the group holds a stream with exactly this name."""
        try:
            response = self._client.describe_log_streams(
                logGroupName=log_group, logStreamNamePrefix=log_stream
            )
        except (ClientError, BotoCoreError) as e:
            raise DescribeError(
                "stream",
                log_stream,
                context={"log_group": log_group, **_aws_error_context(e)},
            ) from e
        return any(
            stream.get("logStreamName") == log_stream
            for stream in response.get("logStreams", [])
        )

    def ensure_log_group(self, log_group: str) -> bool:
        """
        Makes sure the log group exists.

        Returns True if it already existed, False if it was absent and a
        create call was issued. A concurrent creator winning the race is not
        an error.
        """
        if self.log_group_exists(log_group):
            logger.debug("Log group already exists", extra={"log_group": log_group})
            return True

        logger.info("Creating log group", extra={"log_group": log_group})
        try:
            self._client.create_log_group(logGroupName=log_group)
        except ClientError as e:
            if e.response["Error"]["Code"] != ALREADY_EXISTS:
                raise CreateError(
                    "group", log_group, context=_aws_error_context(e)
                ) from e
            logger.info(
                "Log group was created concurrently", extra={"log_group": log_group}
            )
        except BotoCoreError as e:
            raise CreateError("group", log_group, context=_aws_error_context(e)) from e
        return False

    def ensure_log_stream(self, log_group: str, log_stream: str) -> bool:
        """Same contract as ensure_log_group, for a stream inside log_group."""
        if self.log_stream_exists(log_group, log_stream):
            logger.debug(
                "Log stream already exists",
                extra={"log_group": log_group, "log_stream": log_stream},
            )
            return True

        logger.info(
            "Creating log stream",
            extra={"log_group": log_group, "log_stream": log_stream},
        )
        try:
            self._client.create_log_stream(
                logGroupName=log_group, logStreamName=log_stream
            )
        except ClientError as e:
            if e.response["Error"]["Code"] != ALREADY_EXISTS:
                raise CreateError(
                    "stream",
                    log_stream,
                    context={"log_group": log_group, **_aws_error_context(e)},
                ) from e
            logger.info(
                "Log stream was created concurrently",
                extra={"log_group": log_group, "log_stream": log_stream},
            )
        except BotoCoreError as e:
            raise CreateError(
                "stream",
                log_stream,
                context={"log_group": log_group, **_aws_error_context(e)},
            ) from e
        return False

    def put_log_event(self, log_group: str, log_stream: str, message: str) -> dict:
        """
        Publishes `message` as a single event stamped with the current time.
        Returns the raw PutLogEvents response.
        """
        try:
            event = LogEvent(message=message, timestamp=int(time.time() * 1000))
        except pydantic.ValidationError as e:
            raise PutEventError(
                log_group,
                log_stream,
                context={"validation_errors": e.errors(include_url=False)},
            ) from e

        try:
            response = self._client.put_log_events(
                logGroupName=log_group,
                logStreamName=log_stream,
                logEvents=[event.to_input_event()],
            )
        except (ClientError, BotoCoreError) as e:
            raise PutEventError(
                log_group, log_stream, context=_aws_error_context(e)
            ) from e

        rejected = response.get("rejectedLogEventsInfo")
        if rejected:
            logger.warning(
                "CloudWatch rejected the log event",
                extra={"log_group": log_group, "rejected": rejected},
            )
        logger.debug(
            "Log event published",
            extra={
                "log_group": log_group,
                "log_stream": log_stream,
                "timestamp": event.timestamp,
            },
        )
        return response


class CheckIpClient:
    """Looks up the caller's public IP from a checkip-style endpoint."""

    def __init__(self, url: str, session: requests.Session | None = None):
        self._url = url
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self._url

    def get_public_ip(self) -> str:
        """
        Returns the response body of a GET to the endpoint, verbatim.
        No timeout is set; the Lambda invocation timeout bounds the call.
        """
        try:
            response = self._session.get(self._url)
        except requests.RequestException as e:
            raise TransportError(self._url, str(e)) from e

        if response.status_code != 200:
            raise UnexpectedStatusError(self._url, response.status_code)

        body = response.text
        if not body:
            raise EmptyBodyError(self._url)
        return body
