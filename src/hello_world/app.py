"""
The Lambda entry point for the hello-world service.

This module is responsible for:
1.  Initializing AWS Lambda Powertools (Logger, Tracer, Metrics) and the
    reusable AWS / HTTP clients.
2.  Running the cold-start sequence (see `bootstrap.py`) once, during the
    Lambda init phase. A failure there aborts the import, so the runtime
    never gets a handler for this execution environment.
3.  Serving API Gateway proxy requests with a greeting that contains the
    function's public IP.
"""

import boto3
from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from .bootstrap import run_cold_start
from .clients import CheckIpClient, CloudWatchLogsClient
from .config import get_config
from .exceptions import CheckIpError, HelloWorldError, get_error_context
from .schemas import ProxyResponse

# --- Global & Reusable Components ---
CONFIG = get_config()

logger = Logger(service=CONFIG.service_name, level=CONFIG.log_level)
tracer = Tracer(service=CONFIG.service_name)
metrics = Metrics(namespace="HelloWorld", service=CONFIG.service_name)

logs_boto_client = boto3.client("logs", region_name=CONFIG.aws_region)
logs_client = CloudWatchLogsClient(logs_client=logs_boto_client)
checkip_client = CheckIpClient(url=CONFIG.checkip_url)


def _cold_start() -> None:
    if not CONFIG.cold_start_logging:
        logger.info("Cold-start log emission disabled.")
        return
    try:
        response = run_cold_start(CONFIG, logs_client)
    except HelloWorldError as e:
        logger.exception("Cold-start setup failed.", extra=get_error_context(e))
        raise
    logger.info(
        "Cold-start log event published.",
        extra={
            "log_group": CONFIG.log_group_name,
            "log_stream": CONFIG.log_stream_name,
            "next_sequence_token": response.get("nextSequenceToken"),
        },
    )


_cold_start()


@logger.inject_lambda_context()
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def handler(event: dict, context: LambdaContext) -> ProxyResponse:
    """API Gateway proxy handler: greets the caller with the public IP."""
    try:
        ip = checkip_client.get_public_ip()
    except CheckIpError as e:
        metrics.add_metric(name="CheckIpFailures", unit=MetricUnit.Count, value=1)
        logger.error(f"Public IP lookup failed: {e}", extra=get_error_context(e))
        raise

    metrics.add_metric(name="GreetingsServed", unit=MetricUnit.Count, value=1)
    return {"statusCode": 200, "body": f"Hello, {ip}"}
