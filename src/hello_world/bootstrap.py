# src/hello_world/bootstrap.py

"""
The one-off cold-start sequence.

Runs once per execution environment, before the handler serves its first
request: load the template parameters, render the log message, make sure the
log group and stream exist, then publish the message. Every failure is fatal
and propagates to the caller; nothing already provisioned is rolled back.
"""

import logging
import random

from .clients import CloudWatchLogsClient
from .config import AppConfig
from .templating import context_from_file, generate_log

logger = logging.getLogger(__name__)


def run_cold_start(
    config: AppConfig,
    logs_client: CloudWatchLogsClient,
    rng: random.Random | None = None,
) -> dict:
    """Returns the PutLogEvents response for the published message."""
    context = context_from_file(config.parameters_file)
    message = generate_log(
        config.template_name,
        context,
        rng=rng,
        template_dir=config.template_dir,
        item_count=config.template_item_count,
    )

    group_existed = logs_client.ensure_log_group(config.log_group_name)
    stream_existed = logs_client.ensure_log_stream(
        config.log_group_name, config.log_stream_name
    )
    logger.info(
        "Log destination ready",
        extra={
            "log_group": config.log_group_name,
            "log_stream": config.log_stream_name,
            "group_existed": group_existed,
            "stream_existed": stream_existed,
        },
    )

    return logs_client.put_log_event(
        config.log_group_name, config.log_stream_name, message
    )
