import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PACKAGED_TEMPLATE_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration loaded from environment variables."""

    # --- Service ---
    service_name: str
    log_level: str
    aws_region: str

    # --- CloudWatch Logs target ---
    log_group_name: str
    log_stream_name: str

    # --- Log message rendering ---
    parameters_file: str
    template_dir: str
    template_name: str
    template_item_count: int

    # --- HTTP handler ---
    checkip_url: str

    cold_start_logging: bool

    @classmethod
    def load_from_env(cls) -> "AppConfig":
        """
        Loads configuration from environment variables, performing validation and type casting.
        Every variable has a default; fails fast with a ConfigurationError if a value is invalid.
        """
        try:
            service_name = os.getenv("SERVICE_NAME", "hello-world")
            aws_region = os.getenv("AWS_REGION", "us-east-1")

            log_group_name = os.getenv("LOG_GROUP_NAME", "/lambda/test/log-group")
            if not log_group_name.strip():
                raise ValueError("LOG_GROUP_NAME must not be empty.")

            log_stream_name = os.getenv(
                "LOG_STREAM_NAME", "/lambda/test/log-group-stream"
            )
            if not log_stream_name.strip():
                raise ValueError("LOG_STREAM_NAME must not be empty.")

            template_dir = os.getenv("TEMPLATE_DIR", str(PACKAGED_TEMPLATE_DIR))
            parameters_file = os.getenv(
                "PARAMETERS_FILE", str(PACKAGED_TEMPLATE_DIR / "log.parameters")
            )
            template_name = os.getenv("TEMPLATE_NAME", "log.template")
            if not template_name.strip():
                raise ValueError("TEMPLATE_NAME must not be empty.")

            template_item_count = int(os.getenv("TEMPLATE_ITEM_COUNT", "9000"))
            if template_item_count <= 0:
                raise ValueError("TEMPLATE_ITEM_COUNT must be a positive integer.")

            checkip_url = os.getenv("CHECKIP_URL", "https://checkip.amazonaws.com")
            if not checkip_url.startswith(("http://", "https://")):
                raise ValueError(
                    f"CHECKIP_URL must be an http(s) URL, not '{checkip_url}'"
                )

            # --- Handle special-case variables like log level ---
            log_level = os.getenv("LOG_LEVEL", "INFO").upper()
            allowed_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
            if log_level not in allowed_log_levels:
                raise ValueError(
                    f"LOG_LEVEL must be one of {allowed_log_levels}, not '{log_level}'"
                )

            cold_start_logging = os.getenv("COLD_START_LOGGING", "true").lower() in (
                "true",
                "1",
                "yes",
                "on",
            )

        except (ValueError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid value for an environment variable: {e}"
            ) from e

        return cls(
            service_name=service_name,
            log_level=log_level,
            aws_region=aws_region,
            log_group_name=log_group_name,
            log_stream_name=log_stream_name,
            parameters_file=parameters_file,
            template_dir=template_dir,
            template_name=template_name,
            template_item_count=template_item_count,
            checkip_url=checkip_url,
            cold_start_logging=cold_start_logging,
        )


# --- Singleton Factory Function (Lazy-loaded and Cached) ---
@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """
    Loads the application configuration from environment variables.
    The result is cached using lru_cache, so the environment is only read once
    on the first call. This avoids import-time side effects.
    """
    logger.info("Loading application configuration from environment...")
    return AppConfig.load_from_env()
