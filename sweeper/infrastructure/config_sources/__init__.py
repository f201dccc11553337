"""Configuration sources: resolve a config locator into Settings.

A locator is "<type>:<path>":
    file:<path>                  JSON file (relative to the working directory)
    aws:[<region>:]<ssm-path>    SSM Parameter Store prefix (+ Secrets Manager)
    env:                         environment / .env only
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from sweeper.core.config import Settings
from sweeper.domain.exceptions import ConfigurationException
from sweeper.infrastructure.config_sources.aws import load_aws_config
from sweeper.infrastructure.config_sources.file import load_file_config
from sweeper.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def split_once(value: str, delimiter: str) -> tuple[str, str]:
    """Split on the first delimiter; ("value", "") when it is absent."""
    head, sep, tail = value.partition(delimiter)
    if not sep:
        return value, ""
    return head, tail


def load_settings(locator: str) -> Settings:
    """Load and validate settings from a config locator.

    Args:
        locator: e.g. 'file:sweeper.config.json' or 'aws:us-west-2:/medplum/prod/'.

    Returns:
        Frozen Settings.

    Raises:
        ConfigurationException: Unknown locator type, unreadable source, or
            values that fail validation.
    """
    config_type, path = split_once(locator, ":")
    data: dict[str, Any]
    if config_type == "file":
        data = load_file_config(path)
    elif config_type == "aws":
        data = load_aws_config(path)
    elif config_type == "env":
        data = {}
    else:
        raise ConfigurationException(
            f"Unrecognized config type: {config_type}", field="locator"
        )
    try:
        settings = Settings(**data)
    except ValidationError as e:
        raise ConfigurationException(f"Invalid configuration from {config_type!r}: {e}") from e
    logger.debug("Loaded settings from %s source", config_type)
    return settings


__all__ = ["load_settings", "split_once"]
