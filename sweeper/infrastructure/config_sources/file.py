"""JSON file configuration source."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from sweeper.domain.exceptions import ConfigurationException


def load_file_config(path: str) -> dict[str, Any]:
    """Read a JSON config file (path relative to the working directory).

    Raises:
        ConfigurationException: Missing path, unreadable file, invalid JSON,
            or a top-level value that is not an object.
    """
    if not path:
        raise ConfigurationException("file: locator requires a path", field="locator")
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationException(f"Cannot read config file {file_path}: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationException(f"Invalid JSON in config file {file_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationException(f"Config file {file_path} must contain a JSON object")
    return data
