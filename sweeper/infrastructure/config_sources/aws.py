"""AWS configuration source: SSM Parameter Store with Secrets Manager dereferencing.

Every parameter under the path prefix becomes a top-level key (prefix
stripped). DatabaseSecrets and RedisSecrets hold secret ARNs whose JSON
SecretString becomes the database / redis section.
"""

from __future__ import annotations

import json
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from sweeper.core.constants import DEFAULT_AWS_REGION
from sweeper.domain.exceptions import ConfigurationException

# Parameter name -> config section loaded from Secrets Manager
SECRET_PARAMETERS = {
    "DatabaseSecrets": "database",
    "RedisSecrets": "redis",
}
INTEGER_PARAMETERS = frozenset({"port"})
BOOLEAN_PARAMETERS = frozenset(
    {"botCustomFunctionsEnabled", "logAuditEvents", "registerEnabled"}
)


def parse_aws_path(path: str) -> tuple[str, str]:
    """Split '[region:]ssm-path' into (region, ssm-path)."""
    if ":" in path:
        region, _, ssm_path = path.partition(":")
        return region, ssm_path
    return DEFAULT_AWS_REGION, path


def load_aws_secret(client: Any, secret_id: str) -> dict[str, Any] | None:
    """Return the secret's JSON SecretString as a dict (None if the secret has no string)."""
    result = client.get_secret_value(SecretId=secret_id)
    secret_string = result.get("SecretString")
    if not secret_string:
        return None
    return json.loads(secret_string)


def load_aws_config(
    path: str,
    *,
    ssm_client: Any | None = None,
    secrets_client: Any | None = None,
) -> dict[str, Any]:
    """Load config from SSM parameters under path (decrypted, all pages).

    Args:
        path: '[region:]/ssm/path/prefix/'.
        ssm_client: Optional boto3 SSM client for DI/testing.
        secrets_client: Optional boto3 Secrets Manager client for DI/testing.

    Raises:
        ConfigurationException: On any AWS error or malformed secret.
    """
    region, ssm_path = parse_aws_path(path)
    if not ssm_path:
        raise ConfigurationException("aws: locator requires an SSM path", field="locator")
    ssm = ssm_client or boto3.client("ssm", region_name=region)
    secrets = secrets_client or boto3.client("secretsmanager", region_name=region)

    config: dict[str, Any] = {}
    try:
        paginator = ssm.get_paginator("get_parameters_by_path")
        for page in paginator.paginate(Path=ssm_path, WithDecryption=True):
            for param in page.get("Parameters", []):
                key = param["Name"].replace(ssm_path, "", 1)
                value = param["Value"]
                if key in SECRET_PARAMETERS:
                    config[SECRET_PARAMETERS[key]] = load_aws_secret(secrets, value)
                elif key in INTEGER_PARAMETERS:
                    config[key] = int(value)
                elif key in BOOLEAN_PARAMETERS:
                    config[key] = value == "true"
                else:
                    config[key] = value
    except (BotoCoreError, ClientError) as e:
        raise ConfigurationException(f"Failed to load AWS config from {ssm_path}: {e}") from e
    except (ValueError, KeyError) as e:
        raise ConfigurationException(f"Malformed AWS config under {ssm_path}: {e}") from e
    return config
