"""Environment-based configuration for snowadapter."""

from __future__ import annotations

import os
from collections.abc import Mapping

from snowadapter.adapter.models import AdapterProperties, AuthCredentials

REQUIRED_VARIABLES = (
    "SERVICENOW_URL",
    "SERVICENOW_USERNAME",
    "SERVICENOW_PASSWORD",
    "SERVICENOW_TABLE",
)
DEFAULT_TIMEOUT = 30.0


class ConfigError(Exception):
    """Configuration is missing or malformed."""


def load_properties_from_env(environ: Mapping[str, str] | None = None) -> AdapterProperties:
    """Read adapter properties from SERVICENOW_* environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        AdapterProperties for the configured instance

    Raises:
        ConfigError: If a required variable is unset or the timeout is not a number
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_VARIABLES if not env.get(name)]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    raw_timeout = env.get("SERVICENOW_TIMEOUT")
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError as e:
        raise ConfigError(f"SERVICENOW_TIMEOUT must be a number, got {raw_timeout!r}") from e

    return AdapterProperties(
        url=env["SERVICENOW_URL"],
        auth=AuthCredentials(
            username=env["SERVICENOW_USERNAME"],
            password=env["SERVICENOW_PASSWORD"],
        ),
        service_now_table=env["SERVICENOW_TABLE"],
        timeout=timeout,
    )
