"""
Configuration management for Netlify DDNS.

This module loads and validates configuration from environment variables
prefixed with `NETLIFY_`. Empty variables are treated as unset, so required
settings fail and optional settings fall back to their defaults.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, ValidationError, field_validator

from netlify_ddns.errors import ConfigValidationError
from netlify_ddns.logging_config import LOG_LEVELS

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Final


ENV_PREFIX: Final[str] = "NETLIFY_"

# Config field -> environment variable suffix
ENV_FIELDS: Final[dict[str, str]] = {
    "access_token": "ACCESSTOKEN",
    "zone": "ZONE",
    "record": "RECORD",
    "log_level": "LOG_LEVEL",
}


class Config(BaseModel):
    """
    Application configuration.

    Instances are immutable; build one at startup and pass it around.

    Attributes
    ----------
    access_token : str
        Netlify personal access token.
    zone : str
        DNS zone name in dotted form (e.g., "example.com").
    record : str
        Record label within the zone.
    log_level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """

    access_token: str = Field(..., min_length=1)
    zone: str = Field(..., min_length=1)
    record: str = Field(default="home", min_length=1)
    log_level: str = "INFO"

    model_config = {"frozen": True}

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        """
        Normalize and validate the log level name.

        Returns
        -------
        str
            The upper-cased level name.

        Raises
        ------
        ValueError
            If the level is not a known level name.
        """
        level = value.upper()
        if level not in LOG_LEVELS:
            msg = f"must be one of {', '.join(LOG_LEVELS)}"
            raise ValueError(msg)
        return level

    @property
    def zone_id(self) -> str:
        """Netlify zone ID: the zone name with every "." replaced by "_"."""
        return self.zone.replace(".", "_")

    @property
    def record_hostname(self) -> str:
        """Fully qualified hostname of the managed record."""
        return f"{self.record}.{self.zone}"


def _format_validation_errors(error: ValidationError) -> str:
    """
    Format Pydantic validation errors into human-readable messages.

    Fields are reported by their environment variable name.

    Parameters
    ----------
    error : ValidationError
        Pydantic validation error.

    Returns
    -------
    str
        Human-readable error message.
    """
    lines: list[str] = ["Configuration error:"]

    for err in error.errors():
        field = str(err["loc"][0]) if err["loc"] else ""
        env_name = ENV_PREFIX + ENV_FIELDS.get(field, field.upper())

        if err["type"] == "missing":
            lines.append(f"  [{env_name}]: Required variable is missing or empty.")
        else:
            lines.append(f"  [{env_name}]: {err['msg']}.")

    return "\n".join(lines)


def read_environ(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Collect configuration values from environment variables.

    Parameters
    ----------
    environ : Mapping[str, str] | None, optional
        Environment mapping. If None, uses os.environ.

    Returns
    -------
    dict[str, str]
        Non-empty values keyed by config field name.
    """
    if environ is None:
        environ = os.environ

    data: dict[str, str] = {}
    for field, suffix in ENV_FIELDS.items():
        value = environ.get(ENV_PREFIX + suffix, "")
        if value:
            data[field] = value
    return data


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """
    Load configuration from environment variables.

    Parameters
    ----------
    environ : Mapping[str, str] | None, optional
        Environment mapping. If None, uses os.environ.

    Returns
    -------
    Config
        Loaded configuration.

    Raises
    ------
    ConfigValidationError
        If a required variable is missing or a value is invalid.
    """
    try:
        return Config.model_validate(read_environ(environ))
    except ValidationError as e:
        raise ConfigValidationError(_format_validation_errors(e)) from e
