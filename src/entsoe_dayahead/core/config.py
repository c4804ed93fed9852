"""Configuration loading, validation, and access."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from entsoe_dayahead.core.exceptions import ConfigError

DEFAULT_BASE_URL = "https://web-api.tp.entsoe.eu/api"

ENV_PREFIX = "ENTSOE_DAYAHEAD_ENTSOE__"
CONFIG_PATH_ENV = "ENTSOE_DAYAHEAD_CONFIG"
DEFAULT_CONFIG_FILE = "entsoe-dayahead.yml"


class EntsoeConfig(BaseModel):
    """ENTSO-E transparency platform access configuration."""

    model_config = ConfigDict(frozen=True)

    security_token: str = Field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 30.0

    @field_validator("security_token", mode="before")
    @classmethod
    def token_as_string(cls, v: object) -> object:
        """YAML may hand over an all-digit token as an int."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("security_token")
    @classmethod
    def token_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("security_token must not be empty")
        return v

    @field_validator("base_url")
    @classmethod
    def base_url_must_be_http(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError("base_url must be an http(s) URL")
        return v

    @field_validator("request_timeout")
    @classmethod
    def timeout_within_bounds(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError("request_timeout must be > 0 and <= 120 seconds")
        return v


class DayAheadConfig(BaseModel):
    """Root configuration for entsoe-dayahead."""

    model_config = ConfigDict(frozen=True)

    entsoe: EntsoeConfig


def load_config(config_path: str | None = None) -> DayAheadConfig:
    """Build the configuration from the environment, a YAML file and defaults.

    Each field of the ``entsoe`` section may be overridden by an environment
    variable named after it, e.g. ENTSOE_DAYAHEAD_ENTSOE__REQUEST_TIMEOUT=10.
    Environment values are handed to pydantic as strings, so the token is
    never reinterpreted as a number.

    Raises:
        ConfigError: If the file cannot be read or a field is invalid.
    """
    path = find_config_file(config_path)
    section = _read_entsoe_section(path) if path is not None else {}

    for name in EntsoeConfig.model_fields:
        value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            section[name] = value

    try:
        return DayAheadConfig(entsoe=section)
    except ValidationError as e:
        raise _config_error(e) from e


def find_config_file(explicit: str | None = None) -> Path | None:
    """The YAML file to read: explicit path, $ENTSOE_DAYAHEAD_CONFIG, or ./entsoe-dayahead.yml."""
    for source, candidate in (
        ("config_path", explicit),
        (CONFIG_PATH_ENV, os.environ.get(CONFIG_PATH_ENV)),
    ):
        if candidate:
            path = Path(candidate)
            if not path.is_file():
                raise ConfigError(
                    f"Config file not found: {candidate}",
                    context={"field": source, "value": candidate},
                )
            return path

    default = Path(DEFAULT_CONFIG_FILE)
    return default if default.is_file() else None


def _read_entsoe_section(path: Path) -> dict:
    """Return a copy of the file's ``entsoe`` mapping (empty if absent)."""
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(
            f"Failed to parse YAML config: {e}",
            context={"field": "config_file", "value": str(path)},
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"YAML config must be a mapping, got {type(data).__name__}",
            context={"field": "config_file", "value": str(path)},
        )

    section = data.get("entsoe") or {}
    if not isinstance(section, dict):
        raise ConfigError(
            "the 'entsoe' section must be a mapping",
            context={"field": "entsoe", "value": str(path)},
        )
    return dict(section)


def _config_error(exc: ValidationError) -> ConfigError:
    # Messages are built from pydantic's per-field text; the raw input is
    # left out so a rejected token never ends up in the error.
    errors = exc.errors()
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in errors
    )
    first = errors[0]
    field = ".".join(str(p) for p in first["loc"])
    value = None
    if first["type"] != "missing" and not field.endswith("security_token"):
        value = first.get("input")
    return ConfigError(
        f"Invalid configuration: {details}",
        context={"field": field, "value": value},
    )
