"""Configuration loading: TOML file, environment variables and explicit overrides.

Priority, highest first: explicit overrides, ``TRACERATIO_*`` environment
variables, config file, model defaults.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from traceratio.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "traceratio.toml"
ENV_PREFIX = "TRACERATIO_"


class TracingConfig(BaseModel):
    """Sampling and service identity."""

    model_config = ConfigDict(extra="forbid")

    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0, description="Probability for new traces.")
    service_name: Optional[str] = Field(default=None, description="service.name resource attribute.")
    endpoint: Optional[str] = Field(default=None, description="OTLP HTTP traces endpoint.")
    api_key: Optional[str] = Field(default=None, description="Bearer token for the OTLP endpoint.")
    use_otlp: bool = Field(default=False, description="Export spans over OTLP HTTP.")


class ExportersConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enable_console: bool = False


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    debug: bool = False
    enable_span_logging: bool = False


class TraceRatioConfig(BaseModel):
    """Top-level configuration, one model per TOML section."""

    model_config = ConfigDict(extra="forbid")

    tracing: TracingConfig = Field(default_factory=TracingConfig)
    exporters: ExportersConfig = Field(default_factory=ExportersConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# env var suffix -> (section, key, converter)
_ENV_VARS = {
    "SAMPLE_RATE": ("tracing", "sample_rate", "float"),
    "SERVICE_NAME": ("tracing", "service_name", "str"),
    "ENDPOINT": ("tracing", "endpoint", "str"),
    "API_KEY": ("tracing", "api_key", "str"),
    "USE_OTLP": ("tracing", "use_otlp", "bool"),
    "ENABLE_CONSOLE_EXPORTER": ("exporters", "enable_console", "bool"),
    "DEBUG": ("logging", "debug", "bool"),
    "ENABLE_SPAN_LOGGING": ("logging", "enable_span_logging", "bool"),
}

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def find_config_file() -> Optional[str]:
    """
    Locate a config file.

    Looks for ``./traceratio.toml`` first, then ``~/.traceratio/config.toml``.

    Returns:
        Path of the first file found, or None
    """
    candidates = [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.home() / ".traceratio" / "config.toml",
    ]
    for candidate in candidates:
        if candidate.is_file():
            return str(candidate)
    return None


def load_toml_config(path: str) -> Dict[str, Any]:
    """
    Load a TOML config file.

    Args:
        path: Path to the file

    Returns:
        Parsed sections, or an empty dict if the file does not exist

    Raises:
        ConfigurationError: If the file is not valid TOML
    """
    config_path = Path(path)
    if not config_path.is_file():
        return {}

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}", details={"path": path}) from e

    logger.debug("Loaded config file %s", path)
    return data


def _convert_env_value(name: str, raw: str, kind: str) -> Any:
    if kind == "float":
        try:
            return float(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"{name} must be a number", details={"value": raw}
            ) from e
    if kind == "bool":
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"{name} must be a boolean", details={"value": raw})
    return raw


def load_config_from_env(flat: bool = False) -> Dict[str, Any]:
    """
    Read ``TRACERATIO_*`` environment variables.

    Unset variables are omitted from the result.

    Args:
        flat: Return ``{key: value}`` instead of ``{section: {key: value}}``

    Returns:
        Converted values

    Raises:
        ConfigurationError: If a numeric or boolean variable cannot be converted
    """
    result: Dict[str, Any] = {}
    for suffix, (section, key, kind) in _ENV_VARS.items():
        name = ENV_PREFIX + suffix
        raw = os.environ.get(name)
        if raw is None:
            continue
        value = _convert_env_value(name, raw, kind)
        if flat:
            result[key] = value
        else:
            result.setdefault(section, {})[key] = value
    return result


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> TraceRatioConfig:
    """
    Build the effective configuration.

    Args:
        config_file: Explicit TOML path; discovered with find_config_file() if None
        overrides: Nested ``{section: {key: value}}`` values that win over everything

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If any source is unreadable or a value is invalid
    """
    path = config_file or find_config_file()
    data: Dict[str, Any] = load_toml_config(path) if path else {}
    data = _deep_merge(data, load_config_from_env())
    if overrides:
        data = _deep_merge(data, overrides)

    try:
        return TraceRatioConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            "Invalid configuration",
            details={"errors": e.error_count(), "first": e.errors()[0]["msg"]},
        ) from e


def validate_config(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Tuple[bool, str, Optional[TraceRatioConfig]]:
    """
    Check a configuration without raising.

    Returns:
        (is_valid, message, config); config is None when invalid
    """
    try:
        config = load_config(config_file=config_file, overrides=overrides)
    except ConfigurationError as e:
        return False, str(e), None
    return True, "Configuration is valid", config
