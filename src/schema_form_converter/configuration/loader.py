"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    Configuration,
    ConverterSettings,
    LoggingSettings,
    OutputSettings,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        converter=_parse_converter_section(parsed.get("converter"), path.parent),
        output=_parse_output_section(parsed.get("output")),
        logging=_parse_logging_section(parsed.get("logging")),
    )


def _parse_converter_section(value: Any, base_path: Path) -> ConverterSettings:
    section = _optional_mapping(value, "converter")
    ctl_enabled = _optional_bool(section.get("ctl_enabled"), "converter.ctl_enabled", False)
    template_value = section.get("template_path")
    template_path = None
    if template_value is not None:
        if not isinstance(template_value, str) or not template_value.strip():
            raise ConfigurationError("converter.template_path must be a non-empty string.")
        template_path = _resolve_path(base_path, template_value.strip())
        if not template_path.exists():
            raise ConfigurationError(f"Form template file not found: {template_path}")
    return ConverterSettings(ctl_enabled=ctl_enabled, template_path=template_path)


def _parse_output_section(value: Any) -> OutputSettings:
    section = _optional_mapping(value, "output")
    return OutputSettings(pretty=_optional_bool(section.get("pretty"), "output.pretty", True))


def _parse_logging_section(value: Any) -> LoggingSettings:
    section = _optional_mapping(value, "logging")
    level = section.get("level", "WARNING")
    if not isinstance(level, str):
        raise ConfigurationError("logging.level must be a string.")
    normalized = level.strip().upper()
    if normalized not in _LOG_LEVELS:
        raise ConfigurationError(
            f"logging.level must be one of {', '.join(_LOG_LEVELS)}, got '{level}'."
        )
    return LoggingSettings(level=normalized)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value
