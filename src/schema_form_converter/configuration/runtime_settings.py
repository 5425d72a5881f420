"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ConverterSettings:
    """Converter construction settings."""

    ctl_enabled: bool = False
    template_path: Path | None = None


@dataclass(frozen=True)
class OutputSettings:
    """How converted documents are written."""

    pretty: bool = True


@dataclass(frozen=True)
class LoggingSettings:
    """Console logging settings for the command line."""

    level: str = "WARNING"


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    converter: ConverterSettings
    output: OutputSettings
    logging: LoggingSettings


def default_configuration() -> Configuration:
    """Configuration used when no file is given."""
    return Configuration(
        path=None,
        converter=ConverterSettings(),
        output=OutputSettings(),
        logging=LoggingSettings(),
    )
