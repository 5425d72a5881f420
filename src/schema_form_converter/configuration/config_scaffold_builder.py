"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-form-converter.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Converter configuration template for schema-form-converter.
# Every setting is optional; remove a line to keep its default.

converter:
  # Carry per-record version and cross-schema dependency metadata (CTL mode).
  ctl_enabled: false
  # Form template overriding the packaged one, relative to this file.
  # template_path: "<OPTIONAL>"

output:
  # Indent written schema and form documents.
  pretty: true

logging:
  # One of DEBUG, INFO, WARNING, ERROR, CRITICAL. --verbose forces DEBUG.
  level: WARNING
"""


def build_placeholder_configuration() -> str:
    """Build a YAML converter configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
