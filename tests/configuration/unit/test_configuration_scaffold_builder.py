"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from schema_form_converter.configuration import load_configuration
from schema_form_converter.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "Converter configuration template" in scaffold
    assert "converter:" in scaffold
    assert "ctl_enabled:" in scaffold
    assert "# template_path:" in scaffold
    assert "output:" in scaffold
    assert "logging:" in scaffold
    assert "<OPTIONAL>" in scaffold
    assert set(yaml.safe_load(scaffold)) == {"converter", "output", "logging"}


def test_written_scaffold_loads_as_a_valid_configuration(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    configuration = load_configuration(written_path)
    assert configuration.converter.ctl_enabled is False
    assert configuration.output.pretty is True
    assert configuration.logging.level == "WARNING"


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)
    assert output_path.read_text(encoding="utf-8") == "existing"
