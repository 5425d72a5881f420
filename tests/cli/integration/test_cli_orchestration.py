"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from schema_form_converter.cli import cli, main
from schema_form_converter.form_model import RecordFieldType, read_form_text


def _sample_path(name: str) -> Path:
    return Path(__file__).resolve().parents[3] / "samples" / name


def test_to_form_command_writes_form_document(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "person.form.json"

    result = runner.invoke(
        cli,
        ["to-form", "--schema", str(_sample_path("person.avsc")), "--output", str(output_path)],
    )

    assert result.exit_code == 0, result.output
    assert str(output_path.resolve()) in result.output
    form = read_form_text(output_path.read_text(encoding="utf-8"))
    assert isinstance(form, RecordFieldType)
    assert form.record_name == "Person"


def test_to_schema_command_reverses_to_form(tmp_path: Path) -> None:
    runner = CliRunner()
    form_path = tmp_path / "person.form.json"
    schema_path = tmp_path / "person.avsc"
    runner.invoke(
        cli, ["to-form", "--schema", str(_sample_path("person.avsc")), "--output", str(form_path)]
    )

    result = runner.invoke(
        cli,
        ["to-schema", "--form", str(form_path), "--compact", "--output", str(schema_path)],
    )

    assert result.exit_code == 0, result.output
    text = schema_path.read_text(encoding="utf-8").strip()
    assert "\n" not in text
    expected = json.loads(_sample_path("person.avsc").read_text(encoding="utf-8"))
    assert json.loads(text) == expected


def test_round_trip_command_prints_regenerated_schema() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["round-trip", "--schema", str(_sample_path("person.avsc"))])

    assert result.exit_code == 0, result.output
    expected = json.loads(_sample_path("person.avsc").read_text(encoding="utf-8"))
    assert json.loads(result.output) == expected


def test_ctl_flag_enables_dependency_handling() -> None:
    runner = CliRunner()
    sample = str(_sample_path("order_ctl.avsc"))

    result = runner.invoke(cli, ["round-trip", "--schema", sample, "--ctl"])

    assert result.exit_code == 0, result.output
    expected = json.loads(_sample_path("order_ctl.avsc").read_text(encoding="utf-8"))
    assert json.loads(result.output) == expected
    assert main(["round-trip", "--schema", sample]) == 1


def test_configuration_file_enables_ctl_and_compact_output(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "converter:\n  ctl_enabled: true\noutput:\n  pretty: false\n", encoding="utf-8"
    )

    result = runner.invoke(
        cli,
        ["to-form", "--schema", str(_sample_path("order_ctl.avsc")), "--config", str(config_path)],
    )

    assert result.exit_code == 0, result.output
    output = result.output.strip()
    assert "\n" not in output
    form = read_form_text(output)
    assert isinstance(form, RecordFieldType)
    assert form.version == 2
    assert [str(dependency.fqn) for dependency in form.dependencies] == [
        "com.example.people.Person"
    ]


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "converter.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0, result.output
    assert str(output_path.resolve()) in result.output
    assert "converter:" in output_path.read_text(encoding="utf-8")
