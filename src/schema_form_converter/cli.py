"""Command line interface entry point."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from schema_form_converter.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    configure_logging,
    default_configuration,
    load_configuration,
    write_placeholder_configuration,
)
from schema_form_converter.conversion import ConversionError, SchemaFormConverter
from schema_form_converter.form_model import (
    FormModelError,
    FormTemplateError,
    read_form_text,
    write_form_text,
)
from schema_form_converter.schema_management import SchemaError

_DOMAIN_ERRORS = (
    ConfigurationError,
    SchemaError,
    ConversionError,
    FormModelError,
    FormTemplateError,
    OSError,
)


class CliError(Exception):
    """Custom CLI error."""


def _config_option(command):
    return click.option(
        "--config",
        "config_path",
        required=False,
        type=click.Path(path_type=str),
        help="Path to the YAML converter configuration file",
    )(command)


def _ctl_option(command):
    return click.option(
        "--ctl",
        "ctl",
        is_flag=True,
        default=False,
        help="Carry record versions and dependency lists (CTL mode).",
    )(command)


def _output_option(command):
    return click.option(
        "--output",
        "output_path",
        required=False,
        type=click.Path(path_type=str),
        help="Write the result to this file instead of standard output",
    )(command)


@click.group(
    name="schema-form-converter",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(package_name="schema-form-converter")
@click.option("--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Convert schemas to editable form models and back."""
    ctx.obj = {"verbose": verbose}


@cli.command(name="to-form")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the schema JSON document",
)
@_config_option
@_ctl_option
@_output_option
@click.pass_context
def to_form(
    ctx: click.Context,
    schema_path: str,
    config_path: str | None,
    ctl: bool,
    output_path: str | None,
) -> None:
    """Build the form model of a schema document."""
    try:
        configuration = _prepare(ctx, config_path)
        converter = _build_converter(configuration, ctl=ctl)
        schema_text = Path(schema_path).read_text(encoding="utf-8")
        form = converter.create_form_from_schema_text(schema_text)
        _emit(write_form_text(form, pretty=configuration.output.pretty), output_path)
    except _DOMAIN_ERRORS as exc:
        raise CliError(str(exc)) from exc


@cli.command(name="to-schema")
@click.option(
    "--form",
    "form_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the form model JSON document",
)
@_config_option
@_ctl_option
@click.option(
    "--compact",
    is_flag=True,
    default=False,
    help="Write the schema without indentation.",
)
@_output_option
@click.pass_context
def to_schema(
    ctx: click.Context,
    form_path: str,
    config_path: str | None,
    ctl: bool,
    compact: bool,
    output_path: str | None,
) -> None:
    """Build the schema document of a form model."""
    try:
        configuration = _prepare(ctx, config_path)
        converter = _build_converter(configuration, ctl=ctl)
        form = read_form_text(Path(form_path).read_text(encoding="utf-8"))
        pretty = configuration.output.pretty and not compact
        _emit(converter.create_schema_text(form, pretty=pretty), output_path)
    except _DOMAIN_ERRORS as exc:
        raise CliError(str(exc)) from exc


@cli.command(name="round-trip")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the schema JSON document",
)
@_config_option
@_ctl_option
@click.pass_context
def round_trip(ctx: click.Context, schema_path: str, config_path: str | None, ctl: bool) -> None:
    """Convert a schema to its form model and back, printing the regenerated schema."""
    try:
        configuration = _prepare(ctx, config_path)
        converter = _build_converter(configuration, ctl=ctl)
        form = converter.create_form_from_schema_text(
            Path(schema_path).read_text(encoding="utf-8")
        )
        click.echo(converter.create_schema_text(form, pretty=configuration.output.pretty))
    except _DOMAIN_ERRORS as exc:
        raise CliError(str(exc)) from exc


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML converter configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML converter configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


def _prepare(ctx: click.Context, config_path: str | None) -> Configuration:
    configuration = (
        load_configuration(config_path) if config_path is not None else default_configuration()
    )
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    configure_logging(configuration.logging, verbose=verbose)
    return configuration


def _build_converter(configuration: Configuration, *, ctl: bool) -> SchemaFormConverter:
    return SchemaFormConverter(
        ctl_enabled=ctl or configuration.converter.ctl_enabled,
        template_path=configuration.converter.template_path,
    )


def _emit(text: str, output_path: str | None) -> None:
    if output_path is None:
        click.echo(text)
        return
    destination = Path(output_path)
    destination.write_text(text + "\n", encoding="utf-8")
    click.echo(str(destination.resolve()))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
