"""Validation commands."""

from __future__ import annotations

import typer
from rich.console import Console

from tapdiag.cli.options import (
    ConfigDirOption,
    ConfigFileOption,
    LogNameOption,
    SourceIdArgument,
    config_location,
)
from tapdiag.core.config_loader import load_config_file
from tapdiag.core.config_validator import ConfigValidator
from tapdiag.core.validate import RecordParserValidator
from tapdiag.errors import ConfigLoadError, SchemaValidationError
from tapdiag.settings import Settings

validate_app = typer.Typer(help="Validate agent configuration against real files.")
console = Console()


def _get_validator(settings: Settings) -> RecordParserValidator:
    return RecordParserValidator.from_settings(settings)


def _print_messages(messages: list[str], passed: bool) -> None:
    style = "green" if passed else "red"
    for message in messages:
        console.print(message, style=style, markup=False, highlight=False)


@validate_app.command("parser")
def parser(
    source_id: SourceIdArgument,
    log_name: LogNameOption = None,
    config_dir: ConfigDirOption = None,
    config_file: ConfigFileOption = None,
) -> None:
    """Check that a source's record parser splits its sample log into records."""
    settings = Settings.from_env()
    base_directory, file_name = config_location(settings, config_dir, config_file)

    result = _get_validator(settings).validate_record_parser(source_id, log_name, base_directory, file_name)
    _print_messages(result.messages, result.passed)
    if not result.passed:
        raise typer.Exit(1)


@validate_app.command("config")
def config(
    config_dir: ConfigDirOption = None,
    config_file: ConfigFileOption = None,
) -> None:
    """Check the configuration file against the configuration schema."""
    settings = Settings.from_env()
    base_directory, file_name = config_location(settings, config_dir, config_file)

    try:
        document = load_config_file(base_directory, file_name)
        is_valid, messages = ConfigValidator(settings.schema_file).schema_validate(base_directory, file_name, document)
    except (ConfigLoadError, SchemaValidationError) as e:
        console.print(str(e), style="red", markup=False, highlight=False)
        raise typer.Exit(1) from e

    _print_messages(messages, is_valid)
    if not is_valid:
        raise typer.Exit(1)
