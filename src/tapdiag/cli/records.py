from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tapdiag.cli.options import (
    ConfigDirOption,
    ConfigFileOption,
    LogNameOption,
    SourceIdArgument,
    config_location,
)
from tapdiag.core.validate import RecordParserValidator
from tapdiag.errors import DiagnosticError, SampleFileError, SchemaValidationError
from tapdiag.models import LogRecord
from tapdiag.settings import Settings

console = Console()

_MAX_COL_WIDTH = 80


def _truncate(value: str, max_width: int = _MAX_COL_WIDTH) -> str:
    if len(value) > max_width:
        return value[: max_width - 3] + "..."
    return value


def _render_records(records: Sequence[LogRecord], total: int) -> None:
    table = Table(show_lines=False)
    for header in ("line", "timestamp", "lines", "data"):
        table.add_column(header)
    for record in records:
        first_line = record.data.split("\n", 1)[0]
        table.add_row(
            str(record.line_number),
            record.timestamp.isoformat() if record.timestamp else "",
            str(record.data.count("\n") + 1),
            escape(_truncate(first_line)),
        )
    console.print(table)
    console.print(f"({len(records)} of {total} records)")


def records(
    source_id: SourceIdArgument,
    log_name: LogNameOption = None,
    config_dir: ConfigDirOption = None,
    config_file: ConfigFileOption = None,
    limit: Annotated[int, typer.Option(min=0, help="Max records to show.")] = 20,
) -> None:
    """Show the records a source's parser finds in its sample log."""
    settings = Settings.from_env()
    base_directory, file_name = config_location(settings, config_dir, config_file)
    validator = RecordParserValidator.from_settings(settings)

    try:
        config = validator.load_config(base_directory, file_name)
        resolved, found = validator.collect_records(config, source_id, log_name)
    except DiagnosticError as e:
        console.print(str(e), style="red", markup=False, highlight=False)
        if isinstance(e, SampleFileError):
            for candidate in e.candidates:
                console.print(f"  {candidate}", markup=False, highlight=False)
        if isinstance(e, SchemaValidationError):
            console.print("Run 'tapdiag validate config' for details.")
        raise typer.Exit(1) from e

    console.print(f"[bold]{resolved.kind.value}[/bold] parser, sample file {escape(str(resolved.sample_file))}")
    _render_records(found[:limit], len(found))
