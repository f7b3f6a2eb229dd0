from __future__ import annotations

import logging
from typing import Annotated

import typer

from tapdiag.cli.records import records
from tapdiag.cli.validate import validate_app
from tapdiag.settings import Settings

app = typer.Typer(
    name="tapdiag",
    help="Diagnose log agent sources by checking record parsers against sample logs.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(validate_app, name="validate")
app.command("records")(records)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    settings = Settings.from_env()
    level = logging.DEBUG if verbose else logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main() -> None:
    app()
