from __future__ import annotations

from typing import Annotated

import typer

from tapdiag.settings import Settings

SourceIdArgument = Annotated[str, typer.Argument(help="Id of the source to diagnose.")]
LogNameOption = Annotated[
    str | None,
    typer.Option("--log-name", help="Sample log file name inside the source directory. Required when the filter matches several files."),
]
ConfigDirOption = Annotated[
    str | None, typer.Option("--config-dir", help="Directory holding the agent configuration file.")
]
ConfigFileOption = Annotated[
    str | None, typer.Option("--config-file", help="Agent configuration file name (default appsettings.json).")
]


def config_location(settings: Settings, config_dir: str | None, config_file: str | None) -> tuple[str, str]:
    return config_dir or str(settings.config_dir), config_file or settings.config_file
