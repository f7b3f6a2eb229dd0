from __future__ import annotations

import logging
from pathlib import Path

from tapdiag.errors import LogLoadError

logger = logging.getLogger(__name__)


def load_log(path: str | Path, encoding: str = "utf-8-sig") -> str:
    """Read a log file line by line, returning its text with every line ending as ``\\n``."""
    lines: list[str] = []
    try:
        with open(path, encoding=encoding, errors="replace", newline=None) as f:
            for line in f:
                lines.append(line.rstrip("\n"))
    except FileNotFoundError:
        raise LogLoadError(f"Log file not found: {path}") from None
    except (OSError, LookupError) as e:
        raise LogLoadError(f"Failed to read log file {path}: {e}") from e

    logger.debug("Loaded %d line(s) from %s", len(lines), path)
    return "".join(f"{line}\n" for line in lines)
