from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from tapdiag.errors import ConfigLoadError

logger = logging.getLogger(__name__)


def load_config_file(base_directory: str, file_name: str) -> dict[str, Any]:
    """Read an agent configuration file (JSON) into a dictionary.

    Raises ``ConfigLoadError`` when the file is missing, unreadable, not JSON,
    or not a JSON object.
    """
    path = Path(base_directory) / file_name
    try:
        with open(path, encoding="utf-8-sig") as f:
            document = json.load(f)
    except FileNotFoundError:
        raise ConfigLoadError(f"Configuration file not found: {path}") from None
    except OSError as e:
        raise ConfigLoadError(f"Failed to read configuration file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigLoadError(f"Malformed configuration file {path}: {e}") from e

    if not isinstance(document, dict):
        raise ConfigLoadError(f"Configuration file {path} must contain a JSON object")

    logger.debug("Loaded configuration from %s", path)
    return document
