"""Shared fixtures and helpers for tests."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clear_tapdiag_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings from the developer's shell out of the tests."""
    for name in (
        "TAPDIAG_CONFIG_DIR",
        "TAPDIAG_CONFIG_FILE",
        "TAPDIAG_SCHEMA_FILE",
        "TAPDIAG_LOG_ENCODING",
        "TAPDIAG_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Return an empty directory for sample logs."""
    directory = tmp_path / "logs"
    directory.mkdir()
    return directory


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Return an empty directory for configuration files."""
    directory = tmp_path / "config"
    directory.mkdir()
    return directory


@pytest.fixture
def write_config(config_dir: Path) -> Callable[..., Path]:
    """Return a helper writing ``{"Sources": [...]}`` as appsettings.json."""

    def _write(sources: list[dict[str, Any]], file_name: str = "appsettings.json") -> Path:
        path = config_dir / file_name
        path.write_text(json.dumps({"Sources": sources}), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def timestamp_source(log_dir: Path) -> dict[str, Any]:
    """Return a directory source using the Timestamp parser."""
    return {
        "Id": "app1",
        "SourceType": "DirectorySource",
        "RecordParser": "Timestamp",
        "TimestampFormat": "yyyy-MM-dd HH:mm:ss",
        "Directory": str(log_dir),
        "FileNameFilter": "*.log",
    }
