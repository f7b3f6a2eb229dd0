from pathlib import Path

import pytest

from tapdiag.settings import DEFAULT_SCHEMA_FILE, Settings


def test_defaults() -> None:
    settings = Settings.from_env()

    assert settings.config_dir == Path(".")
    assert settings.config_file == "appsettings.json"
    assert settings.schema_file == DEFAULT_SCHEMA_FILE
    assert settings.log_encoding == "utf-8-sig"
    assert settings.log_level == "WARNING"


def test_bundled_schema_exists() -> None:
    assert DEFAULT_SCHEMA_FILE.is_file()


def test_reads_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TAPDIAG_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("TAPDIAG_CONFIG_FILE", "agent.json")
    monkeypatch.setenv("TAPDIAG_SCHEMA_FILE", str(tmp_path / "schema.json"))
    monkeypatch.setenv("TAPDIAG_LOG_ENCODING", "latin-1")
    monkeypatch.setenv("TAPDIAG_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.config_dir == tmp_path
    assert settings.config_file == "agent.json"
    assert settings.schema_file == tmp_path / "schema.json"
    assert settings.log_encoding == "latin-1"
    assert settings.log_level == "DEBUG"
