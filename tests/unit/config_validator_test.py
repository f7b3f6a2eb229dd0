"""Unit tests for configuration schema validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from tapdiag.core.config_validator import ConfigValidator, DirectorySourceValidator
from tapdiag.errors import SchemaValidationError


def _validate(document: dict[str, Any], validator: ConfigValidator | None = None) -> tuple[bool, list[str]]:
    return (validator or ConfigValidator()).schema_validate("/etc/agent", "appsettings.json", document)


def test_valid_document() -> None:
    document = {
        "Sources": [
            {"Id": "app1", "SourceType": "DirectorySource", "Directory": "/var/log/app", "RecordParser": "Timestamp"}
        ],
        "Sinks": [{"Id": "s", "SinkType": "KinesisStream"}],
        "Pipes": [{"Id": "p", "SourceRef": "app1", "SinkRef": "s"}],
    }

    is_valid, messages = _validate(document)

    assert is_valid is True
    assert messages == ["appsettings.json is valid."]


def test_empty_document_is_valid() -> None:
    assert _validate({})[0] is True


def test_missing_required_property_is_reported_with_its_path() -> None:
    is_valid, messages = _validate({"Sources": [{"SourceType": "DirectorySource", "Directory": "/x"}]})

    assert is_valid is False
    assert "$.Sources[0]: 'Id' is a required property" in messages
    assert messages[-1] == "appsettings.json is invalid."


def test_wrong_type_is_reported() -> None:
    is_valid, messages = _validate({"Sources": {"Id": "a"}})

    assert is_valid is False
    assert any(m.startswith("$.Sources:") for m in messages)


def test_directory_source_requires_directory() -> None:
    is_valid, messages = _validate({"Sources": [{"Id": "app1", "SourceType": "DirectorySource"}]})

    assert is_valid is False
    assert "Directory is required for DirectorySource at source ID: app1" in messages


def test_other_source_types_have_no_directory_rule() -> None:
    is_valid, _ = _validate({"Sources": [{"Id": "ev", "SourceType": "WindowsEventLogSource"}]})

    assert is_valid is True


def test_source_validators_can_be_replaced() -> None:
    validator = ConfigValidator(source_validators={})

    is_valid, _ = _validate({"Sources": [{"Id": "app1", "SourceType": "DirectorySource"}]}, validator)

    assert is_valid is True


def test_directory_source_validator_accepts_case_insensitive_keys() -> None:
    messages: list[str] = []

    assert DirectorySourceValidator().validate({"id": "a", "directory": "/x"}, messages) is True
    assert messages == []


def test_keys_are_matched_case_insensitively() -> None:
    document = {"sources": [{"id": "app1", "sourcetype": "DirectorySource", "DIRECTORY": "/var/log/app"}]}

    is_valid, messages = _validate(document)

    assert is_valid is True
    assert messages == ["appsettings.json is valid."]


def test_lowercase_sources_key_is_still_checked() -> None:
    is_valid, messages = _validate({"sources": [{"sourcetype": "DirectorySource", "directory": "/x"}]})

    assert is_valid is False
    assert "$.Sources[0]: 'Id' is a required property" in messages


def test_lowercase_type_errors_are_reported() -> None:
    is_valid, messages = _validate({"sources": [{"id": 5, "sourcetype": "DirectorySource", "directory": "/x"}]})

    assert is_valid is False
    assert any(m.startswith("$.Sources[0].Id:") for m in messages)


def test_missing_schema_file(tmp_path: Path) -> None:
    validator = ConfigValidator(tmp_path / "missing.json")

    with pytest.raises(SchemaValidationError, match="Failed to load schema"):
        _validate({}, validator)


def test_invalid_schema_file(tmp_path: Path) -> None:
    schema = tmp_path / "schema.json"
    schema.write_text('{"type": 12}', encoding="utf-8")

    with pytest.raises(SchemaValidationError, match="Invalid schema"):
        _validate({}, ConfigValidator(schema))
