from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

DIRECTORY_SOURCE = "DirectorySource"
MATCH_ALL_FILTER = "*.*"

# Configuration keys are case-insensitive in the agent; map them onto the aliases below.
_CANONICAL_KEYS = {
    key.lower(): key
    for key in (
        "Id",
        "SourceType",
        "RecordParser",
        "Directory",
        "FileNameFilter",
        "TimestampFormat",
        "Pattern",
        "ExtrationPattern",
        "ExtractionRegexOptions",
    )
}


class RecordParserKind(str, Enum):
    TIMESTAMP = "Timestamp"
    REGEX = "Regex"
    UNSUPPORTED = "Unsupported"

    @classmethod
    def from_config(cls, value: str | None) -> "RecordParserKind":
        if value == cls.TIMESTAMP.value:
            return cls.TIMESTAMP
        if value == cls.REGEX.value:
            return cls.REGEX
        return cls.UNSUPPORTED


class SourceDefinition(BaseModel):
    """One entry of the configuration's ``Sources`` list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str | None = Field(default=None, alias="Id")
    source_type: str | None = Field(default=None, alias="SourceType")
    record_parser: str | None = Field(default=None, alias="RecordParser")
    directory: str | None = Field(default=None, alias="Directory")
    file_name_filter: str = Field(default=MATCH_ALL_FILTER, alias="FileNameFilter")
    timestamp_format: str | None = Field(default=None, alias="TimestampFormat")
    pattern: str | None = Field(default=None, alias="Pattern")
    extraction_pattern: str | None = Field(default=None, alias="ExtrationPattern")
    extraction_regex_options: str | None = Field(default=None, alias="ExtractionRegexOptions")

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        normalized: dict[str, Any] = {}
        for key, value in data.items():
            if value is None or isinstance(value, dict | list):
                continue
            canonical = _CANONICAL_KEYS.get(str(key).lower(), str(key))
            if canonical in normalized:
                continue
            normalized[canonical] = value if isinstance(value, str) else str(value)
        return normalized

    @property
    def parser_kind(self) -> RecordParserKind:
        return RecordParserKind.from_config(self.record_parser)


class LogRecord(BaseModel):
    data: str
    line_number: int
    timestamp: datetime | None = None
    fields: dict[str, str] = Field(default_factory=dict)


class ValidationResult(BaseModel):
    passed: bool
    messages: list[str] = Field(default_factory=list)
