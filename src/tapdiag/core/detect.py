from __future__ import annotations

from tapdiag.models import LogRecord, RecordParserKind, SourceDefinition
from tapdiag.parsers import RegexRecordParser, TimestampRecordParser


def build_parser(kind: RecordParserKind, source: SourceDefinition) -> RegexRecordParser:
    if kind is RecordParserKind.TIMESTAMP:
        return TimestampRecordParser(source.timestamp_format)
    if kind is RecordParserKind.REGEX:
        return RegexRecordParser(
            source.pattern,
            source.timestamp_format,
            source.extraction_pattern,
            source.extraction_regex_options,
        )
    raise ValueError(f"No record parser for kind {kind.value}")


def detect_records(kind: RecordParserKind, content: str, source: SourceDefinition) -> list[LogRecord]:
    """Split ``content`` into records with the parser the source declares."""
    return list(build_parser(kind, source).parse_records(content))


def is_valid_split(records: list[LogRecord]) -> bool:
    # zero records counts as valid, only a single all-absorbing record fails
    return len(records) != 1
