import logging
import re
from collections.abc import Iterator

from tapdiag.errors import RecordParserConfigError
from tapdiag.models import LogRecord
from tapdiag.parsers.timestamp_format import TimestampFormat, compile_timestamp_format

logger = logging.getLogger(__name__)

TIMESTAMP_GROUP = "Timestamp"

_REGEX_OPTIONS: dict[str, re.RegexFlag] = {
    "none": re.NOFLAG,
    "ignorecase": re.IGNORECASE,
    "multiline": re.MULTILINE,
    "singleline": re.DOTALL,
    "ignorepatternwhitespace": re.VERBOSE,
    # accepted for compatibility, no Python counterpart needed
    "compiled": re.NOFLAG,
    "cultureinvariant": re.NOFLAG,
    "explicitcapture": re.NOFLAG,
}

_NET_NAMED_GROUP = re.compile(r"(?<!\\)\(\?<(?![=!])")
_NET_BACKREFERENCE = re.compile(r"\\k<(\w+)>")


def parse_regex_options(value: str | None) -> re.RegexFlag:
    """Combine comma-separated .NET ``RegexOptions`` names into ``re`` flags."""
    flags = re.NOFLAG
    if not value:
        return flags
    for name in value.split(","):
        key = name.strip().lower()
        if not key:
            continue
        if key not in _REGEX_OPTIONS:
            raise RecordParserConfigError(f"Unknown regex option: {name.strip()}")
        flags |= _REGEX_OPTIONS[key]
    return flags


def translate_pattern(pattern: str) -> str:
    """Rewrite .NET named groups and backreferences into Python syntax."""
    pattern = _NET_NAMED_GROUP.sub("(?P<", pattern)
    return _NET_BACKREFERENCE.sub(r"(?P=\1)", pattern)


def compile_pattern(pattern: str, flags: re.RegexFlag = re.NOFLAG, field: str = "Pattern") -> re.Pattern[str]:
    try:
        return re.compile(translate_pattern(pattern), flags)
    except re.error as e:
        raise RecordParserConfigError(f"Invalid {field} {pattern!r}: {e}") from e


def split_lines(content: str) -> list[str]:
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class RegexRecordParser:
    """Split text into records at every line matching a start-of-record pattern.

    Lines before the first match form a leading record of their own. When an
    extraction pattern is configured, its named groups are attached to each
    record and a ``Timestamp`` group is parsed with the timestamp format.
    """

    def __init__(
        self,
        pattern: str | None,
        timestamp_format: str | None = None,
        extraction_pattern: str | None = None,
        extraction_regex_options: str | None = None,
    ) -> None:
        if not pattern:
            raise RecordParserConfigError("Pattern is required for the Regex record parser")
        self._boundary = compile_pattern(pattern)
        self._timestamp: TimestampFormat | None = None
        if timestamp_format:
            try:
                self._timestamp = compile_timestamp_format(timestamp_format)
            except ValueError as e:
                raise RecordParserConfigError(str(e)) from e
        self._extraction: re.Pattern[str] | None = None
        if extraction_pattern:
            flags = parse_regex_options(extraction_regex_options)
            self._extraction = compile_pattern(extraction_pattern, flags, field="ExtrationPattern")

    def parse_records(self, content: str) -> Iterator[LogRecord]:
        buffer: list[str] = []
        first_line = 0
        boundary: re.Match[str] | None = None

        for number, line in enumerate(split_lines(content), start=1):
            match = self._boundary.search(line)
            if match is not None and buffer:
                yield self._build_record(buffer, first_line, boundary)
                buffer = []
            if not buffer:
                first_line = number
                boundary = match
            buffer.append(line)

        if buffer:
            yield self._build_record(buffer, first_line, boundary)

    def _build_record(self, lines: list[str], line_number: int, boundary: re.Match[str] | None) -> LogRecord:
        data = "\n".join(lines)
        fields: dict[str, str] = {}
        if self._extraction is not None:
            extracted = self._extraction.search(data)
            if extracted is not None:
                fields = {k: v for k, v in extracted.groupdict().items() if v is not None}
            else:
                logger.debug("Extraction pattern did not match record at line %d", line_number)

        timestamp_text = _group(fields, TIMESTAMP_GROUP)
        if timestamp_text is None and boundary is not None:
            timestamp_text = _group(boundary.groupdict(), TIMESTAMP_GROUP)

        timestamp = None
        if timestamp_text is not None and self._timestamp is not None:
            timestamp = self._timestamp.parse(timestamp_text)

        return LogRecord(data=data, line_number=line_number, timestamp=timestamp, fields=fields)


def _group(groups: dict[str, str | None], name: str) -> str | None:
    for key, value in groups.items():
        if key.lower() == name.lower() and value is not None:
            return value
    return None
