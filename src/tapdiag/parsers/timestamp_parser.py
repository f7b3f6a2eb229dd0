from tapdiag.errors import RecordParserConfigError
from tapdiag.parsers.regex_parser import TIMESTAMP_GROUP, RegexRecordParser
from tapdiag.parsers.timestamp_format import compile_timestamp_format


class TimestampRecordParser(RegexRecordParser):
    """Start a new record at every line that begins with a timestamp."""

    def __init__(self, timestamp_format: str | None) -> None:
        if not timestamp_format:
            raise RecordParserConfigError("TimestampFormat is required for the Timestamp record parser")
        try:
            compiled = compile_timestamp_format(timestamp_format)
        except ValueError as e:
            raise RecordParserConfigError(str(e)) from e
        super().__init__(rf"^(?P<{TIMESTAMP_GROUP}>{compiled.pattern})", timestamp_format)
