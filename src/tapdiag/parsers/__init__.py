from tapdiag.parsers.regex_parser import RegexRecordParser, parse_regex_options
from tapdiag.parsers.timestamp_format import TimestampFormat, compile_timestamp_format
from tapdiag.parsers.timestamp_parser import TimestampRecordParser

__all__ = [
    "RegexRecordParser",
    "TimestampFormat",
    "TimestampRecordParser",
    "compile_timestamp_format",
    "parse_regex_options",
]
