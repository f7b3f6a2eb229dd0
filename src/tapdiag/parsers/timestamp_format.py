"""Translate the agent's .NET-style custom date/time formats.

A format such as ``yyyy-MM-dd HH:mm:ss.fff`` is compiled once into a regular
expression (used to find record boundaries) and, where every specifier has a
counterpart, into a ``strptime`` format (used to read record timestamps).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime

logger = logging.getLogger(__name__)

_DIGITS = {1: r"\d{1,2}", 2: r"\d{2}"}

# (regex, strptime) per specifier letter and run length; None means no strptime counterpart.
_SPECIFIERS: dict[str, dict[int, tuple[str, str | None]]] = {
    "y": {1: (r"\d{1,2}", "%y"), 2: (r"\d{2}", "%y"), 3: (r"\d{3,4}", "%Y"), 4: (r"\d{4}", "%Y")},
    "M": {1: (_DIGITS[1], "%m"), 2: (_DIGITS[2], "%m"), 3: (r"[A-Za-z]{3}", "%b"), 4: (r"[A-Za-z]+", "%B")},
    "d": {1: (_DIGITS[1], "%d"), 2: (_DIGITS[2], "%d"), 3: (r"[A-Za-z]{3}", "%a"), 4: (r"[A-Za-z]+", "%A")},
    "H": {1: (_DIGITS[1], "%H"), 2: (_DIGITS[2], "%H")},
    "h": {1: (_DIGITS[1], "%I"), 2: (_DIGITS[2], "%I")},
    "m": {1: (_DIGITS[1], "%M"), 2: (_DIGITS[2], "%M")},
    "s": {1: (_DIGITS[1], "%S"), 2: (_DIGITS[2], "%S")},
    "t": {1: (r"[AP]", None), 2: (r"(?:AM|PM)", "%p")},
    "z": {1: (r"[+-]\d{1,2}", None), 2: (r"[+-]\d{2}", None), 3: (r"[+-]\d{2}:\d{2}", "%z")},
    "K": {1: (r"(?:Z|[+-]\d{2}:\d{2})?", None)},
    "g": {1: (r"(?:A\.D\.|B\.C\.)", None), 2: (r"(?:A\.D\.|B\.C\.)", None)},
}


@dataclass(frozen=True)
class TimestampFormat:
    format: str
    pattern: str
    strptime_format: str | None

    def parse(self, text: str) -> datetime | None:
        """Parse ``text`` as a UTC timestamp; ``None`` when it does not fit the format."""
        if self.strptime_format is None:
            return None
        try:
            value = datetime.strptime(text.strip(), self.strptime_format)
        except ValueError:
            logger.debug("Could not parse %r with format %r", text, self.format)
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


def _run_length(fmt: str, index: int) -> int:
    end = index
    while end < len(fmt) and fmt[end] == fmt[index]:
        end += 1
    return end - index


def _fraction(length: int, optional: bool) -> tuple[str, str | None]:
    regex = rf"\d{{0,{length}}}" if optional else rf"\d{{{length}}}"
    # strptime's %f reads at most six digits
    return regex, "%f" if length <= 6 and not optional else None


def compile_timestamp_format(fmt: str) -> TimestampFormat:
    """Compile a .NET custom date/time format string.

    Raises ``ValueError`` for an empty format or an unterminated quoted literal.
    """
    if not fmt:
        raise ValueError("Timestamp format must not be empty")

    regex_parts: list[str] = []
    strptime_parts: list[str] | None = []
    i = 0
    while i < len(fmt):
        char = fmt[i]
        if char in ("'", '"'):
            end = fmt.find(char, i + 1)
            if end == -1:
                raise ValueError(f"Unterminated literal in timestamp format: {fmt!r}")
            literal = fmt[i + 1 : end]
            regex_parts.append(re.escape(literal))
            if strptime_parts is not None:
                strptime_parts.append(literal.replace("%", "%%"))
            i = end + 1
            continue
        if char == "\\" and i + 1 < len(fmt):
            regex_parts.append(re.escape(fmt[i + 1]))
            if strptime_parts is not None:
                strptime_parts.append(fmt[i + 1].replace("%", "%%"))
            i += 2
            continue
        if char == "%" and i + 1 < len(fmt):
            # single-specifier prefix, e.g. "%d"
            i += 1
            continue

        length = _run_length(fmt, i)
        if char in ("f", "F"):
            regex, directive = _fraction(length, optional=char == "F")
        elif char in _SPECIFIERS:
            table = _SPECIFIERS[char]
            regex, directive = table.get(length, table[max(table)])
            if char == "y" and length > 4:
                regex, directive = rf"\d{{{length}}}", "%Y"
        else:
            literal = char * length
            regex, directive = re.escape(literal), literal.replace("%", "%%")

        regex_parts.append(regex)
        if directive is None:
            strptime_parts = None
        elif strptime_parts is not None:
            strptime_parts.append(directive)
        i += length

    return TimestampFormat(
        format=fmt,
        pattern="".join(regex_parts),
        strptime_format="".join(strptime_parts) if strptime_parts is not None else None,
    )
