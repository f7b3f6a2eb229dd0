"""Error classes for tapdiag.

Every error raised by the diagnostic core derives from ``DiagnosticError``.
The validation orchestrator converts them into result messages; the CLI
turns the outcome into an exit code.
"""

from pathlib import Path


class DiagnosticError(Exception):
    """Base exception for all diagnostic errors."""


class ConfigLoadError(DiagnosticError):
    """Raised when the configuration file is missing or malformed."""


class SchemaValidationError(DiagnosticError):
    """Raised when the configuration does not match the expected structure."""


class SourceNotFoundError(DiagnosticError):
    """Raised when no source entry has the requested id."""

    def __init__(self, source_id: str) -> None:
        self.source_id = source_id
        super().__init__(f"Source ID not found: {source_id}")


class UnsupportedSourceError(DiagnosticError):
    """Raised when a source exists but there is nothing for this tool to check.

    Not a failure: the orchestrator reports it as a passing result.
    """


class SampleFileError(DiagnosticError):
    """Raised when a single sample file cannot be chosen for a source."""

    def __init__(self, message: str, candidates: list[Path] | None = None) -> None:
        self.candidates = candidates or []
        super().__init__(message)


class LogLoadError(DiagnosticError):
    """Raised when the sample log cannot be read."""


class RecordParserConfigError(DiagnosticError):
    """Raised when a record parser cannot be built from the source fields."""
