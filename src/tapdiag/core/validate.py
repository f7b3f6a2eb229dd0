"""Record-parser validation workflow.

Loads and checks the configuration, resolves the requested source to a
sample file, splits that file with the source's record parser and judges
the outcome from the number of records produced.
"""

from __future__ import annotations

import logging
from typing import Any

from tapdiag.core.config_loader import load_config_file
from tapdiag.core.config_validator import ConfigValidator
from tapdiag.core.detect import detect_records, is_valid_split
from tapdiag.core.log_loader import load_log
from tapdiag.core.ports.config import ConfigLoader, ConfigSchemaValidator
from tapdiag.core.sources import ResolvedSource, resolve_source
from tapdiag.errors import (
    ConfigLoadError,
    DiagnosticError,
    SampleFileError,
    SchemaValidationError,
    UnsupportedSourceError,
)
from tapdiag.models import LogRecord, RecordParserKind, ValidationResult
from tapdiag.settings import Settings

logger = logging.getLogger(__name__)

INVALID_CONFIG_MESSAGE = "Invalid configuration file format detected."

_VERDICT_LABELS = {
    RecordParserKind.TIMESTAMP: "Timestamp format",
    RecordParserKind.REGEX: "Regex",
}


class RecordParserValidator:
    def __init__(
        self,
        config_loader: ConfigLoader = load_config_file,
        config_validator: ConfigSchemaValidator | None = None,
        log_encoding: str = "utf-8-sig",
    ) -> None:
        self._load_config_file = config_loader
        self._config_validator = config_validator if config_validator is not None else ConfigValidator()
        self._log_encoding = log_encoding

    @classmethod
    def from_settings(cls, settings: Settings) -> RecordParserValidator:
        return cls(
            config_validator=ConfigValidator(settings.schema_file),
            log_encoding=settings.log_encoding,
        )

    def load_config(self, config_base_directory: str, config_file_name: str) -> dict[str, Any]:
        """Load and schema-validate the configuration.

        Raises ``ConfigLoadError`` or ``SchemaValidationError``.
        """
        config = self._load_config_file(config_base_directory, config_file_name)
        is_valid, schema_messages = self._config_validator.schema_validate(
            config_base_directory, config_file_name, config
        )
        if not is_valid:
            for message in schema_messages:
                logger.warning("%s", message)
            raise SchemaValidationError(INVALID_CONFIG_MESSAGE)
        return config

    def collect_records(
        self, config: dict[str, Any], source_id: str, log_name: str | None = None
    ) -> tuple[ResolvedSource, list[LogRecord]]:
        """Resolve ``source_id`` and split its sample file into records.

        Raises any ``DiagnosticError`` met on the way.
        """
        resolved = resolve_source(config, source_id, log_name)
        content = load_log(resolved.sample_file, self._log_encoding)
        records = detect_records(resolved.kind, content, resolved.source)
        logger.info("Detected %d record(s) in %s", len(records), resolved.sample_file)
        return resolved, records

    def validate_record_parser(
        self,
        source_id: str,
        log_name: str | None,
        config_base_directory: str,
        config_file_name: str,
    ) -> ValidationResult:
        """Check that the source's record parser splits its sample log into several records.

        Never raises for diagnostic failures: every outcome is reported through
        the returned result's ``passed`` flag and ``messages``.
        """
        messages: list[str] = []

        try:
            config = self.load_config(config_base_directory, config_file_name)
        except (ConfigLoadError, OSError, ValueError) as e:
            # injected loaders may raise their own I/O or parse errors
            messages.append(str(e))
            return ValidationResult(passed=False, messages=messages)
        except SchemaValidationError:
            messages.append(INVALID_CONFIG_MESSAGE)
            return ValidationResult(passed=False, messages=messages)

        try:
            resolved, records = self.collect_records(config, source_id, log_name)
        except UnsupportedSourceError as e:
            messages.append(str(e))
            return ValidationResult(passed=True, messages=messages)
        except SampleFileError as e:
            messages.append(str(e))
            messages.extend(str(candidate) for candidate in e.candidates)
            return ValidationResult(passed=False, messages=messages)
        except DiagnosticError as e:
            messages.append(str(e))
            return ValidationResult(passed=False, messages=messages)

        label = _VERDICT_LABELS[resolved.kind]
        if is_valid_split(records):
            messages.append(f"Valid {label} at source ID: {source_id}")
            return ValidationResult(passed=True, messages=messages)

        messages.append(f"Invalid {label} at source ID: {source_id}")
        return ValidationResult(passed=False, messages=messages)
