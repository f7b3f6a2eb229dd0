from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from tapdiag.core.helpers import canonicalize_keys, get_key, schema_property_names
from tapdiag.core.ports.config import SourceValidator
from tapdiag.errors import SchemaValidationError
from tapdiag.models import DIRECTORY_SOURCE
from tapdiag.settings import DEFAULT_SCHEMA_FILE

logger = logging.getLogger(__name__)


class DirectorySourceValidator:
    """Check the fields a directory source cannot work without."""

    def validate(self, source: dict[str, Any], messages: list[str]) -> bool:
        directory = get_key(source, "Directory")
        if isinstance(directory, str) and directory.strip():
            return True
        messages.append(f"Directory is required for DirectorySource at source ID: {get_key(source, 'Id')}")
        return False


def default_source_validators() -> dict[str, SourceValidator]:
    return {DIRECTORY_SOURCE: DirectorySourceValidator()}


class ConfigValidator:
    """Validate a configuration document against a JSON schema and per-source rules."""

    def __init__(
        self,
        schema_path: Path = DEFAULT_SCHEMA_FILE,
        source_validators: dict[str, SourceValidator] | None = None,
    ) -> None:
        self._schema_path = Path(schema_path)
        self._source_validators = default_source_validators() if source_validators is None else source_validators
        self._validator: Draft7Validator | None = None
        self._canonical_keys: dict[str, str] = {}

    def _load_validator(self) -> Draft7Validator:
        if self._validator is not None:
            return self._validator
        try:
            with open(self._schema_path, encoding="utf-8") as f:
                schema = json.load(f)
            Draft7Validator.check_schema(schema)
        except (OSError, json.JSONDecodeError) as e:
            raise SchemaValidationError(f"Failed to load schema {self._schema_path}: {e}") from e
        except SchemaError as e:
            raise SchemaValidationError(f"Invalid schema {self._schema_path}: {e.message}") from e
        self._canonical_keys = {name.lower(): name for name in schema_property_names(schema)}
        self._validator = Draft7Validator(schema)
        return self._validator

    def schema_validate(
        self, base_directory: str, file_name: str, document: dict[str, Any]
    ) -> tuple[bool, list[str]]:
        """Return whether ``document`` is valid, plus one message per problem found.

        Keys are matched case-insensitively against the schema's property
        names, as the agent reads its configuration.
        """
        messages: list[str] = []
        validator = self._load_validator()
        document = canonicalize_keys(document, self._canonical_keys)

        errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path])
        for error in errors:
            messages.append(f"{error.json_path}: {error.message}")
        is_valid = not errors

        sources = get_key(document, "Sources")
        if isinstance(sources, list):
            for source in sources:
                if not isinstance(source, dict):
                    continue
                source_validator = self._source_validators.get(str(get_key(source, "SourceType")))
                if source_validator is not None and not source_validator.validate(source, messages):
                    is_valid = False

        path = Path(base_directory) / file_name
        if is_valid:
            messages.append(f"{file_name} is valid.")
        else:
            logger.warning("Configuration %s failed validation with %d message(s)", path, len(messages))
            messages.append(f"{file_name} is invalid.")
        return is_valid, messages
