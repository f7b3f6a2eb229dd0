from __future__ import annotations

from typing import Any, Protocol


class ConfigLoader(Protocol):
    def __call__(self, base_directory: str, file_name: str) -> dict[str, Any]: ...


class ConfigSchemaValidator(Protocol):
    def schema_validate(
        self, base_directory: str, file_name: str, document: dict[str, Any]
    ) -> tuple[bool, list[str]]: ...


class SourceValidator(Protocol):
    def validate(self, source: dict[str, Any], messages: list[str]) -> bool: ...
