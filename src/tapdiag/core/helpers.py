from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


def get_key(mapping: Mapping[str, Any], key: str) -> Any:
    """Case-insensitive lookup, first matching key wins."""
    for k, value in mapping.items():
        if str(k).lower() == key.lower():
            return value
    return None


def schema_property_names(schema: Any) -> Iterator[str]:
    """Yield every property name declared anywhere in a JSON schema."""
    if isinstance(schema, dict):
        properties = schema.get("properties")
        if isinstance(properties, dict):
            yield from properties
        for value in schema.values():
            yield from schema_property_names(value)
    elif isinstance(schema, list):
        for item in schema:
            yield from schema_property_names(item)


def canonicalize_keys(value: Any, canonical_keys: Mapping[str, str]) -> Any:
    """Return a copy of ``value`` with object keys respelled by ``canonical_keys``.

    ``canonical_keys`` maps lower-cased names to their canonical spelling.
    Unknown keys are kept as written. When two keys differ only by case the
    first one wins, matching ``get_key``.
    """
    if isinstance(value, list):
        return [canonicalize_keys(item, canonical_keys) for item in value]
    if not isinstance(value, dict):
        return value
    result: dict[str, Any] = {}
    for key, item in value.items():
        name = canonical_keys.get(str(key).lower(), str(key))
        if name not in result:
            result[name] = canonicalize_keys(item, canonical_keys)
    return result
