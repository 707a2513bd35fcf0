"""Normalization helpers for raw API records."""

from typing import Any, Dict, Mapping, Optional


def apply_defaults(values: Mapping[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """Replace missing or null values with the entry from a defaults table.

    Keys absent from ``defaults`` are passed through untouched, so required
    fields such as ``id`` still fail validation when missing.
    """
    normalized = dict(values)
    for key, default in defaults.items():
        if normalized.get(key) is None:
            normalized[key] = default
    return normalized


def nested_value(record: Mapping[str, Any], parent: str, key: str) -> Optional[Any]:
    """Look up ``record[parent][key]``, tolerating a missing or non-mapping parent."""
    container = record.get(parent)
    if not isinstance(container, Mapping):
        return None
    return container.get(key)
