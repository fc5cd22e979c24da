"""Observability – redaction of phone numbers in log events.

Blocked numbers and screened callers are personal data. Every value logged
under one of the sensitive keys is masked, keeping only the last two
characters so that operators can still tell entries apart.
"""
from __future__ import annotations

from typing import Any

#: Log keys carrying phone numbers or caller identifiers.
DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "number", "query", "original_number", "e164_number", "stripped_number",
})

MASK = "***"


def mask_value(value: Any) -> Any:
    """``"+15004541111"`` becomes ``"***11"``; short or empty values become ``"***"``."""
    if value is None:
        return None
    text = str(value)
    return MASK + text[-2:] if len(text) > 4 else MASK


class SensitiveFieldsFilter:
    """structlog processor masking sensitive keys, at any nesting depth."""

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = frozenset(f.lower() for f in (sensitive_fields or DEFAULT_SENSITIVE_FIELDS))

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: mask_value(item) if str(key).lower() in self._fields else self._scrub(item)
                for key, item in value.items()
            }
        if isinstance(value, (list, tuple)):
            return type(value)(self._scrub(item) for item in value)
        return value

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._scrub(data)

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        return self._scrub(event_dict)


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "MASK", "SensitiveFieldsFilter", "mask_value"]
