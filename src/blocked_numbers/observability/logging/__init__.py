"""Observability – structured logging helpers."""
from blocked_numbers.observability.logging.factory import configure_logging, shared_processors
from blocked_numbers.observability.logging.filters import (
    DEFAULT_SENSITIVE_FIELDS,
    SensitiveFieldsFilter,
    mask_value,
)
from blocked_numbers.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "SensitiveFieldsFilter",
    "configure_logging",
    "get_logger",
    "mask_value",
    "shared_processors",
]
