"""Domain errors – malformed requests and constraint violations."""

from __future__ import annotations

from typing import Any

from blocked_numbers.kernel.errors.base import BaseError


class DomainError(BaseError):
    """A blocklist rule rejected the request before anything was written."""

    default_code = "domain_error"


class InvalidArgumentError(DomainError):
    """The request is malformed: missing or forbidden column, bad reference,
    filter combined with an item reference, argument count mismatch.
    """

    default_code = "invalid_argument"

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self._add_detail(field=field)


class ConstraintViolationError(DomainError):
    """The write collides with an existing record (``original_number`` taken)."""

    default_code = "constraint_violation"

    def __init__(self, message: str, *, constraint: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.constraint = constraint
        self._add_detail(constraint=constraint)


__all__ = [
    "ConstraintViolationError",
    "DomainError",
    "InvalidArgumentError",
]
