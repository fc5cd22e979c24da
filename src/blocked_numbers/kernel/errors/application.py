"""Application errors – operations refused at the provider surface."""

from __future__ import annotations

from typing import Any

from blocked_numbers.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    default_code = "application_error"


class UnsupportedOperationError(ApplicationError):
    """The operation never exists for blocklist records, whatever the input."""

    default_code = "unsupported_operation"

    def __init__(self, message: str, *, operation: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation
        self._add_detail(operation=operation)


class ForbiddenError(ApplicationError):
    """The injected authorizer refused the caller."""

    default_code = "forbidden"

    def __init__(
        self,
        message: str = "Access denied",
        *,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation
        self._add_detail(operation=operation)


__all__ = [
    "ApplicationError",
    "ForbiddenError",
    "UnsupportedOperationError",
]
