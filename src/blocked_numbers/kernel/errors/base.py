"""Root error class for the blocked-numbers error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Every error carries a stable machine-readable ``code`` next to the
    human-readable message, plus a ``detail`` mapping that subclasses fill
    with the context of the failure (offending field, constraint name, ...).

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Extra context; must be JSON-serialisable for logging.
        cause: Lower-level exception that triggered this error.
    """

    default_code: str = "blocked_numbers_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def _add_detail(self, **context: Any) -> None:
        self.detail.update({key: value for key, value in context.items() if value is not None})

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code}: {self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for structured logs and API payloads."""
        payload: dict[str, Any] = {
            "type": type(self).__name__,
            "code": self.code,
            "message": self.message,
        }
        if self.detail:
            payload["detail"] = dict(self.detail)
        if self.cause is not None:
            payload["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return payload


__all__ = ["BaseError"]
