"""Infrastructure errors – backend rejections and capability failures."""

from __future__ import annotations

from typing import Any

from blocked_numbers.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """A lower layer (expression parser, platform capability) failed."""

    default_code = "infrastructure_error"


class SelectionSyntaxError(InfrastructureError):
    """A filter expression was rejected by the expression parser.

    Raised for anything outside the allow-listed grammar, including
    multi-statement or schema-changing text. ``position`` is the character
    offset of the offending token.
    """

    default_code = "selection_syntax_error"

    def __init__(
        self,
        message: str,
        *,
        selection: str | None = None,
        position: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.selection = selection
        self.position = position
        self._add_detail(position=position)


class CountryDetectionError(InfrastructureError):
    """The current-country capability could not produce an answer."""

    default_code = "country_detection_error"


__all__ = [
    "CountryDetectionError",
    "InfrastructureError",
    "SelectionSyntaxError",
]
