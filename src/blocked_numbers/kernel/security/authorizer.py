"""Kernel security – Authorizer capability."""
from __future__ import annotations

from typing import Protocol


class Authorizer(Protocol):
    """Port: decide whether the current caller may use the blocklist.

    The host supplies the implementation (user profile checks, app
    operation gating); the blocklist only asks.
    """

    def can_block_numbers(self) -> bool: ...


class AllowAllAuthorizer:
    """Grants every request. Used when the host does no gating."""

    def can_block_numbers(self) -> bool:
        return True


__all__ = ["AllowAllAuthorizer", "Authorizer"]
