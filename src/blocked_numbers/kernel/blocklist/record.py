"""Blocked number records and their column names."""

from __future__ import annotations

import dataclasses
from typing import Any, Final

COLUMN_ID: Final = "id"
COLUMN_ORIGINAL_NUMBER: Final = "original_number"
COLUMN_E164_NUMBER: Final = "e164_number"
COLUMN_STRIPPED_NUMBER: Final = "stripped_number"

#: Every column that filters and sort orders may reference.
COLUMNS: Final = (COLUMN_ID, COLUMN_ORIGINAL_NUMBER, COLUMN_E164_NUMBER, COLUMN_STRIPPED_NUMBER)

#: Columns a client may supply on insert.
WRITABLE_COLUMNS: Final = frozenset({COLUMN_ORIGINAL_NUMBER, COLUMN_E164_NUMBER})

#: Columns the store derives itself; supplying them is an error.
SYSTEM_COLUMNS: Final = frozenset({COLUMN_ID, COLUMN_STRIPPED_NUMBER})

#: Bounds of a signed 64-bit INTEGER column.
INTEGER_MIN: Final = -(2**63)
INTEGER_MAX: Final = 2**63 - 1


def fits_integer(value: int) -> bool:
    return INTEGER_MIN <= value <= INTEGER_MAX


def parse_integer(text: str) -> int | None:
    """Parse ``[-]digits``; ``None`` when malformed or outside the INTEGER range."""
    sign, digits = ("-", text[1:]) if text.startswith("-") else ("", text)
    if not digits.isascii() or not digits.isdigit():
        return None
    significant = digits.lstrip("0") or "0"
    if len(significant) > 19:
        return None
    value = int(sign + significant)
    return value if fits_integer(value) else None


@dataclasses.dataclass(frozen=True, slots=True)
class NewBlockedNumber:
    """A validated, fully derived record that has not been persisted yet."""

    original_number: str
    stripped_number: str
    e164_number: str | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class BlockedNumberRecord:
    """One persisted blocklist entry. Records are never modified in place."""

    id: int
    original_number: str
    stripped_number: str
    e164_number: str | None = None

    @classmethod
    def from_new(cls, record_id: int, new: NewBlockedNumber) -> "BlockedNumberRecord":
        return cls(
            id=record_id,
            original_number=new.original_number,
            stripped_number=new.stripped_number,
            e164_number=new.e164_number,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            COLUMN_ID: self.id,
            COLUMN_ORIGINAL_NUMBER: self.original_number,
            COLUMN_E164_NUMBER: self.e164_number,
            COLUMN_STRIPPED_NUMBER: self.stripped_number,
        }


__all__ = [
    "BlockedNumberRecord",
    "COLUMNS",
    "COLUMN_E164_NUMBER",
    "COLUMN_ID",
    "COLUMN_ORIGINAL_NUMBER",
    "COLUMN_STRIPPED_NUMBER",
    "INTEGER_MAX",
    "INTEGER_MIN",
    "NewBlockedNumber",
    "SYSTEM_COLUMNS",
    "WRITABLE_COLUMNS",
    "fits_integer",
    "parse_integer",
]
