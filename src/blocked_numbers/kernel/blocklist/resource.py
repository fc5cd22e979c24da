"""Resource references: the whole collection or a single record.

``"blocked_numbers/blocked"`` names the collection and
``"blocked_numbers/blocked/42"`` names the record with id 42.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Final

from blocked_numbers.kernel.blocklist.record import parse_integer

AUTHORITY: Final = "blocked_numbers"
CONTENT_REF: Final = f"{AUTHORITY}/blocked"


class RecordType(str, Enum):
    COLLECTION = "collection"
    ITEM = "item"


@dataclasses.dataclass(frozen=True, slots=True)
class ResourceRef:
    """A parsed resource reference; ``record_id`` is ``None`` for the collection."""

    record_id: int | None = None

    @property
    def record_type(self) -> RecordType:
        return RecordType.COLLECTION if self.record_id is None else RecordType.ITEM

    def __str__(self) -> str:
        return CONTENT_REF if self.record_id is None else f"{CONTENT_REF}/{self.record_id}"


def item_ref(record_id: int) -> str:
    """Return the reference string of the record with *record_id*."""
    return str(ResourceRef(record_id))


def parse_ref(ref: str | None) -> ResourceRef | None:
    """Parse *ref*, returning ``None`` when it names nothing this store serves."""
    if not ref:
        return None
    path = ref.strip()
    if path == CONTENT_REF:
        return ResourceRef()
    prefix = CONTENT_REF + "/"
    if not path.startswith(prefix):
        return None
    tail = path[len(prefix):]
    if not tail.isascii() or not tail.isdigit():
        return None
    record_id = parse_integer(tail)
    return None if record_id is None else ResourceRef(record_id)


def get_record_type(ref: str | None) -> RecordType | None:
    parsed = parse_ref(ref)
    return None if parsed is None else parsed.record_type


__all__ = [
    "AUTHORITY",
    "CONTENT_REF",
    "RecordType",
    "ResourceRef",
    "get_record_type",
    "item_ref",
    "parse_ref",
]
