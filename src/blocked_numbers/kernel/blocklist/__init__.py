"""Kernel blocklist – records, resource references, filters and backend ports."""
from blocked_numbers.kernel.blocklist.record import (
    COLUMNS,
    COLUMN_E164_NUMBER,
    COLUMN_ID,
    COLUMN_ORIGINAL_NUMBER,
    COLUMN_STRIPPED_NUMBER,
    INTEGER_MAX,
    INTEGER_MIN,
    SYSTEM_COLUMNS,
    WRITABLE_COLUMNS,
    BlockedNumberRecord,
    NewBlockedNumber,
    fits_integer,
    parse_integer,
)
from blocked_numbers.kernel.blocklist.resource import (
    AUTHORITY,
    CONTENT_REF,
    RecordType,
    ResourceRef,
    get_record_type,
    item_ref,
    parse_ref,
)
from blocked_numbers.kernel.blocklist.selection import (
    Expr,
    SortKey,
    all_of,
    column_equals,
    id_equals,
    parse_selection,
    parse_sort_order,
)
from blocked_numbers.kernel.blocklist.table import (
    BlockedNumberReader,
    BlockedNumberTable,
    BlockedNumberWriter,
)

__all__ = [
    "AUTHORITY",
    "BlockedNumberReader",
    "BlockedNumberRecord",
    "BlockedNumberTable",
    "BlockedNumberWriter",
    "COLUMNS",
    "COLUMN_E164_NUMBER",
    "COLUMN_ID",
    "COLUMN_ORIGINAL_NUMBER",
    "COLUMN_STRIPPED_NUMBER",
    "CONTENT_REF",
    "INTEGER_MAX",
    "INTEGER_MIN",
    "Expr",
    "NewBlockedNumber",
    "RecordType",
    "ResourceRef",
    "SYSTEM_COLUMNS",
    "SortKey",
    "WRITABLE_COLUMNS",
    "all_of",
    "column_equals",
    "fits_integer",
    "get_record_type",
    "id_equals",
    "item_ref",
    "parse_integer",
    "parse_ref",
    "parse_selection",
    "parse_sort_order",
]
