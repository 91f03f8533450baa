"""
Expense List Codec

Converts an ordered list of expense items to and from the persisted
byte format: a UTF-8 JSON array of {"id", "name", "type", "price"}
records.

Any decode problem - invalid UTF-8, invalid JSON, wrong shape, a record
missing a field - is reported as DataCorruptError. Records without an
"id" get a fresh one.
"""

from typing import Iterable

from pydantic import TypeAdapter, ValidationError

from cashapp.models.item import ExpenseItem
from cashapp.services.storage.interface import DataCorruptError


_ITEM_LIST = TypeAdapter(list[ExpenseItem])


def encode_items(items: Iterable[ExpenseItem]) -> bytes:
    """Serialize items, preserving order."""
    return _ITEM_LIST.dump_json(list(items), by_alias=True)


def decode_items(data: bytes) -> list[ExpenseItem]:
    """
    Deserialize items, preserving order.
    
    Raises:
        DataCorruptError: If the bytes are not a valid item list
    """
    try:
        return _ITEM_LIST.validate_json(data)
    except ValidationError as e:
        raise DataCorruptError(
            f"Invalid expense data ({e.error_count()} errors): {e.errors()[0]['msg']}"
        )
    except ValueError as e:
        raise DataCorruptError(f"Invalid expense data: {e}")
