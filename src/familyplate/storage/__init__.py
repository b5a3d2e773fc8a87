"""Persistence for shopping list checked state."""

from familyplate.storage.checked import (
    CheckedStateError,
    CheckedStateStore,
    JsonFileCheckedStateStore,
    MemoryCheckedStateStore,
    ShoppingChecklist,
    SqlCheckedStateStore,
    get_checked_state_store,
    storage_key_for,
)

__all__ = [
    "CheckedStateError",
    "CheckedStateStore",
    "JsonFileCheckedStateStore",
    "MemoryCheckedStateStore",
    "ShoppingChecklist",
    "SqlCheckedStateStore",
    "get_checked_state_store",
    "storage_key_for",
]
