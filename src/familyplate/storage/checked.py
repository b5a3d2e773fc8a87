"""Checked-item state for shopping lists, behind a small key-value interface."""

import json
import os
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from familyplate.config import get_settings
from familyplate.logging_config import get_logger
from familyplate.models import CheckedStateRecord

logger = get_logger(__name__)


class CheckedStateError(Exception):
    """Raised when checked state cannot be read from or written to its store."""

    def __init__(self, message: str, storage_key: str | None = None):
        super().__init__(message)
        self.storage_key = storage_key


def coerce_state(raw: Any) -> dict[str, bool]:
    """
    Turn stored data into a name -> checked map.

    Accepts the current map format and the older list-of-checked-names
    format. Anything else is treated as empty.
    """
    if isinstance(raw, dict):
        return {str(k): bool(v) for k, v in raw.items()}
    if isinstance(raw, list):
        return {str(name): True for name in raw}
    return {}


class CheckedStateStore(ABC):
    """Abstract key-value store for checked state."""

    @abstractmethod
    def get(self, key: str) -> dict[str, bool]:
        """Return the checked map stored under key, empty if none."""
        pass

    @abstractmethod
    def set(self, key: str, state: dict[str, bool]) -> None:
        """Replace the checked map stored under key."""
        pass

    @abstractmethod
    def clear(self, key: str) -> None:
        """Remove everything stored under key."""
        pass


class MemoryCheckedStateStore(CheckedStateStore):
    """Process-local store, mainly for tests and single-process use."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, bool]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> dict[str, bool]:
        with self._lock:
            return dict(self._data.get(key, {}))

    def set(self, key: str, state: dict[str, bool]) -> None:
        with self._lock:
            self._data[key] = dict(state)

    def clear(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class JsonFileCheckedStateStore(CheckedStateStore):
    """All storage keys in one JSON document on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable checked-state file {self.path}: {e}")
            return {}
        except OSError as e:
            raise CheckedStateError(f"Failed to read {self.path}: {e}") from e
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict[str, Any]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, ensure_ascii=False, sort_keys=True), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise CheckedStateError(f"Failed to write {self.path}: {e}") from e

    def get(self, key: str) -> dict[str, bool]:
        with self._lock:
            return coerce_state(self._read_all().get(key))

    def set(self, key: str, state: dict[str, bool]) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = dict(state)
            self._write_all(data)

    def clear(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)


class SqlCheckedStateStore(CheckedStateStore):
    """One row per storage key in the shopping_list_checked_state table."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> dict[str, bool]:
        try:
            with self.session_factory() as session:
                record = session.scalar(
                    select(CheckedStateRecord).where(CheckedStateRecord.storage_key == key)
                )
                return coerce_state(record.state) if record else {}
        except SQLAlchemyError as e:
            raise CheckedStateError(f"Failed to load checked state: {e}", storage_key=key) from e

    def set(self, key: str, state: dict[str, bool]) -> None:
        try:
            with self.session_factory() as session:
                record = session.get(CheckedStateRecord, key)
                if record is None:
                    session.add(CheckedStateRecord(storage_key=key, state=dict(state)))
                else:
                    record.state = dict(state)
                session.commit()
        except SQLAlchemyError as e:
            raise CheckedStateError(f"Failed to save checked state: {e}", storage_key=key) from e

    def clear(self, key: str) -> None:
        try:
            with self.session_factory() as session:
                record = session.get(CheckedStateRecord, key)
                if record is not None:
                    session.delete(record)
                    session.commit()
        except SQLAlchemyError as e:
            raise CheckedStateError(f"Failed to clear checked state: {e}", storage_key=key) from e


def storage_key_for(
    share_token: str | None = None,
    user_id: str | None = None,
    prefix: str | None = None,
) -> str:
    """
    Storage key for a shopping list's checked state.

    Shared links get their own key so everyone on the link sees the same
    ticks; otherwise the key is per user, with an anonymous fallback.
    """
    prefix = prefix or get_settings().checked_state_key_prefix
    if share_token:
        return f"{prefix}:share:{share_token}"
    if user_id:
        return f"{prefix}:user:{user_id}"
    return prefix


class ShoppingChecklist:
    """Checked state of one shopping list, written through on every change."""

    def __init__(self, store: CheckedStateStore, storage_key: str):
        self.store = store
        self.storage_key = storage_key
        self._state: dict[str, bool] = {}

    @property
    def state(self) -> dict[str, bool]:
        return dict(self._state)

    def load(self) -> dict[str, bool]:
        """Read the stored state. Call once when the list is opened."""
        self._state = self.store.get(self.storage_key)
        return self.state

    def is_checked(self, normalized_name: str) -> bool:
        return self._state.get(normalized_name, False)

    def set_checked(self, normalized_name: str, checked: bool) -> bool:
        """Set one item and persist the whole map."""
        if checked:
            self._state[normalized_name] = True
        else:
            self._state.pop(normalized_name, None)
        self.store.set(self.storage_key, self._state)
        return checked

    def toggle(self, normalized_name: str) -> bool:
        """Flip one item; returns its new state."""
        return self.set_checked(normalized_name, not self.is_checked(normalized_name))

    def reset(self) -> None:
        """Uncheck everything."""
        self._state = {}
        self.store.clear(self.storage_key)


@lru_cache
def get_checked_state_store() -> CheckedStateStore:
    """Process-wide store chosen by settings."""
    settings = get_settings()
    backend = settings.checked_state_backend.lower()

    if backend == "json":
        logger.info(f"Using JSON checked-state store at {settings.checked_state_path}")
        return JsonFileCheckedStateStore(settings.checked_state_path)
    if backend == "sql":
        from familyplate.database import SessionLocal, init_db

        init_db()
        logger.info("Using SQL checked-state store")
        return SqlCheckedStateStore(SessionLocal)
    if backend != "memory":
        logger.warning(f"Unknown checked_state_backend {backend!r}, using memory")
    return MemoryCheckedStateStore()
