"""Local key-value storage used as the appointment book's durable slot.

The contract mirrors a browser's local storage: string keys, string values,
``None`` for a missing key, whole-value overwrite on write.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from salon_app.extensions import db
from salon_app.models import StorageSlot

log = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when the backing store cannot be read or written."""


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage; lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class SQLAlchemyStorage:
    """Storage slots kept in the ``storage_slots`` table of the app database.

    Must be used inside an application context.
    """

    def get_item(self, key: str) -> str | None:
        try:
            slot = db.session.get(StorageSlot, key)
        except SQLAlchemyError as exc:
            raise StorageError(f"could not read slot {key!r}: {exc}") from exc
        return slot.value if slot is not None else None

    def set_item(self, key: str, value: str) -> None:
        session = db.session
        try:
            slot = session.get(StorageSlot, key)
            if slot is None:
                slot = StorageSlot(key=key, value=value)
                session.add(slot)
            else:
                slot.value = value
            slot.updated_at = dt.datetime.now()
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(f"could not write slot {key!r}: {exc}") from exc
        log.debug("Wrote %d bytes to slot %s", len(value), key)


def storage_from_config(backend: str) -> KeyValueStorage:
    backend = (backend or "sqlalchemy").lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "sqlalchemy":
        return SQLAlchemyStorage()
    raise ValueError(f"unknown storage backend: {backend}")


__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "SQLAlchemyStorage",
    "StorageError",
    "storage_from_config",
]
