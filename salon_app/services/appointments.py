"""Appointment records and the store that owns them.

The whole collection is the unit of persistence: every mutation rewrites one
storage slot with the JSON array of records, in insertion order.
"""

from __future__ import annotations

import datetime as dt
import enum
import json
import logging
import re
import threading
from dataclasses import dataclass, replace
from typing import Any
from uuid import uuid4

from salon_app.services.storage import KeyValueStorage, StorageError

log = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "daminails-appointments"

_TIME_RE = re.compile(r"^(\d{2}):(\d{2})$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_RECORD_KEYS = frozenset({"id", "clientName", "date", "time", "status"})


class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AppointmentError(Exception):
    """Base error for appointment operations."""


class AppointmentValidationError(AppointmentError):
    """The submitted fields cannot be admitted into the collection."""


def parse_date(value: Any) -> dt.date | None:
    """Return the calendar date of a ``YYYY-MM-DD`` string, or None."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        return None


def parse_time(value: Any) -> dt.time | None:
    """Return the time of an ``HH:MM`` string, or None."""
    if not isinstance(value, str):
        return None
    match = _TIME_RE.match(value)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return dt.time(hour, minute)


@dataclass(frozen=True)
class AppointmentDraft:
    client_name: str
    date: str
    time: str


@dataclass(frozen=True)
class Appointment:
    id: str
    client_name: str
    date: str
    time: str
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "clientName": self.client_name,
            "date": self.date,
            "time": self.time,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "Appointment":
        """Build a record from its stored form, checking every field."""
        if not isinstance(raw, dict):
            raise AppointmentValidationError("record is not an object")
        if set(raw) != _RECORD_KEYS:
            raise AppointmentValidationError(f"unexpected record keys: {sorted(raw)}")
        for key in _RECORD_KEYS:
            if not isinstance(raw[key], str):
                raise AppointmentValidationError(f"field {key} is not a string")
        if not raw["id"]:
            raise AppointmentValidationError("empty id")
        try:
            status = AppointmentStatus(raw["status"])
        except ValueError as exc:
            raise AppointmentValidationError(f"unknown status {raw['status']!r}") from exc
        client_name, date, time = _clean_fields(raw["clientName"], raw["date"], raw["time"])
        return cls(id=raw["id"], client_name=client_name, date=date, time=time, status=status)


def _clean_fields(client_name: Any, date: Any, time: Any) -> tuple[str, str, str]:
    name = client_name.strip() if isinstance(client_name, str) else ""
    if not name:
        raise AppointmentValidationError("appointment_error_client_name")
    if not date or parse_date(date) is None:
        raise AppointmentValidationError("appointment_error_date")
    if not time or parse_time(time) is None:
        raise AppointmentValidationError("appointment_error_time")
    return name, date, time


def _coerce_status(status: Any) -> AppointmentStatus:
    try:
        return AppointmentStatus(status)
    except ValueError as exc:
        raise AppointmentValidationError("appointment_error_status") from exc


class AppointmentStore:
    """Authoritative, insertion-ordered appointment collection.

    Validation happens before any state change; unknown ids are silent
    no-ops. Each mutation and its write hold one re-entrant lock. Writes
    are best effort: a failed write is logged and the in-memory collection
    keeps the mutation.
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self._items: list[Appointment] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._items)

    def all(self) -> list[Appointment]:
        return list(self._items)

    def get(self, appt_id: str) -> Appointment | None:
        for appt in self._items:
            if appt.id == appt_id:
                return appt
        return None

    def load(self) -> list[Appointment]:
        try:
            raw = self.storage.get_item(self.key)
        except StorageError as exc:
            log.warning("Could not read appointments from slot %s: %s", self.key, exc)
            raw = None
        with self._lock:
            self._items = self._decode(raw) if raw is not None else []
        log.info("Loaded %d appointments from slot %s", len(self._items), self.key)
        return self.all()

    def _decode(self, raw: str) -> list[Appointment]:
        try:
            data = json.loads(raw)
        except ValueError as exc:
            log.warning("Stored appointments are not valid JSON, starting empty: %s", exc)
            return []
        if not isinstance(data, list):
            log.warning("Stored appointments are not a list, starting empty")
            return []
        items: list[Appointment] = []
        seen: set[str] = set()
        for index, entry in enumerate(data):
            try:
                appt = Appointment.from_dict(entry)
            except AppointmentValidationError as exc:
                log.warning("Stored appointment #%d rejected (%s), starting empty", index, exc)
                return []
            if appt.id in seen:
                log.warning("Duplicate stored appointment id %s, starting empty", appt.id)
                return []
            seen.add(appt.id)
            items.append(appt)
        return items

    def persist(self) -> None:
        with self._lock:
            payload = json.dumps([appt.to_dict() for appt in self._items], ensure_ascii=False)
            try:
                self.storage.set_item(self.key, payload)
            except StorageError:
                log.exception("Failed to persist %d appointments", len(self._items))

    def _new_id(self) -> str:
        appt_id = uuid4().hex
        while self.get(appt_id) is not None:
            appt_id = uuid4().hex
        return appt_id

    def _index_of(self, appt_id: str) -> int | None:
        for index, appt in enumerate(self._items):
            if appt.id == appt_id:
                return index
        return None

    def add(self, draft: AppointmentDraft) -> Appointment:
        client_name, date, time = _clean_fields(draft.client_name, draft.date, draft.time)
        with self._lock:
            appt = Appointment(
                id=self._new_id(),
                client_name=client_name,
                date=date,
                time=time,
                status=AppointmentStatus.SCHEDULED,
            )
            self._items.append(appt)
            log.info("Added appointment %s on %s %s", appt.id, appt.date, appt.time)
            self.persist()
        return appt

    def update(self, record: Appointment) -> Appointment | None:
        with self._lock:
            index = self._index_of(record.id)
            if index is None:
                log.debug("Update ignored, no appointment %s", record.id)
                return None
            client_name, date, time = _clean_fields(record.client_name, record.date, record.time)
            status = _coerce_status(record.status)
            updated = replace(
                self._items[index], client_name=client_name, date=date, time=time, status=status
            )
            self._items[index] = updated
            log.info("Updated appointment %s", updated.id)
            self.persist()
        return updated

    def set_status(self, appt_id: str, status: AppointmentStatus | str) -> Appointment | None:
        with self._lock:
            current = self.get(appt_id)
            if current is None:
                log.debug("Status change ignored, no appointment %s", appt_id)
                return None
            return self.update(replace(current, status=_coerce_status(status)))

    def remove(self, appt_id: str) -> bool:
        with self._lock:
            index = self._index_of(appt_id)
            if index is None:
                log.debug("Delete ignored, no appointment %s", appt_id)
                return False
            del self._items[index]
            log.info("Removed appointment %s", appt_id)
            self.persist()
        return True


__all__ = [
    "Appointment",
    "AppointmentDraft",
    "AppointmentError",
    "AppointmentStatus",
    "AppointmentStore",
    "AppointmentValidationError",
    "DEFAULT_STORAGE_KEY",
    "parse_date",
    "parse_time",
]
