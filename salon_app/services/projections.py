"""Derived views of the appointment collection.

Everything here is recomputed on each render. No function mutates its input
and none raises on malformed records: a date or time that does not parse is
simply never matched and sorts last.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, Sequence

from salon_app.services.appointments import (
    Appointment,
    AppointmentStatus,
    parse_date,
    parse_time,
)


@dataclass(frozen=True)
class AppointmentStats:
    total: int = 0
    scheduled: int = 0
    completed: int = 0
    cancelled: int = 0
    today_count: int = 0


def search_filter(items: Iterable[Appointment], query: str | None) -> list[Appointment]:
    needle = (query or "").casefold()
    if not needle:
        return list(items)
    return [appt for appt in items if needle in appt.client_name.casefold()]


def filter_by_date(items: Iterable[Appointment], selected_date: str | None) -> list[Appointment]:
    if not selected_date:
        return list(items)
    return [appt for appt in items if appt.date == selected_date]


def _instant(appt: Appointment) -> tuple[int, dt.datetime]:
    day = parse_date(appt.date)
    clock = parse_time(appt.time)
    if day is None or clock is None:
        return (1, dt.datetime.min)
    return (0, dt.datetime.combine(day, clock))


def sort_chronological(items: Iterable[Appointment]) -> list[Appointment]:
    # sorted() is stable, so equal instants keep their input order.
    return sorted(items, key=_instant)


def group_by_date(items: Iterable[Appointment]) -> dict[str, list[Appointment]]:
    groups: dict[str, list[Appointment]] = {}
    for appt in items:
        groups.setdefault(appt.date, []).append(appt)
    return groups


def compute_stats(items: Sequence[Appointment], today: dt.date | None = None) -> AppointmentStats:
    today_str = (today or dt.date.today()).isoformat()
    counts = {status: 0 for status in AppointmentStatus}
    today_count = 0
    for appt in items:
        if appt.status in counts:
            counts[appt.status] += 1
        if appt.date == today_str:
            today_count += 1
    return AppointmentStats(
        total=len(items),
        scheduled=counts[AppointmentStatus.SCHEDULED],
        completed=counts[AppointmentStatus.COMPLETED],
        cancelled=counts[AppointmentStatus.CANCELLED],
        today_count=today_count,
    )


def project(
    items: Iterable[Appointment],
    query: str | None = "",
    selected_date: str | None = None,
) -> list[Appointment]:
    """List view pipeline: search, then date scope, then chronological order."""
    return sort_chronological(filter_by_date(search_filter(items, query), selected_date))


def appointments_on(items: Iterable[Appointment], date: str | None) -> list[Appointment]:
    """Appointments of one calendar day in time order; empty when no day is given."""
    if not date:
        return []
    return sort_chronological(filter_by_date(items, date))


__all__ = [
    "AppointmentStats",
    "appointments_on",
    "compute_stats",
    "filter_by_date",
    "group_by_date",
    "project",
    "search_filter",
    "sort_chronological",
]
