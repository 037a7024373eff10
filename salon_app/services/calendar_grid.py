"""Month grid for the calendar view."""

from __future__ import annotations

import calendar
import datetime as dt
from dataclasses import dataclass, field
from typing import Iterable

from salon_app.services.appointments import Appointment
from salon_app.services.projections import filter_by_date

MAX_MARKERS = 3


@dataclass(frozen=True)
class DayCell:
    day: int
    date: str
    is_today: bool = False
    is_selected: bool = False
    appointment_count: int = 0

    @property
    def has_appointments(self) -> bool:
        return self.appointment_count > 0

    @property
    def markers(self) -> int:
        return min(self.appointment_count, MAX_MARKERS)


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    offset: int
    days_in_month: int
    cells: list[DayCell | None] = field(default_factory=list)

    @property
    def day_cells(self) -> list[DayCell]:
        return [cell for cell in self.cells if cell is not None]


def date_key(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def month_layout(year: int, month: int, first_weekday: int = calendar.SUNDAY) -> tuple[int, int]:
    """Return (leading blank cells, number of days) for a 1-based month."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    weekday_of_first, days_in_month = calendar.monthrange(year, month)
    offset = (weekday_of_first - first_weekday) % 7
    return offset, days_in_month


def build_month_grid(
    year: int,
    month: int,
    appointments: Iterable[Appointment],
    selected_date: str | None = None,
    today: dt.date | None = None,
    first_weekday: int = calendar.SUNDAY,
) -> MonthGrid:
    offset, days_in_month = month_layout(year, month, first_weekday)
    today_str = (today or dt.date.today()).isoformat()
    items = list(appointments)

    cells: list[DayCell | None] = [None] * offset
    for day in range(1, days_in_month + 1):
        key = date_key(year, month, day)
        cells.append(
            DayCell(
                day=day,
                date=key,
                is_today=key == today_str,
                is_selected=key == selected_date,
                appointment_count=len(filter_by_date(items, key)),
            )
        )
    return MonthGrid(
        year=year,
        month=month,
        offset=offset,
        days_in_month=days_in_month,
        cells=cells,
    )


def weeks(grid: MonthGrid) -> list[list[DayCell | None]]:
    """Chunk the cells into rows of seven, padding the last row."""
    cells = list(grid.cells)
    if cells and len(cells) % 7:
        cells.extend([None] * (7 - len(cells) % 7))
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def toggle_date(selected: str | None, clicked: str | None) -> str | None:
    if clicked is None or clicked == selected:
        return None
    return clicked


__all__ = [
    "DayCell",
    "MAX_MARKERS",
    "MonthGrid",
    "build_month_grid",
    "date_key",
    "month_layout",
    "shift_month",
    "toggle_date",
    "weeks",
]
