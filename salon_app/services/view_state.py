"""Transient view selectors carried in the query string.

Nothing here is persisted: search text, view mode, selected day and the
displayed calendar month only live in the URL of the current page.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from typing import Any, Mapping

from salon_app.services.appointments import parse_date
from salon_app.services.calendar_grid import shift_month, toggle_date

VIEW_MODES = ("list", "calendar")


def _int_arg(args: Mapping[str, Any], name: str, low: int, high: int) -> int | None:
    raw = args.get(name)
    if raw in (None, ""):
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if low <= value <= high else None


@dataclass(frozen=True)
class ViewState:
    view: str
    q: str
    date: str | None
    year: int
    month: int

    @classmethod
    def from_args(cls, args: Mapping[str, Any], today: dt.date | None = None) -> "ViewState":
        today = today or dt.date.today()
        view = (args.get("view") or "list").lower()
        if view not in VIEW_MODES:
            view = "list"
        q = args.get("q") or ""
        selected = args.get("date") or None
        anchor = parse_date(selected) if selected else None
        if anchor is None:
            selected = None
            anchor = today
        year = _int_arg(args, "year", 1, 9999) or anchor.year
        month = _int_arg(args, "month", 1, 12) or anchor.month
        return cls(view=view, q=q, date=selected, year=year, month=month)

    def navigate_month(self, delta: int) -> "ViewState":
        year, month = shift_month(self.year, self.month, delta)
        return replace(self, year=year, month=month, date=None)

    def select_date(self, clicked: str | None) -> "ViewState":
        return replace(self, date=toggle_date(self.date, clicked))

    def with_view(self, view: str) -> "ViewState":
        if view not in VIEW_MODES:
            raise ValueError(f"unknown view mode: {view}")
        if view == "list":
            return replace(self, view=view, date=None)
        return replace(self, view=view)

    def to_args(self) -> dict[str, Any]:
        args: dict[str, Any] = {}
        if self.view != "list":
            args["view"] = self.view
            args["year"] = self.year
            args["month"] = self.month
        if self.q:
            args["q"] = self.q
        if self.date:
            args["date"] = self.date
        return args


__all__ = ["ViewState", "VIEW_MODES"]
