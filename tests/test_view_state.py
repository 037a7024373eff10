import datetime as dt

import pytest

from salon_app.services.view_state import ViewState

TODAY = dt.date(2024, 3, 10)


def test_defaults():
    state = ViewState.from_args({}, today=TODAY)
    assert state == ViewState(view="list", q="", date=None, year=2024, month=3)
    assert state.to_args() == {}


def test_malformed_args_fall_back():
    state = ViewState.from_args(
        {"view": "grid", "date": "2024-02-31", "year": "abc", "month": "13", "q": "  ana "},
        today=TODAY,
    )
    assert state == ViewState(view="list", q="  ana ", date=None, year=2024, month=3)


def test_selected_date_anchors_month():
    state = ViewState.from_args({"view": "calendar", "date": "2023-11-05"}, today=TODAY)
    assert (state.year, state.month) == (2023, 11)


def test_navigate_month_clears_selection():
    state = ViewState("calendar", "", "2024-12-05", 2024, 12)
    moved = state.navigate_month(1)
    assert (moved.year, moved.month, moved.date) == (2025, 1, None)
    back = state.navigate_month(-1)
    assert (back.year, back.month, back.date) == (2024, 11, None)


def test_select_date_toggles():
    state = ViewState("calendar", "", None, 2024, 3)
    picked = state.select_date("2024-03-10")
    assert picked.date == "2024-03-10"
    assert picked.select_date("2024-03-10").date is None


def test_switching_to_list_clears_selection():
    state = ViewState("calendar", "ana", "2024-03-10", 2024, 3)
    assert state.with_view("list").date is None
    assert state.with_view("calendar").date == "2024-03-10"
    with pytest.raises(ValueError):
        state.with_view("agenda")


def test_to_args_round_trip():
    state = ViewState("calendar", "ana", "2024-03-10", 2024, 3)
    assert ViewState.from_args(state.to_args(), today=dt.date(2030, 1, 1)) == state
