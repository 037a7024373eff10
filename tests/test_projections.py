import datetime as dt

from salon_app.services.appointments import AppointmentStatus
from salon_app.services.projections import (
    AppointmentStats,
    appointments_on,
    compute_stats,
    filter_by_date,
    group_by_date,
    project,
    search_filter,
    sort_chronological,
)

from conftest import appt


def test_search_is_case_insensitive_substring():
    items = [appt("1", name="María Ana López"), appt("2", name="Bea"), appt("3", name="DIANA")]
    assert [a.id for a in search_filter(items, "ana")] == ["1", "3"]
    assert [a.id for a in search_filter(items, "ANA")] == ["1", "3"]


def test_search_query_is_not_trimmed():
    items = [appt("1", name="María Ana López"), appt("2", name="DIANA")]
    assert [a.id for a in search_filter(items, "ana ")] == ["1"]


def test_empty_search_keeps_everything():
    items = [appt("1"), appt("2")]
    assert search_filter(items, "") == items
    assert search_filter(items, None) == items


def test_date_filter_exact_match():
    items = [appt("1", date="2024-01-01"), appt("2", date="2024-01-02"), appt("3", date="2024-01-01")]
    assert [a.id for a in filter_by_date(items, "2024-01-01")] == ["1", "3"]
    assert filter_by_date(items, None) == items
    assert filter_by_date(items, "garbage") == []


def test_sort_is_chronological_and_stable():
    a = appt("A", date="2024-01-01", time="09:00")
    b = appt("B", date="2024-01-01", time="09:00")
    late = appt("late", date="2024-01-01", time="18:30")
    early = appt("early", date="2023-12-31", time="23:59")
    assert sort_chronological([late, a, b, early]) == [early, a, b, late]
    assert sort_chronological([a, b]) == [a, b]


def test_sort_puts_unparseable_records_last_without_raising():
    bad = appt("bad", date="not-a-date")
    good = appt("good", date="2030-01-01")
    worse = appt("worse", time="25:99")
    assert sort_chronological([bad, good, worse]) == [good, bad, worse]


def test_projection_functions_do_not_mutate_input():
    items = [appt("2", date="2024-02-02"), appt("1", date="2024-02-01")]
    snapshot = list(items)
    project(items, "an", "2024-02-01")
    sort_chronological(items)
    group_by_date(items)
    assert items == snapshot


def test_grouping_follows_first_seen_order():
    first = appt("1", date="2024-02-02")
    second = appt("2", date="2024-02-01")
    third = appt("3", date="2024-02-02")
    groups = group_by_date([first, second, third])
    assert list(groups) == ["2024-02-02", "2024-02-01"]
    assert groups["2024-02-02"] == [first, third]
    assert groups["2024-02-01"] == [second]


def test_project_applies_search_date_and_sort():
    items = [
        appt("1", name="Ana", date="2024-03-10", time="15:00"),
        appt("2", name="Bea", date="2024-03-10", time="09:00"),
        appt("3", name="Anabel", date="2024-03-10", time="08:00"),
        appt("4", name="Ana", date="2024-03-11", time="07:00"),
    ]
    assert [a.id for a in project(items, "ana", "2024-03-10")] == ["3", "1"]
    assert [a.id for a in project(items)] == ["3", "2", "1", "4"]


def test_appointments_on_needs_a_date():
    items = [appt("1", date="2024-03-10", time="12:00"), appt("2", date="2024-03-10", time="10:00")]
    assert appointments_on(items, None) == []
    assert [a.id for a in appointments_on(items, "2024-03-10")] == ["2", "1"]


def test_stats_count_by_status_and_today():
    items = [
        appt("1", date="2024-03-10"),
        appt("2", date="2024-03-10", status=AppointmentStatus.COMPLETED),
        appt("3", date="2024-03-11", status=AppointmentStatus.CANCELLED),
        appt("4", date="2024-03-09", status=AppointmentStatus.COMPLETED),
    ]
    stats = compute_stats(items, today=dt.date(2024, 3, 10))
    assert stats == AppointmentStats(total=4, scheduled=1, completed=2, cancelled=1, today_count=2)


def test_today_count_uses_given_day():
    on_day = [appt("1", date="2024-03-10")]
    next_day = [appt("2", date="2024-03-11")]
    assert compute_stats(on_day, today=dt.date(2024, 3, 10)).today_count == 1
    assert compute_stats(next_day, today=dt.date(2024, 3, 10)).today_count == 0


def test_stats_of_empty_collection():
    assert compute_stats([], today=dt.date(2024, 3, 10)) == AppointmentStats()
