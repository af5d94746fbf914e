import pytest

from magsday import metrics
from magsday.sync import Mirrors

PAYMENTS = [
    {"id": "a", "title": "Rent", "amount": 1200.0, "dueDate": "2026-11-01", "isPaid": False},
    {"id": "b", "title": "Gym", "amount": "45.5", "dueDate": "2026-10-20", "isPaid": True},
    {"id": "c", "title": "Phone", "amount": 30.0, "dueDate": "2026-11-01", "isPaid": True},
    {"id": "d", "title": "Gift", "amount": None, "dueDate": None},
]


def test_format_amount():
    assert metrics.format_amount(1234.5, "₦") == "₦1,234.50"
    assert metrics.format_amount("oops", "$") == "$0.00"


def test_payment_totals():
    totals = metrics.payment_totals(PAYMENTS)
    assert totals["paid"] == pytest.approx(75.5)
    assert totals["outstanding"] == pytest.approx(1200.0)
    assert totals["total"] == pytest.approx(1275.5)
    assert totals["unpaid_count"] == 2


def test_payment_totals_empty():
    assert metrics.payment_totals([]) == {"total": 0.0, "paid": 0.0, "outstanding": 0.0, "unpaid_count": 0}


def test_amounts_by_due_date_groups_and_sorts():
    grouped = metrics.amounts_by_due_date(PAYMENTS)
    assert list(grouped["dueDate"]) == ["2026-10-20", "2026-11-01"]
    assert list(grouped["paid"]) == pytest.approx([45.5, 30.0])
    assert list(grouped["outstanding"]) == pytest.approx([0.0, 1200.0])
    assert metrics.amounts_by_due_date([]).empty


def test_schedules_sorted_by_date_then_time_with_untimed_last():
    schedules = [
        {"id": "1", "date": "2026-10-19", "time": None},
        {"id": "2", "date": "2026-10-19", "time": "08:00"},
        {"id": "3", "date": "2026-10-18", "time": "20:00"},
        {"id": "4", "date": None, "time": "07:00"},
    ]
    assert [row["id"] for row in metrics.sort_schedules(schedules)] == ["3", "2", "1", "4"]
    assert [row["id"] for row in metrics.schedules_for_day(schedules, "2026-10-19")] == ["2", "1"]


def test_accomplishments_newest_first():
    items = [
        {"id": "old", "date": "2026-10-01"},
        {"id": "new", "date": "2026-10-19", "createdAt": "2026-10-19T08:00:00"},
        {"id": "newer", "date": "2026-10-19", "createdAt": "2026-10-19T09:00:00"},
    ]
    assert [row["id"] for row in metrics.sort_accomplishments(items)] == ["newer", "new", "old"]


def test_dashboard_summary():
    mirrors = Mirrors(
        schedules=[{"title": "Standup", "date": "2026-10-19", "time": "09:00"}, {"title": "Later", "date": "2026-10-25"}],
        payments=PAYMENTS,
        accomplishments=[{"text": "Ran", "date": "2026-10-19"}, {"text": "Read", "date": "2026-10-01"}],
    )
    summary = metrics.dashboard_summary(mirrors, "2026-10-19")
    assert [row["title"] for row in summary["today_schedules"]] == ["Standup"]
    assert summary["schedule_count"] == 2
    assert summary["unpaid_count"] == 2
    assert summary["outstanding"] == pytest.approx(1200.0)
    assert summary["accomplishment_count"] == 2
    assert summary["accomplished_today"] == 1
