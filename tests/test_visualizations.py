from magsday.metrics import amounts_by_due_date
from magsday.theme import THEME_PRESETS, get_theme
from magsday.visualizations import payments_by_due_date_chart


def test_unknown_theme_falls_back_to_default():
    assert get_theme("sepia") == ("dark", THEME_PRESETS["dark"])
    assert get_theme("light")[0] == "light"


def test_payments_chart_stacks_paid_and_outstanding():
    grouped = amounts_by_due_date(
        [
            {"id": "a", "amount": 100.0, "dueDate": "2026-10-20", "isPaid": True},
            {"id": "b", "amount": 40.0, "dueDate": "2026-10-20", "isPaid": False},
        ]
    )
    fig = payments_by_due_date_chart(grouped, "£", THEME_PRESETS["light"])

    assert [trace.name for trace in fig.data] == ["Paid", "Outstanding"]
    assert list(fig.data[0].y) == [100.0]
    assert list(fig.data[1].y) == [40.0]
    assert fig.layout.barmode == "stack"
    assert fig.layout.yaxis.tickprefix == "£"
