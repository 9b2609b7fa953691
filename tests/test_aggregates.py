from datetime import date

from tracker.aggregates import (
    MONTH_LABELS,
    category_totals,
    cumulative_trend,
    monthly_totals,
    summarize,
)
from tracker.domain import Summary

from helpers import make_tx, scenario


def test_summary_scenario():
    s = summarize(scenario(), today=date(2025, 2, 20))
    assert s == Summary(
        total_income=40000,
        total_expense=2200,
        balance=37800,
        current_month_expense=2200,
    )


def test_balance_is_income_minus_expense():
    trans = scenario() + (make_tx("t4", "Rent", 50000, "expense", "Home", "2025-03-01"),)
    s = summarize(trans, today=date(2025, 3, 1))
    assert s.balance == s.total_income - s.total_expense
    assert s.balance == -12200


def test_current_month_expense_ignores_year():
    trans = (
        make_tx("a", "x", 100, "expense", "c", "2023-02-10"),
        make_tx("b", "x", 50, "expense", "c", "2025-02-10"),
        make_tx("c", "x", 70, "income", "c", "2025-02-10"),
        make_tx("d", "x", 10, "expense", "c", "2025-03-10"),
    )
    assert summarize(trans, today=date(2025, 2, 1)).current_month_expense == 150


def test_category_totals_scenario():
    assert category_totals(scenario()) == {"Food": 1800, "Entertainment": 400}


def test_category_totals_exclude_income_and_sum_to_total_expense():
    trans = scenario() + (
        make_tx("t4", "Snacks", 200, "expense", "Food", "2025-03-01"),
        make_tx("t5", "Food stall sale", 999, "income", "Food", "2025-03-02"),
    )
    totals = category_totals(trans)
    assert totals == {"Food": 2000, "Entertainment": 400}
    assert "Salary" not in totals
    assert sum(totals.values()) == summarize(trans).total_expense


def test_monthly_totals_scenario():
    months = monthly_totals(scenario())
    assert len(months) == 12
    assert months[1] == 2200
    assert sum(months) == 2200


def test_monthly_totals_fold_years_together():
    trans = (
        make_tx("a", "x", 100, "expense", "c", "2024-12-01"),
        make_tx("b", "x", 20, "expense", "c", "2025-12-31"),
        make_tx("c", "x", 5, "income", "c", "2025-12-31"),
        make_tx("d", "x", 1, "expense", "c", "2025-01-31"),
    )
    months = monthly_totals(trans)
    assert months[11] == 120
    assert months[0] == 1


def test_cumulative_trend_scenario():
    trend = cumulative_trend(scenario())
    assert list(trend.points()) == [("05/02/2025", 1800), ("07/02/2025", 2200)]


def test_cumulative_trend_sorted_and_stable():
    trans = (
        make_tx("late", "x", 30, "expense", "c", "2025-03-01"),
        make_tx("tie1", "x", 10, "expense", "c", "2025-01-15"),
        make_tx("tie2", "x", 5, "expense", "c", "2025-01-15"),
        make_tx("inc", "x", 1000, "income", "c", "2025-01-01"),
    )
    trend = cumulative_trend(trans)
    assert trend.labels == ("15/01/2025", "15/01/2025", "01/03/2025")
    assert trend.values == (10, 15, 45)
    assert all(a <= b for a, b in zip(trend.values, trend.values[1:]))
    assert trend.values[-1] == summarize(trans).total_expense


def test_empty_input():
    s = summarize((), today=date(2025, 1, 1))
    assert s == Summary(0, 0, 0, 0)
    assert category_totals(()) == {}
    assert monthly_totals(()) == (0,) * 12
    trend = cumulative_trend(())
    assert trend.labels == () and trend.values == ()


def test_month_labels():
    assert len(MONTH_LABELS) == 12
    assert MONTH_LABELS[0] == "Jan" and MONTH_LABELS[11] == "Dec"
