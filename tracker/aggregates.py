from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, Optional, Tuple

from tracker.domain import Amount, Summary, Transaction, Trend
from tracker.transforms import expense_transactions, income_transactions, total_amount

MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

TREND_DATE_FORMAT = "%d/%m/%Y"


def summarize(trans: Iterable[Transaction], today: Optional[date] = None) -> Summary:
    """Income, expense and balance totals plus this month's spending.

    The current-month figure matches on month only, so the same month of any
    year is counted.
    """
    trans = tuple(trans)
    month = (today or date.today()).month
    expenses = expense_transactions(trans)

    income = total_amount(income_transactions(trans))
    expense = total_amount(expenses)
    month_expense = total_amount(tuple(t for t in expenses if t.date.month == month))

    return Summary(
        total_income=income,
        total_expense=expense,
        balance=income - expense,
        current_month_expense=month_expense,
    )


def category_totals(trans: Iterable[Transaction]) -> Dict[str, Amount]:
    totals: Dict[str, Amount] = {}
    for t in expense_transactions(tuple(trans)):
        totals[t.category] = totals.get(t.category, 0) + t.amount
    return totals


def monthly_totals(trans: Iterable[Transaction]) -> Tuple[Amount, ...]:
    """Expense per calendar month, index 0 = January, all years folded together."""
    totals: Dict[int, Amount] = defaultdict(int)
    for t in expense_transactions(tuple(trans)):
        totals[t.date.month - 1] += t.amount
    return tuple(totals[m] for m in range(12))


def cumulative_trend(trans: Iterable[Transaction]) -> Trend:
    ordered = sorted(expense_transactions(tuple(trans)), key=lambda t: t.date)

    labels = []
    values = []
    running: Amount = 0
    for t in ordered:
        running += t.amount
        labels.append(t.date.strftime(TREND_DATE_FORMAT))
        values.append(running)

    return Trend(labels=tuple(labels), values=tuple(values))
