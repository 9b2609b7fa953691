from datetime import date

from tracker.domain import Kind, Transaction


def make_tx(id, title, amount, kind, category, when, description=""):
    if isinstance(when, str):
        when = date.fromisoformat(when)
    return Transaction(
        id=id,
        title=title,
        amount=amount,
        kind=Kind(kind),
        category=category,
        date=when,
        description=description,
    )


def scenario():
    return (
        make_tx("t1", "Salary", 40000, "income", "Salary", "2025-02-01", "Month pay"),
        make_tx("t2", "Groceries", 1800, "expense", "Food", "2025-02-05", "Rice oil veggies"),
        make_tx("t3", "Movie", 400, "expense", "Entertainment", "2025-02-07"),
    )
