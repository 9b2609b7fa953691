from datetime import date
from typing import Callable, Tuple
from uuid import uuid4

from tracker.domain import Kind, Transaction


def new_id() -> str:
    return uuid4().hex


def sample_transactions(id_factory: Callable[[], str] = new_id) -> Tuple[Transaction, ...]:
    return (
        Transaction(
            id=id_factory(), title="Salary", description="Month pay",
            amount=40000, kind=Kind.INCOME, category="Salary",
            date=date(2025, 2, 1),
        ),
        Transaction(
            id=id_factory(), title="Groceries", description="Rice oil veggies",
            amount=1800, kind=Kind.EXPENSE, category="Food",
            date=date(2025, 2, 5),
        ),
        Transaction(
            id=id_factory(), title="Movie", description="",
            amount=400, kind=Kind.EXPENSE, category="Entertainment",
            date=date(2025, 2, 7),
        ),
    )
