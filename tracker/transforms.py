from functools import reduce
from typing import Tuple

from tracker.domain import Amount, Transaction


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return trans + (t,)


def upsert_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    # replaced records keep their position
    if any(x.id == t.id for x in trans):
        return tuple(t if x.id == t.id else x for x in trans)
    return add_transaction(trans, t)


def remove_transaction(
    trans: Tuple[Transaction, ...], tx_id: str
) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.id != tx_id, trans))


def income_transactions(trans: Tuple[Transaction, ...]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.is_income, trans))


def expense_transactions(trans: Tuple[Transaction, ...]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.is_expense, trans))


def total_amount(trans: Tuple[Transaction, ...]) -> Amount:
    return reduce(lambda acc, t: acc + t.amount, trans, 0)
