from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import NamedTuple, Optional, Tuple, Union

Amount = Union[int, float]


class Kind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class MonthMode(str, Enum):
    ALL = "all"
    THIS_MONTH = "this"
    PREVIOUS_MONTH = "prev"
    LAST_3_MONTHS = "3months"
    THIS_YEAR = "year"


@dataclass(frozen=True)
class Transaction:
    id: str
    title: str
    amount: Amount     # magnitude, sign comes from kind
    kind: Kind
    category: str
    date: date
    description: str = ""

    @property
    def is_expense(self) -> bool:
        return self.kind is Kind.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.kind is Kind.INCOME


@dataclass(frozen=True)
class FilterCriteria:
    search_text: str = ""
    category: Optional[str] = None
    kind: Optional[Kind] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    month_mode: MonthMode = MonthMode.ALL

    def is_active(self) -> bool:
        return bool(
            self.search_text
            or self.category
            or self.kind is not None
            or self.date_from is not None
            or self.date_to is not None
            or self.month_mode is not MonthMode.ALL
        )


@dataclass(frozen=True)
class Summary:
    total_income: Amount
    total_expense: Amount
    balance: Amount
    current_month_expense: Amount


class Trend(NamedTuple):
    labels: Tuple[str, ...]
    values: Tuple[Amount, ...]

    def points(self):
        return zip(self.labels, self.values)
