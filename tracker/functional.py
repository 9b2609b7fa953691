from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, TypeVar

from tracker.domain import Kind, Transaction

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def get_or_else(self, default):
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def get_or_else(self, default):
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def bind(self, f):
        return f(self._value)

    def get_or_else(self, default):
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self):
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def bind(self, f):
        return self

    def get_or_else(self, default):
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self):
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def find_transaction(trans: Iterable[Transaction], tx_id: str) -> Maybe[Transaction]:
    for t in trans:
        if t.id == tx_id:
            return Some(t)
    return Nothing()


def check_title(t: Transaction) -> Either[dict, Transaction]:
    if not t.title or not t.title.strip():
        return Left({
            "error": "missing_title",
            "message": "Transaction title cannot be empty",
            "id": t.id,
        })
    return Right(t)


def check_amount(t: Transaction) -> Either[dict, Transaction]:
    if t.amount < 0:
        return Left({
            "error": "negative_amount",
            "message": f"Amount must be a non-negative magnitude, got {t.amount}",
            "amount": t.amount,
        })
    return Right(t)


def check_category(t: Transaction) -> Either[dict, Transaction]:
    if t.kind is Kind.EXPENSE and not (t.category or "").strip():
        return Left({
            "error": "missing_category",
            "message": f"Expense {t.title} needs a category",
            "id": t.id,
        })
    return Right(t)


def validate_transaction(t: Transaction) -> Either[dict, Transaction]:
    """Run the record checks in order; the first failure wins."""
    return Right(t).bind(check_title).bind(check_amount).bind(check_category)
