"""Predicate filter engine.

Each ``by_*`` factory returns a predicate over a single transaction; the
active ones from a :class:`FilterCriteria` are AND-ed together by
:func:`build_predicate`.
"""

import logging
from datetime import date
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from tracker.domain import FilterCriteria, Kind, MonthMode, Transaction

logger = logging.getLogger(__name__)

Predicate = Callable[[Transaction], bool]


def iter_transactions(
    trans: Iterable[Transaction], pred: Predicate
) -> Iterator[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def by_search_text(text: str) -> Predicate:
    needle = text.lower()

    def _filter(t: Transaction) -> bool:
        return needle in t.title.lower()

    return _filter


def by_category(category: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def by_kind(kind: Kind) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.kind is kind

    return _filter


def by_date_from(start: date) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.date >= start

    return _filter


def by_date_to(end: date) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.date <= end

    return _filter


def months_back(today: date, n: int) -> date:
    """First day of the month ``n`` months before ``today``'s month."""
    index = today.year * 12 + (today.month - 1) - n
    return date(index // 12, index % 12 + 1, 1)


def by_month_mode(mode: MonthMode, today: date) -> Optional[Predicate]:
    """Return the predicate for a relative month window, or None for ALL."""
    if mode is MonthMode.ALL:
        return None

    if mode is MonthMode.THIS_MONTH:
        return lambda t: t.date.month == today.month and t.date.year == today.year

    if mode is MonthMode.PREVIOUS_MONTH:
        # January wraps to December of the *same* year, not the previous one
        prev_month = (today.month - 2) % 12 + 1
        return lambda t: t.date.month == prev_month and t.date.year == today.year

    if mode is MonthMode.LAST_3_MONTHS:
        start = months_back(today, 3)
        return lambda t: t.date >= start

    if mode is MonthMode.THIS_YEAR:
        return lambda t: t.date.year == today.year

    raise ValueError(f"Unknown month mode: {mode!r}")


def active_predicates(criteria: FilterCriteria, today: date) -> List[Predicate]:
    preds: List[Predicate] = []
    if criteria.kind is not None:
        preds.append(by_kind(criteria.kind))
    if criteria.category:
        preds.append(by_category(criteria.category))
    if criteria.date_from is not None:
        preds.append(by_date_from(criteria.date_from))
    if criteria.date_to is not None:
        preds.append(by_date_to(criteria.date_to))
    month_pred = by_month_mode(criteria.month_mode, today)
    if month_pred is not None:
        preds.append(month_pred)
    if criteria.search_text:
        preds.append(by_search_text(criteria.search_text))
    return preds


def build_predicate(criteria: FilterCriteria, today: Optional[date] = None) -> Predicate:
    preds = active_predicates(criteria, today or date.today())

    def _filter(t: Transaction) -> bool:
        return all(p(t) for p in preds)

    return _filter


def filter_transactions(
    trans: Iterable[Transaction],
    criteria: FilterCriteria,
    today: Optional[date] = None,
) -> Tuple[Transaction, ...]:
    result = tuple(iter_transactions(trans, build_predicate(criteria, today)))
    logger.debug("filter %s matched %d transaction(s)", criteria, len(result))
    return result


def available_categories(trans: Iterable[Transaction]) -> List[str]:
    seen = {}
    for t in trans:
        if t.category:
            seen.setdefault(t.category, None)
    return list(seen)
