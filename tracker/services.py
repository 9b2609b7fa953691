import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from tracker.aggregates import category_totals, cumulative_trend, monthly_totals, summarize
from tracker.domain import FilterCriteria, Kind, Transaction
from tracker.errors import InvalidTransactionError
from tracker.export import transactions_to_csv
from tracker.filters import available_categories, filter_transactions
from tracker.functional import validate_transaction
from tracker.sample import new_id, sample_transactions
from tracker.store import TransactionStore

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]
Calculator = Callable[..., Dict[str, Any]]


def calc_summary(trans, today, acc=None):
    return {"summary": summarize(trans, today)}


def calc_by_category(trans, today, acc=None):
    return {"by_category": category_totals(trans)}


def calc_by_month(trans, today, acc=None):
    return {"by_month": monthly_totals(trans)}


def calc_trend(trans, today, acc=None):
    return {"trend": cumulative_trend(trans)}


DEFAULT_CALCULATORS = (calc_summary, calc_by_category, calc_by_month, calc_trend)


def transaction_from_form(form: Dict[str, Any], tx_id: str) -> Transaction:
    when = form["date"]
    if isinstance(when, str):
        when = date.fromisoformat(when)
    return Transaction(
        id=tx_id,
        title=(form.get("title") or "").strip(),
        description=form.get("description") or "",
        amount=form["amount"],
        kind=Kind(form["kind"]),
        category=(form.get("category") or "").strip(),
        date=when,
    )


class TrackerService:
    """Facade the presentation layer talks to.

    calculators: sequence of functions taking (transactions, today, acc) -> dict
    (partial dashboard results); run in order over the full store.
    """

    def __init__(
        self,
        store: TransactionStore,
        calculators: Optional[Sequence[Calculator]] = None,
        id_factory: Callable[[], str] = new_id,
    ):
        self.store = store
        self.calculators = DEFAULT_CALCULATORS if calculators is None else calculators
        self.id_factory = id_factory

    def edit_target(self, tx_id: str) -> Transaction:
        return self.store.get(tx_id)

    def submit(self, form: Dict[str, Any], tx_id: Optional[str] = None) -> Transaction:
        """Create a transaction, or overwrite ``tx_id`` wholesale when editing."""
        if tx_id is not None:
            self.store.get(tx_id)
        t = transaction_from_form(form, tx_id or self.id_factory())

        checked = validate_transaction(t)
        if checked.is_left():
            raise InvalidTransactionError(checked.get_error())

        self.store.upsert(t)
        return t

    def delete(self, tx_id: str, confirm: Confirm) -> bool:
        if not confirm("Delete?"):
            return False
        self.store.delete(tx_id)
        return True

    def clear_all(self, confirm: Confirm) -> bool:
        if not confirm("Clear all?"):
            return False
        self.store.replace_all(())
        logger.info("all transactions cleared")
        return True

    def load_sample_data(self) -> Tuple[Transaction, ...]:
        sample = sample_transactions(self.id_factory)
        self.store.replace_all(sample)
        return sample

    def view(self, criteria: FilterCriteria, today: Optional[date] = None) -> Tuple[Transaction, ...]:
        return filter_transactions(self.store.get_all(), criteria, today)

    def categories(self) -> List[str]:
        return available_categories(self.store.get_all())

    def export_csv(self) -> Optional[str]:
        return transactions_to_csv(self.store.get_all())

    def dashboard(self, today: Optional[date] = None) -> Dict[str, Any]:
        """Run calculators over the full store and collect their outputs."""
        trans = self.store.get_all()
        today = today or date.today()
        report = {"steps": [], "result": {}}

        acc: Dict[str, Any] = {}
        for calc in self.calculators:
            name = getattr(calc, "__name__", str(calc))
            try:
                out = calc(trans, today, acc)
            except Exception as e:
                logger.exception("calculator %s failed", name)
                report["steps"].append({"calculator": name, "error": str(e)})
                continue
            report["steps"].append({"calculator": name, "output": out})
            if isinstance(out, dict):
                acc.update(out)

        report["result"] = acc
        return report
