from typing import Iterable, Optional

from tracker.domain import Transaction

EXPORT_FILENAME = "expenses.csv"
CSV_HEADER = ("Title", "Description", "Amount", "Type", "Category", "Date")


def _quoted(value: str) -> str:
    return '"' + (value or "").replace('"', '""') + '"'


def transaction_to_row(t: Transaction) -> str:
    return ",".join([
        _quoted(t.title),
        _quoted(t.description),
        str(t.amount),
        t.kind.value,
        t.category,
        t.date.isoformat(),
    ])


def transactions_to_csv(trans: Iterable[Transaction]) -> Optional[str]:
    """Render transactions as CSV text, or None when there is nothing to export.

    Title and Description are always quoted; the other columns are written as-is.
    """
    rows = [transaction_to_row(t) for t in trans]
    if not rows:
        return None
    return "\n".join([",".join(CSV_HEADER)] + rows) + "\n"
