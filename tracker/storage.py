"""Local persistence for the transaction store.

Transactions are kept as a JSON list under a versioned storage key so that a
future schema can live next to (and never silently load) older data.
"""

import json
import logging
import math
from datetime import date
from pathlib import Path
from typing import Iterable, Tuple

from tracker.domain import Kind, Transaction
from tracker.errors import StorageError

logger = logging.getLogger(__name__)

STORAGE_KEY = "expense_data_v3"


def encode_transaction(t: Transaction) -> dict:
    return {
        "id": t.id,
        "title": t.title,
        "desc": t.description,
        "amount": t.amount,
        "type": t.kind.value,
        "category": t.category,
        "date": t.date.isoformat(),
    }


def decode_transaction(record: dict) -> Transaction:
    try:
        amount = record["amount"]
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise TypeError(f"amount must be a number, got {amount!r}")
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(f"amount must be a non-negative magnitude, got {amount!r}")
        return Transaction(
            id=str(record["id"]),
            title=str(record["title"]),
            description=record.get("desc") or "",
            amount=amount,
            kind=Kind(record["type"]),
            category=record.get("category") or "",
            date=date.fromisoformat(record["date"]),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise StorageError(f"Malformed transaction record: {e}") from e


class MemoryStorage:
    """Keeps encoded records in memory; used when no data file is wanted."""

    def __init__(self, records: Iterable[dict] = ()):
        self.records = list(records)

    def load(self) -> Tuple[Transaction, ...]:
        try:
            return tuple(decode_transaction(r) for r in self.records)
        except StorageError as e:
            logger.warning("discarding stored transactions: %s", e)
            return ()

    def save(self, transactions: Iterable[Transaction]) -> bool:
        self.records = [encode_transaction(t) for t in transactions]
        return True


class JsonFileStorage:
    def __init__(self, path, key: str = STORAGE_KEY):
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> dict:
        with open(self.path, "r", encoding="utf-8") as f:
            doc = json.load(f)
        if not isinstance(doc, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return doc

    def load(self) -> Tuple[Transaction, ...]:
        """Return stored transactions, or an empty tuple if there is nothing usable."""
        if not self.path.exists():
            return ()

        try:
            records = self._read_document().get(self.key)
            if records is None:
                return ()
            if not isinstance(records, list):
                raise StorageError(f"{self.key} is not a list")
            transactions = tuple(decode_transaction(r) for r in records)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, StorageError) as e:
            logger.warning("could not load %s from %s: %s", self.key, self.path, e)
            return ()

        logger.debug("loaded %d transaction(s) from %s", len(transactions), self.path)
        return transactions

    def save(self, transactions: Iterable[Transaction]) -> bool:
        """Write the full sequence; returns False when the file cannot be written."""
        try:
            doc = self._read_document() if self.path.exists() else {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, StorageError):
            doc = {}
        doc[self.key] = [encode_transaction(t) for t in transactions]

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(doc, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.warning("could not save %s to %s: %s", self.key, self.path, e)
            return False
        return True
