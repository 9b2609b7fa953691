import logging
from typing import Iterable, Optional, Tuple

from tracker.domain import Transaction
from tracker.errors import TransactionNotFoundError
from tracker.events import (
    SAVE_FAILED,
    STORE_REPLACED,
    TRANSACTION_DELETED,
    TRANSACTION_SAVED,
    EventBus,
)
from tracker.functional import Maybe, find_transaction
from tracker.transforms import remove_transaction, upsert_transaction

logger = logging.getLogger(__name__)


class TransactionStore:
    """Ordered in-memory transactions mirrored to a storage collaborator.

    storage: object with load() -> sequence of Transaction and
             save(sequence) -> bool
    bus: optional EventBus notified after each mutation
    """

    def __init__(self, storage, bus: Optional[EventBus] = None):
        self.storage = storage
        self.bus = bus
        self._items: Tuple[Transaction, ...] = ()

    def load(self) -> Tuple[Transaction, ...]:
        self._items = tuple(self.storage.load())
        logger.info("store initialised with %d transaction(s)", len(self._items))
        return self._items

    def get_all(self) -> Tuple[Transaction, ...]:
        return self._items

    def find(self, tx_id: str) -> Maybe[Transaction]:
        return find_transaction(self._items, tx_id)

    def get(self, tx_id: str) -> Transaction:
        found = self.find(tx_id)
        if found.is_none():
            raise TransactionNotFoundError(tx_id)
        return found.get_or_else(None)

    def __contains__(self, tx_id: str) -> bool:
        return self.find(tx_id).is_some()

    def __len__(self) -> int:
        return len(self._items)

    def upsert(self, t: Transaction) -> bool:
        created = t.id not in self
        self._items = upsert_transaction(self._items, t)
        logger.debug("%s transaction %s", "added" if created else "replaced", t.id)
        saved = self._persist("upsert")
        self._publish(TRANSACTION_SAVED, {"id": t.id, "created": created})
        return saved

    def delete(self, tx_id: str) -> bool:
        if tx_id not in self:
            logger.debug("delete of unknown transaction %s ignored", tx_id)
            return True
        self._items = remove_transaction(self._items, tx_id)
        saved = self._persist("delete")
        self._publish(TRANSACTION_DELETED, {"id": tx_id})
        return saved

    def replace_all(self, items: Iterable[Transaction]) -> bool:
        self._items = tuple(items)
        logger.debug("store replaced with %d transaction(s)", len(self._items))
        saved = self._persist("replace_all")
        self._publish(STORE_REPLACED, {"count": len(self._items)})
        return saved

    def _persist(self, operation: str) -> bool:
        # memory state is kept even when the write fails
        saved = bool(self.storage.save(self._items))
        if not saved:
            logger.warning("persisting after %s failed; changes may not be saved", operation)
            self._publish(SAVE_FAILED, {"operation": operation})
        return saved

    def _publish(self, name: str, payload: dict) -> None:
        if self.bus is not None:
            self.bus.publish(name, payload)
