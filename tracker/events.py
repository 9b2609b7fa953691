import logging
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = [
    'TRANSACTION_SAVED', 'TRANSACTION_DELETED', 'STORE_REPLACED', 'SAVE_FAILED',
    'Event', 'EventBus',
]

logger = logging.getLogger(__name__)

TRANSACTION_SAVED = "TRANSACTION_SAVED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
STORE_REPLACED = "STORE_REPLACED"
SAVE_FAILED = "SAVE_FAILED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], object]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: dict) -> List[object]:
        handlers = self._subscribers.get(name)
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        logger.debug("publishing %s to %d handler(s)", name, len(handlers))
        return [handler(event, payload) for handler in list(handlers)]
