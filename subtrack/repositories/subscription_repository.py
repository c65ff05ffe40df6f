import logging
from typing import Any, Protocol

from sqlalchemy.orm import Session

from subtrack.models.subscription import Subscription, dump_subscriptions, load_subscriptions
from subtrack.models.subscription_record import SubscriptionRecord

logger = logging.getLogger(__name__)


class SubscriptionStore(Protocol):
    """Key-value persistence of whole subscription collections, keyed by user."""

    def load(self, user_id: str) -> list[Subscription]: ...

    def save(self, user_id: str, subscriptions: list[Subscription]) -> None: ...


class InMemorySubscriptionStore:
    """Process-local store holding serialized collections."""

    def __init__(self) -> None:
        self._records: dict[str, list[dict[str, Any]]] = {}

    def load(self, user_id: str) -> list[Subscription]:
        return load_subscriptions(self._records.get(user_id, []))

    def save(self, user_id: str, subscriptions: list[Subscription]) -> None:
        self._records[user_id] = dump_subscriptions(subscriptions)


class SqlSubscriptionStore:
    """Store backed by the ``subscription_records`` table, one row per user."""

    def __init__(self, db: Session):
        self.db = db

    def get_record(self, user_id: str) -> SubscriptionRecord | None:
        return self.db.query(SubscriptionRecord).filter(SubscriptionRecord.user_id == user_id).first()

    def load(self, user_id: str) -> list[Subscription]:
        record = self.get_record(user_id)
        if not record:
            return []
        return load_subscriptions(record.records or [])

    def save(self, user_id: str, subscriptions: list[Subscription]) -> None:
        payload = dump_subscriptions(subscriptions)
        record = self.get_record(user_id)
        if record is None:
            record = SubscriptionRecord(user_id=user_id, records=payload)
            self.db.add(record)
        else:
            record.records = payload  # type: ignore[assignment]
        self.db.commit()
        logger.debug("Saved %d subscriptions for user %s", len(payload), user_id)
