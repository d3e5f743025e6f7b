import threading
import uuid
from dataclasses import replace
from typing import Dict, List

from ...domain.errors import NotFoundError
from ...domain.models import Subscription
from ...domain.ports.persistence import SubscriptionRepository


class InMemorySubscriptionRepository(SubscriptionRepository):
    """Dictionary-backed repository; records keep insertion order."""

    def __init__(self) -> None:
        self._records: Dict[uuid.UUID, Subscription] = {}
        self._lock = threading.Lock()

    def create(self, subscription: Subscription) -> uuid.UUID:
        with self._lock:
            subscription_id = uuid.uuid4()
            while subscription_id in self._records:
                subscription_id = uuid.uuid4()
            self._records[subscription_id] = replace(subscription, id=subscription_id)
        return subscription_id

    def get_by_id(self, subscription_id: uuid.UUID) -> Subscription:
        with self._lock:
            record = self._records.get(subscription_id)
        if record is None:
            raise NotFoundError(subscription_id)
        return replace(record)

    def update(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription.id not in self._records:
                raise NotFoundError(subscription.id)
            self._records[subscription.id] = replace(subscription)

    def delete(self, subscription_id: uuid.UUID) -> None:
        with self._lock:
            if self._records.pop(subscription_id, None) is None:
                raise NotFoundError(subscription_id)

    def list(self) -> List[Subscription]:
        with self._lock:
            return [replace(record) for record in self._records.values()]

    def close(self) -> None:
        with self._lock:
            self._records.clear()
