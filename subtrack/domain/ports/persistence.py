from __future__ import annotations

import uuid
from typing import List, Protocol

from ..models import Subscription


class SubscriptionRepository(Protocol):
    """Abstract storage for subscription records.

    Implementations raise ``NotFoundError`` for unknown ids and wrap backend
    failures in ``StorageError``.
    """

    def create(self, subscription: Subscription) -> uuid.UUID:
        ...

    def get_by_id(self, subscription_id: uuid.UUID) -> Subscription:
        ...

    def update(self, subscription: Subscription) -> None:
        ...

    def delete(self, subscription_id: uuid.UUID) -> None:
        ...

    def list(self) -> List[Subscription]:
        ...

    def close(self) -> None:
        ...
