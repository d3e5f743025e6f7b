from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from ...domain.errors import StorageError, ValidationError
from ...domain.models import Subscription, month_ordinal
from ...domain.ports.persistence import SubscriptionRepository

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Coordinates subscription CRUD and monthly cost aggregation over a repository."""

    def __init__(
        self,
        repository: SubscriptionRepository,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self._repository = repository
        self._log = log or logger

    # CRUD operations ------------------------------------------------------
    def create(self, subscription: Subscription) -> uuid.UUID:
        subscription.validate()
        self._log.info(
            "Creating subscription for user %s (%s, price=%s)",
            subscription.user_id,
            subscription.service_name,
            subscription.price,
        )
        try:
            subscription_id = self._repository.create(subscription)
        except StorageError as exc:
            self._log.warning("create failed: %s", exc)
            raise
        self._log.info("Subscription %s created", subscription_id)
        return subscription_id

    def get_by_id(self, subscription_id: uuid.UUID) -> Subscription:
        self._log.info("Getting subscription %s", subscription_id)
        try:
            return self._repository.get_by_id(subscription_id)
        except StorageError as exc:
            self._log.warning("get_by_id failed: %s", exc)
            raise

    def update(self, subscription: Subscription) -> None:
        if subscription.id is None:
            raise ValidationError("Subscription id is required for update")
        subscription.validate()
        self._log.info("Updating subscription %s", subscription.id)
        try:
            self._repository.update(subscription)
        except StorageError as exc:
            self._log.warning("update failed: %s", exc)
            raise

    def delete(self, subscription_id: uuid.UUID) -> None:
        self._log.info("Deleting subscription %s", subscription_id)
        try:
            self._repository.delete(subscription_id)
        except StorageError as exc:
            self._log.warning("delete failed: %s", exc)
            raise

    def list(self) -> List[Subscription]:
        self._log.info("Listing subscriptions")
        try:
            return self._repository.list()
        except StorageError as exc:
            self._log.warning("list failed: %s", exc)
            raise

    # Aggregation -----------------------------------------------------------
    def total_cost(
        self,
        user_id: uuid.UUID,
        service_name: Optional[str],
        year: int,
        month: int,
    ) -> int:
        """
        Sum the prices of a user's subscriptions active in the given month.

        Months are compared as ordinals (``year * 12 + month``) so ranges that
        cross a year boundary are handled correctly. The year is not bounded,
        so open-ended subscriptions count in any later month. An empty or
        missing ``service_name`` disables the service filter.

        Returns:
            Total price in minor currency units, 0 when nothing matches

        Raises:
            ValidationError: If ``month`` is outside 1..12 or a part is not an integer
            StorageError: If the repository cannot list subscriptions
        """
        queried = month_ordinal(year, month)
        self._log.info(
            "Calculating total cost for user %s service=%r month=%02d-%d",
            user_id,
            service_name or "",
            month,
            year,
        )
        subscriptions = self.list()

        total = 0
        for subscription in subscriptions:
            if subscription.user_id != user_id:
                continue
            if service_name and subscription.service_name != service_name:
                continue
            if subscription.is_active_at(queried):
                total += subscription.price
        return total
