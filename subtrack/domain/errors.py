"""Error kinds raised by the subscription domain and its storage backends."""

from __future__ import annotations

import uuid
from typing import Optional


class SubscriptionError(Exception):
    """Base class for every error surfaced by the subscription core."""


class ValidationError(SubscriptionError, ValueError):
    """A malformed domain value reached the core."""


class NotFoundError(SubscriptionError):
    """An operation referenced a subscription id that does not exist."""

    def __init__(self, subscription_id: Optional[uuid.UUID]) -> None:
        super().__init__(f"Subscription {subscription_id} not found")
        self.subscription_id = subscription_id


class StorageError(SubscriptionError):
    """The backing store failed while serving an operation."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation
