"""Subscription domain model describing a user's recurring paid service."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Optional

from ..errors import ValidationError
from .year_month import YearMonth


@dataclass(slots=True)
class Subscription:
    """
    Subscription entity representing a recurring charge owned by a user.

    Attributes:
        user_id: Identifier of the owning user
        service_name: Name of the subscribed service, compared case-sensitively
        price: Monthly price in minor currency units (cents)
        start_date: First month the subscription is active
        end_date: Last active month (inclusive); None while open-ended
        id: Identifier assigned by storage on creation
    """

    user_id: uuid.UUID
    service_name: str
    price: int
    start_date: YearMonth
    end_date: Optional[YearMonth] = None
    id: Optional[uuid.UUID] = None

    def validate(self) -> None:
        """Raise ValidationError when the entity breaks one of its invariants."""
        if not isinstance(self.user_id, uuid.UUID):
            raise ValidationError("user_id must be a UUID")
        if self.id is not None and not isinstance(self.id, uuid.UUID):
            raise ValidationError("id must be a UUID")
        if not isinstance(self.service_name, str) or not self.service_name.strip():
            raise ValidationError("service_name must not be empty")
        if isinstance(self.price, bool) or not isinstance(self.price, int):
            raise ValidationError("price must be an integer amount of minor units")
        if self.price < 0:
            raise ValidationError("price must not be negative")
        if not isinstance(self.start_date, YearMonth):
            raise ValidationError("start_date must be a YearMonth")
        if self.end_date is not None:
            if not isinstance(self.end_date, YearMonth):
                raise ValidationError("end_date must be a YearMonth or None")
            if self.end_date < self.start_date:
                raise ValidationError(
                    f"end_date {self.end_date} precedes start_date {self.start_date}"
                )

    def is_active_in(self, month: YearMonth) -> bool:
        """Check whether ``month`` falls inside the inclusive start/end range."""
        return self.is_active_at(month.ordinal)

    def is_active_at(self, ordinal: int) -> bool:
        """Same as ``is_active_in`` for an ordinal month (``year * 12 + month``)."""
        if ordinal < self.start_date.ordinal:
            return False
        return self.end_date is None or ordinal <= self.end_date.ordinal

    def with_id(self, subscription_id: uuid.UUID) -> "Subscription":
        return replace(self, id=subscription_id)

    def __repr__(self) -> str:
        return (
            f"<Subscription id={self.id} user_id={self.user_id} "
            f"service={self.service_name!r} price={self.price}>"
        )
