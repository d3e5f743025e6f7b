"""Pydantic schemas for subscription API endpoints."""

from __future__ import annotations

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field

from ....domain.models import Subscription, YearMonth

MONTH_PATTERN = r"^\d{2}-\d{4}$"


class SubscriptionPayload(BaseModel):
    """Request schema for creating or replacing a subscription."""

    user_id: uuid.UUID
    service_name: str = Field(..., min_length=1, max_length=255)
    price: int = Field(..., ge=0)
    start_date: str = Field(..., pattern=MONTH_PATTERN, examples=["07-2025"])
    end_date: Optional[str] = Field(default=None, pattern=MONTH_PATTERN)

    def to_domain(self, subscription_id: Optional[uuid.UUID] = None) -> Subscription:
        """Build a domain entity; raises ValidationError on impossible months."""
        return Subscription(
            id=subscription_id,
            user_id=self.user_id,
            service_name=self.service_name,
            price=self.price,
            start_date=YearMonth.parse(self.start_date),
            end_date=YearMonth.parse(self.end_date) if self.end_date is not None else None,
        )


class SubscriptionCreatedResponse(BaseModel):
    id: uuid.UUID


class SubscriptionResponse(BaseModel):
    """Response schema for subscription data."""

    id: uuid.UUID
    user_id: uuid.UUID
    service_name: str
    price: int
    start_date: str
    end_date: Optional[str]

    @classmethod
    def from_domain(cls, subscription: Subscription) -> "SubscriptionResponse":
        return cls(
            id=subscription.id,
            user_id=subscription.user_id,
            service_name=subscription.service_name,
            price=subscription.price,
            start_date=subscription.start_date.format(),
            end_date=subscription.end_date.format() if subscription.end_date else None,
        )


class SubscriptionListResponse(BaseModel):
    items: List[SubscriptionResponse]
    count: int


class TotalCostResponse(BaseModel):
    total_cost: int
