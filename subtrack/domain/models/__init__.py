"""Domain models for the subscription tracker."""

from .subscription import Subscription
from .year_month import YearMonth, month_ordinal

__all__ = [
    "Subscription",
    "YearMonth",
    "month_ordinal",
]
