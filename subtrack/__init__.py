"""Subscription tracker: recurring subscription records and monthly cost totals."""

__version__ = "0.1.0"
