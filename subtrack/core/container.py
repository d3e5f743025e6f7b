from dataclasses import dataclass

from ..application.services.subscription_service import SubscriptionService
from ..domain.ports.persistence import SubscriptionRepository
from .config import Settings


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    repository: SubscriptionRepository
    subscription_service: SubscriptionService
