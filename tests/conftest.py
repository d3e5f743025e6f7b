"""
Shared fixtures for subscription tracker tests.
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from subtrack.application.services.subscription_service import SubscriptionService
from subtrack.core.app_factory import create_application
from subtrack.core.config import Settings
from subtrack.infrastructure.persistence.memory import InMemorySubscriptionRepository
from subtrack.infrastructure.persistence.sqlite import SQLiteSubscriptionRepository


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture(params=["memory", "sqlite"])
def repository(request, tmp_path):
    if request.param == "memory":
        repo = InMemorySubscriptionRepository()
    else:
        repo = SQLiteSubscriptionRepository(tmp_path / "subscriptions.db")
    yield repo
    repo.close()


@pytest.fixture
def service(repository) -> SubscriptionService:
    return SubscriptionService(repository)


@pytest.fixture
def settings(monkeypatch, tmp_path) -> Settings:
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "app.db"))
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)
    return Settings()


@pytest.fixture
def client(settings):
    app = create_application(settings, repository=InMemorySubscriptionRepository())
    with TestClient(app) as test_client:
        yield test_client
