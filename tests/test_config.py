"""Tests for environment-driven settings and application wiring."""

import pytest
from fastapi.testclient import TestClient

from subtrack.core.app_factory import build_repository, create_application
from subtrack.core.config import Settings
from subtrack.domain.errors import StorageError
from subtrack.infrastructure.persistence.memory import InMemorySubscriptionRepository
from subtrack.infrastructure.persistence.sqlite import SQLiteSubscriptionRepository


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for key in ("APP_TITLE", "DATABASE_PATH", "STORAGE_BACKEND", "LOG_LEVEL", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults(tmp_path):
    settings = Settings()
    assert settings.app_title == "Subscription Tracker"
    assert settings.storage_backend == "sqlite"
    assert settings.database_path == (tmp_path / "data" / "subscriptions.db").resolve()
    assert settings.log_level == "INFO"
    assert settings.cors_allow_origins == ["*"]


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_BACKEND", " Memory ")
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test,")

    settings = Settings()
    assert settings.storage_backend == "memory"
    assert settings.database_path == (tmp_path / "x.db").resolve()
    assert settings.log_level == "DEBUG"
    assert settings.cors_allow_origins == ["http://a.test", "http://b.test"]


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    # record APP_TITLE so the value loaded from .env is undone on teardown
    monkeypatch.setenv("APP_TITLE", "unset")
    monkeypatch.delenv("APP_TITLE")
    (tmp_path / ".env").write_text("APP_TITLE=From Dotenv\n")
    assert Settings().app_title == "From Dotenv"


def test_unknown_backend_is_rejected(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "postgres")
    with pytest.raises(RuntimeError, match="STORAGE_BACKEND"):
        Settings()


def test_build_repository_selects_backend(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "db" / "subs.db"))
    sqlite_repo = build_repository(Settings())
    try:
        assert isinstance(sqlite_repo, SQLiteSubscriptionRepository)
        assert (tmp_path / "db" / "subs.db").exists()
    finally:
        sqlite_repo.close()

    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    assert isinstance(build_repository(Settings()), InMemorySubscriptionRepository)


def test_application_uses_configured_sqlite_store(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "app.db"))
    app = create_application(Settings())
    with TestClient(app) as client:
        response = client.get("/api/subscriptions")
        assert response.status_code == 200
        assert response.json() == {"items": [], "count": 0}
        assert type(app.state.container.repository) is SQLiteSubscriptionRepository


def test_injected_repository_is_left_open(user_id):
    repository = InMemorySubscriptionRepository()
    app = create_application(Settings(), repository=repository)
    with TestClient(app) as client:
        response = client.post(
            "/api/subscriptions",
            json={
                "user_id": str(user_id),
                "service_name": "Netflix",
                "price": 1500,
                "start_date": "01-2023",
            },
        )
        assert response.status_code == 201

    assert [item.service_name for item in repository.list()] == ["Netflix"]


def test_built_repository_is_closed_on_shutdown(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "app.db"))
    app = create_application(Settings())
    with TestClient(app):
        store = app.state.container.repository

    with pytest.raises(StorageError):
        store.list()
