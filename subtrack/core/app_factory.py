from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..application.services.subscription_service import SubscriptionService
from ..domain.ports.persistence import SubscriptionRepository
from ..infrastructure.persistence.memory import InMemorySubscriptionRepository
from ..infrastructure.persistence.sqlite import SQLiteSubscriptionRepository
from ..presentation.api.routers import subscriptions as subscriptions_router

logger = logging.getLogger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    repository: Optional[SubscriptionRepository] = None,
) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title=settings.app_title, lifespan=_create_lifespan(settings, repository))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(subscriptions_router.router)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"ok": True}

    return app


def build_repository(settings: Settings) -> SubscriptionRepository:
    if settings.storage_backend == "memory":
        return InMemorySubscriptionRepository()
    return SQLiteSubscriptionRepository(settings.database_path)


def _create_lifespan(settings: Settings, repository: Optional[SubscriptionRepository]):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        owns_store = repository is None
        store = build_repository(settings) if owns_store else repository
        logger.info("Using %s subscription storage", type(store).__name__)

        container = ApplicationContainer(
            settings=settings,
            repository=store,
            subscription_service=SubscriptionService(store),
        )
        app.state.container = container  # type: ignore[attr-defined]

        try:
            yield
        finally:
            # injected repositories stay open for their owner
            if owns_store:
                store.close()

    return lifespan
