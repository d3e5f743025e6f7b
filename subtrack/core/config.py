import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

STORAGE_BACKENDS = ("sqlite", "memory")


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv(find_dotenv(usecwd=True))
        self.app_title = os.getenv("APP_TITLE", "Subscription Tracker")
        self.database_path = Path(os.getenv("DATABASE_PATH", "data/subscriptions.db")).resolve()
        self.storage_backend = self._get_choice("STORAGE_BACKEND", STORAGE_BACKENDS, default="sqlite")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        origins = os.getenv("CORS_ALLOW_ORIGINS")
        if origins:
            self.cors_allow_origins = [item.strip() for item in origins.split(",") if item.strip()]
        else:
            self.cors_allow_origins = ["*"]

    @staticmethod
    def _get_choice(key: str, choices: tuple, default: Optional[str] = None) -> str:
        value = os.getenv(key)
        if not value:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        value = value.strip().lower()
        if value not in choices:
            raise RuntimeError(
                f"Environment variable {key} must be one of: {', '.join(choices)}"
            )
        return value
