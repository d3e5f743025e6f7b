import logging
import sqlite3
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ...domain.errors import NotFoundError, StorageError
from ...domain.models import Subscription, YearMonth
from ...domain.ports.persistence import SubscriptionRepository

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


class SQLiteSubscriptionRepository(SubscriptionRepository):
    """SQLite-backed implementation of the subscription repository."""

    def __init__(self, path: Union[Path, str]) -> None:
        if str(path) != MEMORY_DATABASE:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._initialize()

    def _initialize(self) -> None:
        with self._guard("initialize"), self._lock, self._conn:
            self._conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS subscriptions (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    user_id TEXT NOT NULL,
                    service_name TEXT NOT NULL,
                    price INTEGER NOT NULL,
                    start_year INTEGER NOT NULL,
                    start_month INTEGER NOT NULL,
                    end_year INTEGER,
                    end_month INTEGER,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_subscriptions_user_id
                    ON subscriptions(user_id);
                """
            )

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    # SubscriptionRepository API ---------------------------------------------
    def create(self, subscription: Subscription) -> uuid.UUID:
        now = self._now()
        with self._guard("create"), self._lock, self._conn:
            subscription_id = uuid.uuid4()
            while self._exists_locked(subscription_id):
                subscription_id = uuid.uuid4()
            end_year, end_month = self._split_end(subscription.end_date)
            self._conn.execute(
                """
                INSERT INTO subscriptions (
                    id, user_id, service_name, price, start_year, start_month,
                    end_year, end_month, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(subscription_id),
                    str(subscription.user_id),
                    subscription.service_name,
                    subscription.price,
                    subscription.start_date.year,
                    subscription.start_date.month,
                    end_year,
                    end_month,
                    now,
                    now,
                ),
            )
        return subscription_id

    def get_by_id(self, subscription_id: uuid.UUID) -> Subscription:
        with self._guard("get_by_id"), self._lock:
            cur = self._conn.execute(
                "SELECT * FROM subscriptions WHERE id = ?", (str(subscription_id),)
            )
            row = cur.fetchone()
        if not row:
            raise NotFoundError(subscription_id)
        return self._row_to_subscription(row)

    def update(self, subscription: Subscription) -> None:
        end_year, end_month = self._split_end(subscription.end_date)
        with self._guard("update"), self._lock, self._conn:
            cur = self._conn.execute(
                """
                UPDATE subscriptions
                SET user_id = ?, service_name = ?, price = ?, start_year = ?,
                    start_month = ?, end_year = ?, end_month = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    str(subscription.user_id),
                    subscription.service_name,
                    subscription.price,
                    subscription.start_date.year,
                    subscription.start_date.month,
                    end_year,
                    end_month,
                    self._now(),
                    str(subscription.id),
                ),
            )
            updated = cur.rowcount
        if updated == 0:
            raise NotFoundError(subscription.id)

    def delete(self, subscription_id: uuid.UUID) -> None:
        with self._guard("delete"), self._lock, self._conn:
            cur = self._conn.execute(
                "DELETE FROM subscriptions WHERE id = ?", (str(subscription_id),)
            )
            deleted = cur.rowcount
        if deleted == 0:
            raise NotFoundError(subscription_id)

    def list(self) -> List[Subscription]:
        with self._guard("list"), self._lock:
            cur = self._conn.execute("SELECT * FROM subscriptions ORDER BY seq")
            rows = cur.fetchall()
        return [self._row_to_subscription(row) for row in rows]

    # Helpers --------------------------------------------------------------
    def _exists_locked(self, subscription_id: uuid.UUID) -> bool:
        cur = self._conn.execute(
            "SELECT 1 FROM subscriptions WHERE id = ?", (str(subscription_id),)
        )
        return cur.fetchone() is not None

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except sqlite3.Error as exc:
            logger.error("SQLite %s failed: %s", operation, exc)
            raise StorageError(operation, str(exc)) from exc

    @staticmethod
    def _split_end(end_date: Optional[YearMonth]):
        if end_date is None:
            return None, None
        return end_date.year, end_date.month

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).replace(microsecond=0).isoformat()

    @staticmethod
    def _row_to_subscription(row: sqlite3.Row) -> Subscription:
        end_date: Optional[YearMonth] = None
        if row["end_year"] is not None:
            end_date = YearMonth(year=row["end_year"], month=row["end_month"])
        return Subscription(
            id=uuid.UUID(row["id"]),
            user_id=uuid.UUID(row["user_id"]),
            service_name=row["service_name"],
            price=row["price"],
            start_date=YearMonth(year=row["start_year"], month=row["start_month"]),
            end_date=end_date,
        )
