"""
Persistence handle.

``Store`` owns the async SQLAlchemy engine and its lifecycle. It is built
once by the application factory, attached to ``app.state.store`` and passed
explicitly into every service constructor.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from galatide.config import Settings
from galatide.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

Base = declarative_base()


def engine_options_for(settings: Settings) -> dict[str, Any]:
    """Pool sizing per environment; sqlite URLs take no pool arguments."""
    if not settings.database_url or settings.database_url.startswith("sqlite"):
        return {}
    if settings.environment == "production":
        return {
            "pool_size": 20,
            "max_overflow": 50,
            "pool_timeout": 60,
            "pool_recycle": 1800,
            "pool_pre_ping": True,
        }
    return {
        "echo": settings.debug,
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
        "pool_pre_ping": True,
    }


class Store:
    """Lazily connected database handle with bounded connect retries.

    ``connect()`` never raises: it returns False once every attempt has
    failed, after which the store reports itself unavailable until the
    cooldown elapses. ``session()`` raises ``StoreUnavailableError`` instead
    of letting driver connection errors escape.
    """

    def __init__(
        self,
        database_url: str | None,
        *,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 5.0,
        connect_timeout: float = 10.0,
        unavailable_cooldown: float = 30.0,
        **engine_options: Any,
    ):
        self.database_url = database_url
        self.max_retries = max(1, max_retries)
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.connect_timeout = connect_timeout
        self.unavailable_cooldown = unavailable_cooldown
        self._engine_options = engine_options
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None
        self._connected = False
        self._failed_at: float | None = None
        self._connect_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> Store:
        return cls(
            settings.database_url,
            max_retries=settings.db_connect_max_retries,
            base_delay=settings.db_connect_base_delay,
            max_delay=settings.db_connect_max_delay,
            connect_timeout=settings.db_connect_timeout,
            unavailable_cooldown=settings.db_unavailable_cooldown,
            **engine_options_for(settings),
        )

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            if not self.database_url:
                raise StoreUnavailableError(reason="DATABASE_URL is not configured")
            self._engine = create_async_engine(self.database_url, **self._engine_options)
            self._sessionmaker = async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                autoflush=False,
                expire_on_commit=False,
            )
        return self._engine

    def is_configured(self) -> bool:
        return bool(self.database_url)

    def is_available(self) -> bool:
        return self._connected

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retrying after the given (1-based) failed attempt."""
        return min(self.base_delay * (2 ** (attempt - 1)), self.max_delay)

    async def _ping(self, engine: AsyncEngine) -> None:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def connect(self) -> bool:
        """Connect on first use, retrying with exponential backoff.

        Concurrent callers share one round of attempts: a caller that waited
        on another's round gets that round's outcome.
        """
        if self._connected:
            return True

        if not self.database_url:
            logger.warning("DATABASE_URL not configured, database is unavailable")
            return False

        failed_at = self._failed_at
        async with self._connect_lock:
            if self._connected:
                return True
            if self._failed_at != failed_at:
                return False
            return await self._connect_with_retries()

    async def _connect_with_retries(self) -> bool:
        engine = self.engine
        for attempt in range(1, self.max_retries + 1):
            try:
                await asyncio.wait_for(self._ping(engine), timeout=self.connect_timeout)
            except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
                logger.warning(
                    "Database connection failed (attempt %d/%d): %s",
                    attempt,
                    self.max_retries,
                    e,
                )
                if attempt < self.max_retries:
                    await asyncio.sleep(self.backoff_delay(attempt))
                continue

            self._connected = True
            self._failed_at = None
            logger.info("Database connected")
            return True

        self._failed_at = time.monotonic()
        logger.error("Database connection failed after %d attempts", self.max_retries)
        return False

    async def disconnect(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database disconnected")
        self._engine = None
        self._sessionmaker = None
        self._connected = False

    async def create_all(self) -> None:
        """Create every mapped table (development and tests)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    def _in_cooldown(self) -> bool:
        if self._failed_at is None:
            return False
        return time.monotonic() - self._failed_at < self.unavailable_cooldown

    async def ensure_connected(self) -> None:
        if self._connected:
            return
        if not self.database_url:
            raise StoreUnavailableError(reason="DATABASE_URL is not configured")
        if self._in_cooldown() or not await self.connect():
            raise StoreUnavailableError(reason="database unreachable")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session, translating connection failures to StoreUnavailableError."""
        await self.ensure_connected()
        async with self._sessionmaker() as db:
            try:
                yield db
            except (OperationalError, InterfaceError) as e:
                self._connected = False
                logger.error(f"Database session error: {e}")
                raise StoreUnavailableError(reason=str(e.orig) if e.orig else str(e)) from e
            except DBAPIError as e:
                if e.connection_invalidated:
                    self._connected = False
                    raise StoreUnavailableError(reason="connection invalidated") from e
                raise


def get_store(request: Request) -> Store:
    """FastAPI dependency returning the application's store."""
    return request.app.state.store
