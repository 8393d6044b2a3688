"""
Store lifecycle tests: bounded retries, backoff, cooldown and error
translation. Connection failures are simulated with mocks.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from galatide.config import Settings
from galatide.database import Store, engine_options_for
from galatide.exceptions import StoreUnavailableError

from conftest import make_store


def _refused() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestBackoff:
    def test_exponential_and_capped(self):
        store = Store("sqlite+aiosqlite://", base_delay=1.0, max_delay=5.0)

        assert [store.backoff_delay(n) for n in range(1, 6)] == [1.0, 2.0, 4.0, 5.0, 5.0]

    def test_at_least_one_attempt(self):
        assert Store("sqlite+aiosqlite://", max_retries=0).max_retries == 1


class TestConnect:
    async def test_unconfigured_store(self):
        store = make_store(None)

        assert store.is_configured() is False
        assert await store.connect() is False
        with pytest.raises(StoreUnavailableError):
            async with store.session():
                pass

    async def test_gives_up_after_max_retries(self):
        store = make_store(max_retries=3)
        ping = AsyncMock(side_effect=_refused())

        with patch.object(store, "_ping", ping):
            assert await store.connect() is False

        assert ping.await_count == 3
        assert store.is_available() is False

    async def test_succeeds_on_retry(self):
        store = make_store(max_retries=3)
        ping = AsyncMock(side_effect=[_refused(), None])

        with patch.object(store, "_ping", ping):
            assert await store.connect() is True

        assert ping.await_count == 2
        assert store.is_available() is True
        await store.disconnect()

    async def test_attempt_is_bounded_by_timeout(self):
        store = make_store(max_retries=1, connect_timeout=0.01)

        async def hang(engine):
            await asyncio.sleep(1)

        with patch.object(store, "_ping", hang):
            assert await store.connect() is False

    async def test_sleeps_between_attempts(self):
        store = make_store(max_retries=3, base_delay=0.5, max_delay=5.0)
        sleep = AsyncMock()

        with patch.object(store, "_ping", AsyncMock(side_effect=_refused())), patch(
            "galatide.database.asyncio.sleep", sleep
        ):
            await store.connect()

        assert [c.args[0] for c in sleep.await_args_list] == [0.5, 1.0]

    async def test_real_connection(self):
        store = make_store()

        assert await store.connect() is True
        async with store.session() as db:
            assert (await db.execute(text("SELECT 1"))).scalar() == 1
        await store.disconnect()
        assert store.is_available() is False


class TestCooldown:
    async def test_failed_store_stays_unavailable(self):
        store = make_store(max_retries=1, unavailable_cooldown=60)
        ping = AsyncMock(side_effect=_refused())

        with patch.object(store, "_ping", ping):
            await store.connect()
            with pytest.raises(StoreUnavailableError):
                async with store.session():
                    pass

        assert ping.await_count == 1

    async def test_retries_after_cooldown(self):
        store = make_store(max_retries=1, unavailable_cooldown=0)
        ping = AsyncMock(side_effect=[_refused(), None])

        with patch.object(store, "_ping", ping):
            await store.connect()
            async with store.session():
                pass

        assert ping.await_count == 2
        await store.disconnect()


class TestConcurrentConnect:
    async def test_callers_share_one_successful_round(self):
        store = make_store(max_retries=3)

        async def slow_ping(engine):
            await asyncio.sleep(0.01)

        ping = AsyncMock(side_effect=slow_ping)
        with patch.object(store, "_ping", ping):
            results = await asyncio.gather(store.connect(), store.connect(), store.connect())

        assert results == [True, True, True]
        assert ping.await_count == 1
        await store.disconnect()

    async def test_callers_share_one_failed_round(self):
        store = make_store(max_retries=2)
        ping = AsyncMock(side_effect=_refused())

        with patch.object(store, "_ping", ping):
            results = await asyncio.gather(store.connect(), store.connect())

        assert results == [False, False]
        assert ping.await_count == 2


class TestSessionErrors:
    async def test_connection_error_becomes_store_unavailable(self):
        store = make_store()
        await store.connect()

        with pytest.raises(StoreUnavailableError) as exc_info:
            async with store.session():
                raise _refused()

        assert exc_info.value.status_code == 503
        assert store.is_available() is False
        await store.disconnect()

    async def test_other_errors_propagate(self):
        store = make_store()
        await store.connect()

        with pytest.raises(KeyError):
            async with store.session():
                raise KeyError("slug")

        assert store.is_available() is True
        await store.disconnect()


class TestEngineOptions:
    def test_sqlite_takes_no_pool_options(self):
        assert engine_options_for(Settings(database_url="sqlite+aiosqlite:///galatide.db")) == {}

    def test_production_pool(self):
        options = engine_options_for(
            Settings(database_url="postgresql+asyncpg://db/galatide", environment="production")
        )

        assert options["pool_size"] == 20
        assert options["pool_pre_ping"] is True

    def test_from_settings(self):
        store = Store.from_settings(Settings(database_url=None, db_connect_max_retries=5))

        assert store.max_retries == 5
        assert store.is_configured() is False
