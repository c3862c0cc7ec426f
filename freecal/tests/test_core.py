import asyncio

import pytest
from prometheus_client import REGISTRY
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from freecal import core


class FakeEngine:
    def __init__(self):
        self.disposed = False

    async def dispose(self):
        self.disposed = True


class TestDatabasePing:

    @pytest.mark.asyncio
    async def test_warm_up_with_unreachable_database(self, monkeypatch, tmp_path):
        broken = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/missing/dir/freecal.db", poolclass=NullPool)
        monkeypatch.setattr(core, 'engine', broken)
        before = REGISTRY.get_sample_value('freecal_db_ping_failures_total') or 0

        assert await core.ping_database() is False
        await core.warm_up_pool()

        assert REGISTRY.get_sample_value('freecal_db_ping_failures_total') == before + 2
        await broken.dispose()


class TestKeepAlive:

    @pytest.mark.asyncio
    async def test_loop_pings_until_cancelled(self, monkeypatch):
        pings = []
        pinged_twice = asyncio.Event()

        async def fake_ping():
            pings.append(1)
            if len(pings) >= 2:
                pinged_twice.set()
            return True

        monkeypatch.setattr(core, 'ping_database', fake_ping)
        task = asyncio.create_task(core.keep_alive_loop(0))
        await asyncio.wait_for(pinged_twice.wait(), timeout=5)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert len(pings) >= 2

    @pytest.mark.asyncio
    async def test_disabled_interval_starts_nothing(self, monkeypatch):
        monkeypatch.setattr(core, 'KEEP_ALIVE_INTERVAL_SECONDS', 0)
        assert core.start_keep_alive() is None

    @pytest.mark.asyncio
    async def test_shutdown_cancels_task_and_disposes_engine(self, monkeypatch):
        fake = FakeEngine()
        monkeypatch.setattr(core, 'engine', fake)
        monkeypatch.setattr(core, 'KEEP_ALIVE_INTERVAL_SECONDS', 3600)

        task = core.start_keep_alive()
        assert task is not None
        assert core.KEEP_ALIVE_TASK is task
        await asyncio.sleep(0)
        assert not task.done()

        await core.shutdown_connections()
        assert task.cancelled()
        assert core.KEEP_ALIVE_TASK is None
        assert fake.disposed is True
