"""Job entry point tests: exit status, resource cleanup and end-to-end runs over fakes."""

import fnmatch
import json
from datetime import datetime, timedelta

import pytest
from sqlalchemy import insert, select, text
from sqlalchemy.ext.asyncio import create_async_engine

from fakes import FakeJobQueue
from sweeper.core.config import Settings
from sweeper.domain.enums import StopReason, SweepState
from sweeper.infrastructure.persistence.relational_source import sweep_table
from sweeper.jobs import clean_subscription_queue, count_cache_keys, parse_args, purge_audit_events
from sweeper.shared.utils.datetime import utc_now

AUDIT = sweep_table("AuditEvent", "id", "lastUpdated")
HISTORY = sweep_table("AuditEvent_History", "id", "lastUpdated")


class FakeRedisClient:
    """Minimal redis.asyncio.Redis stand-in: SCAN, DEL, DBSIZE, aclose."""

    def __init__(self, keys=()) -> None:
        self.keys = list(keys)
        self.closed = False

    async def scan(self, cursor=0, match=None, count=None):
        page = self.keys[cursor : cursor + count]
        next_cursor = cursor + count
        if next_cursor >= len(self.keys):
            next_cursor = 0
        return next_cursor, [k for k in page if fnmatch.fnmatchcase(k, match)]

    async def delete(self, *keys):
        removed = [k for k in keys if k in self.keys]
        self.keys = [k for k in self.keys if k not in removed]
        return len(removed)

    async def dbsize(self):
        return len(self.keys)

    async def aclose(self):
        self.closed = True


class ClosableJobQueue(FakeJobQueue):
    closed = False

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _workdir(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)


def _config_file(tmp_path, data) -> str:
    path = tmp_path / "sweeper.config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return f"file:{path}"


class TestEntryPoint:
    """Argument parsing and exit status."""

    def test_default_locator(self) -> None:
        assert parse_args("x", []).config == "file:sweeper.config.json"
        assert parse_args("x", ["aws:/medplum/"]).config == "aws:/medplum/"

    def test_unknown_locator_exits_1_with_message(self, capsys) -> None:
        assert purge_audit_events.main(["s3:bucket"]) == 1
        err = capsys.readouterr().err
        assert "ConfigurationException: Unrecognized config type: s3" in err

    def test_missing_config_file_exits_1(self, capsys) -> None:
        assert count_cache_keys.main([]) == 1
        assert "Cannot read config file" in capsys.readouterr().err

    def test_missing_redis_section_fails_before_sweep(self, tmp_path, capsys) -> None:
        locator = _config_file(tmp_path, {"database": {"host": "db"}})
        assert purge_audit_events.main([locator]) == 1
        assert "Redis settings are required" in capsys.readouterr().err


class TestPurgeAuditEvents:
    """Audit purge against SQLite plus a fake cache."""

    @pytest.mark.asyncio
    async def test_purges_table_history_and_cache(self, tmp_path, monkeypatch) -> None:
        db_url = f"sqlite+aiosqlite:///{tmp_path / 'audit.db'}"
        old = utc_now() - timedelta(days=90)
        fresh = utc_now() - timedelta(days=1)
        rows = {f"old-{i}": old + timedelta(minutes=i) for i in range(5)}
        rows["fresh"] = fresh

        seed = create_async_engine(db_url)
        async with seed.begin() as conn:
            await conn.execute(text('CREATE TABLE "AuditEvent" (id TEXT, "lastUpdated" TEXT)'))
            await conn.execute(
                text('CREATE TABLE "AuditEvent_History" (id TEXT, "lastUpdated" TEXT)')
            )
            values = [{"id": k, "lastUpdated": v} for k, v in rows.items()]
            await conn.execute(insert(AUDIT), values)
            await conn.execute(insert(HISTORY), values)
        await seed.dispose()

        client = FakeRedisClient([f"AuditEvent/old-{i}" for i in range(5)] + ["AuditEvent/fresh"])
        monkeypatch.setattr(purge_audit_events, "create_redis_client", lambda _settings: client)
        settings = Settings(
            database={"url": db_url},
            redis={"host": "cache"},
            audit_purge={"batch_size": 2, "max_iterations": 10, "batch_delay_seconds": 0},
        )

        result = await purge_audit_events.run(settings)

        assert result.state is SweepState.EXHAUSTED
        assert result.stop_reason is StopReason.EMPTY_BATCH
        assert result.stats.deleted == 5
        assert result.stats.iterations == 4
        assert client.keys == ["AuditEvent/fresh"]
        assert client.closed is True

        check = create_async_engine(db_url)
        async with check.connect() as conn:
            primary = [r[0] for r in await conn.execute(select(AUDIT.c.id))]
            history = [r[0] for r in await conn.execute(select(HISTORY.c.id))]
        await check.dispose()
        assert primary == ["fresh"]
        assert history == ["fresh"]

    @pytest.mark.asyncio
    async def test_cache_optional_when_category_unset(self, tmp_path) -> None:
        db_url = f"sqlite+aiosqlite:///{tmp_path / 'audit.db'}"
        seed = create_async_engine(db_url)
        async with seed.begin() as conn:
            await conn.execute(text('CREATE TABLE "AuditEvent" (id TEXT, "lastUpdated" TEXT)'))
            await conn.execute(
                insert(AUDIT), [{"id": "a", "lastUpdated": datetime(2000, 1, 1)}]
            )
        await seed.dispose()
        settings = Settings(
            database={"url": db_url},
            audit_purge={"history_table": None, "cache_category": None, "batch_delay_seconds": 0},
        )

        result = await purge_audit_events.run(settings)

        assert result.stats.deleted == 1


class TestCleanSubscriptionQueue:
    """Queue clean through the job wiring."""

    @pytest.mark.asyncio
    async def test_runs_fixed_iterations_and_closes_queue(self, monkeypatch) -> None:
        queue = ClosableJobQueue(
            completed={f"job-{i}": 120_000 for i in range(5)},
            counts={"failed": 2, "waiting": 1},
        )
        created = []

        def _factory(name, settings):
            created.append((name, settings.host))
            return queue

        monkeypatch.setattr(clean_subscription_queue, "BullJobQueue", _factory)
        settings = Settings(redis={"host": "cache"}, queue_clean={"iterations": 3})

        result = await clean_subscription_queue.run(settings)

        assert created == [("SubscriptionQueue", "cache")]
        assert result.counts_by_status["completed"] == 5
        assert result.counts_by_status["failed"] == 2
        assert result.removed_per_iteration == [5, 0, 0]
        assert queue.clean_calls == [(60_000, 100_000)] * 3
        assert queue.closed is True


class TestCountCacheKeys:
    """Inventory job prints non-zero counts as JSON."""

    @pytest.mark.asyncio
    async def test_run_prints_counts(self, monkeypatch, capsys) -> None:
        client = FakeRedisClient(["Patient/1", "Patient/2", "Patient/3", "Observation-x"])
        monkeypatch.setattr(count_cache_keys, "create_redis_client", lambda _settings: client)
        settings = Settings(
            redis={"host": "cache"}, inventory={"categories": ["Patient", "Observation"]}
        )

        report = await count_cache_keys.run(settings)

        assert report.total_keys == 4
        assert json.loads(capsys.readouterr().out) == {"Patient": 3}
        assert client.closed is True

    def test_main_exits_0(self, tmp_path, monkeypatch, capsys) -> None:
        client = FakeRedisClient(["Patient/1"])
        monkeypatch.setattr(count_cache_keys, "create_redis_client", lambda _settings: client)
        locator = _config_file(
            tmp_path, {"redis": {"host": "cache"}, "inventory": {"categories": ["Patient"]}}
        )

        assert count_cache_keys.main([locator]) == 0
        assert '"Patient": 1' in capsys.readouterr().out
