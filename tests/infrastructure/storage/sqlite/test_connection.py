"""Tests for the SQLite connection pool."""

import asyncio
from pathlib import Path

import pytest

from stockledger.core.exceptions import TransactionConflictError
from stockledger.infrastructure.storage.sqlite.connection import ConnectionPool, is_lock_error


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    return tmp_path / "pool.db"


@pytest.fixture
async def pool(temp_db_path: Path):
    pool = ConnectionPool(db_path=temp_db_path, pool_size=2, busy_timeout=50)
    await pool.initialize()
    async with pool.acquire() as conn:
        await conn.execute("CREATE TABLE counter (id INTEGER PRIMARY KEY, value INTEGER)")
        await conn.execute("INSERT INTO counter (id, value) VALUES (1, 0)")
    yield pool
    await pool.close()


class TestConnectionPool:
    async def test_initialize_creates_connections(self, pool, temp_db_path):
        assert temp_db_path.exists()
        assert len(pool._connections) == 2

    async def test_initialize_is_idempotent(self, pool):
        await pool.initialize()
        assert len(pool._connections) == 2

    async def test_pragmas(self, pool):
        async with pool.acquire() as conn:
            cursor = await conn.execute("PRAGMA journal_mode")
            assert (await cursor.fetchone())[0] == "wal"
            cursor = await conn.execute("PRAGMA foreign_keys")
            assert (await cursor.fetchone())[0] == 1

    async def test_transaction_commits(self, pool):
        async with pool.transaction() as conn:
            await conn.execute("UPDATE counter SET value = 5 WHERE id = 1")

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT value FROM counter WHERE id = 1")
            assert (await cursor.fetchone())[0] == 5

    async def test_transaction_rolls_back_on_error(self, pool):
        with pytest.raises(RuntimeError):
            async with pool.transaction() as conn:
                await conn.execute("UPDATE counter SET value = 9 WHERE id = 1")
                raise RuntimeError("abort")

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT value FROM counter WHERE id = 1")
            assert (await cursor.fetchone())[0] == 0

    async def test_held_write_lock_raises_conflict(self, pool):
        holding = asyncio.Event()
        release = asyncio.Event()

        async def hold_lock():
            async with pool.transaction():
                holding.set()
                await release.wait()

        holder = asyncio.create_task(hold_lock())
        await holding.wait()
        try:
            with pytest.raises(TransactionConflictError):
                async with pool.transaction():
                    pass
        finally:
            release.set()
            await holder

    async def test_close(self, temp_db_path):
        pool = ConnectionPool(db_path=temp_db_path, pool_size=1)
        await pool.initialize()
        await pool.close()
        assert pool._connections == []
        assert pool._initialized is False


class TestIsLockError:
    @pytest.mark.parametrize(
        "message,expected",
        [
            ("database is locked", True),
            ("database table is locked", True),
            ("database is busy", True),
            ("no such table: counter", False),
        ],
    )
    def test_classification(self, message, expected):
        import sqlite3

        assert is_lock_error(sqlite3.OperationalError(message)) is expected
