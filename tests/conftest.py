"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

import stockledger.config.settings as settings_module
import stockledger.infrastructure.storage.sqlite.connection as conn_module
from stockledger.application.services import reset_services
from stockledger.config.settings import LedgerSettings, Settings, StorageSettings
from stockledger.core.entities import BOMComponent, CatalogEntry, ItemCategory
from stockledger.infrastructure.storage.sqlite import reset_stores
from stockledger.infrastructure.storage.sqlite.migrations.migrator import run_migrations


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway database."""
    return Settings(
        storage=StorageSettings(
            data_dir=tmp_path,
            db_name="ledger.db",
            pool_size=3,
            busy_timeout=5000,
        ),
        ledger=LedgerSettings(retry_delay=0.001),
    )


@pytest.fixture
async def ledger_db(test_settings: Settings, monkeypatch) -> AsyncGenerator[Path, None]:
    """Migrated database wired into the global settings, pool and stores."""
    monkeypatch.setattr(settings_module, "_settings", test_settings)
    conn_module._pool = None
    reset_stores()
    reset_services()

    await run_migrations()
    yield test_settings.storage.db_path

    await conn_module.close_pool()
    reset_stores()
    reset_services()


@pytest.fixture
async def api_client(ledger_db: Path) -> AsyncGenerator[AsyncClient, None]:
    """Async client against the app, backed by the test database."""
    from stockledger.api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def cell() -> CatalogEntry:
    return CatalogEntry(sku="CELL-A", name="Li-ion Cell", category=ItemCategory.PARTS)


@pytest.fixture
def battery() -> CatalogEntry:
    """Battery pack built from four cells."""
    return CatalogEntry(
        sku="BATT-01",
        name="Battery Pack",
        category=ItemCategory.PRODUCT,
        bom=[BOMComponent(sku="CELL-A", quantity=4)],
    )
