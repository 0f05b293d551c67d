"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.infrastructure.storage.sqlite.migrations import initialize_database
from src.infrastructure.storage.sqlite.stock_history_store import SQLiteStockHistoryStore


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """Create a temporary database with all migrations applied."""
    results = await initialize_database(temp_db_path)
    assert all(r.success for r in results)
    yield temp_db_path


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    mock.storage.migrate_on_connect = True
    return mock


@pytest.fixture
async def store(initialized_db: Path, mock_settings) -> AsyncGenerator[SQLiteStockHistoryStore, None]:
    """Stock history store bound to a fresh migrated database."""
    conn_module._pool = None
    mock_settings.storage.db_path = initialized_db
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        yield SQLiteStockHistoryStore()
        await conn_module.close_pool()
