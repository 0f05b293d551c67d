"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from src.infrastructure.storage.sqlite.stock_history_store import SQLiteStockHistoryStore

# Singleton instances
_stock_history_store: SQLiteStockHistoryStore | None = None


async def get_stock_history_store() -> SQLiteStockHistoryStore:
    """Get singleton stock history store instance."""
    global _stock_history_store
    if _stock_history_store is None:
        _stock_history_store = SQLiteStockHistoryStore()
    return _stock_history_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteStockHistoryStore",
    # Factory functions
    "get_stock_history_store",
]
