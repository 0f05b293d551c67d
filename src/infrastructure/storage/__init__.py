"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteStockHistoryStore,
    close_pool,
    get_connection,
    get_pool,
    get_stock_history_store,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteStockHistoryStore",
    "get_stock_history_store",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
