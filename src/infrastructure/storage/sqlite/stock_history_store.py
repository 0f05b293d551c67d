"""SQLite implementation of the stock history event source."""

from datetime import datetime
from decimal import Decimal

import aiosqlite

from src.config import get_logger
from src.core.entities.stock_event import StockEvent
from src.core.exceptions import DatabaseError, InventoryItemNotFoundError
from src.core.interfaces.stock_event_source import IStockEventSource
from src.core.services.event_classifier import parse_reason
from src.core.services.ledger_replayer import normalize_supplier_id
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def _format_ts(value: datetime) -> str:
    # Fixed width keeps lexical order equal to chronological order
    return value.isoformat(timespec="microseconds")


_EVENTS_FOR_WAC_SQL = """
    SELECT
        sh.id,
        sh.item_id,
        COALESCE(sh.supplier_id, i.supplier_id) AS supplier_id,
        sh.created_at,
        sh.change,
        sh.price_at_change,
        sh.reason
    FROM stock_history sh
    JOIN inventory_items i ON i.id = sh.item_id
    WHERE sh.created_at <= ?
      AND (? IS NULL OR LOWER(TRIM(COALESCE(sh.supplier_id, i.supplier_id))) = ?)
    ORDER BY sh.item_id ASC, sh.created_at ASC, sh.id ASC
"""


class SQLiteStockHistoryStore(IStockEventSource):
    """
    Append-only stock history backed by SQLite.

    An event's supplier falls back to its item's supplier when the event row
    does not carry one.
    """

    async def add_item(
        self, item_id: str, name: str, supplier_id: str | None = None
    ) -> None:
        """Register an inventory item that events can refer to."""
        async with get_transaction() as conn:
            await conn.execute(
                "INSERT INTO inventory_items (id, name, supplier_id) VALUES (?, ?, ?)",
                (item_id, name, supplier_id),
            )
        logger.info("inventory_item_added", item_id=item_id, supplier_id=supplier_id)

    async def record_event(
        self, event: StockEvent, created_by: str | None = None
    ) -> StockEvent:
        """Append a stock event; the returned copy carries its sequence."""
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO stock_history (
                        item_id, supplier_id, change, reason,
                        created_by, created_at, price_at_change
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        event.item_id,
                        event.supplier_id,
                        event.quantity_change,
                        event.reason.value,
                        created_by,
                        _format_ts(event.timestamp),
                        str(event.unit_price) if event.unit_price is not None else None,
                    ),
                )
                sequence = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            if "FOREIGN KEY" in str(e).upper():
                raise InventoryItemNotFoundError(event.item_id) from e
            raise DatabaseError("record_event", str(e)) from e

        logger.info(
            "stock_event_recorded",
            sequence=sequence,
            item_id=event.item_id,
            reason=event.reason.value,
            change=event.quantity_change,
        )
        return event.model_copy(update={"sequence": sequence})

    async def stream_events_for_wac(
        self, end: datetime, supplier_id: str | None = None
    ) -> list[StockEvent]:
        """Get events up to end, ordered by item, timestamp and sequence."""
        supplier_norm = normalize_supplier_id(supplier_id)
        try:
            async with get_connection() as conn:
                cursor = await conn.execute(
                    _EVENTS_FOR_WAC_SQL, (_format_ts(end), supplier_norm, supplier_norm)
                )
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise DatabaseError("stream_events_for_wac", str(e)) from e

        events = [self._row_to_event(row) for row in rows]
        logger.debug(
            "stock_events_streamed",
            end=end.isoformat(),
            supplier_id=supplier_norm,
            count=len(events),
        )
        return events

    @staticmethod
    def _row_to_event(row: aiosqlite.Row) -> StockEvent:
        """Convert a database row to a StockEvent entity."""
        price = row["price_at_change"]
        return StockEvent(
            item_id=row["item_id"],
            supplier_id=row["supplier_id"],
            timestamp=datetime.fromisoformat(row["created_at"]),
            quantity_change=int(row["change"]),
            unit_price=Decimal(price) if price is not None else None,
            reason=parse_reason(row["reason"]),
            sequence=row["id"],
        )
