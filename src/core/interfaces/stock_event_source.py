"""Abstract interface for the stock history event source."""

from abc import ABC, abstractmethod
from datetime import datetime

from src.core.entities.stock_event import StockEvent


class IStockEventSource(ABC):
    """Read-only access to the append-only stock movement log."""

    @abstractmethod
    async def stream_events_for_wac(
        self, end: datetime, supplier_id: str | None = None
    ) -> list[StockEvent]:
        """
        Get every event with timestamp <= end, ordered for replay.

        Ordering is item_id, then timestamp, then sequence. When supplier_id is
        given, only that supplier's events are returned (trimmed,
        case-insensitive match); None or blank means all suppliers.
        """
        pass
