"""Stock movement domain entities."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class StockChangeReason(str, Enum):
    """Why a stock quantity changed."""

    INITIAL_STOCK = "INITIAL_STOCK"
    MANUAL_UPDATE = "MANUAL_UPDATE"
    PRICE_CHANGE = "PRICE_CHANGE"
    SOLD = "SOLD"
    SCRAPPED = "SCRAPPED"
    DESTROYED = "DESTROYED"
    DAMAGED = "DAMAGED"
    EXPIRED = "EXPIRED"
    LOST = "LOST"
    RETURNED_TO_SUPPLIER = "RETURNED_TO_SUPPLIER"
    RETURNED_BY_CUSTOMER = "RETURNED_BY_CUSTOMER"


class FlowCategory(str, Enum):
    """Accounting bucket a stock movement is reported under."""

    PURCHASE = "PURCHASE"
    RETURN_IN = "RETURN_IN"
    CONSUMPTION = "CONSUMPTION"
    WRITE_OFF = "WRITE_OFF"
    NEUTRAL_ADJUSTMENT = "NEUTRAL_ADJUSTMENT"


class StockEvent(BaseModel):
    """
    One append-only stock movement for an item.

    ``quantity_change`` is signed: positive for inbound, negative for outbound.
    ``unit_price`` is only present on priced inbound events. ``sequence`` breaks
    ties between events sharing a timestamp.
    """

    model_config = ConfigDict(frozen=True)

    item_id: str
    supplier_id: str | None = None
    timestamp: datetime
    quantity_change: int
    unit_price: Decimal | None = None
    reason: StockChangeReason
    sequence: int = 0

    @field_validator("timestamp")
    @classmethod
    def naive_local_timestamp(cls, v: datetime) -> datetime:
        # Stored history uses naive local time
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @field_validator("unit_price")
    @classmethod
    def non_negative_price(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v < 0:
            raise ValueError("unit_price must not be negative")
        return v

    @property
    def is_inbound(self) -> bool:
        return self.quantity_change > 0

    @property
    def is_outbound(self) -> bool:
        return self.quantity_change < 0

    @property
    def sort_key(self) -> tuple[datetime, int]:
        """Replay order within one item."""
        return (self.timestamp, self.sequence)
