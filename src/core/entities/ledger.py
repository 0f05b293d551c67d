"""Per-item WAC ledger state."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict

ZERO = Decimal("0")


class NegativeStockPolicy(str, Enum):
    """How to treat an outbound event larger than the quantity on hand."""

    FAIL = "fail"
    CLAMP = "clamp"


class DataIntegrityWarning(BaseModel):
    """An outbound event that was clamped to the available quantity."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    timestamp: datetime | None = None
    requested: int
    available: int

    @property
    def shortfall(self) -> int:
        return self.requested - self.available


@dataclass
class ItemLedgerState:
    """Quantity on hand and running average unit cost for one item."""

    item_id: str
    quantity: int = 0
    avg_cost: Decimal = field(default=ZERO)

    @property
    def value(self) -> Decimal:
        """Inventory value = quantity * avg_cost."""
        return self.avg_cost * self.quantity
