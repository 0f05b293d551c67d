"""
Per-item Weighted Average Cost ledger.

Tracks quantity on hand and the running average unit cost of a single item:

- Priced inbound: avg = (qty * avg + in_qty * price) / (qty + in_qty)
- Unpriced inbound: applied at the current average, which stays unchanged
- Outbound: quantity drops, average unchanged; the movement is valued at the
  average in force at the moment of the event

The average survives a drop to zero quantity so later unpriced receipts still
have a cost to apply.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.config import get_logger
from src.core.entities.ledger import (
    ZERO,
    DataIntegrityWarning,
    ItemLedgerState,
    NegativeStockPolicy,
)
from src.core.entities.stock_event import StockEvent
from src.core.exceptions import NegativeStockError

logger = get_logger(__name__)


@dataclass(frozen=True)
class LedgerMovement:
    """Signed effect of one event on an item ledger."""

    quantity: int
    value: Decimal
    unit_cost: Decimal
    warning: DataIntegrityWarning | None = None

    @property
    def magnitude(self) -> int:
        return abs(self.quantity)


class WACLedger:
    """State machine for one item's quantity and weighted average cost."""

    def __init__(
        self,
        item_id: str,
        negative_stock_policy: NegativeStockPolicy | str = NegativeStockPolicy.FAIL,
    ):
        self.state = ItemLedgerState(item_id=item_id)
        self._policy = NegativeStockPolicy(negative_stock_policy)

    @property
    def item_id(self) -> str:
        return self.state.item_id

    @property
    def quantity(self) -> int:
        return self.state.quantity

    @property
    def avg_cost(self) -> Decimal:
        return self.state.avg_cost

    @property
    def value(self) -> Decimal:
        return self.state.value

    def apply(self, event: StockEvent) -> LedgerMovement:
        """Apply one stock event and return its signed movement."""
        if event.item_id != self.state.item_id:
            raise ValueError(
                f"Event for item {event.item_id} applied to ledger of {self.state.item_id}"
            )
        if event.quantity_change > 0:
            return self.receive(event.quantity_change, event.unit_price)
        if event.quantity_change < 0:
            return self.issue(-event.quantity_change, timestamp=event.timestamp)
        return LedgerMovement(quantity=0, value=ZERO, unit_cost=self.state.avg_cost)

    def receive(self, quantity: int, unit_price: Decimal | None = None) -> LedgerMovement:
        """Add stock, blending a priced receipt into the average."""
        if quantity <= 0:
            raise ValueError("Received quantity must be positive")

        state = self.state
        if unit_price is None:
            unit_cost = state.avg_cost
            incoming = unit_cost * quantity
            state.quantity += quantity
        else:
            unit_cost = unit_price
            incoming = unit_cost * quantity
            new_qty = state.quantity + quantity
            state.avg_cost = (state.value + incoming) / new_qty
            state.quantity = new_qty

        return LedgerMovement(quantity=quantity, value=incoming, unit_cost=unit_cost)

    def issue(self, quantity: int, timestamp: datetime | None = None) -> LedgerMovement:
        """Remove stock at the current average cost."""
        if quantity <= 0:
            raise ValueError("Issued quantity must be positive")

        state = self.state
        warning = None
        if quantity > state.quantity:
            if self._policy is NegativeStockPolicy.FAIL:
                raise NegativeStockError(
                    item_id=state.item_id,
                    requested=quantity,
                    available=state.quantity,
                    timestamp=timestamp,
                )
            warning = DataIntegrityWarning(
                item_id=state.item_id,
                timestamp=timestamp,
                requested=quantity,
                available=state.quantity,
            )
            logger.warning(
                "negative_stock_clamped",
                item_id=state.item_id,
                requested=quantity,
                available=state.quantity,
            )
            quantity = state.quantity

        cost = state.avg_cost * quantity
        state.quantity -= quantity

        return LedgerMovement(
            quantity=-quantity,
            value=-cost,
            unit_cost=state.avg_cost,
            warning=warning,
        )
