"""
Financial summary entities.

A summary is recomputed from the stock history on every request and is never
stored.
"""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.core.entities.ledger import DataIntegrityWarning

ZERO = Decimal("0")


class FinancialSummary(BaseModel):
    """Inventory flows for a reporting window, valued at weighted average cost."""

    model_config = ConfigDict(frozen=True)

    method: Literal["WAC"] = "WAC"
    from_date: date
    to_date: date

    opening_qty: int = 0
    opening_value: Decimal = ZERO

    purchases_qty: int = 0
    purchases_cost: Decimal = ZERO

    returns_in_qty: int = 0
    returns_in_cost: Decimal = ZERO

    cogs_qty: int = 0
    cogs_cost: Decimal = ZERO

    write_off_qty: int = 0
    write_off_cost: Decimal = ZERO

    # Net signed effect of neutral corrections (manual updates)
    adjustment_qty: int = 0
    adjustment_value: Decimal = ZERO

    ending_qty: int = 0
    ending_value: Decimal = ZERO

    item_count: int = 0
    warnings: tuple[DataIntegrityWarning, ...] = ()

    @property
    def expected_ending_value(self) -> Decimal:
        """Ending value implied by opening value and the period flows."""
        return (
            self.opening_value
            + self.purchases_cost
            + self.returns_in_cost
            - self.cogs_cost
            - self.write_off_cost
            + self.adjustment_value
        )

    @property
    def expected_ending_qty(self) -> int:
        return (
            self.opening_qty
            + self.purchases_qty
            + self.returns_in_qty
            - self.cogs_qty
            - self.write_off_qty
            + self.adjustment_qty
        )


class SupplierSummary(BaseModel):
    """Summary restricted to one supplier's events (None = unassigned)."""

    model_config = ConfigDict(frozen=True)

    supplier_id: str | None = None
    summary: FinancialSummary


class SupplierBreakdown(BaseModel):
    """Unfiltered summary plus its per-supplier decomposition."""

    model_config = ConfigDict(frozen=True)

    total: FinancialSummary
    suppliers: list[SupplierSummary] = Field(default_factory=list)
