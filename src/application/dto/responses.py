"""Response DTOs for the analytics consumers.

Pydantic v2 models mirroring the dashboard's financial summary contract.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.entities.financial_summary import FinancialSummary


class FinancialSummaryResponse(BaseModel):
    """Financial summary with camelCase keys and ISO date strings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    method: str = Field(default="WAC", description="Costing method")
    from_date: str = Field(..., description="Window start, ISO-8601 date")
    to_date: str = Field(..., description="Window end, ISO-8601 date")
    opening_qty: int
    opening_value: Decimal
    purchases_qty: int
    purchases_cost: Decimal
    returns_in_qty: int
    returns_in_cost: Decimal
    cogs_qty: int
    cogs_cost: Decimal
    write_off_qty: int
    write_off_cost: Decimal
    ending_qty: int
    ending_value: Decimal

    @classmethod
    def from_summary(cls, summary: FinancialSummary) -> "FinancialSummaryResponse":
        return cls(
            method=summary.method,
            from_date=summary.from_date.isoformat(),
            to_date=summary.to_date.isoformat(),
            opening_qty=summary.opening_qty,
            opening_value=summary.opening_value,
            purchases_qty=summary.purchases_qty,
            purchases_cost=summary.purchases_cost,
            returns_in_qty=summary.returns_in_qty,
            returns_in_cost=summary.returns_in_cost,
            cogs_qty=summary.cogs_qty,
            cogs_cost=summary.cogs_cost,
            write_off_qty=summary.write_off_qty,
            write_off_cost=summary.write_off_cost,
            ending_qty=summary.ending_qty,
            ending_value=summary.ending_value,
        )


class SupplierSummaryResponse(BaseModel):
    """One supplier's share of the breakdown."""

    supplier_id: str | None = Field(default=None, description="None for unassigned events")
    summary: FinancialSummaryResponse


class SupplierBreakdownResponse(BaseModel):
    """Unfiltered summary plus its supplier decomposition."""

    total: FinancialSummaryResponse
    suppliers: list[SupplierSummaryResponse] = Field(default_factory=list)
