"""Request DTOs for the costing use cases.

Pydantic v2 models with validation.
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator


class FinancialSummaryRequest(BaseModel):
    """Request for a WAC financial summary over an inclusive date window."""

    from_date: date = Field(
        ...,
        description="First day of the reporting window (inclusive)",
        examples=["2024-01-01"],
    )
    to_date: date = Field(
        ...,
        description="Last day of the reporting window (inclusive)",
        examples=["2024-01-31"],
    )
    supplier_id: str | None = Field(
        default=None,
        description="Restrict to one supplier's events; blank means all suppliers",
    )

    @field_validator("supplier_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        stripped = str(v).strip()
        return stripped or None


class SupplierBreakdownRequest(BaseModel):
    """Request for per-supplier summaries that add up to the unfiltered one."""

    from_date: date = Field(..., description="First day of the reporting window (inclusive)")
    to_date: date = Field(..., description="Last day of the reporting window (inclusive)")
