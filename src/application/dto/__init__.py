"""Data transfer objects for the application layer."""

from src.application.dto.requests import FinancialSummaryRequest, SupplierBreakdownRequest
from src.application.dto.responses import (
    FinancialSummaryResponse,
    SupplierBreakdownResponse,
    SupplierSummaryResponse,
)

__all__ = [
    # Requests
    "FinancialSummaryRequest",
    "SupplierBreakdownRequest",
    # Responses
    "FinancialSummaryResponse",
    "SupplierSummaryResponse",
    "SupplierBreakdownResponse",
]
