"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for reporting contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection
"""

from src.application.dto.requests import FinancialSummaryRequest, SupplierBreakdownRequest
from src.application.dto.responses import (
    FinancialSummaryResponse,
    SupplierBreakdownResponse,
    SupplierSummaryResponse,
)
from src.application.services import (
    build_ledger_replayer,
    get_ledger_replayer,
    get_stock_event_source,
    reset_services,
)
from src.application.use_cases import (
    GetFinancialSummaryUseCase,
    GetSupplierBreakdownUseCase,
)

__all__ = [
    # Request DTOs
    "FinancialSummaryRequest",
    "SupplierBreakdownRequest",
    # Response DTOs
    "FinancialSummaryResponse",
    "SupplierSummaryResponse",
    "SupplierBreakdownResponse",
    # Services
    "build_ledger_replayer",
    "get_ledger_replayer",
    "get_stock_event_source",
    "reset_services",
    # Use Cases
    "GetFinancialSummaryUseCase",
    "GetSupplierBreakdownUseCase",
]
