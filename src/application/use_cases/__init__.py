"""
Application use cases.

Use cases orchestrate core services and infrastructure to fulfill
reporting requests. Each use case represents a single business operation.
"""

from src.application.use_cases.get_financial_summary import GetFinancialSummaryUseCase
from src.application.use_cases.get_supplier_breakdown import GetSupplierBreakdownUseCase

__all__ = [
    "GetFinancialSummaryUseCase",
    "GetSupplierBreakdownUseCase",
]
