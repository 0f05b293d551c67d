"""Core domain entities."""

from src.core.entities.financial_summary import (
    FinancialSummary,
    SupplierBreakdown,
    SupplierSummary,
)
from src.core.entities.ledger import (
    DataIntegrityWarning,
    ItemLedgerState,
    NegativeStockPolicy,
)
from src.core.entities.stock_event import (
    FlowCategory,
    StockChangeReason,
    StockEvent,
)

__all__ = [
    # Stock events
    "StockEvent",
    "StockChangeReason",
    "FlowCategory",
    # Ledger
    "ItemLedgerState",
    "NegativeStockPolicy",
    "DataIntegrityWarning",
    # Summaries
    "FinancialSummary",
    "SupplierSummary",
    "SupplierBreakdown",
]
