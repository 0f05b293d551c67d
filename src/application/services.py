"""
Service factory functions for dependency injection.

This module provides factory functions that wire configuration and
infrastructure implementations to core services. Use cases should import
from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from src.config import get_settings
from src.core.services import LedgerReplayer, SummaryAssembler

if TYPE_CHECKING:
    from src.config.settings import CostingSettings
    from src.core.interfaces import IStockEventSource


# Singleton service instances
_ledger_replayer: LedgerReplayer | None = None


def build_ledger_replayer(costing: "CostingSettings") -> LedgerReplayer:
    """Create a LedgerReplayer from costing settings."""
    return LedgerReplayer(
        negative_stock_policy=costing.negative_stock_policy,
        max_events=costing.max_events_per_request,
        decimal_precision=costing.decimal_precision,
        assembler=SummaryAssembler(
            money_scale=costing.money_scale,
            rounding_mode=costing.rounding_mode,
        ),
    )


def get_ledger_replayer() -> LedgerReplayer:
    """
    Get or create the LedgerReplayer configured from settings.

    The replayer keeps no state between calls, so one instance is shared.
    """
    global _ledger_replayer

    if _ledger_replayer is None:
        _ledger_replayer = build_ledger_replayer(get_settings().costing)

    return _ledger_replayer


async def get_stock_event_source() -> "IStockEventSource":
    """Get the default stock event source (SQLite)."""
    # Lazy import infrastructure to avoid circular imports
    from src.infrastructure.storage.sqlite import get_stock_history_store

    return await get_stock_history_store()


def reset_services() -> None:
    """Reset all singleton services (for testing)."""
    global _ledger_replayer
    _ledger_replayer = None
