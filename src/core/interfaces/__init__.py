"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.stock_event_source import IStockEventSource

__all__ = [
    "IStockEventSource",
]
