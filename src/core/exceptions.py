"""
Domain exceptions for the costing engine.

Provides specific exception types for different error scenarios.
"""

from datetime import date, datetime
from typing import Any


class CostingError(Exception):
    """Base exception for all costing engine errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(CostingError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class InventoryItemNotFoundError(StorageError):
    """Inventory item not found in storage."""

    def __init__(self, item_id: str):
        super().__init__(
            f"Inventory item not found: {item_id}",
            code="INVENTORY_ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


# Classification Exceptions
class ClassificationError(CostingError):
    """A stock change reason has no accounting category."""

    def __init__(self, reason: Any):
        super().__init__(
            f"Unrecognized stock change reason: {reason!r}",
            code="UNKNOWN_STOCK_CHANGE_REASON",
            details={"reason": str(reason)},
        )


# Ledger Exceptions
class DataIntegrityError(CostingError):
    """The event log contradicts the ledger state."""

    pass


class NegativeStockError(DataIntegrityError):
    """An outbound event would drive on-hand quantity below zero."""

    def __init__(
        self,
        item_id: str,
        requested: int,
        available: int,
        timestamp: datetime | None = None,
    ):
        super().__init__(
            f"Outbound quantity {requested} exceeds on-hand {available} for item {item_id}",
            code="NEGATIVE_STOCK",
            details={
                "item_id": item_id,
                "requested": requested,
                "available": available,
                "timestamp": timestamp.isoformat() if timestamp else None,
            },
        )


class ReplayLimitExceededError(CostingError):
    """Too many events for a single summary request."""

    def __init__(self, event_count: int, limit: int):
        super().__init__(
            f"Summary request would replay {event_count} events (limit {limit})",
            code="REPLAY_LIMIT_EXCEEDED",
            details={"event_count": event_count, "limit": limit},
        )


# Validation Exceptions
class ValidationError(CostingError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class InvalidDateRangeError(ValidationError):
    """Reporting window starts after it ends."""

    def __init__(self, from_date: date, to_date: date):
        super().__init__(
            field="from_date",
            message="from_date must be on or before to_date",
            value=from_date,
        )
        self.details.update(
            {
                "from_date": from_date.isoformat(),
                "to_date": to_date.isoformat(),
            }
        )
