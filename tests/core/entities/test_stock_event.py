"""Tests for stock event entities."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.core.entities.stock_event import FlowCategory, StockChangeReason, StockEvent


class TestStockEvent:
    """Tests for StockEvent entity."""

    def test_defaults(self):
        """Test default values."""
        event = StockEvent(
            item_id="ITEM-1",
            timestamp=datetime(2024, 1, 5, 9, 0),
            quantity_change=10,
            reason=StockChangeReason.INITIAL_STOCK,
        )
        assert event.supplier_id is None
        assert event.unit_price is None
        assert event.sequence == 0

    def test_reason_from_string(self):
        """Test reason accepts its string value."""
        event = StockEvent(
            item_id="ITEM-1",
            timestamp=datetime(2024, 1, 5),
            quantity_change=-2,
            reason="SOLD",
        )
        assert event.reason is StockChangeReason.SOLD

    def test_price_parsed_as_decimal(self):
        event = StockEvent(
            item_id="ITEM-1",
            timestamp=datetime(2024, 1, 5),
            quantity_change=5,
            unit_price="8.25",
            reason=StockChangeReason.INITIAL_STOCK,
        )
        assert event.unit_price == Decimal("8.25")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            StockEvent(
                item_id="ITEM-1",
                timestamp=datetime(2024, 1, 5),
                quantity_change=5,
                unit_price=Decimal("-1"),
                reason=StockChangeReason.INITIAL_STOCK,
            )

    def test_immutable(self):
        """Events are append-only and never mutated."""
        event = StockEvent(
            item_id="ITEM-1",
            timestamp=datetime(2024, 1, 5),
            quantity_change=5,
            reason=StockChangeReason.INITIAL_STOCK,
        )
        with pytest.raises(ValidationError):
            event.quantity_change = 6

    def test_aware_timestamp_becomes_naive_local(self):
        aware = datetime(2024, 1, 15, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        event = StockEvent(
            item_id="A", timestamp=aware, quantity_change=1,
            reason=StockChangeReason.INITIAL_STOCK,
        )
        assert event.timestamp.tzinfo is None
        assert event.timestamp == aware.astimezone().replace(tzinfo=None)

    def test_naive_timestamp_unchanged(self):
        naive = datetime(2024, 1, 15, 12, 0)
        event = StockEvent(
            item_id="A", timestamp=naive, quantity_change=1,
            reason=StockChangeReason.INITIAL_STOCK,
        )
        assert event.timestamp == naive

    def test_direction(self):
        inbound = StockEvent(
            item_id="A", timestamp=datetime(2024, 1, 1), quantity_change=3,
            reason=StockChangeReason.RETURNED_BY_CUSTOMER,
        )
        outbound = StockEvent(
            item_id="A", timestamp=datetime(2024, 1, 1), quantity_change=-3,
            reason=StockChangeReason.SOLD,
        )
        assert inbound.is_inbound and not inbound.is_outbound
        assert outbound.is_outbound and not outbound.is_inbound

    def test_sort_key_uses_sequence_as_tiebreak(self):
        ts = datetime(2024, 1, 1, 12, 0)
        first = StockEvent(
            item_id="A", timestamp=ts, quantity_change=1,
            reason=StockChangeReason.INITIAL_STOCK, sequence=1,
        )
        second = StockEvent(
            item_id="A", timestamp=ts, quantity_change=-1,
            reason=StockChangeReason.SOLD, sequence=2,
        )
        assert sorted([second, first], key=lambda e: e.sort_key) == [first, second]


class TestEnums:
    def test_flow_categories(self):
        assert {c.value for c in FlowCategory} == {
            "PURCHASE",
            "RETURN_IN",
            "CONSUMPTION",
            "WRITE_OFF",
            "NEUTRAL_ADJUSTMENT",
        }

    def test_reason_values_match_names(self):
        for reason in StockChangeReason:
            assert reason.value == reason.name
