"""Tests for the stock change classifier."""

from datetime import datetime
from decimal import Decimal

import pytest

from src.core.entities.stock_event import FlowCategory, StockChangeReason, StockEvent
from src.core.exceptions import ClassificationError
from src.core.services.event_classifier import (
    classify,
    classify_event,
    is_outbound_category,
    parse_reason,
)


class TestClassify:
    @pytest.mark.parametrize(
        "reason,expected",
        [
            (StockChangeReason.INITIAL_STOCK, FlowCategory.PURCHASE),
            (StockChangeReason.RETURNED_TO_SUPPLIER, FlowCategory.PURCHASE),
            (StockChangeReason.RETURNED_BY_CUSTOMER, FlowCategory.RETURN_IN),
            (StockChangeReason.SOLD, FlowCategory.CONSUMPTION),
            (StockChangeReason.SCRAPPED, FlowCategory.WRITE_OFF),
            (StockChangeReason.DESTROYED, FlowCategory.WRITE_OFF),
            (StockChangeReason.DAMAGED, FlowCategory.WRITE_OFF),
            (StockChangeReason.EXPIRED, FlowCategory.WRITE_OFF),
            (StockChangeReason.LOST, FlowCategory.WRITE_OFF),
            (StockChangeReason.MANUAL_UPDATE, FlowCategory.NEUTRAL_ADJUSTMENT),
            (StockChangeReason.PRICE_CHANGE, FlowCategory.NEUTRAL_ADJUSTMENT),
        ],
    )
    def test_mapping(self, reason, expected):
        assert classify(reason) is expected

    def test_every_reason_has_a_category(self):
        for reason in StockChangeReason:
            assert isinstance(classify(reason), FlowCategory)

    def test_accepts_raw_string(self):
        assert classify("SOLD") is FlowCategory.CONSUMPTION

    def test_raw_string_is_normalized(self):
        assert classify("  sold ") is FlowCategory.CONSUMPTION

    def test_unknown_reason_fails(self):
        with pytest.raises(ClassificationError) as exc_info:
            classify("GIFTED")
        assert exc_info.value.details["reason"] == "GIFTED"


def _event(reason, change, price=None):
    return StockEvent(
        item_id="A",
        timestamp=datetime(2024, 1, 10),
        quantity_change=change,
        unit_price=Decimal(price) if price is not None else None,
        reason=reason,
    )


class TestClassifyEvent:
    def test_priced_manual_restock_is_purchase(self):
        event = _event(StockChangeReason.MANUAL_UPDATE, 5, "8")
        assert classify_event(event) is FlowCategory.PURCHASE

    def test_manual_reduction_is_write_off(self):
        event = _event(StockChangeReason.MANUAL_UPDATE, -3)
        assert classify_event(event) is FlowCategory.WRITE_OFF

    def test_unpriced_manual_increase_is_neutral(self):
        event = _event(StockChangeReason.MANUAL_UPDATE, 2)
        assert classify_event(event) is FlowCategory.NEUTRAL_ADJUSTMENT

    def test_price_change_stays_neutral(self):
        event = _event(StockChangeReason.PRICE_CHANGE, 0, "9")
        assert classify_event(event) is FlowCategory.NEUTRAL_ADJUSTMENT

    @pytest.mark.parametrize(
        "reason,change",
        [
            (StockChangeReason.SOLD, -2),
            (StockChangeReason.RETURNED_TO_SUPPLIER, -2),
            (StockChangeReason.RETURNED_BY_CUSTOMER, 2),
            (StockChangeReason.DAMAGED, -1),
        ],
    )
    def test_other_reasons_follow_table(self, reason, change):
        assert classify_event(_event(reason, change)) is classify(reason)


class TestParseReason:
    def test_enum_passthrough(self):
        assert parse_reason(StockChangeReason.LOST) is StockChangeReason.LOST

    def test_unknown_code(self):
        with pytest.raises(ClassificationError):
            parse_reason("TRANSFERRED")

    def test_empty_code(self):
        with pytest.raises(ClassificationError):
            parse_reason("")


class TestCategoryDirection:
    def test_outbound_categories(self):
        assert is_outbound_category(FlowCategory.CONSUMPTION)
        assert is_outbound_category(FlowCategory.WRITE_OFF)
        assert not is_outbound_category(FlowCategory.NEUTRAL_ADJUSTMENT)
