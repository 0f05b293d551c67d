"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator
from datetime import date, datetime
from decimal import Decimal

import pytest

from src.application.services import reset_services
from src.config import reset_settings
from src.core.entities import StockChangeReason, StockEvent
from src.core.services import LedgerReplayer

EventFactory = Callable[..., StockEvent]


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch) -> Generator[None, None, None]:
    """Point storage at a temp dir and drop cached settings/services."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def make_event() -> EventFactory:
    """Build StockEvents with a running sequence number."""
    counter = {"seq": 0}

    def _make(
        item_id: str,
        when: datetime,
        change: int,
        reason: StockChangeReason,
        price: str | Decimal | None = None,
        supplier_id: str | None = None,
    ) -> StockEvent:
        counter["seq"] += 1
        return StockEvent(
            item_id=item_id,
            supplier_id=supplier_id,
            timestamp=when,
            quantity_change=change,
            unit_price=Decimal(price) if price is not None else None,
            reason=reason,
            sequence=counter["seq"],
        )

    return _make


@pytest.fixture
def replayer() -> LedgerReplayer:
    """Replayer with the default fail-fast negative stock policy."""
    return LedgerReplayer()


@pytest.fixture
def january() -> tuple[date, date]:
    """Reporting window used across scenario tests."""
    return date(2024, 1, 1), date(2024, 1, 31)
