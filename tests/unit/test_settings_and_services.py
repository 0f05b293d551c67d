"""Tests for settings loading and service factories."""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.application.services import (
    build_ledger_replayer,
    get_ledger_replayer,
    get_stock_event_source,
    reset_services,
)
from src.config import get_settings, reset_settings
from src.config.settings import CostingSettings, StorageSettings
from src.core.entities.stock_event import StockChangeReason
from src.infrastructure.storage.sqlite import SQLiteStockHistoryStore


class TestSettings:
    def test_costing_defaults(self):
        costing = CostingSettings()
        assert costing.money_scale == 2
        assert costing.rounding_mode == "ROUND_HALF_UP"
        assert costing.decimal_precision == 28
        assert costing.negative_stock_policy == "fail"
        assert costing.max_events_per_request == 1_000_000

    def test_costing_from_env(self, monkeypatch):
        monkeypatch.setenv("COSTING_NEGATIVE_STOCK_POLICY", "clamp")
        monkeypatch.setenv("COSTING_MONEY_SCALE", "4")

        costing = CostingSettings()

        assert costing.negative_stock_policy == "clamp"
        assert costing.money_scale == 4

    def test_invalid_policy_rejected(self, monkeypatch):
        monkeypatch.setenv("COSTING_NEGATIVE_STOCK_POLICY", "ignore")
        with pytest.raises(ValidationError):
            CostingSettings()

    def test_negative_event_limit_rejected(self):
        with pytest.raises(ValidationError):
            CostingSettings(max_events_per_request=-1)

    def test_storage_migrates_on_connect_by_default(self, monkeypatch):
        assert StorageSettings().migrate_on_connect is True

        monkeypatch.setenv("STORAGE_MIGRATE_ON_CONNECT", "false")
        assert StorageSettings().migrate_on_connect is False

    def test_storage_db_path(self, tmp_path):
        storage = StorageSettings(data_dir=tmp_path, db_name="history.db")
        assert storage.db_path == tmp_path / "history.db"

    def test_global_settings_create_data_dir(self, tmp_path):
        assert not (tmp_path / "data").exists()

        settings = get_settings()

        assert settings.storage.data_dir == tmp_path / "data"
        assert settings.storage.data_dir.exists()
        assert get_settings() is settings

        reset_settings()
        assert get_settings() is not settings


class TestServices:
    def test_build_replayer_from_settings(self, make_event, january):
        costing = CostingSettings(
            money_scale=3,
            rounding_mode="ROUND_HALF_EVEN",
            negative_stock_policy="clamp",
        )
        replayer = build_ledger_replayer(costing)
        events = [
            make_event("A", datetime(2024, 1, 2), 3, StockChangeReason.INITIAL_STOCK, "0.3335"),
            make_event("A", datetime(2024, 1, 3), -5, StockChangeReason.SOLD),
        ]

        summary = replayer.compute_summary(events, *january)

        # 3 * 0.3335 = 1.0005, half-even at three places
        assert summary.purchases_cost == Decimal("1.000")
        assert len(summary.warnings) == 1

    def test_replayer_singleton(self):
        first = get_ledger_replayer()
        assert get_ledger_replayer() is first

        reset_services()
        assert get_ledger_replayer() is not first

    async def test_default_event_source(self):
        source = await get_stock_event_source()
        assert isinstance(source, SQLiteStockHistoryStore)
