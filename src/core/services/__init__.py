"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.event_classifier import classify, classify_event, parse_reason
from src.core.services.ledger_replayer import (
    FlowTotals,
    LedgerReplayer,
    PeriodAccumulator,
    normalize_supplier_id,
    window_bounds,
)
from src.core.services.summary_assembler import SummaryAssembler
from src.core.services.wac_ledger import LedgerMovement, WACLedger

__all__ = [
    # Classifier
    "classify",
    "classify_event",
    "parse_reason",
    # Ledger
    "WACLedger",
    "LedgerMovement",
    # Replay
    "LedgerReplayer",
    "PeriodAccumulator",
    "FlowTotals",
    "normalize_supplier_id",
    "window_bounds",
    # Assembler
    "SummaryAssembler",
]
