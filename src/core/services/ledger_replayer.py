"""
Ledger replay and period aggregation.

Replays each item's stock history through a private WAC ledger:

1. Events before the window build the opening state silently.
2. The opening snapshot (qty, qty * avg_cost) is taken at the window start.
3. Events inside [from 00:00, to 23:59:59.999999] are classified, applied and
   booked into their flow bucket.
4. The closing snapshot is taken after the last event inside the window.

Per-item accumulators are then merged into one period-wide total. All ledger
state is local to a single call.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal, localcontext

from src.config import get_logger
from src.core.entities.financial_summary import (
    FinancialSummary,
    SupplierBreakdown,
    SupplierSummary,
)
from src.core.entities.ledger import ZERO, DataIntegrityWarning, NegativeStockPolicy
from src.core.entities.stock_event import FlowCategory, StockEvent
from src.core.exceptions import InvalidDateRangeError, ReplayLimitExceededError
from src.core.services.event_classifier import classify_event, is_outbound_category
from src.core.services.summary_assembler import SummaryAssembler
from src.core.services.wac_ledger import LedgerMovement, WACLedger

logger = get_logger(__name__)


@dataclass
class FlowTotals:
    """Running quantity and value for one bucket."""

    qty: int = 0
    value: Decimal = ZERO

    def add(self, qty: int, value: Decimal) -> None:
        self.qty += qty
        self.value += value


def _empty_flows() -> dict[FlowCategory, FlowTotals]:
    return {category: FlowTotals() for category in FlowCategory}


@dataclass
class PeriodAccumulator:
    """Opening/closing snapshots and per-category flows for a window."""

    opening: FlowTotals = field(default_factory=FlowTotals)
    closing: FlowTotals = field(default_factory=FlowTotals)
    flows: dict[FlowCategory, FlowTotals] = field(default_factory=_empty_flows)
    warnings: list[DataIntegrityWarning] = field(default_factory=list)
    item_count: int = 0
    event_count: int = 0

    def record(self, category: FlowCategory, movement: LedgerMovement) -> None:
        """
        Book a signed movement into its category.

        Outbound categories (COGS, write-off) report outbound magnitudes as
        positive, so an inbound reversal there is negative. Inbound categories
        report the opposite way; neutral adjustments keep the raw sign.
        """
        if is_outbound_category(category):
            self.flows[category].add(-movement.quantity, -movement.value)
        else:
            self.flows[category].add(movement.quantity, movement.value)

    def merge(self, other: "PeriodAccumulator") -> None:
        self.opening.add(other.opening.qty, other.opening.value)
        self.closing.add(other.closing.qty, other.closing.value)
        for category, totals in other.flows.items():
            self.flows[category].add(totals.qty, totals.value)
        self.warnings.extend(other.warnings)
        self.item_count += other.item_count
        self.event_count += other.event_count


def normalize_supplier_id(supplier_id: str | None) -> str | None:
    """Trim and lower-case a supplier id; blank means no supplier."""
    if supplier_id is None:
        return None
    stripped = supplier_id.strip()
    return stripped.lower() if stripped else None


def window_bounds(from_date: date, to_date: date) -> tuple[datetime, datetime]:
    """Inclusive datetime bounds covering both whole days."""
    return datetime.combine(from_date, time.min), datetime.combine(to_date, time.max)


class LedgerReplayer:
    """
    Computes WAC financial summaries from an ordered stock event log.

    Required collaborators:
    - SummaryAssembler: rounding and output mapping
    """

    DEFAULT_DECIMAL_PRECISION = 28

    def __init__(
        self,
        negative_stock_policy: NegativeStockPolicy | str = NegativeStockPolicy.FAIL,
        max_events: int = 0,
        decimal_precision: int | None = None,
        assembler: SummaryAssembler | None = None,
    ):
        """
        Args:
            negative_stock_policy: "fail" aborts the request, "clamp" issues
                only what is on hand and records a warning
            max_events: Upper bound on events per request, 0 for no bound
            decimal_precision: Significant digits for ledger arithmetic
            assembler: Output assembler (default: 2 places, half-up)
        """
        self._policy = NegativeStockPolicy(negative_stock_policy)
        self._max_events = max_events
        self._precision = decimal_precision or self.DEFAULT_DECIMAL_PRECISION
        self._assembler = assembler or SummaryAssembler()

    def compute_summary(
        self,
        events: Iterable[StockEvent],
        from_date: date,
        to_date: date,
    ) -> FinancialSummary:
        """Replay events and assemble the summary for [from_date, to_date]."""
        with localcontext() as ctx:
            ctx.prec = self._precision
            accumulator = self.replay(events, from_date, to_date)
            summary = self._assembler.assemble(accumulator, from_date, to_date)

        logger.info(
            "ledger_replay_complete",
            from_date=from_date.isoformat(),
            to_date=to_date.isoformat(),
            items=accumulator.item_count,
            events=accumulator.event_count,
            warnings=len(accumulator.warnings),
        )
        return summary

    def compute_supplier_breakdown(
        self,
        events: Iterable[StockEvent],
        from_date: date,
        to_date: date,
    ) -> SupplierBreakdown:
        """
        Summaries per supplier plus the unfiltered total.

        Events are partitioned before replay, so each supplier's opening and
        closing balances only ever see that supplier's events. Events with no
        supplier form the unassigned (None) partition.
        """
        event_list = list(events)
        total = self.compute_summary(event_list, from_date, to_date)

        partitions: dict[str | None, list[StockEvent]] = {}
        labels: dict[str | None, str | None] = {}
        for event in event_list:
            key = normalize_supplier_id(event.supplier_id)
            partitions.setdefault(key, []).append(event)
            labels.setdefault(key, event.supplier_id.strip() if key else None)

        ordered_keys = sorted(partitions, key=lambda k: (k is None, k or ""))
        suppliers = [
            SupplierSummary(
                supplier_id=labels[key],
                summary=self.compute_summary(partitions[key], from_date, to_date),
            )
            for key in ordered_keys
        ]
        return SupplierBreakdown(total=total, suppliers=suppliers)

    def replay(
        self,
        events: Iterable[StockEvent],
        from_date: date,
        to_date: date,
    ) -> PeriodAccumulator:
        """Replay every item and merge the per-item accumulators."""
        if from_date > to_date:
            raise InvalidDateRangeError(from_date, to_date)

        start, end = window_bounds(from_date, to_date)
        total = PeriodAccumulator()
        for item_id, item_events in self._group_by_item(events).items():
            total.merge(self._replay_item(item_id, item_events, start, end))
        return total

    def _group_by_item(self, events: Iterable[StockEvent]) -> dict[str, list[StockEvent]]:
        grouped: dict[str, list[StockEvent]] = {}
        count = 0
        for event in events:
            count += 1
            if self._max_events and count > self._max_events:
                raise ReplayLimitExceededError(event_count=count, limit=self._max_events)
            grouped.setdefault(event.item_id, []).append(event)
        return grouped

    def _replay_item(
        self,
        item_id: str,
        item_events: list[StockEvent],
        start: datetime,
        end: datetime,
    ) -> PeriodAccumulator:
        ledger = WACLedger(item_id, self._policy)
        accumulator = PeriodAccumulator(item_count=1)
        opened = False

        # Stable sort keeps source order for identical (timestamp, sequence)
        for event in sorted(item_events, key=lambda e: e.sort_key):
            if event.timestamp > end:
                break
            category = classify_event(event)

            if event.timestamp >= start and not opened:
                accumulator.opening.add(ledger.quantity, ledger.value)
                opened = True

            movement = ledger.apply(event)
            accumulator.event_count += 1
            if movement.warning is not None:
                accumulator.warnings.append(movement.warning)
            if opened:
                accumulator.record(category, movement)

        if not opened:
            accumulator.opening.add(ledger.quantity, ledger.value)
        accumulator.closing.add(ledger.quantity, ledger.value)
        return accumulator
