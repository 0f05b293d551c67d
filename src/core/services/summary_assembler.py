"""Maps finished replay totals to the immutable FinancialSummary."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from src.core.entities.financial_summary import FinancialSummary
from src.core.entities.stock_event import FlowCategory

if TYPE_CHECKING:
    from src.core.services.ledger_replayer import PeriodAccumulator


class SummaryAssembler:
    """
    Build the output record and apply the single rounding step.

    Ledger arithmetic runs at full precision; monetary fields are quantized
    here and nowhere else.
    """

    DEFAULT_MONEY_SCALE = 2

    def __init__(
        self,
        money_scale: int | None = None,
        rounding_mode: str = ROUND_HALF_UP,
    ):
        scale = money_scale if money_scale is not None else self.DEFAULT_MONEY_SCALE
        self._quantum = Decimal(1).scaleb(-scale)
        self._rounding = rounding_mode

    def round_money(self, value: Decimal) -> Decimal:
        """Quantize to the money scale; never returns negative zero."""
        rounded = value.quantize(self._quantum, rounding=self._rounding)
        if rounded.is_zero():
            return rounded.copy_abs()
        return rounded

    def assemble(
        self,
        accumulator: "PeriodAccumulator",
        from_date: date,
        to_date: date,
    ) -> FinancialSummary:
        flows = accumulator.flows
        purchases = flows[FlowCategory.PURCHASE]
        returns_in = flows[FlowCategory.RETURN_IN]
        cogs = flows[FlowCategory.CONSUMPTION]
        write_offs = flows[FlowCategory.WRITE_OFF]
        adjustments = flows[FlowCategory.NEUTRAL_ADJUSTMENT]

        return FinancialSummary(
            from_date=from_date,
            to_date=to_date,
            opening_qty=accumulator.opening.qty,
            opening_value=self.round_money(accumulator.opening.value),
            purchases_qty=purchases.qty,
            purchases_cost=self.round_money(purchases.value),
            returns_in_qty=returns_in.qty,
            returns_in_cost=self.round_money(returns_in.value),
            cogs_qty=cogs.qty,
            cogs_cost=self.round_money(cogs.value),
            write_off_qty=write_offs.qty,
            write_off_cost=self.round_money(write_offs.value),
            adjustment_qty=adjustments.qty,
            adjustment_value=self.round_money(adjustments.value),
            ending_qty=accumulator.closing.qty,
            ending_value=self.round_money(accumulator.closing.value),
            item_count=accumulator.item_count,
            warnings=tuple(accumulator.warnings),
        )
