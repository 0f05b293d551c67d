"""Get Supplier Breakdown Use Case - per-supplier WAC summaries."""

from src.application.dto.requests import SupplierBreakdownRequest
from src.application.dto.responses import (
    FinancialSummaryResponse,
    SupplierBreakdownResponse,
    SupplierSummaryResponse,
)
from src.config import bind_summary_context, get_logger
from src.core.entities.financial_summary import SupplierBreakdown
from src.core.exceptions import InvalidDateRangeError
from src.core.interfaces.stock_event_source import IStockEventSource
from src.core.services.ledger_replayer import LedgerReplayer, window_bounds

logger = get_logger(__name__)


class GetSupplierBreakdownUseCase:
    """Split a period summary by supplier, with an unassigned bucket."""

    def __init__(
        self,
        event_source: IStockEventSource | None = None,
        replayer: LedgerReplayer | None = None,
    ):
        self._event_source = event_source
        self._replayer = replayer

    async def _get_event_source(self) -> IStockEventSource:
        if self._event_source is None:
            from src.application.services import get_stock_event_source

            self._event_source = await get_stock_event_source()
        return self._event_source

    def _get_replayer(self) -> LedgerReplayer:
        if self._replayer is None:
            from src.application.services import get_ledger_replayer

            self._replayer = get_ledger_replayer()
        return self._replayer

    async def execute(self, request: SupplierBreakdownRequest) -> SupplierBreakdown:
        """Execute supplier breakdown use case."""
        if request.from_date > request.to_date:
            raise InvalidDateRangeError(request.from_date, request.to_date)

        with bind_summary_context(request.from_date, request.to_date):
            logger.info("supplier_breakdown_started")

            _, end = window_bounds(request.from_date, request.to_date)
            source = await self._get_event_source()
            events = await source.stream_events_for_wac(end)

            breakdown = self._get_replayer().compute_supplier_breakdown(
                events, request.from_date, request.to_date
            )

            logger.info(
                "supplier_breakdown_complete",
                suppliers=len(breakdown.suppliers),
            )
        return breakdown

    def to_response(self, breakdown: SupplierBreakdown) -> SupplierBreakdownResponse:
        """Convert breakdown to the dashboard response shape."""
        return SupplierBreakdownResponse(
            total=FinancialSummaryResponse.from_summary(breakdown.total),
            suppliers=[
                SupplierSummaryResponse(
                    supplier_id=entry.supplier_id,
                    summary=FinancialSummaryResponse.from_summary(entry.summary),
                )
                for entry in breakdown.suppliers
            ],
        )
