"""Get Financial Summary Use Case - WAC replay over a date window."""

from src.application.dto.requests import FinancialSummaryRequest
from src.application.dto.responses import FinancialSummaryResponse
from src.config import bind_summary_context, get_logger
from src.core.entities.financial_summary import FinancialSummary
from src.core.exceptions import CostingError, InvalidDateRangeError
from src.core.interfaces.stock_event_source import IStockEventSource
from src.core.services.ledger_replayer import LedgerReplayer, window_bounds

logger = get_logger(__name__)


class GetFinancialSummaryUseCase:
    """
    Compute opening/closing balances and period flows at weighted average cost.

    The supplier filter is pushed down to the event source, so opening and
    closing balances never include other suppliers' items.
    """

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

    async def execute(self, request: FinancialSummaryRequest) -> FinancialSummary:
        """Execute financial summary use case."""
        if request.from_date > request.to_date:
            raise InvalidDateRangeError(request.from_date, request.to_date)

        with bind_summary_context(request.from_date, request.to_date, request.supplier_id):
            logger.info("financial_summary_started")

            # 1. Fetch everything up to the end of the window
            _, end = window_bounds(request.from_date, request.to_date)
            source = await self._get_event_source()
            events = await source.stream_events_for_wac(end, request.supplier_id)

            # 2. Replay and assemble
            try:
                summary = self._get_replayer().compute_summary(
                    events, request.from_date, request.to_date
                )
            except CostingError as e:
                logger.error(
                    "financial_summary_failed",
                    error=e.code,
                    details=e.details,
                )
                raise

            logger.info(
                "financial_summary_complete",
                items=summary.item_count,
                ending_qty=summary.ending_qty,
                ending_value=str(summary.ending_value),
                warnings=len(summary.warnings),
            )
        return summary

    def to_response(self, summary: FinancialSummary) -> FinancialSummaryResponse:
        """Convert summary to the dashboard response shape."""
        return FinancialSummaryResponse.from_summary(summary)
