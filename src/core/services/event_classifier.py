"""
Stock change classifier.

Maps every stock change reason onto exactly one accounting flow category.
There is no default branch: a reason without an explicit category is a
ClassificationError, and a reason added to the enum without a table entry
fails at import.

Manual updates are the one reason whose category depends on the event: a
priced restock is a purchase, a manual reduction is a write-off, and an
unpriced increase is a cash-free correction.
"""

from src.core.entities.stock_event import FlowCategory, StockChangeReason, StockEvent
from src.core.exceptions import ClassificationError

_REASON_CATEGORIES: dict[StockChangeReason, FlowCategory] = {
    # Priced inbound stock; an outbound return to supplier reverses a purchase
    StockChangeReason.INITIAL_STOCK: FlowCategory.PURCHASE,
    StockChangeReason.RETURNED_TO_SUPPLIER: FlowCategory.PURCHASE,
    # Customer sends a sold unit back
    StockChangeReason.RETURNED_BY_CUSTOMER: FlowCategory.RETURN_IN,
    # Sales
    StockChangeReason.SOLD: FlowCategory.CONSUMPTION,
    # Losses
    StockChangeReason.SCRAPPED: FlowCategory.WRITE_OFF,
    StockChangeReason.DESTROYED: FlowCategory.WRITE_OFF,
    StockChangeReason.DAMAGED: FlowCategory.WRITE_OFF,
    StockChangeReason.EXPIRED: FlowCategory.WRITE_OFF,
    StockChangeReason.LOST: FlowCategory.WRITE_OFF,
    # Corrections with no cash effect, see classify_event for manual updates
    StockChangeReason.MANUAL_UPDATE: FlowCategory.NEUTRAL_ADJUSTMENT,
    StockChangeReason.PRICE_CHANGE: FlowCategory.NEUTRAL_ADJUSTMENT,
}

_unmapped = set(StockChangeReason) - set(_REASON_CATEGORIES)
if _unmapped:
    raise RuntimeError(
        "Stock change reasons without a flow category: "
        + ", ".join(sorted(r.value for r in _unmapped))
    )


def parse_reason(raw: str | StockChangeReason) -> StockChangeReason:
    """Convert a stored reason code to the enum, failing on unknown codes."""
    if isinstance(raw, StockChangeReason):
        return raw
    try:
        return StockChangeReason(str(raw).strip().upper())
    except ValueError:
        raise ClassificationError(raw) from None


def classify(reason: str | StockChangeReason) -> FlowCategory:
    """Return the flow category for a stock change reason."""
    parsed = parse_reason(reason)
    try:
        return _REASON_CATEGORIES[parsed]
    except KeyError:
        raise ClassificationError(reason) from None


def is_outbound_category(category: FlowCategory) -> bool:
    """Categories whose natural direction removes stock."""
    return category in (FlowCategory.CONSUMPTION, FlowCategory.WRITE_OFF)


def classify_event(event: StockEvent) -> FlowCategory:
    """Return the flow category for one event, splitting manual updates by direction."""
    category = classify(event.reason)
    if event.reason is StockChangeReason.MANUAL_UPDATE:
        if event.is_outbound:
            return FlowCategory.WRITE_OFF
        if event.is_inbound and event.unit_price is not None:
            return FlowCategory.PURCHASE
    return category
