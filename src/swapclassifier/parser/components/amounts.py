"""AmountNormalizer: raw deltas to decimal amounts, one leg at a time."""

from decimal import Decimal

from swapclassifier.domain.enums import TradeDirection
from swapclassifier.domain.models.swap import FeeBreakdown, SwapAmounts
from swapclassifier.parser.utils.types import AssetDelta
from swapclassifier.parser.utils.units import raw_to_decimal


def normalize_leg(delta: AssetDelta) -> Decimal:
    """Absolute amount of one leg in human units."""
    return raw_to_decimal(abs(delta.net_delta), delta.decimals)


def normalize_amounts(
    quote: AssetDelta,
    base: AssetDelta,
    direction: TradeDirection,
    fee_breakdown: FeeBreakdown,
) -> SwapAmounts:
    """BUY reports what left the wallet including fees; SELL reports what arrived net of fees."""
    quote_amount = normalize_leg(quote)
    common = dict(
        base_amount=normalize_leg(base),
        base_amount_raw=abs(base.net_delta),
        quote_amount_raw=abs(quote.net_delta),
        fee_breakdown=fee_breakdown,
    )
    if direction == TradeDirection.BUY:
        return SwapAmounts(
            swap_input_amount=quote_amount,
            total_wallet_cost=quote_amount + fee_breakdown.total_fee_quote,
            **common,
        )
    return SwapAmounts(
        swap_output_amount=quote_amount,
        net_wallet_received=quote_amount - fee_breakdown.total_fee_quote,
        **common,
    )
