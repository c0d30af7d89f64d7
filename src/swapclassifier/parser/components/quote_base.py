"""QuoteBaseDetector: pick the priced leg and the traded leg from the swapper's deltas."""

from swapclassifier.domain.enums import EraseReason, TradeDirection
from swapclassifier.parser.components.deltas import merge_sol_equivalents
from swapclassifier.parser.utils.tokens import is_core_token, is_sol
from swapclassifier.parser.utils.types import AssetDelta, AssetDeltaMap, QuoteBaseResult


def detect_quote_base(deltas: AssetDeltaMap) -> QuoteBaseResult:
    """Resolve quote/base and direction, or the reason the deltas are not a two-leg trade.

    SOL and WSOL are merged before counting. Intermediates never count, so a
    multi-hop route reduces to its first real outflow and last real inflow.
    """
    merged = merge_sol_equivalents(deltas)
    real = [d for d in merged.values() if not d.is_intermediate]

    if len(real) != 2:
        return QuoteBaseResult(erase_reason=EraseReason.INVALID_ASSET_COUNT)

    first, second = real
    if (first.net_delta > 0) == (second.net_delta > 0):
        return QuoteBaseResult(erase_reason=EraseReason.INVALID_DELTA_SIGNS)

    quote = _pick_quote(first, second)
    if quote is None:
        outgoing, incoming = (first, second) if first.net_delta < 0 else (second, first)
        return QuoteBaseResult(quote=outgoing, base=incoming, split_required=True)

    base = second if quote is first else first
    direction = TradeDirection.BUY if quote.net_delta < 0 else TradeDirection.SELL
    return QuoteBaseResult(quote=quote, base=base, direction=direction)


def _pick_quote(first: AssetDelta, second: AssetDelta) -> AssetDelta | None:
    first_core, second_core = is_core_token(first.mint), is_core_token(second.mint)
    if first_core and second_core:
        if is_sol(second.mint) and not is_sol(first.mint):
            return second
        return first
    if first_core:
        return first
    if second_core:
        return second
    return None
