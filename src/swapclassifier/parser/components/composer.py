"""Builds the terminal ParsedSwap and SplitSwapPair records."""

import logging

from swapclassifier.domain.enums import SwapperMethod, TradeDirection
from swapclassifier.domain.models.swap import AssetInfo, ParsedSwap, SplitSwapPair
from swapclassifier.parser.components.amounts import normalize_amounts
from swapclassifier.parser.utils.fees import build_fee_breakdown
from swapclassifier.parser.utils.types import AssetDelta, FeeData, NormalizedTransaction, PriceLookup

logger = logging.getLogger(__name__)

# Numeric confidence per identification method
METHOD_CONFIDENCE: dict[SwapperMethod, int] = {
    SwapperMethod.SWAP_EVENT: 100,
    SwapperMethod.FEE_PAYER: 100,
    SwapperMethod.SIGNER: 90,
    SwapperMethod.OWNER_ANALYSIS: 80,
    SwapperMethod.ERASE: 0,
}


def _asset_info(delta: AssetDelta) -> AssetInfo:
    return AssetInfo(mint=delta.mint, symbol=delta.symbol, decimals=delta.decimals)


class SwapComposer:
    """Holds the per-transaction context shared by every record built from it."""

    def __init__(
        self,
        tx: NormalizedTransaction,
        swapper: str,
        method: SwapperMethod,
        fees: FeeData,
        rent_refunds_filtered: int = 0,
        intermediate_assets: list[str] | None = None,
        price_lookup: PriceLookup | None = None,
    ) -> None:
        self._tx = tx
        self._swapper = swapper
        self._method = method
        self._fees = fees
        self._rent_refunds_filtered = rent_refunds_filtered
        self._intermediates = list(intermediate_assets or [])
        self._price_lookup = price_lookup

    def build_swap(
        self,
        quote: AssetDelta,
        base: AssetDelta,
        direction: TradeDirection,
        fee_log_level: int = logging.WARNING,
    ) -> ParsedSwap:
        fee_breakdown = build_fee_breakdown(
            self._fees, quote.mint, self._tx.timestamp, self._price_lookup, log_level=fee_log_level
        )
        return ParsedSwap(
            signature=self._tx.signature,
            timestamp=self._tx.timestamp,
            swapper=self._swapper,
            direction=direction,
            quote_asset=_asset_info(quote),
            base_asset=_asset_info(base),
            amounts=normalize_amounts(quote, base, direction, fee_breakdown),
            confidence=METHOD_CONFIDENCE[self._method],
            protocol=self._tx.protocol,
            swapper_identification_method=self._method,
            rent_refunds_filtered=self._rent_refunds_filtered,
            intermediate_assets_collapsed=self._intermediates,
        )

    def build_split(self, outgoing: AssetDelta, incoming: AssetDelta) -> SplitSwapPair:
        """SELL of the outgoing asset priced in the incoming one, and the mirror BUY."""
        # Non-core quotes usually have no SOL rate
        sell_record = self.build_swap(
            quote=incoming, base=outgoing, direction=TradeDirection.SELL, fee_log_level=logging.DEBUG
        )
        buy_record = self.build_swap(
            quote=outgoing, base=incoming, direction=TradeDirection.BUY, fee_log_level=logging.DEBUG
        )
        logger.debug("Split %s -> %s for %s", outgoing.symbol, incoming.symbol, self._tx.signature)
        return SplitSwapPair(
            signature=self._tx.signature,
            timestamp=self._tx.timestamp,
            swapper=self._swapper,
            sell_record=sell_record,
            buy_record=buy_record,
            protocol=self._tx.protocol,
            swapper_identification_method=self._method,
        )
