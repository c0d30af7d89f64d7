"""Transaction fee conversion from lamports into SOL and quote terms."""

import logging
from decimal import Decimal

from swapclassifier.domain.models.swap import FeeBreakdown
from swapclassifier.parser.utils.tokens import SOL_DECIMALS, WSOL_MINT, is_sol, is_stablecoin
from swapclassifier.parser.utils.types import FeeData, PriceLookup
from swapclassifier.parser.utils.units import raw_to_decimal

logger = logging.getLogger(__name__)


def lamports_to_sol(lamports: int) -> Decimal:
    if lamports == 0:
        return Decimal(0)
    return raw_to_decimal(lamports, SOL_DECIMALS)


def usd_price(mint: str, timestamp: int, price_lookup: PriceLookup | None) -> Decimal | None:
    """USD per unit of mint. Stablecoins are 1 without a lookup."""
    if is_stablecoin(mint):
        return Decimal(1)
    if price_lookup is None:
        return None
    if is_sol(mint):
        mint = WSOL_MINT
    price = price_lookup(mint, timestamp)
    if price is None or price <= 0:
        return None
    return Decimal(price)


def sol_to_quote_rate(quote_mint: str, timestamp: int, price_lookup: PriceLookup | None) -> Decimal | None:
    """Units of quote_mint per SOL, or None when either side has no price."""
    if is_sol(quote_mint):
        return Decimal(1)
    sol_usd = usd_price(WSOL_MINT, timestamp, price_lookup)
    quote_usd = usd_price(quote_mint, timestamp, price_lookup)
    if sol_usd is None or quote_usd is None:
        return None
    return sol_usd / quote_usd


def build_fee_breakdown(
    fees: FeeData,
    quote_mint: str,
    timestamp: int,
    price_lookup: PriceLookup | None = None,
    log_level: int = logging.WARNING,
) -> FeeBreakdown:
    """Express the swapper's fees in SOL and in the quote asset.

    SOL-quoted swaps convert 1:1. Other quotes go through USD prices; when no
    rate is available the quote-side fee is reported as 0 and a record is
    logged at log_level.
    """
    transaction_fee_sol = lamports_to_sol(fees.transaction_fee_lamports)
    priority_fee_sol = lamports_to_sol(fees.priority_fee_lamports)

    if transaction_fee_sol == 0 and priority_fee_sol == 0:
        rate = Decimal(0)
    else:
        rate = sol_to_quote_rate(quote_mint, timestamp, price_lookup)
        if rate is None:
            logger.log(log_level, "No SOL/%s rate at %s, fees reported as 0 in quote terms", quote_mint, timestamp)
            rate = Decimal(0)

    transaction_fee_quote = transaction_fee_sol * rate
    priority_fee_quote = priority_fee_sol * rate
    return FeeBreakdown(
        transaction_fee_sol=transaction_fee_sol,
        transaction_fee_quote=transaction_fee_quote,
        priority_fee_sol=priority_fee_sol,
        priority_fee_quote=priority_fee_quote,
        platform_fee=fees.platform_fee,
        total_fee_quote=transaction_fee_quote + priority_fee_quote + fees.platform_fee,
    )
