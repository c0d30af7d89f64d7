"""SwapperIdentifier: find the wallet whose economic position changed."""

import logging
from collections import defaultdict
from decimal import Decimal

from swapclassifier.domain.enums import SwapperConfidence, SwapperMethod
from swapclassifier.parser.utils.tokens import WSOL_MINT, is_core_token, is_excluded_owner, is_sol
from swapclassifier.parser.utils.types import SwapperResult, TokenBalanceChange
from swapclassifier.parser.utils.units import EPSILON, raw_to_decimal

logger = logging.getLogger(__name__)


def owner_economic_deltas(changes: list[TokenBalanceChange]) -> tuple[dict[str, Decimal], dict[str, set[str]]]:
    """Per candidate owner: sum of |normalized net delta| over mints, and the mints it moved.

    Each mint is netted per owner in raw units first. SOL and WSOL count as one
    asset so wrapping alone is not economic movement. Excluded owners and owners
    with no net movement are dropped.
    """
    nets: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
    decimals: dict[tuple[str, str], int] = {}
    for change in changes:
        if not change.owner or is_excluded_owner(change.owner):
            continue
        mint = WSOL_MINT if is_sol(change.mint) else change.mint
        nets[change.owner][mint] += change.change_amount
        decimals.setdefault((change.owner, mint), change.decimals)

    magnitudes: dict[str, Decimal] = {}
    moved: dict[str, set[str]] = {}
    for owner, per_mint in nets.items():
        total = Decimal(0)
        mints: set[str] = set()
        for mint, net in per_mint.items():
            amount = abs(raw_to_decimal(net, decimals[(owner, mint)]))
            if amount >= EPSILON:
                total += amount
                mints.add(mint)
        if total >= EPSILON:
            magnitudes[owner] = total
            moved[owner] = mints
    return magnitudes, moved


def _method_for(owner: str, fee_payer: str, signers: list[str]) -> SwapperMethod:
    if owner == fee_payer:
        return SwapperMethod.FEE_PAYER
    if owner in signers:
        return SwapperMethod.SIGNER
    return SwapperMethod.OWNER_ANALYSIS


def identify_swapper(fee_payer: str, signers: list[str], changes: list[TokenBalanceChange]) -> SwapperResult:
    """Largest economic delta wins, whoever paid the fee.

    Ties go to the single owner holding a non-core asset, then to the fee
    payer, then to a single signer. Anything still ambiguous resolves to no
    swapper. Never raises.
    """
    magnitudes, moved = owner_economic_deltas(changes)
    unresolved = SwapperResult(swapper=None, confidence=SwapperConfidence.LOW, method=SwapperMethod.ERASE)

    if not magnitudes:
        logger.debug("No candidate owner with a non-zero delta")
        return unresolved

    top = max(magnitudes.values())
    leaders = [owner for owner, amount in magnitudes.items() if amount == top]

    if len(leaders) == 1:
        winner = leaders[0]
        return SwapperResult(
            swapper=winner,
            confidence=SwapperConfidence.HIGH,
            method=_method_for(winner, fee_payer, signers),
        )

    # Tied: the core asset usually sits on the pool side of the trade
    holding_non_core = [o for o in leaders if any(not is_core_token(m) for m in moved[o])]
    if len(holding_non_core) == 1:
        winner = holding_non_core[0]
        return SwapperResult(
            swapper=winner,
            confidence=SwapperConfidence.MEDIUM,
            method=_method_for(winner, fee_payer, signers),
        )

    if fee_payer in leaders:
        return SwapperResult(swapper=fee_payer, confidence=SwapperConfidence.LOW, method=SwapperMethod.FEE_PAYER)

    tied_signers = [o for o in leaders if o in signers]
    if len(tied_signers) == 1:
        return SwapperResult(swapper=tied_signers[0], confidence=SwapperConfidence.LOW, method=SwapperMethod.SIGNER)

    logger.debug("Ambiguous swapper: %d owners tied at %s", len(leaders), top)
    return unresolved
