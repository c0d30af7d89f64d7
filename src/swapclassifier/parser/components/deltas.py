"""AssetDeltaCollector: one exact net delta per mint for the swapper."""

from swapclassifier.parser.utils.tokens import SOL_DECIMALS, SOL_SYMBOL, WSOL_MINT, is_sol, symbol_for_mint
from swapclassifier.parser.utils.types import AssetDelta, AssetDeltaMap, TokenBalanceChange
from swapclassifier.parser.utils.units import is_near_zero


def collect_asset_deltas(changes: list[TokenBalanceChange], swapper: str) -> AssetDeltaMap:
    """Sum the swapper's raw changes per mint, in first-seen order.

    Assets whose net normalizes below EPSILON are tagged intermediate (routing hops).
    """
    totals: dict[str, int] = {}
    decimals: dict[str, int] = {}
    symbols: dict[str, str] = {}

    for change in changes:
        if change.owner != swapper:
            continue
        totals[change.mint] = totals.get(change.mint, 0) + change.change_amount
        decimals.setdefault(change.mint, change.decimals)
        if change.symbol and change.mint not in symbols:
            symbols[change.mint] = change.symbol

    return {
        mint: AssetDelta(
            mint=mint,
            symbol=symbol_for_mint(mint, symbols.get(mint)),
            net_delta=total,
            decimals=decimals[mint],
            is_intermediate=is_near_zero(total, decimals[mint]),
        )
        for mint, total in totals.items()
    }


def merge_sol_equivalents(deltas: AssetDeltaMap) -> AssetDeltaMap:
    """Fold native SOL and WSOL into one WSOL-keyed entry at the position of the first of them."""
    sol_entries = [d for d in deltas.values() if is_sol(d.mint)]
    if len(sol_entries) == 0 or (len(sol_entries) == 1 and sol_entries[0].mint == WSOL_MINT):
        return dict(deltas)

    # Both representations are lamport-denominated
    total = sum(d.net_delta for d in sol_entries)
    merged = AssetDelta(
        mint=WSOL_MINT,
        symbol=SOL_SYMBOL,
        net_delta=total,
        decimals=SOL_DECIMALS,
        is_intermediate=is_near_zero(total, SOL_DECIMALS),
    )

    result: AssetDeltaMap = {}
    for mint, delta in deltas.items():
        if is_sol(mint):
            result.setdefault(WSOL_MINT, merged)
        else:
            result[mint] = delta
    return result


def intermediate_mints(deltas: AssetDeltaMap) -> list[str]:
    return [d.mint for d in deltas.values() if d.is_intermediate]
