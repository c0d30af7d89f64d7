"""Pre-detection gates for transactions the indexer already labels as something other than a swap."""

import logging

from swapclassifier.domain.enums import EraseReason
from swapclassifier.parser.utils.types import TokenBalanceChange

logger = logging.getLogger(__name__)

NON_SWAP_TRANSACTION_TYPES: frozenset[str] = frozenset({
    "CHECKANDSETSEQUENCENUMBER",
    "COMPUTE_BUDGET",
    "SET_COMPUTE_UNIT_LIMIT",
    "SET_COMPUTE_UNIT_PRICE",
    "CREATE_ACCOUNT",
    "INITIALIZE_ACCOUNT",
    "CLOSE_ACCOUNT",
    "TOKEN_TRANSFER",
    "TRANSFER",
    "NFT_MINT",
    "NFT_BURN",
    "NFT_TRANSFER",
    "STAKE",
    "UNSTAKE",
    "VOTE",
    "WITHDRAW",
    "DEPOSIT",
    "CLAIM",
    "APPROVE",
    "REVOKE",
})

SWAP_ACTION_TYPES: frozenset[str] = frozenset({"SWAP", "JUPITER_SWAP", "RAYDIUM_SWAP", "ORCA_SWAP"})
TRANSFER_ACTION_TYPES: frozenset[str] = frozenset({"TOKEN_TRANSFER", "SOL_TRANSFER", "TRANSFER"})

# Bookkeeping instructions that say nothing about the trade
PROTOCOL_ACTION_TYPES: frozenset[str] = frozenset({
    "CHECKANDSETSEQUENCENUMBER",
    "COMPUTE_BUDGET",
    "SET_COMPUTE_UNIT_LIMIT",
    "SET_COMPUTE_UNIT_PRICE",
    "CREATE_ACCOUNT",
    "INITIALIZE_ACCOUNT",
    "CLOSE_ACCOUNT",
})


def is_non_swap_type(tx_type: str | None) -> bool:
    return bool(tx_type) and tx_type.upper() in NON_SWAP_TRANSACTION_TYPES


def detect_simple_transfer(economic_changes: list[TokenBalanceChange], action_types: list[str]) -> EraseReason | None:
    """Reason the swapper's movement looks like a plain transfer, or None when it may be a trade.

    Only meaningful for transactions that carry instruction-level actions. Any
    swap action short-circuits to None, and so does a swapper with no
    movement at all.
    """
    actions = [a.upper() for a in action_types if a]
    if any(a in SWAP_ACTION_TYPES for a in actions):
        return None

    meaningful_actions = [a for a in actions if a not in PROTOCOL_ACTION_TYPES]
    if meaningful_actions and all(a in TRANSFER_ACTION_TYPES for a in meaningful_actions):
        logger.debug("Only transfer actions among %d action(s)", len(actions))
        return EraseReason.ONLY_TRANSFER_ACTIONS

    moved = [c for c in economic_changes if c.change_amount != 0]
    if not moved:
        return None
    if len(moved) == 1:
        return EraseReason.SINGLE_MEANINGFUL_CHANGE
    if not any(c.change_amount > 0 for c in moved) or not any(c.change_amount < 0 for c in moved):
        return EraseReason.NO_OPPOSITE_DELTAS
    return None
