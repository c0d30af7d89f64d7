"""BalanceChangeFilter: drop rent-refund noise from the swapper's balance changes."""

import logging
from decimal import Decimal

from swapclassifier.parser.utils.tokens import is_sol
from swapclassifier.parser.utils.types import FilteredBalanceChanges, TokenBalanceChange
from swapclassifier.parser.utils.units import raw_to_decimal

logger = logging.getLogger(__name__)

DEFAULT_RENT_THRESHOLD_SOL = Decimal("0.01")


class BalanceChangeFilter:
    """Keeps the swapper's rows and separates tiny SOL inflows (closed-account rent) from real legs.

    A row is a rent refund when it is a positive SOL/WSOL change strictly below
    the threshold and the swapper also moved some non-SOL token. Outflows and
    SOL-only transactions are never touched.
    """

    def __init__(self, threshold_sol: Decimal = DEFAULT_RENT_THRESHOLD_SOL) -> None:
        self._threshold = threshold_sol

    def filter(self, changes: list[TokenBalanceChange], swapper: str) -> FilteredBalanceChanges:
        owned = [c for c in changes if c.owner == swapper]

        moved_token = any(not is_sol(c.mint) and c.change_amount != 0 for c in owned)
        if not moved_token:
            return FilteredBalanceChanges(economic_changes=owned, rent_refunds=[])

        economic: list[TokenBalanceChange] = []
        refunds: list[TokenBalanceChange] = []
        for change in owned:
            if self._is_rent_refund(change):
                refunds.append(change)
            else:
                economic.append(change)

        if refunds:
            logger.debug("Filtered %d rent refund row(s) for %s", len(refunds), swapper)
        return FilteredBalanceChanges(economic_changes=economic, rent_refunds=refunds)

    def _is_rent_refund(self, change: TokenBalanceChange) -> bool:
        if not is_sol(change.mint) or change.change_amount <= 0:
            return False
        return raw_to_decimal(change.change_amount, change.decimals) < self._threshold
