"""Shyft parsed-transaction adapter.

Shyft reports itemized token-account deltas with raw amounts and decimals, SOL
movements only as SOL_TRANSFER actions (amounts in SOL), and an optional SWAP
action with the protocol-reported legs.
"""

import logging
from collections.abc import Mapping

from swapclassifier.domain.enums import Provider
from swapclassifier.parser.adapters.base import AdapterError, BaseAdapter
from swapclassifier.parser.utils.tokens import NATIVE_SOL_MINT, SOL_DECIMALS, SOL_SYMBOL, is_sol
from swapclassifier.parser.utils.types import NormalizedTransaction, SwapEventHint, TokenBalanceChange
from swapclassifier.parser.utils.units import human_to_raw

logger = logging.getLogger(__name__)


class ShyftAdapter(BaseAdapter):
    PROVIDER = Provider.SHYFT

    def can_adapt(self, payload: Mapping) -> bool:
        return "token_balance_changes" in payload or ("fee_payer" in payload and "actions" in payload)

    def adapt(self, payload: Mapping) -> NormalizedTransaction:
        signature = self._require(payload, "signature")
        fee_payer = self._require(payload, "fee_payer")
        actions = [a for a in self._list(payload, "actions") if isinstance(a, Mapping)]

        try:
            changes = [self._token_row(row) for row in self._list(payload, "token_balance_changes")]
            changes.extend(self._native_rows(actions, changes))
            fee_lamports = human_to_raw(payload.get("fee") or 0, SOL_DECIMALS)
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            raise AdapterError(f"Malformed shyft balance data in {signature}: {e!r}") from e

        protocol = payload.get("protocol") or {}
        return self._build(
            signature=signature,
            timestamp=self._require(payload, "timestamp"),
            fee_payer=fee_payer,
            signers=self._list(payload, "signers"),
            status=payload.get("status") or "Success",
            fee=fee_lamports,
            protocol=(protocol.get("name") or "unknown") if isinstance(protocol, Mapping) else "unknown",
            balance_changes=changes,
            swap_event_hint=self._swap_hint(actions, changes),
            tx_type=payload.get("type"),
            action_types=[a["type"] for a in actions if isinstance(a.get("type"), str)],
        )

    @staticmethod
    def _token_row(row: Mapping) -> TokenBalanceChange:
        return TokenBalanceChange(
            address=row.get("address") or "",
            owner=row["owner"],
            mint=row["mint"],
            change_amount=int(row["change_amount"]),
            pre_balance=int(row.get("pre_balance") or 0),
            post_balance=int(row.get("post_balance") or 0),
            decimals=int(row.get("decimals") or 0),
            symbol=row.get("symbol"),
        )

    @staticmethod
    def _native_rows(actions: list[Mapping], token_rows: list[TokenBalanceChange]) -> list[TokenBalanceChange]:
        """Native SOL rows from SOL_TRANSFER actions, only for owners with no SOL/WSOL token row."""
        has_sol_row = {row.owner for row in token_rows if is_sol(row.mint)}
        lamports: dict[str, int] = {}
        for action in actions:
            if action.get("type") != "SOL_TRANSFER":
                continue
            info = action.get("info") or {}
            amount = human_to_raw(info.get("amount") or 0, SOL_DECIMALS)
            sender, receiver = info.get("sender"), info.get("receiver")
            if sender and sender not in has_sol_row:
                lamports[sender] = lamports.get(sender, 0) - amount
            if receiver and receiver not in has_sol_row:
                lamports[receiver] = lamports.get(receiver, 0) + amount

        return [
            TokenBalanceChange(
                address=owner,
                owner=owner,
                mint=NATIVE_SOL_MINT,
                change_amount=net,
                decimals=SOL_DECIMALS,
                symbol=SOL_SYMBOL,
            )
            for owner, net in lamports.items()
            if net != 0
        ]

    @staticmethod
    def _swap_hint(actions: list[Mapping], rows: list[TokenBalanceChange]) -> SwapEventHint | None:
        """The first SWAP action whose two legs both have raw amounts and known decimals."""
        decimals = {row.mint: row.decimals for row in rows}
        for action in actions:
            if action.get("type") != "SWAP":
                continue
            info = action.get("info") or {}
            swapped = info.get("tokens_swapped") or {}
            if not isinstance(swapped, Mapping):
                continue
            spent, received = swapped.get("in"), swapped.get("out")
            if not isinstance(spent, Mapping) or not isinstance(received, Mapping):
                continue
            spent_mint, received_mint = spent.get("token_address"), received.get("token_address")
            if not spent_mint or not received_mint:
                continue
            if spent.get("amount_raw") is None or received.get("amount_raw") is None:
                continue
            spent_decimals = SOL_DECIMALS if is_sol(spent_mint) else decimals.get(spent_mint)
            received_decimals = SOL_DECIMALS if is_sol(received_mint) else decimals.get(received_mint)
            if spent_decimals is None or received_decimals is None:
                logger.debug("SWAP action legs lack decimals, skipping hint")
                continue
            try:
                return SwapEventHint(
                    quote_mint=spent_mint,
                    base_mint=received_mint,
                    quote_amount_raw=-int(spent["amount_raw"]),
                    base_amount_raw=int(received["amount_raw"]),
                    quote_decimals=spent_decimals,
                    base_decimals=received_decimals,
                    swapper=info.get("swapper"),
                )
            except (TypeError, ValueError):
                logger.debug("SWAP action amounts unparseable, skipping hint")
        return None
