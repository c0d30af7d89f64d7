"""Helius enhanced-transaction adapter.

Data source priority per owner:
    SOL:    WSOL tokenTransfers sum (gross swap amount) -> accountData nativeBalanceChange
    Tokens: tokenTransfers (human amounts) -> accountData tokenBalanceChanges (raw)
"""

import logging
from collections.abc import Mapping

from swapclassifier.domain.enums import Provider, TxStatus
from swapclassifier.parser.adapters.base import AdapterError, BaseAdapter
from swapclassifier.parser.utils.tokens import NATIVE_SOL_MINT, SOL_DECIMALS, SOL_SYMBOL, WSOL_MINT
from swapclassifier.parser.utils.types import NormalizedTransaction, SwapEventHint, TokenBalanceChange
from swapclassifier.parser.utils.units import fraction_digits, human_to_raw

logger = logging.getLogger(__name__)


class HeliusAdapter(BaseAdapter):
    PROVIDER = Provider.HELIUS

    def can_adapt(self, payload: Mapping) -> bool:
        return "tokenTransfers" in payload or "accountData" in payload

    def adapt(self, payload: Mapping) -> NormalizedTransaction:
        signature = self._require(payload, "signature")
        fee_payer = self._require(payload, "feePayer")
        transfers = [t for t in self._list(payload, "tokenTransfers") if isinstance(t, Mapping)]
        account_data = [a for a in self._list(payload, "accountData") if isinstance(a, Mapping)]

        try:
            fee = int(payload.get("fee") or 0)
            changes = self._balance_changes(transfers, account_data, fee_payer, fee)
            hint = self._swap_hint(payload.get("events"))
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            raise AdapterError(f"Malformed helius balance data in {signature}: {e!r}") from e

        status = TxStatus.FAILED.value if payload.get("transactionError") else TxStatus.SUCCESS.value
        return self._build(
            signature=signature,
            timestamp=self._require(payload, "timestamp"),
            fee_payer=fee_payer,
            signers=self._list(payload, "signers") or [fee_payer],
            status=status,
            fee=fee,
            protocol=payload.get("source") or "unknown",
            balance_changes=changes,
            swap_event_hint=hint,
            tx_type=payload.get("type"),
        )

    def _balance_changes(
        self,
        transfers: list[Mapping],
        account_data: list[Mapping],
        fee_payer: str,
        fee: int,
    ) -> list[TokenBalanceChange]:
        decimals = self._mint_decimals(transfers, account_data)

        # Token accounts carry lamports too; only wallets get native rows
        token_accounts: set[str] = set()
        for transfer in transfers:
            token_accounts.update(filter(None, (transfer.get("fromTokenAccount"), transfer.get("toTokenAccount"))))
        for account in account_data:
            for tbc in account.get("tokenBalanceChanges") or []:
                if tbc.get("tokenAccount"):
                    token_accounts.add(tbc["tokenAccount"])

        nets: dict[tuple[str, str], int] = {}
        for transfer in transfers:
            mint = transfer["mint"]
            amount = human_to_raw(transfer.get("tokenAmount") or 0, decimals[mint])
            sender, receiver = transfer.get("fromUserAccount"), transfer.get("toUserAccount")
            if sender:
                nets[(sender, mint)] = nets.get((sender, mint), 0) - amount
            if receiver:
                nets[(receiver, mint)] = nets.get((receiver, mint), 0) + amount

        owners_with_wsol = {owner for owner, mint in nets if mint == WSOL_MINT}
        # One wallet can hold a mint in several token accounts
        raw_nets: dict[tuple[str, str], int] = {}
        native: dict[str, int] = {}
        for account in account_data:
            wallet = account.get("account")
            for tbc in account.get("tokenBalanceChanges") or []:
                if tbc["mint"] == WSOL_MINT:
                    continue
                key = (tbc["userAccount"], tbc["mint"])
                raw_nets[key] = raw_nets.get(key, 0) + int(tbc["rawTokenAmount"]["tokenAmount"])

            if not wallet or wallet in token_accounts or wallet in owners_with_wsol:
                continue
            change = int(account.get("nativeBalanceChange") or 0)
            if wallet == fee_payer:
                change += fee
            if change != 0:
                native[wallet] = native.get(wallet, 0) + change

        for key, net in raw_nets.items():
            nets.setdefault(key, net)

        rows = [
            TokenBalanceChange(
                owner=owner,
                mint=mint,
                change_amount=net,
                decimals=decimals[mint],
                symbol=SOL_SYMBOL if mint == WSOL_MINT else None,
            )
            for (owner, mint), net in nets.items()
            if net != 0
        ]
        rows.extend(
            TokenBalanceChange(
                address=wallet,
                owner=wallet,
                mint=NATIVE_SOL_MINT,
                change_amount=net,
                decimals=SOL_DECIMALS,
                symbol=SOL_SYMBOL,
            )
            for wallet, net in native.items()
        )
        return rows

    @staticmethod
    def _mint_decimals(transfers: list[Mapping], account_data: list[Mapping]) -> dict[str, int]:
        """Decimals per mint from raw balance changes, else inferred from transfer amounts."""
        decimals: dict[str, int] = {WSOL_MINT: SOL_DECIMALS}
        for account in account_data:
            for tbc in account.get("tokenBalanceChanges") or []:
                decimals.setdefault(tbc["mint"], int(tbc["rawTokenAmount"]["decimals"]))

        inferred: dict[str, int] = {}
        for transfer in transfers:
            mint = transfer["mint"]
            if mint in decimals:
                continue
            digits = fraction_digits(transfer.get("tokenAmount") or 0)
            inferred[mint] = max(inferred.get(mint, 0), digits)
        if inferred:
            logger.debug("Inferred decimals from transfer amounts for %d mint(s)", len(inferred))
        decimals.update(inferred)
        return decimals

    @staticmethod
    def _swap_hint(events: object) -> SwapEventHint | None:
        """events.swap as a hint when it names exactly one input leg and one output leg."""
        if not isinstance(events, Mapping) or not isinstance(events.get("swap"), Mapping):
            return None
        swap = events["swap"]

        inputs: list[tuple[str, int, int, str | None]] = []
        outputs: list[tuple[str, int, int, str | None]] = []
        native_in, native_out = swap.get("nativeInput"), swap.get("nativeOutput")
        if native_in and int(native_in.get("amount") or 0) > 0:
            inputs.append((WSOL_MINT, int(native_in["amount"]), SOL_DECIMALS, native_in.get("account")))
        if native_out and int(native_out.get("amount") or 0) > 0:
            outputs.append((WSOL_MINT, int(native_out["amount"]), SOL_DECIMALS, native_out.get("account")))
        for leg, side in ((swap.get("tokenInputs") or [], inputs), (swap.get("tokenOutputs") or [], outputs)):
            for token in leg:
                raw = token["rawTokenAmount"]
                side.append((token["mint"], int(raw["tokenAmount"]), int(raw["decimals"]), token.get("userAccount")))

        if len(inputs) != 1 or len(outputs) != 1:
            return None
        (in_mint, in_raw, in_decimals, in_account), (out_mint, out_raw, out_decimals, out_account) = inputs[0], outputs[0]
        return SwapEventHint(
            quote_mint=in_mint,
            base_mint=out_mint,
            quote_amount_raw=-in_raw,
            base_amount_raw=out_raw,
            quote_decimals=in_decimals,
            base_decimals=out_decimals,
            swapper=in_account or out_account,
        )
