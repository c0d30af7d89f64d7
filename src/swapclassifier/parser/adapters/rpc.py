"""Raw Solana RPC adapter for getTransaction responses (jsonParsed encoding)."""

from collections.abc import Mapping

from swapclassifier.domain.enums import Provider, TxStatus
from swapclassifier.parser.adapters.base import AdapterError, BaseAdapter
from swapclassifier.parser.utils.tokens import NATIVE_SOL_MINT, SOL_DECIMALS, SOL_SYMBOL
from swapclassifier.parser.utils.types import NormalizedTransaction, TokenBalanceChange


class SolanaRpcAdapter(BaseAdapter):
    """SOL from preBalances/postBalances, SPL tokens from preTokenBalances/postTokenBalances."""

    PROVIDER = Provider.RPC

    def can_adapt(self, payload: Mapping) -> bool:
        payload = self._unwrap(payload)
        return "meta" in payload and "transaction" in payload

    def adapt(self, payload: Mapping) -> NormalizedTransaction:
        payload = self._unwrap(payload)
        meta = payload.get("meta") or {}
        transaction = payload.get("transaction") or {}
        message = transaction.get("message") or {}

        signatures = transaction.get("signatures") or []
        if not signatures:
            raise AdapterError("Missing required field: signature")
        pubkeys, signers = self._account_keys(message)
        if not pubkeys:
            raise AdapterError("Missing required field: fee_payer")
        fee_payer = pubkeys[0]

        try:
            fee = int(meta.get("fee") or 0)
            token_rows = self._spl_changes(meta, pubkeys)
            token_balances = [*(meta.get("preTokenBalances") or []), *(meta.get("postTokenBalances") or [])]
            token_accounts = {tb.get("accountIndex") for tb in token_balances}
            sol_rows = self._sol_changes(meta, pubkeys, fee, token_accounts)
        except (KeyError, TypeError, ValueError) as e:
            raise AdapterError(f"Malformed RPC balance data in {signatures[0]}: {e!r}") from e

        return self._build(
            signature=signatures[0],
            timestamp=self._require(payload, "blockTime"),
            fee_payer=fee_payer,
            signers=signers or [fee_payer],
            status=TxStatus.SUCCESS.value if meta.get("err") is None else TxStatus.FAILED.value,
            fee=fee,
            balance_changes=sol_rows + token_rows,
        )

    @staticmethod
    def _unwrap(payload: Mapping) -> Mapping:
        """Accept the bare result or the full JSON-RPC envelope."""
        result = payload.get("result")
        return result if isinstance(result, Mapping) else payload

    @staticmethod
    def _account_keys(message: Mapping) -> tuple[list[str], list[str]]:
        pubkeys: list[str] = []
        signers: list[str] = []
        for key in message.get("accountKeys") or []:
            if isinstance(key, dict):
                pubkeys.append(key.get("pubkey", ""))
                if key.get("signer"):
                    signers.append(key.get("pubkey", ""))
            else:
                pubkeys.append(str(key))

        # Plain-string keys: the first numRequiredSignatures accounts sign
        if not signers:
            required = (message.get("header") or {}).get("numRequiredSignatures", 0)
            signers = pubkeys[:required]
        return pubkeys, signers

    @staticmethod
    def _sol_changes(meta: Mapping, pubkeys: list[str], fee: int, skip: set[int]) -> list[TokenBalanceChange]:
        """Lamport diffs per wallet. The fee payer's diff excludes the fee it paid."""
        pre_balances = meta.get("preBalances") or []
        post_balances = meta.get("postBalances") or []

        rows: list[TokenBalanceChange] = []
        for i in range(min(len(pre_balances), len(post_balances), len(pubkeys))):
            if i in skip:
                continue
            diff = int(post_balances[i]) - int(pre_balances[i])
            if i == 0:
                diff += fee
            if diff == 0:
                continue
            rows.append(TokenBalanceChange(
                address=pubkeys[i],
                owner=pubkeys[i],
                mint=NATIVE_SOL_MINT,
                change_amount=diff,
                pre_balance=int(pre_balances[i]),
                post_balance=int(post_balances[i]),
                decimals=SOL_DECIMALS,
                symbol=SOL_SYMBOL,
            ))
        return rows

    @staticmethod
    def _spl_changes(meta: Mapping, pubkeys: list[str]) -> list[TokenBalanceChange]:
        """Token balance diffs keyed by (accountIndex, mint), owner from the balance entry."""
        pre_map: dict[tuple[int, str], dict] = {}
        for tb in meta.get("preTokenBalances") or []:
            pre_map[(tb.get("accountIndex", -1), tb.get("mint", ""))] = tb
        post_map: dict[tuple[int, str], dict] = {}
        for tb in meta.get("postTokenBalances") or []:
            post_map[(tb.get("accountIndex", -1), tb.get("mint", ""))] = tb

        rows: list[TokenBalanceChange] = []
        for account_index, mint in sorted(set(pre_map) | set(post_map)):
            if account_index < 0 or account_index >= len(pubkeys):
                continue
            pre_info = pre_map.get((account_index, mint), {})
            post_info = post_map.get((account_index, mint), {})
            info = post_info or pre_info

            pre_amount = int((pre_info.get("uiTokenAmount") or {}).get("amount", "0"))
            post_amount = int((post_info.get("uiTokenAmount") or {}).get("amount", "0"))
            if post_amount == pre_amount:
                continue
            token_info = info.get("tokenInfo") or {}
            rows.append(TokenBalanceChange(
                address=pubkeys[account_index],
                owner=info.get("owner") or pubkeys[account_index],
                mint=mint,
                change_amount=post_amount - pre_amount,
                pre_balance=pre_amount,
                post_balance=post_amount,
                decimals=int((info.get("uiTokenAmount") or {}).get("decimals", 0)),
                symbol=token_info.get("symbol"),
            ))
        return rows
