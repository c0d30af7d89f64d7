"""Tests for SolanaRpcAdapter -- getTransaction (jsonParsed) responses."""

import pytest

from swapclassifier.domain.enums import Provider, TradeDirection, TxStatus
from swapclassifier.parser.adapters.base import AdapterError
from swapclassifier.parser.adapters.rpc import SolanaRpcAdapter
from swapclassifier.parser.utils.tokens import NATIVE_SOL_MINT

from builders import BONK, POOL, SIGNATURE, SOL, SWAPPER, TIMESTAMP

SWAPPER_ATA = "SwapperBonkAta1111111111111111111111111111"
POOL_VAULT = "PoolBonkVau1t111111111111111111111111111111"


def _token_balance(index: int, owner: str, amount: int) -> dict:
    return {
        "accountIndex": index,
        "mint": BONK,
        "owner": owner,
        "uiTokenAmount": {"amount": str(amount), "decimals": 6},
        "tokenInfo": {"symbol": "Bonk"},
    }


def _rpc_result(**meta_overrides) -> dict:
    """Swapper (index 0) pays 5 SOL + fee into the pool authority (index 2) for 1000 BONK."""
    meta = {
        "err": None,
        "fee": 5000,
        "preBalances": [10_000_000_000, 2_039_280, 100_000_000_000, 2_039_280],
        "postBalances": [4_999_995_000, 2_039_280, 105_000_000_000, 2_039_280],
        "preTokenBalances": [_token_balance(1, SWAPPER, 0), _token_balance(3, POOL, 9_000_000_000)],
        "postTokenBalances": [_token_balance(1, SWAPPER, 1_000_000_000), _token_balance(3, POOL, 8_000_000_000)],
    }
    meta.update(meta_overrides)
    return {
        "blockTime": TIMESTAMP,
        "slot": 250_000_000,
        "meta": meta,
        "transaction": {
            "signatures": [SIGNATURE],
            "message": {
                "accountKeys": [
                    {"pubkey": SWAPPER, "signer": True, "writable": True},
                    {"pubkey": SWAPPER_ATA, "signer": False, "writable": True},
                    {"pubkey": POOL, "signer": False, "writable": True},
                    {"pubkey": POOL_VAULT, "signer": False, "writable": True},
                ],
            },
        },
    }


def _rows(tx) -> dict:
    return {(c.owner, c.mint): c.change_amount for c in tx.balance_changes}


class TestSolanaRpcAdapter:
    def setup_method(self):
        self.adapter = SolanaRpcAdapter()

    def test_can_adapt_bare_and_enveloped(self):
        assert self.adapter.can_adapt(_rpc_result())
        assert self.adapter.can_adapt({"jsonrpc": "2.0", "id": 1, "result": _rpc_result()})
        assert not self.adapter.can_adapt({"tokenTransfers": []})

    def test_header_fields(self):
        tx = self.adapter.adapt({"jsonrpc": "2.0", "id": 1, "result": _rpc_result()})
        assert tx.signature == SIGNATURE
        assert tx.timestamp == TIMESTAMP
        assert tx.fee_payer == SWAPPER
        assert tx.signers == [SWAPPER]
        assert tx.fee == 5000
        assert tx.provider == Provider.RPC

    def test_lamport_diffs_exclude_fee_and_token_accounts(self):
        rows = _rows(self.adapter.adapt(_rpc_result()))
        assert rows[(SWAPPER, NATIVE_SOL_MINT)] == -5_000_000_000
        assert rows[(POOL, NATIVE_SOL_MINT)] == 5_000_000_000
        assert (SWAPPER_ATA, NATIVE_SOL_MINT) not in rows
        assert (POOL_VAULT, NATIVE_SOL_MINT) not in rows

    def test_token_diffs_use_balance_owner(self):
        tx = self.adapter.adapt(_rpc_result())
        rows = _rows(tx)
        assert rows[(SWAPPER, BONK)] == 1_000_000_000
        assert rows[(POOL, BONK)] == -1_000_000_000

        swapper_row = next(c for c in tx.balance_changes if c.owner == SWAPPER and c.mint == BONK)
        assert swapper_row.address == SWAPPER_ATA
        assert swapper_row.decimals == 6
        assert swapper_row.symbol == "Bonk"
        assert (swapper_row.pre_balance, swapper_row.post_balance) == (0, 1_000_000_000)

    def test_new_token_account_has_no_pre_balance(self):
        result = _rpc_result(preTokenBalances=[_token_balance(3, POOL, 9_000_000_000)])
        assert _rows(self.adapter.adapt(result))[(SWAPPER, BONK)] == 1_000_000_000

    def test_string_account_keys_use_header(self):
        result = _rpc_result()
        result["transaction"]["message"] = {
            "accountKeys": [SWAPPER, SWAPPER_ATA, POOL, POOL_VAULT],
            "header": {"numRequiredSignatures": 1},
        }
        tx = self.adapter.adapt(result)
        assert tx.signers == [SWAPPER]
        assert tx.fee_payer == SWAPPER

    def test_err_marks_failed(self):
        tx = self.adapter.adapt(_rpc_result(err={"InstructionError": [0, "Custom"]}))
        assert tx.status == TxStatus.FAILED.value

    def test_missing_signatures(self):
        result = _rpc_result()
        result["transaction"]["signatures"] = []
        with pytest.raises(AdapterError, match="Missing required field: signature"):
            self.adapter.adapt(result)

    def test_missing_block_time(self):
        result = _rpc_result()
        result["blockTime"] = None
        with pytest.raises(AdapterError, match="Missing required field: blockTime"):
            self.adapter.adapt(result)

    def test_malformed_amount(self):
        bad = _token_balance(1, SWAPPER, 0)
        bad["uiTokenAmount"]["amount"] = "n/a"
        with pytest.raises(AdapterError, match="Malformed RPC balance data"):
            self.adapter.adapt(_rpc_result(preTokenBalances=[bad]))


class TestRpcClassification:
    def test_buy(self, classifier):
        result = classifier.classify_payload({"jsonrpc": "2.0", "id": 1, "result": _rpc_result()})
        assert result.success
        swap = result.data
        assert swap.direction == TradeDirection.BUY
        assert swap.quote_asset.mint == SOL
        assert swap.base_asset.symbol == "Bonk"
        assert swap.amounts.base_amount_raw == 1_000_000_000
