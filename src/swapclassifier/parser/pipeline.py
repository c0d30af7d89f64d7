"""SwapClassifier: raw transaction -> ParsedSwap | SplitSwapPair | EraseResult."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import ValidationError

from swapclassifier.config import Settings, settings as default_settings
from swapclassifier.domain.enums import EraseReason, SwapperMethod, TxStatus
from swapclassifier.domain.models.swap import ClassificationOutcome, EraseResult, ParsedSwap, ParserResult
from swapclassifier.parser.adapters.base import AdapterError
from swapclassifier.parser.components.composer import SwapComposer
from swapclassifier.parser.components.deltas import collect_asset_deltas, intermediate_mints, merge_sol_equivalents
from swapclassifier.parser.components.erase import validate_swap_pair
from swapclassifier.parser.components.quote_base import detect_quote_base
from swapclassifier.parser.components.rent_filter import BalanceChangeFilter
from swapclassifier.parser.components.swapper import identify_swapper
from swapclassifier.parser.components.transfer_gate import detect_simple_transfer, is_non_swap_type
from swapclassifier.parser.registry import AdapterRegistry, build_default_registry
from swapclassifier.parser.utils.fees import usd_price
from swapclassifier.parser.utils.tokens import is_core_token, is_sol, symbol_for_mint
from swapclassifier.parser.utils.types import (
    AssetDelta,
    AssetDeltaMap,
    FeeData,
    NormalizedTransaction,
    PriceLookup,
    SwapEventHint,
)
from swapclassifier.parser.utils.units import is_near_zero
from swapclassifier.parser.validation import field_value, first_validation_error, is_int, validate_transaction

logger = logging.getLogger(__name__)


def _dump_deltas(deltas: AssetDeltaMap) -> dict[str, dict]:
    return {mint: delta.model_dump() for mint, delta in deltas.items()}


class SwapClassifier:
    """Runs one transaction through the classification stages. Stateless between calls."""

    def __init__(
        self,
        settings: Settings | None = None,
        registry: AdapterRegistry | None = None,
        price_lookup: PriceLookup | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self._registry = registry or build_default_registry()
        self._price_lookup = price_lookup
        self._rent_filter = BalanceChangeFilter(self._settings.rent_noise_threshold_sol)

    # -- public API --

    def classify(self, tx: NormalizedTransaction | Mapping) -> ParserResult:
        """Classify a normalized transaction (model or dict). Never raises."""
        start = time.perf_counter()
        try:
            outcome = self._classify(tx)
        except Exception as e:
            signature, timestamp = self._identity(tx)
            logger.exception("Failed to classify TX %s", signature)
            outcome = EraseResult(
                signature=signature,
                timestamp=timestamp,
                reason=EraseReason.PARSING_ERROR,
                debug_info={"error": str(e), "error_type": type(e).__name__},
            )
        return self._finish(outcome, start)

    def classify_payload(self, payload: Any, provider: str | None = None) -> ParserResult:
        """Adapt a provider payload (auto-detected unless provider is given) and classify it."""
        start = time.perf_counter()
        try:
            tx = self._registry.adapt(payload, provider)
        except AdapterError as e:
            signature, timestamp = self._identity(payload)
            logger.info("Adapter rejected TX %s: %s", signature, e)
            outcome = EraseResult(
                signature=signature,
                timestamp=timestamp,
                reason=EraseReason.INVALID_INPUT,
                debug_info={"validation_error": str(e), "provider": provider},
            )
            return self._finish(outcome, start)
        except Exception as e:
            signature, timestamp = self._identity(payload)
            logger.exception("Failed to adapt TX %s", signature)
            outcome = EraseResult(
                signature=signature,
                timestamp=timestamp,
                reason=EraseReason.PARSING_ERROR,
                debug_info={"error": str(e), "error_type": type(e).__name__},
            )
            return self._finish(outcome, start)
        return self.classify(tx)

    # -- stages --

    def _classify(self, raw: NormalizedTransaction | Mapping) -> ClassificationOutcome:
        payload = raw.model_dump() if isinstance(raw, NormalizedTransaction) else raw

        validation_error = validate_transaction(payload)
        if validation_error is None and not isinstance(raw, NormalizedTransaction):
            try:
                raw = NormalizedTransaction.model_validate(payload)
            except ValidationError as e:
                validation_error = first_validation_error(e)
        if validation_error is not None:
            return self._invalid_input(payload, validation_error)
        tx: NormalizedTransaction = raw

        if tx.status.lower() != TxStatus.SUCCESS.value.lower():
            return self._erase(tx, EraseReason.TRANSACTION_FAILED, status=tx.status)

        if is_non_swap_type(tx.tx_type):
            return self._erase(tx, EraseReason.NON_SWAP_TRANSACTION_TYPE, transaction_type=tx.tx_type)

        if tx.swap_event_hint is not None:
            hinted = self._classify_from_hint(tx, tx.swap_event_hint)
            if hinted is not None:
                return hinted

        swapper_result = identify_swapper(tx.fee_payer, tx.signers, tx.balance_changes)
        if swapper_result.swapper is None:
            return self._erase(tx, EraseReason.SWAPPER_IDENTIFICATION_FAILED, confidence=swapper_result.confidence.value)
        swapper = swapper_result.swapper
        logger.debug(
            "TX %s swapper %s (%s, %s)",
            tx.signature, swapper, swapper_result.method.value, swapper_result.confidence.value,
        )

        filtered = self._rent_filter.filter(tx.balance_changes, swapper)
        deltas = collect_asset_deltas(filtered.economic_changes, swapper)

        # Row-level transfer heuristics need the indexer's action list to be trustworthy
        if tx.action_types:
            transfer_reason = detect_simple_transfer(filtered.economic_changes, tx.action_types)
            if transfer_reason is not None:
                return self._erase(tx, transfer_reason, deltas, swapper=swapper, action_types=list(tx.action_types))

        return self._classify_deltas(
            tx, deltas, swapper, swapper_result.method, rent_refunds_filtered=len(filtered.rent_refunds)
        )

    def _classify_from_hint(self, tx: NormalizedTransaction, hint: SwapEventHint) -> ClassificationOutcome | None:
        """Protocol-reported amounts take precedence. None sends the TX down the balance-change path."""
        if hint.quote_mint == hint.base_mint:
            logger.debug("TX %s swap event names one mint for both legs, ignoring", tx.signature)
            return None

        deltas: AssetDeltaMap = {
            hint.quote_mint: AssetDelta(
                mint=hint.quote_mint,
                symbol=symbol_for_mint(hint.quote_mint),
                net_delta=hint.quote_amount_raw,
                decimals=hint.quote_decimals,
                is_intermediate=is_near_zero(hint.quote_amount_raw, hint.quote_decimals),
            ),
            hint.base_mint: AssetDelta(
                mint=hint.base_mint,
                symbol=symbol_for_mint(hint.base_mint),
                net_delta=hint.base_amount_raw,
                decimals=hint.base_decimals,
                is_intermediate=is_near_zero(hint.base_amount_raw, hint.base_decimals),
            ),
        }
        swapper = hint.swapper
        if swapper is None:
            swapper = identify_swapper(tx.fee_payer, tx.signers, tx.balance_changes).swapper
            if swapper is None:
                logger.debug("TX %s swap event names no swapper and balances are ambiguous", tx.signature)
                return None

        outcome = self._classify_deltas(tx, deltas, swapper, SwapperMethod.SWAP_EVENT)
        if isinstance(outcome, EraseResult):
            logger.debug("TX %s swap event rejected (%s), using balance changes", tx.signature, outcome.reason.value)
            return None
        return outcome

    def _classify_deltas(
        self,
        tx: NormalizedTransaction,
        deltas: AssetDeltaMap,
        swapper: str,
        method: SwapperMethod,
        rent_refunds_filtered: int = 0,
    ) -> ClassificationOutcome:
        merged = merge_sol_equivalents(deltas)
        real = [d for d in merged.values() if not d.is_intermediate]
        if not real:
            return self._erase(tx, EraseReason.NO_MOVEMENT_DETECTED, deltas, swapper=swapper)
        if all(is_sol(d.mint) for d in real):
            return self._erase(tx, EraseReason.SOL_ONLY_NO_TOKEN, deltas, swapper=swapper)

        detected = detect_quote_base(deltas)
        if detected.erase_reason is not None:
            return self._erase(tx, detected.erase_reason, deltas, swapper=swapper)
        quote, base = detected.quote, detected.base

        if not detected.split_required:
            validation = validate_swap_pair(quote, base)
            if not validation.is_valid:
                return self._erase(tx, validation.erase_reason, deltas, swapper=swapper)

        if self._settings.suppress_core_to_core and is_core_token(quote.mint) and is_core_token(base.mint):
            return self._erase(
                tx, EraseReason.CORE_TO_CORE_SWAP_SUPPRESSED, deltas,
                swapper=swapper, quote=quote.mint, base=base.mint,
            )

        fees = FeeData(transaction_fee_lamports=tx.fee if swapper == tx.fee_payer else 0)
        composer = SwapComposer(
            tx,
            swapper,
            method,
            fees,
            rent_refunds_filtered=rent_refunds_filtered,
            intermediate_assets=intermediate_mints(merged),
            price_lookup=self._price_lookup,
        )

        # Token-to-token splits carry no USD anchor, so no minimum value filter
        if detected.split_required:
            return composer.build_split(outgoing=quote, incoming=base)

        swap = composer.build_swap(quote, base, detected.direction)
        below = self._below_minimum_value(swap)
        if below is not None:
            return self._erase(
                tx, EraseReason.BELOW_MINIMUM_VALUE_THRESHOLD, deltas, swapper=swapper, usd_value=str(below)
            )
        return swap

    def _below_minimum_value(self, swap: ParsedSwap) -> Decimal | None:
        """USD value of the quote leg when it is under the threshold; None when above or unpriced."""
        price = usd_price(swap.quote_asset.mint, swap.timestamp, self._price_lookup)
        if price is None:
            return None
        usd_value = swap.amounts.quote_amount * price
        if usd_value < self._settings.minimum_usd_value:
            return usd_value
        return None

    # -- results --

    def _erase(
        self,
        tx: NormalizedTransaction,
        reason: EraseReason,
        deltas: AssetDeltaMap | None = None,
        **extra: Any,
    ) -> EraseResult:
        debug_info: dict[str, Any] = {
            "fee_payer": tx.fee_payer,
            "signers": list(tx.signers),
            "asset_deltas": _dump_deltas(deltas or {}),
        }
        debug_info.update(extra)
        return EraseResult(signature=tx.signature, timestamp=tx.timestamp, reason=reason, debug_info=debug_info)

    def _invalid_input(self, payload: Any, validation_error: str) -> EraseResult:
        signature, timestamp = self._identity(payload)
        debug_info: dict[str, Any] = {"validation_error": validation_error, "asset_deltas": {}}
        if isinstance(payload, Mapping):
            debug_info["fee_payer"] = field_value(payload, "fee_payer")
            debug_info["signers"] = field_value(payload, "signers")
        return EraseResult(
            signature=signature, timestamp=timestamp, reason=EraseReason.INVALID_INPUT, debug_info=debug_info
        )

    @staticmethod
    def _identity(tx: Any) -> tuple[str, int]:
        """Best-effort (signature, timestamp) for records about unusable input."""
        if isinstance(tx, NormalizedTransaction):
            return tx.signature, tx.timestamp
        if not isinstance(tx, Mapping):
            return "", 0
        signature = field_value(tx, "signature")
        timestamp = field_value(tx, "timestamp")
        if not isinstance(signature, str):
            signature = ""
        if not is_int(timestamp):
            timestamp = 0
        return signature, timestamp

    def _finish(self, outcome: ClassificationOutcome, start: float) -> ParserResult:
        elapsed_ms = (time.perf_counter() - start) * 1000
        if elapsed_ms > self._settings.slow_parse_warning_ms:
            logger.warning("TX %s took %.1fms to classify", outcome.signature, elapsed_ms)

        if isinstance(outcome, EraseResult):
            logger.info("TX %s erased: %s", outcome.signature, outcome.reason.value)
            return ParserResult(success=False, erase=outcome, processing_time_ms=elapsed_ms)

        logger.info("TX %s classified as %s", outcome.signature, outcome.kind)
        return ParserResult(success=True, data=outcome, processing_time_ms=elapsed_ms)
