from enum import Enum


class EraseReason(str, Enum):
    """Terminal "not a swap" outcomes. Values are stable identifiers used by dashboards."""

    INVALID_INPUT = "invalid_input"
    TRANSACTION_FAILED = "transaction_failed"
    SWAPPER_IDENTIFICATION_FAILED = "swapper_identification_failed"
    INVALID_ASSET_COUNT = "invalid_asset_count"
    INVALID_DELTA_SIGNS = "invalid_delta_signs"
    BOTH_POSITIVE_AIRDROP = "both_positive_airdrop"
    BOTH_NEGATIVE_BURN = "both_negative_burn"
    NO_BASE_DELTA = "no_base_delta"
    SOL_ONLY_NO_TOKEN = "sol_only_no_token"
    BELOW_MINIMUM_VALUE_THRESHOLD = "below_minimum_value_threshold"
    NO_MOVEMENT_DETECTED = "no_movement_detected"
    CORE_TO_CORE_SWAP_SUPPRESSED = "core_to_core_swap_suppressed"
    PARSING_ERROR = "parsing_error"
    NON_SWAP_TRANSACTION_TYPE = "non_swap_transaction_type"
    ONLY_TRANSFER_ACTIONS = "only_transfer_actions"
    SINGLE_MEANINGFUL_CHANGE = "single_meaningful_change"
    NO_OPPOSITE_DELTAS = "no_opposite_deltas"
