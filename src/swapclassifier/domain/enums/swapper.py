from enum import Enum


class SwapperConfidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SwapperMethod(str, Enum):
    """How the swapper wallet was resolved."""

    FEE_PAYER = "fee_payer"
    SIGNER = "signer"
    OWNER_ANALYSIS = "owner_analysis"
    SWAP_EVENT = "swap_event"
    ERASE = "erase"
