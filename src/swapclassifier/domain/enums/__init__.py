from swapclassifier.domain.enums.erase_reason import EraseReason
from swapclassifier.domain.enums.provider import Provider
from swapclassifier.domain.enums.status import TxStatus
from swapclassifier.domain.enums.swapper import SwapperConfidence, SwapperMethod
from swapclassifier.domain.enums.trade import SplitReason, TradeDirection

__all__ = [
    "EraseReason",
    "Provider",
    "SplitReason",
    "SwapperConfidence",
    "SwapperMethod",
    "TradeDirection",
    "TxStatus",
]
