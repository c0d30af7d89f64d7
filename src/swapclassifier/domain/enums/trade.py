from enum import Enum


class TradeDirection(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class SplitReason(str, Enum):
    """Why a trade was emitted as a SELL + BUY pair instead of one record."""

    TOKEN_TO_TOKEN_UNSTABLE_PAIR = "token_to_token_unstable_pair"
