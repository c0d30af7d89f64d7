from enum import Enum


class TxStatus(str, Enum):
    """Upstream execution status as reported by the indexer."""

    SUCCESS = "Success"
    FAILED = "Failed"
