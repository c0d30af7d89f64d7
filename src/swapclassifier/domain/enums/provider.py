from enum import Enum


class Provider(str, Enum):
    """Transaction sources with a dedicated adapter. Values lowercase to match CLI/config input."""

    SHYFT = "shyft"
    HELIUS = "helius"
    RPC = "rpc"
    NORMALIZED = "normalized"
