"""Core data types for the classification pipeline."""

from collections.abc import Callable
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from swapclassifier.domain.enums import (
    EraseReason,
    Provider,
    SwapperConfidence,
    SwapperMethod,
    TradeDirection,
    TxStatus,
)
from swapclassifier.parser.utils.units import raw_to_decimal


class TokenBalanceChange(BaseModel):
    """One observed balance delta for one account, as supplied by the provider."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    address: str = ""  # token account (or wallet for native rows)
    owner: str  # controlling wallet
    mint: str
    change_amount: int  # signed, smallest unit
    pre_balance: int = 0
    post_balance: int = 0
    decimals: int = Field(default=0, ge=0, le=255)
    symbol: str | None = None


class SwapEventHint(BaseModel):
    """Protocol-reported swap amounts. Raw amounts are signed from the swapper's side (negative = spent)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    quote_mint: str
    base_mint: str
    quote_amount_raw: int
    base_amount_raw: int
    quote_decimals: int = Field(ge=0, le=255)
    base_decimals: int = Field(ge=0, le=255)
    swapper: str | None = None


class NormalizedTransaction(BaseModel):
    """Provider-agnostic transaction shape every adapter produces."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    signature: str
    timestamp: int
    fee_payer: str
    signers: list[str]
    status: str = TxStatus.SUCCESS.value
    fee: int = 0  # lamports
    protocol: str = "unknown"
    balance_changes: list[TokenBalanceChange] = Field(default_factory=list)
    swap_event_hint: SwapEventHint | None = None
    tx_type: str | None = None  # indexer-reported transaction type, e.g. SWAP, TRANSFER
    action_types: list[str] = Field(default_factory=list)  # instruction-level actions, in order
    provider: Provider = Provider.NORMALIZED


class AssetDelta(BaseModel):
    """Net movement of one mint for the swapper. net_delta is an exact raw sum."""

    model_config = ConfigDict(frozen=True)

    mint: str
    symbol: str
    net_delta: int
    decimals: int
    is_intermediate: bool = False

    @property
    def normalized(self) -> Decimal:
        return raw_to_decimal(self.net_delta, self.decimals)


AssetDeltaMap = dict[str, AssetDelta]


class SwapperResult(BaseModel):
    swapper: str | None
    confidence: SwapperConfidence
    method: SwapperMethod


class QuoteBaseResult(BaseModel):
    """Either quote+base are set, or erase_reason is."""

    quote: AssetDelta | None = None
    base: AssetDelta | None = None
    direction: TradeDirection | None = None
    split_required: bool = False
    erase_reason: EraseReason | None = None


class ValidationResult(BaseModel):
    is_valid: bool
    erase_reason: EraseReason | None = None


class FilteredBalanceChanges(BaseModel):
    economic_changes: list[TokenBalanceChange]
    rent_refunds: list[TokenBalanceChange]


class FeeData(BaseModel):
    transaction_fee_lamports: int = 0
    priority_fee_lamports: int = 0
    platform_fee: Decimal = Decimal(0)  # already in quote terms


# (mint, unix timestamp) -> USD per unit, or None when unknown
PriceLookup = Callable[[str, int], Decimal | None]
