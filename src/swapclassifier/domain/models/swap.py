"""Terminal classification records: a swap, a split swap pair, or an erase."""

from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from swapclassifier.domain.enums import EraseReason, SplitReason, SwapperMethod, TradeDirection


class AssetInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    mint: str
    symbol: str
    decimals: int


class FeeBreakdown(BaseModel):
    """Fees paid by the swapper, in SOL and converted into the quote asset."""

    model_config = ConfigDict(frozen=True)

    transaction_fee_sol: Decimal = Decimal(0)
    transaction_fee_quote: Decimal = Decimal(0)
    priority_fee_sol: Decimal = Decimal(0)
    priority_fee_quote: Decimal = Decimal(0)
    platform_fee: Decimal = Decimal(0)
    total_fee_quote: Decimal = Decimal(0)


class SwapAmounts(BaseModel):
    """Decimal-normalized amounts. BUY fills input/cost, SELL fills output/received."""

    model_config = ConfigDict(frozen=True)

    base_amount: Decimal  # Always positive
    base_amount_raw: int
    quote_amount_raw: int
    swap_input_amount: Decimal | None = None
    total_wallet_cost: Decimal | None = None  # input + fees
    swap_output_amount: Decimal | None = None
    net_wallet_received: Decimal | None = None  # output - fees
    fee_breakdown: FeeBreakdown = Field(default_factory=FeeBreakdown)

    @property
    def quote_amount(self) -> Decimal:
        if self.swap_input_amount is not None:
            return self.swap_input_amount
        return self.swap_output_amount or Decimal(0)


class ParsedSwap(BaseModel):
    """A single BUY or SELL of base priced in quote."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["swap"] = "swap"
    signature: str
    timestamp: int
    swapper: str
    direction: TradeDirection
    quote_asset: AssetInfo
    base_asset: AssetInfo
    amounts: SwapAmounts
    confidence: int = Field(ge=0, le=100)
    protocol: str = "unknown"
    swapper_identification_method: SwapperMethod
    rent_refunds_filtered: int = 0
    intermediate_assets_collapsed: list[str] = []


class SplitSwapPair(BaseModel):
    """Token-to-token trade with no priority asset, emitted as linked SELL + BUY records."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["split"] = "split"
    signature: str
    timestamp: int
    swapper: str
    split_reason: SplitReason = SplitReason.TOKEN_TO_TOKEN_UNSTABLE_PAIR
    sell_record: ParsedSwap
    buy_record: ParsedSwap
    protocol: str = "unknown"
    swapper_identification_method: SwapperMethod


class EraseResult(BaseModel):
    """Not a swap. debug_info carries fee_payer, signers and asset_deltas plus stage-specific keys."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["erase"] = "erase"
    signature: str
    timestamp: int
    reason: EraseReason
    debug_info: dict[str, Any] = {}


SwapOutcome = Annotated[ParsedSwap | SplitSwapPair, Field(discriminator="kind")]
ClassificationOutcome = ParsedSwap | SplitSwapPair | EraseResult


class ParserResult(BaseModel):
    """Result of one classification. success=True carries data, success=False carries erase."""

    success: bool
    data: SwapOutcome | None = None
    erase: EraseResult | None = None
    processing_time_ms: float = 0.0

    @model_validator(mode="after")
    def _check_variant(self) -> "ParserResult":
        if self.success and (self.data is None or self.erase is not None):
            raise ValueError("successful result must carry data and no erase")
        if not self.success and (self.erase is None or self.data is not None):
            raise ValueError("failed result must carry erase and no data")
        return self

    @property
    def outcome(self) -> ClassificationOutcome:
        if self.data is not None:
            return self.data
        if self.erase is None:
            raise ValueError("result carries neither data nor erase")
        return self.erase
