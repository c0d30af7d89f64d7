"""EraseValidator: reject quote/base pairs that are not trades."""

from swapclassifier.domain.enums import EraseReason
from swapclassifier.parser.utils.types import AssetDelta, ValidationResult
from swapclassifier.parser.utils.units import EPSILON


def validate_swap_pair(quote: AssetDelta, base: AssetDelta) -> ValidationResult:
    """First matching rule wins. A quote within EPSILON of zero counts as neither spent nor received."""
    quote_amount = quote.normalized
    base_amount = base.normalized

    if base_amount > EPSILON and quote_amount > -EPSILON:
        return ValidationResult(is_valid=False, erase_reason=EraseReason.BOTH_POSITIVE_AIRDROP)
    if base_amount < -EPSILON and quote_amount < EPSILON:
        return ValidationResult(is_valid=False, erase_reason=EraseReason.BOTH_NEGATIVE_BURN)
    if abs(base_amount) < EPSILON:
        return ValidationResult(is_valid=False, erase_reason=EraseReason.NO_BASE_DELTA)
    return ValidationResult(is_valid=True)
