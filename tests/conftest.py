from decimal import Decimal

import pytest

from swapclassifier.config import Settings
from swapclassifier.parser.pipeline import SwapClassifier
from swapclassifier.parser.utils.tokens import WSOL_MINT

from builders import BONK

SOL_USD = Decimal("150")


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture()
def prices():
    """Static USD prices: SOL at 150, BONK at 0.00002, everything else unknown."""
    table = {WSOL_MINT: SOL_USD, BONK: Decimal("0.00002")}
    return lambda mint, timestamp: table.get(mint)


@pytest.fixture()
def classifier(settings) -> SwapClassifier:
    return SwapClassifier(settings=settings)


@pytest.fixture()
def priced_classifier(settings, prices) -> SwapClassifier:
    return SwapClassifier(settings=settings, price_lookup=prices)
