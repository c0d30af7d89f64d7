"""Tests for swapper identification under relayers, ties and pool noise."""

from decimal import Decimal

from swapclassifier.domain.enums import SwapperConfidence, SwapperMethod
from swapclassifier.parser.components.swapper import identify_swapper, owner_economic_deltas

from builders import BONK, NATIVE, OTHER, POOL, RELAYER, SOL, SWAPPER, USDC, WIF, change


def _buy_changes(owner=SWAPPER):
    return [change(owner, NATIVE, -5_000_000_000), change(owner, BONK, 1_000_000_000)]


class TestOwnerEconomicDeltas:
    def test_normalized_sum_of_abs(self):
        magnitudes, moved = owner_economic_deltas(_buy_changes())
        assert magnitudes[SWAPPER] == Decimal(1005)
        assert moved[SWAPPER] == {SOL, BONK}

    def test_wrapping_is_not_movement(self):
        changes = [change(SWAPPER, NATIVE, -1_000_000_000), change(SWAPPER, SOL, 1_000_000_000)]
        magnitudes, _ = owner_economic_deltas(changes)
        assert magnitudes == {}

    def test_excluded_owner_dropped(self):
        magnitudes, _ = owner_economic_deltas([change(POOL, BONK, -10**15)])
        assert POOL not in magnitudes


class TestLargestDeltaWins:
    def test_fee_payer_swapper(self):
        result = identify_swapper(SWAPPER, [SWAPPER], _buy_changes())
        assert result.swapper == SWAPPER
        assert result.confidence == SwapperConfidence.HIGH
        assert result.method == SwapperMethod.FEE_PAYER

    def test_relayer_paid_signer(self):
        changes = [change(RELAYER, NATIVE, -10_000), *_buy_changes()]
        result = identify_swapper(RELAYER, [RELAYER, SWAPPER], changes)
        assert result.swapper == SWAPPER
        assert result.confidence == SwapperConfidence.HIGH
        assert result.method == SwapperMethod.SIGNER

    def test_relayer_paid_non_signer(self):
        changes = [change(RELAYER, NATIVE, -10_000), *_buy_changes()]
        result = identify_swapper(RELAYER, [RELAYER], changes)
        assert result.swapper == SWAPPER
        assert result.method == SwapperMethod.OWNER_ANALYSIS

    def test_pool_never_selected(self):
        changes = [*_buy_changes(), change(POOL, BONK, -1_000_000_000_000), change(POOL, NATIVE, 5_000_000_000)]
        result = identify_swapper(SWAPPER, [SWAPPER], changes)
        assert result.swapper == SWAPPER

    def test_escalation_single_other_owner(self):
        """Fee payer and signers moved nothing; the one remaining owner wins."""
        changes = [change(RELAYER, USDC, 0), *_buy_changes(OTHER)]
        result = identify_swapper(RELAYER, [RELAYER], changes)
        assert result.swapper == OTHER
        assert result.confidence == SwapperConfidence.HIGH
        assert result.method == SwapperMethod.OWNER_ANALYSIS


class TestTies:
    def test_non_core_holder_preferred(self):
        changes = [*_buy_changes(), change(OTHER, USDC, 1_005_000_000)]
        result = identify_swapper(OTHER, [OTHER], changes)
        assert result.swapper == SWAPPER
        assert result.confidence == SwapperConfidence.MEDIUM
        assert result.method == SwapperMethod.OWNER_ANALYSIS

    def test_fee_payer_breaks_tie(self):
        changes = [change(SWAPPER, BONK, 5_000_000), change(OTHER, WIF, 5_000_000)]
        result = identify_swapper(SWAPPER, [SWAPPER], changes)
        assert result.swapper == SWAPPER
        assert result.confidence == SwapperConfidence.LOW
        assert result.method == SwapperMethod.FEE_PAYER

    def test_single_tied_signer(self):
        changes = [change(SWAPPER, BONK, 5_000_000), change(OTHER, WIF, 5_000_000)]
        result = identify_swapper(RELAYER, [RELAYER, OTHER], changes)
        assert result.swapper == OTHER
        assert result.confidence == SwapperConfidence.LOW
        assert result.method == SwapperMethod.SIGNER

    def test_unresolvable_tie(self):
        changes = [change(SWAPPER, BONK, 5_000_000), change(OTHER, WIF, 5_000_000)]
        result = identify_swapper(RELAYER, [RELAYER], changes)
        assert result.swapper is None
        assert result.confidence == SwapperConfidence.LOW
        assert result.method == SwapperMethod.ERASE


class TestNoCandidates:
    def test_empty(self):
        result = identify_swapper(SWAPPER, [SWAPPER], [])
        assert result.swapper is None
        assert result.method == SwapperMethod.ERASE

    def test_only_zero_net_owners(self):
        changes = [change(SWAPPER, BONK, 10), change(SWAPPER, BONK, -10)]
        assert identify_swapper(SWAPPER, [SWAPPER], changes).swapper is None

    def test_only_excluded_owners(self):
        assert identify_swapper(SWAPPER, [SWAPPER], [change(POOL, BONK, 10)]).swapper is None
