"""Tests for rent refund filtering."""

from decimal import Decimal

from swapclassifier.parser.components.rent_filter import BalanceChangeFilter

from builders import BONK, NATIVE, OTHER, SOL, SWAPPER, change

RENT = 2_039_280  # token account rent-exempt minimum


class TestRentRefunds:
    def test_small_sol_inflow_next_to_token_move_is_refund(self):
        changes = [
            change(SWAPPER, BONK, -1_000_000_000),
            change(SWAPPER, NATIVE, 3_000_000_000),
            change(SWAPPER, NATIVE, RENT),
        ]
        result = BalanceChangeFilter().filter(changes, SWAPPER)

        assert len(result.rent_refunds) == 1
        assert result.rent_refunds[0].change_amount == RENT
        assert [c.change_amount for c in result.economic_changes] == [-1_000_000_000, 3_000_000_000]

    def test_wsol_refund(self):
        changes = [change(SWAPPER, BONK, 5), change(SWAPPER, SOL, RENT)]
        result = BalanceChangeFilter().filter(changes, SWAPPER)
        assert len(result.rent_refunds) == 1

    def test_threshold_is_strict(self):
        changes = [change(SWAPPER, BONK, 5), change(SWAPPER, NATIVE, 10_000_000)]  # exactly 0.01 SOL
        result = BalanceChangeFilter().filter(changes, SWAPPER)
        assert result.rent_refunds == []
        assert len(result.economic_changes) == 2

    def test_outflows_never_filtered(self):
        changes = [change(SWAPPER, BONK, 5), change(SWAPPER, NATIVE, -RENT)]
        result = BalanceChangeFilter().filter(changes, SWAPPER)
        assert result.rent_refunds == []

    def test_sol_only_untouched(self):
        changes = [change(SWAPPER, NATIVE, RENT)]
        result = BalanceChangeFilter().filter(changes, SWAPPER)
        assert result.rent_refunds == []
        assert len(result.economic_changes) == 1

    def test_zero_token_change_is_not_movement(self):
        changes = [change(SWAPPER, BONK, 0), change(SWAPPER, NATIVE, RENT)]
        result = BalanceChangeFilter().filter(changes, SWAPPER)
        assert result.rent_refunds == []

    def test_custom_threshold(self):
        changes = [change(SWAPPER, BONK, 5), change(SWAPPER, NATIVE, 50_000_000)]
        result = BalanceChangeFilter(threshold_sol=Decimal("0.1")).filter(changes, SWAPPER)
        assert len(result.rent_refunds) == 1


class TestOwnership:
    def test_other_owners_dropped(self):
        changes = [
            change(SWAPPER, BONK, 5),
            change(OTHER, NATIVE, RENT),
            change(OTHER, BONK, -5),
        ]
        result = BalanceChangeFilter().filter(changes, SWAPPER)
        assert [c.owner for c in result.economic_changes] == [SWAPPER]
        assert result.rent_refunds == []

    def test_empty(self):
        result = BalanceChangeFilter().filter([], SWAPPER)
        assert result.economic_changes == []
        assert result.rent_refunds == []
