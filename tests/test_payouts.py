"""Unit tests for fee totals and the payout calculator."""

from decimal import Decimal
from unittest.mock import patch

import pytest

from dartdraw.errors import InsufficientPrizePoolError
from dartdraw.models import Player
from dartdraw.payouts import (
    build_payout_schedule,
    calculate_payouts,
    compute_fee_totals,
    ordinal,
    round_to_unit,
    to_money,
)


def amounts(values):
    return [Decimal(v) for v in values]


class TestCalculatePayouts:
    """Tests for the golden-ratio payout split."""

    def test_worked_example(self):
        """Test $300 over three spots with a $10 entry fee."""
        assert calculate_payouts(300, 3, 10) == amounts([140, 90, 70])

    def test_plateau_brackets(self):
        """Test places 5 and 6 are paid the same."""
        payouts = calculate_payouts(1000, 6, 0)
        assert payouts == amounts([390, 240, 150, 100, 60, 60])

    def test_remainder_goes_to_first_place(self):
        """Test a pool that isn't a multiple of $10 keeps every cent."""
        payouts = calculate_payouts(987, 10, 0)
        assert sum(payouts) == Decimal('987')
        assert payouts[0] == max(payouts)

    def test_single_spot_takes_everything(self):
        """Test one paid place gets the whole pool."""
        assert calculate_payouts(250, 1, 10) == amounts([250])

    def test_empty_pool(self):
        """Test a zero pool pays zero everywhere."""
        assert calculate_payouts(0, 4, 10) == amounts([0, 0, 0, 0])

    @pytest.mark.parametrize('pool', [0, 100, 300, 987])
    @pytest.mark.parametrize('entry_fee', [0, 10, 20, 50])
    @pytest.mark.parametrize('spots', range(1, 11))
    def test_sum_equals_pool(self, pool, entry_fee, spots):
        """Test payouts always add up to the prize pool exactly."""
        payouts = calculate_payouts(pool, spots, entry_fee)
        assert len(payouts) == spots
        assert sum(payouts) == to_money(pool)

    @pytest.mark.parametrize('pool', [100, 300, 987])
    @pytest.mark.parametrize('entry_fee', [0, 10, 20, 50])
    @pytest.mark.parametrize('spots', range(1, 11))
    def test_floor_when_covered(self, pool, entry_fee, spots):
        """Test every spot gets at least twice the entry fee when the pool allows it."""
        if pool < spots * 2 * entry_fee:
            pytest.skip('pool does not cover the floor')
        payouts = calculate_payouts(pool, spots, entry_fee)
        assert all(p >= 2 * entry_fee for p in payouts)

    def test_fractional_inputs(self):
        """Test float pools are handled in cents."""
        payouts = calculate_payouts(300.5, 3, 10)
        assert sum(payouts) == Decimal('300.50')

    def test_zero_spots_treated_as_one(self):
        """Test spot counts below one pay a single place."""
        assert calculate_payouts(120, 0, 10) == amounts([120])

    def test_empty_pool_with_zero_spots(self):
        """Test an empty pool still reports one zero place when no spots are asked for."""
        assert calculate_payouts(0, 0, 10) == amounts([0])
        assert calculate_payouts(0, -2, 10) == amounts([0])


class TestRoundToUnit:
    """Tests for half-up rounding."""

    @pytest.mark.parametrize(
        'value, expected',
        [('15', '20'), ('14.9', '10'), ('5', '10'), ('4.99', '0'), ('-38.2', '-40'), ('0', '0')],
    )
    def test_round_half_up(self, value, expected):
        """Test rounding to the nearest $10, halves going up."""
        assert round_to_unit(Decimal(value), Decimal(10)) == Decimal(expected)


class TestPayoutSchedule:
    """Tests for the schedule wrapper and floor check."""

    def test_rows(self):
        """Test place labels and amounts."""
        schedule = build_payout_schedule(300, payout_spots=3, entry_fee=10)
        assert schedule.rows() == [
            ('1st', Decimal('140.00')),
            ('2nd', Decimal('90.00')),
            ('3rd', Decimal('70.00')),
        ]
        assert schedule.floor_covered

    def test_defaults_from_config(self):
        """Test spots and entry fee fall back to the configured defaults."""
        schedule = build_payout_schedule(300)
        assert len(schedule.amounts) == 3
        assert schedule.entry_fee == Decimal('10.00')
        assert schedule.floor == Decimal('20.00')

    def test_floor_not_covered(self, caplog):
        """Test a small pool is flagged and logged but still conserved."""
        with caplog.at_level('WARNING', logger='dartdraw.payouts'):
            schedule = build_payout_schedule(100, payout_spots=3, entry_fee=50)

        assert not schedule.floor_covered
        assert schedule.floor_total == Decimal('300.00')
        assert sum(schedule.amounts) == Decimal('100.00')
        assert 'below the floor reservation' in caplog.text

    def test_strict_raises(self):
        """Test strict mode refuses a pool below the floor."""
        with pytest.raises(InsufficientPrizePoolError) as exc_info:
            build_payout_schedule(100, payout_spots=3, entry_fee=50, strict=True)
        assert exc_info.value.floor_total == Decimal('300.00')

    def test_empty_pool_is_not_flagged(self):
        """Test a zero pool is not reported as a floor shortfall."""
        schedule = build_payout_schedule(0, payout_spots=3, entry_fee=10, strict=True)
        assert schedule.amounts == amounts([0, 0, 0])


class TestFeeTotals:
    """Tests for fee totals."""

    def test_worked_example(self):
        """Test 20 players at 10/6/1 with no bonus gives a $300 pool."""
        players = [Player(f'Player{i} X', paid=i < 15) for i in range(20)]
        totals = compute_fee_totals(
            players, entry_fee=10, bar_contribution=6, usage_fee=1, bonus_money=0
        )
        assert totals.total_entry_fees == Decimal('200.00')
        assert totals.total_bar_fees == Decimal('120.00')
        assert totals.total_usage_fees == Decimal('20.00')
        assert totals.prize_pool == Decimal('300.00')
        assert totals.collected_entry_fees == Decimal('150.00')
        assert not totals.fully_collected

    def test_bonus_money(self):
        """Test bonus money is added to the pool."""
        players = [Player('Solo Player', paid=True)]
        totals = compute_fee_totals(
            players, entry_fee=10, bar_contribution=6, usage_fee=1, bonus_money=50
        )
        assert totals.prize_pool == Decimal('65.00')
        assert totals.fully_collected

    def test_config_defaults(self):
        """Test unset fees use the configured defaults."""
        totals = compute_fee_totals([Player('A B'), Player('C D')])
        assert totals.prize_pool == Decimal('30.00')

    def test_defaults_follow_fee_config(self):
        """Test changed house fees flow into the totals, while explicit fees still win."""
        fees = {'entry_fee': 20, 'bar_contribution': 5, 'usage_fee': 2, 'bonus_money': 10}
        with patch('dartdraw.payouts.get_default_fees', return_value=fees):
            totals = compute_fee_totals([Player('A B'), Player('C D')])
            assert totals.prize_pool == Decimal('56.00')
            totals = compute_fee_totals([Player('A B')], entry_fee=10, bonus_money=0)
            assert totals.prize_pool == Decimal('13.00')

    def test_no_players(self):
        """Test an empty roster pays out only bonus money."""
        totals = compute_fee_totals([], bonus_money=25)
        assert totals.prize_pool == Decimal('25.00')


class TestOrdinal:
    """Tests for place labels."""

    @pytest.mark.parametrize(
        'place, label',
        [(1, '1st'), (2, '2nd'), (3, '3rd'), (4, '4th'), (11, '11th'), (12, '12th'),
         (13, '13th'), (21, '21st'), (22, '22nd'), (101, '101st'), (111, '111th')],
    )
    def test_ordinal(self, place, label):
        """Test English ordinal suffixes."""
        assert ordinal(place) == label
