"""Prize pool totals and the suggested payout schedule."""

import logging
from dataclasses import dataclass, field
from decimal import ROUND_FLOOR, Decimal
from typing import Optional

from .config import get_config, get_default_fees, get_default_payout_spots
from .constants import ORDINAL_SUFFIXES
from .errors import InsufficientPrizePoolError
from .models import Player

logger = logging.getLogger('dartdraw.payouts')

CENT = Decimal('0.01')


def to_money(value) -> Decimal:
    """Convert an int, float, str or Decimal amount to Decimal cents."""
    if isinstance(value, float):
        value = repr(value)
    return Decimal(value).quantize(CENT)


def round_to_unit(amount: Decimal, unit: Decimal) -> Decimal:
    """Round half up to the nearest multiple of unit (15 -> 20, 14.9 -> 10)."""
    return (amount / unit + Decimal('0.5')).to_integral_value(rounding=ROUND_FLOOR) * unit


@dataclass
class FeeTotals:
    """Money collected for a tournament."""
    player_count: int
    total_entry_fees: Decimal
    collected_entry_fees: Decimal
    total_bar_fees: Decimal
    total_usage_fees: Decimal
    bonus_money: Decimal

    @property
    def prize_pool(self) -> Decimal:
        return (
            self.total_entry_fees
            + self.total_bar_fees
            + self.bonus_money
            - self.total_usage_fees
        )

    @property
    def fully_collected(self) -> bool:
        return self.collected_entry_fees == self.total_entry_fees


def compute_fee_totals(
    players: list[Player],
    entry_fee=None,
    bar_contribution=None,
    usage_fee=None,
    bonus_money=None,
) -> FeeTotals:
    """
    Total the fees for a roster.

    Fee arguments left as None take the configured defaults.

    Example:
        20 players, entry 10, bar 6, usage 1, bonus 0 -> prize pool 300
    """
    defaults = get_default_fees()
    entry = to_money(defaults['entry_fee'] if entry_fee is None else entry_fee)
    bar = to_money(defaults['bar_contribution'] if bar_contribution is None else bar_contribution)
    usage = to_money(defaults['usage_fee'] if usage_fee is None else usage_fee)
    bonus = to_money(defaults['bonus_money'] if bonus_money is None else bonus_money)

    count = len(players)
    paid_count = sum(1 for p in players if p.paid)
    return FeeTotals(
        player_count=count,
        total_entry_fees=count * entry,
        collected_entry_fees=paid_count * entry,
        total_bar_fees=count * bar,
        total_usage_fees=count * usage,
        bonus_money=bonus,
    )


def calculate_payouts(
    total_prize_pool,
    payout_spots: int,
    entry_fee,
) -> list[Decimal]:
    """
    Split a prize pool into payouts for places 1..N.

    Steps:
        1. An empty pool pays zero in every spot (at least one)
        2. Reserve a floor of 2 x entry fee per spot
        3. Weight spot i by (1/1.618)^i, normalized
        4. Distribute the rest by weight, each bonus rounded to $10
        5. From spot 4 on, each pair (i, i+1) takes the larger amount
        6. Take $10 at a time from spots 0, 1, ... until the total is not
           above the pool, then give any residual back to spot 0

    The amounts always sum to the pool to the cent. When the floor
    reservation exceeds the pool the top spot can go negative; use
    build_payout_schedule() to detect that case.

    Args:
        total_prize_pool: Money available for payouts
        payout_spots: Number of paid places (values below 1 count as 1)
        entry_fee: Entry fee, used for the guaranteed floor

    Returns:
        List of Decimal amounts, one per place
    """
    config = get_config()
    unit = Decimal(config.rounding_unit)
    pool = to_money(total_prize_pool)

    spots = max(payout_spots, 1)
    if pool == 0:
        return [Decimal('0.00')] * spots

    floor = to_money(entry_fee) * config.floor_multiplier
    payouts = [floor] * spots
    remaining = pool - floor * spots

    ratio = Decimal(1) / Decimal(str(config.golden_ratio))
    weights = [ratio ** i for i in range(spots)]
    weight_sum = sum(weights)

    extra_pool = remaining
    for i in range(spots):
        bonus = round_to_unit(extra_pool * weights[i] / weight_sum, unit)
        payouts[i] += bonus
        remaining -= bonus

    # Lower places are paid in equal brackets
    for i in range(config.plateau_start_index, spots - 1, 2):
        bracket = round_to_unit(max(payouts[i], payouts[i + 1]), unit)
        payouts[i] = bracket
        payouts[i + 1] = bracket

    if remaining > 0:
        payouts[0] += round_to_unit(remaining, unit)

    discrepancy = sum(payouts) - pool
    index = 0
    while discrepancy > 0:
        payouts[index] -= unit
        discrepancy -= unit
        index = (index + 1) % spots

    if discrepancy < 0:
        payouts[0] -= discrepancy

    return [p.quantize(CENT) for p in payouts]


@dataclass
class PayoutSchedule:
    """Suggested payouts with the inputs they were computed from."""
    total_prize_pool: Decimal
    entry_fee: Decimal
    floor: Decimal
    amounts: list[Decimal] = field(default_factory=list)

    @property
    def floor_total(self) -> Decimal:
        return self.floor * len(self.amounts)

    @property
    def floor_covered(self) -> bool:
        """False when the pool cannot pay every spot its floor."""
        return self.total_prize_pool == 0 or self.total_prize_pool >= self.floor_total

    @property
    def has_negative_payout(self) -> bool:
        return any(a < 0 for a in self.amounts)

    def rows(self) -> list[tuple[str, Decimal]]:
        """(place label, amount) pairs: [('1st', Decimal('160.00')), ...]"""
        return [(ordinal(i + 1), amount) for i, amount in enumerate(self.amounts)]


def build_payout_schedule(
    total_prize_pool,
    payout_spots: Optional[int] = None,
    entry_fee=None,
    strict: bool = False,
) -> PayoutSchedule:
    """
    Compute payouts and flag a pool too small for the floor guarantee.

    Args:
        total_prize_pool: Money available for payouts
        payout_spots: Paid places (default from config)
        entry_fee: Entry fee (default from config)
        strict: Raise instead of returning a schedule that breaks the floor

    Raises:
        InsufficientPrizePoolError: If strict and the floor reservation
            exceeds the pool
    """
    config = get_config()
    spots = get_default_payout_spots() if payout_spots is None else payout_spots
    fee = to_money(config.default_entry_fee if entry_fee is None else entry_fee)

    schedule = PayoutSchedule(
        total_prize_pool=to_money(total_prize_pool),
        entry_fee=fee,
        floor=fee * config.floor_multiplier,
        amounts=calculate_payouts(total_prize_pool, spots, fee),
    )

    if not schedule.floor_covered:
        if strict:
            raise InsufficientPrizePoolError(schedule.total_prize_pool, schedule.floor_total)
        logger.warning(
            f'Prize pool ${schedule.total_prize_pool} is below the floor reservation '
            f'${schedule.floor_total} for {len(schedule.amounts)} spots'
        )
    return schedule


def ordinal(place: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    remainder = place % 100
    if 10 < remainder < 20:
        return f'{place}th'
    relevant = remainder % 10
    suffix = ORDINAL_SUFFIXES[relevant] if relevant < len(ORDINAL_SUFFIXES) else 'th'
    return f'{place}{suffix}'
