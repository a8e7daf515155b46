"""Shared fixtures for the draw engine tests."""

import pytest

from dartdraw.models import Player
from dartdraw.schemas import PlayerRecord, TournamentRecord


@pytest.fixture
def four_players():
    """Roster from the A/B draw worked example (combo 53, 42, 31, 64)."""
    return [
        Player('Alex One', ppd=3, mpr=5),
        Player('Blake Two', ppd=2, mpr=4),
        Player('Casey Three', ppd=1, mpr=3),
        Player('Dana Four', ppd=4, mpr=6),
    ]


@pytest.fixture
def make_tournament():
    """Factory for tournament records with house fee settings."""

    def _make(players, **kwargs):
        fields = {
            'id': 'spring-doubles',
            'name': 'Spring Doubles',
            'tournament_type': 'A/B Draw',
            'entry_fee': 10,
            'bar_contribution': 6,
            'usage_fee': 1,
            'bonus_money': 0,
            'payout_spots': 3,
        }
        fields.update(kwargs)
        return TournamentRecord(
            players=[PlayerRecord.from_player(p) for p in players], **fields
        )

    return _make
