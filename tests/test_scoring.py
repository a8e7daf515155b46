"""Unit tests for the score function."""

import pytest

from dartdraw.models import Player
from dartdraw.scoring import (
    combo_score,
    format_stat,
    get_score_function,
    mpr_score,
    player_stat,
    ppd_score,
    sort_by_skill,
)


class TestScoreFunction:
    """Tests for combo, ppd and mpr scores."""

    def test_combo_adds_ten_times_mpr(self):
        """Test combo = ppd + mpr * 10."""
        assert combo_score(Player('Alex One', ppd=3, mpr=5)) == 53

    def test_combo_with_fractional_ratings(self):
        """Test combo with typical league ratings."""
        player = Player('Sam Ray', ppd=18.5, mpr=2.35)
        assert combo_score(player) == pytest.approx(42.0)

    def test_raw_ratings(self):
        """Test ppd and mpr keys return the raw ratings."""
        player = Player('Sam Ray', ppd=18.5, mpr=2.35)
        assert ppd_score(player) == 18.5
        assert mpr_score(player) == 2.35

    def test_zero_ratings(self):
        """Test a new player with no ratings scores zero."""
        assert combo_score(Player('New Guy')) == 0

    def test_player_stat_by_key(self):
        """Test player_stat dispatches on the sort key."""
        player = Player('Alex One', ppd=3, mpr=5)
        assert player_stat(player, 'combo') == 53
        assert player_stat(player, 'ppd') == 3
        assert player_stat(player, 'mpr') == 5

    def test_invalid_sort_key(self):
        """Test unknown sort keys are rejected."""
        with pytest.raises(ValueError, match='Invalid sort key'):
            get_score_function('average')

    def test_format_stat(self):
        """Test display labels."""
        player = Player('Alex One', ppd=3, mpr=5)
        assert format_stat(player, 'combo') == 'Combo: 53.00'
        assert format_stat(player, 'ppd') == 'PPD: 3.00'
        assert format_stat(player, 'mpr') == 'MPR: 5.00'


class TestSortBySkill:
    """Tests for descending, stable ordering."""

    def test_descending_by_combo(self, four_players):
        """Test the worked example order: 64, 53, 42, 31."""
        ordered = sort_by_skill(four_players, 'combo')
        assert [p.name for p in ordered] == ['Dana Four', 'Alex One', 'Blake Two', 'Casey Three']

    def test_ties_keep_roster_order(self):
        """Test equal scores keep their original relative order."""
        roster = [
            Player('Low Guy', ppd=1, mpr=1),
            Player('Tie First', ppd=5, mpr=2),
            Player('Tie Second', ppd=5, mpr=2),
            Player('Tie Third', ppd=5, mpr=2),
        ]
        ordered = sort_by_skill(roster, 'combo')
        assert [p.name for p in ordered] == ['Tie First', 'Tie Second', 'Tie Third', 'Low Guy']

    def test_sort_key_changes_order(self):
        """Test ppd and mpr can rank players differently."""
        shooter = Player('Pat Shooter', ppd=25, mpr=2)
        cricket = Player('Cam Cricket', ppd=15, mpr=3.5)
        assert sort_by_skill([shooter, cricket], 'ppd')[0] is shooter
        assert sort_by_skill([shooter, cricket], 'mpr')[0] is cricket

    def test_input_not_modified(self, four_players):
        """Test sorting returns a new list."""
        original = list(four_players)
        sort_by_skill(four_players)
        assert four_players == original
