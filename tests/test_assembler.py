"""Unit tests for team assembly and restoring groups from stored teams."""

import pytest

from dartdraw.assembler import assemble, generate_teams, restore_groups, team_name, teams_cover_roster
from dartdraw.errors import DrawValidationError
from dartdraw.groups import swap
from dartdraw.models import Player, Team
from dartdraw.strategies import (
    AB_DRAW,
    ABC_DRAW_TRIOS,
    HIGH_PLAYER_PICK,
    LOW_PLAYER_PICK,
    PARITY_DRAW,
    PARTNER_BRING,
)


def make_roster(n):
    return [Player(f'Player{i} Surname{i}', ppd=30.0 - i, mpr=3.0 - i * 0.1) for i in range(n)]


class TestAssemble:
    """Tests for positional pairing."""

    def test_worked_example(self, four_players):
        """Test the A/B example yields 'Dana and Blake' and 'Alex and Casey'."""
        teams = assemble(AB_DRAW.partition(four_players))
        assert teams == [
            Team('Dana and Blake', ('Dana Four', 'Blake Two')),
            Team('Alex and Casey', ('Alex One', 'Casey Three')),
        ]

    def test_parity_pairs_strongest_with_weakest(self, four_players):
        """Test the parity example pairs 64 with 31 and 53 with 42."""
        teams = assemble(PARITY_DRAW.partition(four_players))
        assert [t.name for t in teams] == ['Dana and Casey', 'Alex and Blake']

    def test_odd_roster_makes_solo_team(self):
        """Test the unmatched A player becomes a one-person team."""
        teams = assemble(AB_DRAW.partition(make_roster(5)))
        assert len(teams) == 3
        assert teams[-1] == Team('Player2', ('Player2 Surname2',))

    def test_trios(self):
        """Test A/B/C trios with a short C group."""
        teams = assemble(ABC_DRAW_TRIOS.partition(make_roster(7)))
        assert [len(t.players) for t in teams] == [3, 2, 2]
        assert teams[0].name == 'Player0 and Player3 and Player6'

    def test_partner_bring_teams(self):
        """Test partners are consecutive roster entries."""
        teams = assemble(PARTNER_BRING.partition(make_roster(4)))
        assert [t.players for t in teams] == [
            ('Player0 Surname0', 'Player1 Surname1'),
            ('Player2 Surname2', 'Player3 Surname3'),
        ]

    def test_pick_pool_becomes_available_team(self, four_players):
        """Test unpicked players are reported as the Available pseudo-team."""
        teams = assemble(LOW_PLAYER_PICK.partition(four_players))
        assert teams == [
            Team('Casey', ('Casey Three',)),
            Team('Blake', ('Blake Two',)),
            Team('Available', ('Dana Four', 'Alex One')),
        ]

    def test_empty_pick_slots_skipped(self, four_players):
        """Test indices with no occupant produce no team."""
        groups = HIGH_PLAYER_PICK.partition(four_players)
        groups = swap(groups, 'available', 0, 'B', 0)
        groups = swap(groups, 'available', 1, 'B', 1)
        teams = assemble(groups)
        assert [t.name for t in teams] == ['Dana and Casey', 'Alex and Blake']

    def test_deterministic(self, four_players):
        """Test assembling the same groups twice gives identical teams."""
        groups = AB_DRAW.partition(four_players)
        assert assemble(groups) == assemble(groups)

    def test_empty_groups(self):
        """Test no groups means no teams."""
        assert assemble(AB_DRAW.partition([])) == []

    def test_team_name_uses_first_names(self):
        """Test the name is the first word of each member's name."""
        players = [Player('Mary Ann Lee'), Player('Bo')]
        assert team_name(players) == 'Mary and Bo'


class TestGenerateTeams:
    """Tests for validated team generation."""

    def test_no_players(self):
        """Test an empty draw is rejected."""
        with pytest.raises(DrawValidationError, match='No players to form teams'):
            generate_teams(AB_DRAW.partition([]), AB_DRAW)

    def test_pick_draw_needs_picks(self, four_players):
        """Test low player pick needs players in both A and B."""
        groups = LOW_PLAYER_PICK.partition(four_players)
        with pytest.raises(DrawValidationError, match='empty: A'):
            generate_teams(groups, LOW_PLAYER_PICK)

    def test_pick_draw_after_pick(self, four_players):
        """Test one pick is enough to generate teams."""
        groups = swap(LOW_PLAYER_PICK.partition(four_players), 'available', 0, 'A', 0)
        teams = generate_teams(groups, LOW_PLAYER_PICK)
        assert teams[0] == Team('Dana and Casey', ('Dana Four', 'Casey Three'))
        assert teams[-1] == Team('Available', ('Alex One',))

    def test_single_player_ab_draw(self):
        """Test one player forms a solo team in the A/B draw."""
        teams = generate_teams(AB_DRAW.partition(make_roster(1)), AB_DRAW)
        assert teams == [Team('Player0', ('Player0 Surname0',))]

    def test_parity_single_player_rejected(self):
        """Test parity needs both halves filled."""
        with pytest.raises(DrawValidationError):
            generate_teams(PARITY_DRAW.partition(make_roster(1)), PARITY_DRAW)


class TestRestoreGroups:
    """Tests for rebuilding groups from stored teams."""

    def test_round_trip_ab_draw(self, four_players):
        """Test stored A/B teams restore the same groups."""
        groups = AB_DRAW.partition(four_players)
        restored = restore_groups(assemble(groups), four_players, AB_DRAW)
        assert restored == groups

    def test_restores_manual_edits(self, four_players):
        """Test a swapped draw comes back as swapped."""
        groups = swap(AB_DRAW.partition(four_players), 'A', 0, 'B', 0)
        restored = restore_groups(assemble(groups), four_players, AB_DRAW)
        assert restored == groups

    def test_odd_roster(self):
        """Test the solo team restores into A only."""
        roster = make_roster(5)
        groups = AB_DRAW.partition(roster)
        restored = restore_groups(assemble(groups), roster, AB_DRAW)
        assert len(restored.get('A')) == 3
        assert len(restored.get('B')) == 2

    def test_pick_strategy_round_trip(self, four_players):
        """Test solo teams go back to the seeded group and Available to the pool."""
        groups = swap(LOW_PLAYER_PICK.partition(four_players), 'available', 0, 'A', 0)
        restored = restore_groups(assemble(groups), four_players, LOW_PLAYER_PICK)

        assert [p.name if p else None for p in restored.get('A').slots] == ['Dana Four', None]
        assert [p.name for p in restored.get('B').slots] == ['Casey Three', 'Blake Two']
        assert [p.name for p in restored.get('available').players] == ['Alex One']

    def test_teams_missing_a_player(self, four_players):
        """Test teams that don't cover the roster are not restored."""
        teams = [Team('Dana and Blake', ('Dana Four', 'Blake Two'))]
        assert restore_groups(teams, four_players, AB_DRAW) is None

    def test_no_teams(self, four_players):
        """Test a tournament without teams is not restored."""
        assert restore_groups([], four_players, AB_DRAW) is None

    def test_team_too_large(self, four_players):
        """Test a trio stored under a pairs strategy is not restored."""
        teams = [
            Team('Dana and Blake and Alex', ('Dana Four', 'Blake Two', 'Alex One')),
            Team('Casey', ('Casey Three',)),
        ]
        assert restore_groups(teams, four_players, AB_DRAW) is None

    def test_cover_check(self, four_players):
        """Test roster coverage ignores team order."""
        teams = assemble(AB_DRAW.partition(four_players))
        assert teams_cover_roster(list(reversed(teams)), four_players)
        assert not teams_cover_roster(teams, four_players[:3])
