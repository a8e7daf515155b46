"""Data models for the team draw engine."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Player:
    """A rated player on a tournament roster."""
    name: str
    ppd: float = 0.0
    mpr: float = 0.0
    paid: bool = False

    @property
    def first_name(self) -> str:
        return self.name.split(' ')[0]


# A group position is either a player or an explicit empty slot
Slot = Optional[Player]


@dataclass(frozen=True)
class Team:
    """A team derived from one index across the team-forming groups."""
    name: str
    players: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Group:
    """An ordered list of slots under one role name (A, B, C, player1, ...)."""
    name: str
    slots: tuple[Slot, ...] = field(default_factory=tuple)
    forms_teams: bool = True

    @property
    def players(self) -> list[Player]:
        return [p for p in self.slots if p is not None]

    def __len__(self) -> int:
        return len(self.slots)


@dataclass(frozen=True)
class DrawGroups:
    """
    The full set of groups for one draw.

    Team-forming groups come first, in pairing order. A pick pool (the
    `available` group of the pick strategies) has forms_teams=False.
    """
    groups: tuple[Group, ...] = field(default_factory=tuple)

    @property
    def names(self) -> list[str]:
        return [g.name for g in self.groups]

    @property
    def team_groups(self) -> list[Group]:
        return [g for g in self.groups if g.forms_teams]

    @property
    def pool(self) -> Optional[Group]:
        for group in self.groups:
            if not group.forms_teams:
                return group
        return None

    def get(self, name: str) -> Group:
        for group in self.groups:
            if group.name == name:
                return group
        raise KeyError(name)

    def replace(self, name: str, slots: tuple[Slot, ...]) -> 'DrawGroups':
        """Return a copy with one group's slots replaced."""
        self.get(name)
        return DrawGroups(
            groups=tuple(
                Group(name=g.name, slots=tuple(slots), forms_teams=g.forms_teams)
                if g.name == name
                else g
                for g in self.groups
            )
        )

    def all_players(self) -> list[Player]:
        """Every occupant across all groups, in group order."""
        players: list[Player] = []
        for group in self.groups:
            players.extend(group.players)
        return players

    def is_empty(self) -> bool:
        return not self.all_players()
