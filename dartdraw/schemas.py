"""Pydantic schemas for stored tournament records."""

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DISPLAY_NAME_TO_TYPE,
    FLOOR_MULTIPLIER,
    GOLDEN_RATIO,
    PLATEAU_START_INDEX,
    ROUNDING_UNIT,
    SORT_KEYS,
    TOURNAMENT_TYPES,
)
from .models import Player, Team


class PlayerRecord(BaseModel):
    """Player on a stored roster."""

    name: str = Field(..., min_length=1)
    ppd: float = Field(..., ge=0)
    mpr: float = Field(..., ge=0)
    paid: bool = False

    class Config:
        extra = 'forbid'

    def to_player(self) -> Player:
        return Player(name=self.name, ppd=self.ppd, mpr=self.mpr, paid=self.paid)

    @classmethod
    def from_player(cls, player: Player) -> 'PlayerRecord':
        return cls(name=player.name, ppd=player.ppd, mpr=player.mpr, paid=player.paid)


class TeamRecord(BaseModel):
    """Generated team as stored on the tournament."""

    name: str = Field(..., min_length=1)
    players: list[str] = Field(..., min_length=1)

    class Config:
        extra = 'forbid'

    def to_team(self) -> Team:
        return Team(name=self.name, players=tuple(self.players))

    @classmethod
    def from_team(cls, team: Team) -> 'TeamRecord':
        return cls(name=team.name, players=list(team.players))


class TournamentRecord(BaseModel):
    """A tournament with its roster, last generated teams, and fee settings."""

    id: str = Field(..., min_length=1)
    name: str = ''
    date: str | None = None
    location: str | None = None
    tournament_type: str | None = None
    entry_fee: float | None = Field(None, ge=0)
    bar_contribution: float | None = Field(None, ge=0)
    usage_fee: float | None = Field(None, ge=0)
    bonus_money: float | None = Field(None, ge=0)
    payout_spots: int | None = Field(None, ge=1)
    players: list[PlayerRecord] = Field(default_factory=list)
    teams: list[TeamRecord] = Field(default_factory=list)
    tournament_completed: bool = False

    @field_validator('tournament_type')
    @classmethod
    def validate_tournament_type(cls, v):
        """Accept a registry key or display name."""
        if v is not None and v not in TOURNAMENT_TYPES and v not in DISPLAY_NAME_TO_TYPE:
            raise ValueError(f'Invalid tournament type: {v}')
        return v

    @field_validator('players')
    @classmethod
    def validate_unique_names(cls, v):
        """Player names identify players, so they must be unique."""
        seen = set()
        for player in v:
            if player.name in seen:
                raise ValueError(f'Duplicate player name: {player.name}')
            seen.add(player.name)
        return v

    class Config:
        extra = 'allow'

    @property
    def roster(self) -> list[Player]:
        return [p.to_player() for p in self.players]

    @property
    def team_list(self) -> list[Team]:
        return [t.to_team() for t in self.teams]


class TournamentsFile(BaseModel):
    """Complete tournaments.json file structure."""

    tournaments: dict[str, TournamentRecord] = Field(default_factory=dict)

    class Config:
        extra = 'forbid'


class TournamentConfig(BaseModel):
    """Tournament tools configuration settings."""

    default_entry_fee: float = Field(..., ge=0)
    default_bar_contribution: float = Field(..., ge=0)
    default_usage_fee: float = Field(..., ge=0)
    default_bonus_money: float = Field(..., ge=0)
    default_payout_spots: int = Field(..., ge=1, le=64)
    rounding_unit: int = Field(ROUNDING_UNIT, ge=1)
    golden_ratio: float = Field(GOLDEN_RATIO, gt=1)
    floor_multiplier: int = Field(FLOOR_MULTIPLIER, ge=0)
    plateau_start_index: int = Field(PLATEAU_START_INDEX, ge=0)
    default_sort_key: str = 'combo'
    default_strategy: str = 'ab_draw'
    persistence_timeout: float = Field(10.0, gt=0)

    @field_validator('default_sort_key')
    @classmethod
    def validate_sort_key(cls, v):
        """Ensure the sort key is one the score function knows."""
        if v not in SORT_KEYS:
            raise ValueError(f'Invalid sort key: {v}')
        return v

    @field_validator('default_strategy')
    @classmethod
    def validate_strategy(cls, v):
        """Ensure the default strategy is registered."""
        if v not in TOURNAMENT_TYPES:
            raise ValueError(f'Invalid strategy: {v}')
        return v

    class Config:
        extra = 'forbid'
