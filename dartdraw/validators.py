"""Validation functions for player entries, rosters, and generated teams."""

from .constants import AVAILABLE_TEAM_NAME
from .models import Player, Team

MAX_TEAM_SIZE = 3

NEW_PLAYER_MESSAGE = 'Name, PPD, and MPR are required, and PPD/MPR must be positive numbers.'


def parse_rating(value) -> float | None:
    """Parse a PPD/MPR entry; None when missing or not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return None
    if rating != rating:  # NaN
        return None
    return rating


def validate_new_player(name: str, ppd, mpr, roster: list[Player]) -> list[str]:
    """
    Validate a manually entered player before adding them.

    Checks:
    - Name present
    - PPD and MPR present, numeric and positive
    - Name not already on the roster

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    ppd_value = parse_rating(ppd)
    mpr_value = parse_rating(mpr)
    if (
        not name
        or not name.strip()
        or ppd_value is None
        or mpr_value is None
        or ppd_value <= 0
        or mpr_value <= 0
    ):
        errors.append(NEW_PLAYER_MESSAGE)

    if name and name.strip() in {p.name for p in roster}:
        errors.append(f'{name.strip()} is already on the roster')

    return errors


def validate_roster(players: list[Player]) -> list[str]:
    """
    Check a roster's internal consistency.

    Checks:
    - No blank names
    - No duplicate names
    - No negative ratings

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    seen = set()
    duplicates = set()
    for player in players:
        if not player.name or not player.name.strip():
            errors.append('Roster has a player with a blank name')
            continue
        if player.name in seen:
            duplicates.add(player.name)
        seen.add(player.name)

        if player.ppd < 0 or player.mpr < 0:
            errors.append(
                f'{player.name} has negative ratings (ppd={player.ppd}, mpr={player.mpr})'
            )

    if duplicates:
        errors.append(f'Roster has duplicate players: {", ".join(sorted(duplicates))}')

    return errors


def validate_teams(teams: list[Team], roster: list[Player]) -> list[str]:
    """
    Check that generated teams partition the roster.

    Checks:
    - Team sizes between 1 and 3 ('Available' pool excepted)
    - Every team member is on the roster
    - No player on two teams
    - Every roster player is on a team

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    roster_names = {p.name for p in roster}

    seen = set()
    duplicates = set()
    for team in teams:
        if team.name != AVAILABLE_TEAM_NAME and not 1 <= len(team.players) <= MAX_TEAM_SIZE:
            errors.append(
                f'Team {team.name} has {len(team.players)} players (expected 1-{MAX_TEAM_SIZE})'
            )
        for name in team.players:
            if name not in roster_names:
                errors.append(f'Team {team.name} has {name} who is not on the roster')
            if name in seen:
                duplicates.add(name)
            seen.add(name)

    if duplicates:
        errors.append(f'Players on more than one team: {", ".join(sorted(duplicates))}')

    missing = roster_names - seen
    if missing:
        errors.append(f'Players without a team: {", ".join(sorted(missing))}')

    return errors
