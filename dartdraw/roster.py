"""Roster maintenance: adding, removing, and marking players paid."""

import logging

from .errors import DrawValidationError
from .models import Player
from .validators import parse_rating, validate_new_player

logger = logging.getLogger('dartdraw.roster')


def add_player(roster: list[Player], name: str, ppd, mpr) -> list[Player]:
    """
    Add a manually entered player to the front of the roster.

    Args:
        roster: Current roster
        name: Full name
        ppd: Points per dart (number or numeric string)
        mpr: Marks per round (number or numeric string)

    Returns:
        New roster with the player first, unpaid

    Raises:
        DrawValidationError: If the entry is malformed or the name is taken
    """
    errors = validate_new_player(name, ppd, mpr, roster)
    if errors:
        raise DrawValidationError(errors[0], errors)

    player = Player(name=name.strip(), ppd=parse_rating(ppd), mpr=parse_rating(mpr), paid=False)
    logger.debug(f'Adding {player.name} (ppd={player.ppd}, mpr={player.mpr})')
    return [player] + list(roster)


def add_listed_player(roster: list[Player], player: Player) -> list[Player]:
    """
    Add a player picked from an external leaderboard.

    Listed ratings are taken as-is; the player starts unpaid.

    Raises:
        DrawValidationError: If the name is already on the roster
    """
    if player.name in {p.name for p in roster}:
        raise DrawValidationError(f'{player.name} is already on the roster')
    return [Player(name=player.name, ppd=player.ppd, mpr=player.mpr, paid=False)] + list(roster)


def remove_player(roster: list[Player], name: str) -> list[Player]:
    """
    Remove a player from the roster.

    Raises:
        DrawValidationError: If the player is unknown or has already paid
    """
    player = find_player(roster, name)
    if player.paid:
        raise DrawValidationError(f'{name} has paid and cannot be removed')
    return [p for p in roster if p.name != name]


def toggle_paid(roster: list[Player], name: str) -> list[Player]:
    """Flip a player's paid status."""
    find_player(roster, name)
    return [
        Player(name=p.name, ppd=p.ppd, mpr=p.mpr, paid=not p.paid) if p.name == name else p
        for p in roster
    ]


def find_player(roster: list[Player], name: str) -> Player:
    """
    Look up a roster player by name.

    Raises:
        DrawValidationError: If no player has that name
    """
    for player in roster:
        if player.name == name:
            return player
    raise DrawValidationError(f'{name} is not on the roster')


def filter_players(candidates: list[Player], term: str, current: list[Player]) -> list[Player]:
    """
    Search a leaderboard for players to add.

    A single search term matches anywhere in the full name. With two or
    more terms the first must appear in the first name and the second in
    the rest of the name. Players already on the roster are left out.

    Example:
        filter_players(board, 'jo sm', roster)  # 'John Smith', 'Joe Smythe'
    """
    terms = term.lower().split()
    if not terms:
        return []

    on_roster = {p.name for p in current}
    matches = []
    for player in candidates:
        if player.name in on_roster:
            continue
        full_name = player.name.lower()
        parts = full_name.split()
        if not parts:
            continue
        first_name, last_name = parts[0], ' '.join(parts[1:])
        if len(terms) == 1:
            if terms[0] in full_name:
                matches.append(player)
        elif terms[0] in first_name and terms[1] in last_name:
            matches.append(player)
    return matches
