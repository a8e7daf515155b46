#!/usr/bin/env python3
"""
Darts Tournament Tools CLI

Draws teams for a stored tournament and suggests prize payouts.
Tournaments come from data/tournaments.json

Usage:
    python tournament_tools.py draw --id spring-doubles --sort ppd
    python tournament_tools.py swap --id spring-doubles A 0 B 1
    python tournament_tools.py shuffle --id spring-doubles B
    python tournament_tools.py teams --id spring-doubles
    python tournament_tools.py add-player --id spring-doubles "Sam Ray" 18.5 2.35
    python tournament_tools.py search --id spring-doubles "sa ra"
    python tournament_tools.py payouts --players 20 --entry-fee 10 --spots 3
    python tournament_tools.py export --id spring-doubles --output draw.xlsx
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dartdraw import (
    DrawError,
    DrawSession,
    JsonTournamentStore,
    Player,
    build_payout_schedule,
    compute_fee_totals,
    filter_players,
)
from dartdraw.constants import SORT_KEYS
from dartdraw.excel_export import export_tournament
from dartdraw.groups import ensure_editable
from dartdraw.logging_config import setup_logging
from dartdraw.scoring import format_stat
from dartdraw.validators import validate_teams

MUTATING_COMMANDS = (
    'draw', 'swap', 'shuffle', 'teams', 'add-player', 'remove-player', 'toggle-paid',
)


def print_groups(session: DrawSession) -> None:
    """Print each group's slots side by side."""
    sorted_by = f" (sorted by {session.sort_key})" if session.strategy.uses_skill else ""
    print(f"\n{session.strategy.name}{sorted_by}")
    for group in session.groups.groups:
        names = [p.name if p else '(empty)' for p in group.slots]
        print(f"  {group.name}: {', '.join(names) if names else '-'}")


def print_teams(session: DrawSession) -> None:
    print("\nTeams:")
    for i, team in enumerate(session.teams, 1):
        print(f"  {i}. {team.name}: {', '.join(team.players)}")


def stat_columns(player: Player) -> str:
    return '  '.join(format_stat(player, key) for key in ('ppd', 'mpr'))


def print_roster(session: DrawSession) -> None:
    print(f"\nRoster ({len(session.roster)} players):")
    for player in session.roster:
        status = '✓' if player.paid else ' '
        print(f"  [{status}] {player.name:<25} {stat_columns(player)}")
    totals = session.fee_totals()
    print(
        f"  Entry fees collected: ${totals.collected_entry_fees:.2f}"
        f" of ${totals.total_entry_fees:.2f}"
    )


def print_schedule(schedule) -> None:
    print(f"\nTotal Prize Pool: ${schedule.total_prize_pool:.2f}")
    print("Suggested Payouts:")
    for label, amount in schedule.rows():
        print(f"  {label}: ${amount:.2f}")
    if not schedule.floor_covered:
        print(f"⚠️  Pool is below the ${schedule.floor:.2f} per-spot floor")
    if schedule.has_negative_payout:
        print("⚠️  Some places would be paid a negative amount; reduce the payout spots")


async def leaderboard(store: JsonTournamentStore) -> list[Player]:
    """Every player seen in any stored tournament, latest ratings first."""
    seen = {}
    for tournament in reversed(await store.list_tournaments()):
        for player in tournament.roster:
            seen.setdefault(player.name, player)
    return sorted(seen.values(), key=lambda p: p.name)


async def run_session_command(args) -> int:
    store = JsonTournamentStore(args.tournaments)
    session = DrawSession(store, strategy=args.strategy)
    await session.open(args.id)

    if args.command in MUTATING_COMMANDS:
        ensure_editable(args.id, session.completed)

    if args.command == 'search':
        matches = filter_players(await leaderboard(store), args.term, session.roster)
        if not matches:
            print(f"No players match '{args.term}'")
        for player in matches:
            print(f"  {player.name:<25} {stat_columns(player)}")
        return 0

    if args.command == 'export':
        path = export_tournament(
            args.output,
            session.teams,
            schedule=session.payout_schedule(),
            groups=session.groups,
        )
        print(f"Exported to {path}")
        return 0

    if args.command in ('add-player', 'remove-player', 'toggle-paid'):
        if args.command == 'add-player':
            await session.add_player(args.name, args.ppd, args.mpr)
        elif args.command == 'remove-player':
            await session.remove_player(args.name)
        else:
            await session.toggle_paid(args.name)
        print_roster(session)
        return 0

    if args.command == 'draw':
        await session.partition(args.sort)
    elif args.command == 'swap':
        await session.swap(args.group_from, args.index_from, args.group_to, args.index_to)
    elif args.command == 'shuffle':
        await session.shuffle(args.group)
    elif args.command == 'teams':
        await session.generate_teams()
        errors = validate_teams(session.teams, session.roster)
        if errors:
            print("\n⚠️  Team validation warnings:")
            for error in errors:
                print(f"  - {error}")

    print_groups(session)
    print_teams(session)
    return 0


def run_payouts(args) -> int:
    if args.id:
        store = JsonTournamentStore(args.tournaments)
        session = DrawSession(store)
        asyncio.run(session.open(args.id))
        print_schedule(session.payout_schedule())
        return 0

    players = [Player(name=f'Player {i + 1}', paid=True) for i in range(args.players)]
    totals = compute_fee_totals(
        players,
        entry_fee=args.entry_fee,
        bar_contribution=args.bar,
        usage_fee=args.usage,
        bonus_money=args.bonus,
    )
    schedule = build_payout_schedule(
        totals.prize_pool, payout_spots=args.spots, entry_fee=args.entry_fee
    )
    print_schedule(schedule)
    return 0


def main():
    parser = argparse.ArgumentParser(description="Darts tournament team draws and payouts")
    parser.add_argument(
        "--tournaments", "-t",
        type=Path,
        default=Path("data/tournaments.json"),
        help="Path to tournaments JSON file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "--debug",
        action="append",
        default=[],
        metavar="MODULE",
        help="Debug logging for one module only (e.g. store, session); repeatable",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Also keep a draw log in this directory",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def session_parser(name: str, help_text: str) -> argparse.ArgumentParser:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--id", required=True, help="Tournament id")
        sub.add_argument(
            "--strategy", "-s",
            default=None,
            help="Override the tournament type (e.g. parity_draw or 'Parity Draw')",
        )
        return sub

    draw = session_parser("draw", "Re-draw groups and teams")
    draw.add_argument("--sort", choices=SORT_KEYS, default=None, help="Rating to sort by")

    swap = session_parser("swap", "Swap two group positions")
    swap.add_argument("group_from")
    swap.add_argument("index_from", type=int)
    swap.add_argument("group_to")
    swap.add_argument("index_to", type=int)

    shuffle = session_parser("shuffle", "Shuffle one group")
    shuffle.add_argument("group")

    session_parser("teams", "Validate groups and save teams")

    add_player = session_parser("add-player", "Add a player and re-draw")
    add_player.add_argument("name")
    add_player.add_argument("ppd")
    add_player.add_argument("mpr")

    remove_player = session_parser("remove-player", "Remove an unpaid player and re-draw")
    remove_player.add_argument("name")

    toggle_paid = session_parser("toggle-paid", "Mark a player paid or unpaid")
    toggle_paid.add_argument("name")

    search = session_parser("search", "Find players from other tournaments to add")
    search.add_argument("term", help="Name, or first and last name fragments")

    export = session_parser("export", "Export teams and payouts to Excel")
    export.add_argument("--output", "-o", type=Path, required=True, help="Workbook path")

    payouts = subparsers.add_parser("payouts", help="Suggest prize payouts")
    payouts.add_argument("--id", default=None, help="Use a stored tournament's roster and fees")
    payouts.add_argument("--players", type=int, default=0, help="Number of players")
    payouts.add_argument("--entry-fee", type=float, default=None)
    payouts.add_argument("--bar", type=float, default=None, help="Bar contribution per player")
    payouts.add_argument("--usage", type=float, default=None, help="Usage fee per player")
    payouts.add_argument("--bonus", type=float, default=None, help="Bonus money")
    payouts.add_argument("--spots", type=int, default=None, help="Payout spots")

    args = parser.parse_args()

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_dir=args.log_dir,
        log_to_file=args.log_dir is not None,
        debug_modules=args.debug,
    )

    try:
        if args.command == 'payouts':
            sys.exit(run_payouts(args))
        sys.exit(asyncio.run(run_session_command(args)))
    except DrawError as e:
        print(f"❌ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
