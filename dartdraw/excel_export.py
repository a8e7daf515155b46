"""Export of drawn teams and suggested payouts to an Excel workbook.

Sheets written:
- Teams: team number, team name, and one column per member
- Groups: one column per draw group, in slot order
- Payouts: place, amount, with the prize pool total underneath
"""

import logging
from pathlib import Path
from typing import Optional

import openpyxl
from openpyxl.styles import Font

from .models import DrawGroups, Team
from .payouts import PayoutSchedule

logger = logging.getLogger('dartdraw.excel_export')

TEAMS_SHEET = 'Teams'
GROUPS_SHEET = 'Groups'
PAYOUTS_SHEET = 'Payouts'


def _sheet(wb: openpyxl.Workbook, name: str):
    """Get an emptied sheet, creating it if needed."""
    if name in wb.sheetnames:
        ws = wb[name]
        ws.delete_rows(1, ws.max_row)
        return ws
    return wb.create_sheet(name)


def _write_header(ws, headers: list[str]) -> None:
    bold = Font(bold=True)
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = bold


def write_teams(ws, teams: list[Team]) -> None:
    """Write one row per team."""
    width = max((len(t.players) for t in teams), default=0)
    _write_header(ws, ['Team', 'Name'] + [f'Player {i + 1}' for i in range(width)])

    for row_idx, team in enumerate(teams, start=2):
        ws.cell(row=row_idx, column=1, value=row_idx - 1)
        ws.cell(row=row_idx, column=2, value=team.name)
        for col_idx, player_name in enumerate(team.players, start=3):
            ws.cell(row=row_idx, column=col_idx, value=player_name)


def write_groups(ws, groups: DrawGroups) -> None:
    """Write one column per group; empty pick slots stay blank."""
    _write_header(ws, groups.names)

    for col_idx, group in enumerate(groups.groups, start=1):
        for row_idx, slot in enumerate(group.slots, start=2):
            if slot is not None:
                ws.cell(row=row_idx, column=col_idx, value=slot.name)


def write_payouts(ws, schedule: PayoutSchedule) -> None:
    """Write the place/amount table and the pool total."""
    _write_header(ws, ['Place', 'Payout'])

    row_idx = 2
    for label, amount in schedule.rows():
        ws.cell(row=row_idx, column=1, value=label)
        cell = ws.cell(row=row_idx, column=2, value=float(amount))
        cell.number_format = '$#,##0.00'
        row_idx += 1

    row_idx += 1
    ws.cell(row=row_idx, column=1, value='Total Prize Pool').font = Font(bold=True)
    cell = ws.cell(row=row_idx, column=2, value=float(schedule.total_prize_pool))
    cell.number_format = '$#,##0.00'


def export_tournament(
    excel_path: str | Path,
    teams: list[Team],
    schedule: Optional[PayoutSchedule] = None,
    groups: Optional[DrawGroups] = None,
) -> Path:
    """
    Write teams (and optionally groups and payouts) to a workbook.

    An existing workbook is updated in place; other sheets are kept.

    Args:
        excel_path: Workbook path (created if it doesn't exist)
        teams: Generated teams
        schedule: Payout schedule to include
        groups: Draw groups to include

    Returns:
        Path of the written workbook
    """
    excel_path = Path(excel_path)

    if excel_path.exists():
        wb = openpyxl.load_workbook(str(excel_path))
    else:
        wb = openpyxl.Workbook()
        # Drop the default empty sheet
        wb.remove(wb.active)

    write_teams(_sheet(wb, TEAMS_SHEET), teams)
    if groups is not None:
        write_groups(_sheet(wb, GROUPS_SHEET), groups)
    if schedule is not None:
        write_payouts(_sheet(wb, PAYOUTS_SHEET), schedule)

    excel_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(excel_path))
    wb.close()

    logger.info(f'Exported {len(teams)} teams to {excel_path}')
    return excel_path
