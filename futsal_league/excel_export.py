"""Excel export of standings, daily scores, cumulative table and rankings."""

import logging
from pathlib import Path
from typing import Any, Optional

import openpyxl
from openpyxl.styles import Font

from .aggregate import SessionFilter
from .constants import RANKING_CATEGORIES
from .league import build_report
from .models import LeagueState
from .schemas import DEFAULT_RULES, ScoringRules

logger = logging.getLogger('futsal_league.excel_export')

STANDINGS_COLUMNS = [
    ('Team', 'team_name'),
    ('Pts', 'points'),
    ('W', 'wins'),
    ('D', 'draws'),
    ('L', 'losses'),
    ('GF', 'goals_for'),
    ('GA', 'goals_against'),
    ('GD', 'goal_diff'),
    ('Bonus', 'team_bonus'),
]

DAILY_COLUMNS = [
    ('Name', 'name'),
    ('Team', 'team'),
    ('Goals', 'goals'),
    ('Assists', 'assists'),
    ('Clean Sheets', 'clean_sheets'),
    ('Defense', 'defense_bonus'),
    ('Team Bonus', 'team_bonus'),
    ('Total', 'total'),
]

CUMULATIVE_COLUMNS = [
    ('Name', 'name'),
    ('Sessions', 'sessions_present'),
    ('Goals', 'goals'),
    ('Assists', 'assists'),
    ('Clean Sheets', 'clean_sheets'),
    ('Defense', 'defense_bonus'),
    ('Team Bonus', 'team_bonus'),
    ('Total', 'total'),
    ('Average', 'average'),
]


def _write_table(ws, columns: list[tuple[str, str]], rows: list[dict[str, Any]], start_row: int = 1) -> int:
    """Write a header and rows; returns the next free row."""
    for col, (header, _) in enumerate(columns, 1):
        cell = ws.cell(row=start_row, column=col, value=header)
        cell.font = Font(bold=True)
    for offset, row in enumerate(rows, 1):
        for col, (_, key) in enumerate(columns, 1):
            value = row.get(key)
            ws.cell(row=start_row + offset, column=col, value='-' if value is None else value)
    return start_row + len(rows) + 2


def export_excel_report(
    output_path: str | Path,
    state: LeagueState,
    session_date: Optional[str] = None,
    session_filter: Optional[SessionFilter] = None,
    rules: ScoringRules = DEFAULT_RULES,
) -> Path:
    """
    Write the league report as an .xlsx workbook.

    Sheets:
        - Standings: the session table with team bonuses
        - Daily: every player's score for the session
        - Cumulative: totals over the filtered window
        - Rankings: one block per ranking category

    Returns:
        Path of the written workbook
    """
    report = build_report(state, session_date, session_filter, rules)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = 'Standings'
    ws.cell(row=1, column=1, value=f'Session {report["session_date"]}').font = Font(bold=True, size=14)
    _write_table(ws, STANDINGS_COLUMNS, report['standings'], start_row=3)

    _write_table(wb.create_sheet('Daily'), DAILY_COLUMNS, report['daily'])

    ws = wb.create_sheet('Cumulative')
    ws.cell(row=1, column=1, value=f'Window: {report["filter"]["label"]}').font = Font(bold=True)
    _write_table(ws, CUMULATIVE_COLUMNS, report['cumulative'], start_row=3)

    ws = wb.create_sheet('Rankings')
    row = 1
    for category in RANKING_CATEGORIES:
        ws.cell(row=row, column=1, value=category).font = Font(bold=True, size=12)
        row = _write_table(
            ws,
            [('Rank', 'rank'), ('Name', 'name'), ('Value', 'value')],
            report['rankings'][category],
            start_row=row + 1,
        )

    wb.save(output_path)
    wb.close()
    logger.info(f'Excel report saved to {output_path}')
    return output_path
