#!/usr/bin/env python3
"""
Futsal League Report CLI

Prints the standings and scores for one session plus the cumulative
table and ranking boards for a window of sessions.

Usage:
    python report.py --state data/league_state.json
    python report.py --date 2025-09-14 --mode season --season 2025-2
    python report.py --mode range --start 2025-03-01 --end 2025-05-31 --excel out/report.xlsx
"""

import argparse
import logging
import sys
from pathlib import Path

from futsal_league import SessionFilter, load_league_state
from futsal_league.config import get_config, get_log_dir, get_scoring_rules, get_state_path
from futsal_league.constants import FILTER_MODES
from futsal_league.excel_export import export_excel_report
from futsal_league.league import build_report, export_league_report, validate_league
from futsal_league.logging_config import setup_logging


def print_report(report: dict) -> None:
    print("=" * 60)
    print(f"SESSION {report['session_date']}")
    print("=" * 60)
    for rank, row in enumerate(report['standings'], 1):
        print(
            f"  {rank}. {row['team_name']}: {row['points']} pts "
            f"({row['wins']}W {row['draws']}D {row['losses']}L, GD {row['goal_diff']:+d}) "
            f"bonus {row['team_bonus']}"
        )

    print("\nDAILY SCORES")
    for row in report['daily']:
        print(
            f"  {row['name']} [{row['team'] or '-'}]: {row['total']} "
            f"(G {row['goals']} A {row['assists']} CS {row['clean_sheets']} "
            f"DEF {row['defense_bonus']} TEAM {row['team_bonus']})"
        )

    print(f"\nCUMULATIVE ({report['filter']['label']})")
    for row in report['cumulative']:
        print(
            f"  {row['name']}: {row['total']} pts in {row['sessions_present']} sessions "
            f"(avg {row['average']:.2f})"
        )

    print("\nRANKINGS")
    for category, board in report['rankings'].items():
        entries = ', '.join(f"{e['rank']}. {e['name']} ({e['value']})" for e in board) or '-'
        print(f"  {category}: {entries}")


def main():
    config = get_config()

    parser = argparse.ArgumentParser(description="Futsal league standings and scoring report")
    parser.add_argument(
        "--state", "-s",
        default=str(get_state_path()),
        help="Path to league state JSON",
    )
    parser.add_argument(
        "--date", "-d",
        default=None,
        help="Session date (defaults to the state's current session)",
    )
    parser.add_argument(
        "--mode", "-m",
        choices=FILTER_MODES,
        default=config.default_filter_mode,
        help="Window for cumulative table and rankings",
    )
    parser.add_argument("--season", default=None, help="Season id for --mode season, e.g. 2025-2")
    parser.add_argument("--start", default=None, help="Range start (YYYY-MM-DD)")
    parser.add_argument("--end", default=None, help="Range end (YYYY-MM-DD)")
    parser.add_argument("--json", default=None, help="Write the report as JSON to this path")
    parser.add_argument("--excel", default=None, help="Write the report as .xlsx to this path")
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress detailed output",
    )

    args = parser.parse_args()

    logger = setup_logging(
        log_dir=get_log_dir(),
        level=logging.WARNING if args.quiet else logging.INFO,
    )

    state_path = Path(args.state)
    if not state_path.exists():
        logger.error(f"League state not found: {state_path}")
        sys.exit(1)

    state = load_league_state(state_path)
    rules = get_scoring_rules()
    session_filter = SessionFilter(mode=args.mode, season=args.season, start=args.start, end=args.end)

    errors, warnings = validate_league(state, rules)
    if errors:
        logger.error(f"Found {len(errors)} scoring errors:")
        for error in errors:
            logger.error(f"  {error}")
    for warning in warnings:
        logger.warning(warning)

    if args.json:
        report = export_league_report(args.json, state, args.date, session_filter, rules)
    else:
        report = build_report(state, args.date, session_filter, rules)

    if args.excel:
        export_excel_report(args.excel, state, args.date, session_filter, rules)

    if not args.quiet:
        print_report(report)


if __name__ == "__main__":
    main()
