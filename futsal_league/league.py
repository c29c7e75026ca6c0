"""League state loading and report building.

The state file holds the players, team names and every session keyed by
date. This module turns it into engine inputs and collects the engine's
outputs into one report.
"""

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .aggregate import SessionFilter, aggregate_sessions, filter_label, filter_sessions
from .models import AggregateRecord, LeagueState, ScoreRecord, Session, StandingRow
from .rankings import ranking_boards
from .schemas import DEFAULT_RULES, LeagueStateFile, ScoringRules
from .scoring import score_session, sorted_daily
from .standings import compute_standings, compute_team_bonus
from .utils import ensure_sunday, load_json, save_json
from .validators import validate_all_sessions, validate_standings

logger = logging.getLogger('futsal_league.league')


def load_league_state(state_path: str | Path) -> LeagueState:
    """Load and normalize a league state file.

    Args:
        state_path: Path to league_state.json

    Returns:
        LeagueState with dates moved to Sundays and missing fields defaulted
    """
    state_file = load_json(state_path, schema=LeagueStateFile)
    state = state_file.to_state()
    logger.info(
        f'Loaded {len(state.players)} players and {len(state.sessions_by_date)} sessions '
        f'from {state_path}'
    )
    return state


def save_league_state(state_path: str | Path, state: LeagueState) -> None:
    """Write a league state back in the saved-file layout."""
    save_json(state_path, LeagueStateFile.from_state(state))
    logger.info(f'Saved league state to {state_path}')


def current_session(state: LeagueState, session_date: Optional[str] = None) -> Session:
    """The session for ``session_date`` (default: the state's current date).

    Missing dates give an empty session rather than an error.
    """
    key = ensure_sunday(session_date or state.session_date)
    return state.sessions_by_date.get(key) or Session(date=key)


def session_standings(session: Session, rules: ScoringRules = DEFAULT_RULES) -> list[dict[str, Any]]:
    """Standings rows with each team's bonus attached."""
    standings = compute_standings(session.matches, session.active_teams)
    bonus = compute_team_bonus(standings, rules)
    return [dict(_standing_dict(row), team_bonus=bonus[row.team]) for row in standings]


def score_current_session(
    state: LeagueState,
    session_date: Optional[str] = None,
    rules: ScoringRules = DEFAULT_RULES,
) -> list[ScoreRecord]:
    """Daily board for one date, best first."""
    session = current_session(state, session_date)
    return sorted_daily(score_session(session, state.players, rules))


def cumulative_table(
    state: LeagueState,
    session_filter: Optional[SessionFilter] = None,
    rules: ScoringRules = DEFAULT_RULES,
) -> list[AggregateRecord]:
    """Cumulative records over the sessions the filter selects."""
    sessions = filter_sessions(state.sessions_by_date, session_filter)
    return aggregate_sessions(sessions, state.players, rules)


def league_ranking_boards(
    state: LeagueState,
    session_filter: Optional[SessionFilter] = None,
    rules: ScoringRules = DEFAULT_RULES,
) -> dict[str, list]:
    """Top ranking boards over the filtered window."""
    records = cumulative_table(state, session_filter, rules)
    return ranking_boards(records, state.players, rules.ranking_depth)


def validate_league(
    state: LeagueState,
    rules: ScoringRules = DEFAULT_RULES,
) -> tuple[list[str], list[str]]:
    """
    Score every session and check the results along with the entered data.

    Returns:
        Tuple of (errors, warnings)
        - errors: Standings or score records that don't add up
        - warnings: Data entry issues to review
    """
    scores_by_date = {
        date_key: score_session(session, state.players, rules)
        for date_key, session in state.sessions_by_date.items()
    }
    errors, warnings = validate_all_sessions(state.sessions_by_date, state.players, scores_by_date)

    for date_key, session in sorted(state.sessions_by_date.items()):
        standings = compute_standings(session.matches, session.active_teams)
        errors.extend(f'{date_key}: {msg}' for msg in validate_standings(session, standings))

    return errors, warnings


def _standing_dict(row: StandingRow) -> dict[str, Any]:
    return dict(asdict(row), played=row.played)


def build_report(
    state: LeagueState,
    session_date: Optional[str] = None,
    session_filter: Optional[SessionFilter] = None,
    rules: ScoringRules = DEFAULT_RULES,
) -> dict[str, Any]:
    """
    Collect everything a results page shows into one JSON-ready dict.

    Returns:
        Dict with 'session_date', 'filter', 'standings', 'daily',
        'cumulative' and 'rankings' keys
    """
    session_filter = session_filter or SessionFilter()
    session = current_session(state, session_date)
    records = cumulative_table(state, session_filter, rules)
    team_names = state.team_names

    standings = session_standings(session, rules)
    for row in standings:
        row['team_name'] = team_names.get(row['team'], row['team'])

    return {
        'generated_at': datetime.now(timezone.utc).isoformat(),
        'session_date': session.date,
        'filter': {
            **asdict(session_filter),
            'label': filter_label(state.sessions_by_date, session_filter),
        },
        'standings': standings,
        'daily': [asdict(r) for r in score_current_session(state, session.date, rules)],
        'cumulative': [asdict(r) for r in records],
        'rankings': {
            category: [asdict(entry) for entry in board]
            for category, board in ranking_boards(records, state.players, rules.ranking_depth).items()
        },
    }


def export_league_report(
    output_path: str | Path,
    state: LeagueState,
    session_date: Optional[str] = None,
    session_filter: Optional[SessionFilter] = None,
    rules: ScoringRules = DEFAULT_RULES,
) -> dict[str, Any]:
    """Build the report and save it as JSON. Returns the report."""
    report = build_report(state, session_date, session_filter, rules)
    save_json(output_path, report)
    logger.info(f'Report saved to {output_path}')
    return report
