"""Validation functions for sessions, standings and scoring results.

Validators never raise on bad data; they return lists of messages for a
person to review. The engine itself scores whatever it is given.
"""

from typing import Iterable, Mapping

from .constants import SCORE_COMPONENTS
from .models import Player, ScoreRecord, Session, StandingRow
from .name_matcher import StatKeyResolver
from .scoring import session_rosters
from .standings import compute_standings, match_result
from .utils import as_dict, as_list, as_number


def validate_session(session: Session, players: Iterable[Player]) -> list[str]:
    """
    Check a session's data for entry mistakes.

    Checks:
    - No player on more than one roster
    - Matches only between two different active teams
    - No negative scores
    - Recorded keepers are on the roster of the side they kept for
    - Defense award winners are on their team's roster
    - Every stat key resolves to a known player

    Args:
        session: Session to check
        players: Global player list

    Returns:
        List of warning messages (empty if valid)
    """
    warnings = []
    label = session.date or 'session'
    rosters = session_rosters(session)
    resolver = StatKeyResolver(players)

    # Players listed on several teams
    seen: dict[str, str] = {}
    for team, roster in rosters.items():
        for player_id in roster:
            if player_id in seen and seen[player_id] != team:
                warnings.append(
                    f'{label}: player {player_id} is on both team {seen[player_id]} and team {team}'
                )
            seen.setdefault(player_id, team)

    for match in as_list(session.matches):
        tag = f'{label} match #{match.seq}'
        if match.home == match.away:
            warnings.append(f'{tag}: team {match.home} plays itself')
        for side in (match.home, match.away):
            if side not in session.active_teams:
                warnings.append(f'{tag}: team {side} is not active (match ignored in standings)')

        if as_number(match.home_goals, 0) < 0 or as_number(match.away_goals, 0) < 0:
            warnings.append(f'{tag}: negative score {match.home_goals}-{match.away_goals}')

        for side, keeper in ((match.home, match.home_keeper), (match.away, match.away_keeper)):
            if not keeper:
                continue
            player_id = resolver.resolve(keeper)
            if player_id is None:
                warnings.append(f'{tag}: keeper {keeper!r} does not match any player')
            elif player_id not in rosters.get(side, []):
                warnings.append(f'{tag}: keeper {player_id} is not on team {side}')

        for key in as_dict(as_dict(session.match_stats).get(match.id)):
            if resolver.resolve(key) is None:
                warnings.append(f'{tag}: stat entry {key!r} does not match any player (dropped)')

    for team, player_id in as_dict(session.defense_awards).items():
        if player_id and team in rosters and player_id not in rosters[team]:
            warnings.append(f'{label}: defense award for team {team} goes to {player_id}, who is not on the roster')

    return warnings


def validate_score_record(record: ScoreRecord) -> list[str]:
    """
    Check that a score record is internally consistent.

    Sanity checks:
    - Components add up to the total
    - No negative components
    """
    warnings = []

    component_sum = sum(getattr(record, name) for name in SCORE_COMPONENTS)
    if component_sum != record.total:
        warnings.append(
            f'{record.name} components sum to {component_sum} but total is {record.total}'
        )

    for name in SCORE_COMPONENTS:
        if getattr(record, name) < 0:
            warnings.append(f'{record.name} has negative {name}: {getattr(record, name)}')

    return warnings


def validate_standings(session: Session, standings: list[StandingRow]) -> list[str]:
    """
    Check a standings table against the matches it came from.

    Sanity checks:
    - W+D+L equals the matches each team played among active teams
    - Points total equals 3 per decisive match plus 2 per draw
    - Rows match a fresh computation
    """
    warnings = []
    active = session.active_teams
    matches = [m for m in as_list(session.matches) if m.home in active and m.away in active]

    played = {team: 0 for team in active}
    decisive = draws = 0
    for match in matches:
        played[match.home] += 1
        played[match.away] += 1
        home_goals, away_goals = match_result(match)
        if home_goals == away_goals:
            draws += 1
        else:
            decisive += 1

    for row in standings:
        if row.played != played.get(row.team, 0):
            warnings.append(
                f'Team {row.team} record {row.wins}-{row.draws}-{row.losses} '
                f'does not match {played.get(row.team, 0)} matches played'
            )

    expected_points = 3 * decisive + 2 * draws
    awarded = sum(row.points for row in standings)
    if awarded != expected_points:
        warnings.append(f'Standings award {awarded} points, expected {expected_points}')

    if standings != compute_standings(session.matches, active):
        warnings.append('Standings differ from a fresh computation')

    return warnings


def validate_all_sessions(
    sessions_by_date: Mapping[str, Session],
    players: Iterable[Player],
    scores_by_date: Mapping[str, Mapping[str, ScoreRecord]] | None = None,
) -> tuple[list[str], list[str]]:
    """
    Validate every session and, optionally, its scores.

    Returns:
        Tuple of (errors, warnings)
        - errors: Scores that don't add up (a scoring bug)
        - warnings: Data entry issues to review
    """
    errors: list[str] = []
    warnings: list[str] = []
    players = list(players or [])

    for date_key, session in sorted(sessions_by_date.items()):
        warnings.extend(validate_session(session, players))
        for record in (scores_by_date or {}).get(date_key, {}).values():
            errors.extend(f'{date_key}: {msg}' for msg in validate_score_record(record))

    return errors, warnings
