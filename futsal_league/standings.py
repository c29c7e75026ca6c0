"""Session standings and team bonus allocation."""

import logging
from typing import Iterable, Optional, Sequence

from .models import Match, StandingRow
from .schemas import DEFAULT_RULES, ScoringRules
from .utils import as_number

logger = logging.getLogger('futsal_league.standings')


def match_result(match: Match) -> tuple[int, int]:
    """Home and away goals with malformed values read as 0."""
    return int(as_number(match.home_goals, 0)), int(as_number(match.away_goals, 0))


def compute_standings(
    matches: Optional[Iterable[Match]],
    active_teams: Sequence[str],
) -> list[StandingRow]:
    """
    Fold a session's matches into a ranked table.

    Scoring:
        - Win: 3 points
        - Draw: 1 point each
        - Loss: 0 points

    Ordering: points, goal difference, goals for (all descending), then
    team id ascending. Matches involving a team outside ``active_teams``
    are skipped.

    Args:
        matches: Matches of the session (None is treated as empty)
        active_teams: Team ids in play, e.g. ['A', 'B', 'C']

    Returns:
        One StandingRow per active team, best first
    """
    table = {team: StandingRow(team=team) for team in active_teams}

    for match in matches or []:
        if match.home not in table or match.away not in table:
            logger.debug(f'Skipping match {match.id}: {match.home} vs {match.away} not active')
            continue

        home_goals, away_goals = match_result(match)
        home, away = table[match.home], table[match.away]

        home.goals_for += home_goals
        home.goals_against += away_goals
        away.goals_for += away_goals
        away.goals_against += home_goals

        if home_goals > away_goals:
            home.points += 3
            home.wins += 1
            away.losses += 1
        elif away_goals > home_goals:
            away.points += 3
            away.wins += 1
            home.losses += 1
        else:
            home.points += 1
            away.points += 1
            home.draws += 1
            away.draws += 1

    for row in table.values():
        row.goal_diff = row.goals_for - row.goals_against

    rows = sorted(table.values(), key=lambda r: r.team)
    return sorted(rows, key=lambda r: (r.points, r.goal_diff, r.goals_for), reverse=True)


def bonus_schedule(team_count: int, rules: ScoringRules = DEFAULT_RULES) -> tuple[int, ...]:
    """Bonus points by finishing position for a league of ``team_count`` teams."""
    return rules.team_bonus_four if team_count >= 4 else rules.team_bonus_three


def compute_team_bonus(
    standings: Sequence[StandingRow],
    rules: ScoringRules = DEFAULT_RULES,
) -> dict[str, int]:
    """
    Map each team in ``standings`` to its team bonus.

    Bonus schedule:
        - Four teams: 4 / 3 / 2 / 1
        - Three teams or fewer: 4 / 2 / 1 (two teams: 4 / 2)

    Ranks come straight from list order, so every team gets a distinct
    bonus.
    """
    schedule = bonus_schedule(len(standings), rules)
    bonus = {}
    for position, row in enumerate(standings):
        bonus[row.team] = schedule[position] if position < len(schedule) else 0
    return bonus
