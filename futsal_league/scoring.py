"""Per-session individual scoring.

Each player's session total is:
    - Goals: 1 point each
    - Assists: 1 point each
    - Clean sheets: 1 point per match the keeper's side conceded nothing
    - Defense award: 2 points for the one player picked per team
    - Team bonus: points for the team's finishing position (see standings)

Keepers on a team that fielded two or more keepers split the team bonus
between themselves instead (see keeper_team_bonus).
"""

import logging
from typing import Iterable, Mapping, Optional

from .constants import TEAM_IDS
from .models import Player, ScoreRecord, Session
from .name_matcher import StatKeyResolver
from .positions import index_players, is_keeper, team_keepers
from .schemas import DEFAULT_RULES, ScoringRules
from .standings import compute_standings, compute_team_bonus, match_result
from .utils import as_dict, as_list, as_number, collation_key

logger = logging.getLogger('futsal_league.scoring')


def session_rosters(session: Session) -> dict[str, list[str]]:
    """
    Every team's roster in team order, including a switched-off team D.

    Roster players always get a record; only standings and the team bonus
    are limited to the active teams.
    """
    rosters = as_dict(session.rosters)
    return {team: [str(pid) for pid in as_list(rosters.get(team))] for team in TEAM_IDS}


def team_of(player_id: str, rosters: Mapping[str, list[str]]) -> Optional[str]:
    """The first team whose roster lists the player, if any."""
    for team, roster in rosters.items():
        if player_id in roster:
            return team
    return None


def keeper_wins(session: Session, players: Iterable[Player]) -> dict[str, int]:
    """Count matches won with each player as the recorded keeper of the winning side."""
    resolver = StatKeyResolver(players)
    wins: dict[str, int] = {}
    for match in as_list(session.matches):
        home_goals, away_goals = match_result(match)
        if home_goals > away_goals:
            winner = resolver.resolve(match.home_keeper)
        elif away_goals > home_goals:
            winner = resolver.resolve(match.away_keeper)
        else:
            winner = None
        if winner:
            wins[winner] = wins.get(winner, 0) + 1
    return wins


def keeper_team_bonus(
    keepers: list[str],
    wins: Mapping[str, int],
    clean_sheets: Mapping[str, int],
    names: Mapping[str, str],
    rules: ScoringRules = DEFAULT_RULES,
) -> dict[str, int]:
    """
    Split the team bonus among a team's keepers.

    Keepers are ranked by wins, then clean sheets (both descending), then
    name. The top keeper gets rules.keeper_top_bonus and the second gets
    rules.keeper_runner_up_bonus. If the top two are level on both wins and
    clean sheets, both get the top bonus. Everyone else gets 0.

    Args:
        keepers: Keeper ids on one team (two or more)
        wins: Keeper id -> matches won as keeper
        clean_sheets: Keeper id -> clean sheets
        names: Keeper id -> display name

    Returns:
        Dict mapping every keeper id to their bonus
    """
    ranked = sorted(keepers, key=lambda pid: collation_key(names.get(pid, '')))
    ranked.sort(key=lambda pid: (wins.get(pid, 0), clean_sheets.get(pid, 0)), reverse=True)

    bonus = {pid: 0 for pid in keepers}
    if not ranked:
        return bonus

    top = ranked[0]
    bonus[top] = rules.keeper_top_bonus
    if len(ranked) > 1:
        second = ranked[1]
        level = (
            wins.get(top, 0) == wins.get(second, 0)
            and clean_sheets.get(top, 0) == clean_sheets.get(second, 0)
        )
        bonus[second] = rules.keeper_top_bonus if level else rules.keeper_runner_up_bonus
    return bonus


def score_session(
    session: Session,
    players: Iterable[Player],
    rules: ScoringRules = DEFAULT_RULES,
) -> dict[str, ScoreRecord]:
    """
    Score every player involved in one session.

    Players covered are everyone on an active roster plus anyone a stat
    entry or keeper slot resolves to. Stat keys that match no player are
    dropped.

    Args:
        session: Session snapshot (not modified)
        players: Global player list
        rules: Point values

    Returns:
        Dict mapping player id to ScoreRecord
    """
    players = list(players or [])
    player_index = index_players(players)
    resolver = StatKeyResolver(players)

    rosters = session_rosters(session)
    matches = as_list(session.matches)
    match_stats = as_dict(session.match_stats)

    standings = compute_standings(matches, session.active_teams)
    team_bonus_by_team = compute_team_bonus(standings, rules)
    has_matches = len(matches) > 0

    counts: dict[str, dict[str, int]] = {}

    def add(player_id: str, goals=0, assists=0, clean_sheets=0):
        row = counts.setdefault(player_id, {'goals': 0, 'assists': 0, 'clean_sheets': 0})
        row['goals'] += goals
        row['assists'] += assists
        row['clean_sheets'] += clean_sheets

    for match in matches:
        for key, line in as_dict(match_stats.get(match.id)).items():
            player_id = resolver.resolve(key)
            if not player_id:
                continue
            line = as_dict(line)
            add(
                player_id,
                goals=as_number(line.get('goals'), 0),
                assists=as_number(line.get('assists'), 0),
            )

        home_goals, away_goals = match_result(match)
        if away_goals == 0 and match.home_keeper:
            player_id = resolver.resolve(match.home_keeper)
            if player_id:
                add(player_id, clean_sheets=1)
        if home_goals == 0 and match.away_keeper:
            player_id = resolver.resolve(match.away_keeper)
            if player_id:
                add(player_id, clean_sheets=1)

    for roster in rosters.values():
        for player_id in roster:
            add(player_id)

    names = {pid: player_index[pid].name if pid in player_index else '?' for pid in counts}

    # Teams with two or more keepers split the bonus among them
    keeper_bonus: dict[str, int] = {}
    if has_matches:
        wins = keeper_wins(session, players)
        clean_sheet_counts = {pid: row['clean_sheets'] for pid, row in counts.items()}
        for team in session.active_teams:
            keepers = team_keepers(team, session, player_index)
            if len(keepers) >= 2:
                keeper_bonus.update(
                    keeper_team_bonus(keepers, wins, clean_sheet_counts, names, rules)
                )

    defense_awards = as_dict(session.defense_awards)
    scores: dict[str, ScoreRecord] = {}

    for player_id, row in counts.items():
        team = team_of(player_id, rosters)
        defense_bonus = 0
        team_bonus = 0
        if team is not None:
            if defense_awards.get(team) == player_id:
                defense_bonus = rules.defense_award_points
            if has_matches:
                if is_keeper(player_id, session, player_index) and player_id in keeper_bonus:
                    team_bonus = keeper_bonus[player_id]
                else:
                    team_bonus = team_bonus_by_team.get(team, 0)

        scores[player_id] = ScoreRecord(
            player_id=player_id,
            name=names[player_id],
            team=team,
            goals=row['goals'],
            assists=row['assists'],
            clean_sheets=row['clean_sheets'],
            defense_bonus=defense_bonus,
            team_bonus=team_bonus,
            total=(
                row['goals']
                + row['assists']
                + row['clean_sheets']
                + defense_bonus
                + team_bonus
            ),
        )

    logger.debug(f'Scored session {session.date or "?"}: {len(scores)} players')
    return scores


def sorted_daily(scores: Mapping[str, ScoreRecord]) -> list[ScoreRecord]:
    """Daily board order: total descending, then name."""
    records = sorted(scores.values(), key=lambda r: collation_key(r.name))
    return sorted(records, key=lambda r: r.total, reverse=True)
