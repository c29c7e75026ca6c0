"""Cross-session aggregation and time-window filters."""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Optional

from .constants import FILTER_ALL, FILTER_MODES, FILTER_RANGE, FILTER_SEASON, SCORE_COMPONENTS
from .models import AggregateRecord, Player, Session
from .positions import index_players
from .schemas import DEFAULT_RULES, ScoringRules
from .scoring import score_session, session_rosters
from .utils import as_number, collation_key, season_id_from_iso

logger = logging.getLogger('futsal_league.aggregate')

SORTABLE_KEYS = SCORE_COMPONENTS + ('total', 'average', 'sessions_present')


@dataclass(frozen=True)
class SessionFilter:
    """
    Which sessions feed the cumulative table.

    Modes:
        - 'all': every session
        - 'season': sessions in one half-year, e.g. season='2025-2' (Jul-Dec)
        - 'range': sessions between start and end inclusive (ISO dates)
    """
    mode: str = FILTER_ALL
    season: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None


def available_seasons(dates: Iterable[str]) -> list[str]:
    """Season ids present in ``dates``, newest first."""
    seasons = {season_id_from_iso(d) for d in dates}
    seasons.discard('')

    def season_order(season_id: str) -> tuple[int, int]:
        year, half = season_id.split('-')
        return int(year), int(half)

    return sorted(seasons, key=season_order, reverse=True)


def _range_bounds(dates: list[str], session_filter: SessionFilter) -> tuple[str, str]:
    start = session_filter.start or (dates[0] if dates else '0000-01-01')
    end = session_filter.end or (dates[-1] if dates else '9999-12-31')
    return (start, end) if start <= end else (end, start)


def filter_sessions(
    sessions_by_date: Mapping[str, Session],
    session_filter: Optional[SessionFilter] = None,
) -> dict[str, Session]:
    """
    Select the sessions a filter covers.

    A season filter without a season uses the newest season on record; a
    range filter with missing bounds uses the first/last session date, and
    reversed bounds are swapped.

    Returns:
        Dict of date -> Session in date order
    """
    session_filter = session_filter or SessionFilter()
    dates = sorted(sessions_by_date)

    if session_filter.mode not in FILTER_MODES:
        logger.warning(f'Unknown filter mode {session_filter.mode!r}; using all sessions')
        selected = dates
    elif session_filter.mode == FILTER_SEASON:
        seasons = available_seasons(dates)
        season = session_filter.season or (seasons[0] if seasons else '')
        selected = [d for d in dates if season_id_from_iso(d) == season] if season else dates
    elif session_filter.mode == FILTER_RANGE:
        start, end = _range_bounds(dates, session_filter)
        selected = [d for d in dates if start <= d <= end]
    else:
        selected = dates

    return {d: sessions_by_date[d] for d in selected}


def filter_label(dates: Iterable[str], session_filter: SessionFilter) -> str:
    """Human-readable description of the window, e.g. '2025-2' or '2025-01-05 ~ 2025-03-30'."""
    dates = sorted(dates)
    if session_filter.mode == FILTER_SEASON:
        seasons = available_seasons(dates)
        return session_filter.season or (seasons[0] if seasons else '')
    if session_filter.mode == FILTER_RANGE:
        if not dates and not (session_filter.start and session_filter.end):
            return ''
        start, end = _range_bounds(dates, session_filter)
        return f'{start} ~ {end}'
    return '전체'


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a scoreboard does: 0.625 becomes 0.63, not 0.62."""
    step = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(step, rounding=ROUND_HALF_UP))

def aggregate_sessions(
    sessions_by_date: Mapping[str, Session],
    players: Iterable[Player],
    rules: ScoringRules = DEFAULT_RULES,
) -> list[AggregateRecord]:
    """
    Sum per-session scores over a set of sessions.

    ``sessions_present`` counts the sessions a player was on any team's
    roster, whether or not they scored. ``average`` is total per session
    present, rounded half up to 2 decimals.

    Args:
        sessions_by_date: Sessions to include (usually from filter_sessions())
        players: Global player list
        rules: Point values

    Returns:
        AggregateRecords sorted by total descending, then name
    """
    players = list(players or [])
    player_index = index_players(players)
    totals: dict[str, AggregateRecord] = {}

    for date_key in sorted(sessions_by_date):
        session = sessions_by_date[date_key]
        present = {pid for roster in session_rosters(session).values() for pid in roster}

        for player_id, record in score_session(session, players, rules).items():
            agg = totals.get(player_id)
            if agg is None:
                name = player_index[player_id].name if player_id in player_index else record.name
                agg = totals[player_id] = AggregateRecord(player_id=player_id, name=name)
            agg.goals += record.goals
            agg.assists += record.assists
            agg.clean_sheets += record.clean_sheets
            agg.defense_bonus += record.defense_bonus
            agg.team_bonus += record.team_bonus
            agg.total += record.total
            if player_id in present:
                agg.sessions_present += 1
            agg.dates.append(date_key)

    for agg in totals.values():
        agg.average = round_half_up(agg.total / agg.sessions_present) if agg.sessions_present > 0 else 0.0

    return sort_aggregate(totals.values(), 'total')


def sort_aggregate(
    records: Iterable[AggregateRecord],
    key: str = 'total',
    descending: bool = True,
) -> list[AggregateRecord]:
    """
    Order a cumulative table by any numeric column.

    Equal values are always ordered by name ascending, whatever the
    direction.
    """
    if key not in SORTABLE_KEYS:
        raise ValueError(f'Cannot sort by {key!r}; choose one of {", ".join(SORTABLE_KEYS)}')
    ordered = sorted(records, key=lambda r: collation_key(r.name))
    return sorted(ordered, key=lambda r: as_number(getattr(r, key), 0), reverse=descending)


def player_timeline(
    sessions_by_date: Mapping[str, Session],
    player_id: str,
    players: Iterable[Player],
    rules: ScoringRules = DEFAULT_RULES,
) -> list[tuple[str, int]]:
    """
    A player's total for every session, in date order.

    Sessions the player missed count as 0. Labels are 'MM-DD'.
    """
    players = list(players or [])
    timeline = []
    for date_key in sorted(sessions_by_date):
        record = score_session(sessions_by_date[date_key], players, rules).get(player_id)
        timeline.append((date_key[5:], record.total if record else 0))
    return timeline


def stat_profile(record: AggregateRecord) -> dict[str, int]:
    """The five score components of a cumulative record, for radar-style charts."""
    return {
        'Goals': record.goals,
        'Assists': record.assists,
        'Defense': record.defense_bonus,
        'CS': record.clean_sheets,
        'Team': record.team_bonus,
    }


def max_stat_value(records: Iterable[AggregateRecord]) -> int:
    """Largest single component value across records (10 when there are none)."""
    values = [value for record in records for value in stat_profile(record).values()]
    return max(values) if values else 10
