from .models import (
    AggregateRecord,
    LeagueState,
    Match,
    Player,
    RankingEntry,
    ScoreRecord,
    Session,
    StandingRow,
    active_teams,
)
from .positions import effective_position, index_players, multi_keeper_players, team_keepers
from .standings import compute_standings, compute_team_bonus
from .name_matcher import StatKeyResolver, normalize_name_key, resolve_player_key
from .scoring import keeper_team_bonus, keeper_wins, score_session, sorted_daily
from .aggregate import (
    SessionFilter,
    aggregate_sessions,
    available_seasons,
    filter_sessions,
    player_timeline,
    sort_aggregate,
)
from .rankings import ranking_boards, top_ranking
from .cache import ScoreCache, snapshot_key
from .schemas import DEFAULT_RULES, LeagueConfig, LeagueStateFile, ScoringRules
from .league import (
    build_report,
    cumulative_table,
    current_session,
    export_league_report,
    league_ranking_boards,
    load_league_state,
    save_league_state,
    score_current_session,
    validate_league,
)

__all__ = [
    # Models
    'AggregateRecord',
    'LeagueState',
    'Match',
    'Player',
    'RankingEntry',
    'ScoreRecord',
    'Session',
    'StandingRow',
    'active_teams',
    # Positions
    'effective_position',
    'index_players',
    'multi_keeper_players',
    'team_keepers',
    # Standings
    'compute_standings',
    'compute_team_bonus',
    # Stat key resolution
    'StatKeyResolver',
    'normalize_name_key',
    'resolve_player_key',
    # Session scoring
    'keeper_team_bonus',
    'keeper_wins',
    'score_session',
    'sorted_daily',
    # Cross-session
    'SessionFilter',
    'aggregate_sessions',
    'available_seasons',
    'filter_sessions',
    'player_timeline',
    'sort_aggregate',
    # Rankings
    'ranking_boards',
    'top_ranking',
    # Memoization
    'ScoreCache',
    'snapshot_key',
    # Schemas / config
    'DEFAULT_RULES',
    'LeagueConfig',
    'LeagueStateFile',
    'ScoringRules',
    # State files and reports
    'build_report',
    'cumulative_table',
    'current_session',
    'export_league_report',
    'league_ranking_boards',
    'load_league_state',
    'save_league_state',
    'score_current_session',
    'validate_league',
]
