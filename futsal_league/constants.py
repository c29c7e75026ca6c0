"""Constants and mappings for the futsal league scorer."""

# Team identifiers in display order
TEAM_IDS = ('A', 'B', 'C', 'D')
BASE_TEAMS = ('A', 'B', 'C')

DEFAULT_TEAM_NAMES = {
    'A': '팀 A',
    'B': '팀 B',
    'C': '팀 C',
    'D': '팀 D',
}

# Player positions
FIELD = 'field'
KEEPER = 'keeper'
POSITIONS = (FIELD, KEEPER)

# Legacy position labels found in saved data -> canonical position
POSITION_ALIASES = {
    'GK': KEEPER,
    'gk': KEEPER,
    'keeper': KEEPER,
    'goalkeeper': KEEPER,
    '골키퍼': KEEPER,
    'field': FIELD,
    '필드': FIELD,
}

# Team bonus by final standing position
TEAM_BONUS_THREE_TEAMS = (4, 2, 1)
TEAM_BONUS_FOUR_TEAMS = (4, 3, 2, 1)

DEFENSE_AWARD_POINTS = 2

# Bonuses for teams fielding two or more keepers
KEEPER_TOP_BONUS = 4
KEEPER_RUNNER_UP_BONUS = 2

# Ranking boards
RANKING_DEPTH = 5
RANKING_CATEGORIES = (
    'goals',
    'assists',
    'defense_bonus',
    'team_bonus',
    'clean_sheets',
    'total',
)

# Columns of a score record that add up to the total
SCORE_COMPONENTS = ('goals', 'assists', 'clean_sheets', 'defense_bonus', 'team_bonus')

# Session filter modes
FILTER_ALL = 'all'
FILTER_SEASON = 'season'
FILTER_RANGE = 'range'
FILTER_MODES = (FILTER_ALL, FILTER_SEASON, FILTER_RANGE)

# Squad seeded when a saved state has no players
DEFAULT_PLAYERS = [
    ('강민성', FIELD),
    ('이용범', KEEPER),
    ('이호준', FIELD),
    ('최광민', FIELD),
    ('성은호', FIELD),
    ('배호성', FIELD),
    ('강종혁', FIELD),
    ('이창주', FIELD),
    ('주경범', FIELD),
    ('최우현', FIELD),
    ('최준형', KEEPER),
    ('김한진', KEEPER),
    ('장지영', FIELD),
    ('최준혁', FIELD),
    ('정민창', FIELD),
    ('김규연', FIELD),
    ('김병준', FIELD),
    ('윤호석', FIELD),
    ('이세형', FIELD),
    ('정제윈', FIELD),
    ('한형진', FIELD),
]
