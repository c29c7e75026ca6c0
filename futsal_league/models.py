"""Data models for the futsal league scorer."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .constants import BASE_TEAMS, FIELD, TEAM_IDS


@dataclass(frozen=True)
class Player:
    """Global player identity. ``position`` is the default role."""
    id: str
    name: str
    active: bool = True
    position: str = FIELD


@dataclass(frozen=True)
class Match:
    """A single match within a session."""
    id: str
    seq: int
    home: str
    away: str
    home_goals: int = 0
    away_goals: int = 0
    home_keeper: Optional[str] = None
    away_keeper: Optional[str] = None


@dataclass(frozen=True)
class Session:
    """One weekly play date.

    ``match_stats`` maps match id -> {player key: {'goals': n, 'assists': n}}.
    Player keys are usually ids, but older saves used names or labels.
    """
    date: str = ''
    rosters: Dict[str, List[str]] = field(default_factory=dict)
    matches: List[Match] = field(default_factory=list)
    match_stats: Dict[str, Dict[str, Dict[str, int]]] = field(default_factory=dict)
    defense_awards: Dict[str, Optional[str]] = field(default_factory=dict)
    has_fourth_team: bool = False
    position_overrides: Dict[str, str] = field(default_factory=dict)
    notes: str = ''

    @property
    def active_teams(self) -> List[str]:
        return active_teams(self.has_fourth_team)


def active_teams(has_fourth_team: bool) -> List[str]:
    """Ordered list of team ids in play."""
    return list(TEAM_IDS) if has_fourth_team else list(BASE_TEAMS)


@dataclass
class StandingRow:
    """One team's line in the session table."""
    team: str
    points: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_diff: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0

    @property
    def played(self) -> int:
        return self.wins + self.draws + self.losses


@dataclass
class ScoreRecord:
    """A player's score breakdown for one session."""
    player_id: str
    name: str
    team: Optional[str] = None
    goals: int = 0
    assists: int = 0
    clean_sheets: int = 0
    defense_bonus: int = 0
    team_bonus: int = 0
    total: int = 0


@dataclass
class AggregateRecord:
    """A player's summed score over a window of sessions."""
    player_id: str
    name: str
    goals: int = 0
    assists: int = 0
    clean_sheets: int = 0
    defense_bonus: int = 0
    team_bonus: int = 0
    total: int = 0
    sessions_present: int = 0
    average: float = 0.0
    dates: List[str] = field(default_factory=list)  # sessions the player had a record in


@dataclass
class RankingEntry:
    """Row on a top-N ranking board."""
    rank: int
    player_id: str
    name: str
    value: float


@dataclass(frozen=True)
class LeagueState:
    """Everything the persistence layer hands to the engine."""
    players: List[Player] = field(default_factory=list)
    team_names: Dict[str, str] = field(default_factory=dict)
    sessions_by_date: Dict[str, Session] = field(default_factory=dict)
    session_date: str = ''
