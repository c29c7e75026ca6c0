"""Pydantic schemas for JSON data validation.

Saved league files come from several app versions, so the schemas coerce
rather than reject: bad numbers become 0, unknown team ids fall back to
the first team, missing sections are defaulted and every session date is
moved to its week's Sunday.
"""

import uuid
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from .constants import (
    DEFAULT_PLAYERS,
    DEFAULT_TEAM_NAMES,
    DEFENSE_AWARD_POINTS,
    FIELD,
    FILTER_MODES,
    KEEPER_RUNNER_UP_BONUS,
    KEEPER_TOP_BONUS,
    POSITION_ALIASES,
    RANKING_DEPTH,
    TEAM_BONUS_FOUR_TEAMS,
    TEAM_BONUS_THREE_TEAMS,
    TEAM_IDS,
)
from .models import LeagueState, Match, Player, Session
from .utils import as_dict, as_list, as_number, ensure_sunday


def new_id() -> str:
    """Short random id for players and matches."""
    return uuid.uuid4().hex[:8]


def _coerce_position(value: Any) -> str:
    return POSITION_ALIASES.get(str(value or '').strip(), FIELD)


def _coerce_count(value: Any) -> int:
    return max(0, int(as_number(value, 0)))


class ScoringRules(BaseModel):
    """Point values used by the scoring engine."""

    team_bonus_three: tuple[int, ...] = TEAM_BONUS_THREE_TEAMS
    team_bonus_four: tuple[int, ...] = TEAM_BONUS_FOUR_TEAMS
    defense_award_points: int = Field(default=DEFENSE_AWARD_POINTS, ge=0)
    keeper_top_bonus: int = Field(default=KEEPER_TOP_BONUS, ge=0)
    keeper_runner_up_bonus: int = Field(default=KEEPER_RUNNER_UP_BONUS, ge=0)
    ranking_depth: int = Field(default=RANKING_DEPTH, ge=1, le=50)

    @field_validator('team_bonus_three', 'team_bonus_four')
    @classmethod
    def validate_schedule(cls, v):
        """Bonus schedules must be non-increasing."""
        if any(later > earlier for earlier, later in zip(v, v[1:])):
            raise ValueError(f'Team bonus schedule must be non-increasing: {v}')
        return v

    class Config:
        extra = 'forbid'
        frozen = True


DEFAULT_RULES = ScoringRules()


class LeagueConfig(BaseModel):
    """League configuration settings."""

    rules: ScoringRules = Field(default_factory=ScoringRules)
    state_path: str = 'data/league_state.json'
    log_dir: str = 'logs'
    default_filter_mode: str = 'season'

    @field_validator('default_filter_mode')
    @classmethod
    def validate_filter_mode(cls, v):
        if v not in FILTER_MODES:
            raise ValueError(f'Invalid filter mode: {v}')
        return v

    class Config:
        extra = 'forbid'


class PlayerEntry(BaseModel):
    """Player in the saved player list."""

    id: str = Field(default_factory=new_id)
    name: str = '?'
    active: bool = True
    pos: str = Field(default=FIELD, validation_alias=AliasChoices('pos', 'position'))

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return str(v) if v else new_id()

    @field_validator('name', mode='before')
    @classmethod
    def coerce_name(cls, v):
        return str(v) if v else '?'

    @field_validator('active', mode='before')
    @classmethod
    def coerce_active(cls, v):
        # Only an explicit false deactivates a player
        return v is not False

    @field_validator('pos', mode='before')
    @classmethod
    def coerce_pos(cls, v):
        return _coerce_position(v)

    def to_model(self) -> Player:
        return Player(id=self.id, name=self.name, active=self.active, position=self.pos)

    class Config:
        extra = 'ignore'


class MatchEntry(BaseModel):
    """Match as saved inside a session."""

    id: str = Field(default_factory=new_id)
    seq: int = 0
    home: str = 'A'
    away: str = 'B'
    hg: int = Field(default=0, validation_alias=AliasChoices('hg', 'homeGoals', 'home_goals'))
    ag: int = Field(default=0, validation_alias=AliasChoices('ag', 'awayGoals', 'away_goals'))
    gkHome: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('gkHome', 'homeKeeper', 'home_keeper')
    )
    gkAway: Optional[str] = Field(
        default=None, validation_alias=AliasChoices('gkAway', 'awayKeeper', 'away_keeper')
    )

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return str(v) if v else new_id()

    @field_validator('seq', mode='before')
    @classmethod
    def coerce_seq(cls, v):
        return int(as_number(v, 0))

    @field_validator('hg', 'ag', mode='before')
    @classmethod
    def coerce_goals(cls, v):
        return _coerce_count(v)

    @field_validator('home', mode='before')
    @classmethod
    def coerce_home(cls, v):
        return v if v in TEAM_IDS else 'A'

    @field_validator('away', mode='before')
    @classmethod
    def coerce_away(cls, v):
        return v if v in TEAM_IDS else 'B'

    @field_validator('gkHome', 'gkAway', mode='before')
    @classmethod
    def coerce_keeper(cls, v):
        return str(v) if v else None

    def to_model(self) -> Match:
        return Match(
            id=self.id,
            seq=self.seq,
            home=self.home,
            away=self.away,
            home_goals=self.hg,
            away_goals=self.ag,
            home_keeper=self.gkHome,
            away_keeper=self.gkAway,
        )

    class Config:
        extra = 'ignore'


class StatLine(BaseModel):
    """Goals and assists recorded for one player key in one match."""

    goals: int = 0
    assists: int = 0

    @field_validator('goals', 'assists', mode='before')
    @classmethod
    def coerce_counts(cls, v):
        return _coerce_count(v)

    class Config:
        extra = 'ignore'


class SessionEntry(BaseModel):
    """One weekly session as saved."""

    rosters: dict[str, list[str]] = Field(default_factory=dict, validate_default=True)
    matches: list[MatchEntry] = Field(default_factory=list)
    matchStats: dict[str, dict[str, StatLine]] = Field(default_factory=dict)
    defAwards: dict[str, Optional[str]] = Field(
        default_factory=dict,
        validation_alias=AliasChoices('defAwards', 'defenseAward'),
        validate_default=True,
    )
    hasTeamD: bool = Field(
        default=False, validation_alias=AliasChoices('hasTeamD', 'hasFourthTeam')
    )
    posOverrides: dict[str, str] = Field(
        default_factory=dict, validation_alias=AliasChoices('posOverrides', 'positionOverrides')
    )
    notes: str = ''

    @model_validator(mode='before')
    @classmethod
    def coerce_shape(cls, data):
        return data if isinstance(data, dict) else {}

    @field_validator('rosters', mode='before')
    @classmethod
    def coerce_rosters(cls, v):
        v = as_dict(v)
        return {tid: [str(pid) for pid in as_list(v.get(tid)) if pid] for tid in TEAM_IDS}

    @field_validator('matches', mode='before')
    @classmethod
    def coerce_matches(cls, v):
        return [m if isinstance(m, dict) else {} for m in as_list(v)]

    @field_validator('matchStats', mode='before')
    @classmethod
    def coerce_match_stats(cls, v):
        return {
            str(mid): {str(key): as_dict(line) for key, line in as_dict(row).items()}
            for mid, row in as_dict(v).items()
        }

    @field_validator('defAwards', mode='before')
    @classmethod
    def coerce_def_awards(cls, v):
        v = as_dict(v)
        return {tid: v[tid] if isinstance(v.get(tid), str) and v[tid] else None for tid in TEAM_IDS}

    @field_validator('hasTeamD', mode='before')
    @classmethod
    def coerce_flag(cls, v):
        # Only true, "true" and 1 switch team D on
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.strip().lower() == 'true'
        if isinstance(v, (int, float)):
            return v == 1
        return False

    @field_validator('posOverrides', mode='before')
    @classmethod
    def coerce_overrides(cls, v):
        return {
            str(pid): POSITION_ALIASES[pos]
            for pid, pos in as_dict(v).items()
            if isinstance(pos, str) and pos in POSITION_ALIASES
        }

    @field_validator('notes', mode='before')
    @classmethod
    def coerce_notes(cls, v):
        return str(v or '')

    @model_validator(mode='after')
    def assign_sequence(self):
        """Give matches without a positive seq their 1-based list position."""
        for position, match in enumerate(self.matches, 1):
            if match.seq <= 0:
                match.seq = position
        return self

    def to_model(self, session_date: str) -> Session:
        return Session(
            date=session_date,
            rosters={tid: list(ids) for tid, ids in self.rosters.items()},
            matches=[m.to_model() for m in self.matches],
            match_stats={
                mid: {key: line.model_dump() for key, line in row.items()}
                for mid, row in self.matchStats.items()
            },
            defense_awards=dict(self.defAwards),
            has_fourth_team=self.hasTeamD,
            position_overrides=dict(self.posOverrides),
            notes=self.notes,
        )

    @classmethod
    def from_model(cls, session: Session) -> 'SessionEntry':
        return cls(
            rosters=session.rosters,
            matches=[
                {
                    'id': m.id,
                    'seq': m.seq,
                    'home': m.home,
                    'away': m.away,
                    'hg': m.home_goals,
                    'ag': m.away_goals,
                    'gkHome': m.home_keeper,
                    'gkAway': m.away_keeper,
                }
                for m in session.matches
            ],
            matchStats=session.match_stats,
            defAwards=session.defense_awards,
            hasTeamD=session.has_fourth_team,
            posOverrides=session.position_overrides,
            notes=session.notes,
        )

    class Config:
        extra = 'ignore'


class LeagueStateFile(BaseModel):
    """Complete league_state.json file structure."""

    players: list[PlayerEntry] = Field(default_factory=list, validate_default=True)
    teamNames: dict[str, str] = Field(default_factory=dict, validate_default=True)
    sessionsByDate: dict[str, SessionEntry] = Field(default_factory=dict)
    sessionDate: str = Field(default='', validate_default=True)

    @model_validator(mode='before')
    @classmethod
    def coerce_shape(cls, data):
        return data if isinstance(data, dict) else {}

    @field_validator('players', mode='before')
    @classmethod
    def default_players(cls, v):
        players = [p if isinstance(p, dict) else {} for p in as_list(v)]
        if not players:
            players = [{'name': name, 'pos': pos} for name, pos in DEFAULT_PLAYERS]
        return players

    @field_validator('teamNames', mode='before')
    @classmethod
    def default_team_names(cls, v):
        v = as_dict(v)
        return {tid: str(v.get(tid) or DEFAULT_TEAM_NAMES[tid]) for tid in TEAM_IDS}

    @field_validator('sessionsByDate', mode='before')
    @classmethod
    def normalize_dates(cls, v):
        # Later keys win when two dates fall in the same week
        return {ensure_sunday(key): session for key, session in as_dict(v).items()}

    @field_validator('sessionDate', mode='before')
    @classmethod
    def normalize_session_date(cls, v):
        return ensure_sunday(v or '')

    @model_validator(mode='after')
    def ensure_current_session(self):
        if self.sessionDate not in self.sessionsByDate:
            self.sessionsByDate[self.sessionDate] = SessionEntry()
        return self

    def to_state(self) -> LeagueState:
        return LeagueState(
            players=[p.to_model() for p in self.players],
            team_names=dict(self.teamNames),
            sessions_by_date={
                key: entry.to_model(key) for key, entry in sorted(self.sessionsByDate.items())
            },
            session_date=self.sessionDate,
        )

    @classmethod
    def from_state(cls, state: LeagueState) -> 'LeagueStateFile':
        return cls(
            players=[
                {'id': p.id, 'name': p.name, 'active': p.active, 'pos': p.position}
                for p in state.players
            ],
            teamNames=state.team_names,
            sessionsByDate={
                key: SessionEntry.from_model(session).model_dump()
                for key, session in state.sessions_by_date.items()
            },
            sessionDate=state.session_date,
        )

    class Config:
        extra = 'ignore'
