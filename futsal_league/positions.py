"""Effective position lookup for a player on a given date."""

from typing import Iterable, Mapping, Optional

from .constants import FIELD, KEEPER, POSITIONS
from .models import Player, Session
from .utils import as_dict, as_list


def index_players(players: Iterable[Player]) -> dict[str, Player]:
    """Map player id -> Player. The first record wins on duplicate ids."""
    index: dict[str, Player] = {}
    for player in players or []:
        index.setdefault(player.id, player)
    return index


def global_position(player_id: str, players: Mapping[str, Player]) -> str:
    """The player's default position, ``field`` if the player is unknown."""
    player = players.get(player_id)
    if player is None or player.position not in POSITIONS:
        return FIELD
    return player.position


def effective_position(
    player_id: str,
    session: Optional[Session],
    players: Mapping[str, Player],
) -> str:
    """
    Resolve a player's position for one session.

    A session override takes precedence over the player's global position.
    Invalid override values are ignored.

    Args:
        player_id: Player id
        session: Session being scored (may be None)
        players: Player index from index_players()

    Returns:
        'field' or 'keeper'
    """
    overrides = as_dict(session.position_overrides) if session is not None else {}
    override = overrides.get(player_id)
    if override in POSITIONS:
        return override
    return global_position(player_id, players)


def is_keeper(player_id: str, session: Optional[Session], players: Mapping[str, Player]) -> bool:
    return effective_position(player_id, session, players) == KEEPER


def team_keepers(team: str, session: Session, players: Mapping[str, Player]) -> list[str]:
    """Roster members of ``team`` playing as keeper in this session."""
    roster = as_list(as_dict(session.rosters).get(team))
    return [pid for pid in roster if is_keeper(pid, session, players)]


def multi_keeper_players(session: Session, players: Mapping[str, Player]) -> set[str]:
    """Keepers on active teams that field two or more keepers."""
    hidden: set[str] = set()
    for team in session.active_teams:
        keepers = team_keepers(team, session, players)
        if len(keepers) >= 2:
            hidden.update(keepers)
    return hidden


def with_position_override(
    session: Session,
    player_id: str,
    position: str,
    players: Mapping[str, Player],
) -> dict[str, str]:
    """
    Build the override map that results from setting a player's position.

    Returns a new dict; the session is not modified. Setting a player back
    to their global position removes the override.
    """
    overrides = dict(as_dict(session.position_overrides))
    if position not in POSITIONS:
        return overrides
    if position == global_position(player_id, players):
        overrides.pop(player_id, None)
    else:
        overrides[player_id] = position
    return overrides
