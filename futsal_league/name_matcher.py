"""Resolve stat-entry keys to player ids.

Stat entries are normally keyed by player id, but older saves keyed them
by name or by display labels such as ``'김한진(GK)'`` or ``'🧤 김한진'``.
Keys are resolved by trying each strategy in RESOLVER_STRATEGIES in order;
the first one that finds a player wins.

Substring matching can pick the wrong player when one name contains
another (e.g. 'Kim' and 'Kim Jun'). It is kept for compatibility with old
data and logged as a warning whenever more than one player matches.
"""

import logging
import re
from typing import Callable, Iterable, Optional

from .models import Player

logger = logging.getLogger('futsal_league.name_matcher')

_TRAILING_LABEL_RE = re.compile(r'\s*\(.*?\)\s*$')
_ROLE_WORD_RE = re.compile(r'(골키퍼|GK|필드|FIELD|GOALKEEPER)', flags=re.IGNORECASE)
_DECORATION_RE = re.compile(r'[🧤🧱🛡⚽🎯■□]+')
_WHITESPACE_RE = re.compile(r'\s+')
_ID_TOKEN_RE = re.compile(r'[a-z0-9]{6,}', flags=re.IGNORECASE)


def normalize_name_key(key: str) -> str:
    """
    Strip role labels and decorations from a legacy stat key.

    Example:
        normalize_name_key('김한진 (GK)')  # '김한진'
        normalize_name_key('🧤 김한진')     # '김한진'
    """
    text = str(key or '').strip()
    text = _TRAILING_LABEL_RE.sub('', text)
    text = _ROLE_WORD_RE.sub('', text).strip()
    text = _DECORATION_RE.sub('', text).strip()
    return _WHITESPACE_RE.sub(' ', text).strip()


def _match_exact_id(key: str, players: list[Player]) -> Optional[str]:
    for player in players:
        if player.id == key:
            return player.id
    return None


def _match_embedded_id(key: str, players: list[Player]) -> Optional[str]:
    token = _ID_TOKEN_RE.search(key)
    if not token:
        return None
    return _match_exact_id(token.group(0), players)


def _match_exact_name(key: str, players: list[Player]) -> Optional[str]:
    name = normalize_name_key(key)
    if not name:
        return None
    for player in players:
        if player.name == name:
            return player.id
    return None


def _match_contained_name(key: str, players: list[Player]) -> Optional[str]:
    name = normalize_name_key(key)
    if not name:
        return None
    candidates = [
        p for p in players if p.name and (p.name in name or name in p.name)
    ]
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.warning(
            f'Ambiguous stat key {key!r} matches {", ".join(p.name for p in candidates)}; '
            f'using {candidates[0].name}'
        )
    return candidates[0].id


ResolverStrategy = Callable[[str, list[Player]], Optional[str]]

RESOLVER_STRATEGIES: list[tuple[str, ResolverStrategy]] = [
    ('exact_id', _match_exact_id),
    ('embedded_id', _match_embedded_id),
    ('exact_name', _match_exact_name),
    ('contained_name', _match_contained_name),
]


class StatKeyResolver:
    """
    Resolves stat keys against a fixed player list.

    Results are remembered per key, so resolving the same key for every
    match of a session only runs the strategies once.
    """

    def __init__(self, players: Iterable[Player]):
        self.players = list(players or [])
        self._resolved: dict[str, Optional[str]] = {}

    def resolve(self, key: Optional[str]) -> Optional[str]:
        """Return the player id for ``key``, or None when nothing matches."""
        text = str(key or '').strip()
        if not text:
            return None
        if text not in self._resolved:
            self._resolved[text] = self._run_strategies(text)
        return self._resolved[text]

    def _run_strategies(self, key: str) -> Optional[str]:
        for strategy_name, strategy in RESOLVER_STRATEGIES:
            player_id = strategy(key, self.players)
            if player_id:
                if strategy_name != 'exact_id':
                    logger.debug(f'Resolved stat key {key!r} -> {player_id} via {strategy_name}')
                return player_id
        logger.debug(f'Stat key {key!r} did not match any player; dropping it')
        return None


def resolve_player_key(key: Optional[str], players: Iterable[Player]) -> Optional[str]:
    """One-off resolution of a single key."""
    return StatKeyResolver(players).resolve(key)
