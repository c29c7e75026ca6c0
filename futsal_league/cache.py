"""Memoization of engine results keyed by a content hash of the inputs.

The engine recomputes everything from a snapshot; callers that re-render
on every state change can put a ScoreCache in front of it. Two snapshots
with the same content share a key, whatever object identity they have.
"""

import dataclasses
import hashlib
import json
import logging
from typing import Any, Iterable, Mapping

from pydantic import BaseModel

from .aggregate import aggregate_sessions
from .models import AggregateRecord, Player, ScoreRecord, Session
from .schemas import DEFAULT_RULES, ScoringRules
from .scoring import score_session

logger = logging.getLogger('futsal_league.cache')


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, BaseModel):
        return value.model_dump()
    raise TypeError(f'Cannot hash {type(value).__name__}')


def snapshot_key(*parts: Any) -> str:
    """SHA-256 of the canonical JSON form of ``parts``."""
    canonical = json.dumps(parts, default=_plain, sort_keys=True, ensure_ascii=False)
    return hashlib.sha256(canonical.encode('utf-8')).hexdigest()


class ScoreCache:
    """
    Content-addressed cache for score_session() and aggregate_sessions().

    Example:
        cache = ScoreCache()
        scores = cache.session_scores(session, players)
        scores_again = cache.session_scores(session, players)  # cache hit
    """

    def __init__(self, max_entries: int = 256):
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self._entries: dict[str, Any] = {}

    def _get_or_compute(self, key: str, compute):
        if key in self._entries:
            self.hits += 1
            return self._entries[key]
        self.misses += 1
        value = compute()
        if len(self._entries) >= self.max_entries:
            # Drop the oldest entry
            self._entries.pop(next(iter(self._entries)))
        self._entries[key] = value
        return value

    def session_scores(
        self,
        session: Session,
        players: Iterable[Player],
        rules: ScoringRules = DEFAULT_RULES,
    ) -> dict[str, ScoreRecord]:
        players = list(players or [])
        key = snapshot_key('session', session, players, rules)
        return self._get_or_compute(key, lambda: score_session(session, players, rules))

    def aggregate(
        self,
        sessions_by_date: Mapping[str, Session],
        players: Iterable[Player],
        rules: ScoringRules = DEFAULT_RULES,
    ) -> list[AggregateRecord]:
        players = list(players or [])
        key = snapshot_key('aggregate', dict(sessions_by_date), players, rules)
        return self._get_or_compute(
            key, lambda: aggregate_sessions(sessions_by_date, players, rules)
        )

    def clear(self) -> None:
        """Forget every cached result and reset the counters."""
        logger.debug(f'Clearing score cache ({len(self._entries)} entries)')
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)
