"""Top-N ranking boards."""

from typing import Iterable, Optional

from .constants import KEEPER, RANKING_CATEGORIES, RANKING_DEPTH
from .models import AggregateRecord, Player, RankingEntry
from .positions import global_position, index_players
from .utils import as_number


def top_ranking(
    records: Iterable[AggregateRecord],
    category: str,
    players: Iterable[Player],
    depth: int = RANKING_DEPTH,
) -> list[RankingEntry]:
    """
    Build a leaderboard for one stat category.

    Players with a value of 0 or less never appear, so a board can be empty.
    Ties share a rank and the next distinct value takes its 1-based
    position (1, 1, 3). Every entry ranked ``depth`` or better is
    returned, so ties can push the board past ``depth`` rows.

    Clean-sheet boards only list players whose global position is keeper.

    Args:
        records: Cumulative records (from aggregate_sessions())
        category: One of RANKING_CATEGORIES
        players: Global player list
        depth: Deepest rank to include (default: 5)

    Returns:
        RankingEntry list, best first
    """
    if category not in RANKING_CATEGORIES:
        raise ValueError(f'Unknown ranking category: {category}')

    candidates = list(records)
    if category == 'clean_sheets':
        player_index = index_players(players)
        candidates = [r for r in candidates if global_position(r.player_id, player_index) == KEEPER]

    scored = [(r, as_number(getattr(r, category), 0)) for r in candidates]
    scored = [(r, value) for r, value in scored if value > 0]
    scored.sort(key=lambda item: item[1], reverse=True)

    board = []
    rank = 0
    previous: Optional[float] = None
    for position, (record, value) in enumerate(scored, 1):
        if previous is None or value < previous:
            rank = position
        if rank > depth:
            break
        board.append(RankingEntry(rank=rank, player_id=record.player_id, name=record.name, value=value))
        previous = value
    return board


def ranking_boards(
    records: Iterable[AggregateRecord],
    players: Iterable[Player],
    depth: int = RANKING_DEPTH,
) -> dict[str, list[RankingEntry]]:
    """Every category's board, keyed by category."""
    records = list(records)
    players = list(players or [])
    return {category: top_ranking(records, category, players, depth) for category in RANKING_CATEGORIES}
