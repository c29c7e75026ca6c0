"""Unit tests for top-N ranking boards."""

import pytest

from futsal_league.constants import RANKING_CATEGORIES
from futsal_league.models import AggregateRecord, Player
from futsal_league.rankings import ranking_boards, top_ranking


def records_with(category, values):
    """One record per value, named P01, P02, ... in input order."""
    return [
        AggregateRecord(player_id=f'x{i}', name=f'P{i:02d}', **{category: value})
        for i, value in enumerate(values, 1)
    ]


def ranks(board):
    return [entry.rank for entry in board]


class TestTopRanking:
    """Dense-with-gaps ranking over positive values."""

    def test_all_zero_board_is_empty(self):
        assert top_ranking(records_with('goals', [0, 0, 0]), 'goals', []) == []

    def test_non_positive_values_excluded(self):
        board = top_ranking(records_with('total', [3, 0, -2]), 'total', [])
        assert [entry.player_id for entry in board] == ['x1']

    def test_shared_rank_skips_next(self):
        board = top_ranking(records_with('goals', [3, 5, 5]), 'goals', [])
        assert ranks(board) == [1, 1, 3]
        assert [entry.value for entry in board] == [5, 5, 3]

    def test_five_way_tie(self):
        assert ranks(top_ranking(records_with('assists', [2] * 5), 'assists', [])) == [1] * 5

    def test_ties_can_exceed_depth(self):
        """Six players level at the top all appear."""
        assert ranks(top_ranking(records_with('assists', [2] * 6), 'assists', [])) == [1] * 6

    def test_cut_after_depth(self):
        board = top_ranking(records_with('total', [10, 9, 8, 7, 6, 6, 5]), 'total', [])
        assert ranks(board) == [1, 2, 3, 4, 5, 5]

    def test_custom_depth(self):
        board = top_ranking(records_with('total', [4, 4, 3]), 'total', [], depth=1)
        assert ranks(board) == [1, 1]

    def test_entries_carry_names(self):
        board = top_ranking(records_with('team_bonus', [4]), 'team_bonus', [])
        assert (board[0].player_id, board[0].name, board[0].value) == ('x1', 'P01', 4)

    def test_clean_sheets_keepers_only(self, players):
        """Field players with clean sheets are left off the clean-sheet board."""
        records = [
            AggregateRecord(player_id='p1', name='Alpha', clean_sheets=3),
            AggregateRecord(player_id='k1', name='Keeper One', clean_sheets=2),
            AggregateRecord(player_id='k2', name='Keeper Two', clean_sheets=0),
        ]
        board = top_ranking(records, 'clean_sheets', players)
        assert [(entry.player_id, entry.rank) for entry in board] == [('k1', 1)]

    def test_other_boards_ignore_position(self, players):
        records = [AggregateRecord(player_id='p1', name='Alpha', clean_sheets=3, goals=1)]
        assert len(top_ranking(records, 'goals', players)) == 1

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            top_ranking([], 'saves', [])


class TestRankingBoards:
    """All boards at once."""

    def test_every_category_present(self, players):
        boards = ranking_boards(records_with('goals', [1]), players)
        assert list(boards) == list(RANKING_CATEGORIES)
        assert len(boards['goals']) == 1
        assert boards['assists'] == []

    def test_accepts_generators(self):
        boards = ranking_boards((r for r in records_with('total', [2, 1])), [Player(id='x1', name='P01')])
        assert ranks(boards['total']) == [1, 2]
