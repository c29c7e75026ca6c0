"""Unit tests for the content-addressed score cache."""

import copy

from futsal_league.cache import ScoreCache, snapshot_key
from futsal_league.schemas import ScoringRules
from futsal_league.scoring import score_session

from conftest import make_match


class TestSnapshotKey:
    """Hashing engine inputs."""

    def test_equal_content_equal_key(self, players, scenario_a_session):
        assert snapshot_key(scenario_a_session, players) == snapshot_key(
            copy.deepcopy(scenario_a_session), list(players)
        )

    def test_rules_change_key(self, scenario_a_session):
        assert snapshot_key(scenario_a_session, ScoringRules()) != snapshot_key(
            scenario_a_session, ScoringRules(defense_award_points=3)
        )


class TestScoreCache:
    """Hits, misses and eviction."""

    def test_second_call_is_hit(self, players, scenario_a_session):
        cache = ScoreCache()
        first = cache.session_scores(scenario_a_session, players)
        second = cache.session_scores(copy.deepcopy(scenario_a_session), players)
        assert first == second == score_session(scenario_a_session, players)
        assert (cache.hits, cache.misses) == (1, 1)

    def test_changed_session_is_miss(self, players, scenario_a_session):
        cache = ScoreCache()
        cache.session_scores(scenario_a_session, players)
        edited = copy.deepcopy(scenario_a_session)
        edited.matches.append(make_match('m3', 'A', 'C', 0, 1))
        scores = cache.session_scores(edited, players)
        assert cache.misses == 2
        assert scores['p5'].team_bonus == 4

    def test_aggregate_cached(self, players, scenario_a_session):
        cache = ScoreCache()
        sessions = {'2025-03-09': scenario_a_session}
        table = cache.aggregate(sessions, players)
        assert cache.aggregate(dict(sessions), players) is table
        assert len(cache) == 1

    def test_session_and_aggregate_keys_distinct(self, players, scenario_a_session):
        cache = ScoreCache()
        cache.session_scores(scenario_a_session, players)
        cache.aggregate({'2025-03-09': scenario_a_session}, players)
        assert len(cache) == 2

    def test_oldest_entry_evicted(self, players, scenario_a_session):
        cache = ScoreCache(max_entries=1)
        cache.session_scores(scenario_a_session, players)
        cache.session_scores(scenario_a_session, players, ScoringRules(defense_award_points=3))
        assert len(cache) == 1
        cache.session_scores(scenario_a_session, players)
        assert cache.misses == 3

    def test_clear(self, players, scenario_a_session):
        cache = ScoreCache()
        cache.session_scores(scenario_a_session, players)
        cache.session_scores(scenario_a_session, players)
        cache.clear()
        assert len(cache) == 0
        assert (cache.hits, cache.misses) == (0, 0)
