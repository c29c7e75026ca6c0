"""Unit tests for per-session individual scoring."""

import copy

import pytest

from futsal_league.models import Session
from futsal_league.schemas import ScoringRules
from futsal_league.scoring import keeper_team_bonus, keeper_wins, score_session, sorted_daily

from conftest import make_match


def keeper_session(matches, **kwargs):
    """Team A fields keepers k1 and k2; B and C are field players only."""
    return Session(
        date='2025-03-09',
        rosters={'A': ['k1', 'k2', 'p1'], 'B': ['p2', 'p3'], 'C': ['p4', 'p5']},
        matches=matches,
        **kwargs,
    )


class TestGoalsAndAssists:
    """Stat entries summed per player across matches."""

    def test_sums_across_matches(self, players, scenario_a_session):
        session = Session(
            rosters=scenario_a_session.rosters,
            matches=scenario_a_session.matches,
            match_stats={
                'm1': {'p1': {'goals': 2, 'assists': 1}, 'p3': {'goals': 1, 'assists': 0}},
                'm2': {'p3': {'goals': 1, 'assists': 1}},
            },
        )
        scores = score_session(session, players)
        assert (scores['p1'].goals, scores['p1'].assists) == (2, 1)
        assert (scores['p3'].goals, scores['p3'].assists) == (2, 1)

    def test_legacy_keys_resolved(self, players, scenario_a_session):
        """Name and label keys count for the matching player."""
        session = Session(
            rosters=scenario_a_session.rosters,
            matches=scenario_a_session.matches,
            match_stats={
                'm1': {'Alpha': {'goals': 1, 'assists': 0}},
                'm2': {'🧤 Alpha (GK)': {'goals': 1, 'assists': 2}},
            },
        )
        scores = score_session(session, players)
        assert (scores['p1'].goals, scores['p1'].assists) == (2, 2)

    def test_unresolvable_key_dropped(self, players, scenario_a_session):
        session = Session(
            rosters=scenario_a_session.rosters,
            matches=scenario_a_session.matches,
            match_stats={'m1': {'Nobody Known': {'goals': 5, 'assists': 5}}},
        )
        scores = score_session(session, players)
        assert set(scores) == {'p1', 'p2', 'p3', 'p4', 'p5', 'p6'}
        assert sum(r.goals for r in scores.values()) == 0

    def test_stats_for_unknown_match_ignored(self, players, scenario_a_session):
        """Stats keyed by a match id that no longer exists are not counted."""
        session = Session(
            rosters=scenario_a_session.rosters,
            matches=scenario_a_session.matches,
            match_stats={'deleted': {'p1': {'goals': 3, 'assists': 0}}},
        )
        assert score_session(session, players)['p1'].goals == 0

    def test_malformed_stat_values(self, players, scenario_a_session):
        session = Session(
            rosters=scenario_a_session.rosters,
            matches=scenario_a_session.matches,
            match_stats={'m1': {'p1': {'goals': 'x', 'assists': None}, 'p2': 'junk'}},
        )
        scores = score_session(session, players)
        assert scores['p1'].goals == 0
        assert scores['p2'].assists == 0


class TestCleanSheetsAndDefense:
    """Clean sheets and the defense award."""

    def test_clean_sheets(self, players):
        session = keeper_session(
            [
                make_match('m1', 'A', 'B', 2, 0, home_keeper='k1'),
                make_match('m2', 'B', 'A', 0, 0, home_keeper='p2', away_keeper='k1'),
                make_match('m3', 'A', 'C', 1, 1, home_keeper='k1'),
            ]
        )
        scores = score_session(session, players)
        assert scores['k1'].clean_sheets == 2
        assert scores['p2'].clean_sheets == 1

    def test_defense_award(self, players, scenario_a_session):
        session = Session(
            rosters=scenario_a_session.rosters,
            matches=scenario_a_session.matches,
            defense_awards={'A': 'p2', 'B': None, 'C': 'p1'},
        )
        scores = score_session(session, players)
        assert scores['p2'].defense_bonus == 2
        # Award names a player from another team: no bonus
        assert scores['p1'].defense_bonus == 0
        assert scores['p3'].defense_bonus == 0


class TestTeamBonus:
    """Team bonus for field players and keepers."""

    def test_scenario_a_bonuses(self, players, scenario_a_session):
        scores = score_session(scenario_a_session, players)
        assert scores['p1'].team_bonus == 4
        assert scores['p5'].team_bonus == 2
        assert scores['p3'].team_bonus == 1

    def test_no_matches_no_team_bonus(self, players):
        session = Session(rosters={'A': ['p1'], 'B': ['p2'], 'C': ['p3']}, defense_awards={'A': 'p1'})
        scores = score_session(session, players)
        assert all(r.team_bonus == 0 for r in scores.values())
        assert scores['p1'].total == 2

    def test_single_keeper_gets_team_bonus(self, players, scenario_a_session):
        session = Session(
            rosters={'A': ['p1', 'k1'], 'B': ['p3'], 'C': ['p5']},
            matches=scenario_a_session.matches,
        )
        assert score_session(session, players)['k1'].team_bonus == 4

    def test_scenario_b_keeper_split(self, players):
        """K1 (2 wins, 1 CS) gets 4, K2 (1 win, 1 CS) gets 2."""
        session = keeper_session(
            [
                make_match('m1', 'A', 'B', 2, 0, home_keeper='k1'),
                make_match('m2', 'A', 'C', 2, 1, home_keeper='k1'),
                make_match('m3', 'A', 'B', 1, 0, home_keeper='k2'),
            ]
        )
        scores = score_session(session, players)
        assert scores['k1'].team_bonus == 4
        assert scores['k2'].team_bonus == 2
        assert scores['p1'].team_bonus == 4

    def test_swapping_keeper_records_swaps_bonus(self, players):
        session = keeper_session(
            [
                make_match('m1', 'A', 'B', 2, 0, home_keeper='k2'),
                make_match('m2', 'A', 'C', 2, 1, home_keeper='k2'),
                make_match('m3', 'A', 'B', 1, 0, home_keeper='k1'),
            ]
        )
        scores = score_session(session, players)
        assert scores['k2'].team_bonus == 4
        assert scores['k1'].team_bonus == 2

    def test_scenario_c_tied_keepers_both_full(self, players):
        """Equal wins and clean sheets: both keepers get 4."""
        session = keeper_session(
            [
                make_match('m1', 'A', 'B', 2, 0, home_keeper='k1'),
                make_match('m2', 'A', 'C', 1, 0, home_keeper='k2'),
            ]
        )
        scores = score_session(session, players)
        assert scores['k1'].team_bonus == 4
        assert scores['k2'].team_bonus == 4

    def test_keeper_split_ignores_team_finish(self, players):
        """Keepers on a losing team still split 4/2 among themselves."""
        session = keeper_session(
            [
                make_match('m1', 'B', 'A', 3, 0, away_keeper='k1'),
                make_match('m2', 'C', 'A', 0, 1, away_keeper='k2'),
            ]
        )
        scores = score_session(session, players)
        assert scores['k2'].team_bonus == 4
        assert scores['k1'].team_bonus == 2

    def test_three_keepers_name_tiebreak(self, players):
        """Third keeper gets 0; level keepers below the top are ordered by name."""
        session = Session(
            rosters={'A': ['k1', 'k2', 'k3'], 'B': ['p1'], 'C': ['p2']},
            matches=[make_match('m1', 'A', 'B', 2, 1, home_keeper='k3')],
        )
        scores = score_session(session, players)
        assert scores['k3'].team_bonus == 4
        assert scores['k1'].team_bonus == 2  # 'Keeper One' sorts before 'Keeper Two'
        assert scores['k2'].team_bonus == 0

    def test_override_makes_second_keeper(self, players):
        """A field player set to keeper for the day joins the keeper split."""
        session = keeper_session(
            [
                make_match('m1', 'A', 'B', 2, 0, home_keeper='k1'),
                make_match('m2', 'A', 'C', 2, 1, home_keeper='k1'),
                make_match('m3', 'A', 'B', 1, 0, home_keeper='p1'),
            ],
            position_overrides={'k2': 'field', 'p1': 'keeper'},
        )
        scores = score_session(session, players)
        assert scores['k1'].team_bonus == 4
        assert scores['p1'].team_bonus == 2
        assert scores['k2'].team_bonus == 4  # playing as field

    def test_keeper_team_bonus_pure_function(self):
        names = {'x': 'Xavier', 'y': 'Yuri'}
        assert keeper_team_bonus(['x', 'y'], {'x': 1}, {}, names) == {'x': 4, 'y': 2}
        assert keeper_team_bonus(['x', 'y'], {'x': 1, 'y': 1}, {'y': 1}, names) == {'x': 2, 'y': 4}
        assert keeper_team_bonus(['x', 'y'], {}, {}, names) == {'x': 4, 'y': 4}

    def test_custom_rules(self, players):
        rules = ScoringRules(keeper_top_bonus=5, keeper_runner_up_bonus=1, defense_award_points=3)
        session = keeper_session(
            [
                make_match('m1', 'A', 'B', 2, 0, home_keeper='k1'),
                make_match('m2', 'A', 'C', 2, 1, home_keeper='k1'),
            ],
            defense_awards={'B': 'p2'},
        )
        scores = score_session(session, players, rules)
        assert scores['k1'].team_bonus == 5
        assert scores['k2'].team_bonus == 1
        assert scores['p2'].defense_bonus == 3


class TestScoreRecords:
    """Coverage and totals."""

    def test_scenario_d_idle_roster_player(self, players, scenario_a_session):
        """A rostered player with no stats still appears, with only bonuses."""
        scores = score_session(scenario_a_session, players)
        record = scores['p2']
        assert (record.goals, record.assists, record.clean_sheets) == (0, 0, 0)
        assert record.total == record.team_bonus == 4
        assert record.team == 'A'

    def test_total_is_sum_of_components(self, players):
        session = keeper_session(
            [
                make_match('m1', 'A', 'B', 2, 0, home_keeper='k1'),
                make_match('m2', 'A', 'C', 0, 1, home_keeper='k2'),
            ],
            match_stats={'m1': {'p1': {'goals': 2, 'assists': 1}, 'k1': {'goals': 0, 'assists': 1}}},
            defense_awards={'A': 'k1'},
        )
        for record in score_session(session, players).values():
            assert record.total == (
                record.goals
                + record.assists
                + record.clean_sheets
                + record.defense_bonus
                + record.team_bonus
            )
        k1 = score_session(session, players)['k1']
        assert (k1.assists, k1.clean_sheets, k1.defense_bonus, k1.team_bonus) == (1, 1, 2, 4)
        assert k1.total == 8

    def test_player_without_roster(self, players, scenario_a_session):
        """Stats for someone not on a roster count, but earn no bonuses."""
        session = Session(
            rosters=scenario_a_session.rosters,
            matches=scenario_a_session.matches,
            match_stats={'m1': {'k3': {'goals': 1, 'assists': 0}}},
        )
        record = score_session(session, players)['k3']
        assert record.team is None
        assert (record.goals, record.team_bonus, record.total) == (1, 0, 1)

    def test_unknown_roster_id_named_placeholder(self, players):
        session = Session(rosters={'A': ['ghost']})
        assert score_session(session, players)['ghost'].name == '?'

    def test_switched_off_fourth_team_roster_still_scored(self, players):
        """Team D players keep their record and defense award, but get no team bonus."""
        session = Session(
            rosters={'A': ['p1'], 'B': ['p2'], 'D': ['p4']},
            matches=[make_match('m1', 'A', 'B', 1, 0)],
            defense_awards={'D': 'p4'},
        )
        scores = score_session(session, players)
        p4 = scores['p4']
        assert p4.team == 'D'
        assert (p4.defense_bonus, p4.team_bonus, p4.total) == (2, 0, 2)
        assert scores['p1'].team_bonus == 4

    def test_fourth_team_bonus_when_enabled(self, players):
        session = Session(
            rosters={'A': ['p1'], 'B': ['p2'], 'C': ['p3'], 'D': ['p4']},
            matches=[make_match('m1', 'D', 'A', 2, 0)],
            has_fourth_team=True,
        )
        scores = score_session(session, players)
        assert scores['p4'].team == 'D'
        assert scores['p4'].team_bonus == 4

    def test_malformed_session_shapes(self, players):
        session = Session(rosters={'A': 'p1', 'B': None}, matches=None, match_stats=None, defense_awards=None)
        assert score_session(session, players) == {}

    def test_input_not_mutated(self, players, scenario_a_session):
        before = copy.deepcopy(scenario_a_session)
        score_session(scenario_a_session, players)
        assert scenario_a_session == before

    def test_repeatable(self, players, scenario_a_session):
        assert score_session(scenario_a_session, players) == score_session(
            copy.deepcopy(scenario_a_session), list(players)
        )

    def test_keeper_wins(self, players):
        session = keeper_session(
            [
                make_match('m1', 'A', 'B', 2, 0, home_keeper='k1'),
                make_match('m2', 'B', 'A', 0, 1, away_keeper='Keeper Two'),
                make_match('m3', 'A', 'C', 1, 1, home_keeper='k1'),
            ]
        )
        assert keeper_wins(session, players) == {'k1': 1, 'k2': 1}

    def test_sorted_daily(self, players, scenario_a_session):
        board = sorted_daily(score_session(scenario_a_session, players))
        assert [r.player_id for r in board] == ['p1', 'p2', 'p5', 'p6', 'p3', 'p4']


@pytest.mark.parametrize('home_goals, away_goals, home_cs, away_cs', [(0, 0, 1, 1), (1, 0, 1, 0), (0, 2, 0, 1)])
def test_clean_sheet_sides(players, home_goals, away_goals, home_cs, away_cs):
    """The keeper whose side conceded nothing gets the clean sheet."""
    session = Session(
        rosters={'A': ['k1'], 'B': ['k2']},
        matches=[make_match('m1', 'A', 'B', home_goals, away_goals, home_keeper='k1', away_keeper='k2')],
    )
    scores = score_session(session, players)
    assert scores['k1'].clean_sheets == home_cs
    assert scores['k2'].clean_sheets == away_cs
