"""Shared fixtures for engine tests."""

import pytest

from futsal_league.models import Match, Player, Session


def make_match(mid, home, away, home_goals, away_goals, home_keeper=None, away_keeper=None, seq=0):
    """Build a Match with positional shorthand."""
    return Match(
        id=mid,
        seq=seq,
        home=home,
        away=away,
        home_goals=home_goals,
        away_goals=away_goals,
        home_keeper=home_keeper,
        away_keeper=away_keeper,
    )


@pytest.fixture
def players():
    """Small league: six field players and three keepers."""
    return [
        Player(id='p1', name='Alpha'),
        Player(id='p2', name='Bravo'),
        Player(id='p3', name='Charlie'),
        Player(id='p4', name='Delta'),
        Player(id='p5', name='Echo'),
        Player(id='p6', name='Foxtrot'),
        Player(id='k1', name='Keeper One', position='keeper'),
        Player(id='k2', name='Keeper Two', position='keeper'),
        Player(id='k3', name='Keeper Three', position='keeper'),
    ]


@pytest.fixture
def scenario_a_session():
    """A beats B 3-2, B draws C 1-1, A vs C not played."""
    return Session(
        date='2025-03-09',
        rosters={'A': ['p1', 'p2'], 'B': ['p3', 'p4'], 'C': ['p5', 'p6']},
        matches=[
            make_match('m1', 'A', 'B', 3, 2, seq=1),
            make_match('m2', 'B', 'C', 1, 1, seq=2),
        ],
    )
