"""Shared builders for league test data."""

import pytest

from statdrop.models import League, MatchupEntry, Player, SeasonRecord, TeamSeasonSnapshot
from statdrop.schemas import EngineConfig


@pytest.fixture
def config():
    """Default engine configuration, independent of data/engine_config.json."""
    return EngineConfig()


def make_entry(roster_id, matchup_id, points, starters=None, players_points=None, **kwargs):
    return MatchupEntry(
        roster_id=roster_id,
        matchup_id=matchup_id,
        points=points,
        starters=tuple(starters) if starters is not None else None,
        players_points=players_points,
        **kwargs,
    )


def make_team(roster_id, owner_id, standing=0, roster=(), name=None, **kwargs):
    return TeamSeasonSnapshot(
        roster_id=roster_id,
        owner_id=owner_id,
        name=name or f'Team {owner_id}',
        roster=tuple(roster),
        league_standing=standing,
        **kwargs,
    )


def head_to_head_week(pairs):
    """
    Build one week's entries from (roster_a, points_a, roster_b, points_b) tuples.

    Each pair gets its own matchup id and a single QB starter scoring the
    team's points, so reported totals and resolved starters agree.
    """
    entries = []
    for matchup_id, (roster_a, points_a, roster_b, points_b) in enumerate(pairs, start=1):
        for roster_id, points in ((roster_a, points_a), (roster_b, points_b)):
            pid = f'qb{roster_id}'
            entries.append(make_entry(roster_id, matchup_id, points, [pid], {pid: points}))
    return tuple(entries)


def qb_roster(roster_id):
    return (Player(f'qb{roster_id}', 'QB'),)


@pytest.fixture
def bracket_season():
    """
    Four-team season: weeks 1-2 regular season, weeks 3-4 main bracket.

    Seeds by standing: o1, o2, o3, o4. Semifinals in week 3 (1 beats 4,
    3 upsets 2), final in week 4 (3 beats 1). Week 5 holds partial scores
    and is only dropped when this is a league's current season.
    """
    teams = tuple(
        make_team(r, f'o{r}', standing=r, roster=qb_roster(r), lineup_config={'QB': 1})
        for r in (1, 2, 3, 4)
    )
    matchups_by_week = {
        1: head_to_head_week([(1, 100, 2, 90), (3, 80, 4, 85)]),
        2: head_to_head_week([(1, 70, 3, 75), (2, 110, 4, 60)]),
        3: head_to_head_week([(1, 120, 4, 100), (2, 95, 3, 99)]),
        4: head_to_head_week([(1, 101, 3, 104), (2, 88, 4, 92)]),
        5: head_to_head_week([(1, 10, 2, 5), (3, 7, 4, 3)]),
    }
    return SeasonRecord(
        season_id='2023',
        teams=teams,
        playoff_start_week=3,
        playoff_teams_count=4,
        matchups_by_week=matchups_by_week,
    )


@pytest.fixture
def league(bracket_season):
    """Two-season league; owner o9 only played the completed 2022 season."""
    old_teams = (
        make_team(1, 'o1', standing=2, roster=qb_roster(1), lineup_config={'QB': 1}),
        make_team(2, 'o9', standing=1, roster=qb_roster(2), lineup_config={'QB': 1}, championships=1),
    )
    old_season = SeasonRecord(
        season_id='2022',
        teams=old_teams,
        playoff_start_week=2,
        playoff_teams_count=2,
        matchups_by_week={
            1: head_to_head_week([(1, 50, 2, 40)]),
            2: head_to_head_week([(1, 60, 2, 65)]),
        },
    )
    return League(league_id='L1', name='Test League', seasons=(bracket_season, old_season))


@pytest.fixture
def completed_league():
    """
    A finished 2021 season followed by a 2022 season in week 2.

    2021 runs weeks 1-3 with no playoff games yet (playoffs start in week 14),
    so its last week is an ordinary, completed game: o1 loses 50-60 and 40-45,
    then wins 90-80. In 2022 o1 wins week 1 10-5; week 2 is in progress.
    """
    def teams():
        return tuple(
            make_team(r, f'o{r}', standing=r, roster=qb_roster(r), lineup_config={'QB': 1}) for r in (1, 2)
        )

    past = SeasonRecord(
        season_id='2021',
        teams=teams(),
        playoff_start_week=14,
        playoff_teams_count=2,
        matchups_by_week={
            1: head_to_head_week([(1, 50, 2, 60)]),
            2: head_to_head_week([(1, 40, 2, 45)]),
            3: head_to_head_week([(1, 90, 2, 80)]),
        },
    )
    current = SeasonRecord(
        season_id='2022',
        teams=teams(),
        playoff_start_week=14,
        playoff_teams_count=2,
        matchups_by_week={
            1: head_to_head_week([(1, 10, 2, 5)]),
            2: head_to_head_week([(1, 3, 2, 1)]),
        },
    )
    return League(league_id='L2', name='Completed', seasons=(current, past))
