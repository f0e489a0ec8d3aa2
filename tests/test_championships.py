"""Tests for championship recomputation."""

import logging

from conftest import make_entry, make_team
from statdrop.championships import (
    apply_computed_champions,
    recompute_championships,
    season_champion,
)
from statdrop.models import League, Player, SeasonRecord


def final_three_weeks_season():
    """
    Eight-team bracket in weeks 15-17 where the imported champion lost the final.

    Owner 'champ' wins 100-90 and 95-92, then loses 80-85 to 'rival'.
    """
    teams = tuple(
        make_team(r, owner, standing=r, roster=(Player(f'p{r}', 'QB'),), championships=1 if owner == 'champ' else 0)
        for r, owner in enumerate(['champ', 'rival', 'c', 'd', 'e', 'f', 'g', 'h'], start=1)
    )

    def pair(matchup_id, a, pa, b, pb):
        return [
            make_entry(a, matchup_id, pa, [f'p{a}'], {f'p{a}': pa}),
            make_entry(b, matchup_id, pb, [f'p{b}'], {f'p{b}': pb}),
        ]

    weeks = {
        15: tuple(pair(1, 1, 100, 8, 90) + pair(2, 2, 120, 7, 70) + pair(3, 3, 60, 6, 61) + pair(4, 4, 50, 5, 55)),
        16: tuple(pair(1, 1, 95, 6, 92) + pair(2, 2, 110, 5, 100)),
        17: tuple(pair(1, 1, 80, 2, 85)),
    }
    return SeasonRecord(
        season_id='2021',
        teams=teams,
        playoff_start_week=15,
        playoff_teams_count=8,
        matchups_by_week=weeks,
    )


class TestSeasonChampion:
    """Tests for deciding one season's champion."""

    def test_imported_flag_ignored(self, config):
        """Test [W 100-90, W 95-92, L 80-85] in weeks 15-17 is not a champion."""
        season = final_three_weeks_season()
        assert season_champion(season, config) == 'rival'

    def test_bracket_fixture(self, bracket_season, config):
        """Test the four-team fixture's champion."""
        assert season_champion(bracket_season, config) == 'o3'

    def test_latest_survivor_wins(self, config):
        """Test that with missing final data the survivor of the latest week wins."""
        teams = tuple(make_team(r, f'o{r}', standing=r) for r in (1, 2, 3, 4))
        weeks = {
            3: (
                make_entry(1, 1, 10.0),
                make_entry(4, 1, 5.0),
                make_entry(2, 2, 10.0),
                make_entry(3, 2, 5.0),
            ),
            4: (make_entry(1, 1, 10.0),),
            5: (),
        }
        season = SeasonRecord(
            season_id='2024', teams=teams, playoff_start_week=3, playoff_teams_count=4, matchups_by_week=weeks
        )
        assert season_champion(season, config) == 'o1'

    def test_ambiguous_is_none(self, config, caplog):
        """Test tied survivors leave the champion undetermined."""
        teams = tuple(make_team(r, f'o{r}', standing=r) for r in (1, 2, 3, 4))
        weeks = {
            3: (
                make_entry(1, 1, 10.0),
                make_entry(4, 1, 5.0),
                make_entry(2, 2, 10.0),
                make_entry(3, 2, 5.0),
            ),
        }
        season = SeasonRecord(
            season_id='2024', teams=teams, playoff_start_week=3, playoff_teams_count=4, matchups_by_week=weeks
        )
        with caplog.at_level(logging.WARNING, logger='statdrop.championships'):
            assert season_champion(season, config) is None
        assert 'ambiguous' in caplog.text

    def test_no_playoff_data(self, config):
        """Test a season without bracket games has no champion."""
        season = SeasonRecord(season_id='2024', teams=(make_team(1, 'a', standing=1),))
        assert season_champion(season, config) is None


class TestRecompute:
    """Tests for the league-wide championship report."""

    def test_report(self, league, config):
        """Test per-season champions, counts and discrepancies."""
        report = recompute_championships(league, config)
        assert report.per_season_champion == {'2022': 'o9', '2023': 'o3'}
        assert report.per_owner_count == {'o3': 1, 'o9': 1}
        assert [(d.season_id, d.imported_owner_ids, d.computed_owner_id) for d in report.discrepancies] == [
            ('2023', [], 'o3')
        ]

    def test_imported_discrepancy(self, config):
        """Test an imported champion who lost the final is reported."""
        league = League('L', seasons=(final_three_weeks_season(),))
        report = recompute_championships(league, config)
        assert report.per_owner_count == {'rival': 1}
        assert report.discrepancies[0].imported_owner_ids == ['champ']
        assert report.discrepancies[0].computed_owner_id == 'rival'

    def test_apply_returns_new_league(self, league, config):
        """Test computed champions are written to a copy, imports untouched."""
        report = recompute_championships(league, config)
        updated = apply_computed_champions(league, report)

        assert updated is not league
        assert updated.computed_championships == {'o3': 1, 'o9': 1}
        assert updated.season('2023').computed_champion_owner_id == 'o3'
        assert updated.season('2022').team_for_owner('o9').championships == 1
        assert league.computed_championships is None
        assert league.season('2023').computed_champion_owner_id is None
