"""Unit tests for the optimal lineup solver."""

import pytest

from statdrop.lineup import Candidate, solve_lineup
from statdrop.positions import Position


def c(player_id, points, position, *alts):
    return Candidate.build(player_id, points, position, alts)


class TestSolveLineup:
    """Tests for greedy lineup filling."""

    def test_reconstruction_scenario(self):
        """Test QB + FLEX from a QB and two RBs picks the best two."""
        result = solve_lineup(
            [c('100', 20, 'QB'), c('101', 15, 'RB'), c('102', 8, 'RB')],
            ['QB', 'FLEX'],
        )
        assert result.player_points == {'100': 20.0, '101': 15.0}
        assert result.total == pytest.approx(35.0)
        assert result.unfilled_slots == []

    def test_fixed_slots_filled_before_flex(self):
        """Test that a flex listed first doesn't steal the only RB-eligible star."""
        result = solve_lineup(
            [c('rb1', 30, 'RB'), c('wr1', 10, 'WR')],
            ['FLEX', 'RB'],
        )
        by_slot = {a.slot: a.player_id for a in result.assignments}
        assert by_slot == {'RB': 'rb1', 'FLEX': 'wr1'}
        assert result.total == pytest.approx(40.0)

    def test_alternate_positions_are_eligible(self):
        """Test that a player's alternate position can fill a slot."""
        result = solve_lineup([c('x', 12, 'RB', 'WR')], ['WR'])
        assert result.assignments[0].player_id == 'x'
        assert result.assignments[0].position is Position.WR

    def test_player_used_once(self):
        """Test that no player fills two slots."""
        result = solve_lineup([c('a', 25, 'WR')], ['WR', 'FLEX'])
        assert len(result.assignments) == 1
        assert result.unfilled_slots == ['FLEX']
        assert result.total == pytest.approx(25.0)

    def test_tie_break_by_player_id(self):
        """Test equal points resolve to the lower player id."""
        result = solve_lineup([c('b', 10, 'WR'), c('a', 10, 'WR')], ['WR'])
        assert result.assignments[0].player_id == 'a'

    def test_offense_defense_split(self):
        """Test offense and defense totals use the credited position."""
        result = solve_lineup(
            [c('q', 20, 'QB'), c('d', 7, 'DE'), c('l', 9, 'OLB')],
            ['QB', 'DL', 'IDP_FLEX'],
        )
        assert result.offense_total == pytest.approx(20.0)
        assert result.defense_total == pytest.approx(16.0)
        assert result.position_totals == {'QB': 20.0, 'DL': 7.0, 'LB': 9.0}
        assert result.position_starts == {'QB': 1, 'DL': 1, 'LB': 1}

    def test_unfillable_slot_contributes_zero(self):
        """Test a slot with no eligible candidate."""
        result = solve_lineup([c('q', 20, 'QB')], ['QB', 'K'])
        assert result.total == pytest.approx(20.0)
        assert result.unfilled_slots == ['K']

    def test_unknown_position_never_fills(self):
        """Test that UNK candidates don't fill fixed or flex slots."""
        result = solve_lineup([c('u', 50, None)], ['QB', 'FLEX', 'SUPER_FLEX'])
        assert result.assignments == []
        assert result.total == 0.0

    def test_empty_inputs(self):
        """Test that empty candidates or slots give a zero result."""
        assert solve_lineup([], ['QB']).total == 0.0
        assert solve_lineup([c('q', 20, 'QB')], []).total == 0.0
        assert solve_lineup([], []).assignments == []

    def test_duplicate_candidate_ids_ignored(self):
        """Test a player listed twice is only considered once (best entry)."""
        result = solve_lineup([c('a', 5, 'WR'), c('a', 9, 'WR')], ['WR', 'WR'])
        assert result.player_points == {'a': 9.0}
