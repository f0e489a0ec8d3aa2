"""Unit tests for slot eligibility and lineup configuration."""

import pytest

from statdrop.models import Player, TeamSeasonSnapshot
from statdrop.positions import Position
from statdrop.slots import (
    SlotKind,
    credited_position,
    eligible_positions,
    expand_lineup_config,
    infer_lineup_config,
    is_flexible,
    lineup_slots_for,
    partition_slots,
    sanitize_lineup_config,
    sanitize_starting_slots,
    slot_kind,
)


class TestEligiblePositions:
    """Tests for which positions can fill a slot."""

    @pytest.mark.parametrize('slot', ['FLEX', 'WRRB', 'WRRBTE', 'WRRB_TE', 'RBWR', 'RBWRTE'])
    def test_offense_flex(self, slot):
        """Test offense flex aliases."""
        assert eligible_positions(slot) == {Position.RB, Position.WR, Position.TE}

    @pytest.mark.parametrize('slot', ['SUPER_FLEX', 'QBRBWRTE', 'QBRBWR', 'QBSF', 'SFLX'])
    def test_super_flex(self, slot):
        """Test super flex aliases."""
        assert eligible_positions(slot) == {Position.QB, Position.RB, Position.WR, Position.TE}

    @pytest.mark.parametrize('slot', ['IDP', 'IDPFLEX', 'IDP_FLEX', 'DFLEX', 'DL_LB_DB', 'DL_LB', 'LB_DB', 'DL_DB'])
    def test_idp_flex(self, slot):
        """Test IDP flex aliases."""
        assert eligible_positions(slot) == {Position.DL, Position.LB, Position.DB}

    def test_unknown_idp_token(self):
        """Test that unrecognized tokens containing IDP are IDP flex."""
        assert eligible_positions('IDP_WILD') == {Position.DL, Position.LB, Position.DB}
        assert slot_kind('MY_IDP') is SlotKind.IDP_FLEX

    def test_fixed_slots(self):
        """Test fixed slots are singletons."""
        for slot in ('QB', 'RB', 'WR', 'TE', 'K', 'DL', 'LB', 'DB'):
            assert eligible_positions(slot) == {Position(slot)}

    def test_unknown_slot_uses_normalized_value(self):
        """Test that other tokens become a singleton of their normalized position."""
        assert eligible_positions('DE') == {Position.DL}
        assert eligible_positions('XYZ') == {Position.UNK}

    @pytest.mark.parametrize('slot', ['BN', 'IR', 'TAXI', 'BENCH', 'TAXI_SLOT', 'reserve'])
    def test_non_starting_accepts_nobody(self, slot):
        """Test bench/IR/taxi slots."""
        assert eligible_positions(slot) == frozenset()
        assert slot_kind(slot) is SlotKind.NON_STARTING

    def test_case_insensitive(self):
        """Test lowercase slot tokens."""
        assert eligible_positions('flex') == eligible_positions('FLEX')


class TestCreditedPosition:
    """Tests for the position a starter's points count toward."""

    def test_fixed_slot_credits_slot_position(self):
        """Test that a fixed slot credits its own position regardless of player."""
        assert credited_position('WR', ['RB', 'WR'], 'RB') is Position.WR

    def test_flex_credits_first_eligible_candidate(self):
        """Test a RB/WR in FLEX with candidates [WR, RB] counts as WR."""
        assert credited_position('FLEX', ['WR', 'RB'], 'RB') is Position.WR

    def test_flex_skips_ineligible_candidates(self):
        """Test that candidates outside the slot's set are skipped."""
        assert credited_position('FLEX', ['QB', 'TE'], 'QB') is Position.TE

    def test_flex_falls_back_to_base(self):
        """Test fallback to the base position when nothing fits."""
        assert credited_position('IDP_FLEX', ['QB'], 'qb') is Position.QB

    def test_idp_flex_alias(self):
        """Test IDP flex crediting with raw position variants."""
        assert credited_position('DFLEX', ['OLB'], 'OLB') is Position.LB


class TestPartition:
    """Tests for splitting slots into fixed and flexible."""

    def test_partition_is_complete(self):
        """Test that every slot lands in exactly one list, order preserved."""
        slots = ['QB', 'FLEX', 'RB', 'RB', 'SUPER_FLEX', 'DL', 'IDP_FLEX', 'K']
        fixed, flexible = partition_slots(slots)
        assert fixed == ['QB', 'RB', 'RB', 'DL', 'K']
        assert flexible == ['FLEX', 'SUPER_FLEX', 'IDP_FLEX']
        assert sorted(fixed + flexible) == sorted(slots)

    def test_is_flexible(self):
        """Test flexibility flags."""
        assert is_flexible('FLEX')
        assert is_flexible('QBSF')
        assert not is_flexible('QB')
        assert not is_flexible('BN')


class TestLineupConfig:
    """Tests for slot lists and configurations."""

    def test_sanitize_starting_slots(self):
        """Test that bench, IR and taxi slots are dropped."""
        assert sanitize_starting_slots(['QB', 'BN', 'FLEX', 'IR', 'TAXI', 'bench']) == ['QB', 'FLEX']

    def test_sanitize_lineup_config(self):
        """Test that non-starting keys are dropped from a count map."""
        assert sanitize_lineup_config({'QB': 1, 'BN': 6, 'IR': 2, 'FLEX': 2}) == {'QB': 1, 'FLEX': 2}

    def test_expand_lineup_config(self):
        """Test expanding counts into an ordered slot list."""
        assert expand_lineup_config({'QB': 1, 'RB': 2, 'FLEX': 1, 'TE': 0}) == ['QB', 'RB', 'RB', 'FLEX']

    def test_infer_caps_at_three(self):
        """Test that inferred slots per position are capped."""
        roster = [Player(str(i), 'WR') for i in range(5)] + [Player('q1', 'QB'), Player('d1', 'DEF')]
        assert infer_lineup_config(roster) == {'QB': 1, 'WR': 3}

    def test_lineup_slots_prefers_league_list(self):
        """Test the league-wide slot list wins over the team config."""
        team = TeamSeasonSnapshot(roster_id=1, owner_id='o1', lineup_config={'QB': 1, 'RB': 2})
        assert lineup_slots_for(team, ['QB', 'FLEX', 'BN']) == ['QB', 'FLEX']

    def test_lineup_slots_uses_team_config(self):
        """Test the team's config when the league has no list."""
        team = TeamSeasonSnapshot(roster_id=1, owner_id='o1', lineup_config={'QB': 1, 'RB': 2})
        assert lineup_slots_for(team, []) == ['QB', 'RB', 'RB']

    def test_lineup_slots_inferred(self):
        """Test inference from the roster as a last resort."""
        team = TeamSeasonSnapshot(
            roster_id=1,
            owner_id='o1',
            roster=(Player('1', 'QB'), Player('2', 'RB'), Player('3', 'RB')),
        )
        assert lineup_slots_for(team) == ['QB', 'RB', 'RB']
