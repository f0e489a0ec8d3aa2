"""Unit tests for position normalization."""

import pytest

from statdrop.constants import POSITION_ALIASES
from statdrop.positions import Position, normalize, normalize_all


class TestNormalize:
    """Tests for raw position token normalization."""

    @pytest.mark.parametrize(
        'raw,expected',
        [
            ('QB', Position.QB),
            ('hb', Position.RB),
            (' WR ', Position.WR),
            ('PK', Position.K),
            ('DE', Position.DL),
            ('edge', Position.DL),
            ('OLB', Position.LB),
            ('MLB', Position.LB),
            ('CB', Position.DB),
            ('ss', Position.DB),
        ],
    )
    def test_aliases(self, raw, expected):
        """Test that variants collapse onto their canonical position."""
        assert normalize(raw) == expected

    @pytest.mark.parametrize('raw', [None, '', '   ', 'XYZ', 'DEF', 'D/ST', 'DST', 'IDP'])
    def test_unknown_tokens_map_to_unk(self, raw):
        """Test that empty, team-defense and unrecognized tokens become UNK."""
        assert normalize(raw) is Position.UNK

    def test_idempotent_over_all_tokens(self):
        """Test normalize(normalize(x)) == normalize(x) for every known token."""
        tokens = list(POSITION_ALIASES) + [p.value for p in Position] + ['junk', '', 'def']
        for token in tokens:
            once = normalize(token)
            assert normalize(once) == once
            assert normalize(once.value) == once

    def test_normalize_all_keeps_order(self):
        """Test that sequence normalization keeps order and duplicates."""
        assert normalize_all(['wr', 'RB', 'wr', None]) == [
            Position.WR,
            Position.RB,
            Position.WR,
            Position.UNK,
        ]


class TestPositionGroups:
    """Tests for offense/defense grouping."""

    def test_offense(self):
        """Test offensive positions."""
        for position in (Position.QB, Position.RB, Position.WR, Position.TE, Position.K):
            assert position.is_offense
            assert not position.is_defense

    def test_defense(self):
        """Test defensive positions."""
        for position in (Position.DL, Position.LB, Position.DB):
            assert position.is_defense
            assert not position.is_offense

    def test_unknown_is_neither(self):
        """Test that UNK counts toward neither side."""
        assert not Position.UNK.is_offense
        assert not Position.UNK.is_defense
