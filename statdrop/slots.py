"""Lineup slot eligibility and credited-position assignment.

Slot tokens come straight from the fantasy platform, so several spellings
share one meaning (FLEX/WRRBTE/RBWR, SUPER_FLEX/QBSF/SFLX, IDP_FLEX/DFLEX,
...). Everything that needs to know which players can fill a slot, or which
position a starter's points count toward, goes through this module.
"""

from collections import Counter
from enum import Enum
from typing import Iterable, Mapping, Sequence

from .constants import (
    FIXED_SLOTS,
    IDP_FLEX_SLOTS,
    INFERRED_SLOT_CAP,
    NON_STARTING_SLOTS,
    OFFENSE_FLEX_SLOTS,
    STAT_POSITIONS,
    SUPER_FLEX_SLOTS,
)
from .positions import Position, normalize

OFFENSE_FLEX_SET = frozenset({Position.RB, Position.WR, Position.TE})
SUPER_FLEX_SET = frozenset({Position.QB, Position.RB, Position.WR, Position.TE})
IDP_FLEX_SET = frozenset({Position.DL, Position.LB, Position.DB})


class SlotKind(str, Enum):
    """How a slot token behaves when filling a lineup."""

    FIXED = 'fixed'
    FLEX = 'flex'
    SUPER_FLEX = 'super_flex'
    IDP_FLEX = 'idp_flex'
    NON_STARTING = 'non_starting'


_FLEXIBLE_KINDS = (SlotKind.FLEX, SlotKind.SUPER_FLEX, SlotKind.IDP_FLEX)


def _token(slot: str) -> str:
    return (slot or '').strip().upper()


def slot_kind(slot: str) -> SlotKind:
    """Classify a slot token (aliases included)."""
    token = _token(slot)
    if token in NON_STARTING_SLOTS:
        return SlotKind.NON_STARTING
    if token in FIXED_SLOTS:
        return SlotKind.FIXED
    if token in OFFENSE_FLEX_SLOTS:
        return SlotKind.FLEX
    if token in SUPER_FLEX_SLOTS:
        return SlotKind.SUPER_FLEX
    if token in IDP_FLEX_SLOTS or 'IDP' in token:
        return SlotKind.IDP_FLEX
    # Unknown tokens behave like a fixed slot for their normalized position
    return SlotKind.FIXED


def eligible_positions(slot: str) -> frozenset[Position]:
    """
    Return the canonical positions allowed to fill a slot.

    Args:
        slot: Slot token (e.g. 'QB', 'FLEX', 'IDP_FLEX', 'DE')

    Returns:
        Frozen set of positions. Non-starting slots (BN, IR, TAXI) accept
        nobody and return an empty set.
    """
    kind = slot_kind(slot)
    if kind is SlotKind.NON_STARTING:
        return frozenset()
    if kind is SlotKind.FLEX:
        return OFFENSE_FLEX_SET
    if kind is SlotKind.SUPER_FLEX:
        return SUPER_FLEX_SET
    if kind is SlotKind.IDP_FLEX:
        return IDP_FLEX_SET
    return frozenset({normalize(_token(slot))})


def is_flexible(slot: str) -> bool:
    """True for recognized flex aliases and any slot accepting several positions."""
    return slot_kind(slot) in _FLEXIBLE_KINDS or len(eligible_positions(slot)) > 1


def is_starting_slot(slot: str) -> bool:
    return slot_kind(slot) is not SlotKind.NON_STARTING


def credited_position(
    slot: str,
    candidate_positions: Iterable['str | Position'],
    base_position: 'str | Position | None',
) -> Position:
    """
    Decide which position a starter's points are credited to.

    Fixed slots always credit their own position. Flexible slots credit the
    first candidate position the slot accepts, so a RB/WR playing FLEX with
    candidates ['WR', 'RB'] counts as WR. When no candidate fits, the
    player's base position is used.

    Args:
        slot: Slot token the player filled
        candidate_positions: Player's positions, base first then alternates
        base_position: Player's base position

    Returns:
        Credited canonical position
    """
    allowed = eligible_positions(slot)
    base = normalize(base_position)

    if not is_flexible(slot):
        if len(allowed) == 1:
            return next(iter(allowed))
        return base

    for raw in candidate_positions or ():
        position = normalize(raw)
        if position in allowed:
            return position
    return base


def partition_slots(slots: Sequence[str]) -> tuple[list[str], list[str]]:
    """
    Split slots into (fixed, flexible), keeping their relative order.

    Every slot lands in exactly one of the two lists.
    """
    fixed: list[str] = []
    flexible: list[str] = []
    for slot in slots:
        if is_flexible(slot):
            flexible.append(slot)
        else:
            fixed.append(slot)
    return fixed, flexible


def sanitize_starting_slots(slots: Iterable[str] | None) -> list[str]:
    """Drop bench, IR and taxi tokens from an ordered slot list."""
    return [slot for slot in slots or () if is_starting_slot(slot)]


def sanitize_lineup_config(config: Mapping[str, int] | None) -> dict[str, int]:
    """Drop non-starting tokens from a slot-count map, merging duplicate keys."""
    sanitized: dict[str, int] = {}
    for slot, count in (config or {}).items():
        if not is_starting_slot(slot):
            continue
        sanitized[slot] = sanitized.get(slot, 0) + int(count or 0)
    return sanitized


def expand_lineup_config(config: Mapping[str, int] | None) -> list[str]:
    """Expand {'QB': 1, 'RB': 2, 'FLEX': 1} into ['QB', 'RB', 'RB', 'FLEX']."""
    slots: list[str] = []
    for slot, count in sanitize_lineup_config(config).items():
        if count > 0:
            slots.extend([slot] * count)
    return slots


def infer_lineup_config(roster, cap: int = INFERRED_SLOT_CAP) -> dict[str, int]:
    """
    Estimate a lineup configuration from the positions seen on a roster.

    Each canonical position gets one slot per rostered player, capped at
    `cap`. Players whose position can't be resolved don't create slots.

    Args:
        roster: Iterable of Player objects
        cap: Maximum slots per position

    Returns:
        Slot-count map ordered QB, RB, WR, TE, K, DL, LB, DB
    """
    counts = Counter(normalize(player.position) for player in roster or ())
    config = {}
    for position in STAT_POSITIONS:
        count = counts.get(Position(position), 0)
        if count:
            config[position] = min(count, cap)
    return config


def lineup_slots_for(
    team,
    league_slots: Sequence[str] | None = None,
    cap: int = INFERRED_SLOT_CAP,
) -> list[str]:
    """
    Ordered starting slots for a team.

    Preference order: the league-wide ordered slot list, the team's own
    slot-count map, then a configuration inferred from its roster.
    """
    ordered = sanitize_starting_slots(league_slots)
    if ordered:
        return ordered
    if team is None:
        return []
    if team.lineup_config:
        expanded = expand_lineup_config(team.lineup_config)
        if expanded:
            return expanded
    return expand_lineup_config(infer_lineup_config(team.roster, cap=cap))
