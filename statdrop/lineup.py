"""Greedy optimal-lineup solver."""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .positions import Position, normalize
from .slots import credited_position, eligible_positions, partition_slots

logger = logging.getLogger('statdrop.lineup')


@dataclass(frozen=True)
class Candidate:
    """A player available to fill a slot in a given week."""
    player_id: str
    points: float
    base_position: Position = Position.UNK
    alt_positions: tuple[Position, ...] = ()

    @classmethod
    def build(cls, player_id: str, points: float, position=None, alt_positions=()) -> 'Candidate':
        """Build a candidate from raw position tokens."""
        base = normalize(position)
        alts = tuple(p for p in (normalize(a) for a in alt_positions or ()) if p is not Position.UNK)
        return cls(player_id=str(player_id), points=float(points or 0.0), base_position=base, alt_positions=alts)

    @property
    def positions(self) -> tuple[Position, ...]:
        """Base position first, then alternates."""
        return (self.base_position,) + self.alt_positions

    def fits(self, allowed: frozenset[Position]) -> bool:
        return any(p in allowed for p in self.positions)


@dataclass
class SlotAssignment:
    """One filled slot."""
    slot: str
    player_id: str
    points: float
    position: Position  # credited position


@dataclass
class LineupResult:
    """Outcome of filling a list of slots."""
    assignments: list[SlotAssignment] = field(default_factory=list)
    total: float = 0.0
    offense_total: float = 0.0
    defense_total: float = 0.0
    position_totals: dict[str, float] = field(default_factory=dict)
    position_starts: dict[str, int] = field(default_factory=dict)
    unfilled_slots: list[str] = field(default_factory=list)

    @property
    def player_points(self) -> dict[str, float]:
        return {a.player_id: a.points for a in self.assignments}

    def credit(self, slot: str, player_id: str, points: float, position: Position) -> None:
        """Record a started player and roll their points into the totals."""
        self.assignments.append(SlotAssignment(slot, player_id, points, position))
        self.total += points
        if position.is_offense:
            self.offense_total += points
        elif position.is_defense:
            self.defense_total += points
        key = position.value
        self.position_totals[key] = self.position_totals.get(key, 0.0) + points
        self.position_starts[key] = self.position_starts.get(key, 0) + 1


def _ranked(candidates: Sequence[Candidate]) -> list[Candidate]:
    # Points descending, then player id ascending
    return sorted(candidates, key=lambda c: (-c.points, c.player_id))


def solve_lineup(candidates: Sequence[Candidate], slots: Sequence[str]) -> LineupResult:
    """
    Fill slots with the highest-scoring eligible players.

    Fixed slots are filled before flexible ones, each group in the order
    given. For every slot the best unused candidate whose base or alternate
    position is accepted by the slot is taken. A player fills at most one slot
    and slots nobody can fill are left empty.

    Args:
        candidates: Players available that week (duplicates by id are ignored)
        slots: Ordered starting slot tokens

    Returns:
        LineupResult with assignments in fill order

    Example:
        result = solve_lineup(
            [Candidate.build('100', 20, 'QB'), Candidate.build('101', 15, 'RB')],
            ['QB', 'FLEX'],
        )
        result.total  # 35.0
    """
    result = LineupResult()
    if not slots:
        return result

    seen: set[str] = set()
    pool = []
    for candidate in _ranked(candidates or ()):
        if candidate.player_id in seen:
            continue
        seen.add(candidate.player_id)
        pool.append(candidate)

    used: set[str] = set()
    fixed, flexible = partition_slots(slots)

    for slot in fixed + flexible:
        allowed = eligible_positions(slot)
        pick = None
        if allowed:
            for candidate in pool:
                if candidate.player_id not in used and candidate.fits(allowed):
                    pick = candidate
                    break
        if pick is None:
            result.unfilled_slots.append(slot)
            continue
        used.add(pick.player_id)
        position = credited_position(slot, pick.positions, pick.base_position)
        result.credit(slot, pick.player_id, pick.points, position)

    if result.unfilled_slots:
        logger.debug(f'Unfilled slots: {result.unfilled_slots}')
    return result
