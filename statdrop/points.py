"""Resolve which players' points count for a team in a given week."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional

from .constants import EMPTY_STARTER_ID, INFERRED_SLOT_CAP
from .lineup import Candidate, LineupResult, SlotAssignment, solve_lineup
from .models import CachedPlayer, MatchupEntry, Player, SeasonRecord, TeamSeasonSnapshot, WeeklyScoreRecord
from .positions import Position, normalize
from .slots import lineup_slots_for

logger = logging.getLogger('statdrop.points')


class PointsSource(str, Enum):
    """Where a week's points came from, most to least trustworthy."""

    AUTHORITATIVE = 'authoritative'  # players_points + starters
    RECONSTRUCTED = 'reconstructed'  # players_points, starters rebuilt by the solver
    FALLBACK = 'fallback'  # roster weekly_scores
    DEGRADED = 'degraded'  # raw players_points, whole pool
    EMPTY = 'empty'


@dataclass
class ResolvedPoints:
    """Starter points for one team-week and how they were obtained."""
    source: PointsSource
    points: dict[str, float] = field(default_factory=dict)
    assignments: list[SlotAssignment] = field(default_factory=list)
    missing_starters: list[str] = field(default_factory=list)
    entry: Optional[MatchupEntry] = None

    @property
    def total(self) -> float:
        return sum(self.points.values())

    @property
    def is_empty(self) -> bool:
        return self.source is PointsSource.EMPTY


class PositionLookup:
    """
    Resolve a player id to (base, alternates).

    Roster players win; the external player cache is only consulted for ids
    not on the roster. Ids found in neither are reported as UNK and remembered
    in `unresolved`.
    """

    def __init__(
        self,
        roster: Iterable[Player] = (),
        player_cache: Optional[Mapping[str, CachedPlayer]] = None,
    ):
        self._roster = {p.player_id: p for p in roster or ()}
        self._cache = player_cache or {}
        self.unresolved: set[str] = set()

    def positions(self, player_id: str) -> tuple[Position, tuple[Position, ...]]:
        player = self._roster.get(player_id)
        if player is not None:
            return normalize(player.position), tuple(normalize(p) for p in player.alt_positions)

        cached = self._cache.get(player_id)
        if cached is not None:
            known = []
            for token in (cached.position,) + tuple(cached.fantasy_positions):
                position = normalize(token)
                if position is not Position.UNK and position not in known:
                    known.append(position)
            if known:
                return known[0], tuple(known[1:])

        if player_id not in self.unresolved:
            logger.debug(f'Could not resolve position for player {player_id}')
            self.unresolved.add(player_id)
        return Position.UNK, ()

    def candidate(self, player_id: str, points: float) -> Candidate:
        base, alts = self.positions(player_id)
        return Candidate.build(player_id, points, base, alts)


def dedupe_weekly_score(
    records: Iterable[WeeklyScoreRecord],
    matchup_id: Optional[int] = None,
    prefer_half_ppr: bool = True,
) -> Optional[WeeklyScoreRecord]:
    """
    Pick the one authoritative record among a player's duplicates for a week.

    A record tagged with the team's matchup id wins. Otherwise the highest
    value is kept. Duplicates are never summed.
    """
    records = list(records)
    if not records:
        return None
    if matchup_id is not None:
        tagged = [r for r in records if r.matchup_id == matchup_id]
        if tagged:
            records = tagged
    return max(records, key=lambda r: r.value(prefer_half_ppr))


def roster_week_points(
    roster: Iterable[Player],
    week: int,
    matchup_id: Optional[int] = None,
    prefer_half_ppr: bool = True,
) -> dict[str, float]:
    """Deduplicated weekly_scores of every rostered player for one week."""
    points = {}
    for player in roster or ():
        record = dedupe_weekly_score(player.scores_for_week(week), matchup_id, prefer_half_ppr)
        if record is not None:
            points[player.player_id] = record.value(prefer_half_ppr)
    return points


def real_starters(starters: Optional[Iterable[str]]) -> list[str]:
    """Starter ids with empty-slot placeholders removed."""
    return [s for s in starters or () if s and s != EMPTY_STARTER_ID]


def reconstruct_starters(
    players_points: Mapping[str, float],
    slots: list[str],
    lookup: PositionLookup,
) -> LineupResult:
    """Rebuild a plausible starting lineup from a players_points map."""
    candidates = [lookup.candidate(pid, pts) for pid, pts in players_points.items()]
    return solve_lineup(candidates, slots)


def resolve_week_points(
    team: TeamSeasonSnapshot,
    week: int,
    season: SeasonRecord,
    league_slots: Optional[list[str]] = None,
    player_cache: Optional[Mapping[str, CachedPlayer]] = None,
    prefer_half_ppr: bool = True,
    slot_cap: int = INFERRED_SLOT_CAP,
) -> ResolvedPoints:
    """
    Determine the starters' points for a team-week.

    Sources are tried in order:
        1. players_points restricted to the listed starters
        2. players_points with starters rebuilt by the lineup solver
        3. deduplicated roster weekly_scores
        4. players_points unfiltered (bench included)

    Args:
        team: Team snapshot for the season
        week: Week number
        season: Season holding the week's matchup entries
        league_slots: League-wide ordered slot list, if known
        player_cache: Read-only player cache for positions of non-roster ids
        prefer_half_ppr: Use half-PPR values from weekly_scores when present
        slot_cap: Per-position cap for an inferred lineup

    Returns:
        ResolvedPoints tagged with its source (EMPTY when nothing exists)
    """
    entry = season.entry_for(team.roster_id, week)
    players_points = dict(entry.players_points or {}) if entry else {}
    starters = real_starters(entry.starters) if entry else []

    if players_points and starters:
        points = {}
        missing = []
        for pid in starters:
            if pid in points:
                continue
            if pid in players_points:
                points[pid] = float(players_points[pid] or 0.0)
            else:
                points[pid] = 0.0
                missing.append(pid)
        if missing:
            logger.debug(
                f'Season {season.season_id} week {week} roster {team.roster_id}: '
                f'starters without points {missing}'
            )
        return ResolvedPoints(PointsSource.AUTHORITATIVE, points, missing_starters=missing, entry=entry)

    lookup = PositionLookup(team.roster, player_cache)

    if players_points:
        slots = lineup_slots_for(team, league_slots, cap=slot_cap)
        lineup = reconstruct_starters(players_points, slots, lookup)
        if lineup.assignments:
            return ResolvedPoints(
                PointsSource.RECONSTRUCTED,
                lineup.player_points,
                assignments=lineup.assignments,
                entry=entry,
            )

    matchup_id = entry.matchup_id if entry else None
    fallback = roster_week_points(team.roster, week, matchup_id, prefer_half_ppr)
    if fallback:
        return ResolvedPoints(PointsSource.FALLBACK, fallback, entry=entry)

    if players_points:
        logger.warning(
            f'Season {season.season_id} week {week} roster {team.roster_id}: '
            f'using unfiltered players_points ({len(players_points)} players)'
        )
        degraded = {pid: float(pts or 0.0) for pid, pts in players_points.items()}
        return ResolvedPoints(PointsSource.DEGRADED, degraded, entry=entry)

    return ResolvedPoints(PointsSource.EMPTY, entry=entry)
