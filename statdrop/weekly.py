"""Per-week actual vs. optimal lineup for one team."""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .config import get_config
from .constants import EMPTY_STARTER_ID
from .lineup import LineupResult, solve_lineup
from .metrics import delta, management_percent
from .models import CachedPlayer, SeasonRecord, TeamSeasonSnapshot
from .points import PointsSource, PositionLookup, ResolvedPoints, resolve_week_points, roster_week_points
from .schemas import EngineConfig
from .slots import credited_position, lineup_slots_for

logger = logging.getLogger('statdrop.weekly')

# Float noise allowed when comparing greedy max against the actual total
_EPSILON = 1e-9


@dataclass
class WeekManagement:
    """A team's actual and maximum points for one week."""
    week: int
    source: PointsSource
    actual_total: float = 0.0
    actual_offense: float = 0.0
    actual_defense: float = 0.0
    max_total: float = 0.0
    max_offense: float = 0.0
    max_defense: float = 0.0
    position_totals: dict[str, float] = field(default_factory=dict)
    position_starts: dict[str, int] = field(default_factory=dict)
    missing_starters: list[str] = field(default_factory=list)
    max_floored: bool = False  # greedy max fell short and the actual lineup was used

    @property
    def management_percent(self) -> float:
        return management_percent(self.actual_total, self.max_total)

    @property
    def offensive_management_percent(self) -> float:
        return management_percent(self.actual_offense, self.max_offense)

    @property
    def defensive_management_percent(self) -> float:
        return management_percent(self.actual_defense, self.max_defense)

    @property
    def is_empty(self) -> bool:
        return self.source is PointsSource.EMPTY


@dataclass
class WeekPoint:
    """One point of a weekly management series."""
    week: int
    management_percent: float
    delta: float
    source: PointsSource


def season_weeks(
    season: SeasonRecord,
    team: Optional[TeamSeasonSnapshot] = None,
    exclude_in_progress: bool = False,
) -> list[int]:
    """
    Weeks with data for a season, in ascending order.

    Weeks come from the season's matchup entries, or from the team's roster
    scores when the season has none. Pass `exclude_in_progress` only for the
    league's current season: its latest week is then treated as still in
    progress and dropped when more than one week exists. Completed seasons
    keep every week.
    """
    weeks = set(season.matchups_by_week)
    if not weeks and team is not None:
        weeks = {s.week for p in team.roster for s in p.weekly_scores}
    ordered = sorted(weeks)
    if exclude_in_progress and len(ordered) > 1:
        ordered = ordered[:-1]
    return ordered


def regular_season_weeks(
    season: SeasonRecord,
    team: Optional[TeamSeasonSnapshot] = None,
    config: Optional[EngineConfig] = None,
    current: bool = False,
) -> list[int]:
    """Weeks before the playoffs; a current season also drops its in-progress week."""
    config = config or get_config()
    start = season.playoff_start_week or config.default_playoff_start_week
    weeks = season_weeks(season, team, current and config.exclude_in_progress_week)
    return [w for w in weeks if w < start]


def _actual_lineup(
    resolved: ResolvedPoints,
    slots: list[str],
    lookup: PositionLookup,
) -> LineupResult:
    """Credit each counted player to a position according to how they started."""
    actual = LineupResult()

    if resolved.source is PointsSource.AUTHORITATIVE:
        entry = resolved.entry
        player_slots = entry.player_slots or {}
        # Starters are positional: index i played slots[i] ("0" keeps its place)
        for idx, pid in enumerate(entry.starters or ()):
            if pid not in resolved.points or any(a.player_id == pid for a in actual.assignments):
                continue
            slot = player_slots.get(pid) or (slots[idx] if idx < len(slots) else None)
            base, alts = lookup.positions(pid)
            position = credited_position(slot, (base,) + alts, base) if slot else base
            actual.credit(slot or '', pid, resolved.points[pid], position)
        return actual

    if resolved.source is PointsSource.RECONSTRUCTED:
        for assignment in resolved.assignments:
            actual.credit(assignment.slot, assignment.player_id, assignment.points, assignment.position)
        return actual

    for pid in sorted(resolved.points):
        base, _ = lookup.positions(pid)
        actual.credit('', pid, resolved.points[pid], base)
    return actual


def _candidate_points(
    team: TeamSeasonSnapshot,
    week: int,
    resolved: ResolvedPoints,
    prefer_half_ppr: bool,
) -> dict[str, float]:
    entry = resolved.entry
    players_points = dict(entry.players_points or {}) if entry else {}

    pool: dict[str, float] = {}
    if not players_points:
        matchup_id = entry.matchup_id if entry else None
        pool.update(roster_week_points(team.roster, week, matchup_id, prefer_half_ppr))

    ids = list(players_points)
    if entry is not None:
        ids.extend(entry.starters or ())
        ids.extend(entry.players or ())
    ids.extend(p.player_id for p in team.roster)

    for pid in ids:
        if not pid or pid == EMPTY_STARTER_ID:
            continue
        if pid in resolved.points:
            pool[pid] = resolved.points[pid]
        elif pid in players_points:
            pool[pid] = float(players_points[pid] or 0.0)
        else:
            pool.setdefault(pid, 0.0)
    return pool


def compute_week(
    team: TeamSeasonSnapshot,
    week: int,
    season: SeasonRecord,
    league_slots: Optional[list[str]] = None,
    player_cache: Optional[Mapping[str, CachedPlayer]] = None,
    config: Optional[EngineConfig] = None,
) -> WeekManagement:
    """
    Compute actual and optimal points for one team-week.

    Actual points come from the points resolver and are credited by slot. The
    optimal lineup is solved over the week's whole player pool. The reported
    maximum is never below the actual total.

    Args:
        team: Team snapshot
        week: Week number
        season: Season containing the week
        league_slots: League-wide ordered slot list, if any
        player_cache: Read-only player cache
        config: Engine configuration (default: get_config())

    Returns:
        WeekManagement for the week (source EMPTY when there was no data)

    Example:
        wm = compute_week(team, 3, season)
        print(f'{wm.management_percent:.2f}%')
    """
    config = config or get_config()
    resolved = resolve_week_points(
        team,
        week,
        season,
        league_slots=league_slots,
        player_cache=player_cache,
        prefer_half_ppr=config.prefer_half_ppr,
        slot_cap=config.inferred_slot_cap,
    )
    if resolved.is_empty:
        return WeekManagement(week=week, source=resolved.source)

    lookup = PositionLookup(team.roster, player_cache)
    slots = lineup_slots_for(team, league_slots, cap=config.inferred_slot_cap)

    actual = _actual_lineup(resolved, slots, lookup)
    pool = _candidate_points(team, week, resolved, config.prefer_half_ppr)
    optimal = solve_lineup([lookup.candidate(pid, pts) for pid, pts in pool.items()], slots)

    floored = optimal.total + _EPSILON < actual.total
    if floored:
        logger.debug(
            f'Season {season.season_id} week {week} roster {team.roster_id}: '
            f'greedy max {optimal.total:.2f} below actual {actual.total:.2f}, using actual lineup'
        )
        optimal = actual

    return WeekManagement(
        week=week,
        source=resolved.source,
        actual_total=actual.total,
        actual_offense=actual.offense_total,
        actual_defense=actual.defense_total,
        max_total=optimal.total,
        max_offense=optimal.offense_total,
        max_defense=optimal.defense_total,
        position_totals=dict(actual.position_totals),
        position_starts=dict(actual.position_starts),
        missing_starters=list(resolved.missing_starters),
        max_floored=floored,
    )


def management_series(
    team: TeamSeasonSnapshot,
    season: SeasonRecord,
    league_slots: Optional[list[str]] = None,
    player_cache: Optional[Mapping[str, CachedPlayer]] = None,
    config: Optional[EngineConfig] = None,
    weeks: Optional[list[int]] = None,
    current: bool = False,
) -> list[WeekPoint]:
    """
    Weekly management percentages with week-over-week deltas.

    Weeks without data are skipped. The first point's delta is 0. `current`
    marks the league's latest season, whose in-progress week is left out.
    """
    config = config or get_config()
    if weeks is None:
        weeks = season_weeks(season, team, current and config.exclude_in_progress_week)

    series: list[WeekPoint] = []
    prior: Optional[float] = None
    for week in sorted(weeks):
        wm = compute_week(team, week, season, league_slots, player_cache, config)
        if wm.is_empty:
            continue
        current = wm.management_percent
        series.append(
            WeekPoint(
                week=week,
                management_percent=current,
                delta=delta(current, prior) if prior is not None else 0.0,
                source=wm.source,
            )
        )
        prior = current
    return series
