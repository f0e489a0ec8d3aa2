"""Fold per-week results into season and all-time owner statistics."""

import logging
from typing import Collection, Mapping, Optional

from .bracket import main_bracket_matchups, playoff_seeds
from .championships import season_champion
from .config import get_config
from .metrics import management_percent, per_unit
from .models import (
    CachedPlayer,
    H2HMatchDetail,
    H2HRecord,
    League,
    OwnerAggregate,
    PlayoffAggregate,
    SeasonRecord,
    SeasonTotals,
    TeamSeasonSnapshot,
)
from .points import PointsSource
from .schemas import EngineConfig
from .weekly import WeekManagement, compute_week, regular_season_weeks, season_weeks

logger = logging.getLogger('statdrop.aggregator')

# Sources where a starting lineup is known rather than guessed from the pool
_LINEUP_SOURCES = (PointsSource.AUTHORITATIVE, PointsSource.RECONSTRUCTED)


class WeekBook:
    """
    Memoized compute_week results for one aggregation run.

    Head-to-head and playoff stats look at the same team-weeks as the season
    totals; this keeps each one computed once.
    """

    def __init__(
        self,
        league_slots: Optional[list[str]] = None,
        player_cache: Optional[Mapping[str, CachedPlayer]] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.league_slots = list(league_slots or [])
        self.player_cache = player_cache
        self.config = config or get_config()
        self._weeks: dict[tuple[str, int, int], WeekManagement] = {}

    def week(self, team: TeamSeasonSnapshot, week: int, season: SeasonRecord) -> WeekManagement:
        key = (season.season_id, team.roster_id, week)
        if key not in self._weeks:
            self._weeks[key] = compute_week(
                team, week, season, self.league_slots, self.player_cache, self.config
            )
        return self._weeks[key]


def _book_for(league_slots, player_cache, config, book: Optional[WeekBook]) -> WeekBook:
    if book is not None:
        return book
    return WeekBook(league_slots, player_cache, config)


def _team_points(book: WeekBook, team: TeamSeasonSnapshot, week: int, season: SeasonRecord) -> float:
    """Reported entry total when present, else the resolved starters' total."""
    entry = season.entry_for(team.roster_id, week)
    if entry is not None and entry.points is not None:
        return entry.points
    return book.week(team, week, season).actual_total


def _opponent(season: SeasonRecord, team: TeamSeasonSnapshot, week: int) -> Optional[TeamSeasonSnapshot]:
    entry = season.entry_for(team.roster_id, week)
    if entry is None:
        return None
    opponent_entry = season.opponent_entry(entry, week)
    if opponent_entry is None:
        return None
    return season.team_for_roster(opponent_entry.roster_id)


def _sorted_dict(values: dict) -> dict:
    return dict(sorted(values.items()))


def aggregate_season(
    team: TeamSeasonSnapshot,
    season: SeasonRecord,
    league_slots: Optional[list[str]] = None,
    player_cache: Optional[Mapping[str, CachedPlayer]] = None,
    config: Optional[EngineConfig] = None,
    book: Optional[WeekBook] = None,
    current: bool = False,
) -> SeasonTotals:
    """
    Regular-season totals for one team.

    Every regular-season week is recomputed from matchup data. When the
    season has no weekly data for the team the snapshot's imported totals
    are used instead.

    Args:
        team: Team snapshot
        season: Season record
        league_slots: League-wide ordered slot list
        player_cache: Read-only player cache
        config: Engine configuration (default: get_config())
        book: Shared week cache for a multi-season run
        current: The season is the league's latest, so its in-progress week
            is left out

    Returns:
        SeasonTotals for the team
    """
    book = _book_for(league_slots, player_cache, config, book)
    totals = SeasonTotals(
        season_id=season.season_id,
        owner_id=team.owner_id,
        roster_id=team.roster_id,
        team_name=team.name,
        waiver_moves=team.waiver_moves,
        faab_spent=team.faab_spent,
        trades_completed=team.trades_completed,
        imported_championships=team.championships,
    )

    position_totals: dict[str, float] = {}
    position_starts: dict[str, int] = {}
    source_counts: dict[str, int] = {}
    lineup_starts: dict[str, int] = {}

    for week in regular_season_weeks(season, team, book.config, current=current):
        wm = book.week(team, week, season)
        if wm.is_empty:
            continue

        totals.weeks_played += 1
        totals.points_for += wm.actual_total
        totals.max_points_for += wm.max_total
        totals.offensive_points_for += wm.actual_offense
        totals.max_offensive_points_for += wm.max_offense
        totals.defensive_points_for += wm.actual_defense
        totals.max_defensive_points_for += wm.max_defense
        for position, points in wm.position_totals.items():
            position_totals[position] = position_totals.get(position, 0.0) + points
        for position, starts in wm.position_starts.items():
            position_starts[position] = position_starts.get(position, 0) + starts
        source_counts[wm.source.value] = source_counts.get(wm.source.value, 0) + 1
        if wm.source in _LINEUP_SOURCES:
            totals.starter_weeks += 1
            for position, starts in wm.position_starts.items():
                lineup_starts[position] = lineup_starts.get(position, 0) + starts

        points = _team_points(book, team, week, season)
        totals.highest_points_in_game = max(totals.highest_points_in_game, points)

        opponent = _opponent(season, team, week)
        if opponent is None:
            continue
        opponent_points = _team_points(book, opponent, week, season)
        if points == 0 and opponent_points == 0:
            continue
        totals.points_against += opponent_points
        totals.most_points_against_in_game = max(totals.most_points_against_in_game, opponent_points)
        if points > opponent_points:
            totals.wins += 1
        elif points < opponent_points:
            totals.losses += 1
        else:
            totals.ties += 1

    if totals.weeks_played == 0:
        if team.has_imported_totals:
            logger.debug(
                f'Season {season.season_id} roster {team.roster_id}: no weekly data, using imported totals'
            )
        totals.from_imported_totals = True
        totals.points_for = team.points_for or 0.0
        totals.max_points_for = team.max_points_for or 0.0
        totals.offensive_points_for = team.offensive_points_for or 0.0
        totals.max_offensive_points_for = team.max_offensive_points_for or 0.0
        totals.defensive_points_for = team.defensive_points_for or 0.0
        totals.max_defensive_points_for = team.max_defensive_points_for or 0.0
        totals.points_against = team.points_against or 0.0
        totals.wins, totals.losses, totals.ties = team.wins, team.losses, team.ties

    totals.management_percent = management_percent(totals.points_for, totals.max_points_for)
    totals.offensive_management_percent = management_percent(
        totals.offensive_points_for, totals.max_offensive_points_for
    )
    totals.defensive_management_percent = management_percent(
        totals.defensive_points_for, totals.max_defensive_points_for
    )
    totals.position_totals = _sorted_dict(position_totals)
    totals.position_starts = _sorted_dict(position_starts)
    totals.source_counts = _sorted_dict(source_counts)
    totals.starter_position_counts = _sorted_dict(lineup_starts)
    totals.position_starters_per_week = {
        p: per_unit(starts, totals.starter_weeks) for p, starts in totals.starter_position_counts.items()
    }
    return totals


def head_to_head(
    owner_id: str,
    league: League,
    league_slots: Optional[list[str]] = None,
    player_cache: Optional[Mapping[str, CachedPlayer]] = None,
    config: Optional[EngineConfig] = None,
    book: Optional[WeekBook] = None,
    opponent_ids: Optional[Collection[str]] = None,
) -> tuple[dict[str, H2HRecord], dict[str, list[H2HMatchDetail]]]:
    """
    Head-to-head records and game details against opponent owners.

    Every played week counts, playoffs included; only the current season's
    in-progress week is left out. Each pairing (matchup id + week) counts
    once. Games where both sides scored 0 haven't been played and are
    skipped. With `opponent_ids` only games against those owners are kept.

    Returns:
        Tuple of (records, details), both keyed by opponent owner id
    """
    if league_slots is None:
        league_slots = list(league.starting_lineup)
    book = _book_for(league_slots, player_cache, config, book)
    records: dict[str, H2HRecord] = {}
    details: dict[str, list[H2HMatchDetail]] = {}

    for season in league.sorted_seasons():
        team = season.team_for_owner(owner_id)
        if team is None:
            continue
        exclude = book.config.exclude_in_progress_week and league.is_current(season)
        seen: set[tuple[int, int]] = set()
        for week in season_weeks(season, team, exclude):
            entry = season.entry_for(team.roster_id, week)
            opponent = _opponent(season, team, week)
            if entry is None or opponent is None or (entry.matchup_id, week) in seen:
                continue
            if opponent_ids is not None and opponent.owner_id not in opponent_ids:
                continue
            seen.add((entry.matchup_id, week))

            points = _team_points(book, team, week, season)
            opponent_points = _team_points(book, opponent, week, season)
            if points == 0 and opponent_points == 0:
                continue

            mine = book.week(team, week, season)
            theirs = book.week(opponent, week, season)
            mgmt = management_percent(mine.actual_total, mine.max_total)
            opponent_mgmt = management_percent(theirs.actual_total, theirs.max_total)

            if points > opponent_points:
                result = 'W'
            elif points < opponent_points:
                result = 'L'
            else:
                result = 'T'

            record = records.setdefault(opponent.owner_id, H2HRecord())
            record.games += 1
            record.points_for += points
            record.points_against += opponent_points
            record.sum_mgmt_for += mgmt
            record.sum_mgmt_against += opponent_mgmt
            if result == 'W':
                record.wins += 1
            elif result == 'L':
                record.losses += 1
            else:
                record.ties += 1

            details.setdefault(opponent.owner_id, []).append(
                H2HMatchDetail(
                    season_id=season.season_id,
                    week=week,
                    matchup_id=entry.matchup_id,
                    roster_id=team.roster_id,
                    opponent_roster_id=opponent.roster_id,
                    points=points,
                    opponent_points=opponent_points,
                    max_points=mine.max_total,
                    opponent_max_points=theirs.max_total,
                    management_percent=mgmt,
                    opponent_management_percent=opponent_mgmt,
                    result=result,
                )
            )

    return _sorted_dict(records), _sorted_dict(details)


def aggregate_playoffs(
    owner_id: str,
    league: League,
    league_slots: Optional[list[str]] = None,
    player_cache: Optional[Mapping[str, CachedPlayer]] = None,
    config: Optional[EngineConfig] = None,
    book: Optional[WeekBook] = None,
    champions: Optional[Mapping[str, Optional[str]]] = None,
) -> PlayoffAggregate:
    """
    Main-bracket playoff totals across all seasons.

    Only games on the owner's path through the main bracket count;
    consolation games after elimination are ignored.

    Args:
        owner_id: Persistent owner identity
        league: League with its season history
        league_slots: League-wide ordered slot list (default: league.starting_lineup)
        player_cache: Read-only player cache
        config: Engine configuration (default: get_config())
        book: Shared week cache
        champions: Precomputed season_id -> champion owner id

    Returns:
        PlayoffAggregate (all zeros if the owner never qualified)
    """
    if league_slots is None:
        league_slots = list(league.starting_lineup)
    book = _book_for(league_slots, player_cache, config, book)
    playoffs = PlayoffAggregate()

    for season in league.sorted_seasons():
        team = season.team_for_owner(owner_id)
        if team is None:
            continue
        if team.roster_id in {t.roster_id for t in playoff_seeds(season, book.config)}:
            playoffs.seasons_qualified.append(season.season_id)

        for game in main_bracket_matchups(owner_id, season, book.config):
            wm = book.week(team, game.week, season)
            playoffs.weeks += 1
            if wm.is_empty:
                playoffs.points_for += game.points
            else:
                playoffs.points_for += wm.actual_total
                playoffs.max_points_for += wm.max_total
                playoffs.offensive_points_for += wm.actual_offense
                playoffs.max_offensive_points_for += wm.max_offense
                playoffs.defensive_points_for += wm.actual_defense
                playoffs.max_defensive_points_for += wm.max_defense
            if game.is_win:
                playoffs.wins += 1
            elif game.is_loss:
                playoffs.losses += 1

        if champions is not None:
            champion = champions.get(season.season_id)
        else:
            champion = season_champion(season, book.config)
        if champion == owner_id:
            playoffs.champion_seasons.append(season.season_id)

    playoffs.management_percent = management_percent(playoffs.points_for, playoffs.max_points_for)
    playoffs.offensive_management_percent = management_percent(
        playoffs.offensive_points_for, playoffs.max_offensive_points_for
    )
    playoffs.defensive_management_percent = management_percent(
        playoffs.defensive_points_for, playoffs.max_defensive_points_for
    )
    playoffs.ppw = per_unit(playoffs.points_for, playoffs.weeks)
    playoffs.offensive_ppw = per_unit(playoffs.offensive_points_for, playoffs.weeks)
    playoffs.defensive_ppw = per_unit(playoffs.defensive_points_for, playoffs.weeks)
    return playoffs


def aggregate_owner(
    owner_id: str,
    league: League,
    player_cache: Optional[Mapping[str, CachedPlayer]] = None,
    config: Optional[EngineConfig] = None,
    book: Optional[WeekBook] = None,
    champions: Optional[Mapping[str, Optional[str]]] = None,
) -> Optional[OwnerAggregate]:
    """
    All-time statistics for one owner across every season they played.

    Args:
        owner_id: Persistent owner identity
        league: League with its season history
        player_cache: Read-only player cache
        config: Engine configuration (default: get_config())
        book: Shared week cache
        champions: Precomputed season_id -> champion owner id

    Returns:
        OwnerAggregate, or None if the owner appears in no season
    """
    seasons = [s for s in league.sorted_seasons() if s.team_for_owner(owner_id) is not None]
    if not seasons:
        return None

    book = _book_for(list(league.starting_lineup), player_cache, config, book)
    if champions is None:
        champions = {s.season_id: season_champion(s, book.config) for s in seasons}

    latest_team = seasons[-1].team_for_owner(owner_id)
    agg = OwnerAggregate(owner_id=owner_id, latest_display_name=latest_team.name or owner_id)

    position_totals: dict[str, float] = {}
    position_starts: dict[str, int] = {}
    starter_counts: dict[str, int] = {}

    for season in seasons:
        team = season.team_for_owner(owner_id)
        totals = aggregate_season(team, season, book=book, current=league.is_current(season))
        agg.seasons.append(totals)
        agg.seasons_included.append(season.season_id)

        agg.weeks_played += totals.weeks_played
        agg.total_points_for += totals.points_for
        agg.total_max_points_for += totals.max_points_for
        agg.total_offensive_points_for += totals.offensive_points_for
        agg.total_max_offensive_points_for += totals.max_offensive_points_for
        agg.total_defensive_points_for += totals.defensive_points_for
        agg.total_max_defensive_points_for += totals.max_defensive_points_for
        agg.total_points_against += totals.points_against
        agg.wins += totals.wins
        agg.losses += totals.losses
        agg.ties += totals.ties
        agg.starter_weeks += totals.starter_weeks
        agg.highest_points_in_game = max(agg.highest_points_in_game, totals.highest_points_in_game)
        agg.most_points_against_in_game = max(
            agg.most_points_against_in_game, totals.most_points_against_in_game
        )
        agg.most_points_against_season = max(agg.most_points_against_season, totals.points_against)
        agg.waiver_moves += totals.waiver_moves
        agg.faab_spent += totals.faab_spent
        agg.trades_completed += totals.trades_completed
        agg.imported_championships += totals.imported_championships
        if champions.get(season.season_id) == owner_id:
            agg.championships += 1

        for position, points in totals.position_totals.items():
            position_totals[position] = position_totals.get(position, 0.0) + points
        for position, starts in totals.position_starts.items():
            position_starts[position] = position_starts.get(position, 0) + starts
        for position, starts in totals.starter_position_counts.items():
            starter_counts[position] = starter_counts.get(position, 0) + starts

    agg.management_percent = management_percent(agg.total_points_for, agg.total_max_points_for)
    agg.offensive_management_percent = management_percent(
        agg.total_offensive_points_for, agg.total_max_offensive_points_for
    )
    agg.defensive_management_percent = management_percent(
        agg.total_defensive_points_for, agg.total_max_defensive_points_for
    )
    agg.team_ppw = per_unit(agg.total_points_for, agg.weeks_played)
    agg.offensive_ppw = per_unit(agg.total_offensive_points_for, agg.weeks_played)
    agg.defensive_ppw = per_unit(agg.total_defensive_points_for, agg.weeks_played)

    agg.position_totals = _sorted_dict(position_totals)
    agg.position_starts = _sorted_dict(position_starts)
    # Per-week and per-start averages use different denominators
    agg.position_ppw = {p: per_unit(pts, agg.weeks_played) for p, pts in agg.position_totals.items()}
    agg.position_per_start = {
        p: per_unit(pts, agg.position_starts.get(p, 0)) for p, pts in agg.position_totals.items()
    }
    agg.starter_position_counts = _sorted_dict(starter_counts)
    agg.position_starters_per_week = {
        p: per_unit(starts, agg.starter_weeks) for p, starts in agg.starter_position_counts.items()
    }
    agg.faab_per_move = per_unit(agg.faab_spent, agg.waiver_moves)
    agg.trades_per_season = per_unit(agg.trades_completed, len(agg.seasons_included))

    # Rivalries are tracked against the current franchises only
    agg.head_to_head, agg.head_to_head_details = head_to_head(
        owner_id, league, book=book, opponent_ids=set(league.current_owner_ids)
    )
    agg.playoffs = aggregate_playoffs(owner_id, league, book=book, champions=champions)
    agg.playoff_berths = len(agg.playoffs.seasons_qualified)
    return agg


def build_all_time(
    league: League,
    player_cache: Optional[Mapping[str, CachedPlayer]] = None,
    config: Optional[EngineConfig] = None,
) -> dict[str, OwnerAggregate]:
    """
    All-time aggregates for the league's current franchises.

    Owners of the latest season are aggregated over every season they appear
    in. The result is rebuilt from scratch and keyed in sorted owner order, so
    repeated runs over the same league serialize identically.

    Example:
        stats = build_all_time(league)
        for owner_id, agg in stats.items():
            print(owner_id, agg.record, f'{agg.management_percent:.2f}%')
    """
    book = WeekBook(list(league.starting_lineup), player_cache, config)
    champions = {s.season_id: season_champion(s, book.config) for s in league.sorted_seasons()}

    result: dict[str, OwnerAggregate] = {}
    for owner_id in sorted(set(league.current_owner_ids)):
        agg = aggregate_owner(owner_id, league, book=book, champions=champions)
        if agg is not None:
            result[owner_id] = agg
    logger.info(f'Built all-time stats for {len(result)} owners over {len(league.seasons)} seasons')
    return result
