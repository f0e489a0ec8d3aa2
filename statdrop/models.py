"""Data models for the statdrop engine.

Input records (players, matchup entries, season and league snapshots) are
frozen: they are historical facts from an import and the engine never edits
them. Output records are plain dataclasses meant to be rendered directly.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


def _record_string(wins: int, losses: int, ties: int = 0) -> str:
    record = f'{wins}-{losses}'
    if ties > 0:
        record += f'-{ties}'
    return record


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WeeklyScoreRecord:
    """One player's score for one week."""
    week: int
    points: float = 0.0
    points_half_ppr: Optional[float] = None
    matchup_id: Optional[int] = None  # Disambiguates duplicate entries across leagues

    def value(self, prefer_half_ppr: bool = True) -> float:
        if prefer_half_ppr and self.points_half_ppr is not None:
            return self.points_half_ppr
        return self.points


@dataclass(frozen=True)
class Player:
    """A rostered player with base/alternate positions and weekly scores."""
    player_id: str
    position: str = 'UNK'
    alt_positions: tuple[str, ...] = ()
    weekly_scores: tuple[WeeklyScoreRecord, ...] = ()

    def scores_for_week(self, week: int) -> list[WeeklyScoreRecord]:
        return [s for s in self.weekly_scores if s.week == week]


@dataclass(frozen=True)
class CachedPlayer:
    """Entry of the external, read-only player cache."""
    player_id: str
    position: Optional[str] = None
    fantasy_positions: tuple[str, ...] = ()
    full_name: Optional[str] = None


@dataclass(frozen=True)
class MatchupEntry:
    """One team's entry for one week."""
    roster_id: int
    matchup_id: Optional[int] = None
    points: Optional[float] = None
    starters: Optional[tuple[str, ...]] = None
    players_points: Optional[dict[str, float]] = None
    players: Optional[tuple[str, ...]] = None
    player_slots: Optional[dict[str, str]] = None  # player_id -> slot token


@dataclass(frozen=True)
class MatchupRecord:
    """Flat season-level matchup record (week may be missing on old imports)."""
    roster_id: int
    matchup_id: int
    points: float = 0.0
    week: Optional[int] = None
    starters: tuple[str, ...] = ()


@dataclass(frozen=True)
class TeamSeasonSnapshot:
    """A team as imported for one season.

    Win/loss and championship values are what the platform reported; they are
    advisory and never used to decide a champion.
    """
    roster_id: int
    owner_id: str
    name: str = ''
    roster: tuple[Player, ...] = ()
    league_standing: int = 0
    lineup_config: Optional[dict[str, int]] = None

    # Imported season totals
    points_for: Optional[float] = None
    max_points_for: Optional[float] = None
    management_percent: Optional[float] = None
    offensive_points_for: Optional[float] = None
    max_offensive_points_for: Optional[float] = None
    defensive_points_for: Optional[float] = None
    max_defensive_points_for: Optional[float] = None
    points_against: Optional[float] = None

    wins: int = 0
    losses: int = 0
    ties: int = 0
    championships: int = 0

    # Transactions
    waiver_moves: int = 0
    faab_spent: float = 0.0
    trades_completed: int = 0

    @property
    def has_imported_totals(self) -> bool:
        return self.points_for is not None and self.max_points_for is not None


@dataclass(frozen=True)
class SeasonRecord:
    """All teams and matchups for one season."""
    season_id: str
    teams: tuple[TeamSeasonSnapshot, ...] = ()
    playoff_start_week: Optional[int] = None
    playoff_teams_count: Optional[int] = None
    matchups_by_week: dict[int, tuple[MatchupEntry, ...]] = field(default_factory=dict)
    matchups: tuple[MatchupRecord, ...] = ()
    computed_champion_owner_id: Optional[str] = None

    def team_for_owner(self, owner_id: str) -> Optional[TeamSeasonSnapshot]:
        for team in self.teams:
            if team.owner_id == owner_id:
                return team
        return None

    def team_for_roster(self, roster_id: int) -> Optional[TeamSeasonSnapshot]:
        for team in self.teams:
            if team.roster_id == roster_id:
                return team
        return None

    def entry_for(self, roster_id: int, week: int) -> Optional[MatchupEntry]:
        for entry in self.matchups_by_week.get(week, ()):
            if entry.roster_id == roster_id:
                return entry
        return None

    def opponent_entry(self, entry: MatchupEntry, week: int) -> Optional[MatchupEntry]:
        """The other side of `entry`'s pairing that week, if any."""
        if entry.matchup_id is None:
            return None
        for other in self.matchups_by_week.get(week, ()):
            if other.matchup_id == entry.matchup_id and other.roster_id != entry.roster_id:
                return other
        return None

    def matchup_records(self) -> list[MatchupRecord]:
        """
        Flat matchup records for the season.

        Uses the imported flat list when present, otherwise derives records
        (with explicit weeks) from the week-indexed entries.
        """
        if self.matchups:
            return list(self.matchups)
        records = []
        for week in sorted(self.matchups_by_week):
            for entry in self.matchups_by_week[week]:
                if entry.matchup_id is None:
                    continue
                records.append(
                    MatchupRecord(
                        roster_id=entry.roster_id,
                        matchup_id=entry.matchup_id,
                        points=entry.points or 0.0,
                        week=week,
                        starters=tuple(entry.starters or ()),
                    )
                )
        return records


@dataclass(frozen=True)
class League:
    """A league with its full season history."""
    league_id: str
    name: str = ''
    seasons: tuple[SeasonRecord, ...] = ()
    starting_lineup: tuple[str, ...] = ()
    computed_championships: Optional[dict[str, int]] = None

    def sorted_seasons(self) -> list[SeasonRecord]:
        return sorted(self.seasons, key=lambda s: s.season_id)

    def season(self, season_id: str) -> Optional[SeasonRecord]:
        for season in self.seasons:
            if season.season_id == season_id:
                return season
        return None

    def latest_season(self) -> Optional[SeasonRecord]:
        seasons = self.sorted_seasons()
        return seasons[-1] if seasons else None

    def is_current(self, season: SeasonRecord) -> bool:
        """True for the latest season, the only one that can have a week in progress."""
        latest = self.latest_season()
        return latest is not None and latest.season_id == season.season_id

    @property
    def current_owner_ids(self) -> list[str]:
        """Owner ids of the latest season, i.e. the current franchises."""
        latest = self.latest_season()
        if latest is None:
            return []
        return [team.owner_id for team in latest.teams]


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass
class H2HMatchDetail:
    """One head-to-head game from the owner's perspective."""
    season_id: str
    week: int
    matchup_id: int
    roster_id: int
    opponent_roster_id: int
    points: float
    opponent_points: float
    max_points: float
    opponent_max_points: float
    management_percent: float
    opponent_management_percent: float
    result: str  # 'W', 'L' or 'T'


@dataclass
class H2HRecord:
    """Aggregated head-to-head results against one opponent owner."""
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    games: int = 0
    sum_mgmt_for: float = 0.0
    sum_mgmt_against: float = 0.0

    @property
    def record(self) -> str:
        return _record_string(self.wins, self.losses, self.ties)

    @property
    def avg_points_for(self) -> float:
        return self.points_for / self.games if self.games > 0 else 0.0

    @property
    def avg_points_against(self) -> float:
        return self.points_against / self.games if self.games > 0 else 0.0

    @property
    def avg_mgmt_for(self) -> float:
        return self.sum_mgmt_for / self.games if self.games > 0 else 0.0

    @property
    def avg_mgmt_against(self) -> float:
        return self.sum_mgmt_against / self.games if self.games > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['record'] = self.record
        data['avg_points_for'] = self.avg_points_for
        data['avg_points_against'] = self.avg_points_against
        data['avg_mgmt_for'] = self.avg_mgmt_for
        data['avg_mgmt_against'] = self.avg_mgmt_against
        return data


@dataclass
class PlayoffAggregate:
    """Main-bracket playoff totals for an owner across seasons."""
    points_for: float = 0.0
    max_points_for: float = 0.0
    offensive_points_for: float = 0.0
    max_offensive_points_for: float = 0.0
    defensive_points_for: float = 0.0
    max_defensive_points_for: float = 0.0
    management_percent: float = 0.0
    offensive_management_percent: float = 0.0
    defensive_management_percent: float = 0.0
    ppw: float = 0.0
    offensive_ppw: float = 0.0
    defensive_ppw: float = 0.0
    weeks: int = 0
    wins: int = 0
    losses: int = 0
    seasons_qualified: list[str] = field(default_factory=list)
    champion_seasons: list[str] = field(default_factory=list)

    @property
    def record(self) -> str:
        return _record_string(self.wins, self.losses)

    @property
    def is_champion(self) -> bool:
        return bool(self.champion_seasons)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['record'] = self.record
        data['is_champion'] = self.is_champion
        return data


@dataclass
class SeasonTotals:
    """One owner's regular-season totals for one season."""
    season_id: str
    owner_id: str
    roster_id: int
    team_name: str
    weeks_played: int = 0
    points_for: float = 0.0
    max_points_for: float = 0.0
    offensive_points_for: float = 0.0
    max_offensive_points_for: float = 0.0
    defensive_points_for: float = 0.0
    max_defensive_points_for: float = 0.0
    points_against: float = 0.0
    management_percent: float = 0.0
    offensive_management_percent: float = 0.0
    defensive_management_percent: float = 0.0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    highest_points_in_game: float = 0.0
    most_points_against_in_game: float = 0.0
    position_totals: dict[str, float] = field(default_factory=dict)
    position_starts: dict[str, int] = field(default_factory=dict)
    starter_weeks: int = 0  # weeks with a starting lineup (reported or reconstructed)
    starter_position_counts: dict[str, int] = field(default_factory=dict)
    position_starters_per_week: dict[str, float] = field(default_factory=dict)
    waiver_moves: int = 0
    faab_spent: float = 0.0
    trades_completed: int = 0
    imported_championships: int = 0
    from_imported_totals: bool = False
    source_counts: dict[str, int] = field(default_factory=dict)  # weeks per points source

    @property
    def record(self) -> str:
        return _record_string(self.wins, self.losses, self.ties)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['record'] = self.record
        return data


@dataclass
class OwnerAggregate:
    """All-time totals for one persistent owner identity."""
    owner_id: str
    latest_display_name: str
    seasons_included: list[str] = field(default_factory=list)
    weeks_played: int = 0

    total_points_for: float = 0.0
    total_max_points_for: float = 0.0
    total_offensive_points_for: float = 0.0
    total_max_offensive_points_for: float = 0.0
    total_defensive_points_for: float = 0.0
    total_max_defensive_points_for: float = 0.0
    total_points_against: float = 0.0

    management_percent: float = 0.0
    offensive_management_percent: float = 0.0
    defensive_management_percent: float = 0.0

    team_ppw: float = 0.0
    offensive_ppw: float = 0.0
    defensive_ppw: float = 0.0

    position_totals: dict[str, float] = field(default_factory=dict)
    position_starts: dict[str, int] = field(default_factory=dict)
    position_ppw: dict[str, float] = field(default_factory=dict)  # per week played
    position_per_start: dict[str, float] = field(default_factory=dict)  # per start
    starter_weeks: int = 0
    starter_position_counts: dict[str, int] = field(default_factory=dict)
    position_starters_per_week: dict[str, float] = field(default_factory=dict)

    highest_points_in_game: float = 0.0
    most_points_against_in_game: float = 0.0
    most_points_against_season: float = 0.0

    championships: int = 0  # bracket-derived
    imported_championships: int = 0  # as reported by the platform
    playoff_berths: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0

    waiver_moves: int = 0
    faab_spent: float = 0.0
    faab_per_move: float = 0.0
    trades_completed: int = 0
    trades_per_season: float = 0.0

    head_to_head: dict[str, H2HRecord] = field(default_factory=dict)
    head_to_head_details: dict[str, list[H2HMatchDetail]] = field(default_factory=dict)
    playoffs: PlayoffAggregate = field(default_factory=PlayoffAggregate)
    seasons: list[SeasonTotals] = field(default_factory=list)

    @property
    def record(self) -> str:
        return _record_string(self.wins, self.losses, self.ties)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['record'] = self.record
        data['head_to_head'] = {k: v.to_dict() for k, v in self.head_to_head.items()}
        data['playoffs'] = self.playoffs.to_dict()
        data['seasons'] = [s.to_dict() for s in self.seasons]
        return data
