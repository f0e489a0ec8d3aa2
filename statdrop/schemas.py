"""Pydantic schemas for JSON data validation."""

from pydantic import BaseModel, Field, field_validator

from . import models
from .constants import DEFAULT_PLAYOFF_START_WEEK, DEFAULT_PLAYOFF_TEAMS_COUNT, INFERRED_SLOT_CAP


class WeeklyScore(BaseModel):
    """One weekly score entry on a player."""

    week: int = Field(..., ge=1, le=25)
    points: float = 0.0
    points_half_ppr: float | None = None
    matchup_id: int | None = None

    class Config:
        extra = 'ignore'

    def to_model(self) -> models.WeeklyScoreRecord:
        return models.WeeklyScoreRecord(
            week=self.week,
            points=self.points,
            points_half_ppr=self.points_half_ppr,
            matchup_id=self.matchup_id,
        )


class Player(BaseModel):
    """Player on a team's roster."""

    player_id: str = Field(..., min_length=1)
    position: str = 'UNK'
    alt_positions: list[str] = Field(default_factory=list)
    weekly_scores: list[WeeklyScore] = Field(default_factory=list)

    @field_validator('player_id', mode='before')
    @classmethod
    def coerce_player_id(cls, v):
        """Player ids are sometimes exported as numbers."""
        return str(v) if isinstance(v, int) else v

    class Config:
        extra = 'ignore'

    def to_model(self) -> models.Player:
        return models.Player(
            player_id=self.player_id,
            position=self.position,
            alt_positions=tuple(self.alt_positions),
            weekly_scores=tuple(s.to_model() for s in self.weekly_scores),
        )


class MatchupEntry(BaseModel):
    """One team's entry for one week."""

    roster_id: int
    matchup_id: int | None = None
    points: float | None = None
    starters: list[str] | None = None
    players_points: dict[str, float] | None = None
    players: list[str] | None = None
    player_slots: dict[str, str] | None = None

    class Config:
        extra = 'ignore'

    def to_model(self) -> models.MatchupEntry:
        return models.MatchupEntry(
            roster_id=self.roster_id,
            matchup_id=self.matchup_id,
            points=self.points,
            starters=tuple(self.starters) if self.starters is not None else None,
            players_points=dict(self.players_points) if self.players_points is not None else None,
            players=tuple(self.players) if self.players is not None else None,
            player_slots=dict(self.player_slots) if self.player_slots is not None else None,
        )


class MatchupRecord(BaseModel):
    """Flat season-level matchup record."""

    roster_id: int
    matchup_id: int
    points: float = 0.0
    week: int | None = None
    starters: list[str] = Field(default_factory=list)

    class Config:
        extra = 'ignore'

    def to_model(self) -> models.MatchupRecord:
        return models.MatchupRecord(
            roster_id=self.roster_id,
            matchup_id=self.matchup_id,
            points=self.points,
            week=self.week,
            starters=tuple(self.starters),
        )


class Team(BaseModel):
    """Team snapshot for one season."""

    roster_id: int
    owner_id: str = Field(..., min_length=1)
    name: str = ''
    roster: list[Player] = Field(default_factory=list)
    league_standing: int = Field(default=0, ge=0)
    lineup_config: dict[str, int] | None = None

    points_for: float | None = None
    max_points_for: float | None = None
    management_percent: float | None = None
    offensive_points_for: float | None = None
    max_offensive_points_for: float | None = None
    defensive_points_for: float | None = None
    max_defensive_points_for: float | None = None
    points_against: float | None = None

    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    ties: int = Field(default=0, ge=0)
    championships: int = Field(default=0, ge=0)

    waiver_moves: int = Field(default=0, ge=0)
    faab_spent: float = Field(default=0.0, ge=0)
    trades_completed: int = Field(default=0, ge=0)

    @field_validator('lineup_config')
    @classmethod
    def validate_slot_counts(cls, v):
        """Ensure slot counts are sane."""
        if v is None:
            return v
        for slot, count in v.items():
            if count < 0 or count > 10:
                raise ValueError(f'Invalid slot count for {slot}: {count}')
        return v

    class Config:
        extra = 'ignore'

    def to_model(self) -> models.TeamSeasonSnapshot:
        return models.TeamSeasonSnapshot(
            roster_id=self.roster_id,
            owner_id=self.owner_id,
            name=self.name,
            roster=tuple(p.to_model() for p in self.roster),
            league_standing=self.league_standing,
            lineup_config=dict(self.lineup_config) if self.lineup_config is not None else None,
            points_for=self.points_for,
            max_points_for=self.max_points_for,
            management_percent=self.management_percent,
            offensive_points_for=self.offensive_points_for,
            max_offensive_points_for=self.max_offensive_points_for,
            defensive_points_for=self.defensive_points_for,
            max_defensive_points_for=self.max_defensive_points_for,
            points_against=self.points_against,
            wins=self.wins,
            losses=self.losses,
            ties=self.ties,
            championships=self.championships,
            waiver_moves=self.waiver_moves,
            faab_spent=self.faab_spent,
            trades_completed=self.trades_completed,
        )


class Season(BaseModel):
    """One season of a league."""

    season_id: str = Field(..., min_length=1)
    teams: list[Team] = Field(default_factory=list)
    playoff_start_week: int | None = Field(default=None, ge=1, le=25)
    playoff_teams_count: int | None = Field(default=None, ge=1, le=32)
    matchups_by_week: dict[int, list[MatchupEntry]] = Field(default_factory=dict)
    matchups: list[MatchupRecord] = Field(default_factory=list)
    computed_champion_owner_id: str | None = None

    @field_validator('season_id', mode='before')
    @classmethod
    def coerce_season_id(cls, v):
        """Season ids are years and may arrive as numbers."""
        return str(v) if isinstance(v, int) else v

    @field_validator('matchups_by_week')
    @classmethod
    def validate_weeks(cls, v):
        """Ensure week keys are positive."""
        for week in v:
            if week < 1:
                raise ValueError(f'Invalid week: {week}')
        return v

    class Config:
        extra = 'ignore'

    def to_model(self) -> models.SeasonRecord:
        return models.SeasonRecord(
            season_id=self.season_id,
            teams=tuple(t.to_model() for t in self.teams),
            playoff_start_week=self.playoff_start_week,
            playoff_teams_count=self.playoff_teams_count,
            matchups_by_week={
                week: tuple(e.to_model() for e in entries) for week, entries in self.matchups_by_week.items()
            },
            matchups=tuple(m.to_model() for m in self.matchups),
            computed_champion_owner_id=self.computed_champion_owner_id,
        )


class LeagueFile(BaseModel):
    """Complete league import file structure."""

    league_id: str = Field(..., min_length=1)
    name: str = ''
    seasons: list[Season] = Field(default_factory=list)
    starting_lineup: list[str] = Field(default_factory=list)
    computed_championships: dict[str, int] | None = None

    class Config:
        extra = 'ignore'

    def to_league(self) -> models.League:
        return models.League(
            league_id=self.league_id,
            name=self.name,
            seasons=tuple(s.to_model() for s in self.seasons),
            starting_lineup=tuple(self.starting_lineup),
            computed_championships=(
                dict(self.computed_championships) if self.computed_championships is not None else None
            ),
        )


class PlayerCacheEntry(BaseModel):
    """Player as stored in the external player cache."""

    position: str | None = None
    fantasy_positions: list[str] | None = None
    full_name: str | None = None

    class Config:
        extra = 'ignore'


class PlayerCacheFile(BaseModel):
    """Complete player cache file structure."""

    players: dict[str, PlayerCacheEntry] = Field(default_factory=dict)

    class Config:
        extra = 'ignore'

    def to_cache(self) -> dict[str, models.CachedPlayer]:
        return {
            player_id: models.CachedPlayer(
                player_id=player_id,
                position=entry.position,
                fantasy_positions=tuple(entry.fantasy_positions or ()),
                full_name=entry.full_name,
            )
            for player_id, entry in self.players.items()
        }


class EngineConfig(BaseModel):
    """Engine configuration settings."""

    default_playoff_start_week: int = Field(default=DEFAULT_PLAYOFF_START_WEEK, ge=1, le=25)
    default_playoff_teams_count: int = Field(default=DEFAULT_PLAYOFF_TEAMS_COUNT, ge=1, le=32)
    inferred_slot_cap: int = Field(default=INFERRED_SLOT_CAP, ge=1, le=10)
    prefer_half_ppr: bool = True
    exclude_in_progress_week: bool = True
    round_digits: int = Field(default=2, ge=0, le=6)

    class Config:
        extra = 'forbid'
