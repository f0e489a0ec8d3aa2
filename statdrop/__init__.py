from .positions import Position, normalize
from .slots import (
    SlotKind,
    eligible_positions,
    credited_position,
    partition_slots,
    lineup_slots_for,
)
from .models import (
    WeeklyScoreRecord,
    Player,
    CachedPlayer,
    MatchupEntry,
    MatchupRecord,
    TeamSeasonSnapshot,
    SeasonRecord,
    League,
    H2HRecord,
    H2HMatchDetail,
    PlayoffAggregate,
    SeasonTotals,
    OwnerAggregate,
)
from .lineup import Candidate, LineupResult, solve_lineup
from .points import PointsSource, PositionLookup, ResolvedPoints, resolve_week_points
from .metrics import management_percent, delta, rounded
from .weekly import WeekManagement, WeekPoint, compute_week, management_series
from .bracket import (
    BracketGame,
    playoff_weeks,
    playoff_seeds,
    main_bracket_matchups,
    truncate_at_elimination,
    is_bracket_survivor,
)
from .aggregator import (
    aggregate_season,
    aggregate_playoffs,
    aggregate_owner,
    build_all_time,
)
from .championships import (
    ChampionshipReport,
    recompute_championships,
    apply_computed_champions,
)

__all__ = [
    # Positions and slots
    'Position',
    'normalize',
    'SlotKind',
    'eligible_positions',
    'credited_position',
    'partition_slots',
    'lineup_slots_for',
    # Models
    'WeeklyScoreRecord',
    'Player',
    'CachedPlayer',
    'MatchupEntry',
    'MatchupRecord',
    'TeamSeasonSnapshot',
    'SeasonRecord',
    'League',
    'H2HRecord',
    'H2HMatchDetail',
    'PlayoffAggregate',
    'SeasonTotals',
    'OwnerAggregate',
    # Weekly points and lineups
    'Candidate',
    'LineupResult',
    'solve_lineup',
    'PointsSource',
    'PositionLookup',
    'ResolvedPoints',
    'resolve_week_points',
    # Metrics
    'management_percent',
    'delta',
    'rounded',
    'WeekManagement',
    'WeekPoint',
    'compute_week',
    'management_series',
    # Playoffs
    'BracketGame',
    'playoff_weeks',
    'playoff_seeds',
    'main_bracket_matchups',
    'truncate_at_elimination',
    'is_bracket_survivor',
    # Aggregation
    'aggregate_season',
    'aggregate_playoffs',
    'aggregate_owner',
    'build_all_time',
    # Championships
    'ChampionshipReport',
    'recompute_championships',
    'apply_computed_champions',
]
