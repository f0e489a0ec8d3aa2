"""Derive season champions from the playoff bracket."""

import logging
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Optional

from .bracket import is_bracket_survivor, main_bracket_matchups, playoff_seeds
from .config import get_config
from .models import League, SeasonRecord
from .schemas import EngineConfig

logger = logging.getLogger('statdrop.championships')


@dataclass
class ChampionshipDiscrepancy:
    """A season where the imported champion flag disagrees with the bracket."""
    season_id: str
    imported_owner_ids: list[str]
    computed_owner_id: Optional[str]


@dataclass
class ChampionshipReport:
    per_season_champion: dict[str, Optional[str]] = field(default_factory=dict)
    per_owner_count: dict[str, int] = field(default_factory=dict)
    discrepancies: list[ChampionshipDiscrepancy] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def season_champion(season: SeasonRecord, config: Optional[EngineConfig] = None) -> Optional[str]:
    """
    Owner id of the season's champion, or None when it can't be determined.

    The champion is the only qualified team that played main-bracket games
    without losing. If several teams survive (missing data for later weeks),
    the one whose last bracket game is latest wins; a tie there is ambiguous.
    """
    config = config or get_config()
    survivors = []
    for team in playoff_seeds(season, config):
        games = main_bracket_matchups(team.owner_id, season, config)
        if is_bracket_survivor(games):
            survivors.append((games[-1].week, team.owner_id))

    if not survivors:
        logger.debug(f'Season {season.season_id}: no bracket survivor')
        return None
    if len(survivors) == 1:
        return survivors[0][1]

    latest = max(week for week, _ in survivors)
    finalists = sorted(owner for week, owner in survivors if week == latest)
    if len(finalists) == 1:
        return finalists[0]
    logger.warning(f'Season {season.season_id}: ambiguous champion between {finalists}')
    return None


def imported_champions(season: SeasonRecord) -> list[str]:
    """Owners whose imported snapshot claims a championship for the season."""
    return sorted(team.owner_id for team in season.teams if team.championships > 0)


def recompute_championships(league: League, config: Optional[EngineConfig] = None) -> ChampionshipReport:
    """
    Recompute every season's champion from bracket results.

    Imported championship flags are only compared against, never trusted.

    Args:
        league: League with its season history
        config: Engine configuration (default: get_config())

    Returns:
        ChampionshipReport with per-season champions, per-owner counts and
        the seasons where the import disagrees
    """
    config = config or get_config()
    report = ChampionshipReport()
    counts: dict[str, int] = {}

    for season in league.sorted_seasons():
        champion = season_champion(season, config)
        report.per_season_champion[season.season_id] = champion
        if champion is not None:
            counts[champion] = counts.get(champion, 0) + 1

        imported = imported_champions(season)
        computed = [champion] if champion is not None else []
        if imported != computed:
            logger.warning(
                f'Season {season.season_id}: imported champion {imported or None} '
                f'but bracket gives {champion}'
            )
            report.discrepancies.append(ChampionshipDiscrepancy(season.season_id, imported, champion))

    report.per_owner_count = dict(sorted(counts.items()))
    return report


def apply_computed_champions(league: League, report: ChampionshipReport) -> League:
    """
    Return a copy of the league carrying the computed champions.

    Each season gets `computed_champion_owner_id` and the league gets
    `computed_championships`. Imported team flags are left as they were and
    the input league is not modified.
    """
    seasons = tuple(
        replace(season, computed_champion_owner_id=report.per_season_champion.get(season.season_id))
        for season in league.seasons
    )
    return replace(league, seasons=seasons, computed_championships=dict(report.per_owner_count))
