"""Main playoff bracket: seeds, window, and per-team game paths."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .config import get_config
from .models import MatchupRecord, SeasonRecord, TeamSeasonSnapshot
from .schemas import EngineConfig

logger = logging.getLogger('statdrop.bracket')


@dataclass
class BracketGame:
    """One main-bracket game from a team's point of view."""
    season_id: str
    week: int
    matchup_id: int
    roster_id: int
    points: float
    opponent_roster_id: Optional[int] = None
    opponent_points: Optional[float] = None

    @property
    def is_loss(self) -> bool:
        # A tie or an unknown opponent doesn't eliminate anyone
        return self.opponent_points is not None and self.points < self.opponent_points

    @property
    def is_win(self) -> bool:
        return self.opponent_points is not None and self.points > self.opponent_points


def playoff_weeks(start_week: int, teams_count: int) -> list[int]:
    """
    Weeks of the main bracket.

    A single-elimination bracket of N teams needs ceil(log2(N)) rounds, one
    per week starting at `start_week`.

    Example:
        playoff_weeks(14, 6)  # [14, 15, 16]
    """
    if teams_count <= 1:
        return []
    rounds = math.ceil(math.log2(teams_count))
    return list(range(start_week, start_week + rounds))


def playoff_window(season: SeasonRecord, config: Optional[EngineConfig] = None) -> list[int]:
    """Playoff weeks for a season, using config defaults for missing settings."""
    config = config or get_config()
    start = season.playoff_start_week or config.default_playoff_start_week
    count = season.playoff_teams_count or config.default_playoff_teams_count
    return playoff_weeks(start, count)


def playoff_seeds(season: SeasonRecord, config: Optional[EngineConfig] = None) -> list[TeamSeasonSnapshot]:
    """
    Teams that qualified for the main bracket, best seed first.

    Teams are ranked by league standing; a standing of 0 means unknown and
    ranks after every known standing.
    """
    config = config or get_config()
    count = season.playoff_teams_count or config.default_playoff_teams_count
    ranked = sorted(
        season.teams,
        key=lambda t: (t.league_standing <= 0, t.league_standing, t.roster_id),
    )
    return ranked[:count]


def _resolve_week(record: MatchupRecord, season: SeasonRecord, window: list[int]) -> int:
    """Explicit week, else the week whose entries hold this pairing, else the pairing id."""
    if record.week is not None:
        return record.week
    for week in window:
        for entry in season.matchups_by_week.get(week, ()):
            if entry.roster_id == record.roster_id and entry.matchup_id == record.matchup_id:
                return week
    return record.matchup_id


def truncate_at_elimination(games: list[BracketGame]) -> list[BracketGame]:
    """
    Keep games up to and including the first loss.

    Example:
        [W, W, L, W] -> [W, W, L]
    """
    kept = []
    for game in games:
        kept.append(game)
        if game.is_loss:
            break
    return kept


def is_bracket_survivor(games: list[BracketGame]) -> bool:
    """True when a team played in the bracket and never lost."""
    return bool(games) and not any(game.is_loss for game in games)


def main_bracket_matchups(
    owner_id: str,
    season: SeasonRecord,
    config: Optional[EngineConfig] = None,
) -> list[BracketGame]:
    """
    An owner's main-bracket games for a season, ending at elimination.

    Consolation games are excluded: only qualified teams are considered and
    their path stops after the first loss.

    Args:
        owner_id: Persistent owner identity
        season: Season record
        config: Engine configuration (default: get_config())

    Returns:
        Games sorted by week; empty if the owner didn't qualify
    """
    config = config or get_config()
    team = season.team_for_owner(owner_id)
    if team is None:
        return []
    if team.roster_id not in {t.roster_id for t in playoff_seeds(season, config)}:
        return []

    window = playoff_window(season, config)
    if not window:
        return []

    records = season.matchup_records()
    resolved = [(record, _resolve_week(record, season, window)) for record in records]

    games_by_week: dict[int, BracketGame] = {}
    for record, week in resolved:
        if record.roster_id != team.roster_id or week not in window or week in games_by_week:
            continue

        opponent_roster_id = None
        opponent_points = None
        for other, other_week in resolved:
            if (
                other.matchup_id == record.matchup_id
                and other_week == week
                and other.roster_id != record.roster_id
            ):
                opponent_roster_id, opponent_points = other.roster_id, other.points
                break
        else:
            entry = season.entry_for(team.roster_id, week)
            opponent = season.opponent_entry(entry, week) if entry else None
            if opponent is not None:
                opponent_roster_id, opponent_points = opponent.roster_id, opponent.points or 0.0

        games_by_week[week] = BracketGame(
            season_id=season.season_id,
            week=week,
            matchup_id=record.matchup_id,
            roster_id=team.roster_id,
            points=record.points,
            opponent_roster_id=opponent_roster_id,
            opponent_points=opponent_points,
        )

    games = [games_by_week[week] for week in sorted(games_by_week)]
    return truncate_at_elimination(games)
