#!/usr/bin/env python3
"""
Build all-time owner statistics from a league import file.

Usage:
    python scripts/export_all_time.py data/league.json
    python scripts/export_all_time.py data/league.json --players data/players.json -o out/all_time.json
    python scripts/export_all_time.py data/league.json --champions-only
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from statdrop.aggregator import build_all_time
from statdrop.championships import apply_computed_champions, recompute_championships
from statdrop.config import get_config
from statdrop.logging_config import setup_logging
from statdrop.metrics import rounded
from statdrop.schemas import LeagueFile, PlayerCacheFile
from statdrop.utils import load_json, load_json_safe, save_json


def print_championships(report) -> None:
    print("\nChampions")
    print("-" * 50)
    for season_id, owner_id in report.per_season_champion.items():
        print(f"  {season_id}: {owner_id or '(undetermined)'}")
    for discrepancy in report.discrepancies:
        imported = ', '.join(discrepancy.imported_owner_ids) or 'none'
        print(f"  ! {discrepancy.season_id}: imported {imported}, computed {discrepancy.computed_owner_id}")


def print_summary(stats: dict, digits: int) -> None:
    print("\nAll-time")
    print("-" * 50)
    for owner_id, agg in stats.items():
        print(
            f"  {agg.latest_display_name:<24} {agg.record:>9}  "
            f"PF {rounded(agg.total_points_for, digits):>9}  "
            f"Mgmt {rounded(agg.management_percent, digits):>6}%  "
            f"Titles {agg.championships}"
        )


def main():
    parser = argparse.ArgumentParser(description="Build all-time owner stats for a league")
    parser.add_argument("league_file", type=Path, help="League import JSON")
    parser.add_argument("--players", type=Path, help="Player cache JSON (optional)")
    parser.add_argument("--output", "-o", type=Path, help="Write all-time stats JSON here")
    parser.add_argument("--champions-output", type=Path, help="Write computed champions JSON here")
    parser.add_argument("--champions-only", action="store_true", help="Only recompute championships")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logger = setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_to_file=False)
    config = get_config()

    league = load_json(args.league_file, schema=LeagueFile).to_league()
    player_cache = {}
    if args.players:
        cache_file = load_json_safe(args.players, schema=PlayerCacheFile)
        if cache_file is None:
            logger.warning(f"Could not load player cache from {args.players}, continuing without it")
        else:
            player_cache = cache_file.to_cache()

    print(f"\nLeague {league.name or league.league_id}: {len(league.seasons)} seasons")
    print("=" * 50)

    report = recompute_championships(league, config)
    print_championships(report)

    if args.champions_output:
        updated = apply_computed_champions(league, report)
        save_json(
            args.champions_output,
            {
                'league_id': updated.league_id,
                'computed_championships': updated.computed_championships,
                'computed_champions': {s.season_id: s.computed_champion_owner_id for s in updated.sorted_seasons()},
                'report': report.to_dict(),
            },
            sort_keys=True,
        )
        print(f"\nWrote champions to {args.champions_output}")

    if args.champions_only:
        return

    stats = build_all_time(league, player_cache=player_cache, config=config)
    print_summary(stats, config.round_digits)

    if args.output:
        save_json(args.output, {owner_id: agg.to_dict() for owner_id, agg in stats.items()}, sort_keys=True)
        print(f"\nWrote all-time stats to {args.output}")


if __name__ == "__main__":
    main()
