#!/usr/bin/env python3
"""Rank a YAML job file for a YAML user profile, or record an interaction."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from gigfeed.config import CONFIG_DIR, load_settings, load_yaml
from gigfeed.geo import within_radius
from gigfeed.ingest import normalize_jobs, normalize_user
from gigfeed.interactions import InteractionLog, JsonFileStorage
from gigfeed.location import IpGeolocationProvider, resolve_location
from gigfeed.log import configure as configure_logging, get_logger
from gigfeed.models import InteractionAction, RankOptions
from gigfeed.ranker import JobRanker

log = get_logger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--jobs", type=Path, default=CONFIG_DIR / "jobs.yaml")
    p.add_argument("--profile", type=Path, default=CONFIG_DIR / "profile.yaml")
    p.add_argument("--settings", type=Path, default=None)
    p.add_argument(
        "--prioritize", action="append", default=[],
        choices=["location", "pay", "skills"],
        help="boost a factor; may be repeated",
    )
    p.add_argument("--max-distance", type=float, default=None, help="km at which location score hits 0")
    p.add_argument("--radius", type=float, default=None, help="only show jobs within this many km")
    p.add_argument("--locate", action="store_true", help="use IP geolocation for the user position")
    p.add_argument(
        "--record", nargs=2, metavar=("JOB_ID", "ACTION"),
        help="record an interaction (view/apply/favorite/reject) and exit",
    )
    p.add_argument("--top", type=int, default=10)
    p.add_argument("--log-level", default=None, help="overrides LOG_LEVEL, e.g. DEBUG")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.log_level:
        configure_logging(args.log_level)
    settings = load_settings(args.settings)
    interaction_log = InteractionLog(JsonFileStorage(settings.storage_path))
    ranker = JobRanker(interaction_log, settings)

    if args.record:
        job_id, action = args.record
        if action not in {a.value for a in InteractionAction}:
            log.error("Unknown action %r", action)
            return 2
        ranker.record_interaction(job_id, action)
        log.info("Recorded %s on %s", action, job_id)
        return 0

    if not args.jobs.exists() or not args.profile.exists():
        print()
        print("  Missing input. Provide --jobs and --profile YAML files")
        print(f"  (defaults: {args.jobs}, {args.profile})")
        print()
        return 1

    jobs = normalize_jobs(load_yaml(args.jobs) or [])
    user = normalize_user(load_yaml(args.profile) or {})

    # a failed or timed-out fix stays None and scores location as unknown
    user_location = user.location
    if args.locate:
        provider = IpGeolocationProvider(settings.geolocation_url)
        user_location = resolve_location(provider, settings.geolocation_timeout_s)

    options = RankOptions(
        prioritize_location="location" in args.prioritize,
        prioritize_pay="pay" in args.prioritize,
        prioritize_skills="skills" in args.prioritize,
        max_distance_km=args.max_distance,
        user_location=user_location,
    )

    if args.radius is not None:
        if user_location is None:
            log.warning("--radius ignored: user location unknown")
        else:
            jobs = [job for job, _ in within_radius(jobs, user_location, args.radius)]

    ranked = ranker.rank_scored(jobs, user, options)
    for i, s in enumerate(ranked[: args.top], 1):
        sc = s.score
        print(
            f"{i:>2}. {s.job.id:<12} {sc.total:6.1%}  {s.quality:<9} "
            f"skill={sc.skill_match:.2f} loc={sc.location_match:.2f} pay={sc.pay_match:.2f} "
            f"cat={sc.category_match:.2f} pref={sc.user_preference:.2f}  {s.job.title}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
