"""
Feed ranking entry point.

Runs: read interaction log → recompute preferences → effective weights → score → stable sort.
"""
from __future__ import annotations

from typing import Callable, Sequence

from gigfeed.config import RankerSettings
from gigfeed.interactions import InteractionLog, now_ms
from gigfeed.log import get_logger
from gigfeed.models import (
    Interaction,
    InteractionAction,
    JobListing,
    RankOptions,
    ScoredListing,
    UserProfile,
)
from gigfeed.preferences import compute_preferences
from gigfeed.scorer import match_quality, score_job
from gigfeed.weights import weights_for

log = get_logger(__name__)


class JobRanker:
    def __init__(
        self,
        interaction_log: InteractionLog,
        settings: RankerSettings | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.interaction_log = interaction_log
        self.settings = settings or RankerSettings()
        self._clock = clock

    def rank_scored(
        self,
        jobs: Sequence[JobListing],
        user: UserProfile,
        options: RankOptions | None = None,
    ) -> list[ScoredListing]:
        opts = options or RankOptions()
        preference = compute_preferences(
            self.interaction_log.all(),
            jobs,
            window_ms=self.settings.recency_window_ms,
            now_ms=self._clock(),
        )
        weights = weights_for(opts, self.settings.base_weights, self.settings.priority_increase)
        max_distance = (
            opts.max_distance_km if opts.max_distance_km is not None else self.settings.max_distance_km
        )

        scored: list[ScoredListing] = []
        for job in jobs:
            s = score_job(job, user, preference, opts.user_location, weights, max_distance)
            scored.append(ScoredListing(job=job, score=s, quality=match_quality(s.total)))

        # sorted() is stable under reverse=True, so ties keep input order
        result = sorted(scored, key=lambda s: s.score.total, reverse=True)
        log.info(
            "Ranked %d jobs for %s (location %s, weights %s)",
            len(result),
            user.id,
            "known" if opts.user_location else "unknown",
            {k: round(v, 3) for k, v in weights.as_dict().items()},
        )
        return result

    def rank(
        self,
        jobs: Sequence[JobListing],
        user: UserProfile,
        options: RankOptions | None = None,
    ) -> list[JobListing]:
        return [s.job for s in self.rank_scored(jobs, user, options)]

    def record_interaction(self, job_id: str, action: InteractionAction | str) -> Interaction:
        return self.interaction_log.record(job_id, action)
