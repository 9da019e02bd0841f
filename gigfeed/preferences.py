"""Implicit preference model: recency- and action-weighted affinity accumulator."""
from __future__ import annotations

import time
from typing import Iterable

from gigfeed.log import get_logger
from gigfeed.models import Interaction, InteractionAction, JobListing, PreferenceAffinity

log = get_logger(__name__)

DEFAULT_WINDOW_MS = 30 * 24 * 60 * 60 * 1000
STALE_FACTOR = 0.5

ACTION_WEIGHTS: dict[InteractionAction, float] = {
    InteractionAction.APPLY: 2.0,
    InteractionAction.FAVORITE: 1.0,
}


def compute_preferences(
    interactions: Iterable[Interaction],
    jobs: Iterable[JobListing],
    window_ms: int = DEFAULT_WINDOW_MS,
    now_ms: int | None = None,
) -> PreferenceAffinity:
    """Accumulate category and skill affinity from apply/favorite history.

    Interactions whose job is no longer in *jobs* are skipped. Entries older
    than *window_ms* count at half weight.
    """
    now = now_ms if now_ms is not None else int(time.time() * 1000)
    by_id = {j.id: j for j in jobs}
    pref = PreferenceAffinity()
    used = 0

    for it in interactions:
        action_weight = ACTION_WEIGHTS.get(it.action)
        if action_weight is None:
            continue
        job = by_id.get(it.job_id)
        if job is None:
            continue

        recency = 1.0 if now - it.timestamp <= window_ms else STALE_FACTOR
        weight = recency * action_weight

        pref.category_affinity[job.category] = pref.category_affinity.get(job.category, 0.0) + weight
        for skill in job.skills:
            pref.skill_affinity[skill] = pref.skill_affinity.get(skill, 0.0) + weight
        used += 1

    log.debug(
        "Preferences from %d interaction(s): %d categories, %d skills",
        used, len(pref.category_affinity), len(pref.skill_affinity),
    )
    return pref
