"""Five-factor relevance scoring for a single job."""
from __future__ import annotations

import math

from gigfeed.geo import distance_km
from gigfeed.log import get_logger
from gigfeed.models import (
    Coordinates,
    JobListing,
    JobScore,
    PayType,
    PreferenceAffinity,
    ScoreWeights,
    UserProfile,
)

log = get_logger(__name__)

NEUTRAL = 0.5
DEFAULT_MAX_DISTANCE_KM = 50.0

HOURLY_PAY_SCALE = 100.0
FLAT_PAY_SCALE = 5000.0

# (threshold, label), highest first
QUALITY_BANDS: list[tuple[float, str]] = [
    (0.8, "excellent"),
    (0.6, "good"),
    (0.4, "fair"),
]


def clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def skill_match_score(job_skills: frozenset[str], user_skills: frozenset[str]) -> float:
    if not user_skills:
        return NEUTRAL
    overlap = len(job_skills & user_skills)
    return clamp01(overlap / max(len(job_skills), 1))


def location_match_score(
    user_location: Coordinates | None,
    job_location: Coordinates | None,
    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM,
) -> float:
    if user_location is None or job_location is None:
        return NEUTRAL
    d = distance_km(user_location, job_location)
    if max_distance_km <= 0:
        return 1.0 if d == 0 else 0.0
    return clamp01(1.0 - d / max_distance_km)


def pay_match_score(amount: float, pay_type: PayType) -> float:
    if not math.isfinite(amount):
        return 0.0
    scale = HOURLY_PAY_SCALE if pay_type == PayType.HOURLY else FLAT_PAY_SCALE
    return clamp01(amount / scale)


def category_match_score(category: str, category_affinity: dict[str, float]) -> float:
    if not category_affinity:
        return NEUTRAL
    top = max(category_affinity.values())
    if top <= 0:
        return NEUTRAL
    return clamp01(category_affinity.get(category, 0.0) / top)


def user_preference_score(job_skills: frozenset[str], skill_affinity: dict[str, float]) -> float:
    """Mean affinity of the job's known skills, relative to the strongest skill."""
    if not skill_affinity:
        return NEUTRAL
    known = [skill_affinity[s] for s in job_skills if s in skill_affinity]
    if not known:
        return NEUTRAL
    top = max(skill_affinity.values())
    if top <= 0:
        return NEUTRAL
    return clamp01((sum(known) / len(known)) / top)


def score_job(
    job: JobListing,
    user: UserProfile,
    preference: PreferenceAffinity,
    user_location: Coordinates | None,
    weights: ScoreWeights,
    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM,
) -> JobScore:
    skill = skill_match_score(job.skills, user.skills)
    location = location_match_score(user_location, job.location, max_distance_km)
    pay = pay_match_score(job.pay.amount, job.pay.type)
    category = category_match_score(job.category, preference.category_affinity)
    pref = user_preference_score(job.skills, preference.skill_affinity)

    total = clamp01(
        skill * weights.skill_match
        + location * weights.location_match
        + pay * weights.pay_match
        + category * weights.category_match
        + pref * weights.user_preference
    )

    return JobScore(
        job_id=job.id,
        total=total,
        skill_match=skill,
        location_match=location,
        pay_match=pay,
        category_match=category,
        user_preference=pref,
    )


def match_quality(total: float) -> str:
    for threshold, label in QUALITY_BANDS:
        if total >= threshold:
            return label
    return "poor"
