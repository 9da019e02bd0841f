"""Normalize raw job/user records into the ranker's models.

Pay arrives either as a bare number or as ``{"amount", "type"}``; both become
a ``PayInfo`` here so scoring never branches on shape.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from gigfeed.log import get_logger
from gigfeed.models import Coordinates, JobListing, PayInfo, PayType, UserProfile

log = get_logger(__name__)


def normalize_skill(s: str) -> str:
    return " ".join(str(s).split()).lower()


def normalize_skills(raw: Iterable[str] | None) -> frozenset[str]:
    return frozenset(n for n in (normalize_skill(s) for s in raw or []) if n)


def _number(value: Any, what: str) -> float:
    try:
        n = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{what} is not a number: {value!r}") from None
    if not math.isfinite(n):
        raise ValueError(f"{what} is not finite: {value!r}")
    return n


def parse_location(raw: Any) -> Coordinates | None:
    if not raw:
        return None
    if not isinstance(raw, Mapping):
        raise ValueError(f"location must be a mapping, got {type(raw).__name__}")
    lat = raw.get("lat", raw.get("latitude"))
    lng = raw.get("lng", raw.get("longitude"))
    if lat is None or lng is None:
        return None
    lat_f, lng_f = _number(lat, "latitude"), _number(lng, "longitude")
    if not -90 <= lat_f <= 90 or not -180 <= lng_f <= 180:
        raise ValueError(f"coordinates out of range: ({lat_f}, {lng_f})")
    return Coordinates(lat=lat_f, lng=lng_f)


def parse_pay(raw: Any, pay_type: Any = None) -> PayInfo:
    """Accept ``500``, ``{"amount": 500, "type": "daily"}`` or a top-level pay type."""
    if isinstance(raw, Mapping):
        amount = raw.get("amount", 0)
        pay_type = raw.get("type") or pay_type
    else:
        amount = raw if raw is not None else 0
    try:
        kind = PayType(pay_type) if pay_type else PayType.FIXED
    except ValueError:
        raise ValueError(f"unknown pay type: {pay_type!r}") from None
    return PayInfo(amount=_number(amount, "pay amount"), type=kind)


def normalize_job(raw: Mapping[str, Any]) -> JobListing:
    job_id = raw.get("id")
    if job_id in (None, ""):
        raise ValueError("job record has no id")
    return JobListing(
        id=str(job_id),
        category=str(raw.get("category") or "other").strip().lower(),
        skills=normalize_skills(raw.get("skills")),
        pay=parse_pay(raw.get("pay"), raw.get("payType") or raw.get("pay_type")),
        location=parse_location(raw.get("location")),
        title=str(raw.get("title") or ""),
    )


def normalize_jobs(records: Iterable[Mapping[str, Any]]) -> list[JobListing]:
    """Normalize a batch, dropping invalid records with a warning."""
    jobs: list[JobListing] = []
    for i, raw in enumerate(records):
        try:
            jobs.append(normalize_job(raw))
        except ValueError as exc:
            log.warning("Skipping job record #%d: %s", i, exc)
    log.debug("Normalized %d job record(s)", len(jobs))
    return jobs


def normalize_user(raw: Mapping[str, Any]) -> UserProfile:
    return UserProfile(
        id=str(raw.get("id") or "anonymous"),
        skills=normalize_skills(raw.get("skills")),
        location=parse_location(raw.get("location")),
    )
