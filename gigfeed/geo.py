"""Great-circle distance helpers."""
from __future__ import annotations

import math
from typing import Iterable

from gigfeed.models import Coordinates, JobListing

EARTH_RADIUS_KM = 6371.0


def distance_km(a: Coordinates, b: Coordinates) -> float:
    """Haversine distance between two points, in kilometers."""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    )
    # floating error can push h marginally past 1 for antipodal points
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def within_radius(
    jobs: Iterable[JobListing], origin: Coordinates, radius_km: float
) -> list[tuple[JobListing, float]]:
    """Jobs located within *radius_km* of *origin*, nearest first.

    Jobs without a location are dropped.
    """
    hits: list[tuple[JobListing, float]] = []
    for job in jobs:
        if job.location is None:
            continue
        d = distance_km(origin, job.location)
        if d <= radius_km:
            hits.append((job, d))
    hits.sort(key=lambda pair: pair[1])
    return hits
