"""Geolocation providers and timeout-bounded location resolution.

A fix that fails or doesn't arrive in time resolves to ``None``; the ranker
treats that as "location unknown".
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Protocol

import requests

from gigfeed.config import DEFAULT_GEOLOCATION_URL
from gigfeed.log import get_logger
from gigfeed.models import Coordinates
from gigfeed.retry import retry

log = get_logger(__name__)


class GeolocationProvider(Protocol):
    def locate(self) -> Coordinates | None:
        ...


class StaticLocationProvider:
    """Fixed coordinates, e.g. a home address from the profile."""

    def __init__(self, coords: Coordinates | None) -> None:
        self.coords = coords

    def locate(self) -> Coordinates | None:
        return self.coords


class IpGeolocationProvider:
    """Approximate position from an IP lookup service returning latitude/longitude JSON."""

    def __init__(self, url: str = DEFAULT_GEOLOCATION_URL, request_timeout: float = 5.0) -> None:
        self.url = url
        self.request_timeout = request_timeout

    @retry(max_attempts=2, base_delay=1.0, retryable=(requests.RequestException, OSError))
    def _fetch(self) -> dict:
        r = requests.get(self.url, timeout=self.request_timeout)
        r.raise_for_status()
        return r.json()

    def locate(self) -> Coordinates | None:
        data = self._fetch()
        lat = data.get("latitude", data.get("lat"))
        lng = data.get("longitude", data.get("lon", data.get("lng")))
        if lat is None or lng is None:
            log.warning("Geolocation response from %s has no coordinates", self.url)
            return None
        return Coordinates(lat=float(lat), lng=float(lng))


def resolve_location(provider: GeolocationProvider, timeout_s: float = 10.0) -> Coordinates | None:
    """Run *provider* on a worker thread; give up after *timeout_s* seconds."""
    pool = ThreadPoolExecutor(max_workers=1)
    future = pool.submit(provider.locate)
    try:
        coords = future.result(timeout=timeout_s)
    except FutureTimeout:
        future.cancel()
        log.warning("Geolocation timed out after %.1fs; location unknown", timeout_s)
        return None
    except Exception as exc:
        log.warning("Geolocation failed (%s); location unknown", exc)
        return None
    finally:
        # don't wait on a provider that is still stuck
        pool.shutdown(wait=False)

    if coords is None:
        log.info("Geolocation returned no fix")
    return coords
