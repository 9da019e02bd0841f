import os

# keep test runs from writing daily log files
os.environ.setdefault("GIGFEED_LOG_FILE", "0")

import pytest

from gigfeed.models import Coordinates, JobListing, PayInfo, PayType, UserProfile

# 2026-01-01T00:00:00Z in epoch ms
T0 = 1_767_225_600_000
DAY_MS = 24 * 60 * 60 * 1000


class FakeClock:
    def __init__(self, start: int = T0) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_job(
    job_id: str,
    category: str = "delivery",
    skills=(),
    pay: float = 0.0,
    pay_type: PayType = PayType.HOURLY,
    location: Coordinates | None = None,
) -> JobListing:
    return JobListing(
        id=job_id,
        category=category,
        skills=frozenset(skills),
        pay=PayInfo(amount=pay, type=pay_type),
        location=location,
    )


def make_user(skills=(), location: Coordinates | None = None) -> UserProfile:
    return UserProfile(id="u1", skills=frozenset(skills), location=location)
