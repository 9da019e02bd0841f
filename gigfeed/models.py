"""Data models for listings, profiles, interactions and scores."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PayType(str, Enum):
    HOURLY = "hourly"
    FIXED = "fixed"
    DAILY = "daily"


class InteractionAction(str, Enum):
    VIEW = "view"
    APPLY = "apply"
    FAVORITE = "favorite"
    REJECT = "reject"


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True)
class PayInfo:
    amount: float
    type: PayType = PayType.FIXED


@dataclass(frozen=True)
class JobListing:
    id: str
    category: str
    skills: frozenset[str] = frozenset()
    pay: PayInfo = field(default_factory=lambda: PayInfo(0.0))
    location: Coordinates | None = None
    title: str = ""


@dataclass(frozen=True)
class UserProfile:
    id: str
    skills: frozenset[str] = frozenset()
    location: Coordinates | None = None


@dataclass(frozen=True)
class Interaction:
    job_id: str
    action: InteractionAction
    timestamp: int  # epoch ms

    def to_dict(self) -> dict:
        return {"job_id": self.job_id, "action": self.action.value, "timestamp": self.timestamp}


@dataclass
class PreferenceAffinity:
    """Unnormalized implicit-feedback weights keyed by category and by skill."""

    category_affinity: dict[str, float] = field(default_factory=dict)
    skill_affinity: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ScoreWeights:
    skill_match: float = 0.30
    location_match: float = 0.25
    pay_match: float = 0.20
    category_match: float = 0.15
    user_preference: float = 0.10

    def total(self) -> float:
        return (
            self.skill_match
            + self.location_match
            + self.pay_match
            + self.category_match
            + self.user_preference
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "skill_match": self.skill_match,
            "location_match": self.location_match,
            "pay_match": self.pay_match,
            "category_match": self.category_match,
            "user_preference": self.user_preference,
        }


@dataclass(frozen=True)
class JobScore:
    job_id: str
    total: float
    skill_match: float
    location_match: float
    pay_match: float
    category_match: float
    user_preference: float


@dataclass(frozen=True)
class RankOptions:
    prioritize_location: bool = False
    prioritize_pay: bool = False
    prioritize_skills: bool = False
    max_distance_km: float | None = None  # None -> configured default
    user_location: Coordinates | None = None


@dataclass(frozen=True)
class ScoredListing:
    job: JobListing
    score: JobScore
    quality: str
