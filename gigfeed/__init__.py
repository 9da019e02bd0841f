from .models import (
    Coordinates,
    InteractionAction,
    JobListing,
    JobScore,
    PayInfo,
    PayType,
    RankOptions,
    ScoreWeights,
    ScoredListing,
    UserProfile,
)
from .interactions import InteractionLog, JsonFileStorage, MemoryStorage
from .ranker import JobRanker

__all__ = [
    "Coordinates", "InteractionAction", "JobListing", "JobScore", "PayInfo",
    "PayType", "RankOptions", "ScoreWeights", "ScoredListing", "UserProfile",
    "InteractionLog", "JsonFileStorage", "MemoryStorage", "JobRanker",
]
