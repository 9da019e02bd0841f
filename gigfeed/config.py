"""Load ranker settings from YAML and the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from gigfeed.log import get_logger
from gigfeed.models import ScoreWeights

log = get_logger(__name__)

load_dotenv()

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = PROJECT_ROOT / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"
DATA_DIR: Path = Path(os.environ.get("GIGFEED_DATA_DIR") or PROJECT_ROOT / "data")

DEFAULT_GEOLOCATION_URL = "https://ipapi.co/json/"
WEIGHT_SUM_TOLERANCE = 1e-6


@dataclass(frozen=True)
class RankerSettings:
    max_distance_km: float = 50.0
    recency_window_days: float = 30.0
    priority_increase: float = 0.1
    base_weights: ScoreWeights = field(default_factory=ScoreWeights)
    storage_path: Path = field(default_factory=lambda: DATA_DIR / "interactions.json")
    geolocation_timeout_s: float = 10.0
    geolocation_url: str = DEFAULT_GEOLOCATION_URL

    @property
    def recency_window_ms(self) -> int:
        return int(self.recency_window_days * 24 * 60 * 60 * 1000)


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _env_float(name: str, default: float) -> float:
    raw = get_env(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring %s=%r (not a number)", name, raw)
        return default


def load_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def parse_weights(raw: dict[str, Any]) -> ScoreWeights:
    """Build a weight vector from a mapping, rejecting vectors that don't sum to 1."""
    defaults = ScoreWeights().as_dict()
    unknown = set(raw) - set(defaults)
    if unknown:
        raise ValueError(f"Unknown weight factor(s): {', '.join(sorted(unknown))}")
    values = {k: float(raw.get(k, v)) for k, v in defaults.items()}
    if any(v < 0 for v in values.values()):
        raise ValueError("Score weights must be non-negative")
    weights = ScoreWeights(**values)
    if abs(weights.total() - 1.0) > WEIGHT_SUM_TOLERANCE:
        raise ValueError(f"Score weights must sum to 1.0 (got {weights.total():.6f})")
    return weights


def load_settings(path: Path | None = None) -> RankerSettings:
    settings_path = path or SETTINGS_PATH
    data: dict[str, Any] = {}
    if settings_path.exists():
        data = load_yaml(settings_path) or {}
        log.debug("Loaded settings from %s", settings_path)

    ranking = data.get("ranking", {}) or {}
    geo = data.get("geolocation", {}) or {}
    storage = data.get("storage", {}) or {}

    base_weights = parse_weights(ranking["weights"]) if ranking.get("weights") else ScoreWeights()
    storage_path = Path(storage["path"]) if storage.get("path") else DATA_DIR / "interactions.json"

    max_distance = float(ranking.get("max_distance_km", 50.0))
    window_days = float(ranking.get("recency_window_days", 30.0))
    geo_timeout = float(geo.get("timeout_s", 10.0))

    return RankerSettings(
        max_distance_km=_env_float("GIGFEED_MAX_DISTANCE_KM", max_distance),
        recency_window_days=_env_float("GIGFEED_RECENCY_WINDOW_DAYS", window_days),
        priority_increase=float(ranking.get("priority_increase", 0.1)),
        base_weights=base_weights,
        storage_path=storage_path,
        geolocation_timeout_s=_env_float("GIGFEED_GEO_TIMEOUT", geo_timeout),
        geolocation_url=geo.get("url") or get_env("GIGFEED_GEO_URL") or DEFAULT_GEOLOCATION_URL,
    )
