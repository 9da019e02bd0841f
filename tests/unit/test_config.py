from pathlib import Path

import pytest

from gigfeed.config import RankerSettings, load_settings, parse_weights
from gigfeed.models import ScoreWeights


def test_missing_settings_file_gives_defaults(tmp_path: Path, monkeypatch):
    for name in ("GIGFEED_MAX_DISTANCE_KM", "GIGFEED_RECENCY_WINDOW_DAYS", "GIGFEED_GEO_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    s = load_settings(tmp_path / "nope.yaml")
    assert s.max_distance_km == 50.0
    assert s.recency_window_days == 30.0
    assert s.recency_window_ms == 30 * 24 * 60 * 60 * 1000
    assert s.base_weights == ScoreWeights()
    assert s.geolocation_timeout_s == 10.0


def test_settings_file_values(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("GIGFEED_MAX_DISTANCE_KM", raising=False)
    path = tmp_path / "settings.yaml"
    path.write_text(
        "ranking:\n"
        "  max_distance_km: 25\n"
        "  recency_window_days: 7\n"
        "  weights:\n"
        "    skill_match: 0.4\n"
        "    location_match: 0.2\n"
        "    pay_match: 0.2\n"
        "    category_match: 0.1\n"
        "    user_preference: 0.1\n"
        "storage:\n"
        f"  path: {tmp_path / 'store.json'}\n",
        encoding="utf-8",
    )
    s = load_settings(path)
    assert s.max_distance_km == 25.0
    assert s.recency_window_ms == 7 * 24 * 60 * 60 * 1000
    assert s.base_weights.skill_match == 0.4
    assert s.storage_path == tmp_path / "store.json"


def test_env_overrides_file(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("GIGFEED_MAX_DISTANCE_KM", "12.5")
    monkeypatch.setenv("GIGFEED_GEO_TIMEOUT", "soon")
    s = load_settings(tmp_path / "nope.yaml")
    assert s.max_distance_km == 12.5
    assert s.geolocation_timeout_s == 10.0


def test_parse_weights_partial_mapping_must_still_sum_to_one():
    with pytest.raises(ValueError):
        parse_weights({"skill_match": 0.5})


def test_parse_weights_rejects_unknown_and_negative():
    with pytest.raises(ValueError):
        parse_weights({"charisma": 0.1})
    with pytest.raises(ValueError):
        parse_weights({"skill_match": -0.1, "location_match": 0.65})


def test_parse_weights_accepts_valid_vector():
    w = parse_weights({"skill_match": 0.35, "location_match": 0.2})
    assert w.total() == pytest.approx(1.0)


def test_settings_are_immutable():
    with pytest.raises(Exception):
        RankerSettings().max_distance_km = 1  # type: ignore[misc]
