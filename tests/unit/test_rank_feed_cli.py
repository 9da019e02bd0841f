import logging
from pathlib import Path
from unittest.mock import patch

import pytest

import rank_feed


@pytest.fixture
def workspace(tmp_path: Path) -> dict:
    store = tmp_path / "interactions.json"
    settings = tmp_path / "settings.yaml"
    settings.write_text(f"storage:\n  path: {store}\n", encoding="utf-8")

    jobs = tmp_path / "jobs.yaml"
    jobs.write_text(
        "- id: near\n"
        "  category: delivery\n"
        "  skills: [driving]\n"
        "  pay: {amount: 50, type: hourly}\n"
        "  location: {lat: 0.0, lng: 0.0}\n"
        "- id: far\n"
        "  category: tech\n"
        "  skills: [html]\n"
        "  pay: 5000\n"
        "  location: {lat: 2.0, lng: 0.0}\n",
        encoding="utf-8",
    )
    profile = tmp_path / "profile.yaml"
    profile.write_text("id: u1\nskills: [driving]\nlocation: {lat: 0.0, lng: 0.0}\n", encoding="utf-8")
    return {"settings": settings, "jobs": jobs, "profile": profile, "store": store}


def _base_args(ws):
    return ["--settings", str(ws["settings"]), "--jobs", str(ws["jobs"]), "--profile", str(ws["profile"])]


def _ranked_ids(out: str) -> list[str]:
    rows = [line.split() for line in out.splitlines()]
    return [r[1] for r in rows if r and r[0].rstrip(".").isdigit()]


def test_cli_ranks_jobs(workspace, capsys):
    assert rank_feed.main(_base_args(workspace)) == 0
    assert _ranked_ids(capsys.readouterr().out) == ["near", "far"]


def test_cli_radius_filter(workspace, capsys):
    assert rank_feed.main(_base_args(workspace) + ["--radius", "100"]) == 0
    assert _ranked_ids(capsys.readouterr().out) == ["near"]


def test_cli_record_then_rank(workspace, capsys):
    for _ in range(2):
        assert rank_feed.main(["--settings", str(workspace["settings"]), "--record", "far", "apply"]) == 0
    assert workspace["store"].exists()
    assert rank_feed.main(["--settings", str(workspace["settings"]), "--record", "far", "poke"]) == 2


def test_cli_missing_inputs(tmp_path: Path, workspace):
    args = ["--settings", str(workspace["settings"]), "--jobs", str(tmp_path / "x.yaml"), "--profile", str(tmp_path / "y.yaml")]
    assert rank_feed.main(args) == 1


def test_cli_failed_locate_scores_location_as_unknown(workspace, capsys):
    with patch("rank_feed.resolve_location", return_value=None):
        assert rank_feed.main(_base_args(workspace) + ["--locate"]) == 0
    out = capsys.readouterr().out
    rows = [line for line in out.splitlines() if " loc=" in line]
    assert len(rows) == 2
    assert all("loc=0.50" in row for row in rows)


def test_cli_uses_profile_location_without_locate(workspace, capsys):
    assert rank_feed.main(_base_args(workspace)) == 0
    out = capsys.readouterr().out
    near = next(line for line in out.splitlines() if " near " in line)
    assert "loc=1.00" in near


def test_cli_log_level_flag(workspace):
    root = logging.getLogger()
    before = root.level
    try:
        assert rank_feed.main(_base_args(workspace) + ["--log-level", "WARNING"]) == 0
        assert root.level == logging.WARNING
    finally:
        root.setLevel(before)
