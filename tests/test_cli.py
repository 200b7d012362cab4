"""
Unit tests for the command line entry point.

Tests cover:
- argument parsing defaults
- scenario name resolution
- startup failures that return before any window opens
"""

import json

import pytest

import black_hole_sim
from core import settings as settings_mod


@pytest.fixture
def scenarios_dir(tmp_path, monkeypatch):
    (tmp_path / "orbit.json").write_text(
        json.dumps({"name": "Circular orbit", "launches": []}), encoding="utf-8")
    (tmp_path / "plain.json").write_text(json.dumps({"launches": []}), encoding="utf-8")
    monkeypatch.setattr(settings_mod, "SCENARIOS_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def no_windows(monkeypatch):
    """Fail loudly if main gets far enough to open the viewport or controls."""
    def forbidden(*args, **kwargs):
        raise AssertionError("window opened")
    monkeypatch.setattr(black_hole_sim, "PygameRenderer", forbidden)
    monkeypatch.setattr(black_hole_sim, "UI", forbidden)
    monkeypatch.setattr(black_hole_sim, "setup_logging", lambda *a, **k: None)


class TestParseArgs:

    def test_defaults(self):
        args = black_hole_sim.parse_args([])
        assert args.config is None
        assert args.scenario is None
        assert args.log_level == "INFO"
        assert args.log_file is None

    def test_all_options(self):
        args = black_hole_sim.parse_args([
            "--config", "cfg.json",
            "--scenario", "Slingshot",
            "--log-level", "DEBUG",
            "--log-file", "run.log",
        ])
        assert args.config == "cfg.json"
        assert args.scenario == "Slingshot"
        assert args.log_level == "DEBUG"
        assert args.log_file == "run.log"


class TestResolveScenario:

    def test_display_name(self, scenarios_dir):
        assert black_hole_sim.resolve_scenario("Circular orbit") == "orbit.json"

    def test_file_name(self, scenarios_dir):
        assert black_hole_sim.resolve_scenario("orbit.json") == "orbit.json"

    def test_stem_is_display_name_without_name_key(self, scenarios_dir):
        assert black_hole_sim.resolve_scenario("plain") == "plain.json"

    def test_unknown_falls_through_as_path(self, scenarios_dir, tmp_path):
        path = str(tmp_path / "elsewhere" / "custom.json")
        assert black_hole_sim.resolve_scenario(path) == path


class TestMain:

    def test_missing_config_exits_2(self, tmp_path, no_windows):
        assert black_hole_sim.main(["--config", str(tmp_path / "nope.json")]) == 2

    def test_invalid_config_exits_2(self, tmp_path, no_windows):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"mass": -1}), encoding="utf-8")
        assert black_hole_sim.main(["--config", str(path)]) == 2

    def test_fractional_count_exits_2(self, tmp_path, no_windows):
        path = tmp_path / "frac.json"
        path.write_text(json.dumps({"trace_capacity": 1.5}), encoding="utf-8")
        assert black_hole_sim.main(["--config", str(path)]) == 2

    def test_error_is_logged(self, tmp_path, no_windows, caplog):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"g": 0}), encoding="utf-8")
        black_hole_sim.main(["--config", str(path)])
        assert "Invalid settings" in caplog.text
