#!/usr/bin/env python3
"""
Settings and scenario JSON loading utilities.

This module defines simple JSON schemas and loaders for:
- Simulation settings: overrides for the defaults in core.constants
- Launch scenarios: particles to spawn around the black hole (scenarios/*.json)

Schemas
=======
Settings JSON (passed with --config):
{
  "g": 100.0,
  "mass": 1000.0,
  "dt": 0.1,
  "swallow_radius": 32.0,
  "trace_capacity": 1200,
  "escape_margin": 2000.0,
  "launch_velocity_scale": 0.05,
  "frame_rate": 60,
  "view_width": 1100,
  "view_height": 800
}
Every key is optional. Unknown keys are ignored with a warning.

Scenario JSON (scenarios/*.json):
{
  "name": "Human-friendly scenario name",
  "description": "Optional description",
  "launches": [
    {"position": [200.0, 0.0], "velocity": [0.0, 22.36]}
  ]
}
Positions are relative to the black hole center so scenarios work at any
window size. Users can add their own JSON files into scenarios/ and they'll be
picked up by the loader.
"""
import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

from . import constants
from .vector_utils import Vec2, as_vec

logger = logging.getLogger(__name__)

SCENARIOS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "scenarios")

Launch = Tuple[Vec2, Vec2]


class SettingsError(ValueError):
  """Raised for unreadable settings files or out-of-range values."""


@dataclass(frozen=True)
class SimulationSettings:
  g: float = constants.G
  mass: float = constants.BH_MASS
  dt: float = constants.DT
  swallow_radius: float = constants.BH_RADIUS
  trace_capacity: int = constants.TRACE_CAPACITY
  escape_margin: float = constants.ESCAPE_MARGIN
  launch_velocity_scale: float = constants.LAUNCH_VELOCITY_SCALE
  frame_rate: int = constants.FRAME_RATE
  view_width: int = constants.VIEW_WIDTH
  view_height: int = constants.VIEW_HEIGHT

  def __post_init__(self):
    for name in ("g", "mass", "dt", "trace_capacity", "frame_rate", "view_width", "view_height"):
      if not getattr(self, name) > 0:
        raise SettingsError(f"{name} must be positive, got {getattr(self, name)!r}")
    for name in ("swallow_radius", "escape_margin"):
      if not getattr(self, name) >= 0:
        raise SettingsError(f"{name} must not be negative, got {getattr(self, name)!r}")

  def replace(self, **overrides) -> "SimulationSettings":
    """Return a copy with the given fields changed (validated)."""
    known = {f.name: f for f in dataclasses.fields(self)}
    clean = {}
    for key, value in overrides.items():
      if key not in known:
        logger.warning("Ignoring unknown setting %r", key)
        continue
      clean[key] = _coerce(known[key].type, key, value)
    return dataclasses.replace(self, **clean)


def _coerce(type_name, key: str, value):
  # Field types are strings under some Python versions, classes under others
  is_int = type_name in (int, "int")
  try:
    number = float(value)
  except (TypeError, ValueError):
    raise SettingsError(f"{key} must be a number, got {value!r}") from None
  if not is_int:
    return number
  if not number.is_integer():
    raise SettingsError(f"{key} must be a whole number, got {value!r}")
  return int(number)


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      return json.load(f)
  except (OSError, ValueError) as exc:
    logger.warning("Could not read %s: %s", path, exc)
    return None


def load_settings(path: Optional[str] = None) -> SimulationSettings:
  """
  Load settings from a JSON file on top of the defaults.
  Without a path, the defaults are returned.
  """
  if not path:
    return SimulationSettings()
  data = _read_json(path)
  if not isinstance(data, dict):
    raise SettingsError(f"Settings file {path} must contain a JSON object")
  settings = SimulationSettings().replace(**data)
  logger.info("Loaded settings from %s", path)
  return settings


def _display_name(data, file_name: str) -> str:
  name = data.get("name") if isinstance(data, dict) else None
  if name is None or name == "":
    return os.path.splitext(os.path.basename(file_name))[0]
  return str(name)


def list_scenarios() -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available scenarios."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(SCENARIOS_DIR):
    return items
  for fn in sorted(os.listdir(SCENARIOS_DIR)):
    if not fn.lower().endswith(".json"):
      continue
    data = _read_json(os.path.join(SCENARIOS_DIR, fn))
    items.append((fn, _display_name(data, fn)))
  return items


def load_scenario(file_name: str) -> Tuple[List[Launch], str]:
  """
  Load a scenario JSON by file name (or absolute path).
  Returns (launches, display_name); malformed launches are skipped.
  """
  path = file_name if os.path.isabs(file_name) else os.path.join(SCENARIOS_DIR, file_name)
  data = _read_json(path)
  if not isinstance(data, dict):
    data = {}
  display_name = _display_name(data, file_name)
  entries = data.get("launches", [])
  if not isinstance(entries, list):
    logger.warning("Ignoring launches in %s: expected a list, got %r", file_name, entries)
    entries = []
  launches: List[Launch] = []
  for entry in entries:
    try:
      launches.append((as_vec(entry["position"]), as_vec(entry["velocity"])))
    except (KeyError, IndexError, TypeError, ValueError):
      logger.warning("Skipping malformed launch in %s: %r", file_name, entry)
      continue
  return launches, display_name
