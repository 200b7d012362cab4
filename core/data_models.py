#!/usr/bin/env python3
"""
Data models for Black Hole Sim.

This module defines the Particle dataclass shared between physics, the
registry and rendering.

Units and usage
- position is in pixels, velocity in pixels per time unit, acceleration in
  pixels per time unit squared (normalized units, not SI).
- acceleration holds the last value computed by the integrator.
- trace stores past positions to render motion paths. It is a bounded deque,
  so appending past capacity evicts the oldest point.
- Particles are owned by a ParticleRegistry; access from the UI thread goes
  through SimulationContext, which holds a lock.
"""
from collections import deque
from dataclasses import dataclass, field
from typing import Deque

from .constants import TRACE_CAPACITY
from .vector_utils import Vec2


@dataclass
class Particle:
    """
    A test particle (projectile) moving in the field of the black hole.

    Fields:
    - position: 2D position (x, y)
    - velocity: 2D velocity (vx, vy)
    - acceleration: last computed acceleration (ax, ay); zero on spawn
    - trace: deque of past positions, oldest first
    """
    position: Vec2
    velocity: Vec2
    acceleration: Vec2 = (0.0, 0.0)
    trace: Deque[Vec2] = field(default_factory=lambda: deque(maxlen=TRACE_CAPACITY))

    def add_trace_point(self) -> None:
        """Append the current position to the trace."""
        self.trace.append(self.position)
