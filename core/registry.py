#!/usr/bin/env python3
"""
Particle registry for Black Hole Sim.

The registry is the sole owner of live particles. Each tick it advances every
particle with the Verlet integrator, records traces, and removes particles
that were swallowed by the black hole or escaped far outside the viewport.

Removal never mutates the list being iterated: survivors are collected into a
new list that replaces the live set once the pass is complete, so no particle
is skipped or stepped twice.
"""
import logging
from collections import deque
from dataclasses import dataclass
from typing import List, Tuple

from .constants import ESCAPE_MARGIN, TRACE_CAPACITY
from .data_models import Particle
from .physics import FieldSource, verlet_step
from .vector_utils import Vec2
from .viewport import Viewport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickReport:
    """Counts of particles removed during one tick."""
    swallowed: int = 0
    escaped: int = 0

    @property
    def removed(self) -> int:
        return self.swallowed + self.escaped


class ParticleRegistry:
    """
    Unordered collection of live particles bound to one field source.
    """

    def __init__(self, field: FieldSource, trace_capacity: int = TRACE_CAPACITY,
                 escape_margin: float = ESCAPE_MARGIN):
        self.field = field
        self.trace_capacity = int(trace_capacity)
        self.escape_margin = float(escape_margin)
        self._particles: List[Particle] = []

    def __len__(self) -> int:
        return len(self._particles)

    def spawn(self, position: Vec2, velocity: Vec2) -> Particle:
        """Create a particle with zero acceleration and an empty trace."""
        particle = Particle(
            position=(float(position[0]), float(position[1])),
            velocity=(float(velocity[0]), float(velocity[1])),
            trace=deque(maxlen=self.trace_capacity),
        )
        self._particles.append(particle)
        return particle

    def particles(self) -> Tuple[Particle, ...]:
        """Read-only snapshot of the live particles."""
        return tuple(self._particles)

    def clear(self) -> None:
        self._particles = []

    def tick(self, dt: float, viewport: Viewport) -> TickReport:
        """
        Advance all live particles by dt and prune removed ones.

        Each particle gets exactly one removal check after its step: it is
        swallowed if it ended inside the black hole radius, otherwise it has
        escaped if it left the viewport grown by the escape margin (or its
        state is no longer finite).
        """
        swallowed = 0
        escaped = 0
        survivors: List[Particle] = []

        for particle in self._particles:
            r = verlet_step(particle, self.field, dt)
            particle.add_trace_point()

            if r < self.field.swallow_radius:
                swallowed += 1
            elif viewport.is_escaped(particle.position, self.escape_margin):
                escaped += 1
            else:
                survivors.append(particle)

        self._particles = survivors

        report = TickReport(swallowed=swallowed, escaped=escaped)
        if report.removed:
            logger.debug("Tick removed %d swallowed, %d escaped; %d live",
                         swallowed, escaped, len(survivors))
        return report
