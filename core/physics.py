#!/usr/bin/env python3
"""
Core Physics Engine for Black Hole Sim

Responsibilities
- Model the gravitational field of a single fixed point mass (the black hole).
- Advance particle states with the velocity Verlet (symplectic) integrator.
- Provide small helpers for common orbital computations (circular and escape
  velocity, specific orbital energy).

Units and conventions
- Normalized units: positions in pixels, time in frame ticks scaled by dt.
- G and the central mass are only ever used as their product GM.
- Particles are test masses: they feel the field but do not perturb it, and
  they do not interact with each other.

Numerical notes
- Velocity Verlet evaluates the field twice per step (start and end of the
  step) and averages the two accelerations for the velocity update. It is
  time reversible and symplectic, so the energy error of a bound orbit
  oscillates instead of drifting, which keeps orbits and slingshots visually
  stable over long runs.
- The only singularity guard is r == 0, which yields zero acceleration.
  Particles never get that close in practice because they are swallowed at
  the black hole radius.
"""

import math
from typing import Tuple

from .constants import BH_MASS, BH_RADIUS, G
from .data_models import Particle
from .vector_utils import Vec2


class FieldSource:
    """
    The black hole: a fixed point mass with inverse-square attraction.

    G and mass are fixed when the source is created. Only the center moves,
    and only when the viewport is resized.

    The acceleration of a test particle at distance r is:
    a = -G * M * (p - c) / r^3
    """

    def __init__(self, g: float = G, mass: float = BH_MASS,
                 center: Vec2 = (0.0, 0.0), swallow_radius: float = BH_RADIUS):
        """
        Initialize the field source.

        Args:
            g: Gravitational constant (must be > 0)
            mass: Central mass (must be > 0)
            center: Initial (x, y) position of the black hole
            swallow_radius: Distance below which particles are consumed
        """
        if not g > 0 or not mass > 0:
            raise ValueError(f"G and mass must be positive (got G={g!r}, M={mass!r})")
        self._g = float(g)
        self._mass = float(mass)
        self.center = (float(center[0]), float(center[1]))
        self.swallow_radius = max(0.0, float(swallow_radius))

    @property
    def g(self) -> float:
        return self._g

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def gm(self) -> float:
        """Standard gravitational parameter G * M."""
        return self._g * self._mass

    def recenter(self, width: float, height: float) -> None:
        """Keep the black hole in the middle of a (width x height) viewport."""
        self.center = (width / 2, height / 2)

    def acceleration(self, position: Vec2) -> Tuple[float, float, float]:
        """
        Gravitational acceleration at a position.

        Args:
            position: (x, y) of the test particle

        Returns:
            (ax, ay, r) where r is the distance to the center. At the center
            itself the result is (0, 0, 0).
        """
        dx = position[0] - self.center[0]
        dy = position[1] - self.center[1]
        r = math.sqrt(dx * dx + dy * dy)
        if r == 0:
            return (0.0, 0.0, 0.0)
        # r * r underflows to 0 for subnormal r
        a_mag = self.gm / (r * r) if r * r > 0 else math.inf
        ax = -a_mag * (dx / r)
        ay = -a_mag * (dy / r)
        return (ax, ay, r)


def verlet_step(particle: Particle, field: FieldSource, dt: float) -> float:
    """
    Advance one particle by dt with velocity Verlet, in place.

    Workflow:
    1) a0 at x(t), stored on the particle
    2) x(t+dt) = x + v*dt + 0.5*a0*dt^2
    3) a1 at x(t+dt)
    4) v(t+dt) = v + 0.5*(a0 + a1)*dt
    5) store a1

    Args:
        particle: Particle to integrate (modified in place)
        field: Field source providing the acceleration
        dt: Time step (fixed, not adaptive)

    Returns:
        Distance to the field center after the step.
    """
    ax0, ay0, _ = field.acceleration(particle.position)
    particle.acceleration = (ax0, ay0)

    x, y = particle.position
    vx, vy = particle.velocity
    particle.position = (
        x + vx * dt + 0.5 * ax0 * dt * dt,
        y + vy * dt + 0.5 * ay0 * dt * dt,
    )

    ax1, ay1, r = field.acceleration(particle.position)
    particle.velocity = (
        vx + 0.5 * (ax0 + ax1) * dt,
        vy + 0.5 * (ay0 + ay1) * dt,
    )
    particle.acceleration = (ax1, ay1)
    return r


def specific_energy(particle: Particle, field: FieldSource) -> float:
    """
    Specific orbital energy (per unit mass): 0.5 * |v|^2 - GM / r.

    Negative values are bound orbits, positive values escape. Returns -inf
    for a particle exactly at the center.
    """
    vx, vy = particle.velocity
    _, _, r = field.acceleration(particle.position)
    if r == 0:
        return -math.inf
    return 0.5 * (vx * vx + vy * vy) - field.gm / r


def circular_orbit_velocity(gm: float, orbital_radius: float) -> float:
    """
    Speed needed for a circular orbit at a given radius.

    Gravity provides the centripetal force: GM / r^2 = v^2 / r, so
    v = sqrt(GM / r).
    """
    if orbital_radius <= 0:
        return 0.0

    return math.sqrt(gm / orbital_radius)


def escape_velocity(gm: float, distance: float) -> float:
    """
    Minimum speed needed to escape the black hole from a given distance:
    v_escape = sqrt(2 * GM / r).
    """
    if distance <= 0 or gm <= 0:
        return 0.0

    return math.sqrt(2.0 * gm / distance)
