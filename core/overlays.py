#!/usr/bin/env python3
"""
Overlay computations for the viewport: velocity and acceleration arrows with
numeric readouts.

These are derived, read-only values. The acceleration overlay asks the same
FieldSource.acceleration the integrator uses, so the arrow always matches the
physics.
"""
from dataclasses import dataclass

from .constants import ACCEL_ARROW_SCALE, VELOCITY_ARROW_SCALE
from .data_models import Particle
from .physics import FieldSource
from .vector_utils import Vec2, vec_add, vec_len, vec_scale


@dataclass(frozen=True)
class OverlayVector:
    """An arrow from start to end plus its text readout."""
    start: Vec2
    end: Vec2
    magnitude: float
    label: str


def format_magnitude(value: float) -> str:
    """Scientific notation with two fractional digits, e.g. 1.23e+02."""
    return f"{value:.2e}"


def velocity_overlay(particle: Particle, scale: float = VELOCITY_ARROW_SCALE) -> OverlayVector:
    v = particle.velocity
    magnitude = vec_len(v)
    return OverlayVector(
        start=particle.position,
        end=vec_add(particle.position, vec_scale(v, scale)),
        magnitude=magnitude,
        label="v=" + format_magnitude(magnitude),
    )


def acceleration_overlay(particle: Particle, field: FieldSource,
                         scale: float = ACCEL_ARROW_SCALE) -> OverlayVector:
    ax, ay, _ = field.acceleration(particle.position)
    magnitude = vec_len((ax, ay))
    return OverlayVector(
        start=particle.position,
        end=vec_add(particle.position, vec_scale((ax, ay), scale)),
        magnitude=magnitude,
        label="a=" + format_magnitude(magnitude),
    )
