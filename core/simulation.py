#!/usr/bin/env python3
"""
Simulation context: the single owner of all mutable simulation state.

SimulationContext bundles the field source, particle registry, viewport,
overlay toggles and run counters. The Pygame viewport thread drives it one
tick per frame and the Dear PyGui control thread toggles and resets it; every
public method holds a re-entrant lock, so a launch or reset never lands in the
middle of a tick.

Renderers never touch particles directly. They call snapshot(), which copies
positions, traces and overlay vectors into immutable FrameSnapshot objects.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .overlays import OverlayVector, acceleration_overlay, velocity_overlay
from .physics import FieldSource
from .registry import ParticleRegistry, TickReport
from .settings import Launch, SimulationSettings
from .vector_utils import Vec2, vec_add, vec_scale, vec_sub
from .viewport import Viewport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParticleView:
    """Render-only copy of one particle."""
    position: Vec2
    trace: Tuple[Vec2, ...]
    velocity_vector: Optional[OverlayVector] = None
    acceleration_vector: Optional[OverlayVector] = None


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything the render pass needs for one frame."""
    particles: Tuple[ParticleView, ...]
    center: Vec2
    swallow_radius: float
    show_trace: bool
    show_velocity: bool
    show_acceleration: bool
    tick_count: int
    sim_time: float
    total_swallowed: int
    total_escaped: int


class SimulationContext:
    """
    Shared simulation state with lock-protected operations.
    """

    def __init__(self, settings: Optional[SimulationSettings] = None):
        self.lock = threading.RLock()
        self.settings = settings or SimulationSettings()
        s = self.settings

        self.viewport = Viewport(s.view_width, s.view_height)
        self.field = FieldSource(
            g=s.g,
            mass=s.mass,
            center=self.viewport.center,
            swallow_radius=s.swallow_radius,
        )
        self.registry = ParticleRegistry(
            self.field,
            trace_capacity=s.trace_capacity,
            escape_margin=s.escape_margin,
        )
        self.dt = s.dt

        self.show_trace = True
        self.show_velocity = False
        self.show_acceleration = False

        self.tick_count = 0
        self.sim_time = 0.0
        self.total_swallowed = 0
        self.total_escaped = 0

    # -----------------------
    # Input events
    # -----------------------

    def launch(self, start: Vec2, velocity: Vec2) -> None:
        """Spawn a projectile at start with the given initial velocity."""
        with self.lock:
            self.registry.spawn(start, velocity)
        logger.info("Launched particle at (%.1f, %.1f) with v=(%.3f, %.3f)",
                    start[0], start[1], velocity[0], velocity[1])

    def launch_from_drag(self, start: Vec2, end: Vec2) -> Vec2:
        """Launch from a completed drag gesture; returns the velocity used."""
        velocity = vec_scale(vec_sub(end, start), self.settings.launch_velocity_scale)
        self.launch(start, velocity)
        return velocity

    def load_scenario(self, launches: Iterable[Launch], replace: bool = True) -> int:
        """
        Spawn launches whose positions are relative to the black hole.
        Returns the number of particles spawned.
        """
        count = 0
        with self.lock:
            if replace:
                self.clear()
            for offset, velocity in launches:
                self.registry.spawn(vec_add(self.field.center, offset), velocity)
                count += 1
        logger.info("Scenario spawned %d particles", count)
        return count

    def resize(self, width: float, height: float) -> None:
        with self.lock:
            self.viewport.set_size(width, height)
            self.field.recenter(width, height)
        logger.info("Viewport resized to %dx%d", width, height)

    def clear(self) -> None:
        """Remove every particle immediately."""
        with self.lock:
            n = len(self.registry)
            self.registry.clear()
        logger.info("Cleared %d particles", n)

    # -----------------------
    # Toggles
    # -----------------------

    def set_show_trace(self, value: bool) -> None:
        with self.lock:
            self.show_trace = bool(value)

    def set_show_velocity(self, value: bool) -> None:
        with self.lock:
            self.show_velocity = bool(value)

    def set_show_acceleration(self, value: bool) -> None:
        with self.lock:
            self.show_acceleration = bool(value)

    def toggle_trace(self) -> bool:
        with self.lock:
            self.show_trace = not self.show_trace
            return self.show_trace

    def toggle_velocity(self) -> bool:
        with self.lock:
            self.show_velocity = not self.show_velocity
            return self.show_velocity

    def toggle_acceleration(self) -> bool:
        with self.lock:
            self.show_acceleration = not self.show_acceleration
            return self.show_acceleration

    # -----------------------
    # Frame loop
    # -----------------------

    def step(self) -> TickReport:
        """
        Advance the simulation by one nominal dt. Called once per frame; no
        catch-up for slow frames.
        """
        with self.lock:
            report = self.registry.tick(self.dt, self.viewport)
            self.tick_count += 1
            self.sim_time += self.dt
            self.total_swallowed += report.swallowed
            self.total_escaped += report.escaped
        return report

    def snapshot(self) -> FrameSnapshot:
        with self.lock:
            views = []
            for particle in self.registry.particles():
                views.append(ParticleView(
                    position=particle.position,
                    trace=tuple(particle.trace) if self.show_trace else (),
                    velocity_vector=velocity_overlay(particle) if self.show_velocity else None,
                    acceleration_vector=(acceleration_overlay(particle, self.field)
                                         if self.show_acceleration else None),
                ))
            return FrameSnapshot(
                particles=tuple(views),
                center=self.field.center,
                swallow_radius=self.field.swallow_radius,
                show_trace=self.show_trace,
                show_velocity=self.show_velocity,
                show_acceleration=self.show_acceleration,
                tick_count=self.tick_count,
                sim_time=self.sim_time,
                total_swallowed=self.total_swallowed,
                total_escaped=self.total_escaped,
            )

    @property
    def particle_count(self) -> int:
        with self.lock:
            return len(self.registry)
