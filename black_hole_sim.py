#!/usr/bin/env python3
"""
Black Hole Sim application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared SimulationContext that owns the black hole, the particles and the
  overlay toggles; all access is guarded by a re-entrant lock for thread-safety.
- Turns mouse drags in the viewport into launches: press sets the start position, release
  sets the velocity ((end - start) scaled by the launch velocity scale).

Threading model
- PygameRenderer runs in a background thread and is the frame driver: per frame it handles
  input, advances the simulation by exactly one tick and draws a snapshot, then yields to
  the Pygame clock.
- The UI class runs in the main thread via Dear PyGui. Its buttons call SimulationContext
  methods (reset, toggles, scenarios); these are lock-protected.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python black_hole_sim.py [--config settings.json] [--scenario NAME]`

Viewport keys: R reset, T trace, V velocity vectors, A acceleration vectors, Esc quit.
"""

import argparse
import logging
import math
import sys
import threading
from typing import Optional

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from core.constants import (
    ACCEL_TEXT_COLOR,
    ACCEL_VECTOR_COLOR,
    BACKGROUND_COLOR,
    BH_CORE_COLOR,
    BH_GLOW_COLOR,
    BH_GLOW_OUTER_COLOR,
    HUD_TEXT_COLOR,
    PARTICLE_COLOR,
    PREVIEW_COLOR,
    SAFE_COORD_LIMIT,
    TRACE_COLOR,
    VELOCITY_TEXT_COLOR,
    VELOCITY_VECTOR_COLOR,
)
from core.settings import SettingsError, list_scenarios, load_scenario, load_settings
from core.simulation import FrameSnapshot, SimulationContext

logger = logging.getLogger("black_hole_sim")


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None):
    """Configure root logging: console always, file when requested."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: steps the simulation, draws the black hole, traces, particles and
    overlay vectors. Handles launch drags, resizing and keyboard toggles.
    """
    def __init__(self, sim: SimulationContext):
        super().__init__(daemon=True)
        self.sim = sim
        self.surface = None
        self.clock = None
        self.glow = None
        self.dragging = False
        self.drag_start = None
        self.preview_pos = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Black Hole Sim - Viewport")
        w, h = self.sim.viewport.size
        self.surface = pygame.display.set_mode((int(w), int(h)), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.glow = build_glow_surface(self.sim.field.swallow_radius)
        frame_rate = self.sim.settings.frame_rate
        logger.info("Viewport running at %d FPS, dt=%s", frame_rate, self.sim.dt)

        while self.running:
            self.handle_events()
            if not self.running:
                break

            # One tick per frame, regardless of how long the frame took
            self.sim.step()

            self.draw(self.sim.snapshot())

            self.clock.tick(frame_rate)

        pygame.quit()
        logger.info("Viewport closed")

    def stop(self):
        self.running = False
        try:
            dpg.stop_dearpygui()
        except Exception:
            pass

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.sim.resize(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.stop()
                elif event.key == pygame.K_r:
                    self.sim.clear()
                elif event.key == pygame.K_t:
                    self.sim.toggle_trace()
                elif event.key == pygame.K_v:
                    self.sim.toggle_velocity()
                elif event.key == pygame.K_a:
                    self.sim.toggle_acceleration()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.dragging = True
                self.drag_start = event.pos
                self.preview_pos = event.pos

            elif event.type == pygame.MOUSEMOTION:
                if self.dragging:
                    self.preview_pos = event.pos

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                if not self.dragging:
                    continue
                self.dragging = False
                self.sim.launch_from_drag(self.drag_start, event.pos)
                self.drag_start = None
                self.preview_pos = None

    def draw_black_hole(self, surf, snap: FrameSnapshot):
        cx, cy = snap.center
        gw, gh = self.glow.get_size()
        surf.blit(self.glow, (int(cx - gw / 2), int(cy - gh / 2)))
        center_s = _safe_point(snap.center)
        if center_s:
            radius = max(1, int(snap.swallow_radius))
            gfxdraw.filled_circle(surf, center_s[0], center_s[1], radius, BH_CORE_COLOR)
            gfxdraw.aacircle(surf, center_s[0], center_s[1], radius, BH_CORE_COLOR)

    def draw_preview(self, surf):
        start_s = _safe_point(self.drag_start)
        end_s = _safe_point(self.preview_pos)
        if start_s and end_s:
            pygame.draw.line(surf, PREVIEW_COLOR, start_s, end_s, 1)
            gfxdraw.filled_circle(surf, start_s[0], start_s[1], 4, PREVIEW_COLOR)

    def draw(self, snap: FrameSnapshot):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        self.draw_black_hole(surf, snap)

        if self.dragging and self.drag_start and self.preview_pos:
            self.draw_preview(surf)

        for view in snap.particles:
            if view.velocity_vector is not None:
                draw_overlay(surf, view.velocity_vector, VELOCITY_VECTOR_COLOR,
                             VELOCITY_TEXT_COLOR, text_dy=-18)
            if view.acceleration_vector is not None:
                draw_overlay(surf, view.acceleration_vector, ACCEL_VECTOR_COLOR,
                             ACCEL_TEXT_COLOR, text_dy=-6)

        for view in snap.particles:
            if snap.show_trace and len(view.trace) > 1:
                pts = [p for p in (_safe_point(t) for t in view.trace) if p]
                if len(pts) > 1:
                    pygame.draw.aalines(surf, TRACE_COLOR, False, pts)
            pos_s = _safe_point(view.position)
            if pos_s:
                gfxdraw.filled_circle(surf, pos_s[0], pos_s[1], 3, PARTICLE_COLOR)
                gfxdraw.aacircle(surf, pos_s[0], pos_s[1], 3, PARTICLE_COLOR)

        # HUD text
        draw_text(surf, "Drag: launch | R: reset | T: trace | V: velocity | A: acceleration", 10, 10, HUD_TEXT_COLOR)
        draw_text(surf, f"Particles: {len(snap.particles)}  Swallowed: {snap.total_swallowed}  "
                        f"Escaped: {snap.total_escaped}  t={snap.sim_time:.1f}", 10, 30, HUD_TEXT_COLOR)

        pygame.display.flip()


def build_glow_surface(bh_radius: float):
    """
    Pre-render the accretion glow: a radial gradient from the swallow radius out to
    ten times it, fading from orange to transparent.
    """
    outer = int(bh_radius * 10)
    size = outer * 2 + 2
    glow = pygame.Surface((size, size), pygame.SRCALPHA)
    c = size // 2
    # Outer rings first; each smaller disc overwrites the middle of the previous one
    for r in range(outer, int(bh_radius) - 1, -1):
        t = (r - bh_radius) / max(outer - bh_radius, 1.0)
        if t <= 0.5:
            k = t / 0.5
            color = _lerp(BH_GLOW_COLOR, BH_GLOW_OUTER_COLOR, k)
            alpha = 0.9 + (0.25 - 0.9) * k
        else:
            k = (t - 0.5) / 0.5
            color = BH_GLOW_OUTER_COLOR
            alpha = 0.25 * (1.0 - k)
        pygame.draw.circle(glow, (*color, int(255 * alpha)), (c, c), r)
    return glow


def _lerp(a, b, k):
    return tuple(int(a[i] + (b[i] - a[i]) * k) for i in range(3))


def draw_overlay(surface, vector, line_color, text_color, text_dy):
    start_s = _safe_point(vector.start)
    end_s = _safe_point(vector.end)
    if start_s and end_s:
        pygame.draw.line(surface, line_color, start_s, end_s, 2)
        draw_arrow_head(surface, end_s, start_s, line_color)
    if start_s:
        draw_text(surface, vector.label, start_s[0] + 6, start_s[1] + text_dy, text_color)


_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("arial", 12)
        except Exception:
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))

def _safe_point(pt):
    if pt is None:
        return None
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

def draw_arrow_head(surface, tip, tail, color):
    # Small triangle for arrow head
    dx = tip[0] - tail[0]
    dy = tip[1] - tail[1]
    if dx == 0 and dy == 0:
        return
    ang = math.atan2(dy, dx)
    size = 8
    left = (tip[0] - size * math.cos(ang - math.pi / 6), tip[1] - size * math.sin(ang - math.pi / 6))
    right = (tip[0] - size * math.cos(ang + math.pi / 6), tip[1] - size * math.sin(ang + math.pi / 6))
    left_s = _safe_point(left)
    right_s = _safe_point(right)
    if left_s and right_s:
        pygame.draw.polygon(surface, color, [tip, left_s, right_s])

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui control window: reset, overlay toggles, scenarios, live counters.
    """
    def __init__(self, sim: SimulationContext):
        self.sim = sim
        self.status_msg_id = None
        self.stats_id = None
        self._scenario_map = {}

        self._build_ui()

        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        try:
            current = dpg.get_frame_count()
        except Exception:
            current = 0
        dpg.set_frame_callback(current + 6, self._sync_ui_with_sim)

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Black Hole Sim - Controls', width=380, height=300)

        with dpg.window(label="Controls", width=360, height=280, pos=(10, 10), tag="main_window"):
            dpg.add_button(label="Reset", callback=self._reset)
            dpg.add_separator()

            dpg.add_checkbox(label="Show trace", default_value=self.sim.show_trace,
                             callback=lambda s, a: self.sim.set_show_trace(a), tag="trace_checkbox")
            dpg.add_checkbox(label="Show velocity vectors", default_value=self.sim.show_velocity,
                             callback=lambda s, a: self.sim.set_show_velocity(a), tag="velocity_checkbox")
            dpg.add_checkbox(label="Show acceleration vectors", default_value=self.sim.show_acceleration,
                             callback=lambda s, a: self.sim.set_show_acceleration(a), tag="accel_checkbox")
            dpg.add_separator()

            with dpg.group(horizontal=True):
                dpg.add_text("Scenario:")
                for fn, display in list_scenarios():
                    self._scenario_map[display] = fn
                items = list(self._scenario_map.keys())
                dpg.add_combo(items, default_value=items[0] if items else "", width=180,
                              tag="scenario_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_scenario(dpg.get_value("scenario_combo")))
            dpg.add_separator()

            self.stats_id = dpg.add_text("")
            self.status_msg_id = dpg.add_text("Drag in the viewport to launch a particle.",
                                              color=(180, 220, 180))

        dpg.setup_dearpygui()
        dpg.show_viewport()

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _reset(self):
        self.sim.clear()
        self._set_status("Cleared all particles.")

    def load_scenario(self, name: str):
        fn = self._scenario_map.get(name)
        if not fn:
            self._set_status(f"Unknown scenario: {name}", color=(255, 120, 120))
            return
        launches, display_name = load_scenario(fn)
        n = self.sim.load_scenario(launches)
        self._set_status(f"Loaded scenario: {display_name} ({n} particles)")

    def _sync_ui_with_sim(self):
        """Periodic UI update: counters and checkboxes (keys in the viewport also toggle)."""
        snap = self.sim.snapshot()
        dpg.set_value(self.stats_id,
                      f"Particles: {len(snap.particles)}\n"
                      f"Swallowed: {snap.total_swallowed}  Escaped: {snap.total_escaped}\n"
                      f"Ticks: {snap.tick_count}  t = {snap.sim_time:.1f}")
        dpg.set_value("trace_checkbox", snap.show_trace)
        dpg.set_value("velocity_checkbox", snap.show_velocity)
        dpg.set_value("accel_checkbox", snap.show_acceleration)
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def resolve_scenario(name: str) -> str:
    """Map a scenario display name to its file; anything else is used as a path."""
    for fn, display in list_scenarios():
        if name in (display, fn):
            return fn
    return name


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Interactive 2D black hole gravity visualization")
    parser.add_argument("--config", help="JSON settings file overriding the defaults")
    parser.add_argument("--scenario", help="Scenario name or JSON file to launch at startup")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        settings = load_settings(args.config)
    except SettingsError as exc:
        logger.error("Invalid settings: %s", exc)
        return 2

    sim = SimulationContext(settings)

    if args.scenario:
        launches, display_name = load_scenario(resolve_scenario(args.scenario))
        sim.load_scenario(launches)
        logger.info("Loaded scenario %s", display_name)

    renderer = PygameRenderer(sim)

    # Start Pygame renderer thread
    renderer.start()

    UI(sim)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()
    return 0

if __name__ == "__main__":
    sys.exit(main())
