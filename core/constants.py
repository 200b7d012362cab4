#!/usr/bin/env python3
"""
Shared constants for Black Hole Sim (normalized units: pixels and frames).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier. Everything here can be overridden through a
JSON settings file (see core.settings).
"""

# Field source
G = 100.0  # normalized gravitational constant
BH_MASS = 1000.0  # central mass; G * BH_MASS sets the field strength
BH_RADIUS = 32.0  # swallow radius in pixels

# Physics controls
DT = 0.1  # fixed time step per frame tick
TRACE_CAPACITY = 1200  # positions kept per particle trace (oldest evicted first)
ESCAPE_MARGIN = 2000.0  # pixels beyond each viewport edge before a particle is dropped
LAUNCH_VELOCITY_SCALE = 0.05  # drag length (pixels) -> launch velocity

# Frame clock
FRAME_RATE = 60

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (26, 26, 26)
BH_CORE_COLOR = (0, 0, 0)
BH_GLOW_COLOR = (255, 98, 0)
BH_GLOW_OUTER_COLOR = (255, 170, 100)
PARTICLE_COLOR = (255, 255, 255)
TRACE_COLOR = (163, 163, 163)  # 60% white over the background
PREVIEW_COLOR = (136, 255, 136)
VELOCITY_VECTOR_COLOR = (80, 200, 255)
VELOCITY_TEXT_COLOR = (136, 255, 255)
ACCEL_VECTOR_COLOR = (255, 80, 80)
ACCEL_TEXT_COLOR = (255, 136, 136)
HUD_TEXT_COLOR = (200, 200, 200)

# Overlay arrow scaling (pixels per unit)
VELOCITY_ARROW_SCALE = 5.0
ACCEL_ARROW_SCALE = 20.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
