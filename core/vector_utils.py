#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

Vectors are plain (x, y) tuples throughout the simulation.
"""
import math
from typing import Tuple

Vec2 = Tuple[float, float]


def vec_add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def vec_scale(a: Vec2, s: float) -> Vec2:
    return (a[0] * s, a[1] * s)


def vec_len(a: Vec2) -> float:
    return math.hypot(a[0], a[1])


def vec_is_finite(a: Vec2) -> bool:
    """True when both components are finite (no NaN or infinity)."""
    return math.isfinite(a[0]) and math.isfinite(a[1])


def as_vec(value) -> Vec2:
    """Coerce a 2-sequence (list, tuple, dict with x/y) into a float tuple."""
    if isinstance(value, dict):
        return (float(value["x"]), float(value["y"]))
    return (float(value[0]), float(value[1]))
