#!/usr/bin/env python3
"""
Viewport geometry for the 2D canvas.

Screen pixels are world units here, so unlike a panning/zooming camera the
viewport only tracks its size. It answers two questions for the simulation:
where the middle is (the black hole sits there) and whether a position has
left the generous region around the visible area.
"""
from typing import Tuple

from .constants import ESCAPE_MARGIN, VIEW_HEIGHT, VIEW_WIDTH
from .vector_utils import Vec2, vec_is_finite


class Viewport:
    """
    Visible canvas area, origin at the top-left corner.
    """

    def __init__(self, width: float = VIEW_WIDTH, height: float = VIEW_HEIGHT):
        self.width = width
        self.height = height

    def set_size(self, w: float, h: float) -> None:
        self.width = w
        self.height = h

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def center(self) -> Vec2:
        return (self.width / 2, self.height / 2)

    def escape_bounds(self, margin: float = ESCAPE_MARGIN) -> Tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y) of the viewport grown by margin."""
        return (-margin, -margin, self.width + margin, self.height + margin)

    def is_escaped(self, position: Vec2, margin: float = ESCAPE_MARGIN) -> bool:
        """
        True if position lies outside the viewport expanded by margin on
        every side. Non-finite positions always count as escaped.
        """
        if not vec_is_finite(position):
            return True
        x, y = position
        min_x, min_y, max_x, max_y = self.escape_bounds(margin)
        return x < min_x or x > max_x or y < min_y or y > max_y
