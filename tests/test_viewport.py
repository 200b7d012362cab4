"""
Unit tests for viewport geometry.
"""

import math

import pytest

from core.viewport import Viewport


class TestViewport:

    def test_center_and_resize(self):
        vp = Viewport(800, 600)
        assert vp.center == (400.0, 300.0)
        vp.set_size(1000, 200)
        assert vp.size == (1000, 200)
        assert vp.center == (500.0, 100.0)

    def test_escape_bounds(self):
        vp = Viewport(800, 600)
        assert vp.escape_bounds(2000) == (-2000, -2000, 2800, 2600)

    @pytest.mark.parametrize("position, escaped", [
        ((0.0, 0.0), False),
        ((-2000.0, 2600.0), False),
        ((-2000.1, 300.0), True),
        ((2800.1, 300.0), True),
        ((400.0, -2000.1), True),
        ((400.0, 2600.1), True),
        ((math.nan, 0.0), True),
        ((0.0, math.inf), True),
    ])
    def test_is_escaped(self, position, escaped):
        vp = Viewport(800, 600)
        assert vp.is_escaped(position, 2000.0) is escaped
