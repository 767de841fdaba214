"""
Unit tests for the radial transform

Tests the polar mapping shared by every circular layout.
"""
import numpy as np
import pytest
from math import pi

from graphlayout.radial import RadialTransform, radial_trans, to_circular


class TestRadialTransform:
    """Tests for RadialTransform.transform / inverse"""

    def test_round_trip(self):
        """inverse(transform(r, a)) recovers the input"""
        trans = radial_trans((0, 10), (1, 5))
        r = np.array([1.0, 2.5, 5.0, 10.0])
        a = np.array([1.0, 2.0, 4.5, 5.0])
        x, y = trans.transform(r, a)
        r_back, a_back = trans.inverse(x, y)
        assert r_back == pytest.approx(r)
        assert a_back == pytest.approx(a)

    def test_round_trip_reversed_radius(self):
        """A reversed radius range also round-trips"""
        trans = RadialTransform(r_range=(3, 0), a_range=(0, 1), pad=0.25)
        r = np.array([0.0, 1.0, 2.0])
        a = np.array([0.0, 0.5, 1.0])
        r_back, a_back = trans.inverse(*trans.transform(r, a))
        assert r_back == pytest.approx(r)
        assert a_back == pytest.approx(a)

    def test_start_of_padded_domain_at_offset(self):
        """The start of the padded angle domain points to 12 o'clock"""
        trans = radial_trans((0, 1), (1, 5))
        x, y = trans.transform([1.0], [0.5])
        assert x[0] == pytest.approx(0.0, abs=1e-12)
        assert y[0] == pytest.approx(1.0)

    def test_clockwise(self):
        """Increasing angle values move clockwise from the top"""
        trans = radial_trans((0, 1), (1, 5))
        x, y = trans.transform([1.0, 1.0], [1.0, 2.0])
        assert x[0] > 0
        assert np.arctan2(y[1], x[1]) < np.arctan2(y[0], x[0])

    def test_reversed_radius_puts_high_end_in_centre(self):
        trans = radial_trans((2, 0), (0, 1))
        x, y = trans.transform([2.0, 0.0], [0.5, 0.5])
        assert np.hypot(x[0], y[0]) == pytest.approx(0.0, abs=1e-12)
        assert np.hypot(x[1], y[1]) == pytest.approx(1.0)

    def test_degenerate_radius_range(self):
        """Zero-width radius range maps to the middle of [0, 1]"""
        trans = radial_trans((2, 2), (0, 1))
        x, y = trans.transform([2.0, 2.0], [0.0, 1.0])
        assert np.hypot(x, y) == pytest.approx([0.5, 0.5])

    def test_non_finite_input(self):
        trans = radial_trans((0, 1), (0, 1))
        x, y = trans.transform([np.nan, np.inf, 0.5, -np.inf], [0.5, 0.3, np.inf, 0.3])
        assert np.isnan(x).all() and np.isnan(y).all()

    def test_custom_offset(self):
        """offset = 0 starts at 3 o'clock"""
        trans = radial_trans((0, 1), (0, 1), offset=0.0, pad=0.0)
        x, y = trans.transform([1.0], [0.0])
        assert x[0] == pytest.approx(1.0)
        assert y[0] == pytest.approx(0.0, abs=1e-12)


class TestToCircular:
    """Tests for to_circular"""

    def test_empty(self):
        x, y = to_circular([], [])
        assert len(x) == 0 and len(y) == 0

    def test_depth_becomes_reversed_radius(self):
        """Highest depth in the centre, lowest on the unit circle"""
        x, y = to_circular([0.0, 1.0, 2.0], [1.0, 2.0, 3.0], offset=pi / 2)
        radius = np.hypot(x, y)
        assert radius == pytest.approx([1.0, 0.5, 0.0], abs=1e-12)
