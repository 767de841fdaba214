"""
Radial transform

Maps (radius, angle) data domains onto Cartesian coordinates. Used by every
layout that supports circular=True.
"""

from __future__ import annotations
from dataclasses import dataclass
from math import pi
from typing import Tuple
import numpy as np

from .types import Range
from .utils import rescale, value_range

TWO_PI = 2 * pi


@dataclass(frozen=True)
class RadialTransform:
    """
    Polar to Cartesian mapping over arbitrary data domains

    Radius values are rescaled from r_range onto [0, 1] and angle values from
    the padded a_range onto [0, 2*pi], running clockwise from offset. Passing
    r_range reversed, e.g. (max, min), puts the high end at the centre.

    Attributes:
        r_range: Data domain of the radius
        a_range: Data domain of the angle
        offset: Angle (radians) of the start of the angle domain
        pad: Amount added to both ends of a_range before rescaling
    """
    r_range: Range
    a_range: Range
    offset: float = pi / 2
    pad: float = 0.5

    @property
    def padded_a_range(self) -> Range:
        """Angle domain widened by pad on each side (orientation kept)"""
        a0, a1 = self.a_range
        if a0 <= a1:
            return a0 - self.pad, a1 + self.pad
        return a0 + self.pad, a1 - self.pad

    def transform(self, r, a) -> Tuple[np.ndarray, np.ndarray]:
        """
        Convert data values to Cartesian coordinates

        Args:
            r: Values in the radius domain
            a: Values in the angle domain

        Returns:
            Tuple of (x, y) arrays
        """
        radius = rescale(r, self.r_range)
        theta = self.offset - rescale(a, self.padded_a_range, (0.0, TWO_PI))
        return radius * np.cos(theta), radius * np.sin(theta)

    def inverse(self, x, y) -> Tuple[np.ndarray, np.ndarray]:
        """
        Recover data values from Cartesian coordinates

        Returns:
            Tuple of (r, a) arrays in the original data domains
        """
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        radius = np.hypot(x, y)
        theta = np.mod(self.offset - np.arctan2(y, x), TWO_PI)
        r = rescale(radius, (0.0, 1.0), self.r_range)
        a = rescale(theta, (0.0, TWO_PI), self.padded_a_range)
        return r, a


def radial_trans(r_range: Range, a_range: Range, offset: float = pi / 2,
                 pad: float = 0.5) -> RadialTransform:
    """Convenience constructor for RadialTransform"""
    return RadialTransform(tuple(r_range), tuple(a_range), offset, pad)


def to_circular(depth, position, offset: float = pi / 2,
                pad: float = 0.5) -> Tuple[np.ndarray, np.ndarray]:
    """
    Bend a layered layout into a circle

    The highest depth ends up in the centre and positions run clockwise
    around it.

    Args:
        depth: Per-vertex depth (becomes the radius, reversed)
        position: Per-vertex position along the layer (becomes the angle)
        offset: Angle of the first position
        pad: Angle domain padding
    """
    if len(depth) == 0:
        return np.empty(0), np.empty(0)
    d0, d1 = value_range(depth)
    radial = radial_trans((d1, d0), value_range(position), offset, pad)
    return radial.transform(depth, position)
