"""
graphlayout Configuration

Default parameters for the custom layout algorithms. Every layout option
that is left as None falls back to the value configured here.
"""
from dataclasses import dataclass, field
from math import pi
from typing import Optional


@dataclass
class RadialConfig:
    """
    Cartesian to polar conversion used by every circular layout
    """

    offset: float = pi / 2
    """Angle (radians) of the first position; pi/2 is 12 o'clock"""

    pad: float = 0.5
    """Padding added to both ends of the angle domain so first and last points don't meet"""


@dataclass
class HiveConfig:
    """
    Hive plot geometry

    Radii are expressed in axis units: a normalized axis has length 1.
    """

    # ============================================================
    # RADIAL SPACING
    # ============================================================
    center_size: float = 0.1
    """Empty gap between the centre and the first vertex on every axis"""

    divide_size: float = 0.05
    """Gap between consecutive sections on an axis"""

    normalize: bool = True
    """Give every axis the same length (True) or scale by vertex count (False)"""

    # ============================================================
    # AXIS SPLITTING
    # ============================================================
    split_axes: str = 'none'
    """Which axes to split: 'all', 'loops' (axes with intra-axis edges) or 'none'"""

    split_angle: float = pi / 6
    """Angle (radians) between the near and far copy of a split axis"""


@dataclass
class TreemapConfig:
    """
    Treemap bounding rectangle and tiling algorithm
    """

    algorithm: str = 'split'
    """Tiling algorithm (only 'split' is available)"""

    width: float = 1.0
    """Width of the bounding rectangle"""

    height: float = 1.0
    """Height of the bounding rectangle"""


@dataclass
class LayoutConfig:
    """
    Complete layout configuration
    """

    # ============================================================
    # SUB-CONFIGURATIONS
    # ============================================================
    radial: RadialConfig = field(default_factory=RadialConfig)
    """Circular transform configuration"""

    hive: HiveConfig = field(default_factory=HiveConfig)
    """Hive layout configuration"""

    treemap: TreemapConfig = field(default_factory=TreemapConfig)
    """Treemap layout configuration"""

    # ============================================================
    # GENERIC LAYOUTS
    # ============================================================
    seed: Optional[int] = None
    """Random seed passed to stochastic networkx layouts (None = nondeterministic)"""

    # ============================================================
    # PRESET CONFIGURATIONS
    # ============================================================

    @classmethod
    def compact(cls) -> 'LayoutConfig':
        """
        Tight settings for large graphs

        - Small hive centre and section gaps
        - Narrow split angle
        - No angular padding on circular layouts

        Example:
            >>> config = LayoutConfig.compact()
            >>> engine = LayoutEngine(config)
        """
        config = cls()
        config.radial.pad = 0.0
        config.hive.center_size = 0.05
        config.hive.divide_size = 0.02
        config.hive.split_angle = pi / 12
        return config

    @classmethod
    def spacious(cls) -> 'LayoutConfig':
        """
        Airy settings for small graphs and presentations

        - Large hive centre and section gaps
        - Wide split angle
        - Reproducible generic layouts (seed 42)

        Example:
            >>> config = LayoutConfig.spacious()
            >>> engine = LayoutEngine(config)
        """
        config = cls()
        config.radial.pad = 1.0
        config.hive.center_size = 0.25
        config.hive.divide_size = 0.1
        config.hive.split_angle = pi / 4
        config.seed = 42
        return config
