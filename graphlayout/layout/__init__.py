"""
Layout Module for graphlayout
Node placement algorithms for network and hierarchy visualization

Public API:
    - LayoutEngine: Resolves layout names and runs the algorithms
    - create_layout: One-shot helper around LayoutEngine
    - register_layout: Add a custom layout function by name
    - GenericLayout: Catalog of networkx-backed layouts
    - LayoutResult: Complete layout solution
    - DendrogramLayout, LinearLayout, TreemapLayout, HiveLayout, ManualLayout
    - Rectangle: Treemap tile
    - HiveAxis: One spoke of a hive plot
"""

from .engine import (
    LayoutEngine,
    GenericLayout,
    create_layout,
    register_layout,
    registered_layouts,
)
from .dendrogram import DendrogramLayout
from .linear import LinearLayout
from .treemap import TreemapLayout
from .hive import HiveLayout
from .manual import ManualLayout
from .types import (
    LayoutResult,
    Rectangle,
    HiveAxis,
)

__all__ = [
    'LayoutEngine',
    'GenericLayout',
    'create_layout',
    'register_layout',
    'registered_layouts',
    'DendrogramLayout',
    'LinearLayout',
    'TreemapLayout',
    'HiveLayout',
    'ManualLayout',
    'LayoutResult',
    'Rectangle',
    'HiveAxis',
]
