"""graphlayout: Layout algorithms for network and hierarchy visualization"""

from .config import LayoutConfig, RadialConfig, HiveConfig, TreemapConfig
from .errors import LayoutError, InvalidGraph, NoRoot, InvalidWeight, InvalidOption, MissingLevel, UnknownLayout
from .layout import LayoutEngine, LayoutResult, create_layout, register_layout
from .radial import RadialTransform, radial_trans
from .tree import graph_to_tree
from . import utils

__version__ = "0.1.0"
__all__ = ["LayoutConfig", "RadialConfig", "HiveConfig", "TreemapConfig",
           "LayoutError", "InvalidGraph", "NoRoot", "InvalidWeight", "InvalidOption", "MissingLevel", "UnknownLayout",
           "LayoutEngine", "LayoutResult", "create_layout", "register_layout",
           "RadialTransform", "radial_trans", "graph_to_tree", "utils"]
