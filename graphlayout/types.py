"""
Type definitions for graphlayout

Common types used throughout the package for type checking and documentation.
"""

from __future__ import annotations
from typing import TypedDict, Literal, List, Dict, Union, Tuple, Hashable
from pathlib import Path

# Type aliases
PathLike = Union[str, Path]
"""File path as string or Path object"""

TreeMode = Literal['out', 'in']
"""Edge direction of a tree: 'out' means parent -> child, 'in' child -> parent"""

PathMode = Literal['out', 'in', 'all']
"""Edge direction followed by path queries"""

SplitMode = Literal['all', 'loops', 'none']
"""Which hive axes are split into near/far copies"""

Range = Tuple[float, float]
"""Numeric (start, end) domain"""


# Structured data types

class EdgeRecord(TypedDict):
    """Index-based edge with its attribute payload"""
    source: int
    target: int
    data: Dict[str, object]


class LayoutStats(TypedDict, total=False):
    """Statistics collected while computing a layout"""
    n_nodes: int
    n_edges: int
    n_leaves: int
    n_roots: int
    n_axes: int
    n_split_axes: int
    n_added_nodes: int
    n_redirected_edges: int
    unfolded: bool
    axes: List[Hashable]
