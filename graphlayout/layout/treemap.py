"""
Treemap layout

Space-filling hierarchical layout mapping every tree node to a rectangle.
The rectangles of the children of a node tile the rectangle of the node,
and the area of a leaf is proportional to its weight.

Tiling uses the ordered split algorithm (Engdahl, 2005): the ordered list
of children is cut in two where the worse of the two resulting rectangles
is closest to square, and each half is tiled recursively. This keeps the
sibling order while avoiding the thin slivers of slice-and-dice.

References:
    Engdahl, B. (2005). Ordered and unordered treemap algorithms and their
    applications on handheld devices. Master's Degree Project.

    Johnson, B., & Shneiderman, B. (1991). Tree maps: A space-filling
    approach to the visualization of hierarchical information structures.
    IEEE Visualization, 284-291.
"""
from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
import logging
import networkx as nx
import numpy as np

from ..config import TreemapConfig
from ..errors import InvalidOption, InvalidWeight
from ..tree import Hierarchy, graph_to_tree, tree_to_hierarchy
from ..types import TreeMode
from ..utils import bind_columns, vertex_table
from .types import LayoutResult, Rectangle

logger = logging.getLogger(__name__)

ALGORITHMS = ('split',)


class TreemapLayout:
    """
    Treemap over the tree obtained by normalizing the graph

    The layout has one row per tree node, so its back-referenced graph is
    the normalized tree rather than the input graph.
    """

    def __init__(self, config: Optional[TreemapConfig] = None) -> None:
        self.config: TreemapConfig = config or TreemapConfig()

    def layout(
        self,
        graph: nx.Graph,
        algorithm: Optional[str] = None,
        weight: Optional[str] = None,
        circular: bool = False,
        sort_by: Optional[str] = None,
        mode: TreeMode = 'out',
        height: Optional[float] = None,
        width: Optional[float] = None
    ) -> LayoutResult:
        """
        Calculate treemap rectangles

        Args:
            graph: Directed graph (normalized to a tree first)
            algorithm: Tiling algorithm (uses config if None)
            weight: Numeric vertex attribute with leaf weights. Only leaves
                are affected; internal weights are the sum of their children.
            circular: Ignored
            sort_by: Vertex attribute ordering siblings
            mode: 'out' if parents point to children, 'in' otherwise
            height: Height of the bounding rectangle (uses config if None)
            width: Width of the bounding rectangle (uses config if None)

        Returns:
            LayoutResult with 'x', 'y' (rectangle centres), 'width',
            'height', 'leaf', 'depth', 'circular' and vertex attributes
        """
        if algorithm is None:
            algorithm = self.config.algorithm
        if height is None:
            height = self.config.height
        if width is None:
            width = self.config.width

        if algorithm not in ALGORITHMS:
            raise InvalidOption(f"Unknown algorithm: {algorithm}. Use one of {', '.join(ALGORITHMS)}")
        if width < 0 or height < 0:
            raise InvalidOption(f"Bounding rectangle must have non-negative size (got {width} x {height})")
        if circular:
            logger.warning("circular argument ignored for treemap layout")

        tree = graph_to_tree(graph, mode)
        hierarchy = tree_to_hierarchy(tree, mode, sort_by, weight)
        rects = split_treemap(hierarchy, width, height)

        nodes = bind_columns(
            {
                'x': [r.x + r.width / 2 for r in rects],
                'y': [r.y + r.height / 2 for r in rects],
                'width': [r.width for r in rects],
                'height': [r.height for r in rects],
                'leaf': hierarchy.leaf,
                'depth': hierarchy.depth(),
                'circular': False,
            },
            vertex_table(tree)
        )

        logger.debug(f"Treemap: {len(hierarchy)} tree nodes in {width} x {height}")
        return LayoutResult(
            nodes=nodes,
            graph=tree,
            circular=False,
            algorithm='treemap',
            layout_stats={
                'n_nodes': len(hierarchy),
                'n_leaves': int(hierarchy.leaf.sum()),
                'unfolded': tree.number_of_nodes() != graph.number_of_nodes(),
            }
        )


def split_treemap(hierarchy: Hierarchy, width: float, height: float) -> List[Rectangle]:
    """
    Tile a bounding rectangle with the split algorithm

    Args:
        hierarchy: Tree to lay out
        width: Width of the bounding rectangle
        height: Height of the bounding rectangle

    Returns:
        One Rectangle per hierarchy node, in node order

    Raises:
        InvalidWeight: a subtree to be tiled has zero total weight
    """
    weights = hierarchy.subtree_weight()
    children = hierarchy.children()
    root = hierarchy.root
    if weights[root] <= 0:
        raise InvalidWeight("Total weight of the tree must be positive")

    rects: List[Optional[Rectangle]] = [None] * len(hierarchy)
    rects[root] = Rectangle(0.0, 0.0, float(width), float(height))
    work = [(children[root], rects[root])]
    while work:
        items, rect = work.pop()
        if not items:
            continue
        if len(items) == 1:
            rects[items[0]] = rect
            work.append((children[items[0]], rect))
            continue
        (group_a, rect_a), (group_b, rect_b) = best_split(items, weights, rect)
        work.append((group_b, rect_b))
        work.append((group_a, rect_a))
    return rects


def best_split(
    items: Sequence[int],
    weights: np.ndarray,
    rect: Rectangle
) -> Tuple[Tuple[List[int], Rectangle], Tuple[List[int], Rectangle]]:
    """
    Cut an ordered list of items in two

    The rectangle is cut across its longer side. Of all contiguous split
    points, the one whose worse half has the smallest aspect ratio wins
    (earliest on ties).

    Returns:
        ((items_a, rect_a), (items_b, rect_b)); a is left of or above b
    """
    total = float(sum(weights[i] for i in items))
    if total <= 0:
        raise InvalidWeight("Cannot split items with zero total weight")

    vertical = rect.width >= rect.height
    best = None
    cumulative = 0.0
    for k in range(1, len(items)):
        cumulative += weights[items[k - 1]]
        rect_a, rect_b = cut_rectangle(rect, cumulative / total, vertical)
        cost = max(rect_a.aspect_ratio, rect_b.aspect_ratio)
        if best is None or cost < best[0]:
            best = (cost, k, rect_a, rect_b)

    _, k, rect_a, rect_b = best
    return (list(items[:k]), rect_a), (list(items[k:]), rect_b)


def cut_rectangle(rect: Rectangle, fraction: float, vertical: bool) -> Tuple[Rectangle, Rectangle]:
    """
    Cut a rectangle in two with the first part holding fraction of the area

    A vertical cut gives a left and a right part; a horizontal cut gives a
    top and a bottom part.
    """
    if vertical:
        width_a = rect.width * fraction
        return (Rectangle(rect.x, rect.y, width_a, rect.height),
                Rectangle(rect.x + width_a, rect.y, rect.width - width_a, rect.height))
    height_a = rect.height * fraction
    return (Rectangle(rect.x, rect.y + rect.height - height_a, rect.width, height_a),
            Rectangle(rect.x, rect.y, rect.width, rect.height - height_a))
