"""
Dendrogram layout

Tree layout that anchors every leaf on the baseline (y = 0) and builds the
branch points up from there, so leaves stay aligned whatever the depth of
their subtree. Branch height is the longest distance down to a leaf.
"""
from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import logging
import networkx as nx
import numpy as np

from ..config import RadialConfig
from ..errors import InvalidGraph, NoRoot
from ..radial import to_circular
from ..tree import check_mode
from ..types import TreeMode
from ..utils import bind_columns, index_graph, vertex_table
from .types import LayoutResult

logger = logging.getLogger(__name__)


class DendrogramLayout:
    """
    Bottom-up tree placement

    Algorithm:
    1. Roots are vertices without incoming edges (in the chosen direction)
    2. Depth-first from each root, leaves take x = 1, 2, 3, ... in visit order
    3. A branch point sits at the mean x of its children, one above the
       highest child
    4. Every vertex is placed once, even when reachable along several paths
    """

    def __init__(self, config: Optional[RadialConfig] = None) -> None:
        self.config: RadialConfig = config or RadialConfig()

    def layout(
        self,
        graph: nx.Graph,
        circular: bool = False,
        offset: Optional[float] = None,
        direction: TreeMode = 'out'
    ) -> LayoutResult:
        """
        Calculate dendrogram positions

        Args:
            graph: Directed graph
            circular: Bend the dendrogram into a circle with the roots in the centre
            offset: Start angle for circular layouts (uses config if None)
            direction: Direction towards the leaves

        Returns:
            LayoutResult with 'x', 'y', 'leaf', vertex attributes and 'circular'
        """
        check_mode(direction)
        if offset is None:
            offset = self.config.offset
        if not graph.is_directed():
            raise InvalidGraph("Dendrogram layout requires a directed graph")

        indexed = index_graph(graph)
        children_of = indexed.successors if direction == 'out' else indexed.predecessors
        n_parents = indexed.in_degree() if direction == 'out' else indexed.out_degree()
        roots = [node for node in indexed.nodes if n_parents[node] == 0]
        if not roots:
            raise NoRoot("No root nodes in graph")

        children = {node: sorted(set(children_of(node)) - {node}) for node in indexed.nodes}
        positions = place_dendrogram(children, roots)

        n = indexed.number_of_nodes()
        x = np.full(n, np.nan)
        y = np.full(n, np.nan)
        for node, (px, py) in positions.items():
            x[node] = px
            y[node] = py
        if len(positions) < n:
            logger.warning(f"{n - len(positions)} vertices unreachable from any root were not placed")

        leaf = np.array([not children[node] for node in indexed.nodes], dtype=bool)
        if circular:
            x, y = to_circular(y, x, offset, self.config.pad)

        nodes = bind_columns(
            {'x': x, 'y': y, 'leaf': leaf, 'circular': circular},
            vertex_table(graph)
        )

        logger.debug(f"Dendrogram: {len(roots)} roots, {int(leaf.sum())} leaves")
        return LayoutResult(
            nodes=nodes,
            graph=graph,
            circular=circular,
            algorithm='dendrogram',
            layout_stats={'n_nodes': n, 'n_roots': len(roots), 'n_leaves': int(leaf.sum())}
        )


def place_dendrogram(
    children: Dict[int, List[int]],
    roots: List[int]
) -> Dict[int, Tuple[float, float]]:
    """
    Place every vertex reachable from roots

    Uses an explicit work stack; a vertex is expanded on its first visit and
    placed when all its children are placed. Already placed vertices are
    never revisited.

    Args:
        children: Ordered children per vertex
        roots: Start vertices, in order

    Returns:
        Mapping vertex -> (x, y)

    Raises:
        NoRoot: a cycle is reachable from a root
    """
    placed: Dict[int, Tuple[float, float]] = {}
    pending = set()
    next_leaf = 1
    for root in roots:
        stack = [(root, False)]
        while stack:
            node, expanded = stack.pop()
            if node in placed:
                continue
            kids = children[node]
            if not kids:
                placed[node] = (float(next_leaf), 0.0)
                next_leaf += 1
            elif not expanded:
                if node in pending:
                    raise NoRoot(f"Cycle through vertex {node}; dendrogram requires a tree or DAG")
                pending.add(node)
                stack.append((node, True))
                stack.extend((kid, False) for kid in reversed(kids) if kid not in placed)
            else:
                pending.discard(node)
                xs = [placed[kid][0] for kid in kids]
                ys = [placed[kid][1] for kid in kids]
                placed[node] = (float(np.mean(xs)), max(ys) + 1.0)
    return placed
