"""
Tree normalization

Turns an arbitrary directed graph into a strict single-rooted tree and
linearizes that tree into an index-based hierarchy for the treemap splitter.

Lossy on purpose: only the first weakly connected component and the first
root are kept, and vertices reachable along several paths are duplicated.
Every such simplification is logged as a warning.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import List, Optional
import logging
import networkx as nx
import numpy as np

from .errors import InvalidGraph, InvalidOption, InvalidWeight, NoRoot
from .types import TreeMode
from .utils import (
    index_graph, is_numeric, node_index, ordinal_rank, require_attribute, vertex_table
)

logger = logging.getLogger(__name__)


def check_mode(mode: str) -> None:
    if mode not in ('out', 'in'):
        raise InvalidOption(f"Invalid mode: {mode}. Use 'out' or 'in'")


@dataclass(frozen=True)
class Hierarchy:
    """
    Index-based representation of a tree

    Attributes:
        parent: Parent index per node, -1 for the root
        order: Sibling rank per node; children are placed in ascending order
        weight: Weight per node (0 for internal nodes)
        leaf: Whether the node has no children
    """
    parent: np.ndarray
    order: np.ndarray
    weight: np.ndarray
    leaf: np.ndarray

    def __len__(self) -> int:
        return len(self.parent)

    @property
    def root(self) -> int:
        """Index of the parentless node"""
        roots = np.flatnonzero(self.parent < 0)
        if len(roots) == 0:
            raise NoRoot("Hierarchy has no root")
        return int(roots[0])

    def children(self) -> List[List[int]]:
        """Children of every node, sorted by order then index"""
        children: List[List[int]] = [[] for _ in range(len(self))]
        for node, parent in enumerate(self.parent):
            if parent >= 0:
                children[parent].append(node)
        for kids in children:
            kids.sort(key=lambda k: (self.order[k], k))
        return children

    def postorder(self) -> List[int]:
        """Nodes below (and including) the root, children before parents"""
        children = self.children()
        visited: List[int] = []
        stack = [self.root]
        while stack:
            node = stack.pop()
            visited.append(node)
            stack.extend(children[node])
        return visited[::-1]

    def subtree_weight(self) -> np.ndarray:
        """Leaf weight for leaves, sum of children for internal nodes"""
        total = np.where(self.leaf, self.weight, 0.0).astype(float)
        for node in self.postorder():
            parent = self.parent[node]
            if parent >= 0:
                total[parent] += total[node]
        return total

    def depth(self) -> np.ndarray:
        """Distance from the root (root = 0)"""
        depth = np.zeros(len(self), dtype=int)
        for node in reversed(self.postorder()):
            parent = self.parent[node]
            if parent >= 0:
                depth[node] = depth[parent] + 1
        return depth


def graph_to_tree(graph: nx.Graph, mode: TreeMode = 'out') -> nx.DiGraph:
    """
    Normalize a directed graph into a single-rooted tree

    Steps:
    1. Drop self-loops and parallel edges
    2. Keep only the weak component containing vertex 0
    3. Pick the lowest-index root
    4. Unfold multi-parent vertices (and extra roots) by breadth-first copying

    Args:
        graph: Directed networkx graph
        mode: 'out' if edges point parent -> child, 'in' if child -> parent

    Returns:
        DiGraph with integer nodes 0..m-1 carrying their source attributes
        and 'name'

    Raises:
        InvalidGraph: graph is undirected
        NoRoot: no vertex without parents
    """
    check_mode(mode)
    if not graph.is_directed():
        raise InvalidGraph("Graph must be directed")

    tree = _simplify(graph)
    components = list(nx.weakly_connected_components(tree))
    if len(components) > 1:
        logger.warning("Multiple components in graph. Choosing the first")
        first = next(c for c in components if 0 in c)
        tree = _induced(tree, sorted(first))

    n_parents = dict(tree.in_degree() if mode == 'out' else tree.out_degree())
    roots = [node for node in tree.nodes if n_parents[node] == 0]
    if not roots:
        raise NoRoot("No root in graph. Provide graph with one parentless node")

    multi_parent = any(count > 1 for count in n_parents.values())
    if multi_parent:
        logger.warning("Multiple parents. Unfolding graph")
    if len(roots) > 1:
        logger.warning("Multiple roots in graph. Choosing the first")
    if multi_parent or len(roots) > 1:
        tree = _unfold(tree, roots[0], mode)
    return tree


def _simplify(graph: nx.Graph) -> nx.DiGraph:
    """Indexed DiGraph without self-loops; parallel edges keep the first payload"""
    indexed = index_graph(graph)
    simple = nx.DiGraph()
    simple.add_nodes_from(indexed.nodes(data=True))
    for u, v, data in indexed.edges(data=True):
        if u != v and not simple.has_edge(u, v):
            simple.add_edges_from([(u, v, data)])
    return simple


def _induced(graph: nx.DiGraph, nodes: List[int]) -> nx.DiGraph:
    """Induced subgraph relabelled to 0..k-1 in the given node order"""
    mapping = {old: new for new, old in enumerate(nodes)}
    sub = nx.DiGraph()
    sub.add_nodes_from((mapping[v], dict(graph.nodes[v])) for v in nodes)
    sub.add_edges_from(
        (mapping[u], mapping[v], dict(data))
        for u, v, data in graph.edges(data=True)
        if u in mapping and v in mapping
    )
    return sub


def _unfold(graph: nx.DiGraph, root: int, mode: TreeMode) -> nx.DiGraph:
    """
    Expand everything reachable from root into a tree

    Each path from the root yields its own instance of a vertex. The first
    instance (breadth-first) keeps the vertex; later ones are copies and are
    numbered after all kept vertices.
    """
    children_of = graph.successors if mode == 'out' else graph.predecessors

    def edge_data(parent: int, child: int) -> dict:
        return graph.edges[parent, child] if mode == 'out' else graph.edges[child, parent]

    origin = [root]
    links = []
    dropped = 0
    queue = deque([(0, frozenset([root]))])
    while queue:
        instance, path = queue.popleft()
        source = origin[instance]
        for child in sorted(children_of(source)):
            if child in path:
                dropped += 1
                continue
            child_instance = len(origin)
            origin.append(child)
            links.append((instance, child_instance, dict(edge_data(source, child))))
            queue.append((child_instance, path | {child}))

    if dropped:
        logger.warning(f"Dropped {dropped} edge(s) closing a cycle while unfolding")

    first = {}
    for instance, source in enumerate(origin):
        first.setdefault(source, instance)
    kept = sorted(first.values(), key=lambda i: origin[i])
    kept_set = set(kept)
    copies = [i for i in range(len(origin)) if i not in kept_set]
    renumber = {instance: new for new, instance in enumerate(kept + copies)}

    logger.debug(f"Unfolded {graph.number_of_nodes()} vertices into "
                 f"{len(origin)} tree nodes ({len(copies)} copies)")

    tree = nx.DiGraph()
    tree.add_nodes_from(
        (renumber[i], dict(graph.nodes[origin[i]])) for i in kept + copies
    )
    for parent, child, data in links:
        p, c = renumber[parent], renumber[child]
        tree.add_edges_from([(p, c, data) if mode == 'out' else (c, p, data)])
    return tree


def tree_to_hierarchy(
    tree: nx.DiGraph,
    mode: TreeMode = 'out',
    sort_by: Optional[str] = None,
    weight: Optional[str] = None
) -> Hierarchy:
    """
    Linearize a tree into parent/order/weight arrays

    Args:
        tree: Single-rooted tree (as returned by graph_to_tree)
        mode: Direction of the tree edges
        sort_by: Vertex attribute ordering siblings (default: vertex index)
        weight: Numeric vertex attribute with leaf weights (default: 1 per leaf)

    Returns:
        Hierarchy with one entry per tree node

    Raises:
        InvalidWeight: weight attribute missing or non-numeric, or a leaf has
            no positive weight
    """
    check_mode(mode)
    n = tree.number_of_nodes()
    index = node_index(tree)
    table = vertex_table(tree)

    parent = np.full(n, -1, dtype=int)
    for u, v in tree.edges():
        p, c = (u, v) if mode == 'out' else (v, u)
        parent[index[c]] = index[p]

    if sort_by is None:
        order = np.arange(n)
    else:
        order = ordinal_rank(require_attribute(table, sort_by, 'sort_by').to_numpy()) - 1

    degree = tree.out_degree() if mode == 'out' else tree.in_degree()
    leaf = np.array([degree[node] == 0 for node in tree.nodes], dtype=bool)

    if weight is None:
        weights = np.where(leaf, 1.0, 0.0)
    else:
        values = require_attribute(table, weight, 'weight', error=InvalidWeight)
        if not is_numeric(values):
            raise InvalidWeight("Weight must be numeric")
        weights = values.to_numpy(dtype=float)
        internal = weights[~leaf]
        if np.any((internal != 0) & ~np.isnan(internal)):
            logger.warning("Non-leaf weights ignored")
        leaf_weights = weights[leaf]
        if np.any(np.isnan(leaf_weights) | (leaf_weights <= 0)):
            raise InvalidWeight("Leafs must have a positive weight")
        weights = np.where(leaf, weights, 0.0)

    return Hierarchy(parent=parent, order=order, weight=weights, leaf=leaf)
