"""
Layout types for graphlayout
Data structures for layout engine results

Geometric primitives are immutable (frozen) for safety and testability.
"""
from dataclasses import dataclass, field
from typing import List, Dict, Tuple, Optional, Any, Sequence
import logging
import networkx as nx
import numpy as np
import pandas as pd

from ..errors import InvalidOption
from ..types import LayoutStats, PathMode
from ..utils import edge_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned rectangle used by the treemap splitter

    Attributes:
        x: Left edge
        y: Bottom edge
        width: Horizontal extent (non-negative)
        height: Vertical extent (non-negative)
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        """Area of the rectangle"""
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        """Longer side over shorter side (inf for degenerate rectangles)"""
        short, long = sorted((self.width, self.height))
        if short <= 0:
            return float('inf')
        return long / short

    @property
    def center(self) -> Tuple[float, float]:
        """Centre point (x, y)"""
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass(frozen=True)
class HiveAxis:
    """
    Vertices placed on one spoke of a hive plot

    Attributes:
        label: Value of the axis attribute shared by the vertices
        angle: Angle of the spoke (radians)
        nodes: Vertex indices on the axis, ascending
        r: Radius per vertex (same order as nodes)
        sections: Section label per vertex (same order as nodes)
        split: Whether the axis is split into a near and a far copy
        center_size: Gap left empty at the centre
    """
    label: Any
    angle: float
    nodes: Tuple[int, ...]
    r: Tuple[float, ...]
    sections: Tuple[Any, ...]
    split: bool
    center_size: float

    @property
    def n_nodes(self) -> int:
        """Number of vertices on the axis"""
        return len(self.nodes)

    def radius_of(self) -> Dict[int, float]:
        """Mapping vertex index -> radius"""
        return dict(zip(self.nodes, self.r))


@dataclass
class LayoutResult:
    """
    Complete layout for a graph

    Contains all information needed for rendering:
    - Node positions (one row per vertex, in vertex index order)
    - The graph the positions belong to, for edge reconstruction
    - Whether the layout is circular

    Attributes:
        nodes: DataFrame with at least 'x', 'y' and 'circular' columns plus
            the vertex attributes
        graph: Graph whose vertex i is row i of nodes. May differ from the
            input graph (hive splitting, tree unfolding).
        circular: Whether the layout was transformed to a circle
        algorithm: Name of the algorithm that produced the layout
        layout_stats: Statistics about the layout
    """
    nodes: pd.DataFrame
    graph: nx.Graph
    circular: bool = False
    algorithm: str = ''
    layout_stats: LayoutStats = field(default_factory=dict)

    @property
    def n_nodes(self) -> int:
        """Number of laid out vertices"""
        return len(self.nodes)

    @property
    def x(self) -> np.ndarray:
        return self.nodes['x'].to_numpy(dtype=float)

    @property
    def y(self) -> np.ndarray:
        return self.nodes['y'].to_numpy(dtype=float)

    def get_edges(self) -> pd.DataFrame:
        """
        Edge list of the back-referenced graph

        Returns:
            DataFrame with 'from' and 'to' row indices, edge attributes and
            'circular'
        """
        edges = edge_table(self.graph)
        edges['circular'] = self.circular
        return edges

    def get_connections(
        self,
        from_: Sequence[int],
        to: Sequence[int],
        weight: Optional[str] = None,
        mode: PathMode = 'all'
    ) -> List[List[int]]:
        """
        Shortest paths between pairs of vertices

        Args:
            from_: Start vertex index per pair
            to: End vertex index per pair
            weight: Layout column used as cost; an edge costs the value of
                the vertex it enters
            mode: 'out' follows edges, 'in' follows them backwards, 'all'
                ignores direction

        Returns:
            One list of vertex indices per pair (empty when unreachable)
        """
        if len(from_) != len(to):
            raise InvalidOption("from_ and to must have the same length")
        if mode not in ('out', 'in', 'all'):
            raise InvalidOption(f"Invalid mode: {mode}. Use 'out', 'in' or 'all'")

        graph = self.graph
        if graph.is_directed():
            if mode == 'all':
                graph = graph.to_undirected(as_view=True)
            elif mode == 'in':
                graph = graph.reverse(copy=False)
        keys = list(self.graph.nodes)
        index = {key: i for i, key in enumerate(keys)}

        cost = None
        if weight is not None:
            if weight not in self.nodes.columns:
                raise InvalidOption(f"weight must be a column of the layout (got '{weight}')")
            values = self.nodes[weight].to_numpy(dtype=float)

            def cost(u, v, data):
                return values[index[v]]

        paths: List[List[int]] = []
        for source, target in zip(from_, to):
            try:
                path = nx.shortest_path(graph, keys[source], keys[target], weight=cost)
            except nx.NetworkXNoPath:
                logger.warning(f"No path between vertex {source} and vertex {target}")
                paths.append([])
                continue
            paths.append([index[key] for key in path])
        return paths
