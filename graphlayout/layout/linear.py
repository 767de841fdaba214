"""
Linear layout

Places all vertices on a line, optionally sorted by a vertex attribute, or
on a circle when circular=True.
"""
from __future__ import annotations
from typing import Optional
import logging
import networkx as nx
import numpy as np

from ..config import RadialConfig
from ..radial import to_circular
from ..utils import bind_columns, is_numeric, ordinal_rank, require_attribute, vertex_table
from .types import LayoutResult

logger = logging.getLogger(__name__)


class LinearLayout:
    """Single-axis ordering of vertices"""

    def __init__(self, config: Optional[RadialConfig] = None) -> None:
        self.config: RadialConfig = config or RadialConfig()

    def layout(
        self,
        graph: nx.Graph,
        circular: bool = False,
        sort_by: Optional[str] = None,
        use_numeric: bool = False,
        offset: Optional[float] = None
    ) -> LayoutResult:
        """
        Calculate linear positions

        Args:
            graph: Any graph
            circular: Place the vertices on a circle instead of a line
            sort_by: Vertex attribute to order the vertices by
            use_numeric: Use a numeric sort_by attribute directly as x. May
                lead to uneven spacing and overlapping vertices.
            offset: Start angle for circular layouts (uses config if None)

        Returns:
            LayoutResult with 'x', 'y', vertex attributes and 'circular'
        """
        if offset is None:
            offset = self.config.offset

        attributes = vertex_table(graph)
        if sort_by is None:
            x = np.arange(1, len(attributes) + 1, dtype=float)
        else:
            key = require_attribute(attributes, sort_by, 'sort_by')
            if use_numeric and is_numeric(key):
                x = key.to_numpy(dtype=float)
            else:
                if use_numeric:
                    logger.warning(f"sort_by '{sort_by}' is not numeric; using rank order")
                x = ordinal_rank(key.to_numpy()).astype(float)
        y = np.zeros(len(attributes))

        if circular:
            x, y = to_circular(y, x, offset, self.config.pad)

        nodes = bind_columns({'x': x, 'y': y, 'circular': circular}, attributes)
        return LayoutResult(
            nodes=nodes,
            graph=graph,
            circular=circular,
            algorithm='linear',
            layout_stats={'n_nodes': len(nodes)}
        )
