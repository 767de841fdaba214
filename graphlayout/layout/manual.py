"""
Manual layout

Positions passed in by the caller, matched to vertices by row index.
"""
from __future__ import annotations
import logging
import networkx as nx
import pandas as pd

from ..errors import InvalidOption
from ..utils import bind_columns, vertex_table
from .types import LayoutResult

logger = logging.getLogger(__name__)


class ManualLayout:
    """Use caller-supplied coordinates"""

    def layout(self, graph: nx.Graph, node_positions: pd.DataFrame,
               circular: bool = False) -> LayoutResult:
        """
        Args:
            graph: Any graph
            node_positions: DataFrame with 'x' and 'y' columns, one row per
                vertex (other columns are ignored)
            circular: Ignored
        """
        if circular:
            logger.warning("circular argument ignored for manual layout")
        if not isinstance(node_positions, pd.DataFrame):
            raise InvalidOption("node_positions must be supplied as a DataFrame")
        if graph.number_of_nodes() != len(node_positions):
            raise InvalidOption("Number of rows in node_positions must correspond to number of nodes in graph")
        if not {'x', 'y'}.issubset(node_positions.columns):
            raise InvalidOption("node_positions must contain the columns 'x' and 'y'")

        nodes = bind_columns(
            {
                'x': node_positions['x'].to_numpy(dtype=float),
                'y': node_positions['y'].to_numpy(dtype=float),
                'circular': False,
            },
            vertex_table(graph)
        )
        return LayoutResult(nodes=nodes, graph=graph, circular=False, algorithm='manual')
