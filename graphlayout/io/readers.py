"""
I/O Readers

Handles reading of graph input files.
"""

from __future__ import annotations
from typing import Optional
from pathlib import Path
import logging
import networkx as nx
import pandas as pd

from ..errors import InvalidGraph
from ..types import PathLike

logger = logging.getLogger(__name__)


class GraphReader:
    """Builds networkx graphs from TSV edge lists and node tables"""

    @staticmethod
    def read(
        edges_file: PathLike,
        nodes_file: Optional[PathLike] = None,
        directed: bool = True,
        multigraph: bool = False
    ) -> nx.Graph:
        """
        Read a graph from tab-separated files

        The edge file needs 'from' and 'to' columns; every other column
        becomes an edge attribute. The node file needs a 'name' column;
        every other column becomes a vertex attribute and the row order
        fixes the vertex order. Without a node file, vertices are ordered
        by first appearance in the edge list.

        Args:
            edges_file: Path to edge TSV
            nodes_file: Path to node TSV (optional)
            directed: Build a directed graph
            multigraph: Keep parallel edges

        Returns:
            networkx graph of the requested class

        Raises:
            InvalidGraph: required columns are missing or an edge references
                a vertex absent from the node table
        """
        edges = pd.read_csv(edges_file, sep='\t')
        missing = [column for column in ('from', 'to') if column not in edges.columns]
        if missing:
            raise InvalidGraph(f"Edge file {edges_file} is missing column(s): {', '.join(missing)}")

        if multigraph:
            graph = nx.MultiDiGraph() if directed else nx.MultiGraph()
        else:
            graph = nx.DiGraph() if directed else nx.Graph()

        if nodes_file is not None:
            nodes = pd.read_csv(nodes_file, sep='\t')
            if 'name' not in nodes.columns:
                raise InvalidGraph(f"Node file {nodes_file} is missing column: name")
            attributes = [column for column in nodes.columns if column != 'name']
            for record in nodes.to_dict('records'):
                name = record.pop('name')
                graph.add_node(name, **{k: v for k, v in record.items() if not _is_missing(v)})
            logger.debug(f"Loaded {len(nodes)} nodes with attributes: {attributes}")

            unknown = (set(edges['from']) | set(edges['to'])) - set(graph.nodes)
            if unknown:
                raise InvalidGraph(
                    f"Edges reference vertices missing from {nodes_file}: "
                    f"{', '.join(map(str, sorted(unknown, key=str)))}"
                )

        for record in edges.to_dict('records'):
            source = record.pop('from')
            target = record.pop('to')
            graph.add_edge(source, target, **{k: v for k, v in record.items() if not _is_missing(v)})

        logger.info(f"Read graph with {graph.number_of_nodes()} nodes and {graph.number_of_edges()} edges")
        return graph


def _is_missing(value) -> bool:
    return not isinstance(value, (list, tuple)) and pd.isna(value)


def read_graph(edges_file: PathLike, nodes_file: Optional[PathLike] = None,
               directed: bool = True) -> nx.Graph:
    """Read a graph from TSV files (see GraphReader.read)"""
    if not Path(edges_file).exists():
        raise FileNotFoundError(f"Edge file not found: {edges_file}")
    return GraphReader.read(edges_file, nodes_file, directed)
