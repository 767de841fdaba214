"""
Utility functions

General-purpose helpers shared by the layout algorithms: index-based views
of networkx graphs, attribute tables and numeric rescaling.
"""

from __future__ import annotations
from typing import Dict, Hashable, Iterable, Sequence, Type
import logging
import networkx as nx
import numpy as np
import pandas as pd

from .errors import InvalidOption, LayoutError
from .types import Range

logger = logging.getLogger(__name__)


def node_index(graph: nx.Graph) -> Dict[Hashable, int]:
    """
    Map node keys to vertex indices

    The index of a vertex is its position in graph.nodes iteration order.
    """
    return {key: i for i, key in enumerate(graph.nodes)}


def index_graph(graph: nx.Graph) -> nx.Graph:
    """
    Copy a graph with its nodes relabelled to 0..n-1

    The copy has the same networkx class as the input. Every node keeps a
    copy of its attributes plus 'name' holding the original key (an existing
    'name' attribute wins).

    Args:
        graph: Any networkx graph

    Returns:
        New graph with integer nodes in index order
    """
    index = node_index(graph)
    indexed = graph.__class__()
    indexed.graph.update(graph.graph)
    indexed.add_nodes_from(
        (i, {**data, 'name': data.get('name', key)})
        for i, (key, data) in enumerate(graph.nodes(data=True))
    )
    indexed.add_edges_from(
        (index[u], index[v], dict(data)) for u, v, data in graph.edges(data=True)
    )
    return indexed


def vertex_table(graph: nx.Graph) -> pd.DataFrame:
    """
    Vertex attributes as a DataFrame with one row per vertex in index order

    The first column is 'name': the node's 'name' attribute, or its key.
    List-valued attributes are kept as object cells.
    """
    nodes = list(graph.nodes(data=True))
    table = pd.DataFrame(
        [{k: v for k, v in data.items() if k != 'name'} for _, data in nodes],
        index=pd.RangeIndex(len(nodes))
    )
    table.insert(0, 'name', [data.get('name', key) for key, data in nodes])
    return table


def edge_table(graph: nx.Graph) -> pd.DataFrame:
    """
    Edge list with attributes, one row per edge (parallel edges included)

    Returns:
        DataFrame with 'from' and 'to' vertex indices followed by one column
        per edge attribute
    """
    index = node_index(graph)
    edges = list(graph.edges(data=True))
    table = pd.DataFrame(
        [dict(data) for _, _, data in edges],
        index=pd.RangeIndex(len(edges))
    )
    table.insert(0, 'to', [index[v] for _, v, _ in edges])
    table.insert(0, 'from', [index[u] for u, _, _ in edges])
    return table


def require_attribute(
    table: pd.DataFrame,
    name: str,
    argument: str,
    error: Type[LayoutError] = InvalidOption
) -> pd.Series:
    """
    Fetch a vertex attribute column or fail

    Args:
        table: Vertex attribute table
        name: Attribute name
        argument: Name of the option that referenced the attribute (for the message)
        error: Exception class to raise when the attribute is absent
    """
    if name in table.columns:
        return table[name]
    raise error(f"{argument} must be a vertex attribute of the graph (got '{name}')")


def is_numeric(values: Iterable) -> bool:
    """Whether values are numeric (booleans excluded)"""
    series = values if isinstance(values, pd.Series) else pd.Series(list(values))
    return (pd.api.types.is_numeric_dtype(series)
            and not pd.api.types.is_bool_dtype(series))


def ordinal_rank(values: Sequence) -> np.ndarray:
    """
    1-based ranks with ties broken by position

    Equivalent to ranking by a stable sort, so [30, 10, 20] -> [3, 1, 2].
    Missing values (None, NaN) rank last, in position order.
    """
    values = pd.Series(list(values), dtype=object)
    missing = values.isna().to_numpy()
    present = np.flatnonzero(~missing)
    order = present[np.argsort(values.iloc[present].to_numpy(), kind='stable')]
    order = np.concatenate([order, np.flatnonzero(missing)])
    ranks = np.empty(len(values), dtype=int)
    ranks[order] = np.arange(1, len(values) + 1)
    return ranks


def rescale(values, from_range: Range, to_range: Range = (0.0, 1.0)) -> np.ndarray:
    """
    Linearly map values from one range onto another

    A zero-width source range maps everything to the midpoint of the target.
    Non-finite input becomes NaN.
    """
    values = np.asarray(values, dtype=float)
    f0, f1 = from_range
    t0, t1 = to_range
    if f1 == f0:
        scaled = np.full_like(values, (t0 + t1) / 2)
    else:
        scaled = (values - f0) / (f1 - f0) * (t1 - t0) + t0
    return np.where(np.isfinite(values), scaled, np.nan)


def value_range(values) -> Range:
    """(min, max) ignoring NaN"""
    values = np.asarray(values, dtype=float)
    return float(np.nanmin(values)), float(np.nanmax(values))


def bind_columns(layout: Dict[str, object], attributes: pd.DataFrame) -> pd.DataFrame:
    """
    Join layout columns with the vertex attribute table by row index

    Layout columns come first. Attributes with the same name as a layout
    column are dropped.
    """
    frame = pd.DataFrame(layout, index=attributes.index)
    shadowed = [column for column in attributes.columns if column in frame.columns]
    if shadowed:
        logger.warning(f"Vertex attributes shadowed by layout columns: {', '.join(map(str, shadowed))}")
    return pd.concat([frame, attributes.drop(columns=shadowed)], axis=1)
