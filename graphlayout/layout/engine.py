"""
Layout Engine for graphlayout
Resolves a layout name or function and runs it

Two kinds of algorithms are available:
- Generic layouts delegated to networkx (force-directed, spectral, circle...)
- Custom layouts implemented here (dendrogram, linear, treemap, hive, manual)
  plus any function registered with register_layout()
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union
import logging
import networkx as nx
import numpy as np
import pandas as pd

from ..config import LayoutConfig
from ..errors import InvalidOption, UnknownLayout
from ..radial import to_circular
from ..utils import bind_columns, vertex_table
from .dendrogram import DendrogramLayout
from .hive import HiveLayout
from .linear import LinearLayout
from .manual import ManualLayout
from .treemap import TreemapLayout
from .types import LayoutResult

logger = logging.getLogger(__name__)

LayoutFunction = Callable[..., Union[LayoutResult, pd.DataFrame]]

GENERIC_PREFIXES = ('as_', 'in_', 'with_', 'on_')

_custom_layouts: Dict[str, LayoutFunction] = {}


class GenericLayout(Enum):
    """Layout algorithms delegated to networkx"""
    AS_TREE = 'as_tree'
    AS_BIPARTITE = 'as_bipartite'
    AS_MULTIPARTITE = 'as_multipartite'
    AS_PLANAR = 'as_planar'
    IN_CIRCLE = 'in_circle'
    IN_SHELL = 'in_shell'
    ON_SPIRAL = 'on_spiral'
    NICELY = 'nicely'
    RANDOMLY = 'randomly'
    WITH_FR = 'with_fr'
    WITH_KK = 'with_kk'
    WITH_SPECTRAL = 'with_spectral'
    WITH_ARF = 'with_arf'

    @property
    def supports_circular(self) -> bool:
        """Only layered layouts can be bent into a circle"""
        return self is GenericLayout.AS_TREE

    @classmethod
    def resolve(cls, name: str) -> Optional['GenericLayout']:
        """
        Match a name against the catalog

        The name is tried as is, then with each of the prefixes 'as_', 'in_',
        'with_' and 'on_', so 'fr' finds 'with_fr' and 'circle' finds
        'in_circle'.
        """
        for candidate in (name, *(prefix + name for prefix in GENERIC_PREFIXES)):
            try:
                return cls(candidate)
            except ValueError:
                continue
        return None


def register_layout(name: str) -> Callable[[LayoutFunction], LayoutFunction]:
    """
    Register a custom layout function under a name

    The function is called as fn(graph, circular=..., **options) and must
    return a LayoutResult or a DataFrame with 'x' and 'y' columns.

    Example:
        >>> @register_layout('origin')
        ... def origin(graph, circular=False):
        ...     return pd.DataFrame({'x': [0.0] * len(graph), 'y': [0.0] * len(graph)})
    """
    def decorator(func: LayoutFunction) -> LayoutFunction:
        _custom_layouts[name] = func
        return func
    return decorator


def registered_layouts() -> List[str]:
    """Names of user-registered layouts"""
    return sorted(_custom_layouts)


class LayoutEngine:
    """
    Entry point for all layouts

    Resolution order for names:
    1. Generic networkx catalog (with prefix completion)
    2. Built-in custom layouts
    3. Layouts added with register_layout()
    """

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        """
        Initialize layout engine

        Args:
            config: Layout configuration (uses defaults if None)
        """
        self.config: LayoutConfig = config or LayoutConfig()
        self._builtin: Dict[str, LayoutFunction] = {
            'dendrogram': DendrogramLayout(self.config.radial).layout,
            'linear': LinearLayout(self.config.radial).layout,
            'treemap': TreemapLayout(self.config.treemap).layout,
            'hive': HiveLayout(self.config.hive, self.config.radial).layout,
            'manual': ManualLayout().layout,
        }

    def resolve(self, name: str) -> Union[GenericLayout, LayoutFunction]:
        """
        Find the algorithm behind a layout name

        Raises:
            UnknownLayout: no generic, built-in or registered layout matches
        """
        generic = GenericLayout.resolve(name)
        if generic is not None:
            return generic
        if name in self._builtin:
            return self._builtin[name]
        if name in _custom_layouts:
            return _custom_layouts[name]
        raise UnknownLayout(f"Cannot find layout: {name}")

    def create_layout(
        self,
        graph: nx.Graph,
        layout: Union[str, LayoutFunction],
        circular: bool = False,
        **options: Any
    ) -> LayoutResult:
        """
        Calculate a layout

        Args:
            graph: networkx graph
            layout: Layout name or function
            circular: Request a circular representation
            **options: Passed on to the layout algorithm

        Returns:
            LayoutResult with one row per vertex of its graph
        """
        if callable(layout):
            algorithm = self._call(layout, graph, circular, options)
        elif isinstance(layout, str):
            target = self.resolve(layout)
            logger.debug(f"Layout '{layout}' resolved to {target}")
            if isinstance(target, GenericLayout):
                algorithm = self.generic_layout(graph, target, circular, **options)
            else:
                algorithm = self._call(target, graph, circular, options)
            if not algorithm.algorithm:
                algorithm.algorithm = layout
        else:
            raise UnknownLayout(f"Unknown layout: {layout!r}")
        return check_layout(algorithm)

    def _call(self, func: LayoutFunction, graph: nx.Graph, circular: bool,
              options: Dict[str, Any]) -> LayoutResult:
        result = func(graph, circular=circular, **options)
        if isinstance(result, LayoutResult):
            return result
        if isinstance(result, pd.DataFrame):
            nodes = result.reset_index(drop=True)
            if 'circular' not in nodes.columns:
                nodes['circular'] = circular
            return LayoutResult(
                nodes=nodes,
                graph=graph,
                circular=circular,
                algorithm=getattr(func, '__name__', '')
            )
        raise InvalidOption(
            f"Layout function must return a LayoutResult or DataFrame, got {type(result).__name__}"
        )

    def generic_layout(
        self,
        graph: nx.Graph,
        algorithm: Union[str, GenericLayout],
        circular: bool = False,
        offset: Optional[float] = None,
        **options: Any
    ) -> LayoutResult:
        """
        Run a networkx layout algorithm

        Args:
            graph: networkx graph
            algorithm: Catalog entry or name
            circular: Bend the layout into a circle (as_tree only)
            offset: Start angle for circular layouts (uses config if None)
            **options: Passed on to the networkx function

        Raises:
            InvalidOption: circular requested for a non-layered algorithm
        """
        if isinstance(algorithm, str):
            resolved = GenericLayout.resolve(algorithm)
            if resolved is None:
                raise UnknownLayout(f"Cannot find generic layout: {algorithm}")
            algorithm = resolved
        if circular and not algorithm.supports_circular:
            raise InvalidOption("Circular layout only applicable to tree layout")
        if offset is None:
            offset = self.config.radial.offset

        if graph.number_of_nodes() == 0:
            coords = np.empty((0, 2))
        else:
            pos = _GENERIC_FUNCTIONS[algorithm](graph, self.config.seed, **options)
            coords = np.array([pos[node][:2] for node in graph.nodes], dtype=float)
        x, y = coords[:, 0], coords[:, 1]
        if circular:
            x, y = to_circular(y, x, offset, self.config.radial.pad)

        nodes = bind_columns({'x': x, 'y': y, 'circular': circular}, vertex_table(graph))
        return LayoutResult(
            nodes=nodes,
            graph=graph,
            circular=circular,
            algorithm=algorithm.value,
            layout_stats={'n_nodes': len(nodes)}
        )


def check_layout(result: LayoutResult) -> LayoutResult:
    """
    Validate a layout before handing it out

    Raises:
        InvalidOption: missing 'x'/'y' columns or row count different from
            the number of vertices of the back-referenced graph
    """
    missing = [column for column in ('x', 'y') if column not in result.nodes.columns]
    if missing:
        raise InvalidOption(f"Layout is missing column(s): {', '.join(missing)}")
    if len(result.nodes) != result.graph.number_of_nodes():
        raise InvalidOption(
            f"Layout has {len(result.nodes)} rows but its graph has "
            f"{result.graph.number_of_nodes()} vertices"
        )
    if 'circular' not in result.nodes.columns:
        result.nodes['circular'] = result.circular
    return result


def create_layout(
    graph: nx.Graph,
    layout: Union[str, LayoutFunction],
    circular: bool = False,
    config: Optional[LayoutConfig] = None,
    **options: Any
) -> LayoutResult:
    """
    Calculate a layout with a fresh LayoutEngine

    Example:
        >>> result = create_layout(graph, 'hive', axis='group', split_axes='loops')
        >>> result.nodes[['x', 'y']]
    """
    return LayoutEngine(config).create_layout(graph, layout, circular=circular, **options)


# ============================================================
# NETWORKX DELEGATES
# ============================================================
# Each returns {node: (x, y)} for every node of the graph.

def _tree(graph, seed, start=None, **options):
    """
    Layered breadth-first layout, roots on top

    All sources (vertices without incoming edges) share the top layer. A
    vertex the search has not reached, e.g. in a cycle without a source or
    in another component of an undirected graph, becomes an extra root.
    """
    if start is not None:
        roots = [start]
    elif graph.is_directed():
        roots = [node for node, degree in graph.in_degree() if degree == 0]
    else:
        roots = []
    if not roots:
        roots = [next(iter(graph.nodes))]
    while True:
        layers = list(nx.bfs_layers(graph, roots))
        reached = {node for layer in layers for node in layer}
        unreached = [node for node in graph.nodes if node not in reached]
        if not unreached:
            break
        roots.append(unreached[0])
    options.setdefault('align', 'horizontal')
    pos = nx.multipartite_layout(graph, subset_key=dict(enumerate(layers)), **options)
    return {node: (x, -y) for node, (x, y) in pos.items()}


def _bipartite(graph, seed, nodes=None, **options):
    if nodes is None:
        nodes = [node for node, data in graph.nodes(data=True) if data.get('type')]
    return nx.bipartite_layout(graph, nodes, **options)


def _arf(graph, seed, **options):
    if seed is not None and 'pos' not in options:
        options['pos'] = nx.random_layout(graph, seed=seed)
    return nx.arf_layout(graph, **options)


def _seeded(func):
    def run(graph, seed, **options):
        options.setdefault('seed', seed)
        return func(graph, **options)
    return run


def _plain(func):
    def run(graph, seed, **options):
        return func(graph, **options)
    return run


_GENERIC_FUNCTIONS: Dict[GenericLayout, Callable[..., Dict[Any, Any]]] = {
    GenericLayout.AS_TREE: _tree,
    GenericLayout.AS_BIPARTITE: _bipartite,
    GenericLayout.AS_MULTIPARTITE: _plain(nx.multipartite_layout),
    GenericLayout.AS_PLANAR: _plain(nx.planar_layout),
    GenericLayout.IN_CIRCLE: _plain(nx.circular_layout),
    GenericLayout.IN_SHELL: _plain(nx.shell_layout),
    GenericLayout.ON_SPIRAL: _plain(nx.spiral_layout),
    GenericLayout.NICELY: _seeded(nx.spring_layout),
    GenericLayout.RANDOMLY: _seeded(nx.random_layout),
    GenericLayout.WITH_FR: _seeded(nx.spring_layout),
    GenericLayout.WITH_KK: _plain(nx.kamada_kawai_layout),
    GenericLayout.WITH_SPECTRAL: _plain(nx.spectral_layout),
    GenericLayout.WITH_ARF: _arf,
}
