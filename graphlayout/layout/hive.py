"""
Hive plot layout

Vertices are assigned to axes (spokes) by a categorical attribute and placed
along them by rank or by a numeric attribute. Axes can be divided into
sections and can be split into a near and a far copy so that edges between
vertices of the same axis get somewhere to go.

Splitting rewrites the graph: it adds a copy of every vertex on the split
axis and redirects edges to those copies. The input graph is never touched;
edits are collected against a working edge list and the derived graph is
built once at the end and attached to the layout.
"""
from __future__ import annotations
from copy import deepcopy
from dataclasses import replace
from math import pi
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple
import logging
import networkx as nx
import numpy as np
import pandas as pd

from ..config import HiveConfig, RadialConfig
from ..errors import InvalidOption, MissingLevel
from ..types import EdgeRecord, SplitMode
from ..utils import (
    bind_columns, index_graph, is_numeric, ordinal_rank, require_attribute,
    rescale, value_range, vertex_table
)
from .types import HiveAxis, LayoutResult

logger = logging.getLogger(__name__)

SPLIT_MODES = ('all', 'loops', 'none')


class HiveLayout:
    """
    Hive plot placement with optional axis splitting

    Algorithm:
    1. Group vertices into axes; spread the axes clockwise from offset with
       angular room proportional to axis_pos
    2. On each axis, order vertices (per section) and assign radii
    3. Split selected axes: copy their vertices, redirect intra-axis edges
       from near to far copy and move cross-axis edges to the copy facing
       the other axis
    4. Convert (radius, angle) to Cartesian coordinates
    """

    def __init__(
        self,
        config: Optional[HiveConfig] = None,
        radial: Optional[RadialConfig] = None
    ) -> None:
        self.config: HiveConfig = config or HiveConfig()
        self.radial: RadialConfig = radial or RadialConfig()

    def layout(
        self,
        graph: nx.Graph,
        axis: str,
        axis_pos: Optional[Sequence[float]] = None,
        sort_by: Optional[str] = None,
        divide_by: Optional[str] = None,
        divide_order: Optional[Sequence[Any]] = None,
        normalize: Optional[bool] = None,
        center_size: Optional[float] = None,
        divide_size: Optional[float] = None,
        use_numeric: bool = False,
        offset: Optional[float] = None,
        split_axes: Optional[SplitMode] = None,
        split_angle: Optional[float] = None,
        circular: bool = False
    ) -> LayoutResult:
        """
        Calculate hive plot positions

        Args:
            graph: Any graph
            axis: Categorical vertex attribute defining the axes
            axis_pos: Relative angular room per axis (default: equal). Recycled
                if the length doesn't match the number of axes.
            sort_by: Vertex attribute ordering vertices along each axis
            divide_by: Categorical vertex attribute dividing axes into sections
            divide_order: Order of the sections; listed levels must be present
            normalize: Equal axis lengths (True) or lengths by vertex count.
                With use_numeric, normalize per axis (True) or globally.
            center_size: Empty gap at the centre
            divide_size: Gap between sections
            use_numeric: Use the numeric sort_by value as position
            offset: Angle of the first axis (radians)
            split_axes: 'all', 'loops' or 'none'
            split_angle: Angle between near and far copy of a split axis
            circular: Ignored

        Returns:
            LayoutResult with 'x', 'y', 'r', 'center_size', 'split', 'axis',
            'section', 'angle', 'circular' and vertex attributes. Its graph
            is the derived graph including vertex copies.

        Raises:
            InvalidOption: unknown split mode, bad axis attribute, or
                use_numeric without a numeric sort_by / with divide_by
            MissingLevel: divide_order names a section absent from an axis
        """
        # Use config defaults if not provided
        if normalize is None:
            normalize = self.config.normalize
        if center_size is None:
            center_size = self.config.center_size
        if divide_size is None:
            divide_size = self.config.divide_size
        if offset is None:
            offset = self.radial.offset
        if split_axes is None:
            split_axes = self.config.split_axes
        if split_angle is None:
            split_angle = self.config.split_angle

        if split_axes not in SPLIT_MODES:
            raise InvalidOption(f"Unknown split argument: {split_axes}. Use 'all', 'loops' or 'none'")
        if circular:
            logger.warning("circular argument ignored for hive layout")

        indexed = index_graph(graph)
        attributes = vertex_table(indexed)
        axis_values = require_attribute(attributes, axis, 'axis')
        if axis_values.isna().any():
            raise InvalidOption(f"axis attribute '{axis}' has missing values")
        sort_values = None if sort_by is None else require_attribute(attributes, sort_by, 'sort_by')
        divide_values = None if divide_by is None else require_attribute(attributes, divide_by, 'divide_by')
        if divide_values is not None and divide_values.isna().any():
            raise InvalidOption(f"divide_by attribute '{divide_by}' has missing values")

        numeric_range = None
        if use_numeric:
            if sort_values is None or not is_numeric(sort_values):
                raise InvalidOption("sort_by must be a numeric vertex attribute when use_numeric = True")
            if divide_values is not None:
                raise InvalidOption("Cannot divide axis while use_numeric = True")
            numeric_range = value_range(sort_values)

        groups = group_indices(axis_values)
        angles = axis_angles(len(groups), axis_pos, offset)
        longest = max((len(members) for _, members in groups), default=0)
        edges: List[EdgeRecord] = [
            {'source': u, 'target': v, 'data': deepcopy(data)}
            for u, v, data in indexed.edges(data=True)
        ]

        axes: List[HiveAxis] = []
        for (label, members), angle in zip(groups, angles):
            axis_length = 1.0 if normalize else len(members) / longest
            if split_axes == 'all':
                split = True
            elif split_axes == 'loops':
                member_set = set(members)
                split = any(e['source'] in member_set and e['target'] in member_set for e in edges)
            else:
                split = False
            sections = section_indices(members, divide_values, divide_order, label)
            radius = place_on_axis(
                sections, axis_length / len(members), sort_values, use_numeric,
                numeric_range, normalize, divide_size
            )
            section_of = {node: section for section, nodes in sections for node in nodes}
            axes.append(HiveAxis(
                label=label,
                angle=float(angle),
                nodes=tuple(members),
                r=tuple(radius[node] + center_size for node in members),
                sections=tuple(section_of[node] for node in members),
                split=split,
                center_size=center_size
            ))

        vertices = [deepcopy(data) for _, data in indexed.nodes(data=True)]
        removed: Set[int] = set()
        n_split = 0
        for i in range(len(axes)):
            if axes[i].split:
                split_axis(i, axes, vertices, edges, removed, split_angle)
                n_split += 1

        derived = graph.__class__()
        derived.graph.update(graph.graph)
        derived.add_nodes_from(enumerate(vertices))
        derived.add_edges_from(
            (e['source'], e['target'], e['data'])
            for eid, e in enumerate(edges) if eid not in removed
        )

        nodes = axes_to_frame(axes)
        nodes = bind_columns(nodes.to_dict('list'), vertex_table(derived))

        logger.info(f"Hive: {len(groups)} axes, {n_split} split, "
                    f"{len(vertices) - len(attributes)} vertices added, {len(removed)} edges redirected")
        return LayoutResult(
            nodes=nodes,
            graph=derived,
            circular=False,
            algorithm='hive',
            layout_stats={
                'n_nodes': len(vertices),
                'n_axes': len(groups),
                'n_split_axes': n_split,
                'n_added_nodes': len(vertices) - len(attributes),
                'n_redirected_edges': len(removed),
                'axes': [label for label, _ in groups],
            }
        )


def group_indices(values: pd.Series) -> List[Tuple[Any, List[int]]]:
    """Row indices per distinct value, values in sorted order"""
    return [
        (label, members.index.tolist())
        for label, members in values.groupby(values, sort=True, observed=True)
    ]


def axis_angles(n_axes: int, axis_pos: Optional[Sequence[float]], offset: float) -> np.ndarray:
    """
    Angle of every axis, clockwise from offset

    Each axis gets angular room proportional to its axis_pos weight.
    """
    if n_axes == 0:
        return np.empty(0)
    if axis_pos is None:
        weights = np.ones(n_axes)
    else:
        weights = np.atleast_1d(np.asarray(axis_pos, dtype=float))
        if len(weights) != n_axes:
            logger.warning("Number of axes not matching axis_pos argument. Recycling as needed")
            weights = np.resize(weights, n_axes)
    cumulative = np.cumsum(weights)
    start = np.concatenate([[0.0], cumulative[:-1]])
    return offset - start / cumulative[-1] * 2 * pi


def section_indices(
    members: List[int],
    divide_values: Optional[pd.Series],
    divide_order: Optional[Sequence[Any]],
    axis_label: Any
) -> List[Tuple[Any, List[int]]]:
    """
    Divide the vertices of an axis into ordered sections

    Without divide_values the axis is a single section labelled 1. Listed
    levels of divide_order come first, in that order; the rest follow
    sorted.
    """
    if divide_values is None:
        return [(1, list(members))]
    if isinstance(divide_order, str):
        divide_order = [divide_order]
    sections = group_indices(divide_values.iloc[members])
    if divide_order is not None:
        present = [label for label, _ in sections]
        missing = [level for level in divide_order if level not in present]
        if missing:
            raise MissingLevel(
                f"divide_order levels not present on axis '{axis_label}': "
                f"{', '.join(map(str, missing))}"
            )
        rank = {level: i for i, level in enumerate(divide_order)}
        sections.sort(key=lambda section: rank.get(section[0], len(rank)))
    return sections


def place_on_axis(
    sections: List[Tuple[Any, List[int]]],
    node_div: float,
    sort_values: Optional[pd.Series],
    use_numeric: bool,
    numeric_range: Optional[Tuple[float, float]],
    normalize: bool,
    divide_size: float
) -> Dict[int, float]:
    """
    Radial position (before the centre gap) of every vertex on an axis

    Vertices are spaced by node_div in rank order, or placed by their numeric
    value rescaled to [0, 1]. Each section starts one step plus divide_size
    beyond the furthest vertex of the sections before it.
    """
    radius: Dict[int, float] = {}
    furthest = None
    for _, nodes in sections:
        if not nodes:
            continue
        if sort_values is None:
            pos = (ordinal_rank(nodes) - 1) * node_div
        else:
            values = sort_values.iloc[nodes].to_numpy()
            if use_numeric:
                domain = value_range(values) if normalize else numeric_range
                pos = rescale(values, domain)
            else:
                pos = (ordinal_rank(values) - 1) * node_div
        if furthest is not None:
            pos = pos + node_div + divide_size + furthest
        furthest = float(np.max(pos)) if furthest is None else max(furthest, float(np.max(pos)))
        radius.update(zip(nodes, pos.tolist()))
    return radius


def split_axis(
    i: int,
    axes: List[HiveAxis],
    vertices: List[Dict[str, Any]],
    edges: List[EdgeRecord],
    removed: Set[int],
    split_angle: float
) -> None:
    """
    Split axis i into a near (original) and a far (copy) axis

    Appends the vertex copies to vertices, appends redirected edges to edges
    and marks the replaced edges in removed. The near axis replaces axes[i]
    and the far axis is appended to axes.
    """
    current = axes[i]
    start = len(vertices)
    copy_of = {node: start + j for j, node in enumerate(current.nodes)}
    vertices.extend(deepcopy(vertices[node]) for node in current.nodes)
    members = set(current.nodes)
    radius = current.radius_of()

    # Intra-axis edges: the endpoint further out moves to the far copy
    for eid in range(len(edges)):
        edge = edges[eid]
        u, v = edge['source'], edge['target']
        if eid in removed or u not in members or v not in members:
            continue
        if radius[u] < radius[v]:
            u, v = u, copy_of[v]
        else:
            u, v = copy_of[u], v
        edges.append({'source': u, 'target': v, 'data': deepcopy(edge['data'])})
        removed.add(eid)

    # Cross-axis edges towards axes on the far side move to the far copy
    facing: Set[int] = set()
    for j, other in enumerate(axes):
        if j == i:
            continue
        diff = other.angle - current.angle
        if (diff < -pi) if other.angle < current.angle else (diff < pi):
            facing.update(other.nodes)
    for eid in range(len(edges)):
        edge = edges[eid]
        u, v = edge['source'], edge['target']
        if eid in removed:
            continue
        if (u in members and v in facing) or (u in facing and v in members):
            edges.append({
                'source': copy_of[u] if u in members else u,
                'target': copy_of[v] if v in members else v,
                'data': deepcopy(edge['data'])
            })
            removed.add(eid)

    axes[i] = replace(current, angle=current.angle - split_angle / 2)
    axes.append(replace(
        current,
        nodes=tuple(copy_of[node] for node in current.nodes),
        angle=current.angle + split_angle / 2
    ))


def axes_to_frame(axes: List[HiveAxis]) -> pd.DataFrame:
    """Per-vertex placement table in vertex index order"""
    frame = pd.DataFrame({
        'node': [node for ax in axes for node in ax.nodes],
        'r': pd.Series([r for ax in axes for r in ax.r], dtype=float),
        'center_size': [ax.center_size for ax in axes for _ in ax.nodes],
        'split': [ax.split for ax in axes for _ in ax.nodes],
        'axis': [ax.label for ax in axes for _ in ax.nodes],
        'section': [s for ax in axes for s in ax.sections],
        'angle': pd.Series([ax.angle for ax in axes for _ in ax.nodes], dtype=float),
    })
    frame['x'] = frame['r'] * np.cos(frame['angle'])
    frame['y'] = frame['r'] * np.sin(frame['angle'])
    frame['circular'] = False
    frame = frame.sort_values('node', kind='stable').reset_index(drop=True)
    columns = ['x', 'y', 'r', 'center_size', 'split', 'axis', 'section', 'angle', 'circular']
    return frame[columns]
