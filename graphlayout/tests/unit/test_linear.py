"""
Unit tests for the linear layout
"""
import logging
import networkx as nx
import numpy as np
import pytest

from graphlayout.errors import InvalidOption
from graphlayout.layout.linear import LinearLayout


@pytest.fixture
def keyed_graph():
    graph = nx.Graph()
    for node, key in zip('abc', [30, 10, 20]):
        graph.add_node(node, key=key, label=f"n{key}")
    graph.add_edges_from([('a', 'b'), ('b', 'c')])
    return graph


class TestLinearLayout:
    """Tests for LinearLayout.layout"""

    def test_index_order(self, keyed_graph):
        nodes = LinearLayout().layout(keyed_graph).nodes
        assert nodes['x'].tolist() == [1.0, 2.0, 3.0]
        assert (nodes['y'] == 0).all()

    def test_sort_by_rank(self, keyed_graph):
        nodes = LinearLayout().layout(keyed_graph, sort_by='key').nodes
        assert nodes['x'].tolist() == [3.0, 1.0, 2.0]

    def test_sort_by_partly_missing_label(self, keyed_graph):
        """Vertices without the attribute go to the end"""
        keyed_graph.nodes['a']['tag'] = 'z'
        keyed_graph.nodes['c']['tag'] = 'y'
        nodes = LinearLayout().layout(keyed_graph, sort_by='tag').nodes
        assert nodes['x'].tolist() == [2.0, 3.0, 1.0]

    def test_use_numeric(self, keyed_graph):
        nodes = LinearLayout().layout(keyed_graph, sort_by='key', use_numeric=True).nodes
        assert nodes['x'].tolist() == [30.0, 10.0, 20.0]

    def test_use_numeric_falls_back_to_rank(self, keyed_graph, caplog):
        with caplog.at_level(logging.WARNING):
            nodes = LinearLayout().layout(keyed_graph, sort_by='label', use_numeric=True).nodes
        assert "not numeric" in caplog.text
        assert nodes['x'].tolist() == [3.0, 1.0, 2.0]

    def test_missing_sort_by(self, keyed_graph):
        with pytest.raises(InvalidOption):
            LinearLayout().layout(keyed_graph, sort_by='missing')

    def test_circular(self, keyed_graph):
        result = LinearLayout().layout(keyed_graph, circular=True)
        radius = np.hypot(result.nodes['x'], result.nodes['y'])
        assert result.circular
        assert radius.tolist() == pytest.approx([0.5, 0.5, 0.5])
        # first vertex is clockwise of 12 o'clock
        assert result.nodes.loc[0, 'x'] > 0

    def test_attributes_carried(self, keyed_graph):
        nodes = LinearLayout().layout(keyed_graph).nodes
        assert list(nodes.columns[:3]) == ['x', 'y', 'circular']
        assert nodes['label'].tolist() == ['n30', 'n10', 'n20']
