"""
Unit tests for the dendrogram layout
"""
import logging
import networkx as nx
import numpy as np
import pytest

from graphlayout.errors import InvalidGraph, NoRoot
from graphlayout.layout.dendrogram import DendrogramLayout, place_dendrogram


class TestDendrogramLayout:
    """Tests for DendrogramLayout.layout"""

    def test_positions(self, small_tree):
        result = DendrogramLayout().layout(small_tree)
        nodes = result.nodes
        assert nodes['name'].tolist() == ['root', 'a', 'b', 'c', 'd']
        assert nodes['x'].tolist() == pytest.approx([2.25, 1.5, 3.0, 1.0, 2.0])
        assert nodes['y'].tolist() == pytest.approx([2.0, 1.0, 0.0, 0.0, 0.0])
        assert nodes['leaf'].tolist() == [False, False, True, True, True]
        assert not nodes['circular'].any()
        assert result.graph is small_tree

    def test_leaves_on_baseline(self, small_tree):
        nodes = DendrogramLayout().layout(small_tree).nodes
        assert (nodes.loc[nodes['leaf'], 'y'] == 0).all()

    def test_parent_at_mean_of_children(self, small_tree):
        nodes = DendrogramLayout().layout(small_tree).nodes
        assert nodes.loc[1, 'x'] == pytest.approx(nodes.loc[[3, 4], 'x'].mean())
        assert nodes.loc[0, 'y'] == nodes.loc[[1, 2], 'y'].max() + 1

    def test_in_direction(self):
        graph = nx.DiGraph([('c', 'p'), ('d', 'p')])
        nodes = DendrogramLayout().layout(graph, direction='in').nodes
        assert nodes['y'].tolist() == pytest.approx([0.0, 1.0, 0.0])
        assert nodes['x'].tolist() == pytest.approx([1.0, 1.5, 2.0])

    def test_circular(self, small_tree):
        result = DendrogramLayout().layout(small_tree, circular=True)
        nodes = result.nodes
        radius = np.hypot(nodes['x'], nodes['y'])
        assert result.circular
        assert nodes['circular'].all()
        assert radius[0] == pytest.approx(0.0, abs=1e-12)
        assert radius[nodes['leaf']].tolist() == pytest.approx([1.0, 1.0, 1.0])

    def test_shared_child_placed_once(self, diamond):
        nodes = DendrogramLayout().layout(diamond).nodes
        assert len(nodes) == 4
        assert nodes.loc[3, 'y'] == 0.0
        assert nodes.loc[0, 'y'] == 2.0

    def test_undirected_rejected(self):
        with pytest.raises(InvalidGraph):
            DendrogramLayout().layout(nx.Graph([(0, 1)]))

    def test_no_root(self):
        with pytest.raises(NoRoot):
            DendrogramLayout().layout(nx.DiGraph([(0, 1), (1, 0)]))

    def test_unreachable_cycle_not_placed(self, caplog):
        graph = nx.DiGraph([(0, 1), (2, 3), (3, 2)])
        with caplog.at_level(logging.WARNING):
            nodes = DendrogramLayout().layout(graph).nodes
        assert "were not placed" in caplog.text
        assert nodes.loc[[2, 3], 'x'].isna().all()


class TestPlaceDendrogram:
    """Tests for place_dendrogram"""

    def test_cycle_below_root(self):
        with pytest.raises(NoRoot):
            place_dendrogram({0: [1], 1: [2], 2: [1]}, [0])

    def test_multiple_roots_continue_leaf_count(self):
        placed = place_dendrogram({0: [], 1: [2], 2: []}, [0, 1])
        assert placed[0] == (1.0, 0.0)
        assert placed[2] == (2.0, 0.0)
        assert placed[1] == (2.0, 1.0)
