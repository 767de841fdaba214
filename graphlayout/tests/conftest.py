"""
Shared pytest fixtures for graphlayout tests

Supports both development mode (python -m graphlayout) and installed mode (pip install -e .)
"""
import pytest
import networkx as nx
from pathlib import Path
import sys


# Add repository root to Python path for development mode, at import time so
# test modules importing graphlayout can be collected.
#
#   repo/                         <- repo root (added to sys.path)
#   └── graphlayout/              <- package
#       └── tests/
#           └── conftest.py       <- we are here
REPO_ROOT = Path(__file__).parent.parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def small_tree():
    """
    root -> a, b ; a -> c, d

    Vertex order: root, a, b, c, d
    """
    graph = nx.DiGraph()
    graph.add_edges_from([('root', 'a'), ('root', 'b'), ('a', 'c'), ('a', 'd')])
    return graph


@pytest.fixture
def diamond():
    """0 -> 1, 0 -> 2, 1 -> 3, 2 -> 3 (vertex 3 has two parents)"""
    graph = nx.DiGraph()
    graph.add_edges_from([(0, 1), (0, 2), (1, 3), (2, 3)])
    return graph


@pytest.fixture
def weighted_star():
    """Root with two leaves of weight 1 and 3"""
    graph = nx.DiGraph()
    graph.add_node('root')
    graph.add_node('a', size=1.0)
    graph.add_node('b', size=3.0)
    graph.add_edges_from([('root', 'a'), ('root', 'b')])
    return graph


@pytest.fixture
def loop_hive_graph():
    """
    Three axes a, b, c with one vertex each

    Vertex 0 (axis a) has a self-loop; the only other edge joins b and c.
    """
    graph = nx.Graph()
    graph.add_node(0, group='a')
    graph.add_node(1, group='b')
    graph.add_node(2, group='c')
    graph.add_edges_from([(0, 0), (1, 2)])
    return graph


@pytest.fixture
def sectioned_hive_graph():
    """One axis with four vertices alternating between sections x and y"""
    graph = nx.Graph()
    for i, section in enumerate(['x', 'y', 'x', 'y']):
        graph.add_node(i, group='a', part=section)
    graph.add_edges_from([(0, 1), (2, 3)])
    return graph


# Pytest configuration
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual functions"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests running the graphlayout command line"
    )
