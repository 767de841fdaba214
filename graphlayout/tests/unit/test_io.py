"""
Unit tests for TSV readers and writers
"""
import networkx as nx
import pandas as pd
import pytest

from graphlayout.errors import InvalidGraph
from graphlayout.io import GraphReader, LayoutWriter, read_graph, write_layout
from graphlayout.layout import create_layout


@pytest.fixture
def edges_file(tmp_path):
    path = tmp_path / "edges.tsv"
    path.write_text("from\tto\tweight\nb\ta\t1.5\nb\tc\t2\n")
    return path


@pytest.fixture
def nodes_file(tmp_path):
    path = tmp_path / "nodes.tsv"
    path.write_text("name\tgroup\na\tx\nb\ty\nc\tx\n")
    return path


class TestGraphReader:
    """Tests for GraphReader.read"""

    def test_edges_only(self, edges_file):
        graph = GraphReader.read(edges_file)
        assert isinstance(graph, nx.DiGraph)
        assert list(graph.nodes) == ['b', 'a', 'c']
        assert graph.edges['b', 'c']['weight'] == 2

    def test_node_table_fixes_order(self, edges_file, nodes_file):
        graph = GraphReader.read(edges_file, nodes_file)
        assert list(graph.nodes) == ['a', 'b', 'c']
        assert graph.nodes['b']['group'] == 'y'

    def test_undirected(self, edges_file):
        graph = GraphReader.read(edges_file, directed=False)
        assert not graph.is_directed()

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "bad.tsv"
        path.write_text("source\ttarget\na\tb\n")
        with pytest.raises(InvalidGraph):
            GraphReader.read(path)

    def test_unknown_vertex(self, edges_file, tmp_path):
        path = tmp_path / "nodes.tsv"
        path.write_text("name\na\nb\n")
        with pytest.raises(InvalidGraph):
            GraphReader.read(edges_file, path)

    def test_read_graph(self, edges_file, nodes_file):
        graph = read_graph(edges_file, nodes_file, directed=False)
        assert not graph.is_directed()
        assert list(graph.nodes) == ['a', 'b', 'c']

    def test_read_graph_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_graph(tmp_path / "missing.tsv")


class TestLayoutWriter:
    """Tests for LayoutWriter.write"""

    def test_write(self, tmp_path, edges_file, nodes_file):
        graph = GraphReader.read(edges_file, nodes_file)
        result = create_layout(graph, 'linear')
        result.nodes['tags'] = pd.Series([['p', 'q'], [], ['r']], dtype=object)
        layout_file = tmp_path / "out" / "s.layout.tsv"
        edges_out = tmp_path / "out" / "s.edges.tsv"
        LayoutWriter().write(result, layout_file, edges_out)

        layout = pd.read_csv(layout_file, sep='\t')
        assert layout['name'].tolist() == ['a', 'b', 'c']
        assert layout['x'].tolist() == pytest.approx([1.0, 2.0, 3.0])
        assert layout.loc[0, 'tags'] == 'p,q'

        edges = pd.read_csv(edges_out, sep='\t')
        assert edges['from'].tolist() == [1, 1]
        assert edges['to'].tolist() == [0, 2]

    def test_write_layout_without_edges(self, tmp_path, edges_file):
        result = create_layout(GraphReader.read(edges_file), 'linear')
        layout_file = tmp_path / "nested" / "only.layout.tsv"
        write_layout(result, layout_file)

        layout = pd.read_csv(layout_file, sep='\t')
        assert layout['name'].tolist() == ['b', 'a', 'c']
        assert list(tmp_path.joinpath("nested").iterdir()) == [layout_file]
