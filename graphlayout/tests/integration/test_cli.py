"""
graphlayout CLI Integration Tests

Runs the layout subcommand programmatically on small TSV inputs and checks
the written layout and edge tables.

Run: pytest graphlayout/tests/integration/ -v
"""
from argparse import Namespace
import pandas as pd
import pytest

from graphlayout.cli.layout import parse_options, parse_value, run
from graphlayout.errors import InvalidOption, UnknownLayout


@pytest.fixture
def inputs(tmp_path):
    edges = tmp_path / "edges.tsv"
    edges.write_text("from\tto\nr\ta\nr\tb\na\tc\na\td\nc\tc\n")
    nodes = tmp_path / "nodes.tsv"
    nodes.write_text("name\tgroup\tsize\nr\tinner\t0\na\tmiddle\t0\nb\touter\t2\nc\touter\t1\nd\touter\t1\n")
    return edges, nodes


def make_args(edges, nodes, output_dir, algorithm, options=(), circular=False, preset='default'):
    """Namespace matching what argparse would create"""
    return Namespace(
        edges=str(edges),
        nodes=str(nodes) if nodes is not None else None,
        undirected=False,
        algorithm=algorithm,
        circular=circular,
        option=list(options),
        preset=preset,
        prefix='sample',
        output_dir=str(output_dir),
        debug=False
    )


@pytest.mark.integration
def test_dendrogram_outputs(inputs, tmp_path):
    edges, nodes = inputs
    out = tmp_path / "out"
    run(make_args(edges, nodes, out, 'dendrogram', circular=True))

    layout = pd.read_csv(out / "sample.layout.tsv", sep='\t')
    assert len(layout) == 5
    assert layout['name'].tolist() == ['r', 'a', 'b', 'c', 'd']
    assert layout['circular'].all()

    written = pd.read_csv(out / "sample.edges.tsv", sep='\t')
    assert len(written) == 5
    assert {'from', 'to', 'circular'} <= set(written.columns)


@pytest.mark.integration
def test_hive_split_outputs(inputs, tmp_path):
    edges, nodes = inputs
    out = tmp_path / "out"
    run(make_args(edges, nodes, out, 'hive',
                  options=['axis=group', 'split_axes=loops']))

    layout = pd.read_csv(out / "sample.layout.tsv", sep='\t')
    # outer axis holds a self-loop and is split: b, c, d get copies
    assert len(layout) == 8
    assert layout.loc[layout['split'], 'axis'].unique().tolist() == ['outer']


@pytest.mark.integration
def test_treemap_with_preset(inputs, tmp_path):
    edges, nodes = inputs
    out = tmp_path / "out"
    run(make_args(edges, nodes, out, 'treemap', options=['weight=size', 'width=4'], preset='compact'))

    layout = pd.read_csv(out / "sample.layout.tsv", sep='\t')
    leaves = layout[layout['leaf']]
    assert (leaves['width'] * leaves['height']).sum() == pytest.approx(4.0)


@pytest.mark.integration
def test_missing_input(tmp_path):
    with pytest.raises(FileNotFoundError):
        run(make_args(tmp_path / "absent.tsv", None, tmp_path, 'linear'))


@pytest.mark.integration
def test_unknown_algorithm(inputs, tmp_path):
    edges, nodes = inputs
    with pytest.raises(UnknownLayout):
        run(make_args(edges, nodes, tmp_path, 'bogus'))


class TestOptionParsing:
    """Tests for --option value conversion"""

    def test_values(self):
        assert parse_value('3') == 3
        assert parse_value('0.5') == 0.5
        assert parse_value('true') is True
        assert parse_value('none') is None
        assert parse_value('group') == 'group'
        assert parse_value('b,a') == ['b', 'a']
        assert parse_value('1,2') == [1, 2]

    def test_options(self):
        assert parse_options(['axis=group', 'split_axes = loops']) == {'axis': 'group', 'split_axes': 'loops'}

    def test_bad_option(self):
        with pytest.raises(InvalidOption):
            parse_options(['axis'])
