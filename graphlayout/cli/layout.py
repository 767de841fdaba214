"""Layout subcommand - compute node positions"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from pathlib import Path
import logging
from argparse import ArgumentParser, Namespace, _SubParsersAction

from ..config import LayoutConfig
from ..errors import InvalidOption
from ..io import GraphReader, LayoutWriter
from ..layout import LayoutEngine

logger = logging.getLogger(__name__)

PRESETS = ('default', 'compact', 'spacious')


def add_parser(subparsers: _SubParsersAction) -> ArgumentParser:
    """
    Add layout subcommand parser

    Args:
        subparsers: Subparser action from main argument parser

    Returns:
        Configured ArgumentParser for layout subcommand
    """
    parser = subparsers.add_parser(
        'layout',
        help='Compute a graph layout and write it as TSV'
    )

    # Input
    parser.add_argument('--edges', required=True,
                       help='Edge list TSV with from/to columns')
    parser.add_argument('--nodes',
                       help='Node table TSV with a name column (fixes vertex order)')
    parser.add_argument('--undirected', action='store_true',
                       help='Read the graph as undirected')

    # Layout
    parser.add_argument('--algorithm', required=True,
                       help='Layout name, e.g. dendrogram, linear, treemap, hive, fr, tree')
    parser.add_argument('--circular', action='store_true',
                       help='Request a circular layout')
    parser.add_argument('--option', action='append', default=[], metavar='KEY=VALUE',
                       help='Layout option, may be repeated (comma-separated values become lists)')
    parser.add_argument('--preset', choices=PRESETS, default='default',
                       help='Configuration preset (default: default)')

    # Output
    parser.add_argument('--prefix', required=True,
                       help='Output file prefix')
    parser.add_argument('--output-dir', default='.',
                       help='Output directory (default: current directory)')

    # Debug flag
    parser.add_argument('--debug', action='store_true', help='Enable debug logging for troubleshooting')

    return parser  # type: ignore[no-any-return]


def parse_value(text: str) -> Any:
    """Convert an option value to bool, int, float, list or str"""
    if ',' in text:
        return [parse_value(part) for part in text.split(',') if part != '']
    lowered = text.lower()
    if lowered in ('true', 'false'):
        return lowered == 'true'
    if lowered in ('none', 'null'):
        return None
    for convert in (int, float):
        try:
            return convert(text)
        except ValueError:
            continue
    return text


def parse_options(pairs: List[str]) -> Dict[str, Any]:
    """
    Parse repeated KEY=VALUE arguments

    Raises:
        InvalidOption: an argument has no '='
    """
    options: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise InvalidOption(f"Options must be given as KEY=VALUE (got '{pair}')")
        options[key.strip()] = parse_value(value.strip())
    return options


def make_config(preset: Optional[str]) -> LayoutConfig:
    if preset == 'compact':
        return LayoutConfig.compact()
    if preset == 'spacious':
        return LayoutConfig.spacious()
    return LayoutConfig()


def run(args: Namespace) -> None:
    """
    Execute layout subcommand

    Args:
        args: Parsed command-line arguments from argparse
    """
    # Configure logging as early as possible for this subcommand
    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "debug", False) else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )

    # scipy and matplotlib (if pulled in by networkx) are chatty at DEBUG
    for noisy in ("matplotlib", "matplotlib.font_manager", "PIL", "scipy"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    # Setup directories
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    # Generate filenames
    layout_file = output_dir / f"{args.prefix}.layout.tsv"
    edges_out = output_dir / f"{args.prefix}.edges.tsv"

    logger.info(f"Prefix: {args.prefix}")
    logger.info(f"Edges: {args.edges}")
    logger.info(f"Nodes: {args.nodes}")
    logger.info(f"Algorithm: {args.algorithm} (circular={args.circular})")
    logger.info(f"Output: {layout_file}, {edges_out}")

    # Check inputs exist
    if not Path(args.edges).exists():
        raise FileNotFoundError(f"Edge file not found: {args.edges}")
    if args.nodes is not None and not Path(args.nodes).exists():
        raise FileNotFoundError(f"Node file not found: {args.nodes}")

    options = parse_options(args.option)
    if options:
        logger.info(f"Options: {options}")

    graph = GraphReader.read(args.edges, args.nodes, directed=not args.undirected)

    engine = LayoutEngine(make_config(getattr(args, 'preset', None)))
    result = engine.create_layout(graph, args.algorithm, circular=args.circular, **options)
    logger.info(f"Computed {result.algorithm} layout for {result.n_nodes} nodes")

    LayoutWriter().write(result, layout_file, edges_out)
    logger.info(f"✓ Layout saved: {layout_file}")
    logger.info(f"✓ Edges saved: {edges_out}")
