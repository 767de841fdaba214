"""
graphlayout CLI

Command-line interface with subcommands.
"""

import argparse
import logging
import sys
from .cli import layout
from .errors import LayoutError

logger = logging.getLogger("graphlayout")


def main():
    parser = argparse.ArgumentParser(
        prog='graphlayout',
        description='graphlayout: Layout algorithms for network and hierarchy visualization'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Add subcommand parsers
    layout.add_parser(subparsers)

    # Parse arguments
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute the appropriate subcommand
    if args.command == 'layout':
        try:
            layout.run(args)
        except LayoutError as e:
            logger.error(f"{type(e).__name__}: {e}")
            sys.exit(1)


if __name__ == "__main__":
    main()
