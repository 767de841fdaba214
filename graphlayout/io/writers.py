"""
I/O Writers

Handles writing of layout results as TSV.
"""

from pathlib import Path
import logging

from ..layout.types import LayoutResult

logger = logging.getLogger(__name__)


class LayoutWriter:
    """Writes layout tables and edge tables in TSV format"""

    def __init__(self, float_precision=6):
        """
        Initialize layout writer

        Args:
            float_precision: Number of decimals for float columns
        """
        self.float_precision = float_precision

    def write(self, result, layout_file, edges_file=None):
        """
        Write a layout to TSV

        Args:
            result: LayoutResult to write
            layout_file: Path to the node layout TSV
            edges_file: Path to the edge TSV (skipped if None)
        """
        Path(layout_file).parent.mkdir(parents=True, exist_ok=True)

        nodes = self._flatten(result.nodes)
        nodes.to_csv(layout_file, sep='\t', index=False, float_format=f"%.{self.float_precision}f")
        logger.debug(f"Wrote {len(nodes)} layout rows to {layout_file}")

        if edges_file is not None:
            Path(edges_file).parent.mkdir(parents=True, exist_ok=True)
            edges = self._flatten(result.get_edges())
            edges.to_csv(edges_file, sep='\t', index=False, float_format=f"%.{self.float_precision}f")
            logger.debug(f"Wrote {len(edges)} edges to {edges_file}")

    @staticmethod
    def _flatten(table):
        """Serialize list-valued cells as comma-joined text"""
        table = table.copy()
        for column in table.columns:
            if table[column].dtype == object:
                table[column] = table[column].map(
                    lambda v: ','.join(map(str, v)) if isinstance(v, (list, tuple)) else v
                )
        return table


def write_layout(result: LayoutResult, layout_file, edges_file=None):
    """Convenience function to write a layout"""
    writer = LayoutWriter()
    writer.write(result, layout_file, edges_file)
