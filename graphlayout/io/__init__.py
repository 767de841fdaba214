"""I/O utilities for graphlayout"""

from .readers import GraphReader, read_graph
from .writers import LayoutWriter, write_layout

__all__ = [
    'GraphReader', 'read_graph',
    'LayoutWriter', 'write_layout']
