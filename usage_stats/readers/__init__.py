"""
usage_stats/readers package marker.
"""

from usage_stats.readers.grid_reader import GridReader, read_grid

__all__ = ["GridReader", "read_grid"]
