"""
Paginated query and windowed-aggregation repositories for a message board.
"""

__version__ = "0.1.0"
