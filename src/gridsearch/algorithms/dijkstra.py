"""
Dijkstra's shortest path planner.

Dijkstra's algorithm (uniform-cost search) expands nodes in order of
accumulated cost from the start, without a heuristic.
"""

from ..core.path_planner import PathPlanner
from ..core.search_engine import SearchMode


class DijkstraPlanner(PathPlanner):
    """
    Uniform-cost search.

    Guarantees the cheapest path, terrain surcharges included, at the price
    of exploring in every direction around the start.
    """

    def _initialize_algorithm(self) -> None:
        """Initialize Dijkstra-specific attributes."""
        self.mode = SearchMode.DIJKSTRA
        self.algorithm_name = 'Dijkstra'
