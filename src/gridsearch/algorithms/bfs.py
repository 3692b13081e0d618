"""
Breadth-first search planner.

Expands nodes in discovery order and ignores edge costs when ordering the
frontier, so the returned path has few steps but is not guaranteed to be
the cheapest.
"""

from ..core.path_planner import PathPlanner
from ..core.search_engine import SearchMode


class BreadthFirstPlanner(PathPlanner):
    """Uninformed breadth-first search over the grid."""

    def _initialize_algorithm(self) -> None:
        self.mode = SearchMode.BREADTH_FIRST
        self.algorithm_name = 'BFS'
