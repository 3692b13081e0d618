"""
Greedy best-first search planner.

Orders the frontier by the octile distance to the goal alone, ignoring the
cost already travelled.
"""

from ..core.path_planner import PathPlanner
from ..core.search_engine import SearchMode


class GreedyBestFirstPlanner(PathPlanner):
    """
    Greedy best-first search.

    Usually expands far fewer nodes than Dijkstra or A*, but the path it
    returns can be noticeably more expensive.
    """

    def _initialize_algorithm(self) -> None:
        self.mode = SearchMode.GREEDY_BEST_FIRST
        self.algorithm_name = 'Greedy Best-First'
