"""Package exposing one planner per search mode."""

from .bfs import BreadthFirstPlanner
from .dijkstra import DijkstraPlanner
from .greedy import GreedyBestFirstPlanner
from .astar import AStarPlanner

__all__ = ["BreadthFirstPlanner", "DijkstraPlanner", "GreedyBestFirstPlanner", "AStarPlanner"]
