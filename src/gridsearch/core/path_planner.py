"""
Abstract base class for all grid search planners.

This module defines the common interface that the search planners
(BFS, Dijkstra, Greedy Best-First, A*) implement on top of the
step-wise SearchEngine.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple, Optional, Dict, Any
import json
import time
import numpy as np

from .grid import Grid
from .search_engine import SearchEngine, SearchMode


class PathPlanner(ABC):
    """
    Abstract base class for grid search planners.

    Each subclass selects a SearchMode; the planner wraps one SearchEngine
    session per plan() call and keeps the resulting path and metrics.

    Attributes:
        grid (Grid): The grid being searched
        config (Dict[str, Any]): Algorithm configuration loaded from YAML
        engine (SearchEngine): Engine driving the search
        mode (SearchMode): Search strategy of this planner
        algorithm_name (str): Human-readable algorithm name
        path (Optional[List[Tuple[int, int]]]): Computed path from start to goal
        planning_time (float): Time taken to compute the path (seconds)
    """

    def __init__(self, grid: Grid, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the path planner.

        Args:
            grid: Grid built from a cost map
            config: Dictionary of algorithm parameters loaded from YAML.
                Recognized keys under 'parameters':
                - exit_on_goal (bool, default True)
                - requeue_improved (bool, default True)
        """
        self.grid = grid
        self.config = config or {}
        self.path: Optional[List[Tuple[int, int]]] = None
        self.planning_time: float = 0.0
        self.mode: Optional[SearchMode] = None
        self.algorithm_name: str = self.__class__.__name__

        parameters = self.config.get('parameters', {})
        self.engine = SearchEngine(
            exit_on_goal=parameters.get('exit_on_goal', True),
            requeue_improved=parameters.get('requeue_improved', True),
        )
        self._initialize_algorithm()

    @abstractmethod
    def _initialize_algorithm(self) -> None:
        """
        Set the algorithm-specific attributes.

        Subclasses must set self.mode and self.algorithm_name.
        """
        pass

    def plan(self, start: Tuple[int, int], goal: Tuple[int, int]) -> Optional[List[Tuple[int, int]]]:
        """
        Search for a path from start to goal.

        Args:
            start: Start cell (x, y)
            goal: Goal cell (x, y)

        Returns:
            List of cells [(x0, y0), (x1, y1), ...] if a path was found,
            None otherwise

        Raises:
            IndexError: If start or goal lies outside the grid
            InvalidEndpointsError: If start or goal is blocked

        Example:
            >>> planner = AStarPlanner(Grid([[0, 0], [0, 0]]))
            >>> planner.plan((0, 0), (1, 1))
            [(0, 0), (1, 1)]
        """
        start_time = time.time()

        start_node = self.grid.get_node(*start)
        goal_node = self.grid.get_node(*goal)

        self.engine.init(self.grid, start_node, goal_node, self.mode)
        self.engine.run_to_completion()

        path_nodes = self.engine.path_nodes
        self.path = [node.position for node in path_nodes] if path_nodes else None
        self.planning_time = time.time() - start_time
        return self.path

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get search metrics from the last plan() call.

        Returns:
            Dictionary with:
            - algorithm: Algorithm name
            - path_length: Geometric (octile) length of the path
            - path_cost: Traversal cost including terrain surcharges
            - planning_time: Time to compute the path
            - nodes_explored: Number of expanded nodes
            - path_exists: Whether a path was found
            - completion_reason: Why the search stopped
        """
        reason = self.engine.completion_reason
        return {
            'algorithm': self.algorithm_name,
            'path_length': self.get_path_length(),
            'path_cost': self.get_path_cost(),
            'planning_time': self.planning_time,
            'nodes_explored': self.engine.iterations,
            'path_exists': self.path is not None,
            'completion_reason': reason.value if reason else None,
        }

    def validate_path(self) -> bool:
        """
        Check that the computed path only steps between adjacent open cells.

        Returns:
            True if a path exists and every step follows grid adjacency
        """
        if self.path is None or len(self.path) < 1:
            return False

        nodes = [self.grid.get_node(x, y) for x, y in self.path]
        if any(node.is_blocked for node in nodes):
            return False

        for i in range(len(nodes) - 1):
            if nodes[i + 1] not in nodes[i].neighbors:
                return False

        return True

    def get_path_length(self) -> float:
        """
        Octile length of the computed path, ignoring terrain surcharges.

        Returns:
            Path length in grid units, 0.0 if no path exists
        """
        if self.path is None or len(self.path) < 2:
            return 0.0

        total_length = 0.0
        for i in range(len(self.path) - 1):
            total_length += self.grid.distance(self.grid.get_node(*self.path[i]),
                                               self.grid.get_node(*self.path[i + 1]))
        return total_length

    def get_path_cost(self) -> float:
        """
        Traversal cost of the current path, charging each cell's surcharge on leaving it.

        Returns:
            Path cost, 0.0 if no path exists
        """
        if self.path is None or len(self.path) < 2:
            return 0.0

        nodes = [self.grid.get_node(x, y) for x, y in self.path]
        return sum(self.grid.distance(a, b) + a.node_type.surcharge
                   for a, b in zip(nodes, nodes[1:]))

    def save_path(self, filename: str) -> None:
        """
        Save the computed path to a file.

        Supports multiple formats based on file extension:
        - .npy: NumPy binary format
        - .json: JSON format with path and metrics
        - .csv: Comma-separated values

        Args:
            filename: Output file path with extension

        Raises:
            ValueError: If no path exists or file format is unsupported
        """
        if self.path is None:
            raise ValueError("No path to save. Run plan() first.")

        if filename.endswith('.npy'):
            np.save(filename, np.array(self.path, dtype=int))
        elif filename.endswith('.json'):
            with open(filename, 'w') as f:
                json.dump({
                    'path': [list(p) for p in self.path],
                    'metrics': self.get_metrics()
                }, f, indent=2)
        elif filename.endswith('.csv'):
            np.savetxt(filename, np.array(self.path, dtype=int), fmt='%d',
                       delimiter=',', header='x,y', comments='')
        else:
            raise ValueError(f"Unsupported file format: {filename}. "
                             f"Use .npy, .json, or .csv")

    def load_path(self, filename: str) -> List[Tuple[int, int]]:
        """
        Load a path from a file written by save_path().

        Args:
            filename: Input file path

        Returns:
            List of cells loaded from file
        """
        if filename.endswith('.npy'):
            path_array = np.load(filename)
        elif filename.endswith('.json'):
            with open(filename, 'r') as f:
                path_array = np.array(json.load(f)['path'], dtype=int)
        elif filename.endswith('.csv'):
            path_array = np.loadtxt(filename, delimiter=',', skiprows=1, dtype=int, ndmin=2)
        else:
            raise ValueError(f"Unsupported file format: {filename}")

        self.path = [(int(x), int(y)) for x, y in path_array]
        return self.path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self.config})"

    def __str__(self) -> str:
        status = "with path" if self.path else "no path"
        return f"{self.algorithm_name} ({status})"
