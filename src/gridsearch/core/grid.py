"""
Grid representation for search.

This module defines the Grid class which owns one Node per cell, computes
8-directional adjacency once at build time, and provides the octile metric
used for both edge costs and heuristics.
"""

from typing import Iterator, List, Sequence, Tuple, Union
import numpy as np

from .exceptions import InvalidMapError
from .node import Node, NodeType
from ..utils.geometry import octile_distance

CostMap = Union[Sequence[Sequence[int]], np.ndarray]

# Neighbor order: north, then clockwise
ALL_DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
)


def validate_cost_map(cost_map: CostMap) -> np.ndarray:
    """
    Check a cost map and convert it to a 2-D integer array.

    Args:
        cost_map: Row-major matrix, cost_map[y][x] is the NodeType code of cell (x, y)

    Returns:
        numpy array of shape (height, width)

    Raises:
        InvalidMapError: If the map is a string, non-numeric, empty, ragged or has unknown codes
    """
    if cost_map is None:
        raise InvalidMapError("Cost map is missing")
    if isinstance(cost_map, (str, bytes)):
        raise InvalidMapError("Cost map must be a matrix of integers, not a string")

    if not isinstance(cost_map, np.ndarray):
        rows = []
        for row in cost_map:
            if isinstance(row, (str, bytes)):
                raise InvalidMapError("Cost map rows must be sequences of integers, not strings")
            try:
                rows.append(list(row))
            except TypeError:
                raise InvalidMapError(f"Cost map row {len(rows)} is not a sequence: {row!r}")
        if not rows:
            raise InvalidMapError("Cost map has no rows")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise InvalidMapError(f"Cost map is ragged: row widths {sorted(widths)}")
        cost_map = rows

    try:
        data = np.asarray(cost_map)
    except (TypeError, ValueError) as e:
        raise InvalidMapError(f"Cost map is not numeric: {e}")

    # numeric dtypes only; floats must hold whole numbers
    if data.dtype.kind not in 'iubf':
        raise InvalidMapError(f"Cost map values must be integers, got dtype {data.dtype}")

    if data.ndim != 2:
        raise InvalidMapError(f"Cost map must be 2-D, got {data.ndim} dimension(s)")

    height, width = data.shape
    if width <= 0 or height <= 0:
        raise InvalidMapError(f"Cost map dimensions must be positive, got {width}x{height}")

    if data.dtype.kind == 'f':
        if not np.all(np.isfinite(data)) or not np.all(data == np.floor(data)):
            raise InvalidMapError("Cost map values must be integers")

    valid_codes = [int(t) for t in NodeType]
    unknown = np.setdiff1d(np.unique(data).astype(int), valid_codes)
    if unknown.size:
        raise InvalidMapError(f"Unknown cell codes in cost map: {unknown.tolist()}")

    return data.astype(int)


class Grid:
    """
    Represents the search graph built from a cost map.

    Attributes:
        width (int): Number of columns
        height (int): Number of rows
        nodes (List[List[Node]]): Row-major node table, nodes[y][x]
        walls (List[Node]): Blocked nodes in row-major order
        map_data (np.ndarray): Validated cost map
    """

    def __init__(self, cost_map: CostMap):
        """
        Build the grid and its adjacency.

        Args:
            cost_map: Row-major matrix of NodeType codes, cost_map[y][x]

        Raises:
            InvalidMapError: If the cost map is empty, ragged or malformed

        Example:
            >>> grid = Grid([[0, 0, 0],
            ...              [0, 1, 0],
            ...              [0, 0, 0]])
            >>> len(grid.get_node(0, 0).neighbors)
            2
        """
        self.map_data = validate_cost_map(cost_map)
        self.height, self.width = self.map_data.shape

        self.nodes: List[List[Node]] = []
        self.walls: List[Node] = []

        for y in range(self.height):
            row = []
            for x in range(self.width):
                node = Node(x, y, NodeType(int(self.map_data[y, x])))
                row.append(node)
                if node.is_blocked:
                    self.walls.append(node)
            self.nodes.append(row)

        for node in self.iter_nodes():
            if not node.is_blocked:
                node.neighbors = self._get_neighbors(node.x, node.y)

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) addresses a cell of this grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get_node(self, x: int, y: int) -> Node:
        """
        Look up the node at (x, y).

        Raises:
            IndexError: If (x, y) is outside the grid
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) is outside the {self.width}x{self.height} grid")
        return self.nodes[y][x]

    def contains(self, node: Node) -> bool:
        """True if node is one of this grid's own nodes."""
        return (isinstance(node, Node)
                and self.in_bounds(node.x, node.y)
                and self.nodes[node.y][node.x] is node)

    def iter_nodes(self) -> Iterator[Node]:
        """Yield every node in row-major order."""
        for row in self.nodes:
            yield from row

    def _get_neighbors(self, x: int, y: int) -> List[Node]:
        neighbors = []
        for dx, dy in ALL_DIRECTIONS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny) and not self.nodes[ny][nx].is_blocked:
                neighbors.append(self.nodes[ny][nx])
        return neighbors

    def distance(self, source: Node, target: Node) -> float:
        """
        Octile distance between two nodes.

        Serves as the edge length between adjacent cells and as the heuristic
        estimate between arbitrary cells.
        """
        return octile_distance(source.position, target.position)

    def reset(self) -> None:
        """Clear the search fields of every node."""
        for node in self.iter_nodes():
            node.reset()

    def __repr__(self) -> str:
        return f"Grid(size={self.width}x{self.height}, walls={len(self.walls)})"
