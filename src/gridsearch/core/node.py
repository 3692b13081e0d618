"""
Node class for grid-based search.

One node per grid cell. Identity and adjacency are fixed when the grid is
built; the search fields are rewritten by every new search session.
"""

import math
from enum import IntEnum
from typing import List, Optional


class NodeType(IntEnum):
    """
    Passability class of a grid cell.

    The integer value is the code used in cost maps. For every class except
    BLOCKED it also doubles as the additive cost charged when leaving the cell.
    """

    OPEN = 0
    BLOCKED = 1
    LIGHT_TERRAIN = 2
    MEDIUM_TERRAIN = 3
    HEAVY_TERRAIN = 4

    @property
    def is_blocked(self) -> bool:
        return self is NodeType.BLOCKED

    @property
    def surcharge(self) -> int:
        """Extra traversal cost for leaving a cell of this class."""
        return 0 if self is NodeType.BLOCKED else int(self)


class Node:
    """
    Represents a single cell of the search grid.

    Attributes:
        x (int): Column index
        y (int): Row index
        node_type (NodeType): Passability class of the cell
        neighbors (List[Node]): Reachable adjacent cells (empty for blocked cells)
        distance_travelled (float): Accumulated path cost from the start
        priority (float): Ordering key used when the node enters the frontier
        previous (Node): Predecessor on the best known path (None for the start)
    """

    __slots__ = ('x', 'y', 'node_type', 'neighbors',
                 'distance_travelled', 'priority', 'previous')

    def __init__(self, x: int, y: int, node_type: NodeType = NodeType.OPEN):
        """
        Initialize a node at given grid coordinates.

        Args:
            x: Column index
            y: Row index
            node_type: Passability class of the cell
        """
        self.x = int(x)
        self.y = int(y)
        self.node_type = NodeType(node_type)
        self.neighbors: List['Node'] = []
        self.distance_travelled: float = math.inf
        self.priority: float = 0
        self.previous: Optional['Node'] = None

    @property
    def position(self):
        return (self.x, self.y)

    @property
    def is_blocked(self) -> bool:
        return self.node_type.is_blocked

    def reset(self) -> None:
        """Clear all search fields before a new session."""
        self.distance_travelled = math.inf
        self.priority = 0
        self.previous = None

    def __repr__(self) -> str:
        return f"Node({self.x}, {self.y}, {self.node_type.name})"
