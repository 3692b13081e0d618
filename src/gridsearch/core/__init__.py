from .exceptions import (
    GridSearchError,
    InvalidMapError,
    InvalidEndpointsError,
    EmptyFrontierError,
    SearchStateError,
)
from .node import Node, NodeType
from .grid import Grid
from .frontier import PriorityFrontier
from .search_engine import (
    SearchEngine,
    SearchMode,
    SearchState,
    CompletionReason,
    ExpansionStrategy,
    STRATEGIES,
)
from .path_planner import PathPlanner

__all__ = [
    "GridSearchError", "InvalidMapError", "InvalidEndpointsError",
    "EmptyFrontierError", "SearchStateError",
    "Node", "NodeType", "Grid", "PriorityFrontier",
    "SearchEngine", "SearchMode", "SearchState", "CompletionReason",
    "ExpansionStrategy", "STRATEGIES", "PathPlanner",
]
