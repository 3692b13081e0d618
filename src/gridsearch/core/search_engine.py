"""
Step-wise search engine.

One engine instance runs one search session at a time over a Grid. A session
can be advanced one expansion at a time with step() or driven to the end with
run_to_completion(); frontier, explored set and best path are readable between
steps for display or inspection.

The four search modes share a single expansion routine. They differ only in:
1. Which neighbors are skipped (explored only, or explored and queued)
2. Whether cost updates are unconditional or require a strict improvement
3. How the frontier priority is computed
4. When the goal counts as found: breadth-first and greedy stop once the
   goal enters the frontier, Dijkstra and A* once it is extracted
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Set, Union

from .exceptions import InvalidEndpointsError, SearchStateError
from .frontier import PriorityFrontier
from .grid import Grid
from .node import Node

logger = logging.getLogger(__name__)


class SearchMode(Enum):
    """Search strategy selector. Values double as CLI/config names."""

    BREADTH_FIRST = 'bfs'
    DIJKSTRA = 'dijkstra'
    GREEDY_BEST_FIRST = 'greedy'
    A_STAR = 'astar'

    @classmethod
    def from_value(cls, mode: Union['SearchMode', str]) -> 'SearchMode':
        """
        Resolve a SearchMode from an enum member or its name/value.

        Raises:
            ValueError: If mode is not a known search mode
        """
        if isinstance(mode, cls):
            return mode
        key = str(mode).strip()
        for member in cls:
            if key.lower() == member.value or key.upper() == member.name:
                return member
        raise ValueError(f"Unknown search mode '{mode}'. "
                         f"Available modes: {', '.join(m.value for m in cls)}")


class SearchState(Enum):
    UNINITIALIZED = 'uninitialized'
    RUNNING = 'running'
    COMPLETE = 'complete'


class CompletionReason(Enum):
    GOAL_FOUND = 'goal_found'
    FRONTIER_EXHAUSTED = 'frontier_exhausted'


class PriorityRule(Enum):
    EXPLORED_COUNT = 'explored_count'
    COST = 'cost'
    HEURISTIC = 'heuristic'
    COST_PLUS_HEURISTIC = 'cost_plus_heuristic'


@dataclass(frozen=True)
class ExpansionStrategy:
    """
    Descriptor of how one search mode expands a node.

    Attributes:
        skip_queued: Ignore neighbors that already have a live frontier entry
        improvement_gated: Only update a neighbor when the new cost is strictly lower
        priority_rule: Formula for the priority of a newly enqueued neighbor
        goal_on_discovery: Treat the goal as found once it enters the frontier;
            otherwise only once it is extracted, which keeps cost-aware modes optimal
    """

    skip_queued: bool
    improvement_gated: bool
    priority_rule: PriorityRule
    goal_on_discovery: bool


STRATEGIES = {
    SearchMode.BREADTH_FIRST: ExpansionStrategy(
        skip_queued=True, improvement_gated=False,
        priority_rule=PriorityRule.EXPLORED_COUNT, goal_on_discovery=True),
    SearchMode.DIJKSTRA: ExpansionStrategy(
        skip_queued=False, improvement_gated=True,
        priority_rule=PriorityRule.COST, goal_on_discovery=False),
    SearchMode.GREEDY_BEST_FIRST: ExpansionStrategy(
        skip_queued=True, improvement_gated=False,
        priority_rule=PriorityRule.HEURISTIC, goal_on_discovery=True),
    SearchMode.A_STAR: ExpansionStrategy(
        skip_queued=False, improvement_gated=True,
        priority_rule=PriorityRule.COST_PLUS_HEURISTIC, goal_on_discovery=False),
}


class SearchEngine:
    """
    Incremental grid search engine.

    State machine per session: UNINITIALIZED -> RUNNING -> COMPLETE.

    Attributes:
        exit_on_goal (bool): Complete as soon as the goal is found; False keeps
            expanding until the frontier is empty
        requeue_improved (bool): In cost-aware modes, insert a fresh frontier
            entry when an already queued node gets a cheaper cost
        graph (Grid): Grid of the current session
        mode (SearchMode): Strategy of the current session
        iterations (int): Number of nodes expanded so far

    Example:
        >>> grid = Grid([[0, 0, 0], [0, 0, 0], [0, 0, 0]])
        >>> engine = SearchEngine()
        >>> engine.init(grid, grid.get_node(0, 0), grid.get_node(2, 2), SearchMode.A_STAR)
        >>> engine.run_to_completion()
        >>> [n.position for n in engine.path_nodes]
        [(0, 0), (1, 1), (2, 2)]
    """

    def __init__(self, exit_on_goal: bool = True, requeue_improved: bool = True):
        self.exit_on_goal = exit_on_goal
        self.requeue_improved = requeue_improved
        self._frontier = PriorityFrontier()
        self._clear_session()

    def _clear_session(self) -> None:
        self.graph: Optional[Grid] = None
        self.mode: Optional[SearchMode] = None
        self._strategy: Optional[ExpansionStrategy] = None
        self._start: Optional[Node] = None
        self._goal: Optional[Node] = None
        self._frontier.clear()
        self._explored: List[Node] = []
        self._explored_set: Set[Node] = set()
        self._path: List[Node] = []
        self.iterations = 0
        self._goal_found = False
        self._state = SearchState.UNINITIALIZED
        self._completion_reason: Optional[CompletionReason] = None

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def init(self, graph: Grid, start: Node, goal: Node,
             mode: Union[SearchMode, str] = SearchMode.A_STAR) -> None:
        """
        Start a new search session.

        Resets every node of the grid, clears frontier and explored set, and
        enqueues the start node. Any previous session is discarded.

        Args:
            graph: Grid to search
            start: Start node (must belong to graph and not be blocked)
            goal: Goal node (must belong to graph and not be blocked)
            mode: SearchMode or its string value

        Raises:
            InvalidEndpointsError: If graph, start or goal is missing, blocked
                or foreign to the grid; the engine is left UNINITIALIZED
            ValueError: If mode is unknown; the engine is left UNINITIALIZED
        """
        try:
            search_mode = SearchMode.from_value(mode)
            self._validate_endpoints(graph, start, goal)
        except ValueError:
            self._clear_session()
            raise

        self._clear_session()
        graph.reset()

        self.graph = graph
        self.mode = search_mode
        self._strategy = STRATEGIES[search_mode]
        self._start = start
        self._goal = goal

        start.distance_travelled = 0
        start.priority = 0
        self._frontier.insert(start)
        self._state = SearchState.RUNNING

        logger.debug("Search initialized: mode=%s start=%s goal=%s",
                     search_mode.value, start.position, goal.position)

    @staticmethod
    def _validate_endpoints(graph: Grid, start: Node, goal: Node) -> None:
        if graph is None or start is None or goal is None:
            logger.warning("Search init error: missing grid, start or goal")
            raise InvalidEndpointsError("Grid, start and goal are all required")

        for label, node in (('start', start), ('goal', goal)):
            if not graph.contains(node):
                logger.warning("Search init error: %s node %r is not part of the grid", label, node)
                raise InvalidEndpointsError(f"The {label} node {node!r} does not belong to the grid")
            if node.is_blocked:
                logger.warning("Search init error: %s node %r is blocked", label, node)
                raise InvalidEndpointsError(f"The {label} node {node!r} must not be blocked")

    def step(self) -> bool:
        """
        Expand one frontier node.

        1. Extract the minimum entry, discarding stale entries of explored nodes
        2. Mark it explored and count the iteration
        3. Expand its neighbors according to the active mode
        4. If the goal has been discovered, record its best known path and,
           with exit_on_goal, complete the session once the mode counts it as found

        Returns:
            True once the session is COMPLETE

        Raises:
            SearchStateError: If no session has been initialized
        """
        if self._state is SearchState.UNINITIALIZED:
            raise SearchStateError("step() called before init()")
        if self._state is SearchState.COMPLETE:
            return True

        current = self._next_unexplored()
        if current is None:
            self._finish(CompletionReason.FRONTIER_EXHAUSTED)
            return True

        self._explored.append(current)
        self._explored_set.add(current)
        self.iterations += 1

        self._expand(current)

        if current is self._goal or self._goal in self._frontier:
            self._goal_found = True
            self._path = self.path_to(self._goal)
            if self.exit_on_goal and (current is self._goal or self._strategy.goal_on_discovery):
                self._finish(CompletionReason.GOAL_FOUND)

        return self.is_complete

    def run_to_completion(self) -> None:
        """Call step() until the session is COMPLETE."""
        while not self.step():
            pass

    def _next_unexplored(self) -> Optional[Node]:
        while self._frontier:
            node = self._frontier.extract_min()
            if node not in self._explored_set:
                return node
        return None

    def _finish(self, reason: CompletionReason) -> None:
        if self._goal_found:
            self._path = self.path_to(self._goal)
        self._state = SearchState.COMPLETE
        self._completion_reason = reason
        logger.info("Search complete (%s): mode=%s iterations=%d path_nodes=%d",
                    reason.value, self.mode.value, self.iterations, len(self._path))

    # ------------------------------------------------------------------
    # Expansion
    # ------------------------------------------------------------------

    def _expand(self, current: Node) -> None:
        strategy = self._strategy
        surcharge = current.node_type.surcharge

        for neighbor in current.neighbors:
            if neighbor in self._explored_set:
                continue

            queued = neighbor in self._frontier
            if strategy.skip_queued and queued:
                continue

            new_distance = current.distance_travelled + self.graph.distance(current, neighbor) + surcharge
            if strategy.improvement_gated and not new_distance < neighbor.distance_travelled:
                continue

            neighbor.distance_travelled = new_distance
            neighbor.previous = current

            if queued and not self.requeue_improved:
                continue

            neighbor.priority = self._priority_for(neighbor, strategy.priority_rule)
            self._frontier.insert(neighbor)

    def _priority_for(self, node: Node, rule: PriorityRule) -> float:
        if rule is PriorityRule.EXPLORED_COUNT:
            return len(self._explored)
        if rule is PriorityRule.COST:
            return node.distance_travelled
        if rule is PriorityRule.HEURISTIC:
            return self.graph.distance(node, self._goal)
        return node.distance_travelled + self.graph.distance(node, self._goal)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def path_to(self, target: Node) -> List[Node]:
        """
        Best known path from the start to target.

        Walks the previous links back from target. Does not modify any state,
        so it can be called at any point of a session.

        Returns:
            Nodes in start-to-target order; [target] when target has no
            predecessor but is the start; [] when target has not been reached
        """
        if target is None:
            return []
        if target.previous is None and target is not self._start:
            return []

        path = [target]
        current = target
        while current.previous is not None:
            current = current.previous
            path.append(current)
        return path[::-1]

    def path_cost(self, path: Sequence[Node]) -> float:
        """
        Total traversal cost along a node sequence.

        Each step costs the octile distance plus the surcharge of the cell left.
        """
        if self.graph is None or len(path) < 2:
            return 0.0

        total = 0.0
        for source, target in zip(path, path[1:]):
            total += self.graph.distance(source, target) + source.node_type.surcharge
        return total

    # ------------------------------------------------------------------
    # Read-only snapshots
    # ------------------------------------------------------------------

    @property
    def start(self) -> Optional[Node]:
        return self._start

    @property
    def goal(self) -> Optional[Node]:
        return self._goal

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def is_complete(self) -> bool:
        return self._state is SearchState.COMPLETE

    @property
    def completion_reason(self) -> Optional[CompletionReason]:
        return self._completion_reason

    @property
    def goal_found(self) -> bool:
        return self._goal_found

    @property
    def frontier_nodes(self) -> List[Node]:
        """Distinct queued nodes in extraction order, stale entries left out."""
        seen = set()
        nodes = []
        for node in self._frontier.to_list():
            if node in seen or node in self._explored_set:
                continue
            seen.add(node)
            nodes.append(node)
        return nodes

    @property
    def explored_nodes(self) -> List[Node]:
        return list(self._explored)

    @property
    def path_nodes(self) -> List[Node]:
        return list(self._path)

    @property
    def path_length(self) -> float:
        """Cost of the current best path to the goal (inf if none yet)."""
        if not self._path:
            return math.inf
        return self.path_cost(self._path)

    def __repr__(self) -> str:
        mode = self.mode.value if self.mode else None
        return (f"SearchEngine(mode={mode}, state={self._state.value}, "
                f"iterations={self.iterations})")
