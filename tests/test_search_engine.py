"""Tests for the step-wise search engine."""

import heapq
import itertools
import math

import numpy as np
import pytest

from gridsearch.core.exceptions import InvalidEndpointsError, SearchStateError
from gridsearch.core.grid import Grid
from gridsearch.core.search_engine import (
    STRATEGIES,
    CompletionReason,
    SearchEngine,
    SearchMode,
    SearchState,
)

SQRT2 = math.sqrt(2)
ALL_MODES = list(SearchMode)


def positions(nodes):
    return [n.position for n in nodes]


def run(grid, start, goal, mode, **kwargs):
    engine = SearchEngine(**kwargs)
    engine.init(grid, grid.get_node(*start), grid.get_node(*goal), mode)
    engine.run_to_completion()
    return engine


def reference_cost(grid, start, goal):
    """Plain Dijkstra with the same edge convention, used as an oracle."""
    source = grid.get_node(*start)
    target = grid.get_node(*goal)
    best = {source: 0.0}
    counter = itertools.count()
    heap = [(0.0, next(counter), source)]
    done = set()
    while heap:
        cost, _, node = heapq.heappop(heap)
        if node in done:
            continue
        done.add(node)
        if node is target:
            return cost
        for neighbor in node.neighbors:
            new_cost = cost + grid.distance(node, neighbor) + node.node_type.surcharge
            if new_cost < best.get(neighbor, math.inf):
                best[neighbor] = new_cost
                heapq.heappush(heap, (new_cost, next(counter), neighbor))
    return math.inf


def reachable_count(grid, start):
    source = grid.get_node(*start)
    seen = {source}
    stack = [source]
    while stack:
        for neighbor in stack.pop().neighbors:
            if neighbor not in seen:
                seen.add(neighbor)
                stack.append(neighbor)
    return len(seen)


def random_grid(seed, shape=(8, 10)):
    rng = np.random.default_rng(seed)
    cost_map = rng.choice([0, 0, 0, 0, 1, 1, 2, 3, 4], size=shape)
    cost_map[0, 0] = 0
    cost_map[-1, -1] = 0
    return Grid(cost_map)


# ----------------------------------------------------------------------
# Concrete scenarios
# ----------------------------------------------------------------------

def test_astar_takes_the_diagonal_on_an_open_grid(open_grid):
    engine = run(open_grid, (0, 0), (2, 2), SearchMode.A_STAR)
    assert engine.completion_reason is CompletionReason.GOAL_FOUND
    assert positions(engine.path_nodes) == [(0, 0), (1, 1), (2, 2)]
    assert engine.path_length == pytest.approx(2 * SQRT2)
    assert engine.iterations <= 9


@pytest.mark.parametrize('mode', [SearchMode.A_STAR, SearchMode.DIJKSTRA])
def test_cost_aware_modes_go_around_a_blocked_center(center_blocked_grid, mode):
    engine = run(center_blocked_grid, (0, 0), (2, 2), mode)
    path = engine.path_nodes
    assert center_blocked_grid.get_node(1, 1) not in path
    # two cardinal moves and one diagonal past the blocked corner
    assert engine.path_cost(path) == pytest.approx(2 + SQRT2)
    assert engine.goal.distance_travelled == pytest.approx(2 + SQRT2)


def test_breadth_first_path_around_blocked_center(center_blocked_grid):
    engine = run(center_blocked_grid, (0, 0), (2, 2), SearchMode.BREADTH_FIRST)
    assert positions(engine.path_nodes) == [(0, 0), (0, 1), (1, 2), (2, 2)]


@pytest.mark.parametrize('mode', ALL_MODES)
def test_unreachable_goal_exhausts_frontier(walled_goal_grid, mode):
    engine = run(walled_goal_grid, (0, 0), (4, 4), mode)
    goal = walled_goal_grid.get_node(4, 4)
    assert engine.is_complete
    assert engine.state is SearchState.COMPLETE
    assert engine.completion_reason is CompletionReason.FRONTIER_EXHAUSTED
    assert not engine.goal_found
    assert engine.path_to(goal) == []
    assert engine.path_nodes == []
    assert engine.path_length == math.inf
    assert len(engine.explored_nodes) == reachable_count(walled_goal_grid, (0, 0))


def test_start_equal_to_goal(open_grid):
    engine = run(open_grid, (1, 1), (1, 1), SearchMode.DIJKSTRA)
    assert engine.completion_reason is CompletionReason.GOAL_FOUND
    assert engine.iterations == 1
    assert positions(engine.path_nodes) == [(1, 1)]


# ----------------------------------------------------------------------
# Terrain costs
# ----------------------------------------------------------------------

def test_surcharge_is_charged_when_leaving_a_cell():
    grid = Grid([[2, 0, 0]])
    forward = run(grid, (0, 0), (2, 0), SearchMode.DIJKSTRA)
    assert forward.goal.distance_travelled == pytest.approx(1 + 2 + 1)

    backward = run(grid, (2, 0), (0, 0), SearchMode.DIJKSTRA)
    assert backward.goal.distance_travelled == pytest.approx(2)


@pytest.mark.parametrize('mode', [SearchMode.A_STAR, SearchMode.DIJKSTRA])
def test_cost_aware_modes_avoid_heavy_terrain_next_to_the_goal(mode):
    # goal (2, 0) is first discovered through the heavy cell (1, 0)
    grid = Grid([[0, 4, 0],
                 [0, 0, 0]])
    engine = run(grid, (0, 0), (2, 0), mode)
    assert engine.path_cost(engine.path_nodes) == pytest.approx(2 * SQRT2)
    assert grid.get_node(1, 0) not in engine.path_nodes


@pytest.mark.parametrize('seed', range(8))
def test_astar_and_dijkstra_are_optimal(seed):
    grid = random_grid(seed)
    start, goal = (0, 0), (grid.width - 1, grid.height - 1)
    expected = reference_cost(grid, start, goal)

    dijkstra = run(grid, start, goal, SearchMode.DIJKSTRA)
    dijkstra_cost = dijkstra.path_length
    astar = run(grid, start, goal, SearchMode.A_STAR)
    astar_cost = astar.path_length

    if expected == math.inf:
        assert dijkstra_cost == math.inf
        assert astar_cost == math.inf
    else:
        assert dijkstra_cost == pytest.approx(expected)
        assert astar_cost == pytest.approx(expected)
        assert astar.iterations <= dijkstra.iterations


# ----------------------------------------------------------------------
# Invariants
# ----------------------------------------------------------------------

@pytest.mark.parametrize('mode', [SearchMode.A_STAR, SearchMode.DIJKSTRA])
def test_explored_costs_never_improve(mode):
    grid = random_grid(11)
    engine = SearchEngine(exit_on_goal=False)
    engine.init(grid, grid.get_node(0, 0), grid.get_node(grid.width - 1, grid.height - 1), mode)
    settled = {}
    while not engine.step():
        for node in engine.explored_nodes:
            settled.setdefault(node, node.distance_travelled)
            assert node.distance_travelled == settled[node]


@pytest.mark.parametrize('mode', ALL_MODES)
@pytest.mark.parametrize('seed', range(4))
def test_every_mode_terminates_and_never_reexpands(mode, seed):
    grid = random_grid(seed)
    engine = run(grid, (0, 0), (grid.width - 1, grid.height - 1), mode, exit_on_goal=False)
    explored = engine.explored_nodes
    assert engine.completion_reason is CompletionReason.FRONTIER_EXHAUSTED
    assert len(explored) == len(set(explored)) == engine.iterations
    assert len(explored) == reachable_count(grid, (0, 0))


@pytest.mark.parametrize('mode', ALL_MODES)
def test_paths_follow_adjacency(mode):
    grid = random_grid(3)
    engine = run(grid, (0, 0), (grid.width - 1, grid.height - 1), mode)
    path = engine.path_nodes
    if path:
        assert path[0] is engine.start
        assert path[-1] is engine.goal
        for a, b in zip(path, path[1:]):
            assert b in a.neighbors


def test_exhaustive_run_still_reports_goal_path(open_grid):
    engine = run(open_grid, (0, 0), (2, 2), SearchMode.DIJKSTRA, exit_on_goal=False)
    assert engine.completion_reason is CompletionReason.FRONTIER_EXHAUSTED
    assert engine.goal_found
    assert positions(engine.path_nodes) == [(0, 0), (1, 1), (2, 2)]
    assert len(engine.explored_nodes) == 9


def test_without_requeue_stale_priorities_still_terminate():
    grid = random_grid(5)
    engine = run(grid, (0, 0), (grid.width - 1, grid.height - 1), SearchMode.DIJKSTRA,
                 requeue_improved=False, exit_on_goal=False)
    assert engine.is_complete
    assert len(engine.explored_nodes) == len(set(engine.explored_nodes))


def test_stale_priorities_without_requeue_lose_optimality():
    # (2, 0) is first reached over the heavy cell at cost 6, then improved to 2*sqrt(2)
    # through (1, 1); its stale entry lets the detour through the bottom row win.
    grid = Grid([
        [0, 4, 0, 0],
        [0, 0, 2, 0],
        [0, 0, 0, 0],
    ])
    start, goal = (0, 0), (3, 0)
    expected = reference_cost(grid, start, goal)
    assert expected == pytest.approx(2 * SQRT2 + 1)

    stale = run(grid, start, goal, SearchMode.DIJKSTRA, requeue_improved=False)
    assert stale.goal_found
    assert positions(stale.path_nodes) == [(0, 0), (1, 1), (2, 2), (3, 1), (3, 0)]
    assert stale.path_length == pytest.approx(3 * SQRT2 + 1)
    assert stale.path_length > expected

    requeued = run(grid, start, goal, SearchMode.DIJKSTRA)
    assert positions(requeued.path_nodes) == [(0, 0), (1, 1), (2, 0), (3, 0)]
    assert requeued.path_length == pytest.approx(expected)


# ----------------------------------------------------------------------
# Priorities per mode
# ----------------------------------------------------------------------

def test_breadth_first_priority_is_explored_count(open_grid):
    engine = SearchEngine()
    engine.init(open_grid, open_grid.get_node(0, 0), open_grid.get_node(2, 2), 'bfs')
    engine.step()
    assert {n.priority for n in engine.frontier_nodes} == {1}
    assert positions(engine.frontier_nodes) == [(0, 1), (1, 1), (1, 0)]


def test_greedy_priority_is_heuristic_only(open_grid):
    engine = SearchEngine()
    goal = open_grid.get_node(2, 2)
    engine.init(open_grid, open_grid.get_node(0, 0), goal, SearchMode.GREEDY_BEST_FIRST)
    engine.step()
    for node in engine.frontier_nodes:
        assert node.priority == pytest.approx(open_grid.distance(node, goal))
    assert engine.frontier_nodes[0].position == (1, 1)


def test_astar_priority_is_cost_plus_heuristic(open_grid):
    engine = SearchEngine()
    goal = open_grid.get_node(2, 2)
    engine.init(open_grid, open_grid.get_node(0, 0), goal, SearchMode.A_STAR)
    engine.step()
    for node in engine.frontier_nodes:
        expected = node.distance_travelled + open_grid.distance(node, goal)
        assert node.priority == pytest.approx(expected)


def test_strategy_table_covers_every_mode():
    assert set(STRATEGIES) == set(SearchMode)
    assert STRATEGIES[SearchMode.BREADTH_FIRST].skip_queued
    assert STRATEGIES[SearchMode.GREEDY_BEST_FIRST].skip_queued
    assert STRATEGIES[SearchMode.DIJKSTRA].improvement_gated
    assert STRATEGIES[SearchMode.A_STAR].improvement_gated


# ----------------------------------------------------------------------
# Session lifecycle
# ----------------------------------------------------------------------

def test_init_enqueues_only_the_start(open_grid):
    engine = SearchEngine()
    assert engine.state is SearchState.UNINITIALIZED
    start = open_grid.get_node(0, 0)
    engine.init(open_grid, start, open_grid.get_node(2, 2), SearchMode.A_STAR)
    assert engine.state is SearchState.RUNNING
    assert engine.frontier_nodes == [start]
    assert engine.explored_nodes == []
    assert engine.iterations == 0
    assert start.distance_travelled == 0
    assert all(n.distance_travelled == math.inf for n in open_grid.iter_nodes() if n is not start)


def test_reinit_restores_identical_state(open_grid):
    engine = SearchEngine()
    start, goal = open_grid.get_node(0, 0), open_grid.get_node(2, 2)
    engine.init(open_grid, start, goal, SearchMode.DIJKSTRA)
    engine.step()
    engine.step()

    engine.init(open_grid, start, goal, SearchMode.DIJKSTRA)
    assert engine.iterations == 0
    assert engine.explored_nodes == []
    assert engine.frontier_nodes == [start]
    assert engine.path_nodes == []
    assert not engine.is_complete
    assert engine.completion_reason is None
    assert all(n.previous is None for n in open_grid.iter_nodes())


def test_path_to_start_and_unreached_nodes(open_grid):
    engine = SearchEngine()
    start = open_grid.get_node(0, 0)
    engine.init(open_grid, start, open_grid.get_node(2, 2), SearchMode.A_STAR)
    assert engine.path_to(start) == [start]
    assert engine.path_to(open_grid.get_node(2, 0)) == []


def test_path_to_frontier_node_mid_search(open_grid):
    engine = SearchEngine()
    engine.init(open_grid, open_grid.get_node(0, 0), open_grid.get_node(2, 2), SearchMode.DIJKSTRA)
    engine.step()
    node = open_grid.get_node(1, 1)
    assert node in engine.frontier_nodes
    assert positions(engine.path_to(node)) == [(0, 0), (1, 1)]
    # path_to has no side effects
    assert engine.iterations == 1
    assert node in engine.frontier_nodes


def test_step_after_completion_is_a_no_op(open_grid):
    engine = run(open_grid, (0, 0), (2, 2), SearchMode.A_STAR)
    iterations = engine.iterations
    assert engine.step() is True
    assert engine.iterations == iterations


def test_step_before_init_raises():
    with pytest.raises(SearchStateError):
        SearchEngine().step()


@pytest.mark.parametrize('start, goal', [((1, 1), (0, 0)), ((0, 0), (1, 1))])
def test_blocked_endpoints_are_rejected(center_blocked_grid, start, goal):
    engine = SearchEngine()
    with pytest.raises(InvalidEndpointsError):
        engine.init(center_blocked_grid, center_blocked_grid.get_node(*start),
                    center_blocked_grid.get_node(*goal), SearchMode.A_STAR)
    assert engine.state is SearchState.UNINITIALIZED


def test_missing_or_foreign_endpoints_are_rejected(open_grid):
    other = Grid([[0, 0, 0], [0, 0, 0], [0, 0, 0]])
    engine = SearchEngine()
    with pytest.raises(InvalidEndpointsError):
        engine.init(open_grid, open_grid.get_node(0, 0), None, SearchMode.A_STAR)
    with pytest.raises(InvalidEndpointsError):
        engine.init(None, open_grid.get_node(0, 0), open_grid.get_node(1, 1), SearchMode.A_STAR)
    with pytest.raises(InvalidEndpointsError):
        engine.init(open_grid, open_grid.get_node(0, 0), other.get_node(1, 1), SearchMode.A_STAR)


def test_failed_init_drops_running_session(open_grid, center_blocked_grid):
    engine = SearchEngine()
    engine.init(open_grid, open_grid.get_node(0, 0), open_grid.get_node(2, 2), SearchMode.A_STAR)
    engine.step()
    with pytest.raises(InvalidEndpointsError):
        engine.init(center_blocked_grid, center_blocked_grid.get_node(1, 1),
                    center_blocked_grid.get_node(0, 0), SearchMode.A_STAR)
    assert engine.state is SearchState.UNINITIALIZED
    assert engine.iterations == 0
    assert engine.frontier_nodes == []
    with pytest.raises(SearchStateError):
        engine.step()


def test_unknown_mode_is_rejected(open_grid):
    engine = SearchEngine()
    with pytest.raises(ValueError):
        engine.init(open_grid, open_grid.get_node(0, 0), open_grid.get_node(2, 2), 'dfs')
    assert engine.state is SearchState.UNINITIALIZED


@pytest.mark.parametrize('name, mode', [
    ('bfs', SearchMode.BREADTH_FIRST),
    ('DIJKSTRA', SearchMode.DIJKSTRA),
    ('greedy', SearchMode.GREEDY_BEST_FIRST),
    ('A_STAR', SearchMode.A_STAR),
    (SearchMode.A_STAR, SearchMode.A_STAR),
])
def test_mode_lookup(name, mode):
    assert SearchMode.from_value(name) is mode


def test_snapshots_are_copies(open_grid):
    engine = run(open_grid, (0, 0), (2, 2), SearchMode.A_STAR)
    engine.explored_nodes.clear()
    engine.path_nodes.clear()
    assert engine.explored_nodes
    assert engine.path_nodes
