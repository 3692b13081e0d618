"""
gridsearch - Incremental Grid Search Engine

A step-wise implementation of breadth-first, Dijkstra, greedy best-first
and A* search over 8-connected grids with blocked cells and terrain costs.

Modules:
    core.node: Grid cell state and terrain classes
    core.grid: Grid construction, adjacency and octile distance
    core.frontier: Priority frontier with insertion-order tie breaking
    core.search_engine: Step-wise search engine
    core.path_planner: Planner facade used by the CLI
    algorithms: One planner per search mode
    utils: YAML configuration and cost-map loading
"""

__version__ = "1.0.0"
