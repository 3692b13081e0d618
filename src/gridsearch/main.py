"""
Main entry point for grid search algorithms.

This CLI allows users to run the different search strategies on a grid
described by YAML configuration files or a cost-map file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import yaml

from .core.exceptions import GridSearchError
from .core.grid import Grid
from .core.path_planner import PathPlanner
from .algorithms.bfs import BreadthFirstPlanner
from .algorithms.dijkstra import DijkstraPlanner
from .algorithms.greedy import GreedyBestFirstPlanner
from .algorithms.astar import AStarPlanner
from .utils.config_loader import (
    load_environment_config,
    load_algorithm_config,
    get_endpoints,
    merge_configs,
)
from .utils.map_loader import load_cost_map


ALGORITHM_MAP = {
    'bfs': BreadthFirstPlanner,
    'dijkstra': DijkstraPlanner,
    'greedy': GreedyBestFirstPlanner,
    'astar': AStarPlanner
}


def create_grid_from_config(env_config: dict, map_file: Optional[str] = None) -> Grid:
    """
    Create Grid object from configuration dictionary.

    Args:
        env_config: Environment configuration from YAML
        map_file: Optional cost-map file overriding the configuration

    Returns:
        Grid object
    """
    map_file = map_file or env_config.get('map_file')
    if map_file:
        return Grid(load_cost_map(map_file))
    return Grid(env_config.get('cost_map') or [])


def trace_search(planner: PathPlanner, start: Tuple[int, int], goal: Tuple[int, int]) -> None:
    """
    Drive the planner's engine one step at a time, printing progress.

    Args:
        planner: Planner whose grid and engine are used
        start: Start cell (x, y)
        goal: Goal cell (x, y)
    """
    engine = planner.engine
    grid = planner.grid
    engine.init(grid, grid.get_node(*start), grid.get_node(*goal), planner.mode)

    while not engine.is_complete:
        before = engine.iterations
        engine.step()
        if engine.iterations == before:
            # frontier ran dry, nothing was expanded
            continue
        explored = engine.explored_nodes
        print(f"  step {engine.iterations:4d}: expanded {explored[-1].position}, "
              f"frontier={len(engine.frontier_nodes)}, explored={len(explored)}")
    print(f"  finished: {engine.completion_reason.value}")


def run_planner(algorithm_name: str, config_dir: str = 'configs', map_file: Optional[str] = None,
                start: Optional[Tuple[int, int]] = None, goal: Optional[Tuple[int, int]] = None,
                exhaustive: bool = False, trace: bool = False, save: bool = False) -> int:
    """
    Run a grid search algorithm.

    Args:
        algorithm_name: Name of algorithm ('bfs', 'dijkstra', 'greedy', 'astar')
        config_dir: Directory containing configuration files
        map_file: Optional cost-map file overriding environment.yaml
        start: Optional start cell overriding environment.yaml
        goal: Optional goal cell overriding environment.yaml
        exhaustive: Keep searching after the goal is found
        trace: Print every expansion step
        save: Whether to save the path to the output directory

    Returns:
        Process exit code (0 when a path was found)
    """
    if algorithm_name not in ALGORITHM_MAP:
        print(f"Error: Unknown algorithm '{algorithm_name}'")
        print(f"Available algorithms: {', '.join(ALGORITHM_MAP.keys())}")
        return 2

    print(f"\n{'='*60}")
    print(f"Running {algorithm_name.upper()} Grid Search")
    print(f"{'='*60}\n")

    # Load configurations
    print("Loading configurations...")
    env_config = load_environment_config(config_dir)
    alg_config = load_algorithm_config(algorithm_name, config_dir)
    if exhaustive:
        parameters = merge_configs(alg_config.get('parameters', {}), {'exit_on_goal': False})
        alg_config = merge_configs(alg_config, {'parameters': parameters})

    # Create grid
    grid = create_grid_from_config(env_config, map_file)
    print(f"Grid: {grid.width}x{grid.height} with {len(grid.walls)} blocked cells")

    # Get start and goal
    default_start, default_goal = get_endpoints(env_config)
    start = tuple(start) if start else default_start
    goal = tuple(goal) if goal else default_goal
    print(f"Start: {start}")
    print(f"Goal: {goal}")

    # Create planner
    PlannerClass = ALGORITHM_MAP[algorithm_name]
    planner = PlannerClass(grid, alg_config)
    print(f"Planner: {planner}")

    print("\nSearching...")
    if trace:
        trace_search(planner, start, goal)
    path = planner.plan(start, goal)

    # Display metrics
    print("\n" + "="*60)
    print("Results:")
    print("="*60)
    metrics = planner.get_metrics()
    for key, value in metrics.items():
        print(f"  {key}: {value}")
    print("="*60 + "\n")

    if path is None:
        print("No path found!")
        return 1

    print(f"Path found with {len(path)} cells")
    print("  " + " -> ".join(f"({x},{y})" for x, y in path))

    if save:
        output_config = alg_config.get('output', {})
        save_path = Path(output_config.get('save_path', f'outputs/{algorithm_name}/'))
        save_path.mkdir(parents=True, exist_ok=True)

        path_file = save_path / output_config.get('path_filename', 'path.json')
        planner.save_path(str(path_file))
        print(f"Path data saved to: {path_file}")

    return 0


def main(argv=None):
    """Main entry point with command-line argument parsing."""
    parser = argparse.ArgumentParser(
        description='Grid Search Algorithms',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run A* on the configured grid
  gridsearch --algorithm astar

  # Run Dijkstra on a map file and save the path
  gridsearch --algorithm dijkstra --map configs/maps/maze.txt --save

  # Step through breadth-first search, exploring the whole grid
  gridsearch --algorithm bfs --trace --exhaustive

  # Override the endpoints
  gridsearch --algorithm greedy --start 0 0 --goal 9 4
        """
    )

    parser.add_argument(
        '--algorithm', '-a',
        type=str,
        choices=list(ALGORITHM_MAP.keys()),
        required=True,
        help='Search algorithm to use'
    )

    parser.add_argument(
        '--config-dir', '-c',
        type=str,
        default='configs',
        help='Directory containing YAML configuration files (default: configs)'
    )

    parser.add_argument(
        '--map', '-m',
        type=str,
        default=None,
        help='Cost-map file (.txt, .csv or .npy) overriding environment.yaml'
    )

    parser.add_argument('--start', type=int, nargs=2, metavar=('X', 'Y'), help='Start cell')
    parser.add_argument('--goal', type=int, nargs=2, metavar=('X', 'Y'), help='Goal cell')

    parser.add_argument(
        '--exhaustive',
        action='store_true',
        help='Keep expanding until the frontier is empty'
    )

    parser.add_argument(
        '--trace', '-t',
        action='store_true',
        help='Print every expansion step'
    )

    parser.add_argument(
        '--save', '-s',
        action='store_true',
        help='Save the path to the output directory'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        return run_planner(
            algorithm_name=args.algorithm,
            config_dir=args.config_dir,
            map_file=args.map,
            start=args.start,
            goal=args.goal,
            exhaustive=args.exhaustive,
            trace=args.trace,
            save=args.save
        )
    except (GridSearchError, FileNotFoundError, IndexError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        return 2


if __name__ == '__main__':
    sys.exit(main())
