"""
YAML configuration file loader for grid search.

This module provides utilities to load the grid environment (cost map,
start and goal) and per-algorithm parameters from YAML configuration files.
"""

import yaml
from typing import Dict, Any, Tuple
from pathlib import Path


def load_yaml_config(filepath: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filepath: Path to YAML file

    Returns:
        Dictionary containing configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If file is not valid YAML

    Example:
        >>> config = load_yaml_config('configs/environment.yaml')
        >>> print(config['environment']['start_point'])
        {'x': 0, 'y': 0}
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, 'r') as f:
        try:
            config = yaml.safe_load(f)
            return config if config is not None else {}
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML file {filepath}: {e}")


def load_environment_config(config_dir: str = 'configs') -> Dict[str, Any]:
    """
    Load grid environment configuration from YAML file.

    A relative 'map_file' entry is resolved against config_dir.

    Args:
        config_dir: Directory containing config files (default: 'configs')

    Returns:
        Dictionary with environment parameters:
        - cost_map: Inline row-major matrix of cell codes, or
        - map_file: Path to a .txt/.csv/.npy cost map
        - start_point: {x, y}
        - goal_point: {x, y}

    Example:
        >>> env_config = load_environment_config()
        >>> start = (env_config['start_point']['x'], env_config['start_point']['y'])
    """
    config_path = Path(config_dir) / 'environment.yaml'
    config = load_yaml_config(str(config_path))
    env_config = config.get('environment', {})

    map_file = env_config.get('map_file')
    if map_file and not Path(map_file).is_absolute():
        env_config['map_file'] = str(Path(config_dir) / map_file)

    return env_config


def load_algorithm_config(algorithm_name: str, config_dir: str = 'configs') -> Dict[str, Any]:
    """
    Load algorithm-specific configuration from YAML file.

    Args:
        algorithm_name: Name of algorithm ('bfs', 'dijkstra', 'greedy', 'astar')
        config_dir: Directory containing config files (default: 'configs')

    Returns:
        Dictionary with algorithm-specific parameters

    Raises:
        FileNotFoundError: If algorithm config file doesn't exist

    Example:
        >>> astar_config = load_algorithm_config('astar')
        >>> astar_config['parameters']['exit_on_goal']
        True
    """
    config_path = Path(config_dir) / f'{algorithm_name}.yaml'
    config = load_yaml_config(str(config_path))
    return config.get('algorithm', {})


def get_endpoints(env_config: Dict[str, Any]) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """
    Extract start and goal cells from an environment configuration.

    Raises:
        ValueError: If start_point or goal_point is missing
    """
    try:
        start = (int(env_config['start_point']['x']), int(env_config['start_point']['y']))
        goal = (int(env_config['goal_point']['x']), int(env_config['goal_point']['y']))
    except (KeyError, TypeError) as e:
        raise ValueError(f"Environment config needs start_point and goal_point with x and y: {e}")
    return start, goal


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge multiple configuration dictionaries.

    Later dictionaries override earlier ones for conflicting keys.

    Args:
        *configs: Variable number of configuration dictionaries

    Returns:
        Merged configuration dictionary

    Example:
        >>> base_config = {'a': 1, 'b': 2}
        >>> override_config = {'b': 3, 'c': 4}
        >>> merged = merge_configs(base_config, override_config)
        >>> print(merged)
        {'a': 1, 'b': 3, 'c': 4}
    """
    merged = {}
    for config in configs:
        merged.update(config)
    return merged
