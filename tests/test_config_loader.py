"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest
import yaml

from gridsearch.utils.config_loader import (
    get_endpoints,
    load_algorithm_config,
    load_environment_config,
    load_yaml_config,
    merge_configs,
)

REPO_CONFIGS = Path(__file__).resolve().parent.parent / 'configs'


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml_config(str(tmp_path / 'nope.yaml'))


def test_empty_file_is_empty_config(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text('')
    assert load_yaml_config(str(path)) == {}


def test_malformed_yaml_raises(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text('environment: [unclosed\n')
    with pytest.raises(yaml.YAMLError):
        load_yaml_config(str(path))


def test_environment_map_file_resolves_against_config_dir(tmp_path):
    (tmp_path / 'environment.yaml').write_text(
        'environment:\n'
        '  map_file: maps/level.txt\n'
        '  start_point: {x: 0, y: 0}\n'
        '  goal_point: {x: 3, y: 1}\n'
    )
    env = load_environment_config(str(tmp_path))
    assert env['map_file'] == str(tmp_path / 'maps' / 'level.txt')
    assert get_endpoints(env) == ((0, 0), (3, 1))


def test_get_endpoints_requires_both_points():
    with pytest.raises(ValueError):
        get_endpoints({'start_point': {'x': 0, 'y': 0}})


def test_algorithm_section(tmp_path):
    (tmp_path / 'astar.yaml').write_text(
        'algorithm:\n'
        '  parameters:\n'
        '    exit_on_goal: false\n'
    )
    assert load_algorithm_config('astar', str(tmp_path)) == {'parameters': {'exit_on_goal': False}}


@pytest.mark.parametrize('name', ['bfs', 'dijkstra', 'greedy', 'astar'])
def test_shipped_algorithm_configs(name):
    config = load_algorithm_config(name, str(REPO_CONFIGS))
    assert config['parameters']['exit_on_goal'] is True
    assert config['output']['path_filename'] == 'path.json'


def test_shipped_environment_config():
    env = load_environment_config(str(REPO_CONFIGS))
    assert len(env['cost_map']) == 8
    assert get_endpoints(env) == ((0, 0), (9, 7))


def test_merge_configs_later_wins():
    assert merge_configs({'a': 1, 'b': 2}, {'b': 3, 'c': 4}) == {'a': 1, 'b': 3, 'c': 4}
