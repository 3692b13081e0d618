import pytest

from gridsearch.core.grid import Grid


@pytest.fixture
def open_grid():
    return Grid([[0, 0, 0],
                 [0, 0, 0],
                 [0, 0, 0]])


@pytest.fixture
def center_blocked_grid():
    return Grid([[0, 0, 0],
                 [0, 1, 0],
                 [0, 0, 0]])


@pytest.fixture
def walled_goal_grid():
    # goal (4, 4) is enclosed by blocked cells
    return Grid([[0, 0, 0, 0, 0],
                 [0, 0, 0, 0, 0],
                 [0, 0, 0, 0, 0],
                 [0, 0, 0, 1, 1],
                 [0, 0, 0, 1, 0]])
