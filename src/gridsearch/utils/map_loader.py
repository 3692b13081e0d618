"""
Cost-map file loading.

Cost maps are row-major integer matrices: the first row of the file is
y = 0 and each value is a NodeType code.
"""

from pathlib import Path
import numpy as np

from ..core.exceptions import InvalidMapError
from ..core.grid import validate_cost_map


def _parse_text_rows(text: str):
    rows = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        tokens = line.split() if any(c.isspace() for c in line) else list(line)
        try:
            rows.append([int(token) for token in tokens])
        except ValueError:
            raise InvalidMapError(f"Line {line_no}: cannot parse '{line}' as cell codes")
    return rows


def load_cost_map(filepath: str) -> np.ndarray:
    """
    Load a cost map from disk.

    Supports multiple formats based on file extension:
    - .txt: one row per line, either digits ("0010") or whitespace-separated
      integers ("0 0 1 0"); blank lines and '#' comments are ignored
    - .csv: comma-separated integers
    - .npy: NumPy 2-D integer array

    Args:
        filepath: Path to the cost-map file

    Returns:
        2-D integer array, indexed [y, x]

    Raises:
        FileNotFoundError: If the file doesn't exist
        InvalidMapError: If the content is not a valid rectangular cost map
        ValueError: If the file format is unsupported

    Example:
        >>> cost_map = load_cost_map('configs/maps/maze.txt')
        >>> grid = Grid(cost_map)
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Map file not found: {filepath}")

    suffix = filepath.suffix.lower()
    if suffix == '.txt':
        data = _parse_text_rows(filepath.read_text())
    elif suffix == '.csv':
        try:
            data = np.loadtxt(filepath, delimiter=',', dtype=int, ndmin=2)
        except ValueError as e:
            raise InvalidMapError(f"Error parsing CSV map {filepath}: {e}")
    elif suffix == '.npy':
        data = np.load(filepath)
    else:
        raise ValueError(f"Unsupported map format: {filepath}. Use .txt, .csv, or .npy")

    return validate_cost_map(data)
