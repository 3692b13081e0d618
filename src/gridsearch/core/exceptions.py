"""
Error taxonomy for the grid search engine.

Construction-time problems (bad cost maps, bad endpoints) are raised to the
caller. Expansion-time outcomes such as an unreachable goal are reported
through engine state instead.
"""


class GridSearchError(Exception):
    """Base class for all grid search errors."""


class InvalidMapError(GridSearchError, ValueError):
    """Cost map is empty, ragged, or contains unknown cell codes."""


class InvalidEndpointsError(GridSearchError, ValueError):
    """Start or goal is missing, blocked, or not part of the grid."""


class EmptyFrontierError(GridSearchError, IndexError):
    """Extraction was attempted on an empty frontier."""


class SearchStateError(GridSearchError, RuntimeError):
    """Engine operation called in the wrong session state."""
