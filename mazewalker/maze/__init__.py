"""Maze engine: grid model, generation, movement, solving and visibility."""

from .errors import (
    MazeError,
    InvalidDimensionError,
    OutOfBoundsError,
    NonAdjacentWallRemovalError,
    UnreachableBoundaryError,
)
from .grid import Direction, Walls, MazeCell, MazeGrid, new_grid, remove_walls
from .generator import generate
from .visibility import VisitedSet
from .schemas import (
    AgentPosition,
    MazeCellState,
    MazeGridState,
    VisitedSetState,
    WallsState,
)
from .movement import available_directions, can_step, parse_directions, resolve_move
from .solver import coord_key, solve, solve_path
from .render import render_maze

__all__ = [
    "MazeError",
    "InvalidDimensionError",
    "OutOfBoundsError",
    "NonAdjacentWallRemovalError",
    "UnreachableBoundaryError",
    "Direction",
    "Walls",
    "MazeCell",
    "MazeGrid",
    "new_grid",
    "remove_walls",
    "generate",
    "VisitedSet",
    "AgentPosition",
    "MazeCellState",
    "MazeGridState",
    "VisitedSetState",
    "WallsState",
    "available_directions",
    "can_step",
    "parse_directions",
    "resolve_move",
    "coord_key",
    "solve",
    "solve_path",
    "render_maze",
]
