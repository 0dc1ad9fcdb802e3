"""Depth-first search from any cell to the maze boundary."""

from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .errors import UnreachableBoundaryError
from .grid import MazeGrid

Coord = Tuple[int, int]


def coord_key(row: int, col: int) -> str:
    """Format a coordinate as the ``"row-col"`` key used by renderers."""
    return f"{row}-{col}"


def solve_path(
    grid: MazeGrid,
    start_row: int,
    start_col: int,
    *,
    rng: Optional[random.Random] = None,
) -> List[Coord]:
    """Return a simple path of coordinates from the start cell to the exit ring.

    Neighbours are picked at random among unexplored cells reachable through
    an open wall, so the path is not necessarily the shortest one. Dead ends
    are popped off the path stack as the search backs out of them.

    Raises:
        OutOfBoundsError: If the start cell is outside the grid.
        UnreachableBoundaryError: If the search exhausts the stack, which
            only happens on a disconnected grid.
    """

    rng = rng or random.Random()
    grid.cell(start_row, start_col)  # bounds check

    # Separate marker grid so the maze's own flags are left alone.
    explored = [[False] * grid.columns for _ in range(grid.rows)]
    path: List[Coord] = []
    current: Coord = (start_row, start_col)

    while not grid.is_boundary(*current):
        row, col = current
        explored[row][col] = True
        cell = grid.cell(row, col)
        options = [
            nb.coord
            for side, nb in grid.neighbors(row, col)
            if not explored[nb.row][nb.col] and not cell.walls.has(side)
        ]
        if options:
            path.append(current)
            current = rng.choice(options)
        elif path:
            current = path.pop()
        else:
            raise UnreachableBoundaryError((start_row, start_col))

    path.append(current)
    return path


def solve(
    grid: MazeGrid,
    start_row: int,
    start_col: int,
    *,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Same as ``solve_path`` with coordinates formatted as ``"row-col"`` keys.

    The first key is the start cell and the last one lies on the boundary.
    """

    return [coord_key(r, c) for r, c in solve_path(grid, start_row, start_col, rng=rng)]
