"""Randomized recursive-backtracking maze generation.

The backtracker is run with an explicit stack so memory use stays flat no
matter how large the grid is. Because each cell is entered exactly once and
a wall is only opened when an unvisited cell is entered, the open passages
always form a spanning tree: every cell is reachable and there are no loops.
"""

from __future__ import annotations

import random
from typing import List, Optional

from .grid import MazeCell, MazeGrid, new_grid, remove_walls

ORIGIN = (0, 0)


def generate(
    size: int,
    *,
    columns: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> MazeGrid:
    """Build a perfect maze of ``size`` rows (and ``columns``, default square).

    Args:
        size: Number of rows. Must be positive.
        columns: Number of columns; defaults to ``size``.
        rng: Random source for neighbour choice. Pass a seeded
            ``random.Random`` for reproducible mazes.

    Returns:
        A fully connected, acyclic grid with every generation flag cleared.

    Raises:
        InvalidDimensionError: If either dimension is not positive.
    """

    grid = new_grid(size, columns)
    rng = rng or random.Random()

    start = grid.cell(*ORIGIN)
    start.visited = True
    stack: List[MazeCell] = [start]

    while stack:
        current = stack[-1]
        candidates = [
            nb for _, nb in grid.neighbors(current.row, current.col) if not nb.visited
        ]
        if candidates:
            chosen = rng.choice(candidates)
            chosen.visited = True
            remove_walls(current, chosen)
            stack.append(chosen)
        else:
            stack.pop()

    grid.reset_generation_flags()
    return grid
