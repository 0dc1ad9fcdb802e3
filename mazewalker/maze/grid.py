"""Cell and wall model for rectangular mazes.

A maze is a grid of cells that each carry four wall flags. Adjacency is
expressed through walls rather than edges: two neighbouring cells are
connected when the wall between them is open on both sides. Walls are only
ever opened through ``remove_walls`` so the two sides stay in agreement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .errors import InvalidDimensionError, NonAdjacentWallRemovalError, OutOfBoundsError


class Direction(str, Enum):
    """Side of a cell, and the matching direction of travel."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        """(row, col) offset of the neighbour on this side."""
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def perpendicular(self) -> Tuple["Direction", "Direction"]:
        """The two sides at right angles to this direction."""
        return _PERPENDICULAR[self]

    @classmethod
    def parse(cls, value: "Direction | str") -> Optional["Direction"]:
        """Return the matching direction, or None for unrecognised text."""
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_PERPENDICULAR = {
    Direction.UP: (Direction.LEFT, Direction.RIGHT),
    Direction.DOWN: (Direction.LEFT, Direction.RIGHT),
    Direction.LEFT: (Direction.UP, Direction.DOWN),
    Direction.RIGHT: (Direction.UP, Direction.DOWN),
}

# Neighbour scan order shared by the generator and the solver.
DIRECTION_ORDER: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.LEFT,
)


@dataclass
class Walls:
    """Wall flags for the four sides of a cell. True means blocked."""

    up: bool = True
    down: bool = True
    left: bool = True
    right: bool = True

    def has(self, side: Direction) -> bool:
        return getattr(self, side.value)

    def open(self, side: Direction) -> None:
        setattr(self, side.value, False)

    def open_sides(self) -> List[Direction]:
        return [side for side in Direction if not self.has(side)]


@dataclass
class MazeCell:
    """A single maze cell.

    ``visited`` is bookkeeping for the generator only. What the agent has seen
    is tracked separately by ``VisitedSet``.
    """

    row: int
    col: int
    walls: Walls = field(default_factory=Walls)
    visited: bool = False

    @property
    def coord(self) -> Tuple[int, int]:
        return (self.row, self.col)


@dataclass
class MazeGrid:
    """Rectangular grid of cells indexed as ``cells[row][col]``."""

    rows: int
    columns: int
    cells: List[List[MazeCell]]

    @property
    def size(self) -> int:
        """Side length of a square maze (the row count otherwise)."""
        return self.rows

    @property
    def goal(self) -> Tuple[int, int]:
        """Corner opposite the generation origin, used for display only."""
        return (self.rows - 1, self.columns - 1)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.columns

    def cell(self, row: int, col: int) -> MazeCell:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self.rows, self.columns)
        return self.cells[row][col]

    def is_boundary(self, row: int, col: int) -> bool:
        """True for cells on the outer ring, all of which count as exits."""
        return row in (0, self.rows - 1) or col in (0, self.columns - 1)

    def neighbor(self, row: int, col: int, side: Direction) -> Optional[MazeCell]:
        """Cell across ``side`` from (row, col), or None past the edge."""
        dr, dc = side.delta
        nr, nc = row + dr, col + dc
        if not self.in_bounds(nr, nc):
            return None
        return self.cells[nr][nc]

    def neighbors(self, row: int, col: int) -> Iterator[Tuple[Direction, MazeCell]]:
        """Yield in-bounds neighbours in up, right, down, left order. No wrap."""
        for side in DIRECTION_ORDER:
            nb = self.neighbor(row, col, side)
            if nb is not None:
                yield side, nb

    def is_open(self, row: int, col: int, side: Direction) -> bool:
        """True when a passage leads from (row, col) across ``side``."""
        return not self.cell(row, col).walls.has(side) and self.neighbor(row, col, side) is not None

    def open_passages(self) -> int:
        """Count open wall pairs. A perfect maze has rows*columns - 1."""
        total = 0
        for cell in self.iter_cells():
            # Count each pair once from its upper/left member.
            if not cell.walls.down and cell.row < self.rows - 1:
                total += 1
            if not cell.walls.right and cell.col < self.columns - 1:
                total += 1
        return total

    def iter_cells(self) -> Iterator[MazeCell]:
        for row in self.cells:
            yield from row

    def reset_generation_flags(self) -> None:
        for cell in self.iter_cells():
            cell.visited = False


def new_grid(rows: int, columns: Optional[int] = None) -> MazeGrid:
    """Allocate a fully walled grid. ``columns`` defaults to ``rows``."""

    columns = rows if columns is None else columns
    if rows <= 0 or columns <= 0:
        raise InvalidDimensionError(rows, columns)
    cells = [[MazeCell(row=r, col=c) for c in range(columns)] for r in range(rows)]
    return MazeGrid(rows=rows, columns=columns, cells=cells)


def side_between(first: MazeCell, second: MazeCell) -> Direction:
    """Return the side of ``first`` that faces ``second``."""

    dr = second.row - first.row
    dc = second.col - first.col
    for side, delta in _DELTAS.items():
        if delta == (dr, dc):
            return side
    raise NonAdjacentWallRemovalError(first.coord, second.coord)


def remove_walls(first: MazeCell, second: MazeCell) -> None:
    """Open the shared wall between two adjacent cells on both sides.

    Raises:
        NonAdjacentWallRemovalError: If the cells are not neighbours. No wall
            is touched in that case.
    """

    side = side_between(first, second)
    first.walls.open(side)
    second.walls.open(side.opposite)
