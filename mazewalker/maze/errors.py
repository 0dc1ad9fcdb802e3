"""Exceptions raised by the maze engine.

Every error here signals a programming mistake or a corrupted grid rather
than bad player input. Unrecognised direction text is not an error: the
movement resolver treats it as a no-op.
"""

from __future__ import annotations


class MazeError(Exception):
    """Base class for maze engine failures."""


class InvalidDimensionError(MazeError, ValueError):
    """Raised when a grid is requested with a non-positive dimension."""

    def __init__(self, rows: int, columns: int) -> None:
        self.rows = rows
        self.columns = columns
        super().__init__(
            f"Maze dimensions must be positive, got {rows}x{columns}"
        )


class OutOfBoundsError(MazeError, IndexError):
    """Raised when a cell outside the grid is read or written."""

    def __init__(self, row: int, col: int, rows: int, columns: int) -> None:
        self.row = row
        self.col = col
        super().__init__(
            f"Cell ({row}, {col}) is outside the {rows}x{columns} maze"
        )


class NonAdjacentWallRemovalError(MazeError, ValueError):
    """Raised when walls are removed between cells that are not neighbours."""

    def __init__(self, first: tuple[int, int], second: tuple[int, int]) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Cannot remove walls between non-adjacent cells {first} and {second}"
        )


class UnreachableBoundaryError(MazeError, RuntimeError):
    """Raised when the solver runs out of cells before reaching the exit ring.

    Only a disconnected grid can trigger this, so it indicates the maze was
    not produced by ``generate`` or was corrupted afterwards.
    """

    def __init__(self, start: tuple[int, int]) -> None:
        self.start = start
        message = (
            f"No path from {start} to the maze boundary.\n\n"
            "The grid is not a perfect maze. Remediation tips:\n"
            "  - Build grids with generate() rather than editing wall flags\n"
            "  - Restore persisted grids with MazeGridState.to_grid()"
        )
        super().__init__(message)
