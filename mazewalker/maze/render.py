"""Text rendering of maze render data.

The renderer is a pure function of the grid, the agent position, the visited
set and an optional solution path. It never holds state of its own, so any
presentation layer (terminal, prompt text, tests) can call it.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .grid import MazeCell, MazeGrid
from .schemas import AgentPosition
from .solver import coord_key
from .visibility import VisitedSet

_DEFAULT_SYMBOLS: Dict[str, str] = {
    "agent": "● ",
    "solution": "★ ",
    "unseen": "░░",
    "open": "  ",
}


def _cell_symbol(
    grid: MazeGrid,
    cell: MazeCell,
    mapping: Dict[str, str],
    position: Optional[AgentPosition],
    visited: Optional[VisitedSet],
    solution: set[str],
) -> str:
    if position is not None and cell.coord == position.cell:
        return mapping["agent"]
    if coord_key(cell.row, cell.col) in solution:
        return mapping["solution"]
    # Exit ring is always drawn; interior cells stay fogged until seen.
    if visited is not None and not grid.is_boundary(cell.row, cell.col) and cell.coord not in visited:
        return mapping["unseen"]
    return mapping["open"]


def render_maze(
    grid: MazeGrid,
    position: Optional[AgentPosition] = None,
    *,
    visited: Optional[VisitedSet] = None,
    solution: Optional[Iterable[str]] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> str:
    """Draw the maze with ``+--+`` wall segments and ``|`` side walls.

    Args:
        grid: Maze to draw.
        position: Agent position, drawn with the ``agent`` symbol.
        visited: When given, interior cells not in it are drawn as ``unseen``.
        solution: ``"row-col"`` keys to highlight, e.g. the output of ``solve``.
        symbols: Overrides for the two-character cell symbols.
    """

    mapping = {**_DEFAULT_SYMBOLS}
    if symbols:
        mapping.update(symbols)
    path = set(solution or ())

    lines: List[str] = []
    for row in grid.cells:
        top = "+"
        middle = "|" if row[0].walls.left else " "
        for cell in row:
            top += ("--" if cell.walls.up else "  ") + "+"
            middle += _cell_symbol(grid, cell, mapping, position, visited, path)
            middle += "|" if cell.walls.right else " "
        lines.append(top)
        lines.append(middle)

    bottom = "+" + "".join(("--" if cell.walls.down else "  ") + "+" for cell in grid.cells[-1])
    lines.append(bottom)
    return "\n".join(lines)
