"""Corridor-following movement.

One direction command can carry the agent several cells. After the first
step the agent keeps going only while it stays in a straight corridor, i.e.
both walls perpendicular to the direction of travel are present. Any side
opening, even on one side only, ends the move so the player gets a chance to
choose at every branch.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .grid import Direction, MazeGrid
from .schemas import AgentPosition
from .visibility import VisitedSet

_DIRECTION_PATTERN = re.compile(r"\b(up|down|left|right)\b", re.IGNORECASE)


def parse_directions(text: str) -> List[Direction]:
    """Return the direction words in ``text`` in order of first appearance.

    Matching is case-insensitive and on whole words, so ``"Go UP"`` yields
    ``[Direction.UP]`` while ``"upstairs"`` yields nothing.
    """

    found: List[Direction] = []
    for match in _DIRECTION_PATTERN.finditer(text or ""):
        direction = Direction(match.group(1).lower())
        if direction not in found:
            found.append(direction)
    return found


def available_directions(grid: MazeGrid, position: AgentPosition) -> List[Direction]:
    """Open sides of the agent's cell, in up, down, left, right order."""

    return grid.cell(*position.cell).walls.open_sides()


def can_step(
    grid: MazeGrid,
    row: int,
    col: int,
    direction: Direction,
    *,
    moved: bool,
    rows: int,
    columns: int,
) -> bool:
    """Decide whether the agent at (row, col) may take one more step.

    Args:
        grid: Maze being walked.
        row, col: Current cell.
        direction: Direction of travel.
        moved: Whether a step was already taken during this move.
        rows, columns: Bounds the destination must stay inside.
    """

    walls = grid.cell(row, col).walls
    if walls.has(direction):
        return False
    if moved:
        first, second = direction.perpendicular
        if not (walls.has(first) and walls.has(second)):
            return False
    dr, dc = direction.delta
    return 0 <= row + dr < rows and 0 <= col + dc < columns


def resolve_move(
    grid: MazeGrid,
    position: AgentPosition,
    direction: Direction | str,
    size: Optional[int] = None,
) -> Tuple[AgentPosition, VisitedSet]:
    """Advance the agent along an open corridor.

    Args:
        grid: Maze being walked.
        position: Current agent position. It is not modified.
        direction: A ``Direction`` or its text. Unrecognised text is a no-op.
        size: Bound for square mazes; defaults to the grid's own dimensions.

    Returns:
        ``(new_position, visited_delta)`` where ``visited_delta`` holds every
        cell revealed at each stop along the way. A blocked first step returns
        the original position and an empty delta.

    Raises:
        OutOfBoundsError: If ``position`` is not inside the grid.
    """

    delta = VisitedSet()
    parsed = Direction.parse(direction)
    if parsed is None:
        return position, delta

    rows = grid.rows if size is None else min(size, grid.rows)
    columns = grid.columns if size is None else min(size, grid.columns)
    row, col = position.cell
    dr, dc = parsed.delta
    moved = False

    while can_step(grid, row, col, parsed, moved=moved, rows=rows, columns=columns):
        row, col = row + dr, col + dc
        moved = True
        delta.reveal(row, col, rows, columns)

    if not moved:
        return position, delta
    return position.moved_to(row, col), delta
