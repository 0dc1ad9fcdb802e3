"""Pydantic schemas for persisted maze state.

These models mirror the dataclasses in ``grid.py`` and the ``VisitedSet``
tracker but keep session snapshots JSON-serializable. Field aliases match
the stored shape (``rowNum``/``colNum`` on cells, ``posX``/``posY`` on the
agent); dump with ``by_alias=True`` to produce it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator

from .grid import Direction, MazeCell, MazeGrid, Walls
from .visibility import VisitedSet


class WallsState(BaseModel):
    """Wall flags keyed by side name. All four keys are required."""

    up: bool
    down: bool
    left: bool
    right: bool

    @classmethod
    def from_walls(cls, walls: Walls) -> "WallsState":
        return cls(up=walls.up, down=walls.down, left=walls.left, right=walls.right)

    def to_walls(self) -> Walls:
        return Walls(up=self.up, down=self.down, left=self.left, right=self.right)


class MazeCellState(BaseModel):
    """Serializable form of a single cell."""

    model_config = ConfigDict(populate_by_name=True)

    row: int = Field(..., ge=0, alias="rowNum", description="Row index (first axis)")
    col: int = Field(..., ge=0, alias="colNum", description="Column index (second axis)")
    visited: bool = Field(..., description="Generation bookkeeping flag")
    walls: WallsState


class MazeGridState(RootModel[List[List[MazeCellState]]]):
    """2-D list of cells in row order.

    Each cell must sit at the index its own ``rowNum``/``colNum`` claim, and
    every row must have the same length. Reordered or ragged payloads are
    rejected instead of silently rebuilt.
    """

    @model_validator(mode="after")
    def _check_layout(self) -> "MazeGridState":
        rows = self.root
        if not rows or not rows[0]:
            raise ValueError("maze must contain at least one cell")
        width = len(rows[0])
        for r, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"row {r} has {len(row)} cells, expected {width}")
            for c, cell in enumerate(row):
                if (cell.row, cell.col) != (r, c):
                    raise ValueError(
                        f"cell at index ({r}, {c}) claims position ({cell.row}, {cell.col})"
                    )
                # Shared walls must agree on both sides
                if c + 1 < width and cell.walls.right != row[c + 1].walls.left:
                    raise ValueError(
                        f"wall between ({r}, {c}) and ({r}, {c + 1}) is open on one side only"
                    )
                if r + 1 < len(rows) and cell.walls.down != rows[r + 1][c].walls.up:
                    raise ValueError(
                        f"wall between ({r}, {c}) and ({r + 1}, {c}) is open on one side only"
                    )
        return self

    @property
    def rows(self) -> int:
        return len(self.root)

    @property
    def columns(self) -> int:
        return len(self.root[0])

    @classmethod
    def from_grid(cls, grid: MazeGrid) -> "MazeGridState":
        return cls(
            [
                [
                    MazeCellState(
                        row=cell.row,
                        col=cell.col,
                        visited=cell.visited,
                        walls=WallsState.from_walls(cell.walls),
                    )
                    for cell in row
                ]
                for row in grid.cells
            ]
        )

    @classmethod
    def from_partial(cls, payload: List[List[Dict[str, Any]]]) -> "MazeGridState":
        """Rebuild from a payload whose wall maps may be missing keys.

        Missing wall flags default to open (no wall), unknown wall keys are
        ignored and a missing ``visited`` flag defaults to False. Anything
        that is not shaped like a cell is passed through untouched, so
        validation rejects it with a ``ValidationError``.
        """

        if not isinstance(payload, list):
            return cls.model_validate(payload)

        repaired: List[Any] = []
        for row in payload:
            if not isinstance(row, list):
                repaired.append(row)
                continue
            fixed_row: List[Any] = []
            for raw in row:
                walls = (raw.get("walls") or {}) if isinstance(raw, dict) else None
                if not isinstance(walls, dict):
                    fixed_row.append(raw)
                    continue
                cell = dict(raw)
                cell.setdefault("visited", False)
                cell["walls"] = {side.value: walls.get(side.value, False) for side in Direction}
                fixed_row.append(cell)
            repaired.append(fixed_row)
        return cls.model_validate(repaired)

    def to_grid(self) -> MazeGrid:
        cells = [
            [
                MazeCell(row=state.row, col=state.col, walls=state.walls.to_walls(), visited=state.visited)
                for state in row
            ]
            for row in self.root
        ]
        return MazeGrid(rows=self.rows, columns=self.columns, cells=cells)

    def to_payload(self) -> List[List[Dict[str, Any]]]:
        return self.model_dump(mode="json", by_alias=True)


class VisitedSetState(BaseModel):
    """Serializable visited set.

    JSON object keys must be strings and JSON has no set type, so rows are
    stored as ``{"<row>": [col, ...]}`` with sorted, de-duplicated columns.
    A ``null`` column list decodes to an empty row; a row key that is not an
    integer fails validation.
    """

    rows: Dict[int, List[int]] = Field(
        default_factory=dict,
        description="Map of row index → observed column indices",
    )

    @field_validator("rows", mode="before")
    @classmethod
    def _null_rows_are_empty(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: ([] if cols is None else cols) for key, cols in value.items()}
        return value

    @field_validator("rows")
    @classmethod
    def _normalise_columns(cls, value: Dict[int, List[int]]) -> Dict[int, List[int]]:
        return {row: sorted(set(cols)) for row, cols in value.items()}

    @classmethod
    def from_visited(cls, visited: VisitedSet) -> "VisitedSetState":
        return cls(rows={row: sorted(cols) for row, cols in visited.items()})

    def to_visited(self) -> VisitedSet:
        return VisitedSet(self.rows)


class AgentPosition(BaseModel):
    """Where the agent stands and which way it faces.

    ``pos_x`` is the row and ``pos_y`` the column, matching the stored
    ``posX``/``posY`` keys.
    """

    model_config = ConfigDict(populate_by_name=True)

    pos_x: int = Field(..., ge=0, alias="posX", description="Row index")
    pos_y: int = Field(..., ge=0, alias="posY", description="Column index")
    facing_x: int = Field(0, alias="facingX")
    facing_y: int = Field(1, alias="facingY")

    @property
    def cell(self) -> Tuple[int, int]:
        return (self.pos_x, self.pos_y)

    def moved_to(self, row: int, col: int) -> "AgentPosition":
        return self.model_copy(update={"pos_x": row, "pos_y": col})
