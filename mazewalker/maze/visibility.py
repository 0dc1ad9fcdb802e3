"""Tracks which cells the agent has seen."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Set, Tuple

REVEAL_RADIUS = 1


class VisitedSet:
    """Row -> columns mapping of cells the agent has observed.

    Entries are only ever added. Every completed stop reveals the 3x3 block
    around the agent; coordinates that fall off the grid are skipped rather
    than recorded.
    """

    def __init__(self, rows: Dict[int, Iterable[int]] | None = None):
        # Sets keep each column at most once per row.
        self._rows: Dict[int, Set[int]] = {}
        for row, cols in (rows or {}).items():
            self._rows[int(row)] = {int(c) for c in cols}

    def columns(self, row: int) -> Set[int]:
        """Columns seen on ``row``. Creates an empty entry if the row is new."""
        return self._rows.setdefault(row, set())

    def mark(self, row: int, col: int) -> bool:
        """Record one cell. Returns True if it had not been seen before."""
        cols = self.columns(row)
        if col in cols:
            return False
        cols.add(col)
        return True

    def reveal(self, row: int, col: int, rows: int, columns: int) -> List[Tuple[int, int]]:
        """Mark the block around (row, col) that lies inside the grid.

        Returns the cells that were newly recorded by this call.
        """
        fresh: List[Tuple[int, int]] = []
        for r in range(row - REVEAL_RADIUS, row + REVEAL_RADIUS + 1):
            if not 0 <= r < rows:
                continue
            for c in range(col - REVEAL_RADIUS, col + REVEAL_RADIUS + 1):
                if 0 <= c < columns and self.mark(r, c):
                    fresh.append((r, c))
        return fresh

    def contains(self, row: int, col: int) -> bool:
        return col in self._rows.get(row, ())

    def __contains__(self, coord: object) -> bool:
        if not isinstance(coord, tuple) or len(coord) != 2:
            return False
        return self.contains(*coord)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        for row in sorted(self._rows):
            for col in sorted(self._rows[row]):
                yield (row, col)

    def __len__(self) -> int:
        return sum(len(cols) for cols in self._rows.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VisitedSet):
            return NotImplemented
        return set(self) == set(other)

    def __repr__(self) -> str:
        return f"VisitedSet({self.as_dict()!r})"

    def items(self) -> Iterator[Tuple[int, Set[int]]]:
        return iter(self._rows.items())

    def as_dict(self) -> Dict[int, Set[int]]:
        """Copy of the underlying mapping, including rows with no columns."""
        return {row: set(cols) for row, cols in self._rows.items()}

    def as_keys(self) -> Set[str]:
        """Seen cells as ``"row-col"`` keys."""
        return {f"{row}-{col}" for row, col in self}

    def copy(self) -> "VisitedSet":
        return VisitedSet(self.as_dict())
