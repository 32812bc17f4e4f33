from typing import Iterable, List, Optional

import numpy as np

from .errors import OutOfBoundsError
from .model import Position, Tile


class Grid:
    """Fixed-size rectangular tile array with bounds-checked access."""

    def __init__(self, width: int, height: int, cells: Optional[np.ndarray] = None):
        self.width = width
        self.height = height
        if cells is None:
            cells = np.full((height, width), Tile.EMPTY.value, dtype="<U1")
        if cells.shape != (height, width):
            raise ValueError(f"cell array shape {cells.shape} does not match {width}x{height}")
        self._cells = cells

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Grid":
        """Build a grid from equal-width rows of tile characters."""
        rows = list(rows)
        height = len(rows)
        width = len(rows[0]) if rows else 0
        cells = np.array([list(r) for r in rows], dtype="<U1").reshape(height, width)
        return cls(width, height, cells)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def get(self, pos: Position) -> Optional[Tile]:
        """Return the tile at pos, or None when out of bounds."""
        if not self.in_bounds(pos):
            return None
        return Tile(str(self._cells[pos.y, pos.x]))

    def set(self, pos: Position, tile: Tile) -> None:
        if not self.in_bounds(pos):
            raise OutOfBoundsError(f"write outside {self.width}x{self.height} grid", pos)
        self._cells[pos.y, pos.x] = tile.value

    def copy(self) -> "Grid":
        return Grid(self.width, self.height, self._cells.copy())

    def rows(self) -> List[str]:
        return ["".join(row) for row in self._cells]

    def __str__(self) -> str:
        return "\n".join(self.rows())
