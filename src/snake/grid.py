# grid.py
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

import numpy as np  # type: ignore

from .config import GRID_W, GRID_H, CELL_SIZE, HEADINGS

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Grid:
    """Fixed-size board. Pure coordinate math, no game state."""
    width: int = GRID_W
    height: int = GRID_H
    cell_size: int = CELL_SIZE

    def to_cell(self, px: int, py: int) -> Cell:
        return (px // self.cell_size, py // self.cell_size)

    def to_pixel(self, cell: Cell) -> Tuple[int, int]:
        return (cell[0] * self.cell_size, cell[1] * self.cell_size)

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def neighbors(self, cell: Cell) -> List[Cell]:
        """Orthogonal neighbours that lie on the board (no diagonals)."""
        x, y = cell
        out = []
        for dx, dy in HEADINGS:
            nxt = (x + dx, y + dy)
            if self.in_bounds(nxt):
                out.append(nxt)
        return out

    def cells(self) -> Iterator[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    @property
    def size(self) -> int:
        return self.width * self.height

    def occupancy(self, cells: Iterable[Cell]) -> np.ndarray:
        """Boolean (height, width) mask, True where a cell is listed. Off-board cells are ignored."""
        mask = np.zeros((self.height, self.width), dtype=bool)
        for cell in cells:
            if self.in_bounds(cell):
                mask[cell[1], cell[0]] = True
        return mask
