# snake.py
from typing import List, Optional, Sequence, Tuple

from .config import RIGHT
from .grid import Cell, Grid


def is_opposite(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


class Snake:
    """
    Ordered body cells, head at index 0 and tail at the end.

    The body changes by exactly one head insertion and one tail shift per
    `advance`; `grow` re-attaches the cell the tail just left.
    """

    def __init__(self, body: Sequence[Cell], direction: Tuple[int, int] = RIGHT):
        if not body:
            raise ValueError("a snake needs at least one cell")
        self.body: List[Cell] = list(body)
        self.direction = direction
        self._vacated: Optional[Cell] = None

    @classmethod
    def spawn(cls, grid: Grid, length: int) -> "Snake":
        """Horizontal starting snake heading right, head at column 5 and row 5 when the board allows."""
        if length < 1 or length > grid.width:
            raise ValueError(f"cannot place a snake of length {length} on a {grid.width}x{grid.height} board")
        head_x = min(max(5, length - 1), grid.width - 1)
        row = min(5, grid.height - 1)
        return cls([(head_x - i, row) for i in range(length)], RIGHT)

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def __contains__(self, cell) -> bool:
        return cell in self.body

    def occupies(self, cell: Cell, include_tail: bool = True) -> bool:
        if include_tail:
            return cell in self.body
        return cell in self.body[:-1]

    def advance(self, heading: Tuple[int, int]) -> Cell:
        """Move one cell along `heading`; returns the new head."""
        hx, hy = self.body[0]
        new_head = (hx + heading[0], hy + heading[1])
        self._vacated = self.body.pop()
        self.body.insert(0, new_head)
        self.direction = heading
        return new_head

    def grow(self) -> None:
        if self._vacated is not None:
            self.body.append(self._vacated)
            self._vacated = None
        else:
            # no move since the last growth: stack on the tail, it unfolds on the next advance
            self.body.append(self.body[-1])

    def __repr__(self):
        return f"<Snake len={len(self.body)} head={self.head} dir={self.direction}>"
