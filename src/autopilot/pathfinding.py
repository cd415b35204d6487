# src/autopilot/pathfinding.py
from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import AbstractSet, Dict, List, Optional, Set, Tuple

from src.snake.grid import Cell, Grid
from src.snake.snake import Snake


def manhattan(a: Cell, b: Cell) -> int:
    """Manhattan (L1) distance; admissible and consistent on a 4-connected grid."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass(frozen=True)
class Node:
    cell: Cell
    g: int
    h: int
    parent: Optional["Node"] = None

    @property
    def f(self) -> int:
        return self.g + self.h


def _build_path(node: Node) -> List[Cell]:
    """Walk parent links back to the root; the root (start) itself is left out."""
    path = []
    while node.parent is not None:
        path.append(node.cell)
        node = node.parent
    path.reverse()
    return path


def find_path(
    start: Cell,
    goal: Cell,
    blocked: AbstractSet[Cell],
    grid: Grid,
    passable: Optional[Cell] = None,
) -> List[Cell]:
    """
    A* search from `start` to `goal` over 4-connected cells of `grid`.

    `blocked` cells are never entered, except `passable`, which is treated
    as free even if listed (the snake's tail, which vacates on the next move).

    Returns the cells after `start` up to and including `goal`, or [] when
    the goal cannot be reached. `start == goal` also yields [].

    The open set allows duplicate entries per cell; when a cheaper route to
    a cell is found a new entry is pushed and the stale one is skipped when
    popped. Equal-f ties go to the earlier push.
    """
    if start == goal:
        return []

    tie = itertools.count()
    root = Node(start, 0, manhattan(start, goal))
    open_heap: List[Tuple[int, int, Node]] = [(root.f, next(tie), root)]
    best_g: Dict[Cell, int] = {start: 0}
    closed: Set[Cell] = set()

    while open_heap:
        _, _, current = heapq.heappop(open_heap)
        if current.cell in closed:
            continue  # stale duplicate
        closed.add(current.cell)

        if current.cell == goal:
            return _build_path(current)

        for nxt in grid.neighbors(current.cell):
            if nxt in closed:
                continue
            if nxt in blocked and nxt != passable:
                continue
            g = current.g + 1
            if g >= best_g.get(nxt, g + 1):
                continue
            best_g[nxt] = g
            node = Node(nxt, g, manhattan(nxt, goal), current)
            heapq.heappush(open_heap, (node.f, next(tie), node))

    return []


def blocked_cells(snake: Snake, exempt_tail: bool = True) -> Tuple[Set[Cell], Optional[Cell]]:
    """
    Obstacles for a search from the snake's head, plus the tail cell if it
    may be routed through.

    The tail is only exempt when it really vacates next tick: the snake must
    be longer than two cells (otherwise the tail is the neck) and the tail
    must not be stacked on another segment after a growth. Two-cell snakes
    get no exemption, unlike the classic game which exempts any tail behind
    a head; routing a two-cell snake through its tail would reverse it.
    """
    blocked = set(snake.body)
    passable = None
    if exempt_tail and len(snake) > 2 and not snake.occupies(snake.tail, include_tail=False):
        passable = snake.tail
    return blocked, passable
