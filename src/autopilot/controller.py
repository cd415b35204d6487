# src/autopilot/controller.py
from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from src.snake.config import UP, DOWN, LEFT, RIGHT, HEADINGS, HEADING_NAMES
from src.snake.grid import Cell, Grid
from src.snake.snake import Snake, is_opposite
from src.autopilot.pathfinding import blocked_cells, find_path

logger = logging.getLogger(__name__)


def heading_towards(head: Cell, cell: Cell) -> Tuple[int, int]:
    """Single-axis heading from `head` to `cell`; the x difference wins when both differ."""
    if cell[0] > head[0]:
        return RIGHT
    if cell[0] < head[0]:
        return LEFT
    if cell[1] < head[1]:
        return UP
    return DOWN


class Autopilot:
    """
    Steers the snake along a cached A* path to the food.

    The path is planned when empty, consumed one cell per tick, and thrown
    away whenever `invalidate` is called (food eaten, autopilot toggled) or
    its next cell no longer fits the live board. When no path exists a
    random safe heading is taken instead.
    """

    def __init__(self, grid: Grid, rng: Optional[random.Random] = None):
        self.grid = grid
        self.rng = rng or random.Random()
        self.path: List[Cell] = []

    def invalidate(self) -> None:
        self.path = []

    def plan(self, snake: Snake, food: Cell) -> List[Cell]:
        blocked, passable = blocked_cells(snake)
        self.path = find_path(snake.head, food, blocked, self.grid, passable=passable)
        logger.debug("planned %d-cell path from %s to %s", len(self.path), snake.head, food)
        return self.path

    def _fits(self, snake: Snake, cell: Cell) -> bool:
        if cell not in self.grid.neighbors(snake.head):
            return False
        _, passable = blocked_cells(snake)
        return cell == passable or cell not in snake.body

    def next_heading(self, snake: Snake, food: Cell, current_heading: Tuple[int, int]) -> Tuple[int, int]:
        if not self.path:
            self.plan(snake, food)

        if self.path:
            step = self.path.pop(0)
            if not self._fits(snake, step):
                logger.debug("cached path is stale at %s, replanning", step)
                self.plan(snake, food)
                if not self.path:
                    return self.fallback(snake, current_heading)
                step = self.path.pop(0)
            return heading_towards(snake.head, step)

        return self.fallback(snake, current_heading)

    def safe_headings(self, snake: Snake, current_heading: Tuple[int, int]) -> List[Tuple[int, int]]:
        hx, hy = snake.head
        safe = []
        for heading in HEADINGS:
            if is_opposite(heading, current_heading):
                continue
            nxt = (hx + heading[0], hy + heading[1])
            if not self.grid.in_bounds(nxt) or snake.occupies(nxt):
                continue
            safe.append(heading)
        return safe

    def fallback(self, snake: Snake, current_heading: Tuple[int, int]) -> Tuple[int, int]:
        """No path: random safe heading, or keep going if there is none."""
        safe = self.safe_headings(snake, current_heading)
        if not safe:
            logger.debug("no safe heading from %s, keeping %s", snake.head, HEADING_NAMES[current_heading])
            return current_heading
        choice = self.rng.choice(safe)
        logger.debug("no path to food, falling back to %s", HEADING_NAMES[choice])
        return choice
