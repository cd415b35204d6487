# src/autopilot/policies/greedy.py
from src.snake.config import UP, DOWN, LEFT, RIGHT
from src.snake.game import GameState


def best_move_toward_food(hx: int, hy: int, fx: int, fy: int):
    """
    Returns a preference ordering of moves that reduce Manhattan distance to food.
    Does NOT check collisions; caller should filter unsafe moves.
    """
    prefs = []
    if fx < hx:
        prefs.append(LEFT)
    elif fx > hx:
        prefs.append(RIGHT)
    if fy < hy:
        prefs.append(UP)
    elif fy > hy:
        prefs.append(DOWN)
    # Orthogonal options last so the caller still has options when the primary axis is blocked.
    for d in (UP, DOWN, LEFT, RIGHT):
        if d not in prefs:
            prefs.append(d)
    return prefs  # length 4


def policy_greedy(state: GameState):
    """
    Greedy on food distance with simple safety:
    - prefer headings that reduce Manhattan distance
    - skip headings that hit a wall, the body, or reverse
    - if every heading is unsafe, keep going
    """
    if state.food is None:
        return state.direction
    hx, hy = state.snake.head
    fx, fy = state.food
    safe = state.controller.safe_headings(state.snake, state.direction)
    for d in best_move_toward_food(hx, hy, fx, fy):
        if d in safe:
            return d
    return state.direction
