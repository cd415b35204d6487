# src/autopilot/policies/autopilot.py
from src.snake.game import GameState


def policy_autopilot(state: GameState):
    """A* autopilot: follow the cached path to the food, replanning as needed."""
    if state.food is None:
        return state.direction
    return state.controller.next_heading(state.snake, state.food, state.direction)
