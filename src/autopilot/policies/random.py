# src/autopilot/policies/random.py
from src.snake.game import GameState


def policy_random(state: GameState):
    """
    Random policy: a uniformly random safe heading, same rule as the
    autopilot's no-path fallback. Keeps the current heading when boxed in.
    """
    return state.controller.fallback(state.snake, state.direction)
