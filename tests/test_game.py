"""
Tests for the game loop, commands and food placement (src/snake/game.py).

All states are headless so no window or clock is needed.
"""

import random

import pytest

from src.snake.config import UP, DOWN, LEFT, RIGHT, Config
from src.snake.grid import Grid
from src.snake.snake import Snake
from src.snake.game import (
    GameState,
    new_game_state,
    spawn_food,
    apply_command,
    step_game,
    snapshot,
    CMD_UP, CMD_DOWN, CMD_LEFT, CMD_RIGHT,
    TOGGLE_AUTOPILOT, TOGGLE_PATH, TOGGLE_PAUSE, RESTART,
)


def make_state(width=10, height=10, start_length=3, seed=0) -> GameState:
    cfg = Config(seed=seed, start_length=start_length)
    return new_game_state(0, headless=True, cfg=cfg, grid=Grid(width, height))


def random_snake(grid: Grid, rng: random.Random, max_len: int) -> Snake:
    """Self-avoiding random walk; stops early when it runs into itself."""
    body = [(rng.randrange(grid.width), rng.randrange(grid.height))]
    target = rng.randint(1, max_len)
    while len(body) < target:
        options = [c for c in grid.neighbors(body[-1]) if c not in body]
        if not options:
            break
        body.append(rng.choice(options))
    return Snake(body)


class TestNewGame:

    def test_initial_state(self):
        state = make_state()
        assert state.snake.body == [(5, 5), (4, 5), (3, 5)]
        assert state.direction == RIGHT
        assert state.score == 0
        assert state.running is True
        assert state.autopilot is False
        assert state.food is not None
        assert state.food not in state.snake.body

    def test_same_seed_same_food(self):
        assert make_state(seed=7).food == make_state(seed=7).food


class TestSpawnFood:

    def test_food_is_always_on_a_free_cell(self):
        grid = Grid(10, 10)
        rng = random.Random(42)
        for _ in range(1000):
            snake = random_snake(grid, rng, max_len=49)
            food = spawn_food(snake, grid, rng)
            assert food is not None
            assert grid.in_bounds(food)
            assert food not in snake.body

    def test_full_board_has_no_food(self):
        grid = Grid(2, 2)
        snake = Snake([(0, 0), (1, 0), (1, 1), (0, 1)])
        assert spawn_food(snake, grid, random.Random(0)) is None

    def test_single_free_cell_is_found(self):
        grid = Grid(2, 2)
        snake = Snake([(0, 0), (1, 0), (1, 1)])
        assert spawn_food(snake, grid, random.Random(0)) == (0, 1)


class TestStep:

    def test_moves_one_cell_per_tick(self):
        state = make_state()
        state.food = (0, 0)
        assert step_game(state, 0) is True
        assert state.snake.body == [(6, 5), (5, 5), (4, 5)]
        assert state.steps == 1

    def test_waits_for_timer_when_not_headless(self):
        state = make_state()
        state.headless = False
        state.food = (0, 0)
        assert step_game(state, state.speed_ms - 1) is True
        assert state.steps == 0
        step_game(state, state.speed_ms)
        assert state.steps == 1

    def test_paused_game_does_not_move(self):
        state = make_state()
        apply_command(state, TOGGLE_PAUSE)
        before = list(state.snake.body)
        assert step_game(state, 0) is True
        assert state.snake.body == before

    def test_wall_collision_ends_game(self):
        state = make_state()
        state.food = (0, 0)
        alive = True
        ticks = 0
        while alive:
            alive = step_game(state, 0)
            ticks += 1
        assert ticks == 5  # from column 5 to column 10
        assert state.running is False
        assert state.death_reason == "wall"
        assert step_game(state, 0) is False

    def test_self_collision_ends_game(self):
        state = make_state()
        state.food = (0, 0)
        state.snake = Snake([(5, 5), (4, 5), (4, 6), (5, 6), (6, 6)])
        state.direction = state.pending = RIGHT
        apply_command(state, CMD_DOWN)
        assert step_game(state, 0) is False
        assert state.death_reason == "self"

    def test_moving_into_the_vacating_tail_is_safe(self):
        state = make_state()
        state.food = (0, 0)
        state.snake = Snake([(5, 5), (5, 6), (4, 6), (4, 5)], direction=UP)
        state.direction = state.pending = UP
        apply_command(state, CMD_LEFT)
        assert step_game(state, 0) is True
        assert state.snake.head == (4, 5)

    def test_eating_grows_scores_and_respawns(self):
        state = make_state()
        state.food = (6, 5)
        state.controller.path = [(7, 7)]
        assert step_game(state, 0) is True
        assert state.score == 1
        assert state.high_score == 1
        assert len(state.snake) == 4
        assert state.food not in state.snake.body
        assert state.controller.path == []

    def test_single_cell_snake_reaches_adjacent_food_in_one_tick(self):
        state = make_state(start_length=1)
        state.food = (6, 5)
        apply_command(state, TOGGLE_AUTOPILOT)
        assert state.controller.plan(state.snake, state.food) == [(6, 5)]
        assert step_game(state, 0) is True
        assert state.steps == 1
        assert state.score == 1
        assert state.snake.body == [(6, 5), (5, 5)]

    def test_autopilot_eats_several_foods(self):
        state = make_state(width=12, height=12, seed=3)
        apply_command(state, TOGGLE_AUTOPILOT)
        for _ in range(400):
            if not step_game(state, 0) or state.score >= 5:
                break
        assert state.score >= 5

    def test_board_full_ends_episode(self):
        state = make_state(width=3, height=1, start_length=2)
        state.snake = Snake([(1, 0), (0, 0)])
        state.direction = state.pending = RIGHT
        state.food = (2, 0)
        assert step_game(state, 0) is False
        assert state.death_reason == "board_full"
        assert state.score == 1


class TestCommands:

    def test_reverse_is_ignored(self):
        state = make_state()
        apply_command(state, CMD_LEFT)
        assert state.pending == RIGHT
        apply_command(state, CMD_UP)
        assert state.pending == UP

    def test_manual_moves_ignored_under_autopilot(self):
        state = make_state()
        apply_command(state, TOGGLE_AUTOPILOT)
        apply_command(state, CMD_UP)
        assert state.pending == RIGHT

    def test_toggling_autopilot_drops_cached_path(self):
        state = make_state()
        state.controller.path = [(6, 5)]
        apply_command(state, TOGGLE_AUTOPILOT)
        assert state.autopilot is True
        assert state.controller.path == []

    def test_restart_only_after_game_over(self):
        state = make_state()
        assert apply_command(state, RESTART) is state

        state.score = state.high_score = 4
        state.running = False
        state.autopilot = True
        fresh = apply_command(state, RESTART)
        assert fresh is not state
        assert fresh.running is True
        assert fresh.score == 0
        assert fresh.high_score == 4
        assert fresh.autopilot is True
        assert fresh.snake.body == [(5, 5), (4, 5), (3, 5)]

    def test_unknown_command_rejected(self):
        with pytest.raises(ValueError):
            apply_command(make_state(), "JUMP")

    def test_right_command(self):
        state = make_state()
        apply_command(state, CMD_DOWN)
        state.direction = DOWN
        apply_command(state, CMD_RIGHT)
        assert state.pending == RIGHT


class TestSnapshot:

    def test_path_only_visible_with_autopilot_and_toggle(self):
        state = make_state()
        state.controller.path = [(6, 5), (7, 5)]
        assert snapshot(state).path == ()

        state.autopilot = True
        assert snapshot(state).path == ()

        apply_command(state, TOGGLE_PATH)
        snap = snapshot(state)
        assert snap.path == ((6, 5), (7, 5))
        assert snap.show_path is True

    def test_snapshot_is_a_copy(self):
        state = make_state()
        snap = snapshot(state)
        step_game(state, 0)
        assert snap.body[0] == (5, 5)
        assert snap.running is True
        assert snap.score == 0
