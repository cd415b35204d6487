# game.py
from dataclasses import dataclass, field
from typing import Tuple, Optional
import logging
import random
import pygame # type: ignore

from .config import (
    WIDTH, HEIGHT,
    BG, GRID, HEAD, BODY, RED, PATH, TEXT,
    UP, DOWN, LEFT, RIGHT,
    CFG, Config,
)
from .grid import Cell, Grid
from .snake import Snake, is_opposite
from src.autopilot.controller import Autopilot

logger = logging.getLogger(__name__)

# ----- Commands accepted from the input layer -----
CMD_UP, CMD_DOWN, CMD_LEFT, CMD_RIGHT = "UP", "DOWN", "LEFT", "RIGHT"
TOGGLE_AUTOPILOT = "TOGGLE_AUTOPILOT"
TOGGLE_PATH = "TOGGLE_PATH"
TOGGLE_PAUSE = "TOGGLE_PAUSE"
RESTART = "RESTART"
QUIT = "QUIT"

MOVES = {CMD_UP: UP, CMD_DOWN: DOWN, CMD_LEFT: LEFT, CMD_RIGHT: RIGHT}
COMMANDS = set(MOVES) | {TOGGLE_AUTOPILOT, TOGGLE_PATH, TOGGLE_PAUSE, RESTART, QUIT}

# ---------- Helpers ----------
def spawn_food(snake: Snake, grid: Grid, rng: random.Random) -> Optional[Cell]:
    """Uniform random free cell by rejection sampling; None when the snake fills the board."""
    if len(set(snake.body)) >= grid.size:
        return None
    while True:
        cell = (rng.randrange(grid.width), rng.randrange(grid.height))
        if cell not in snake:
            return cell

def draw_cell(screen: pygame.Surface, grid: Grid, cell: Cell, color) -> None:
    px, py = grid.to_pixel(cell)
    pygame.draw.rect(screen, color, pygame.Rect(px, py, grid.cell_size, grid.cell_size))

# ---------- State ----------
@dataclass
class GameState:
    grid: Grid
    snake: Snake                   # head at index 0
    direction: Tuple[int, int]
    pending: Tuple[int, int]
    food: Optional[Cell]
    controller: Autopilot
    rng: random.Random
    score: int = 0
    high_score: int = 0
    running: bool = True
    paused: bool = False
    autopilot: bool = False
    show_path: bool = False
    death_reason: Optional[str] = None   # 'wall', 'self' or 'board_full'
    steps: int = 0
    last_move: int = 0             # ms timestamp of last step
    speed_ms: int = CFG.move_every_ms
    headless: bool = False         # step on every call, no timing gate
    cfg: Config = field(default_factory=lambda: CFG)

def new_game_state(
    now_ms: int,
    headless: bool = False,
    cfg: Config = CFG,
    grid: Optional[Grid] = None,
    high_score: int = 0,
    rng: Optional[random.Random] = None,
) -> GameState:
    grid = grid or Grid()
    rng = rng or random.Random(cfg.seed)
    snake = Snake.spawn(grid, cfg.start_length)
    return GameState(
        grid=grid,
        snake=snake,
        direction=RIGHT,
        pending=RIGHT,
        food=spawn_food(snake, grid, rng),
        controller=Autopilot(grid, rng),
        rng=rng,
        high_score=high_score,
        last_move=now_ms,
        speed_ms=cfg.move_every_ms,
        headless=headless,
        cfg=cfg,
    )

def restart(state: GameState, now_ms: int) -> GameState:
    """Fresh episode that keeps the high score, the toggles and the random stream."""
    fresh = new_game_state(
        now_ms,
        headless=state.headless,
        cfg=state.cfg,
        grid=state.grid,
        high_score=state.high_score,
        rng=state.rng,
    )
    fresh.autopilot = state.autopilot
    fresh.show_path = state.show_path
    logger.info("restarted (high score %d)", fresh.high_score)
    return fresh

# ---------- Commands ----------
def apply_command(state: GameState, command: str, now_ms: int = 0) -> GameState:
    """
    Apply one input command. Returns the state to keep using, which is a new
    object only after RESTART. QUIT is left to the caller.
    """
    if command not in COMMANDS:
        raise ValueError(f"Unknown command: {command}")

    if command == TOGGLE_AUTOPILOT:
        state.autopilot = not state.autopilot
        state.controller.invalidate()
    elif command == TOGGLE_PATH:
        state.show_path = not state.show_path
    elif command == TOGGLE_PAUSE:
        state.paused = not state.paused
    elif command == RESTART:
        if not state.running:
            return restart(state, now_ms)
    elif command in MOVES:
        cand = MOVES[command]
        if not state.autopilot and not is_opposite(cand, state.direction):
            state.pending = cand
    return state

# ---------- Update ----------
def step_game(state: GameState, now_ms: int) -> bool:
    """
    Advance the game by one tick.
    - Headless states move on every call; otherwise a move happens every speed_ms.
    - Paused or finished states do not move.
    Returns True if alive, False if game over.
    """
    if not state.running:
        return False
    if state.paused:
        return True
    if (not state.headless) and (now_ms - state.last_move < state.speed_ms):
        return True  # not time to move yet

    # 1) autopilot picks the heading
    if state.autopilot and state.food is not None:
        state.pending = state.controller.next_heading(state.snake, state.food, state.direction)

    # 2) commit direction once per tick and move
    state.direction = state.pending
    head = state.snake.advance(state.direction)
    state.last_move = now_ms
    state.steps += 1

    # 3) collisions
    if not state.grid.in_bounds(head):
        return _game_over(state, "wall")
    if head in state.snake.body[1:]:
        return _game_over(state, "self")

    # 4) food
    if head == state.food:
        state.snake.grow()
        state.score += 1
        state.high_score = max(state.high_score, state.score)
        state.controller.invalidate()
        state.food = spawn_food(state.snake, state.grid, state.rng)
        if state.food is None:
            return _game_over(state, "board_full")
    return True

def _game_over(state: GameState, reason: str) -> bool:
    state.running = False
    state.death_reason = reason
    logger.info("game over (%s) score=%d steps=%d", reason, state.score, state.steps)
    return False

# ---------- Snapshot for the renderer ----------
@dataclass(frozen=True)
class Snapshot:
    body: Tuple[Cell, ...]
    food: Optional[Cell]
    path: Tuple[Cell, ...]
    score: int
    high_score: int
    running: bool
    paused: bool
    autopilot: bool
    show_path: bool

def snapshot(state: GameState) -> Snapshot:
    path: Tuple[Cell, ...] = ()
    if state.show_path and state.autopilot:
        path = tuple(state.controller.path)
    return Snapshot(
        body=tuple(state.snake.body),
        food=state.food,
        path=path,
        score=state.score,
        high_score=state.high_score,
        running=state.running,
        paused=state.paused,
        autopilot=state.autopilot,
        show_path=state.show_path,
    )

# ---------- Input / Draw ----------
KEYMAP = {
    pygame.K_UP: CMD_UP, pygame.K_w: CMD_UP,
    pygame.K_DOWN: CMD_DOWN, pygame.K_s: CMD_DOWN,
    pygame.K_LEFT: CMD_LEFT,
    pygame.K_RIGHT: CMD_RIGHT, pygame.K_d: CMD_RIGHT,
    pygame.K_a: TOGGLE_AUTOPILOT,   # shadows WASD-left
    pygame.K_v: TOGGLE_PATH,
    pygame.K_SPACE: TOGGLE_PAUSE, pygame.K_p: TOGGLE_PAUSE,
    pygame.K_RETURN: RESTART,
    pygame.K_ESCAPE: QUIT, pygame.K_q: QUIT,
}

def handle_input(state: GameState) -> Tuple[GameState, bool]:
    """Process events. Returns the (possibly restarted) state and False to quit."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return state, False
        if event.type == pygame.KEYDOWN:
            command = KEYMAP.get(event.key)
            if command == QUIT:
                return state, False
            if command is not None:
                state = apply_command(state, command, pygame.time.get_ticks())
    return state, True

def draw_game(screen: pygame.Surface, font: pygame.font.Font, state: GameState) -> None:
    snap = snapshot(state)
    grid = state.grid
    screen.fill(BG)
    # grid lines
    for i in range(grid.width + 1):
        pygame.draw.line(screen, GRID, (i * grid.cell_size, 0), (i * grid.cell_size, HEIGHT))
    for j in range(grid.height + 1):
        pygame.draw.line(screen, GRID, (0, j * grid.cell_size), (WIDTH, j * grid.cell_size))
    # planned path
    if snap.path:
        overlay = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        for cell in snap.path:
            draw_cell(overlay, grid, cell, PATH)
        screen.blit(overlay, (0, 0))
    # food
    if snap.food is not None:
        px, py = grid.to_pixel(snap.food)
        pygame.draw.ellipse(screen, RED, pygame.Rect(px, py, grid.cell_size, grid.cell_size))
    # snake
    for i, cell in enumerate(snap.body):
        draw_cell(screen, grid, cell, HEAD if i == 0 else BODY)
    # score & status
    screen.blit(font.render(f"Score: {snap.score}", True, TEXT), (10, 10))
    screen.blit(font.render(f"High Score: {snap.high_score}", True, TEXT), (10, 34))
    mode = "AI CONTROL ON (Press 'A' to toggle)" if snap.autopilot else "MANUAL CONTROL (Press 'A' for AI)"
    screen.blit(font.render(mode, True, TEXT), (WIDTH - 300, 10))
    if snap.show_path:
        screen.blit(font.render("PATH VISIBLE (Press 'V' to toggle)", True, TEXT), (WIDTH - 300, 34))
    if snap.paused:
        draw_paused(screen, font)

def draw_paused(screen: pygame.Surface, font: pygame.font.Font) -> None:
    overlay = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
    overlay.fill((200, 200, 200, 150))
    screen.blit(overlay, (0, 0))

    title = font.render("PAUSED", True, TEXT)
    sub   = font.render("Press SPACE to continue", True, TEXT)
    screen.blit(title, title.get_rect(center=(WIDTH // 2, HEIGHT // 2)))
    screen.blit(sub, sub.get_rect(center=(WIDTH // 2, HEIGHT // 2 + 30)))

def draw_game_over(screen: pygame.Surface, font: pygame.font.Font, score: int, high_score: int) -> None:
    # Dim with translucent overlay
    overlay = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))  # RGBA
    screen.blit(overlay, (0, 0))

    title = font.render("GAME OVER", True, RED)
    sco   = font.render(f"Score: {score}   High Score: {high_score}", True, TEXT)
    sub   = font.render("Press ENTER to restart", True, TEXT)

    screen.blit(title, title.get_rect(center=(WIDTH // 2, HEIGHT // 2 - 16)))
    screen.blit(sco, sco.get_rect(center=(WIDTH // 2, HEIGHT // 2 + 16)))
    screen.blit(sub, sub.get_rect(center=(WIDTH // 2, HEIGHT // 2 + 44)))
