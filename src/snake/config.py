from dataclasses import dataclass

# ----- Window & grid -----
WIDTH, HEIGHT = 600, 600
CELL_SIZE = 20
GRID_W, GRID_H = WIDTH // CELL_SIZE, HEIGHT // CELL_SIZE

# ----- Colors -----
BG    = (0, 0, 0)
GRID  = (20, 20, 20)
HEAD  = (0, 200, 0)
BODY  = (0, 150, 0)
RED   = (255, 0, 0)
PATH  = (100, 200, 255, 100)   # RGBA, drawn translucent
TEXT  = (255, 255, 255)

# ----- Directions (dx, dy); rows grow downward -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)
HEADINGS = (UP, RIGHT, DOWN, LEFT)
HEADING_NAMES = {UP: "UP", DOWN: "DOWN", LEFT: "LEFT", RIGHT: "RIGHT"}

# ----- Tunables -----
@dataclass
class Config:
    seed: int = 0
    move_every_ms: int = 100
    start_length: int = 6
    max_steps: int = 10_000   # headless episodes stop here

CFG = Config(seed=0)
