# src/autopilot/run.py
from __future__ import annotations
import argparse
import csv
import logging
import os
import random
from typing import List, Tuple

import numpy as np  # type: ignore

from src.snake.config import Config
from src.snake.game import GameState, new_game_state, step_game
from src.snake.grid import Grid
from src.autopilot.policies import POLICIES

logger = logging.getLogger(__name__)


# --------------------------
# Episode loop
# --------------------------
def run_episode(state: GameState, policy: str) -> Tuple[int, int, int, float]:
    """
    Play one headless episode with a heading policy:
    - autopilot (A* with safety fallback)
    - greedy
    - random

    Returns:
        steps: number of ticks taken
        score: food eaten
        length: final snake length
        fill: fraction of the board covered by the snake at the end
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy: {policy}")
    choose = POLICIES[policy]

    while state.running and state.steps < state.cfg.max_steps:
        state.pending = choose(state)
        step_game(state, 0)

    fill = float(state.grid.occupancy(state.snake.body).mean())
    return state.steps, state.score, len(state.snake), fill


def run(policy: str, episodes: int, seed: int, grid: Grid, cfg: Config) -> List[Tuple]:
    rng = random.Random(seed)
    rows = [("ep", "steps", "score", "length", "fill", "end")]
    print("ep,steps,score,length,fill,end")
    high_score = 0
    for ep in range(1, episodes + 1):
        state = new_game_state(0, headless=True, cfg=cfg, grid=grid, high_score=high_score, rng=rng)
        steps, score, length, fill = run_episode(state, policy)
        high_score = state.high_score
        end = state.death_reason or "max_steps"
        logger.info("episode %d ended (%s) after %d steps", ep, end, steps)
        print(f"{ep},{steps},{score},{length},{fill:.3f},{end}")
        rows.append((ep, steps, score, length, round(fill, 6), end))
    return rows


def summarize(rows: List[Tuple]) -> dict:
    scores = np.array([r[2] for r in rows[1:]], dtype=np.int64)
    if scores.size == 0:
        return {"episodes": 0, "mean": 0.0, "median": 0.0, "max": 0}
    return {
        "episodes": int(scores.size),
        "mean": float(np.mean(scores)),
        "median": float(np.median(scores)),
        "max": int(np.max(scores)),
    }


# --------------------------
# Main
# --------------------------
def run_cli(argv=None) -> dict:
    """Parse arguments, play the episodes, write the CSV and return the score summary."""
    parser = argparse.ArgumentParser(description="Play headless snake episodes and log the results.")
    parser.add_argument("--episodes", type=int, default=20)
    parser.add_argument(
        "--policy",
        type=str,
        default="autopilot",
        choices=sorted(POLICIES),
        help="Which heading policy drives the snake",
    )
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--width", type=int, default=Grid().width, help="board width in cells")
    parser.add_argument("--height", type=int, default=Grid().height, help="board height in cells")
    parser.add_argument("--start-length", type=int, default=Config().start_length)
    parser.add_argument("--max-steps", type=int, default=Config().max_steps)
    parser.add_argument(
        "--outdir",
        type=str,
        default="data/runs",
        help="CSV is saved here",
    )
    parser.add_argument("--log-level", type=str, default="WARNING")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    cfg = Config(seed=args.seed, start_length=args.start_length, max_steps=args.max_steps)
    grid = Grid(width=args.width, height=args.height)

    os.makedirs(args.outdir, exist_ok=True)
    out_csv = os.path.join(args.outdir, f"run_{args.policy}.csv")

    print(f"Running {args.episodes} episode(s) with policy={args.policy} on {grid.width}x{grid.height}")
    rows = run(args.policy, args.episodes, args.seed, grid, cfg)

    with open(out_csv, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerows(rows)

    stats = summarize(rows)
    print(f"\nscore mean={stats['mean']:.2f} median={stats['median']:.1f} max={stats['max']}")
    print(f"Saved results → {out_csv}")
    return stats


def main(argv=None):
    run_cli(argv)


if __name__ == "__main__":
    main()
