# main.py
import logging
import pygame # type: ignore
from .config import WIDTH, HEIGHT
from .game import new_game_state, handle_input, step_game, draw_game, draw_game_over

def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    font = pygame.font.SysFont("Arial", 20, bold=True)
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Snake Game with AI")
    clock = pygame.time.Clock()

    state = new_game_state(pygame.time.get_ticks())
    running = True

    while running:
        # 1) input (toggles, moves, restart)
        state, running = handle_input(state)
        if not running:
            break

        # 2) update
        alive = step_game(state, pygame.time.get_ticks())

        # 3) render after the step has completed
        draw_game(screen, font, state)
        if not alive:
            draw_game_over(screen, font, state.score, state.high_score)
        pygame.display.flip()
        clock.tick(60)  # high FPS; movement gated inside step_game

    pygame.quit()

if __name__ == "__main__":
    main()
