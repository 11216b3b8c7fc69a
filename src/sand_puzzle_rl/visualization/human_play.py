from __future__ import annotations

import argparse
import logging
from typing import Dict

import pygame

from sand_puzzle_rl.game import Action, GameConfig, GameMode, SandPuzzleGame
from .effects import ParticleSystem
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
}

KEY_TO_MODE: Dict[int, GameMode] = {
    pygame.K_1: GameMode.CLASSIC,
    pygame.K_2: GameMode.ARCADE,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling-sand puzzle")
    p.add_argument("--mode", choices=[m.value for m in GameMode], default=GameMode.CLASSIC.value)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=4)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", default="WARNING")
    return p


def run() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = SandPuzzleGame(GameConfig(random_seed=args.seed))
        renderer = Renderer(cell_size=args.cell_size)
        particles = ParticleSystem(cell_size=args.cell_size)
        game.add_listener(particles)

        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Sand Puzzle - Human Play")
        game.start(args.mode)

        running = True
        while running:
            # Input is queued and applied at the start of the next tick
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        particles.clear()
                        game.restart()
                    elif event.key in KEY_TO_MODE and game.game_over:
                        particles.clear()
                        game.start(KEY_TO_MODE[event.key])
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.queue_action(action)

            game.tick()
            particles.update()

            renderer.draw(screen, game.render_state())
            particles.draw(screen, renderer.margin, renderer.margin)
            pygame.display.flip()
            clock.tick(args.fps)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
