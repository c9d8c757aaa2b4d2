from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from blockfall.game import GameConfig, GameEngine, Key
from .renderer import Renderer


logger = logging.getLogger(__name__)


PYGAME_KEYS: Dict[int, Key] = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_UP: Key.UP,
    pygame.K_SPACE: Key.SPACE,
}


def key_for(code: int) -> Optional[Key]:
    return PYGAME_KEYS.get(code)


def run(game: Optional[GameEngine] = None, cell_size: int = 30, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = game or GameEngine()
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("blockfall")

        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        key = key_for(event.key)
                        if key is not None:
                            game.handle_key(key)

            # Gravity: feed the time since the previous frame
            game.advance(clock.tick(fps))

            renderer.draw(screen, game)
        logger.info("Window closed with score %d", game.score)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    defaults = GameConfig()
    p = argparse.ArgumentParser(prog="blockfall", description="Play blockfall in a pygame window.")
    p.add_argument("--width", type=int, default=defaults.width)
    p.add_argument("--height", type=int, default=defaults.height)
    p.add_argument("--fall-interval", type=float, default=defaults.fall_interval_ms, help="gravity interval in ms")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--catch-up", action="store_true", help="apply every elapsed gravity step after a stall")
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        width=args.width,
        height=args.height,
        fall_interval_ms=args.fall_interval,
        random_seed=args.seed,
        catch_up=args.catch_up,
    )


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        game = GameEngine(config_from_args(args))
    except ValueError as e:
        parser.error(str(e))
    run(game, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
