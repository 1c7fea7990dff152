from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, Optional

import pygame

from falling_blocks.game import (
    EVENT_BOARD_CHANGED,
    EVENT_SESSION_ENDED,
    GameConfig,
    GameSession,
    ManualScheduler,
)
from .renderer import Renderer

logger = logging.getLogger(__name__)


def build_key_map(session: GameSession) -> Dict[int, Callable[[], bool]]:
    return {
        pygame.K_LEFT: session.move_left,
        pygame.K_RIGHT: session.move_right,
        pygame.K_UP: session.rotate,
        pygame.K_DOWN: session.soft_drop,
        pygame.K_SPACE: session.hard_drop,
    }


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def run(argv: Optional[list] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s - %(levelname)s - %(message)s")

    scheduler = ManualScheduler()
    session = GameSession(GameConfig(random_seed=args.seed), scheduler=scheduler)
    renderer = Renderer(cell_size=args.cell_size)

    dirty = True
    last_final_score: Optional[int] = None

    def on_board_changed(sender, **kwargs) -> None:
        nonlocal dirty
        dirty = True

    def on_session_ended(sender, score: int, lines: int, **kwargs) -> None:
        nonlocal last_final_score
        last_final_score = score
        logger.info("Game over! Final score: %d (%d lines)", score, lines)
        pygame.display.set_caption(f"Falling Blocks - last score {score}")

    session.bus.subscribe(EVENT_BOARD_CHANGED, on_board_changed)
    session.bus.subscribe(EVENT_SESSION_ENDED, on_session_ended)
    key_map = build_key_map(session)

    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.window_size(session.board.rows, session.board.cols))
        pygame.display.set_caption("Falling Blocks")
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        session.start_new_session()
                    else:
                        command = key_map.get(event.key)
                        if command is not None:
                            command()

            # Gravity
            scheduler.advance(clock.tick(args.fps))

            if dirty:
                renderer.draw(screen, session, last_final_score)
                dirty = False
    finally:
        session.stop()
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
