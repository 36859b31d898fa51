# main.py
from dataclasses import replace
from typing import List, Optional
import argparse
import logging
import sys

import pygame # type: ignore

from .config import CFG, Config
from .headless import run_headless
from .loop import GameLoop
from .render import PygameEvents, open_window

logger = logging.getLogger("snake_arcade")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snake-arcade", description="Snake on an 800x600 grid.")
    parser.add_argument("--seed", type=int, default=CFG.seed,
                        help="seed for food placement (default: random)")
    parser.add_argument("--speed-ms", type=int, default=CFG.move_every_ms,
                        help="milliseconds between snake moves")
    parser.add_argument("--length", type=int, default=CFG.initial_length,
                        help="initial snake length")
    parser.add_argument("--font", type=str, default=CFG.font_path,
                        help="TTF font for the score text (default: pygame's font)")
    parser.add_argument("--show-fps", action="store_true",
                        help="start with the FPS counter visible (toggle with F)")
    parser.add_argument("--headless", type=int, metavar="FRAMES", default=None,
                        help="run FRAMES loop iterations without a window and print the result")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    if args.speed_ms <= 0:
        raise ValueError("--speed-ms must be positive")
    return replace(
        CFG,
        seed=args.seed,
        move_every_ms=args.speed_ms,
        initial_length=args.length,
        font_path=args.font,
        show_fps=args.show_fps,
    )


def play(cfg: Config) -> None:
    pygame.init()
    try:
        renderer = open_window(cfg)
        loop = GameLoop(pygame.time.get_ticks, PygameEvents(), renderer, cfg)
        state = loop.run()
        logger.info("quit with score %d", state.score)
    finally:
        pygame.quit()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = config_from_args(args)
        if args.headless is not None:
            state = run_headless(args.headless, cfg=cfg)
            print(f"[HEADLESS] frames={args.headless}, state={state.phase.value}, "
                  f"length={len(state.body)}, score={state.score}")
            return 0
        play(cfg)
    except ValueError as e:
        logger.error("invalid settings: %s", e)
        return 2
    except (pygame.error, OSError) as e:
        # window, renderer or font could not be created
        logger.error("could not start the game: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
