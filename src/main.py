"""Entry point: run the grid core headlessly and log what happens."""

from __future__ import annotations

import logging
import random

from serpent_grid.config import FPS, GameConfig
from serpent_grid.runner import SessionRunner, autoplay

DEMO_SECONDS = 60


def main() -> None:
    config = GameConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.info("----- Starting headless run -----")
    runner = SessionRunner(config)
    autoplay(runner, FPS * DEMO_SECONDS, rng=random.Random(config.seed))
    logging.info(
        "Finished: %d games, high score %d, current score %d",
        runner.games_played,
        runner.high_score,
        runner.session.score,
    )


if __name__ == "__main__":
    main()
