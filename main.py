#!/usr/bin/env python3
"""
Play 2048 with the minimax search.

Example usage:
    python main.py play --depth 4 --seed 7
    python main.py bench --games 20 --depth 3 --save-stats
    python main.py rand --games 100
"""

import logging
import random
import sys
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from minimax.config import parse_args
from minimax.evaluator import HeuristicWeights, get_evaluator
from minimax.game import Game, play_game
from minimax.stats import analyze_results, print_statistics, save_statistics

logger = logging.getLogger("minimax")


def setup_logging(config: Dict[str, Any]) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config["log_file"]:
        handlers.append(logging.FileHandler(config["log_file"]))
    logging.basicConfig(
        level=logging.DEBUG if config["verbose"] else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


def make_evaluator(config: Dict[str, Any], rng: random.Random):
    name = config["search"]["evaluator"]
    if name == "heuristic":
        return get_evaluator(name, weights=HeuristicWeights(**config["heuristic"]))
    if name == "random":
        return get_evaluator(name, rng=rng)
    return get_evaluator(name)


def new_game(config: Dict[str, Any], rng: random.Random) -> Game:
    game_cfg = config["game"]
    return Game(
        width=game_cfg["width"],
        height=game_cfg["height"],
        score_target=game_cfg["score_target"],
        initial_tiles=game_cfg["initial_tiles"],
        rng=rng,
    )


def run_games(config: Dict[str, Any], num_games: int, render: bool = False) -> List[Dict[str, Any]]:
    rng = random.Random(config["seed"])
    evaluator = make_evaluator(config, rng)
    search_cfg = config["search"]

    results = []
    games = range(num_games) if render else tqdm(range(num_games), desc="games")
    for _ in games:
        game = new_game(config, rng)
        if render:
            print(game.board.render_ascii())
        results.append(play_game(
            game,
            depth=search_cfg["depth"],
            evaluator=evaluator,
            eager=search_cfg["eager"],
            workers=search_cfg["workers"],
            max_moves=config["game"]["max_moves"],
            render=render,
        ))
    return results


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = parse_args(argv)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    setup_logging(config)
    logger.debug(f"Config: {config}")

    if config["mode"] == "play":
        result = run_games(config, 1, render=True)[0]
        outcome = "won" if result["won"] else "lost"
        print(f"\nGame {outcome} with a score of {result['score']} "
              f"(max tile {result['max_tile']}, {result['moves']} moves)")
        return 0

    print(f"Playing {config['games']} games with the {config['search']['evaluator']} evaluator "
          f"at depth {config['search']['depth']}...")
    results = run_games(config, config["games"])
    stats = analyze_results(results, win_exponent=config["game"]["score_target"])
    print_statistics(stats)

    if config["save_stats"]:
        path = save_statistics(stats, config, config["output_dir"])
        print(f"\nStatistics saved to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
