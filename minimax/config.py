import argparse
from typing import Any, Dict, List, Optional

from minimax.evaluator import EVALUATORS, HeuristicWeights

DEFAULT_DEPTH = 4
MODES = ("play", "bench", "rand")


def build_parser() -> argparse.ArgumentParser:
    defaults = HeuristicWeights()
    parser = argparse.ArgumentParser(description="2048 minimax player and benchmark")

    parser.add_argument("mode", nargs="?", choices=MODES, default="bench",
                        help="play one rendered game, bench N games, or bench with the random evaluator")

    # Game settings
    parser.add_argument("--width", type=int, default=4, help="Board width")
    parser.add_argument("--height", type=int, default=4, help="Board height")
    parser.add_argument("--score-target", type=int, default=11,
                        help="Tile exponent that wins the game (11 = 2048)")
    parser.add_argument("--initial-tiles", type=int, default=2, help="Tiles placed on a new board")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    parser.add_argument("--max-moves", type=int, default=None, help="Stop a game after this many moves")

    # Search settings
    parser.add_argument("--depth", type=int, default=DEFAULT_DEPTH, help="Search ply limit")
    parser.add_argument("--eager", action="store_true", help="Build the whole search tree up front")
    parser.add_argument("--workers", type=int, default=0,
                        help="Threads for root move fan-out (0 = serial search)")
    parser.add_argument("--evaluator", type=str, default="heuristic", choices=sorted(EVALUATORS),
                        help="Leaf evaluator")

    # Heuristic weights
    parser.add_argument("--corner-multiplier", type=float, default=defaults.corner_multiplier)
    parser.add_argument("--edge-multiplier", type=float, default=defaults.edge_multiplier)
    parser.add_argument("--interior-multiplier", type=float, default=defaults.interior_multiplier)
    parser.add_argument("--max-cell-bonus", type=float, default=defaults.max_cell_bonus)
    parser.add_argument("--occupancy-penalty", type=float, default=defaults.occupancy_penalty)

    # Benchmark / output settings
    parser.add_argument("--games", type=int, default=10, help="Games to play in bench mode")
    parser.add_argument("--save-stats", action="store_true", help="Save statistics to a JSON file")
    parser.add_argument("--output-dir", type=str, default="stats", help="Directory to save statistics")
    parser.add_argument("--log-file", type=str, default=None, help="Also write logs to this file")
    parser.add_argument("--verbose", action="store_true", help="Log search details")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> Dict[str, Any]:
    args = build_parser().parse_args(argv)

    if args.depth < 1:
        raise ValueError("--depth must be at least 1")
    if args.games <= 0:
        raise ValueError("--games must be positive")

    evaluator = "random" if args.mode == "rand" else args.evaluator

    config = {
        "mode": args.mode,
        "games": args.games,
        "seed": args.seed,

        "game": {
            "width": args.width,
            "height": args.height,
            "score_target": args.score_target,
            "initial_tiles": args.initial_tiles,
            "max_moves": args.max_moves,
        },

        "search": {
            "depth": args.depth,
            "eager": args.eager,
            "workers": args.workers,
            "evaluator": evaluator,
        },

        "heuristic": {
            "corner_multiplier": args.corner_multiplier,
            "edge_multiplier": args.edge_multiplier,
            "interior_multiplier": args.interior_multiplier,
            "max_cell_bonus": args.max_cell_bonus,
            "occupancy_penalty": args.occupancy_penalty,
        },

        # Output settings
        "save_stats": args.save_stats,
        "output_dir": args.output_dir,
        "log_file": args.log_file,
        "verbose": args.verbose,
    }

    return config
