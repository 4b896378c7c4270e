"""
Statistics for batches of minimax games
"""

import json
import os
from datetime import datetime
from typing import Any, Dict, List

import numpy as np
from tabulate import tabulate


class NumpyJSONEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        return super(NumpyJSONEncoder, self).default(obj)


def analyze_results(results: List[Dict[str, Any]], win_exponent: int = 11) -> Dict[str, Any]:
    """Summarise game results: average score and moves, tile reach rates, win rate"""
    if not results:
        raise ValueError("No game results to analyze")

    scores = np.array([r["score"] for r in results], dtype=np.float64)
    moves = np.array([r["moves"] for r in results], dtype=np.float64)
    max_exponents = [-1 if r["max_exponent"] is None else r["max_exponent"] for r in results]

    # games reaching at least 2 ** e, from 2 ** 1 up to the target or the best tile seen
    tile_stats = {}
    top = max(win_exponent, max(max_exponents))
    for exponent in range(1, top + 1):
        count = sum(1 for e in max_exponents if e >= exponent)
        tile_stats[1 << exponent] = (count, count / len(results) * 100)

    wins = sum(1 for e in max_exponents if e >= win_exponent)

    return {
        "tile_stats": tile_stats,
        "avg_score": float(scores.mean()),
        "max_score": float(scores.max()),
        "avg_moves": float(moves.mean()),
        "num_games": len(results),
        "win_rate": wins / len(results) * 100,
        "win_tile": 1 << win_exponent,
        "stop_reasons": {
            reason: sum(1 for r in results if r["stop_reason"] == reason)
            for reason in sorted({r["stop_reason"] for r in results})
        },
    }


def format_statistics(stats: Dict[str, Any]) -> str:
    table_data = []
    for tile_value, (count, percentage) in sorted(stats["tile_stats"].items()):
        table_data.append([
            f"{tile_value}",
            f"{count}/{stats['num_games']}",
            f"{percentage:.1f}%",
        ])

    lines = [
        f"Statistics for {stats['num_games']} games:",
        f"Average score: {stats['avg_score']:.1f} (best {stats['max_score']:.0f})",
        f"Average moves: {stats['avg_moves']:.1f}",
        f"Win rate (>= {stats['win_tile']} tile): {stats['win_rate']:.1f}%",
        "",
        "Max Tile Achievement Rates:",
        tabulate(table_data, headers=["Tile", "Count", "Percentage"], tablefmt="grid"),
    ]
    return "\n".join(lines)


def print_statistics(stats: Dict[str, Any]) -> None:
    print("\n" + format_statistics(stats))


def save_statistics(stats: Dict[str, Any], config: Dict[str, Any], output_dir: str = "stats") -> str:
    """Save statistics and the run configuration to a timestamped JSON file"""
    os.makedirs(output_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"stats_{config['search']['evaluator']}_d{config['search']['depth']}_{stats['num_games']}games_{timestamp}.json"
    filepath = os.path.join(output_dir, filename)

    json_stats = dict(stats)
    json_stats["tile_stats"] = {
        str(tile_value): {"count": count, "percentage": percentage}
        for tile_value, (count, percentage) in stats["tile_stats"].items()
    }
    json_stats["config"] = config
    json_stats["date"] = timestamp

    with open(filepath, "w") as f:
        json.dump(json_stats, f, indent=2, cls=NumpyJSONEncoder)

    return filepath
