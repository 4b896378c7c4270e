"""Board evaluators used at the leaves of the search."""

import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from minimax.board import Board

# Anything mapping a board snapshot to a real score is an evaluator.
EvaluatorFn = Callable[[Board], float]


@dataclass(frozen=True)
class HeuristicWeights:
    corner_multiplier: float = 1.25
    edge_multiplier: float = 1.10
    interior_multiplier: float = 1.0
    max_cell_bonus: float = 1.0
    occupancy_penalty: float = 1.0

    def __post_init__(self):
        for name in ("corner_multiplier", "edge_multiplier", "interior_multiplier", "occupancy_penalty"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")


class Evaluator:
    """Base class for named evaluators"""

    def __init__(self, name: str):
        self.name = name

    def __call__(self, board: Board) -> float:
        raise NotImplementedError("Evaluator must be implemented")

    def __str__(self) -> str:
        return f"Evaluator({self.name})"


class CornerHeuristic(Evaluator):
    """
    Position-weighted heuristic favouring big tiles in corners.

    Each occupied cell contributes ``2 ** (m * exponent)`` where ``m`` is the
    multiplier of its position (corner, edge or interior). The largest such
    contribution is added once more as a bonus and the squared number of
    occupied cells is subtracted, so sparse boards score higher.
    """

    def __init__(self, weights: Optional[HeuristicWeights] = None):
        super().__init__("heuristic")
        self.weights = weights or HeuristicWeights()
        self._multipliers: Dict[Tuple[int, int], np.ndarray] = {}

    def multipliers(self, height: int, width: int) -> np.ndarray:
        """Per-position multiplier matrix, cached per board shape."""
        key = (height, width)
        if key not in self._multipliers:
            w = self.weights
            m = np.full((height, width), w.interior_multiplier, dtype=np.float64)
            m[0, :] = w.edge_multiplier
            m[-1, :] = w.edge_multiplier
            m[:, 0] = w.edge_multiplier
            m[:, -1] = w.edge_multiplier
            for y in (0, height - 1):
                for x in (0, width - 1):
                    m[y, x] = w.corner_multiplier
            self._multipliers[key] = m
        return self._multipliers[key]

    def __call__(self, board: Board) -> float:
        exponents = board.exponents()
        occupied = exponents >= 0
        cells = int(np.count_nonzero(occupied))
        if cells == 0:
            return 0.0

        m = self.multipliers(board.height, board.width)
        weighted = np.power(2.0, m[occupied] * exponents[occupied])
        score = float(weighted.sum())
        score += self.weights.max_cell_bonus * float(weighted.max())
        score -= self.weights.occupancy_penalty * cells ** 2
        return score


class ConstantEvaluator(Evaluator):
    """Scores every board the same; the search then decides purely by move order."""

    def __init__(self, value: float = 0.0):
        super().__init__("constant")
        self.value = float(value)

    def __call__(self, board: Board) -> float:
        return self.value


class RandomEvaluator(Evaluator):
    """Uniform noise in [low, high); a baseline probe for benchmarking."""

    def __init__(self, low: float = -10.0, high: float = 10.0,
                 rng: Optional[random.Random] = None, seed: Optional[int] = None):
        super().__init__("random")
        if high < low:
            raise ValueError(f"Empty range [{low}, {high})")
        self.low = low
        self.high = high
        self.rng = rng or random.Random(seed)

    def __call__(self, board: Board) -> float:
        return self.rng.uniform(self.low, self.high)


_default_heuristic = CornerHeuristic()


def default_evaluator(board: Board) -> float:
    return _default_heuristic(board)


EVALUATORS = {
    "heuristic": CornerHeuristic,
    "constant": ConstantEvaluator,
    "random": RandomEvaluator,
}


def get_evaluator(name: str, **kwargs) -> Evaluator:
    """Get an evaluator by name

    Args:
        name: One of ``heuristic``, ``constant`` or ``random``
        **kwargs: Passed to the evaluator constructor

    Returns:
        Evaluator: The evaluator instance
    """
    if name not in EVALUATORS:
        raise ValueError(f"Unknown evaluator: {name}. Choose from {sorted(EVALUATORS)}")
    return EVALUATORS[name](**kwargs)
