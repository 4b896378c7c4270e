"""
search.py

Minimax over a SearchTree, with or without alpha-beta pruning.

DecisionNodes take the maximum over their children and raise alpha,
ChanceNodes take the minimum and lower beta. Bounds start undefined (None)
at the root and are passed down through the recursion. Comparisons are
strict, so among equal siblings the first in enumeration order wins.
"""

import logging
import math
from enum import Enum
from typing import NamedTuple, Optional, Tuple

from minimax.board import Direction
from minimax.evaluator import EvaluatorFn, default_evaluator
from minimax.tree import SearchNode, SearchTree

logger = logging.getLogger(__name__)

Bound = Optional[float]


class SearchOutcome(Enum):
    BEST_MOVE = "best_move"
    NO_LEGAL_MOVE = "no_legal_move"
    EVALUATION_FAILED = "evaluation_failed"


class SearchResult(NamedTuple):
    direction: Optional[Direction]
    score: Optional[float]
    outcome: SearchOutcome
    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0
    failures: int = 0

    @property
    def ok(self) -> bool:
        return self.outcome == SearchOutcome.BEST_MOVE


class Searcher:
    """Single-threaded depth-first minimax. Keeps per-run counters."""

    def __init__(self, evaluator: Optional[EvaluatorFn] = None, prune: bool = True) -> None:
        self.evaluator: EvaluatorFn = evaluator or default_evaluator
        self.prune = prune
        self.nodes = 0
        self.leaves = 0
        self.cutoffs = 0
        self.failures = 0

    def score_leaf(self, node: SearchNode) -> Optional[float]:
        """Evaluator score, or None when the evaluator fails on this board."""
        self.leaves += 1
        try:
            score = float(self.evaluator(node.board))
        except Exception as e:
            self.failures += 1
            logger.warning(f"Evaluator failed at ply {node.ply}, excluding subtree: {e!r}")
            return None
        if math.isnan(score):
            self.failures += 1
            logger.warning(f"Evaluator returned NaN at ply {node.ply}, excluding subtree")
            return None
        return score

    def best_child(self, node: SearchNode, alpha: Bound, beta: Bound) -> Tuple[Optional[SearchNode], Optional[float]]:
        """
        Pick the child the node's role prefers.

        Returns (child, value); child is None for a leaf, value is None when
        nothing below the node could be scored.
        """
        self.nodes += 1
        children = node.children
        if not children:
            return None, self.score_leaf(node)

        best: Optional[SearchNode] = None
        best_value: Optional[float] = None
        for child in children:
            value = self.value(child, alpha, beta)
            if value is None:
                continue
            if node.maximizing:
                if best_value is None or value > best_value:
                    best, best_value = child, value
                if alpha is None or value > alpha:
                    alpha = value
            else:
                if best_value is None or value < best_value:
                    best, best_value = child, value
                if beta is None or value < beta:
                    beta = value
            if self.prune and alpha is not None and beta is not None and alpha > beta:
                self.cutoffs += 1
                break
        return best, best_value

    def value(self, node: SearchNode, alpha: Bound = None, beta: Bound = None) -> Optional[float]:
        return self.best_child(node, alpha, beta)[1]

    def run(self, tree: SearchTree) -> SearchResult:
        root = tree.root
        if not root.children:
            self.nodes += 1
            score = self.score_leaf(root)
            logger.debug("No legal move from root")
            return self.result(None, score, SearchOutcome.NO_LEGAL_MOVE)

        child, score = self.best_child(root, None, None)
        if child is None:
            logger.debug("Every root move failed to evaluate")
            return self.result(None, None, SearchOutcome.EVALUATION_FAILED)

        logger.debug(
            f"Search picked {child.direction.name} score={score:.2f} "
            f"(nodes={self.nodes}, leaves={self.leaves}, cutoffs={self.cutoffs})"
        )
        return self.result(child.direction, score, SearchOutcome.BEST_MOVE)

    def result(self, direction: Optional[Direction], score: Optional[float], outcome: SearchOutcome) -> SearchResult:
        return SearchResult(
            direction=direction,
            score=score,
            outcome=outcome,
            nodes=self.nodes,
            leaves=self.leaves,
            cutoffs=self.cutoffs,
            failures=self.failures,
        )


def search(tree: SearchTree, evaluator: Optional[EvaluatorFn] = None) -> SearchResult:
    """Alpha-beta search; ``evaluator`` defaults to the corner heuristic."""
    return Searcher(evaluator, prune=True).run(tree)


def exhaustive_search(tree: SearchTree, evaluator: Optional[EvaluatorFn] = None) -> SearchResult:
    """Plain minimax without pruning. Same result as ``search``, more nodes."""
    return Searcher(evaluator, prune=False).run(tree)
