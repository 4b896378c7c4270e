"""
parallel.py

Fan the root moves of a search out over worker threads.

The first root move is searched serially to establish alpha; the remaining
moves are then searched concurrently, each starting from that alpha only.
Results are merged in enumeration order, so the chosen move and score match
the serial alpha-beta search.
"""

import concurrent.futures
import logging
from typing import List, Optional, Tuple

from minimax.evaluator import EvaluatorFn
from minimax.search import Bound, Searcher, SearchOutcome, SearchResult, search
from minimax.tree import SearchNode, SearchTree

logger = logging.getLogger(__name__)


def _search_subtree(node: SearchNode, evaluator: Optional[EvaluatorFn], alpha: Bound) -> Tuple[Optional[float], Searcher]:
    searcher = Searcher(evaluator, prune=True)
    return searcher.value(node, alpha, None), searcher


def parallel_search(tree: SearchTree, evaluator: Optional[EvaluatorFn] = None,
                    max_workers: Optional[int] = None) -> SearchResult:
    children = tree.root.children
    if len(children) < 2:
        return search(tree, evaluator)

    first_value, first = _search_subtree(children[0], evaluator, None)
    alpha = first_value

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(_search_subtree, child, evaluator, alpha)
            for child in children[1:]
        ]
        # keep enumeration order for tie-breaking
        outcomes: List[Tuple[Optional[float], Searcher]] = [future.result() for future in futures]

    searchers = [first] + [s for _, s in outcomes]
    values = [first_value] + [v for v, _ in outcomes]

    best: Optional[SearchNode] = None
    best_value: Optional[float] = None
    for child, value in zip(children, values):
        if value is None:
            continue
        if best_value is None or value > best_value:
            best, best_value = child, value

    total = Searcher(evaluator)
    total.nodes = 1 + sum(s.nodes for s in searchers)
    total.leaves = sum(s.leaves for s in searchers)
    total.cutoffs = sum(s.cutoffs for s in searchers)
    total.failures = sum(s.failures for s in searchers)

    if best is None:
        return total.result(None, None, SearchOutcome.EVALUATION_FAILED)

    logger.debug(f"Parallel search over {len(children)} moves picked {best.direction.name}")
    return total.result(best.direction, best_value, SearchOutcome.BEST_MOVE)
