# Minimax player for 2048
from .board import Board, Cell, Direction, SEARCH_ORDER
from .evaluator import (
    EvaluatorFn,
    Evaluator,
    HeuristicWeights,
    CornerHeuristic,
    ConstantEvaluator,
    RandomEvaluator,
    default_evaluator,
    get_evaluator,
)
from .tree import SearchNode, DecisionNode, ChanceNode, SearchTree, build_search_tree
from .search import SearchOutcome, SearchResult, Searcher, search, exhaustive_search
from .parallel import parallel_search
from .game import Game, apply_move, insert_random_tile, play_game

__all__ = [
    "Board",
    "Cell",
    "Direction",
    "SEARCH_ORDER",

    "EvaluatorFn",
    "Evaluator",
    "HeuristicWeights",
    "CornerHeuristic",
    "ConstantEvaluator",
    "RandomEvaluator",
    "default_evaluator",
    "get_evaluator",

    "SearchNode",
    "DecisionNode",
    "ChanceNode",
    "SearchTree",
    "build_search_tree",

    "SearchOutcome",
    "SearchResult",
    "Searcher",
    "search",
    "exhaustive_search",
    "parallel_search",

    "Game",
    "apply_move",
    "insert_random_tile",
    "play_game",
]
