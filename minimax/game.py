"""
game.py

Live game state and the driver loop that plays it with the search:
read board -> build tree -> search -> apply move -> insert tile -> repeat.
"""

import logging
import random
from typing import Any, Dict, Optional

from minimax.board import Board, Direction
from minimax.evaluator import EvaluatorFn
from minimax.parallel import parallel_search
from minimax.search import SearchOutcome, search
from minimax.tree import build_search_tree

logger = logging.getLogger(__name__)

# 2 ** 11 = 2048
DEFAULT_SCORE_TARGET = 11


def apply_move(board: Board, direction: Direction) -> bool:
    """Shift and merge ``board`` in place. Returns whether anything moved."""
    return board.shift_and_merge(direction)


def insert_random_tile(board: Board, direction: Direction, rng: Optional[random.Random] = None) -> bool:
    """Spawn a tile on the edge opposite ``direction``. False if that edge is full."""
    return board.insert_random_tile(direction, rng)


class Game:
    board: Board
    score_target: int
    moves: int

    def __init__(self,
                 width: int = 4,
                 height: int = 4,
                 score_target: int = DEFAULT_SCORE_TARGET,
                 initial_tiles: int = 2,
                 rng: Optional[random.Random] = None,
                 seed: Optional[int] = None):
        if not 0 <= initial_tiles <= width * height:
            raise ValueError(f"initial_tiles must be within 0..{width * height}")
        self.width = width
        self.height = height
        self.score_target = score_target
        self.initial_tiles = initial_tiles
        self.rng = rng or random.Random(seed)
        self.reset()

    def reset(self) -> None:
        self.board = Board(self.width, self.height)
        self.moves = 0
        empty = list(self.board.data)
        for cell in self.rng.sample(empty, self.initial_tiles):
            cell.set_exponent(0)

    def get_board(self) -> Board:
        return self.board

    def step(self, direction: Direction) -> bool:
        self.moves += 1
        return self.board.step(direction, self.rng)

    def get_score(self) -> int:
        cells = 0
        score = 0
        for cell in self.board.data:
            if cell.is_set():
                cells += 1
                score += cell.value
        return score - cells + 1

    def has_won(self) -> bool:
        return any(cell.exponent == self.score_target for cell in self.board.data)

    def is_over(self) -> bool:
        return self.board.is_stuck()

    def render(self) -> str:
        return self.board.render()


def play_game(game: Game,
              depth: int,
              evaluator: Optional[EvaluatorFn] = None,
              eager: bool = False,
              workers: int = 0,
              max_moves: Optional[int] = None,
              render: bool = False) -> Dict[str, Any]:
    """
    Play ``game`` to the end with the minimax search choosing every move.

    Args:
        game: Game to play, modified in place
        depth: Search ply limit per move
        evaluator: Leaf evaluator, default heuristic when None
        eager: Build each search tree eagerly
        workers: Thread count for root fan-out; 0 searches serially
        max_moves: Optional cap on the number of moves
        render: Print the board after every move

    Returns:
        Dict with score, max tile, move count, win flag and stop reason
    """
    stop_reason = "max_moves"
    while max_moves is None or game.moves < max_moves:
        if game.has_won():
            stop_reason = "won"
            break

        tree = build_search_tree(game.board, depth, eager=eager)
        if workers > 0:
            result = parallel_search(tree, evaluator, max_workers=workers)
        else:
            result = search(tree, evaluator)

        if result.outcome == SearchOutcome.NO_LEGAL_MOVE:
            stop_reason = "no_legal_move"
            break
        if result.outcome == SearchOutcome.EVALUATION_FAILED:
            stop_reason = "evaluation_failed"
            break

        game.moves += 1
        if not apply_move(game.board, result.direction):
            stop_reason = "move_failed"
            break
        if not insert_random_tile(game.board, result.direction, game.rng):
            stop_reason = "edge_full"
            break

        if render:
            print(f"\nMove {game.moves}: {result.direction.name}  score={game.get_score()}")
            print(game.board.render_ascii())

    max_exponent = game.board.max_exponent()
    stats = {
        "score": game.get_score(),
        "max_exponent": max_exponent,
        "max_tile": 0 if max_exponent is None else 1 << max_exponent,
        "moves": game.moves,
        "won": game.has_won(),
        "stop_reason": stop_reason,
    }
    logger.info(
        f"Game finished after {stats['moves']} moves: score={stats['score']}, "
        f"max tile={stats['max_tile']}, reason={stop_reason}"
    )
    return stats
