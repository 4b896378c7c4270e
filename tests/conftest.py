import random

import pytest

from minimax.board import Board


def random_board(rng: random.Random, fill: float = 0.6, max_exponent: int = 5,
                 width: int = 4, height: int = 4) -> Board:
    board = Board(width, height)
    for cell in board.data:
        if rng.random() < fill:
            cell.set_exponent(rng.randint(0, max_exponent))
    return board


def exponents_of(board: Board):
    return [[cell.exponent for cell in board.row(y)] for y in range(board.height)]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def stuck_board() -> Board:
    # no empty cells and no equal neighbours
    return Board.from_exponents([
        [0, 1, 0, 1],
        [1, 0, 1, 0],
        [0, 1, 0, 1],
        [1, 0, 1, 0],
    ])


@pytest.fixture
def corner_board() -> Board:
    board = Board()
    board.get_cell(0, 0).set_exponent(1)
    return board


@pytest.fixture
def random_boards():
    rng = random.Random(2048)
    boards = []
    while len(boards) < 8:
        board = random_board(rng)
        if not board.is_stuck():
            boards.append(board)
    return boards
