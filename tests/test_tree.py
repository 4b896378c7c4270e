import pytest

from minimax.board import Board, Direction
from minimax.tree import ChanceNode, DecisionNode, build_search_tree


def test_root_children_are_legal_directions(corner_board):
    tree = build_search_tree(corner_board, 2)
    children = tree.root.children
    assert all(isinstance(c, ChanceNode) for c in children)
    assert [c.direction for c in children] == [Direction.DOWN, Direction.RIGHT]
    assert all(c.ply == 1 for c in children)


def test_chance_children_fill_empty_edge_cells():
    board = Board.from_exponents([
        [None, 2, None, None],
        [None, None, None, None],
        [None, None, None, None],
        [1, None, None, None],
    ])
    tree = build_search_tree(board, 2)
    down = next(c for c in tree.root.children if c.direction == Direction.DOWN)
    # both tiles end up on the bottom row, leaving the top row free
    placements = [child.placement for child in down.children]
    assert placements == [0, 1, 2, 3]
    for child in down.children:
        assert isinstance(child, DecisionNode)
        assert child.board.get_cell(child.placement, 0).exponent == 0
        assert child.board.occupied_count() == down.board.occupied_count() + 1


def test_chance_node_skips_occupied_placements():
    board = Board.from_exponents([
        [0, None, 1, None],
        [1, None, None, None],
        [2, None, None, None],
        [3, None, None, None],
    ])
    tree = build_search_tree(board, 2)
    down = tree.root.children[0]
    assert down.direction == Direction.DOWN
    # column 0 is full and cannot move, so its top cell stays occupied
    assert down.board.get_cell(0, 0).exponent == 0
    assert [c.placement for c in down.children] == [1, 2, 3]


def test_children_are_lazy_and_memoized(corner_board):
    tree = build_search_tree(corner_board, 3)
    assert not tree.root.is_expanded
    first = tree.root.children
    assert tree.root.is_expanded
    assert tree.root.children is first
    assert not first[0].is_expanded
    assert tree.node_count() == 1 + len(first)


def test_ply_limit_makes_leaves(corner_board):
    tree = build_search_tree(corner_board, 1)
    for child in tree.root.children:
        assert child.is_leaf
        assert child.ply == 1


def test_stuck_board_root_is_leaf(stuck_board):
    tree = build_search_tree(stuck_board, 4)
    assert tree.root.children == []
    assert tree.root.is_leaf


def test_eager_matches_lazy(random_boards):
    for board in random_boards[:3]:
        eager = build_search_tree(board, 3, eager=True)
        lazy = build_search_tree(board, 3)
        assert lazy.node_count() == 1
        assert lazy.root.expand_all() == eager.node_count()


def test_building_never_touches_live_board(corner_board):
    snapshot = corner_board.clone()
    build_search_tree(corner_board, 3, eager=True)
    assert corner_board == snapshot


def test_max_ply_must_be_positive(corner_board):
    with pytest.raises(ValueError):
        build_search_tree(corner_board, 0)
