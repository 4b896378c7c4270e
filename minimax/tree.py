"""
tree.py

Depth-bounded game tree alternating between the player's move (DecisionNode,
maximizer) and the adversary's tile placement (ChanceNode, minimizer).

Children are built lazily on first access and memoized, so a deep tree only
materialises the parts the search actually visits. ``expand_all`` builds the
whole bounded tree up front instead; both give the same search results.
"""

import logging
from typing import List, Optional

from minimax.board import SEARCH_ORDER, Board, Direction

logger = logging.getLogger(__name__)


class SearchNode:
    maximizing: bool = False

    def __init__(self, board: Board, ply: int, max_ply: int) -> None:
        self.board: Board = board
        self.ply: int = ply
        self.max_ply: int = max_ply
        self._children: Optional[List["SearchNode"]] = None

    @property
    def children(self) -> List["SearchNode"]:
        if self._children is None:
            self._children = self._expand() if self.ply < self.max_ply else []
        return self._children

    @property
    def is_expanded(self) -> bool:
        return self._children is not None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def _expand(self) -> List["SearchNode"]:
        raise NotImplementedError

    def expand_all(self) -> int:
        """Materialise the whole subtree. Returns its node count."""
        return 1 + sum(child.expand_all() for child in self.children)

    def node_count(self) -> int:
        """Number of nodes materialised so far in this subtree."""
        if self._children is None:
            return 1
        return 1 + sum(child.node_count() for child in self._children)


class DecisionNode(SearchNode):
    """The player picks a direction. ``placement`` is the edge index of the
    tile that produced this node (None at the root)."""

    maximizing = True

    def __init__(self, board: Board, ply: int, max_ply: int, placement: Optional[int] = None) -> None:
        super().__init__(board, ply, max_ply)
        self.placement: Optional[int] = placement

    def _expand(self) -> List[SearchNode]:
        children: List[SearchNode] = []
        for direction in SEARCH_ORDER:
            board = self.board.clone()
            if board.shift_and_merge(direction):
                children.append(ChanceNode(board, self.ply + 1, self.max_ply, direction))
        return children

    def __repr__(self) -> str:
        return f"DecisionNode(ply={self.ply}, placement={self.placement})"


class ChanceNode(SearchNode):
    """The adversary places an exponent-0 tile on the edge opposite ``direction``."""

    maximizing = False

    def __init__(self, board: Board, ply: int, max_ply: int, direction: Direction) -> None:
        super().__init__(board, ply, max_ply)
        self.direction: Direction = direction

    def _expand(self) -> List[SearchNode]:
        children: List[SearchNode] = []
        for index in range(len(self.board.edge(self.direction))):
            board = self.board.clone()
            if board.insert_tile_at(self.direction, index):
                children.append(DecisionNode(board, self.ply + 1, self.max_ply, placement=index))
        return children

    def __repr__(self) -> str:
        return f"ChanceNode(ply={self.ply}, direction={self.direction.name})"


class SearchTree:
    def __init__(self, root: DecisionNode, max_ply: int) -> None:
        self.root = root
        self.max_ply = max_ply

    def node_count(self) -> int:
        return self.root.node_count()


def build_search_tree(board: Board, max_ply: int, eager: bool = False) -> SearchTree:
    """
    Root a search tree at a snapshot of ``board``.

    Args:
        board: Live board; it is cloned and never modified
        max_ply: Number of half-moves below the root
        eager: Build every node now instead of on first visit

    Returns:
        SearchTree: The tree rooted at a DecisionNode
    """
    if max_ply < 1:
        raise ValueError(f"max_ply must be at least 1, got {max_ply}")
    root = DecisionNode(board.clone(), 0, max_ply)
    tree = SearchTree(root, max_ply)
    if eager:
        count = root.expand_all()
        logger.debug(f"Built eager tree with {count} nodes (max_ply={max_ply})")
    return tree
