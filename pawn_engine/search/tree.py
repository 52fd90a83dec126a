"""
Full-Width Search Tree

This module decides the machine's move. It builds every line of play up to
a fixed depth, scores each node and backs the scores up to the root.

Key Concepts:
    - Full width: every legal move of every node is expanded, with no
      pruning and no move ordering
    - Accumulating backup: a node keeps its own static evaluation and adds
      the value of the child the side to act would choose (max for the
      machine, min for the human). Scores therefore grow with depth.
    - Tie-breaking: inside the tree the earliest generated child wins a tie;
      at the root the latest one does (SearchConfig.root_tie_break)

Algorithm Complexity:
    O(b^d) nodes, where b is the number of legal moves (up to three per
    movable pawn) and d the difficulty

References:
    - Minimax: https://www.chessprogramming.org/Minimax
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from pawn_engine.board.position import Move, Position
from pawn_engine.config import SearchConfig, validate_difficulty
from pawn_engine.evaluation.base import Evaluator
from pawn_engine.evaluation.heuristic import PawnStructureEvaluator
from pawn_engine.exceptions import GameOverError, IllegalMoveError

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class SearchNode:
    """
    One position in the search tree.

    Attributes:
        position: Position this node stands for
        evaluation: Static evaluation, plus the chosen child's value once
            backed up
        ply: Distance from the root (root = 0)
        move: Move that led here from the parent (None for the root)
        children: Successors in move generation order
        best_child: Child selected during backup
    """

    position: Position
    evaluation: float
    ply: int
    move: Optional[Move] = None
    children: List["SearchNode"] = field(default_factory=list)
    best_child: Optional["SearchNode"] = None

    @property
    def is_leaf(self) -> bool:
        return not self.children


class SearchResult(NamedTuple):
    """Outcome of a root search."""

    move: Move
    position: Position
    score: float
    nodes: int
    pv: List[Move]


class SearchTree:
    """
    Tree of positions rooted at the machine's turn.

    The tree is built, scored and backed up on construction. It owns a
    private copy of every position it holds and is meant to be discarded
    once the move has been read.

    Attributes:
        root: Root SearchNode
        difficulty: Depth of the tree in plies
        evaluator: Evaluator used on every node
        config: SearchConfig (only root_tie_break is read here)
        node_count: Number of nodes created, root included
    """

    def __init__(
        self,
        position: Position,
        difficulty: int,
        evaluator: Optional[Evaluator] = None,
        config: Optional[SearchConfig] = None,
    ):
        """
        Build and score the tree.

        Args:
            position: Position the machine moves from
            difficulty: Depth in plies (1..MAX_DIFFICULTY)
            evaluator: Position evaluator (default: PawnStructureEvaluator)
            config: Search settings (default: SearchConfig())

        Raises:
            ValueError: If difficulty is out of range
            GameOverError: If the game is over or the machine cannot move
            IllegalMoveError: If it is the human's turn
        """
        self.difficulty = validate_difficulty(difficulty)
        if position.is_terminal:
            raise GameOverError("Game already over!")
        if position.to_act != position.machine:
            raise IllegalMoveError("Not the machine's turn!")

        self.evaluator = evaluator if evaluator else PawnStructureEvaluator()
        self.config = config if config else SearchConfig()
        self.node_count = 0

        self.root = self._create_node(position, 0)
        self._expand(self.root)
        if self.root.is_leaf:
            raise GameOverError("Machine has no legal move!")
        self._back_up(self.root)

    def _create_node(self, position: Position, ply: int, move: Optional[Move] = None) -> SearchNode:
        self.node_count += 1
        return SearchNode(position, self.evaluator.evaluate(position, ply), ply, move)

    def _expand(self, node: SearchNode) -> None:
        """Add one child per legal move, recursing until the depth limit or game end."""
        for move in node.position.moves():
            child = self._create_node(node.position.play(move), node.ply + 1, move)
            node.children.append(child)
            if child.ply < self.difficulty and not child.position.is_terminal:
                self._expand(child)

    def _back_up(self, node: SearchNode) -> None:
        """
        Add the chosen child's value to each inner node, bottom-up.

        The scan starts at the first child and only replaces on a strict
        improvement, so the earliest child wins ties.
        """
        for child in node.children:
            if not child.is_leaf:
                self._back_up(child)

        maximize = node.position.to_act == node.position.machine
        chosen = node.children[0]
        for child in node.children[1:]:
            if maximize and child.evaluation > chosen.evaluation:
                chosen = child
            elif not maximize and child.evaluation < chosen.evaluation:
                chosen = child

        node.best_child = chosen
        node.evaluation += chosen.evaluation

    def best_child(self) -> SearchNode:
        """
        Root child with the greatest backed-up value.

        With root_tie_break 'latest' the scan runs from the last child
        backward, so the latest generated child wins ties.
        """
        children = self.root.children
        if self.config.root_tie_break == "latest":
            children = list(reversed(children))

        best = children[0]
        for child in children[1:]:
            if child.evaluation > best.evaluation:
                best = child
        return best

    def best_position(self) -> Position:
        return self.best_child().position

    def principal_variation(self) -> List[Move]:
        """Moves of the expected line: the root choice, then each best_child."""
        pv = []
        node = self.best_child()
        while node is not None:
            pv.append(node.move)
            node = node.best_child
        return pv


def find_best_move(
    position: Position,
    difficulty: int,
    evaluator: Optional[Evaluator] = None,
    config: Optional[SearchConfig] = None,
) -> SearchResult:
    """
    Find the machine's best move in a position.

    Args:
        position: Position with the machine to act
        difficulty: Search depth in plies
        evaluator: Position evaluation function
        config: Search settings

    Returns:
        SearchResult(move, position, score, nodes, pv)

    Raises:
        GameOverError: If the game is over or the machine cannot move
        IllegalMoveError: If it is the human's turn
        ValueError: If difficulty is out of range
    """
    start_time = time.time()
    tree = SearchTree(position, difficulty, evaluator, config)
    best = tree.best_child()

    if logger.isEnabledFor(logging.DEBUG):
        for child in tree.root.children:
            logger.debug(f"Move: {child.move}, Score: {child.evaluation:.2f}")

    elapsed_ms = int((time.time() - start_time) * 1000)
    logger.info(
        f"Search complete: depth={difficulty}, best_move={best.move}, "
        f"score={best.evaluation:.2f}, nodes={tree.node_count}, time={elapsed_ms}ms"
    )

    return SearchResult(best.move, best.position, best.evaluation, tree.node_count, tree.principal_variation())


def best_machine_move(
    position: Position,
    difficulty: int,
    evaluator: Optional[Evaluator] = None,
    config: Optional[SearchConfig] = None,
) -> Position:
    """Return the position after the machine's best move."""
    return find_best_move(position, difficulty, evaluator, config).position
