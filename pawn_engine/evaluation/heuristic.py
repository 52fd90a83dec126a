"""
Pawn Structure Evaluation

This module implements the heuristic that scores pawn chess positions.
Every term is a difference between the two sides in which the human's
share is multiplied by human_factor (1.5), so the machine plays cautiously.

Evaluation Components:
    - Material: pawns on the board
    - Danger: pawns that can be captured next ply and have no recapture
    - Isolation: pawns without a friendly pawn on any neighbouring square
    - Advancement: ranks walked from the home rank, summed over all pawns
    - Terminal: bonus from Evaluator.evaluate_terminal()

All counts are taken on boolean numpy masks. A neighbour lookup is a
zero-filled shift of the mask (see board.representation.shift), so squares
off the board never count and edge and corner pawns see only their
existing neighbours.
"""

from dataclasses import dataclass

import numpy as np

from pawn_engine.board.position import Position, Side
from pawn_engine.board.representation import shift, side_mask
from pawn_engine.config import BOARD_SIZE
from pawn_engine.evaluation.base import Evaluator

# All eight neighbour offsets
NEIGHBOURS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]

RANKS = np.arange(BOARD_SIZE)


@dataclass
class EvaluationBreakdown:
    """Individual terms of one evaluation (all machine-perspective)."""

    material: float
    danger: float
    isolation: float
    advancement: float
    terminal: float

    @property
    def total(self) -> float:
        return self.material + self.danger + self.isolation + self.advancement + self.terminal


class PawnStructureEvaluator(Evaluator):
    """
    Heuristic evaluation of pawn chess positions.

    The side counts below are exposed individually so tests and analysis
    tools can check each term on its own.
    """

    def endangered_count(self, position: Position, side: Side) -> int:
        """
        Count a side's pawns that are attacked and not defended.

        A pawn is attacked if an opposing pawn stands on one of its forward
        diagonals and could capture it next ply. It is defended if a friendly
        pawn stands on one of its backward diagonals and could recapture.
        Pawns already on their goal rank are not counted.
        """
        grid = position.grid
        own = side_mask(grid, int(side.cell))
        enemy = side_mask(grid, int(side.opponent.cell))
        step = position.direction(side)

        attacked = shift(enemy, -1, step) | shift(enemy, 1, step)
        defended = shift(own, -1, -step) | shift(own, 1, -step)

        endangered = own & attacked & ~defended
        endangered[:, position.goal_rank(side)] = False
        return int(np.count_nonzero(endangered))

    def isolated_count(self, position: Position, side: Side) -> int:
        """Count a side's pawns with no friendly pawn on any neighbouring square."""
        own = side_mask(position.grid, int(side.cell))
        supported = np.zeros_like(own)
        for df, dr in NEIGHBOURS:
            supported |= shift(own, df, dr)
        return int(np.count_nonzero(own & ~supported))

    def advancement(self, position: Position, side: Side) -> int:
        """Sum over a side's pawns of the ranks walked from the home rank."""
        own = side_mask(position.grid, int(side.cell))
        distance = np.abs(RANKS - position.home_rank(side))
        return int((own * distance).sum())

    def breakdown(self, position: Position, ply: int = 1) -> EvaluationBreakdown:
        """
        Evaluate a position term by term.

        Args:
            position: Position to evaluate
            ply: Distance from the search root

        Returns:
            EvaluationBreakdown with each machine-perspective term
        """
        k = self.weights.human_factor
        human, machine = position.human, position.machine

        return EvaluationBreakdown(
            material=position.pawn_count(machine) - k * position.pawn_count(human),
            danger=(
                self.endangered_count(position, human)
                - k * self.endangered_count(position, machine)
            ),
            isolation=(
                self.isolated_count(position, human)
                - k * self.isolated_count(position, machine)
            ),
            advancement=self.advancement(position, machine) - k * self.advancement(position, human),
            terminal=self.evaluate_terminal(position, ply),
        )

    def evaluate(self, position: Position, ply: int = 1) -> float:
        """
        Evaluate position using material, danger, isolation and advancement.

        Args:
            position: Position to evaluate
            ply: Distance from the search root

        Returns:
            float: Evaluation (machine's perspective)
        """
        return float(self.breakdown(position, ply).total)
