"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
With a common interface, the search can use any evaluator without being
changed.

Key Principles:
    1. Evaluators are stateless (weights are fixed at construction)
    2. evaluate() always scores from the machine's perspective
    3. Positive = machine advantage, Negative = human advantage
    4. Finished games add a bonus that shrinks with the ply it is reached at

Convention:
    - Units are pawns and ranks, not centipawns
    - Every human-side term is scaled by EvaluationWeights.human_factor
"""

from abc import ABC, abstractmethod
from typing import Optional

from pawn_engine.board.position import Position
from pawn_engine.config import EvaluationWeights


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method. This ensures compatibility with the search tree.

    Attributes:
        weights: EvaluationWeights shared by every term

    Methods:
        evaluate(position, ply): Returns the position score
        evaluate_terminal(position, ply): Returns the game-over bonus
    """

    def __init__(self, weights: Optional[EvaluationWeights] = None):
        self.weights = weights if weights is not None else EvaluationWeights()

    @abstractmethod
    def evaluate(self, position: Position, ply: int = 1) -> float:
        """
        Evaluate a position from the machine's perspective.

        Args:
            position: Position to evaluate
            ply: Distance from the search root (values below 1 count as 1)

        Returns:
            float: Evaluation score

        Raises:
            NotImplementedError: If subclass doesn't implement this method
        """
        pass

    def evaluate_terminal(self, position: Position, ply: int = 1) -> float:
        """
        Bonus for a finished game.

        A machine win is worth win_score / ply and a human win
        -human_factor * win_score / ply, so quick wins and slow losses are
        preferred. Draws and unfinished games are worth 0.

        Args:
            position: Position to score
            ply: Distance from the search root

        Returns:
            float: The bonus
        """
        if not position.is_terminal or position.winner is None:
            return 0.0

        ply = max(ply, 1)
        if position.winner == position.machine:
            return self.weights.win_score / ply
        return -self.weights.human_factor * (self.weights.win_score / ply)

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
