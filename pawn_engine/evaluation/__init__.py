"""
Evaluation Module

This module provides position evaluation functions for the engine.
Evaluators are SWAPPABLE: the search tree works with any evaluator that
implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class with the game-over bonus
    - PawnStructureEvaluator: Material, danger, isolation and advancement

Data Flow:
    Position → evaluator.evaluate(position, ply) → float
                                                   Positive = machine advantage
                                                   Negative = human advantage
"""

from pawn_engine.evaluation.base import Evaluator
from pawn_engine.evaluation.heuristic import EvaluationBreakdown, PawnStructureEvaluator

__all__ = ['Evaluator', 'PawnStructureEvaluator', 'EvaluationBreakdown']
