"""
Utilities Module

This module provides utility functions for testing and benchmarking the
engine.

Key Components:
    - perft: Move generation verification by leaf counting
    - TACTICAL_POSITIONS: Positions with a known right machine move
    - run_suite: Search a list of positions and score the answers

Success Metrics:
    - Tactical suite: 4/4 at difficulty 2
"""

from pawn_engine.utils.testing import (
    TACTICAL_POSITIONS,
    perft,
    run_suite,
)

__all__ = [
    'TACTICAL_POSITIONS',
    'perft',
    'run_suite',
]
