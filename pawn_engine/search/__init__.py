"""
Search Module

This module implements the machine's move decision: a full-width,
fixed-depth minimax tree whose node values accumulate from the leaves up.

Key Components:
    - SearchTree / SearchNode: Tree construction, backup and root selection
    - find_best_move: Root-level search returning move, score, nodes and PV
    - best_machine_move: Position after the machine's chosen move
    - SearchWorker: Runs searches on a background thread and drops
      superseded results
"""

from pawn_engine.search.tree import (
    SearchNode,
    SearchResult,
    SearchTree,
    best_machine_move,
    find_best_move,
)
from pawn_engine.search.worker import SearchWorker

__all__ = [
    'SearchNode',
    'SearchResult',
    'SearchTree',
    'best_machine_move',
    'find_best_move',
    'SearchWorker',
]
