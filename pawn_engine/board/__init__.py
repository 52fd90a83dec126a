"""
Board Module

This module holds the pawn chess rules and the position value the rest of
the engine works on.

Key Components:
    - Position: Immutable game state (grid, sides, turn, terminal status)
    - Side / Cell / Move: Player colours, square contents, pawn moves
    - initial_position: Opening layout with both home ranks filled
    - representation: numpy planes, neighbour shifts, text diagrams

Data Flow:
    Position → legal_moves() / moves() → apply_move() → new Position
"""

from pawn_engine.board.position import Cell, Move, Position, Side, initial_position
from pawn_engine.board.representation import position_to_planes

__all__ = ['Cell', 'Move', 'Position', 'Side', 'initial_position', 'position_to_planes']
