"""
Engine Faults

The engine refuses an operation by raising one of these exceptions. It never
clamps or corrects a request, and the position it was asked to change is
left as it was.

    - IllegalMoveError: the move is not in the legal set for the side to act
      (bad coordinates, no pawn at the source, wrong turn, unreachable target)
    - GameOverError: a move or a search was requested on a finished game
"""


class PawnEngineError(Exception):
    """Base class for all engine faults."""


class IllegalMoveError(PawnEngineError, ValueError):
    """Raised when a requested move is not legal for the side to act."""


class GameOverError(PawnEngineError, RuntimeError):
    """Raised when a move or search is requested on a terminal position."""
