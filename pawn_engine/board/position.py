"""
Pawn Chess Rule Engine

This module holds the game state and the rules: which moves are legal, what
a move does to the board, whose turn it is afterwards and when the game is
over.

Board Orientation:
    - Squares are (file, rank) pairs, both 0-based
    - The machine starts on rank 0 and advances toward rank 7
    - The human starts on rank 7 and advances toward rank 0
    - This holds whichever colour each player was given

Move Rules:
    - Straight one rank forward onto an empty square
    - Diagonally one rank forward, only to capture an opposing pawn
    - From the home rank, two ranks straight forward onto an empty square
      (the square passed over is only checked when
      RulesConfig.check_double_step_path is set)

Turn Rule:
    After a move the opponent acts, unless it has no legal move at all; then
    the mover acts again and the new position's `passed` flag is set.

Terminal Rule (checked after every move, first match wins):
    1. A human pawn on the human goal rank: human wins
    2. A machine pawn on the machine goal rank: machine wins
    3. A side without pawns: the other side wins
    4. Neither side can move: more pawns wins, equal counts draw

Positions are values. apply_move() returns a new Position and never
changes the one it was called on.
"""

import operator
from enum import Enum, IntEnum
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from pawn_engine.board.representation import (
    BLACK_CODE,
    EMPTY_CODE,
    WHITE_CODE,
    empty_grid,
    freeze,
    on_board,
    parse_diagram,
    parse_square,
    render_diagram,
    square_name,
)
from pawn_engine.config import BOARD_SIZE, RulesConfig
from pawn_engine.exceptions import GameOverError, IllegalMoveError

Square = Tuple[int, int]

MACHINE_HOME_RANK = 0
HUMAN_HOME_RANK = BOARD_SIZE - 1


def _coordinate(value) -> int:
    """Accept integers only; floats, strings and booleans are refused."""
    if isinstance(value, bool):
        raise TypeError(f"coordinate must be an integer, got {value!r}")
    return operator.index(value)


class Side(Enum):
    """One of the two players' colours."""

    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Side":
        return Side.BLACK if self is Side.WHITE else Side.WHITE

    @property
    def cell(self) -> "Cell":
        return Cell.WHITE if self is Side.WHITE else Cell.BLACK


class Cell(IntEnum):
    """Content of one square."""

    EMPTY = EMPTY_CODE
    WHITE = WHITE_CODE
    BLACK = BLACK_CODE

    @property
    def side(self) -> Optional[Side]:
        if self is Cell.WHITE:
            return Side.WHITE
        if self is Cell.BLACK:
            return Side.BLACK
        return None


class Move(NamedTuple):
    """A pawn move. Whether it captures follows from the board."""

    from_file: int
    from_rank: int
    to_file: int
    to_rank: int

    @property
    def source(self) -> Square:
        return self.from_file, self.from_rank

    @property
    def target(self) -> Square:
        return self.to_file, self.to_rank

    def __str__(self) -> str:
        return f"{square_name(self.source)}-{square_name(self.target)}"

    @classmethod
    def from_string(cls, text: str) -> "Move":
        """
        Parse 'f,r-f,r' (the format of str(move)).

        Raises:
            ValueError: If the text is malformed or a square is off the board
        """
        parts = text.strip().split("-")
        if len(parts) != 2:
            raise ValueError(f"move must be 'file,rank-file,rank', got {text!r}")
        source, target = parse_square(parts[0]), parse_square(parts[1])
        return cls(source[0], source[1], target[0], target[1])


class Position:
    """
    Immutable game state: pawn placement, side assignment and turn.

    Attributes:
        grid: Read-only int8 array indexed [file, rank]
        human: Side played by the human
        machine: Side played by the machine
        starter: Side that made the first move of the game
        to_act: Side whose turn it is
        passed: True if the side that should have acted next had no legal
            move, so the previous mover acts again
        rules: RulesConfig the game is played under
        is_terminal: True once the game is over
        winner: Winning side, or None (game ongoing or drawn)
    """

    __slots__ = (
        "_grid",
        "_human",
        "_starter",
        "_to_act",
        "_passed",
        "_rules",
        "_terminal",
        "_winner",
    )

    def __init__(
        self,
        grid: np.ndarray,
        human: Side,
        starter: Side,
        to_act: Side,
        rules: Optional[RulesConfig] = None,
        passed: bool = False,
    ):
        """
        Build a position from a grid the caller hands over.

        The grid is frozen in place, so callers must pass a fresh array.
        Prefer initial_position() or Position.from_diagram().
        """
        if grid.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"grid must be {BOARD_SIZE}x{BOARD_SIZE}, got {grid.shape}")
        self._grid = freeze(grid.astype(np.int8, copy=False))
        self._human = human
        self._starter = starter
        self._to_act = to_act
        self._passed = passed
        self._rules = rules if rules is not None else RulesConfig()
        self._terminal, self._winner = self._status()

    @classmethod
    def from_diagram(
        cls,
        text: str,
        human_side: Side = Side.WHITE,
        to_act: Optional[Side] = None,
        starter: Optional[Side] = None,
        rules: Optional[RulesConfig] = None,
    ) -> "Position":
        """
        Build a position from an 8-line diagram (rank 0 on the first line).

        Args:
            text: Diagram of 'W', 'B' and '.' characters
            human_side: Colour played by the human
            to_act: Side to act (default: human_side)
            starter: Side that opened the game (default: to_act)
            rules: Rule variants (default: RulesConfig())

        Returns:
            Position: with its terminal status already computed
        """
        to_act = to_act if to_act is not None else human_side
        starter = starter if starter is not None else to_act
        return cls(parse_diagram(text), human_side, starter, to_act, rules)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def grid(self) -> np.ndarray:
        return self._grid

    @property
    def human(self) -> Side:
        return self._human

    @property
    def machine(self) -> Side:
        return self._human.opponent

    @property
    def starter(self) -> Side:
        return self._starter

    @property
    def to_act(self) -> Side:
        return self._to_act

    @property
    def passed(self) -> bool:
        return self._passed

    @property
    def rules(self) -> RulesConfig:
        return self._rules

    @property
    def is_terminal(self) -> bool:
        return self._terminal

    @property
    def winner(self) -> Optional[Side]:
        return self._winner

    def is_machine(self, side: Side) -> bool:
        return side == self.machine

    def home_rank(self, side: Side) -> int:
        return MACHINE_HOME_RANK if self.is_machine(side) else HUMAN_HOME_RANK

    def goal_rank(self, side: Side) -> int:
        return HUMAN_HOME_RANK if self.is_machine(side) else MACHINE_HOME_RANK

    def direction(self, side: Side) -> int:
        """Rank step of a forward move: +1 for the machine, -1 for the human."""
        return 1 if self.is_machine(side) else -1

    def cell(self, file: int, rank: int) -> Cell:
        return Cell(int(self._grid[file, rank]))

    def side_at(self, file: int, rank: int) -> Optional[Side]:
        return self.cell(file, rank).side

    def pawns(self, side: Side) -> List[Square]:
        """Squares of a side's pawns, file by file, rank ascending."""
        files, ranks = np.nonzero(self._grid == int(side.cell))
        return [(int(f), int(r)) for f, r in zip(files, ranks)]

    def pawn_count(self, side: Side) -> int:
        return int(np.count_nonzero(self._grid == int(side.cell)))

    # ------------------------------------------------------------------
    # Move generation
    # ------------------------------------------------------------------

    def _destinations(self, file: int, rank: int, side: Side) -> List[Square]:
        """
        Legal targets of one pawn, in the order double step, straight,
        left capture, right capture.
        """
        step = self.direction(side)
        ahead = rank + step
        if not 0 <= ahead < BOARD_SIZE:
            return []

        grid = self._grid
        enemy = int(side.opponent.cell)
        targets = []

        if rank == self.home_rank(side):
            landing = rank + 2 * step
            path_clear = grid[file, ahead] == EMPTY_CODE or not self._rules.check_double_step_path
            if grid[file, landing] == EMPTY_CODE and path_clear:
                targets.append((file, landing))

        if grid[file, ahead] == EMPTY_CODE:
            targets.append((file, ahead))

        # Captures; edge files have a single diagonal
        if file > 0 and grid[file - 1, ahead] == enemy:
            targets.append((file - 1, ahead))
        if file < BOARD_SIZE - 1 and grid[file + 1, ahead] == enemy:
            targets.append((file + 1, ahead))

        return targets

    def legal_moves(self, side: Optional[Side] = None) -> Dict[Square, List[Square]]:
        """
        Map each movable pawn to its legal targets.

        Args:
            side: Side to generate for (default: the side to act)

        Returns:
            Ordered dict {pawn square: [target squares]}; pawns without a
            legal move are left out. Empty on a terminal position.
        """
        if self._terminal:
            return {}
        side = side if side is not None else self._to_act
        moves = {}
        for file, rank in self.pawns(side):
            targets = self._destinations(file, rank, side)
            if targets:
                moves[(file, rank)] = targets
        return moves

    def moves(self, side: Optional[Side] = None) -> List[Move]:
        """Legal moves as a flat list, in generation order."""
        return [
            Move(source[0], source[1], target[0], target[1])
            for source, targets in self.legal_moves(side).items()
            for target in targets
        ]

    def has_legal_move(self, side: Side) -> bool:
        """Check whether any pawn of a side can move (ignores terminal status)."""
        return any(self._destinations(file, rank, side) for file, rank in self.pawns(side))

    # ------------------------------------------------------------------
    # Making moves
    # ------------------------------------------------------------------

    def apply_move(self, move) -> "Position":
        """
        Play a move for the side to act.

        Args:
            move: Move, or any 4-sequence (from_file, from_rank, to_file, to_rank)

        Returns:
            Position: the successor position

        Raises:
            GameOverError: If the game is already over
            IllegalMoveError: If the move is not legal for the side to act
        """
        if self._terminal:
            raise GameOverError("Game already over!")

        try:
            move = Move(*(_coordinate(value) for value in move))
        except (TypeError, ValueError) as e:
            raise IllegalMoveError(f"Illegal move or coordinates: {move!r}") from e

        if not (on_board(*move.source) and on_board(*move.target)):
            raise IllegalMoveError(f"Coordinates off the board: {move}")

        if self.side_at(*move.source) != self._to_act:
            raise IllegalMoveError(
                f"No {self._to_act.value} pawn on {square_name(move.source)}"
            )

        if move.target not in self._destinations(move.from_file, move.from_rank, self._to_act):
            raise IllegalMoveError(f"Illegal move: {move}")

        return self.play(move)

    def play(self, move: Move) -> "Position":
        """
        Play a move taken from moves() without validating it.

        The search calls this for every generated move; external callers
        should use apply_move().
        """
        mover = self.side_at(move.from_file, move.from_rank)
        grid = self._grid.copy()
        grid[move.to_file, move.to_rank] = grid[move.from_file, move.from_rank]
        grid[move.from_file, move.from_rank] = EMPTY_CODE

        successor = Position(grid, self._human, self._starter, mover.opponent, self._rules)
        if not successor._terminal and not successor.has_legal_move(mover.opponent):
            # The successor is not shared yet, so it can still be adjusted
            successor._to_act = mover
            successor._passed = True
        return successor

    def _status(self) -> Tuple[bool, Optional[Side]]:
        """Compute (is_terminal, winner) for the current grid."""
        grid = self._grid
        human, machine = self.human, self.machine

        if np.any(grid[:, self.goal_rank(human)] == int(human.cell)):
            return True, human
        if np.any(grid[:, self.goal_rank(machine)] == int(machine.cell)):
            return True, machine

        human_count = self.pawn_count(human)
        machine_count = self.pawn_count(machine)
        if human_count == 0 or machine_count == 0:
            if human_count == machine_count:
                return True, None
            return True, human if machine_count == 0 else machine

        if not self.has_legal_move(human) and not self.has_legal_move(machine):
            if human_count > machine_count:
                return True, human
            if machine_count > human_count:
                return True, machine
            return True, None

        return False, None

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def _key(self):
        return (self._grid.tobytes(), self._human, self._starter, self._to_act, self._rules)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        if self._terminal:
            status = f"winner: {self._winner.value}" if self._winner else "draw"
        else:
            status = f"to act: {self._to_act.value}"
        return f"{render_diagram(self._grid)}\n{status}"

    def __repr__(self) -> str:
        return (
            f"Position(human={self._human.value}, to_act={self._to_act.value}, "
            f"white={self.pawn_count(Side.WHITE)}, black={self.pawn_count(Side.BLACK)}, "
            f"terminal={self._terminal})"
        )


def initial_position(
    starting_side: Side,
    human_side: Side,
    rules: Optional[RulesConfig] = None,
) -> Position:
    """
    Create the opening position: both home ranks full, everything else empty.

    Args:
        starting_side: Side that moves first
        human_side: Colour played by the human
        rules: Rule variants (default: RulesConfig())

    Returns:
        Position: the start of a new game
    """
    grid = empty_grid()
    grid[:, MACHINE_HOME_RANK] = int(human_side.opponent.cell)
    grid[:, HUMAN_HOME_RANK] = int(human_side.cell)
    return Position(grid, human_side, starting_side, starting_side, rules)
