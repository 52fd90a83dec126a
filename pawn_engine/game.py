"""
Game Session and Public API

This module is what a presentation layer (GUI, console shell, test harness)
talks to. It offers two ways in:

1. Functions over Position values:
       new_game, legal_moves, apply_move, is_terminal, winner,
       best_machine_move

2. GameSession, which also keeps the state a front end needs between
   calls: the current position, the difficulty, the side assignment and an
   undo history.

Example:
    session = GameSession(difficulty=3, human_side=Side.WHITE)
    session.apply_move((3, 7, 3, 5))
    session.play_machine_turn()
    print(session.position)
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from pawn_engine.board.position import Move, Position, Side, Square, initial_position
from pawn_engine.config import DEFAULT_DIFFICULTY, RulesConfig, SearchConfig, validate_difficulty
from pawn_engine.evaluation.base import Evaluator
from pawn_engine.evaluation.heuristic import PawnStructureEvaluator
from pawn_engine.exceptions import GameOverError, IllegalMoveError
from pawn_engine.search.tree import SearchResult, best_machine_move, find_best_move

logger = logging.getLogger(__name__)


def setup_logger(debug=True, log_file=None):
    """
    Setup file-based logger for engine debugging.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level
        log_file: Target file (default: ~/.pawn_engine/engine.log)

    Returns:
        Configured logger instance
    """
    if log_file is None:
        log_dir = Path.home() / ".pawn_engine"
        log_dir.mkdir(exist_ok=True)
        log_file = log_dir / "engine.log"

    engine_logger = logging.getLogger("pawn_engine")
    engine_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for old_handler in engine_logger.handlers:
        old_handler.close()
    engine_logger.handlers.clear()

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    engine_logger.addHandler(handler)

    return engine_logger


# ============================================================================
# Functional API
# ============================================================================


def new_game(
    starting_side: Side,
    human_side: Side,
    difficulty: int = DEFAULT_DIFFICULTY,
    rules: Optional[RulesConfig] = None,
) -> Position:
    """
    Start a game.

    The difficulty is checked here so a bad level is refused at game start.
    It is not stored in the position; pass it to best_machine_move().

    Raises:
        ValueError: If difficulty is out of range
    """
    validate_difficulty(difficulty)
    return initial_position(starting_side, human_side, rules)


def legal_moves(position: Position) -> Dict[Square, List[Square]]:
    """Legal targets of each movable pawn of the side to act."""
    return position.legal_moves()


def apply_move(position: Position, move) -> Position:
    """Play a move for the side to act (see Position.apply_move)."""
    return position.apply_move(move)


def is_terminal(position: Position) -> bool:
    return position.is_terminal


def winner(position: Position) -> Optional[Side]:
    return position.winner


# ============================================================================
# Session
# ============================================================================


class GameSession:
    """
    One human-versus-machine game and the state around it.

    Attributes:
        position: Current Position
        difficulty: Search depth used by the next machine move
        human_side: Colour played by the human
        starter: Colour that moves first in a new game
        history: Positions before each human move, most recent last
        evaluator: Evaluator used by the machine
        search_config: SearchConfig used by the machine
    """

    def __init__(
        self,
        difficulty: int = DEFAULT_DIFFICULTY,
        human_side: Side = Side.WHITE,
        starter: Optional[Side] = None,
        rules: Optional[RulesConfig] = None,
        evaluator: Optional[Evaluator] = None,
        search_config: Optional[SearchConfig] = None,
    ):
        """
        Initialize a session and start its first game.

        Args:
            difficulty: Search depth in plies (default: 3)
            human_side: Colour played by the human (default: white)
            starter: Colour that moves first (default: the human's)
            rules: Rule variants (default: RulesConfig())
            evaluator: Position evaluator (default: PawnStructureEvaluator)
            search_config: Search settings (default: SearchConfig())
        """
        self.difficulty = validate_difficulty(difficulty)
        self.human_side = human_side
        self.starter = starter if starter is not None else human_side
        self.rules = rules if rules is not None else RulesConfig()
        self.evaluator = evaluator if evaluator else PawnStructureEvaluator()
        self.search_config = search_config if search_config else SearchConfig()

        self.history: List[Position] = []
        self.position = initial_position(self.starter, self.human_side, self.rules)
        logger.info(
            f"Session started: human={self.human_side.value}, "
            f"starter={self.starter.value}, difficulty={self.difficulty}"
        )

    # ------------------------------------------------------------------
    # Game state
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.position.is_terminal

    @property
    def winner(self) -> Optional[Side]:
        return self.position.winner

    @property
    def machine_to_act(self) -> bool:
        return not self.position.is_terminal and self.position.to_act == self.position.machine

    def legal_moves(self) -> Dict[Square, List[Square]]:
        return self.position.legal_moves()

    def pawn_counts(self) -> Dict[Side, int]:
        return {side: self.position.pawn_count(side) for side in Side}

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def new_game(
        self,
        starting_side: Optional[Side] = None,
        human_side: Optional[Side] = None,
        difficulty: Optional[int] = None,
    ) -> Position:
        """
        Start a new game and clear the undo history.

        If the machine starts, call play_machine_turn() next.

        Args:
            starting_side: Colour that moves first (default: unchanged)
            human_side: Colour played by the human (default: unchanged)
            difficulty: Search depth (default: unchanged)

        Returns:
            Position: the opening position
        """
        if difficulty is not None:
            self.difficulty = validate_difficulty(difficulty)
        if human_side is not None:
            self.human_side = human_side
        if starting_side is not None:
            self.starter = starting_side

        self.history.clear()
        self.position = initial_position(self.starter, self.human_side, self.rules)
        logger.info(
            f"New game: human={self.human_side.value}, "
            f"starter={self.starter.value}, difficulty={self.difficulty}"
        )
        return self.position

    def switch_sides(self) -> Position:
        """
        Swap colours and start a new game.

        The starting colour stays the same, so the player who did not start
        the last game starts this one.
        """
        return self.new_game(human_side=self.human_side.opponent)

    def set_difficulty(self, level: int) -> None:
        """
        Change the search depth; the next machine move uses it.

        Raises:
            ValueError: If level is out of range
        """
        self.difficulty = validate_difficulty(level)
        logger.info(f"Difficulty set to {level}")

    def apply_move(self, move) -> Position:
        """
        Play a human move.

        Args:
            move: Move or (from_file, from_rank, to_file, to_rank)

        Returns:
            Position: the new current position

        Raises:
            GameOverError: If the game is already over
            IllegalMoveError: If it is not the human's turn or the move is illegal
        """
        if self.position.is_terminal:
            raise GameOverError("Game already over!")
        if self.position.to_act != self.position.human:
            raise IllegalMoveError("Not your turn!")

        successor = self.position.apply_move(move)
        self.history.append(self.position)
        self.position = successor
        logger.info(f"Human played {Move(*move)}")

        if successor.is_terminal:
            logger.info(f"Game over: {self._outcome()}")
        elif successor.passed:
            logger.info("Machine has to skip its turn")
        return successor

    def machine_move(self) -> SearchResult:
        """
        Let the machine play one move at the current difficulty.

        Raises:
            GameOverError: If the game is already over
            IllegalMoveError: If it is the human's turn
        """
        result = find_best_move(self.position, self.difficulty, self.evaluator, self.search_config)
        self.position = result.position

        if result.position.is_terminal:
            logger.info(f"Game over: {self._outcome()}")
        elif result.position.passed:
            logger.info("Human has to skip the turn")
        return result

    def play_machine_turn(self) -> List[SearchResult]:
        """
        Let the machine move until the human is to act or the game ends.

        The machine moves more than once when the human has to pass.

        Returns:
            List of SearchResult, one per machine move (empty if it was not
            the machine's turn)
        """
        results = []
        while self.machine_to_act:
            results.append(self.machine_move())
        return results

    def undo(self) -> Position:
        """
        Go back to the position before the last human move.

        Raises:
            IllegalMoveError: If there is nothing to undo
        """
        if not self.history:
            raise IllegalMoveError("No turns to undo!")
        self.position = self.history.pop()
        logger.info(f"Undo: {len(self.history)} turn(s) left in history")
        return self.position

    def _outcome(self) -> str:
        if self.position.winner is None:
            return "draw"
        if self.position.winner == self.position.human:
            return "human wins"
        return "machine wins"


__all__ = [
    'GameSession',
    'setup_logger',
    'new_game',
    'legal_moves',
    'apply_move',
    'is_terminal',
    'winner',
    'best_machine_move',
]
