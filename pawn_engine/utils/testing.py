"""
Engine Testing and Benchmarking

This module provides move-generation checks and a small tactical suite for
measuring the engine.

Tools:
    1. Perft: counts the leaf positions of a full move-generation tree.
       Any change to the move rules shows up as a different count.

    2. Tactical suite: positions where the machine has a clearly right move
       - Win in one: walk or capture onto the goal rank
       - Stop the runner: capture a pawn one step from the machine's home rank
       - Free pawn: take an undefended pawn that would otherwise take ours

Evaluation Metrics:
    - Correct Moves: positions where the engine found an expected move
    - Time per Position: average search time
    - Nodes: total search tree size
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pawn_engine.board.position import Position, Side
from pawn_engine.evaluation.base import Evaluator
from pawn_engine.search.tree import find_best_move

logger = logging.getLogger(__name__)


def perft(position: Position, depth: int) -> int:
    """
    Count leaf positions of the move tree up to a depth.

    Terminal positions count as leaves.

    Args:
        position: Starting position
        depth: Depth in plies

    Returns:
        int: Number of leaves
    """
    if depth == 0 or position.is_terminal:
        return 1
    return sum(perft(position.play(move), depth - 1) for move in position.moves())


@dataclass
class TestPosition:
    """
    A test position with expected machine move(s).

    Attributes:
        diagram: Board diagram (rank 0 first), machine to act
        best_moves: Acceptable moves, as 'f,r-f,r' strings
        human_side: Colour of the human (the machine plays the other one)
        description: Human-readable description of the position
        id: Position identifier (e.g. "PT.01")
    """
    __test__ = False

    diagram: str
    best_moves: List[str]
    human_side: Side = Side.WHITE
    description: str = ""
    id: str = ""

    def to_position(self) -> Position:
        return Position.from_diagram(self.diagram, human_side=self.human_side, to_act=self.human_side.opponent)


@dataclass
class TestResult:
    """
    Result of testing a single position.

    Attributes:
        position: The test position
        found_move: Move the engine found ('f,r-f,r')
        score: Backed-up score of the move
        correct: Whether the engine found an expected move
        time_taken: Time spent searching (seconds)
        nodes_searched: Number of tree nodes built
        depth: Search depth used
    """
    __test__ = False

    position: TestPosition
    found_move: str
    score: float
    correct: bool
    time_taken: float
    nodes_searched: int = 0
    depth: int = 0


# ============================================================================
# Tactical Suite
# ============================================================================

TACTICAL_POSITIONS = [
    TestPosition(
        id="PT.01",
        diagram="""
            ........
            ........
            ........
            ...W....
            ........
            ........
            ..B.....
            WW...WW.
        """,
        best_moves=["2,6-2,7", "2,6-1,7"],
        description="Black reaches the goal rank, walking or capturing",
    ),
    TestPosition(
        id="PT.02",
        diagram="""
            ...B.B..
            ....W...
            ........
            ........
            ........
            ........
            ........
            W......W
        """,
        best_moves=["3,0-4,1", "5,0-4,1"],
        description="Black captures the white pawn about to break through",
    ),
    TestPosition(
        id="PT.03",
        diagram="""
            ........
            ........
            ........
            ...B....
            ....W...
            ........
            ........
            WW....WW
        """,
        best_moves=["3,3-4,4"],
        description="Black takes the undefended pawn attacking it",
    ),
    TestPosition(
        id="PT.04",
        human_side=Side.BLACK,
        diagram="""
            .....W..
            ......B.
            ........
            ........
            ........
            ........
            ........
            BB....BB
        """,
        best_moves=["5,0-6,1"],
        description="White (machine) removes the black runner with the only capture",
    ),
]


def check_position(position: TestPosition, depth: int, evaluator: Optional[Evaluator] = None) -> TestResult:
    """
    Search one suite position.

    Args:
        position: Test position
        depth: Search depth
        evaluator: Position evaluator (default: the search's)

    Returns:
        TestResult
    """
    start = time.time()
    result = find_best_move(position.to_position(), depth, evaluator)
    elapsed = time.time() - start

    found = str(result.move)
    return TestResult(
        position=position,
        found_move=found,
        score=result.score,
        correct=found in position.best_moves,
        time_taken=elapsed,
        nodes_searched=result.nodes,
        depth=depth,
    )


def run_suite(
    positions: Optional[List[TestPosition]] = None,
    difficulty: int = 2,
    evaluator: Optional[Evaluator] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Run a list of test positions.

    Args:
        positions: Positions to search (default: TACTICAL_POSITIONS)
        difficulty: Search depth
        evaluator: Position evaluator (default: the search's)
        verbose: If True, print one line per position

    Returns:
        dict with 'score', 'total', 'percentage', 'avg_time' and 'results'
    """
    positions = positions if positions is not None else TACTICAL_POSITIONS
    results = []

    for position in positions:
        result = check_position(position, difficulty, evaluator)
        results.append(result)
        logger.debug(f"{position.id}: found {result.found_move}, correct={result.correct}")
        if verbose:
            mark = "OK" if result.correct else "FAIL"
            print(
                f"{position.id:<6} {mark:<4} found {result.found_move:<8} "
                f"expected {','.join(position.best_moves):<16} "
                f"nodes {result.nodes_searched:>8,} time {result.time_taken:.3f}s"
            )

    score = sum(1 for r in results if r.correct)
    total = len(results)
    return {
        'score': score,
        'total': total,
        'percentage': 100.0 * score / total if total else 0.0,
        'avg_time': sum(r.time_taken for r in results) / total if total else 0.0,
        'results': results,
    }
