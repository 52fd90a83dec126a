#!/usr/bin/env python3
"""
Analyze a pawn chess position.

Loads a diagram (or the opening), optionally plays a list of moves, then
prints the board, the evaluation term by term, the pawn count per rank and
the machine's choice at the requested difficulty.

Usage:
    # Opening, human white and moving first, then the machine's answer
    python tools/analyze_position.py --moves 3,7-3,5 --difficulty 3

    # Position from a diagram file (rank 0 on the first line), machine to act
    python tools/analyze_position.py --diagram puzzle.txt --machine-to-act

    # Only show which moves a pawn has
    python tools/analyze_position.py --square 3,7
"""

import argparse
import logging
import sys
from pathlib import Path

from pawn_engine.board.position import Move, Position, Side, initial_position
from pawn_engine.board.representation import parse_square, position_to_planes, square_name
from pawn_engine.config import DEFAULT_DIFFICULTY
from pawn_engine.evaluation import PawnStructureEvaluator
from pawn_engine.exceptions import PawnEngineError
from pawn_engine.search import find_best_move


def load_position(args) -> Position:
    """Build the starting position from the command-line arguments."""
    human = Side(args.human)
    if args.diagram is None:
        return initial_position(human if not args.machine_to_act else human.opponent, human)

    text = Path(args.diagram).read_text()
    to_act = human.opponent if args.machine_to_act else human
    return Position.from_diagram(text, human_side=human, to_act=to_act)


def print_rank_counts(position: Position):
    """Pawns per rank, read from the plane encoding."""
    planes = position_to_planes(position)
    machine_row = " ".join(f"{int(n)}" for n in planes[0].sum(axis=0))
    human_row = " ".join(f"{int(n)}" for n in planes[1].sum(axis=0))
    print(f"{'Rank':<10}{' '.join(str(r) for r in range(8))}")
    print(f"{'Machine':<10}{machine_row}")
    print(f"{'Human':<10}{human_row}")


def analyze(position: Position, difficulty: int, square=None):
    """Print the analysis of one position."""
    evaluator = PawnStructureEvaluator()

    print("=" * 40)
    print(position)
    print("=" * 40)

    if square is not None:
        targets = position.legal_moves().get(square, [])
        names = ", ".join(square_name(t) for t in targets) or "none"
        print(f"Moves from {square_name(square)}: {names}")
        return

    terms = evaluator.breakdown(position)
    print(f"Material:    {terms.material:8.2f}")
    print(f"Danger:      {terms.danger:8.2f}")
    print(f"Isolation:   {terms.isolation:8.2f}")
    print(f"Advancement: {terms.advancement:8.2f}")
    print(f"Terminal:    {terms.terminal:8.2f}")
    print(f"Total:       {terms.total:8.2f}")
    print("-" * 40)
    print_rank_counts(position)
    print("-" * 40)

    if position.is_terminal or position.to_act != position.machine:
        print("Machine is not to act, no search")
        return

    result = find_best_move(position, difficulty, evaluator)
    print(f"Best move:  {result.move}")
    print(f"Score:      {result.score:.2f}")
    print(f"Nodes:      {result.nodes:,}")
    print(f"Line:       {' '.join(str(m) for m in result.pv)}")


def main():
    parser = argparse.ArgumentParser(description="Analyze a pawn chess position")
    parser.add_argument(
        "--diagram",
        type=str,
        default=None,
        help="File with an 8-line diagram (default: opening position)"
    )
    parser.add_argument(
        "--human",
        choices=[side.value for side in Side],
        default=Side.WHITE.value,
        help="Colour played by the human (default: white)"
    )
    parser.add_argument(
        "--machine-to-act",
        action="store_true",
        help="The machine moves first in the loaded position"
    )
    parser.add_argument(
        "--moves",
        type=str,
        default="",
        help="Space-separated moves to play first, e.g. '3,7-3,5 3,0-3,2'"
    )
    parser.add_argument(
        "--square",
        type=str,
        default=None,
        help="Only list the moves of the pawn on this square ('file,rank')"
    )
    parser.add_argument(
        "--difficulty",
        type=int,
        default=DEFAULT_DIFFICULTY,
        help=f"Search depth in plies (default: {DEFAULT_DIFFICULTY})"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print search log lines"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(message)s')

    try:
        position = load_position(args)
        for text in args.moves.split():
            position = position.apply_move(Move.from_string(text))
        square = parse_square(args.square) if args.square else None
        analyze(position, args.difficulty, square)
    except (PawnEngineError, ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
