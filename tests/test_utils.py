"""
Unit Tests for Testing Utilities

Tests for perft and the tactical suite.
"""

import pytest

from pawn_engine.board import Position, Side, initial_position
from pawn_engine.utils import TACTICAL_POSITIONS, perft, run_suite
from pawn_engine.utils.testing import check_position


class TestPerft:
    """Move generation counts."""

    @pytest.mark.parametrize("depth,expected", [(0, 1), (1, 16), (2, 256)])
    def test_opening(self, depth, expected):
        assert perft(initial_position(Side.WHITE, Side.WHITE), depth) == expected

    def test_terminal_counts_as_leaf(self):
        finished = Position.from_diagram(
            """
            W.......
            ........
            ........
            ........
            ........
            ........
            ........
            .B......
            """
        )

        assert perft(finished, 3) == 1


class TestTacticalSuite:
    """Tests for the tactical suite."""

    def test_positions_are_machine_to_act(self):
        for test_position in TACTICAL_POSITIONS:
            position = test_position.to_position()
            assert position.to_act == position.machine, f"{test_position.id} should be machine to act"
            assert not position.is_terminal, f"{test_position.id} is already over"

    def test_expected_moves_are_legal(self):
        for test_position in TACTICAL_POSITIONS:
            legal = {str(move) for move in test_position.to_position().moves()}
            for expected in test_position.best_moves:
                assert expected in legal, f"{test_position.id}: {expected} is not legal"

    def test_win_in_one(self):
        """Difficulty 1 already finds an immediate win."""

        result = check_position(TACTICAL_POSITIONS[0], 1)

        assert result.correct
        assert result.depth == 1
        assert result.nodes_searched > 1

    def test_suite_solved_at_difficulty_two(self):
        """Two plies see every threat in the suite."""

        summary = run_suite(difficulty=2)

        assert summary['total'] == len(TACTICAL_POSITIONS)
        assert summary['score'] == summary['total'], [
            (r.position.id, r.found_move) for r in summary['results'] if not r.correct
        ]
        assert summary['percentage'] == pytest.approx(100.0)

    def test_empty_suite(self):
        summary = run_suite([], difficulty=1)

        assert summary['total'] == 0
        assert summary['percentage'] == 0.0
