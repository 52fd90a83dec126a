"""
Unit Tests for the Search Tree

Tests for SearchTree and find_best_move, focusing on:
    - Greedy choice at depth 1
    - Accumulating backup and min/max alternation
    - Tie-breaking at the root and inside the tree
    - Tree size and terminal leaves
    - Refusal to search finished games or the human's turn
"""

import pytest

from pawn_engine.board import Move, Position, Side, initial_position
from pawn_engine.config import SearchConfig
from pawn_engine.evaluation import Evaluator, PawnStructureEvaluator
from pawn_engine.exceptions import GameOverError, IllegalMoveError
from pawn_engine.search import SearchTree, best_machine_move, find_best_move


CAPTURE_TO_WIN = """
    ........
    ........
    ........
    ...B....
    ....W...
    ........
    ........
    ........
"""

BLOCKED_HUMAN = """
    ........
    B.......
    ........
    ........
    ...B....
    ...W....
    ........
    ........
"""


def walk(node):
    yield node
    for child in node.children:
        yield from walk(child)


class ConstantEvaluator(Evaluator):
    """Scores every position the same, so every comparison is a tie."""

    def evaluate(self, position, ply=1):
        return 1.0


class TestGreedySearch:
    """Tests for difficulty 1."""

    @pytest.fixture
    def opening(self):
        """White human, black machine to act."""
        return initial_position(Side.BLACK, Side.WHITE)

    def test_depth_one_picks_best_static_child(self, opening):
        """Single steps score -3.0, double steps leave a pawn isolated."""

        result = find_best_move(opening, 1)

        assert result.score == pytest.approx(-3.0)
        assert result.move == Move(7, 0, 7, 1), "Latest of the tied single steps"
        assert result.nodes == 17

    def test_depth_one_values_are_static(self, opening):
        """Leaf values are plain evaluations at ply 1."""

        evaluator = PawnStructureEvaluator()
        tree = SearchTree(opening, 1, evaluator)

        for child in tree.root.children:
            assert child.is_leaf
            assert child.evaluation == pytest.approx(evaluator.evaluate(child.position, 1))

    def test_earliest_root_tie_break(self, opening):
        """With 'earliest', the first of the tied single steps is played."""

        result = find_best_move(opening, 1, config=SearchConfig(root_tie_break="earliest"))

        assert result.move == Move(0, 0, 0, 1)

    def test_capture_to_win(self):
        """Capturing the last human pawn beats stepping forward."""

        position = Position.from_diagram(CAPTURE_TO_WIN, to_act=Side.BLACK)

        result = find_best_move(position, 1)

        assert result.move == Move(3, 3, 4, 4)
        assert result.position.is_terminal
        assert result.position.winner == Side.BLACK

    def test_best_machine_move_returns_successor(self):
        position = Position.from_diagram(CAPTURE_TO_WIN, to_act=Side.BLACK)

        after = best_machine_move(position, 2)

        assert after == position.apply_move((3, 3, 4, 4))


class TestBackup:
    """Tests for how values flow up the tree."""

    @pytest.fixture
    def evaluator(self):
        return PawnStructureEvaluator()

    @pytest.mark.parametrize("diagram,difficulty", [
        (None, 2),
        (BLOCKED_HUMAN, 3),
    ])
    def test_inner_nodes_accumulate(self, evaluator, diagram, difficulty):
        """Each inner node holds its own evaluation plus its chosen child's value."""

        if diagram is None:
            position = initial_position(Side.BLACK, Side.WHITE)
        else:
            position = Position.from_diagram(diagram, to_act=Side.BLACK)
        tree = SearchTree(position, difficulty, evaluator)

        for node in walk(tree.root):
            if node.is_leaf:
                continue
            static = evaluator.evaluate(node.position, node.ply)
            assert node.evaluation == pytest.approx(static + node.best_child.evaluation)

    @pytest.mark.parametrize("difficulty", [2, 3])
    def test_min_max_alternation_earliest_tie(self, evaluator, difficulty):
        """Machine nodes take the first maximum, human nodes the first minimum."""

        position = Position.from_diagram(BLOCKED_HUMAN, to_act=Side.BLACK)
        tree = SearchTree(position, difficulty, evaluator)

        for node in walk(tree.root):
            if node.is_leaf or node is tree.root:
                continue
            values = [child.evaluation for child in node.children]
            if node.position.to_act == node.position.machine:
                target = max(values)
            else:
                target = min(values)
            assert node.best_child is node.children[values.index(target)]

    def test_pass_keeps_machine_maximizing(self, evaluator):
        """After a move that leaves the human stuck, the machine acts again in the tree."""

        position = Position.from_diagram(BLOCKED_HUMAN, to_act=Side.BLACK)
        tree = SearchTree(position, 2, evaluator)

        child = next(c for c in tree.root.children if c.move == Move(0, 1, 0, 2))

        assert child.position.passed
        assert child.position.to_act == Side.BLACK
        assert all(grandchild.position.human == Side.WHITE for grandchild in child.children)
        assert child.best_child.evaluation == max(g.evaluation for g in child.children)

    def test_deeper_search_accumulates(self, evaluator):
        """At depth 2 the score adds the ply-1 evaluation to the best reply's."""

        opening = initial_position(Side.BLACK, Side.WHITE)
        tree = SearchTree(opening, 2, evaluator)
        best = tree.best_child()

        static = evaluator.evaluate(best.position, 1)
        reply = min(child.evaluation for child in best.children)

        assert best.evaluation == pytest.approx(static + reply)

    def test_all_ties_inside_tree_take_first_child(self):
        """With a constant evaluator every inner node keeps its first child."""

        tree = SearchTree(initial_position(Side.BLACK, Side.WHITE), 3, ConstantEvaluator())

        for node in walk(tree.root):
            if node.is_leaf:
                continue
            assert node.best_child is node.children[0]
            assert node.evaluation == pytest.approx(3 - node.ply + 1)

    def test_all_ties_at_root(self):
        """With a constant evaluator the root tie-break alone picks the move."""

        opening = initial_position(Side.BLACK, Side.WHITE)
        latest = SearchTree(opening, 2, ConstantEvaluator())
        earliest = SearchTree(
            opening, 2, ConstantEvaluator(), SearchConfig(root_tie_break="earliest")
        )

        assert latest.best_child().move == Move(7, 0, 7, 1)
        assert earliest.best_child().move == Move(0, 0, 0, 2)


class TestTreeShape:
    """Tests for tree size and depth limits."""

    @pytest.mark.parametrize("difficulty,nodes", [(1, 17), (2, 273)])
    def test_full_width_node_count(self, difficulty, nodes):
        """Every legal move of every node is expanded."""

        tree = SearchTree(initial_position(Side.BLACK, Side.WHITE), difficulty)

        assert tree.node_count == nodes
        assert sum(1 for _ in walk(tree.root)) == nodes

    def test_depth_comes_from_argument(self):
        """A search config never changes the depth passed to the search."""

        opening = initial_position(Side.BLACK, Side.WHITE)
        config = SearchConfig(root_tie_break="earliest")

        assert find_best_move(opening, 1, config=config).nodes == 17
        assert find_best_move(opening, 2, config=config).nodes == 273
        with pytest.raises(TypeError):
            SearchConfig(difficulty=1)

    def test_depth_limit(self):
        """No node lies deeper than the difficulty."""

        tree = SearchTree(initial_position(Side.BLACK, Side.WHITE), 2)

        assert max(node.ply for node in walk(tree.root)) == 2

    def test_terminal_children_not_expanded(self):
        """A finished game is a leaf at any depth."""

        position = Position.from_diagram(CAPTURE_TO_WIN, to_act=Side.BLACK)
        tree = SearchTree(position, 3)

        capture = next(c for c in tree.root.children if c.move == Move(3, 3, 4, 4))

        assert capture.position.is_terminal
        assert capture.is_leaf

    def test_principal_variation(self):
        """The PV starts with the chosen move and follows best children."""

        result = find_best_move(initial_position(Side.BLACK, Side.WHITE), 3)

        assert len(result.pv) == 3
        assert result.pv[0] == result.move

    def test_search_does_not_change_position(self):
        position = initial_position(Side.BLACK, Side.WHITE)
        before = position.grid.copy()

        find_best_move(position, 2)

        assert (position.grid == before).all()
        assert position.to_act == Side.BLACK


class TestSearchFaults:
    """Tests for refused searches."""

    def test_finished_game(self):
        position = Position.from_diagram(
            """
            ..W.....
            ........
            ........
            ........
            ...B....
            ........
            ........
            ........
            """,
            to_act=Side.BLACK,
        )

        with pytest.raises(GameOverError):
            find_best_move(position, 2)

    def test_human_to_act(self):
        with pytest.raises(IllegalMoveError):
            find_best_move(initial_position(Side.WHITE, Side.WHITE), 2)

    def test_machine_without_moves(self):
        """A machine to act with no legal move cannot search."""

        position = Position.from_diagram(
            """
            ........
            ........
            ........
            ...B....
            ...W....
            ........
            ........
            .......W
            """,
            to_act=Side.BLACK,
        )

        assert not position.is_terminal
        with pytest.raises(GameOverError):
            find_best_move(position, 1)

    @pytest.mark.parametrize("difficulty", [0, 9, -1, 2.5, True])
    def test_bad_difficulty(self, difficulty):
        with pytest.raises(ValueError):
            find_best_move(initial_position(Side.BLACK, Side.WHITE), difficulty)

    def test_bad_tie_break(self):
        with pytest.raises(ValueError):
            SearchConfig(root_tie_break="random")
