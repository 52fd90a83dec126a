"""
pawn_engine

A pawn chess ("breakthrough") engine: the rules, a heuristic evaluator and
a full-width minimax search that picks the machine's move against a human.

## Architecture

The engine is organized into several key modules:

1. **board**: Rules and game state
   - Position: immutable snapshot with move generation and terminal status
   - numpy planes and text diagrams

2. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - PawnStructureEvaluator: material, danger, isolation, advancement

3. **search**: Search algorithms
   - Full-width, fixed-depth minimax with accumulating backup
   - Background worker that drops superseded searches

4. **game**: What a front end talks to
   - Functional API over Position values
   - GameSession with difficulty, undo history and side switching

5. **utils**: Testing and benchmarking utilities
   - Perft move counting
   - Tactical test suite

## Quick Start

```python
from pawn_engine import GameSession, Side

session = GameSession(difficulty=3, human_side=Side.WHITE)
print(session.legal_moves())
session.apply_move((3, 7, 3, 5))
session.play_machine_turn()
print(session.position)
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from pawn_engine.board import Cell, Move, Position, Side, initial_position
from pawn_engine.config import EvaluationWeights, RulesConfig, SearchConfig
from pawn_engine.evaluation import Evaluator, PawnStructureEvaluator
from pawn_engine.exceptions import GameOverError, IllegalMoveError, PawnEngineError
from pawn_engine.game import (
    GameSession,
    apply_move,
    is_terminal,
    legal_moves,
    new_game,
    winner,
)
from pawn_engine.search import SearchTree, SearchWorker, best_machine_move, find_best_move

__all__ = [
    'Cell',
    'Move',
    'Position',
    'Side',
    'initial_position',
    'EvaluationWeights',
    'RulesConfig',
    'SearchConfig',
    'Evaluator',
    'PawnStructureEvaluator',
    'GameOverError',
    'IllegalMoveError',
    'PawnEngineError',
    'GameSession',
    'apply_move',
    'is_terminal',
    'legal_moves',
    'new_game',
    'winner',
    'SearchTree',
    'SearchWorker',
    'best_machine_move',
    'find_best_move',
]
