"""
Board Representation Helpers

This module converts positions into numpy planes and plain-text diagrams,
and provides the shifted masks the evaluator is built on.

Grid Layout:
    - grid[file, rank], both 0-based, dtype int8
    - Values are Cell codes: 0 = empty, 1 = white pawn, 2 = black pawn
    - Rank 0 is the machine's home rank, rank 7 the human's

3-Channel Representation:
    0: Machine pawns
    1: Human pawns
    2: Side to act (all 1s if the machine is to act, all 0s otherwise)

Diagram Format:
    Eight lines of eight characters. The first line is rank 0, files run
    left to right. 'W' = white pawn, 'B' = black pawn, '.' = empty.

        BBBBBBBB
        ........
        ........
        ........
        ........
        ........
        ........
        WWWWWWWW
"""

import numpy as np
from typing import Tuple

from pawn_engine.config import BOARD_SIZE

EMPTY_CODE = 0
WHITE_CODE = 1
BLACK_CODE = 2

CODE_TO_CHAR = {EMPTY_CODE: ".", WHITE_CODE: "W", BLACK_CODE: "B"}
CHAR_TO_CODE = {char: code for code, char in CODE_TO_CHAR.items()}


def empty_grid() -> np.ndarray:
    """Return a writable all-empty grid."""
    return np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)


def freeze(grid: np.ndarray) -> np.ndarray:
    """Mark a grid read-only and return it."""
    grid.flags.writeable = False
    return grid


def side_mask(grid: np.ndarray, code: int) -> np.ndarray:
    """Boolean mask of the cells holding the given cell code."""
    return grid == code


def shift(mask: np.ndarray, df: int, dr: int) -> np.ndarray:
    """
    Look up each cell's neighbour at offset (df, dr).

    result[f, r] is mask[f + df, r + dr], or False when that neighbour is
    off the board. Edge and corner cells therefore see only the neighbours
    that exist.

    Args:
        mask: Boolean array of shape (8, 8)
        df: File offset (-1, 0 or 1)
        dr: Rank offset (-1, 0 or 1)

    Returns:
        Boolean array of shape (8, 8)
    """
    padded = np.pad(mask, 1, mode="constant", constant_values=False)
    return padded[1 + df:1 + df + BOARD_SIZE, 1 + dr:1 + dr + BOARD_SIZE]


def position_to_planes(position) -> np.ndarray:
    """
    Convert a position to a 3-channel tensor representation.

    Args:
        position: Position to convert

    Returns:
        numpy array of shape (3, 8, 8) with dtype float32, indexed
        [channel, file, rank]
    """
    planes = np.zeros((3, BOARD_SIZE, BOARD_SIZE), dtype=np.float32)
    grid = position.grid
    planes[0] = side_mask(grid, int(position.machine.cell))
    planes[1] = side_mask(grid, int(position.human.cell))
    if not position.is_terminal and position.to_act == position.machine:
        planes[2] = 1.0
    return planes


def render_diagram(grid: np.ndarray) -> str:
    """Render a grid as an 8-line diagram, rank 0 first."""
    lines = []
    for rank in range(BOARD_SIZE):
        lines.append("".join(CODE_TO_CHAR[int(grid[file, rank])] for file in range(BOARD_SIZE)))
    return "\n".join(lines)


def parse_diagram(text: str) -> np.ndarray:
    """
    Parse an 8-line diagram into a writable grid.

    Blank lines and surrounding whitespace are ignored.

    Args:
        text: Diagram in the format described in the module docstring

    Returns:
        int8 grid of shape (8, 8)

    Raises:
        ValueError: If the diagram is not 8x8 or holds an unknown character
    """
    rows = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if len(rows) != BOARD_SIZE:
        raise ValueError(f"diagram must have {BOARD_SIZE} rows, got {len(rows)}")

    grid = empty_grid()
    for rank, row in enumerate(rows):
        if len(row) != BOARD_SIZE:
            raise ValueError(f"diagram row {rank} must have {BOARD_SIZE} cells, got {row!r}")
        for file, char in enumerate(row):
            if char not in CHAR_TO_CODE:
                raise ValueError(f"unknown cell {char!r} in diagram row {rank}")
            grid[file, rank] = CHAR_TO_CODE[char]
    return grid


def on_board(file: int, rank: int) -> bool:
    """Check that a coordinate pair lies on the board."""
    return 0 <= file < BOARD_SIZE and 0 <= rank < BOARD_SIZE


def square_name(square: Tuple[int, int]) -> str:
    """Format a (file, rank) pair as 'file,rank'."""
    return f"{square[0]},{square[1]}"


def parse_square(text: str) -> Tuple[int, int]:
    """
    Parse 'file,rank' (or 'file rank') into a (file, rank) pair.

    Raises:
        ValueError: If the text is malformed or off the board
    """
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise ValueError(f"square must be 'file,rank', got {text!r}")
    file, rank = int(parts[0]), int(parts[1])
    if not on_board(file, rank):
        raise ValueError(f"square {text!r} is off the board")
    return file, rank
