"""
Engine configuration.

Rule options, evaluation weights and search settings live here as
dataclasses so that a game can be reproduced from its configuration alone.
"""

from dataclasses import dataclass

BOARD_SIZE = 8

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 8  # deeper full-width trees are not practical
DEFAULT_DIFFICULTY = 3

ROOT_TIE_BREAKS = ("latest", "earliest")


def validate_difficulty(level: int) -> int:
    """
    Check that a difficulty level is a usable search depth.

    Args:
        level: Requested depth in plies

    Returns:
        int: The same level

    Raises:
        ValueError: If level is not an integer in [MIN_DIFFICULTY, MAX_DIFFICULTY]
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValueError(f"difficulty must be an integer, got {level!r}")
    if not MIN_DIFFICULTY <= level <= MAX_DIFFICULTY:
        raise ValueError(
            f"difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}, got {level}"
        )
    return level


@dataclass(frozen=True)
class RulesConfig:
    """Rule variants a position is played under."""

    check_double_step_path: bool = False
    """Require the square passed over by a home-rank double step to be empty.
    Off by default: the classic engine only looks at the landing square."""


@dataclass(frozen=True)
class EvaluationWeights:
    """Weights of the heuristic evaluation."""

    human_factor: float = 1.5
    """Multiplier applied to every human-side term (material, danger,
    isolation, advancement, losing bonus)"""

    win_score: float = 5000.0
    """Bonus for a machine win, divided by the ply it is reached at"""

    def __post_init__(self):
        """Validate weights after initialization."""
        if self.human_factor <= 0:
            raise ValueError(f"human_factor must be positive, got {self.human_factor}")
        if self.win_score <= 0:
            raise ValueError(f"win_score must be positive, got {self.win_score}")


@dataclass
class SearchConfig:
    """
    Settings of the full-width search.

    The depth is not a setting here: it is passed to every search call.
    """

    root_tie_break: str = "latest"
    """Which root child wins a tie on backed-up value: 'latest' (scan from
    the last generated child backward) or 'earliest'"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.root_tie_break not in ROOT_TIE_BREAKS:
            raise ValueError(
                f"root_tie_break should be one of {ROOT_TIE_BREAKS}, got {self.root_tie_break!r}"
            )

    def __repr__(self) -> str:
        """String representation of config."""
        return f"SearchConfig(root_tie_break={self.root_tie_break!r})"
