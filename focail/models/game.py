"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class CellState(Enum):
    """Feedback state of a grid cell or keyboard key."""
    DEFAULT = "default"
    ABSENT = "absent"
    PRESENT = "present"
    CORRECT = "correct"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]


_PRIORITY = {
    CellState.DEFAULT: 0,
    CellState.ABSENT: 1,
    CellState.PRESENT: 2,
    CellState.CORRECT: 3,
}


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class KeyAction(Enum):
    """Outcome of routing a raw key token."""
    INSERT = "insert"
    DELETE = "delete"
    SUBMIT = "submit"


@dataclass
class Cell:
    letter: str = ""
    state: CellState = CellState.DEFAULT


@dataclass
class Cursor:
    row: int = 0
    col: int = 0


@dataclass(frozen=True)
class BoardSnapshot:
    """
    Read-only view of a game handed to the presentation layer.

    Cell and keyboard states are plain strings so the snapshot can go
    straight through ``dataclasses.asdict`` into a JSON response.
    """
    grid: List[List[Dict[str, str]]]
    cursor: Dict[str, int]
    keyboard: Dict[str, str]
    status: str
    max_guesses: int
    word_length: int
    language: Optional[str] = None
    answer: Optional[str] = None  # Only included when game is over
    meaning: Optional[str] = None  # Only included when game is over
    game_id: Optional[str] = field(default=None, compare=False)
