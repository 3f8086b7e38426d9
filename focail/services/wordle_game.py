"""
Wordle Game State Machine

Owns the grid, cursor, keyboard letter states and status of a single game.
All mutation goes through insert_letter, delete_letter and submit_guess;
press_key routes raw key tokens to them.
"""

import string
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from ..config.game_settings import BACKSPACE_KEY, ENTER_KEY, MAX_GUESSES, WORD_LENGTH
from ..models.game import BoardSnapshot, Cell, CellState, Cursor, GameStatus, KeyAction

SnapshotListener = Callable[[BoardSnapshot], None]


class InvalidWordError(ValueError):
    """Raised when a submitted row is not in the accepted dictionary."""

    def __init__(self, guess: str):
        self.guess = guess
        super().__init__(f"{guess} is not in the word list")


class WordleGame:
    """
    Guess evaluator for one game session.

    A session never restarts: once the status is won or lost every operation
    is ignored, and a new game means a new instance.
    """

    def __init__(self,
                 target_word: str,
                 dictionary: Iterable[str] = (),
                 alphabet: Optional[Iterable[str]] = None,
                 max_guesses: int = MAX_GUESSES,
                 word_length: int = WORD_LENGTH,
                 meanings: Optional[Mapping[str, str]] = None,
                 language: Optional[str] = None):
        if len(target_word) != word_length:
            raise ValueError(f"Target word must be {word_length} letters long")
        if max_guesses < 1:
            raise ValueError("max_guesses must be at least 1")

        self.word_length = word_length
        self.max_guesses = max_guesses
        self.language = language
        self._target = target_word.lower()
        self._dictionary = frozenset(word.lower() for word in dictionary)
        self._meanings = meanings or {}

        letters = alphabet if alphabet is not None else string.ascii_uppercase
        self._alphabet = tuple(letter.upper() for letter in letters)

        self._grid: List[List[Cell]] = [
            [Cell() for _ in range(word_length)] for _ in range(max_guesses)
        ]
        self._cursor = Cursor()
        self._keyboard: Dict[str, CellState] = {letter: CellState.DEFAULT for letter in self._alphabet}
        self._status = GameStatus.PLAYING
        self._listeners: List[SnapshotListener] = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def target_word(self) -> str:
        return self._target

    @property
    def meaning(self) -> Optional[str]:
        return self._meanings.get(self._target)

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status is not GameStatus.PLAYING

    @property
    def cursor(self) -> Cursor:
        return Cursor(self._cursor.row, self._cursor.col)

    @property
    def grid(self) -> List[List[Cell]]:
        return [[Cell(cell.letter, cell.state) for cell in row] for row in self._grid]

    @property
    def keyboard(self) -> Dict[str, CellState]:
        return dict(self._keyboard)

    @property
    def alphabet(self):
        return self._alphabet

    @property
    def current_guess(self) -> str:
        """Letters typed so far in the current row."""
        if self._cursor.row >= self.max_guesses:
            return ""
        return "".join(cell.letter for cell in self._grid[self._cursor.row][:self._cursor.col])

    def snapshot(self) -> BoardSnapshot:
        """
        Builds a detached copy of the observable state.

        The answer and its meaning are only included once the game is over.
        """
        return BoardSnapshot(
            grid=[[{'letter': cell.letter, 'state': cell.state.value} for cell in row] for row in self._grid],
            cursor={'row': self._cursor.row, 'col': self._cursor.col},
            keyboard={letter: state.value for letter, state in self._keyboard.items()},
            status=self._status.value,
            max_guesses=self.max_guesses,
            word_length=self.word_length,
            language=self.language,
            answer=self._target if self.is_over else None,
            meaning=self.meaning if self.is_over else None,
        )

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener called with a snapshot after every change."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def press_key(self, token: str) -> Optional[KeyAction]:
        """
        Routes a raw key token to the matching operation.

        Args:
            token: A letter, "ENTER" or "BACKSPACE", in any case

        Returns:
            The KeyAction dispatched, or None if the token was ignored

        Raises:
            InvalidWordError: If ENTER submits a word outside the dictionary
        """
        if self.is_over or not isinstance(token, str):
            return None

        key = token.upper()
        if key == BACKSPACE_KEY:
            self.delete_letter()
            return KeyAction.DELETE
        if key == ENTER_KEY:
            self.submit_guess()
            return KeyAction.SUBMIT
        if key in self._alphabet:
            self.insert_letter(key)
            return KeyAction.INSERT
        return None

    def insert_letter(self, char: str) -> bool:
        """Writes a letter at the cursor. Returns False when nothing changed."""
        if self.is_over or self._cursor.col >= self.word_length:
            return False

        letter = char.upper()
        if letter not in self._alphabet:
            return False

        self._grid[self._cursor.row][self._cursor.col] = Cell(letter, CellState.DEFAULT)
        self._cursor.col += 1
        self._notify()
        return True

    def delete_letter(self) -> bool:
        """Clears the cell left of the cursor. Returns False when nothing changed."""
        if self.is_over or self._cursor.col <= 0:
            return False

        self._cursor.col -= 1
        self._grid[self._cursor.row][self._cursor.col] = Cell()
        self._notify()
        return True

    def submit_guess(self) -> bool:
        """
        Scores the current row against the target word.

        Returns:
            True if the row was scored, False if the row was not full or the
            game is already over

        Raises:
            InvalidWordError: If the dictionary is non-empty and does not
                contain the guess; no state changes in that case
        """
        if self.is_over or self._cursor.col != self.word_length:
            return False

        row = self._grid[self._cursor.row]
        guess = "".join(cell.letter for cell in row).lower()

        if self._dictionary and guess not in self._dictionary:
            raise InvalidWordError(guess.upper())

        self._score_row(row, guess)

        if self._status is GameStatus.PLAYING and self._cursor.row == self.max_guesses - 1:
            self._status = GameStatus.LOST

        # Advances even after the final row
        self._cursor = Cursor(self._cursor.row + 1, 0)
        self._notify()
        return True

    def _score_row(self, row: List[Cell], guess: str) -> None:
        """Two-pass evaluation; each target letter can be claimed once."""
        remaining: List[Optional[str]] = list(self._target)

        # First pass: exact position matches
        for index, letter in enumerate(guess):
            if letter == remaining[index]:
                row[index].state = CellState.CORRECT
                self._upgrade_key(letter, CellState.CORRECT)
                remaining[index] = None

        if all(cell.state is CellState.CORRECT for cell in row):
            self._status = GameStatus.WON
            return

        # Second pass: present letters and misses
        for index, letter in enumerate(guess):
            if row[index].state is not CellState.DEFAULT:
                continue
            if letter in remaining:
                row[index].state = CellState.PRESENT
                remaining[remaining.index(letter)] = None
                self._upgrade_key(letter, CellState.PRESENT)
            else:
                row[index].state = CellState.ABSENT
                self._upgrade_key(letter, CellState.ABSENT)

    def _upgrade_key(self, letter: str, new_state: CellState) -> None:
        # Keyboard colours only ever move up: absent < present < correct
        key = letter.upper()
        current = self._keyboard.get(key, CellState.DEFAULT)
        if new_state.priority > current.priority:
            self._keyboard[key] = new_state
