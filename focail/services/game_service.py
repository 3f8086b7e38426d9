"""
Game Service

Owns the game sessions: picks target words, creates a fresh state machine per
game and replaces it on reset or language switch.
"""

import random
import threading
import uuid
from dataclasses import replace
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ..config.game_settings import LANGUAGES, MAX_GUESSES, LanguagePack
from ..models.game import BoardSnapshot, KeyAction
from .wordle_game import WordleGame

SessionListener = Callable[[str, BoardSnapshot], None]


class GameService:
    """
    In-memory registry of game sessions.

    This class handles:
    - Session management with unique game IDs
    - Random word selection per language
    - Routing key presses to the session's state machine, one at a time
    - Reset and language switch, both of which discard the old instance
    - Relaying every board change to service-wide listeners
    """

    def __init__(self,
                 languages: Mapping[str, LanguagePack] = LANGUAGES,
                 max_guesses: int = MAX_GUESSES,
                 default_language: str = 'EN'):
        self.languages = languages
        self.max_guesses = max_guesses
        self.default_language = default_language.upper()
        self.games: Dict[str, WordleGame] = {}  # Store active games by game_id
        self.locks: Dict[str, threading.Lock] = {}
        self.listeners: List[SessionListener] = []
        self._detach: Dict[str, Callable[[], None]] = {}

    def _pack(self, language: Optional[str]) -> LanguagePack:
        code = (language or self.default_language).upper()
        if code not in self.languages:
            raise ValueError(f"Unknown language '{code}'. Must be one of {sorted(self.languages)}")
        return self.languages[code]

    def _new_instance(self, pack: LanguagePack) -> WordleGame:
        # Server keeps the selected word until the game is over
        target_word = random.choice(pack.words)
        return WordleGame(
            target_word,
            dictionary=pack.words,
            alphabet=pack.alphabet,
            max_guesses=self.max_guesses,
            meanings=pack.meanings,
            language=pack.code,
        )

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a listener called with ``(game_id, snapshot)`` after every
        board change in any session, including resets and language switches.
        Registering the same listener twice has no effect. Listeners run while
        the session lock is held and must not call back into the service.
        """
        if listener not in self.listeners:
            self.listeners.append(listener)

        def unsubscribe():
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def _publish(self, game_id: str, snapshot: BoardSnapshot) -> None:
        snapshot = replace(snapshot, game_id=game_id)
        for listener in list(self.listeners):
            listener(game_id, snapshot)

    def _install(self, game_id: str, game: WordleGame) -> None:
        """Make ``game`` the session's instance, detaching the one it replaces."""
        detach = self._detach.pop(game_id, None)
        if detach:
            detach()
        self.games[game_id] = game
        self._detach[game_id] = game.subscribe(lambda snapshot: self._publish(game_id, snapshot))

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def create_new_game(self, language: Optional[str] = None) -> str:
        """
        Creates a new game session with a randomly selected word.

        Args:
            language: Language code ("EN" or "IR"); defaults to the service default

        Returns:
            str: Unique game ID for this session

        Raises:
            ValueError: If the language is unknown
        """
        pack = self._pack(language)
        game_id = str(uuid.uuid4())
        self.locks[game_id] = threading.Lock()
        self._install(game_id, self._new_instance(pack))
        return game_id

    def get_game(self, game_id: str) -> Optional[WordleGame]:
        return self.games.get(game_id)

    def _session(self, game_id: str) -> Tuple[Optional[WordleGame], Optional[threading.Lock]]:
        return self.games.get(game_id), self.locks.get(game_id)

    def get_game_state(self, game_id: str) -> Optional[BoardSnapshot]:
        """
        Returns the current snapshot for a session (answer hidden until the game ends).

        Returns:
            BoardSnapshot or None if game not found
        """
        game, lock = self._session(game_id)
        if game is None or lock is None:
            return None
        with lock:
            game = self.games.get(game_id)
            if game is None:
                return None
            return replace(game.snapshot(), game_id=game_id)

    def press_key(self, game_id: str, key: str) -> Tuple[Optional[KeyAction], BoardSnapshot]:
        """
        Routes a key token to a session.

        Key presses on one session are serialized, so concurrent HTTP and
        WebSocket input cannot interleave inside an operation.

        Returns:
            The dispatched KeyAction (or None) and the board right after it

        Raises:
            KeyError: If the game does not exist
            InvalidWordError: If ENTER submits a word outside the dictionary
        """
        game, lock = self._session(game_id)
        if game is None or lock is None:
            raise KeyError(game_id)

        with lock:
            # The instance may have been replaced while waiting for the lock
            game = self.games.get(game_id)
            if game is None:
                raise KeyError(game_id)
            action = game.press_key(key)
            return action, replace(game.snapshot(), game_id=game_id)

    def _replace_instance(self, game_id: str, pack_for: Callable[[WordleGame], LanguagePack]) -> Optional[BoardSnapshot]:
        game, lock = self._session(game_id)
        if game is None or lock is None:
            return None

        with lock:
            old_game = self.games.get(game_id)
            if old_game is None:
                return None
            new_game = self._new_instance(pack_for(old_game))
            self._install(game_id, new_game)
            snapshot = replace(new_game.snapshot(), game_id=game_id)

        self._publish(game_id, snapshot)
        return snapshot

    def reset_game(self, game_id: str) -> Optional[BoardSnapshot]:
        """
        Starts over in the same language with a newly selected word.

        Returns:
            The fresh snapshot, or None if game not found
        """
        return self._replace_instance(game_id, lambda game: self._pack(game.language))

    def switch_language(self, game_id: str, language: Optional[str] = None) -> Optional[BoardSnapshot]:
        """
        Starts over in another language.

        Args:
            game_id: Unique game identifier
            language: Target language code; toggles between EN and IR when omitted

        Returns:
            The fresh snapshot, or None if game not found

        Raises:
            ValueError: If the language is unknown
        """
        if language is not None:
            pack = self._pack(language)
            return self._replace_instance(game_id, lambda game: pack)

        def next_pack(game):
            codes = sorted(self.languages)
            return self._pack(codes[(codes.index(game.language) + 1) % len(codes)])

        return self._replace_instance(game_id, next_pack)

    def get_languages(self) -> List[Dict]:
        """Titles and keyboard layouts for every language, for rendering."""
        return [
            {
                'code': pack.code,
                'title': pack.title,
                'keyboard_layout': [list(row) for row in pack.keyboard_layout],
                'word_count': len(pack.words),
            }
            for pack in self.languages.values()
        ]

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Returns:
            bool: True if game was deleted, False if not found
        """
        game, lock = self._session(game_id)
        if game is None or lock is None:
            return False

        with lock:
            detach = self._detach.pop(game_id, None)
            if detach:
                detach()
            self.games.pop(game_id, None)
            self.locks.pop(game_id, None)
        return True


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(max_guesses: int = MAX_GUESSES, default_language: str = 'EN') -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(max_guesses=max_guesses, default_language=default_language)
    return _game_service
