"""
Services Package

Contains the game state machine and the session service.
"""

from .game_service import GameService, get_game_service, initialize_game_service
from .wordle_game import InvalidWordError, WordleGame

__all__ = [
    'GameService', 'get_game_service', 'initialize_game_service',
    'InvalidWordError', 'WordleGame',
]
