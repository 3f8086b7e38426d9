"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_game, require_game_service
from .helpers import error_response, get_user_identity
from .game_logger import game_logger

__all__ = ['require_game', 'require_game_service', 'error_response', 'get_user_identity', 'game_logger']
