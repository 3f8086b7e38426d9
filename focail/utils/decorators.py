"""
Request Decorators

Contains decorators that resolve the game service and game session for
HTTP endpoints.
"""

from functools import wraps
from .helpers import error_response


def require_game_service(f):
    """
    Decorator that passes the global game service to the endpoint,
    or answers 500 when it has not been initialized.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            return error_response('Game service unavailable', 500)

        return f(game_service, *args, **kwargs)

    return decorated_function


def require_game(f):
    """Like require_game_service, but also answers 404 for unknown game IDs."""
    @require_game_service
    @wraps(f)
    def decorated_function(game_service, game_id, *args, **kwargs):
        if game_service.get_game(game_id) is None:
            return error_response('Game not found', 404)

        return f(game_service, game_id, *args, **kwargs)

    return decorated_function
