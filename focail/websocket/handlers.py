"""
WebSocket Event Handlers

Pushes board snapshots to every client watching a game and accepts key
presses over the socket.
"""

from dataclasses import asdict
from flask import request
from flask_socketio import emit, join_room, leave_room
from ..services.game_service import get_game_service
from ..models.game import KeyAction
from ..services.wordle_game import InvalidWordError
from ..utils.game_logger import game_logger


def game_room(game_id):
    return f"game_{game_id}"


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def broadcast(game_id, snapshot):
        """Relay one session's board changes to its room."""
        socketio.emit('board_update', asdict(snapshot), room=game_room(game_id))

    def game_id_from(data):
        if not isinstance(data, dict) or not data.get('game_id'):
            emit('error', {'error': 'Game ID is required'})
            return None
        return data['game_id']

    def resolve_game(data):
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return None, None

        game_id = game_id_from(data)
        if not game_id:
            return None, None

        if game_service.get_game(game_id) is None:
            emit('error', {'error': 'Game not found'})
            return None, None

        # One broadcaster per service; subscribing again is a no-op
        game_service.subscribe(broadcast)
        return game_service, game_id

    @socketio.on('join_game')
    def handle_join_game(data):
        """Join a game room and receive its current board."""
        game_service, game_id = resolve_game(data)
        if not game_service:
            return

        join_room(game_room(game_id))
        game_logger.log_user_action(request, 'join_game', game_id)

        emit('board_update', asdict(game_service.get_game_state(game_id)))

    @socketio.on('leave_game')
    def handle_leave_game(data):
        """Stop receiving updates for a game."""
        game_id = game_id_from(data)
        if not game_id:
            return

        leave_room(game_room(game_id))
        game_logger.log_user_action(request, 'leave_game', game_id)

    @socketio.on('key_press')
    def handle_key_press(data):
        """Route a key press; the resulting board is broadcast to the room."""
        game_service, game_id = resolve_game(data)
        if not game_service:
            return

        key = data.get('key')
        if not isinstance(key, str):
            emit('error', {'error': 'Key is required'})
            return

        join_room(game_room(game_id))
        game_logger.log_user_action(request, 'key_press', game_id, key=key, transport='websocket')

        try:
            action, state = game_service.press_key(game_id, key)
        except KeyError:
            emit('error', {'error': 'Game not found'})
            return
        except InvalidWordError as e:
            game_logger.log_server_response(
                request, 'key_press', False, {'error': str(e)}, game_id,
                attempted_guess=e.guess, transport='websocket'
            )
            emit('invalid_word', {'game_id': game_id, 'guess': e.guess, 'error': str(e)})
            return

        if action is KeyAction.SUBMIT and state.status != 'playing':
            game_logger.log_game_event(
                game_id, f"game_{state.status}", request.remote_addr,
                rounds_used=state.cursor['row'], target_word=state.answer, via='websocket'
            )
