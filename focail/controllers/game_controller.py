"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from dataclasses import asdict
from ..models.game import KeyAction
from ..services.wordle_game import InvalidWordError
from ..utils.decorators import require_game, require_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import error_response

game_bp = Blueprint('game', __name__)


def _log_game_over(game_id, state, action):
    """Emit game_won/game_lost once the snapshot turns terminal."""
    if state.status == 'won':
        game_logger.log_game_event(
            game_id, 'game_won', request.remote_addr,
            rounds_used=state.cursor['row'], target_word=state.answer, via=action
        )
    elif state.status == 'lost':
        game_logger.log_game_event(
            game_id, 'game_lost', request.remote_addr,
            rounds_used=state.cursor['row'], target_word=state.answer, via=action
        )


def _json_object():
    """Request body as a dict; a missing body counts as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')
    return data


def _language_from_body(data):
    language = data.get('language')
    if language is not None and not isinstance(language, str):
        raise ValueError('Language must be a string')
    return language


@game_bp.route('/new_game', methods=['POST'])
@require_game_service
def new_game(game_service):
    """Create a new game session."""
    try:
        game_logger.log_user_action(request, 'new_game')

        try:
            data = _json_object()
            game_id = game_service.create_new_game(_language_from_body(data))
        except ValueError as e:
            game_logger.log_server_response(request, 'new_game', False, {'error': str(e)})
            return error_response(str(e), 400)

        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            word_length=state.word_length, max_guesses=state.max_guesses
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        return error_response(str(e), 500)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game
def get_state(game_service, game_id):
    """Get current game state."""
    game_logger.log_user_action(request, 'get_state', game_id)

    state = game_service.get_game_state(game_id)
    response_data = {
        'success': True,
        'state': asdict(state)
    }

    game_logger.log_server_response(request, 'get_state', True, response_data, game_id, status=state.status)
    return jsonify(response_data)


@game_bp.route('/game/<game_id>/key', methods=['POST'])
@require_game
def press_key(game_service, game_id):
    """Route one key press (a letter, ENTER or BACKSPACE) to the game."""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get('key'), str):
            game_logger.log_server_response(request, 'key_press', False, {'error': 'Key is required'}, game_id)
            return error_response('Key is required', 400)

        key = data['key']
        game_logger.log_user_action(request, 'key_press', game_id, key=key)

        try:
            action, state = game_service.press_key(game_id, key)
        except KeyError:
            return error_response('Game not found', 404)
        except InvalidWordError as e:
            response_data = {
                'success': False,
                'error': str(e),
                'guess': e.guess,
                'state': asdict(game_service.get_game_state(game_id))
            }
            game_logger.log_server_response(
                request, 'key_press', False, response_data, game_id,
                validation_error=str(e), attempted_guess=e.guess
            )
            return jsonify(response_data), 400

        response_data = {
            'success': True,
            'action': action.value if action else None,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'key_press', True, response_data, game_id,
            key=key, action=response_data['action']
        )

        if action is KeyAction.SUBMIT:
            _log_game_over(game_id, state, 'http')

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'key_press', game_id)
        return error_response(str(e), 500)


@game_bp.route('/game/<game_id>/reset', methods=['POST'])
@require_game
def reset_game(game_service, game_id):
    """Discard the current board and start again with a new word."""
    game_logger.log_user_action(request, 'reset_game', game_id)

    state = game_service.reset_game(game_id)
    if state is None:
        return error_response('Game not found', 404)

    response_data = {
        'success': True,
        'state': asdict(state)
    }

    game_logger.log_server_response(request, 'reset_game', True, response_data, game_id)
    game_logger.log_game_event(game_id, 'game_reset', request.remote_addr, language=state.language)
    return jsonify(response_data)


@game_bp.route('/game/<game_id>/language', methods=['POST'])
@require_game
def switch_language(game_service, game_id):
    """Start again in another language (toggles EN/IR when none is given)."""
    game_logger.log_user_action(request, 'switch_language', game_id)

    try:
        data = _json_object()
        state = game_service.switch_language(game_id, _language_from_body(data))
    except ValueError as e:
        game_logger.log_server_response(request, 'switch_language', False, {'error': str(e)}, game_id)
        return error_response(str(e), 400)

    if state is None:
        return error_response('Game not found', 404)

    response_data = {
        'success': True,
        'state': asdict(state)
    }

    game_logger.log_server_response(request, 'switch_language', True, response_data, game_id)
    game_logger.log_game_event(game_id, 'language_switched', request.remote_addr, language=state.language)
    return jsonify(response_data)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@require_game_service
def delete_game(game_service, game_id):
    """Delete a game session."""
    game_logger.log_user_action(request, 'delete_game', game_id)

    success = game_service.delete_game(game_id)
    response_data = {
        'success': success
    }

    game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

    if not success:
        return error_response('Game not found', 404)

    game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)
    return jsonify(response_data)


@game_bp.route('/languages', methods=['GET'])
@require_game_service
def list_languages(game_service):
    """Keyboard layouts and titles for every supported language."""
    return jsonify({
        'success': True,
        'languages': game_service.get_languages()
    })


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    from ..services.game_service import get_game_service

    game_service = get_game_service()
    game_logger.log_user_action(request, 'health_check')

    response_data = {
        'status': 'healthy' if game_service else 'degraded',
        'active_games': len(game_service.games) if game_service else 0,
        'log_stats': game_logger.get_log_stats()
    }

    game_logger.log_server_response(request, 'health_check', True, response_data)
    return jsonify(response_data)
