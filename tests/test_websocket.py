import gc
import weakref

import pytest


def events(socket_client, name):
    return [message['args'][0] for message in socket_client.get_received() if message['name'] == name]


def test_join_game_sends_current_board(service, socket_client):
    game_id = service.create_new_game()

    socket_client.emit('join_game', {'game_id': game_id})

    updates = events(socket_client, 'board_update')
    assert len(updates) == 1
    assert updates[0]['game_id'] == game_id
    assert updates[0]['status'] == 'playing'


def test_join_unknown_game(socket_client):
    socket_client.emit('join_game', {'game_id': 'missing'})

    assert events(socket_client, 'error') == [{'error': 'Game not found'}]


def test_join_requires_game_id(socket_client):
    socket_client.emit('join_game', {})

    assert events(socket_client, 'error') == [{'error': 'Game ID is required'}]


def test_key_press_broadcasts_board(service, socket_client):
    game_id = service.create_new_game()

    socket_client.emit('key_press', {'game_id': game_id, 'key': 'a'})

    updates = events(socket_client, 'board_update')
    assert updates[-1]['grid'][0][0] == {'letter': 'A', 'state': 'default'}
    assert updates[-1]['cursor'] == {'row': 0, 'col': 1}


def test_key_press_invalid_word(service, socket_client):
    game_id = service.create_new_game()
    for letter in 'zzzzz':
        socket_client.emit('key_press', {'game_id': game_id, 'key': letter})
    socket_client.get_received()

    socket_client.emit('key_press', {'game_id': game_id, 'key': 'ENTER'})

    invalid = events(socket_client, 'invalid_word')
    assert invalid == [{'game_id': game_id, 'guess': 'ZZZZZ', 'error': 'ZZZZZ is not in the word list'}]


def test_key_press_requires_key(service, socket_client):
    game_id = service.create_new_game()

    socket_client.emit('key_press', {'game_id': game_id})

    assert events(socket_client, 'error') == [{'error': 'Key is required'}]


def test_http_key_press_reaches_watchers(service, client, socket_client):
    game_id = service.create_new_game()
    socket_client.emit('join_game', {'game_id': game_id})
    socket_client.get_received()

    client.post(f'/api/game/{game_id}/key', json={'key': 'b'})

    updates = events(socket_client, 'board_update')
    assert updates[-1]['grid'][0][0]['letter'] == 'B'


def test_reset_pushes_fresh_board(service, client, socket_client):
    game_id = service.create_new_game()
    socket_client.emit('key_press', {'game_id': game_id, 'key': 'a'})
    socket_client.get_received()

    client.post(f'/api/game/{game_id}/reset')

    updates = events(socket_client, 'board_update')
    assert updates[-1]['cursor'] == {'row': 0, 'col': 0}
    assert updates[-1]['game_id'] == game_id


def test_leave_game_stops_updates(service, client, socket_client):
    game_id = service.create_new_game()
    socket_client.emit('join_game', {'game_id': game_id})
    socket_client.emit('leave_game', {'game_id': game_id})
    socket_client.get_received()

    client.post(f'/api/game/{game_id}/key', json={'key': 'c'})

    assert events(socket_client, 'board_update') == []


@pytest.mark.parametrize('event', ['join_game', 'leave_game', 'key_press'])
@pytest.mark.parametrize('payload', ['not-a-dict', ['x'], 7])
def test_events_require_an_object_payload(socket_client, event, payload):
    socket_client.emit(event, payload)

    assert events(socket_client, 'error') == [{'error': 'Game ID is required'}]


def test_deleted_game_is_released_after_join(service, client, socket_client):
    game_id = service.create_new_game()
    game_ref = weakref.ref(service.get_game(game_id))
    socket_client.emit('join_game', {'game_id': game_id})

    client.delete(f'/api/game/{game_id}')
    gc.collect()

    assert game_ref() is None


def test_reset_game_is_released_after_join(service, client, socket_client):
    game_id = service.create_new_game()
    game_ref = weakref.ref(service.get_game(game_id))
    socket_client.emit('join_game', {'game_id': game_id})

    client.post(f'/api/game/{game_id}/reset')
    gc.collect()

    assert game_ref() is None
    socket_client.get_received()
    client.post(f'/api/game/{game_id}/key', json={'key': 'd'})
    assert events(socket_client, 'board_update')[-1]['grid'][0][0]['letter'] == 'D'
