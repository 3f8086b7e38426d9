import gc
import sys
import threading
import weakref

import pytest

from focail.config.game_settings import LANGUAGES
from focail.models.game import KeyAction
from focail.services.game_service import GameService, get_game_service, initialize_game_service
from focail.services.wordle_game import InvalidWordError


@pytest.fixture
def service(first_word):
    return GameService()


def test_create_new_game(service):
    game_id = service.create_new_game()

    state = service.get_game_state(game_id)
    assert state.game_id == game_id
    assert state.language == 'EN'
    assert state.answer is None
    assert service.get_game(game_id).target_word == LANGUAGES['EN'].words[0]


def test_create_game_in_irish(service):
    game_id = service.create_new_game('ir')

    game = service.get_game(game_id)
    assert game.language == 'IR'
    assert game.target_word == 'focal'
    assert game.max_guesses == 6


def test_unknown_language_is_rejected(service):
    with pytest.raises(ValueError):
        service.create_new_game('FR')


def test_unknown_game(service):
    assert service.get_game_state('missing') is None
    assert service.reset_game('missing') is None
    assert service.switch_language('missing') is None
    assert service.delete_game('missing') is False
    with pytest.raises(KeyError):
        service.press_key('missing', 'A')


def test_press_key_plays_the_game(service):
    game_id = service.create_new_game('EN')

    for letter in 'about':
        assert service.press_key(game_id, letter)[0] is KeyAction.INSERT
    action, state = service.press_key(game_id, 'ENTER')

    assert action is KeyAction.SUBMIT
    assert state.game_id == game_id
    assert state.status == 'won'
    assert state.answer == 'about'


def test_press_key_rejects_unknown_words(service):
    game_id = service.create_new_game('EN')
    for letter in 'zzzzz':
        service.press_key(game_id, letter)

    with pytest.raises(InvalidWordError):
        service.press_key(game_id, 'ENTER')


def test_reset_discards_the_board(service):
    game_id = service.create_new_game('IR')
    old_game = service.get_game(game_id)
    service.press_key(game_id, 'f')

    state = service.reset_game(game_id)

    assert service.get_game(game_id) is not old_game
    assert state.cursor == {'row': 0, 'col': 0}
    assert state.language == 'IR'


def test_listeners_follow_the_session_across_reset(service):
    game_id = service.create_new_game()
    received = []
    service.subscribe(lambda gid, snapshot: received.append((gid, snapshot)))

    service.reset_game(game_id)
    assert len(received) == 1
    assert received[0][0] == game_id

    service.press_key(game_id, 'a')
    assert received[-1][1].cursor == {'row': 0, 'col': 1}
    assert received[-1][1].game_id == game_id


def test_subscribe_is_idempotent(service):
    game_id = service.create_new_game()
    received = []

    def listener(gid, snapshot):
        received.append(snapshot)

    service.subscribe(listener)
    unsubscribe = service.subscribe(listener)

    service.press_key(game_id, 'a')
    assert len(received) == 1

    unsubscribe()
    service.press_key(game_id, 'b')
    assert len(received) == 1


def test_switch_language_toggles(service):
    game_id = service.create_new_game('EN')

    assert service.switch_language(game_id).language == 'IR'
    assert service.switch_language(game_id).language == 'EN'
    assert service.switch_language(game_id, 'ir').language == 'IR'

    with pytest.raises(ValueError):
        service.switch_language(game_id, 'FR')


def test_get_languages(service):
    languages = {entry['code']: entry for entry in service.get_languages()}

    assert languages['EN']['keyboard_layout'][2][0] == 'ENTER'
    assert languages['IR']['title'] == 'Focail'


def test_delete_game(service):
    game_id = service.create_new_game()

    assert service.delete_game(game_id) is True
    assert service.get_game(game_id) is None


def test_custom_max_guesses(first_word):
    service = GameService(max_guesses=3)
    game_id = service.create_new_game()

    assert service.get_game_state(game_id).max_guesses == 3
    assert len(service.get_game_state(game_id).grid) == 3


def test_global_service():
    service = initialize_game_service(default_language='ir')

    assert get_game_service() is service
    assert service.default_language == 'IR'


def test_deleted_game_is_released(service):
    game_id = service.create_new_game()
    service.subscribe(lambda gid, snapshot: None)
    game_ref = weakref.ref(service.get_game(game_id))

    service.delete_game(game_id)
    gc.collect()

    assert game_ref() is None
    assert game_id not in service.locks


def test_replaced_game_is_released(service):
    game_id = service.create_new_game()
    service.subscribe(lambda gid, snapshot: None)
    game_ref = weakref.ref(service.get_game(game_id))

    service.reset_game(game_id)
    gc.collect()

    assert game_ref() is None


def test_replaced_game_no_longer_publishes(service):
    game_id = service.create_new_game()
    old_game = service.get_game(game_id)
    received = []
    service.subscribe(lambda gid, snapshot: received.append(snapshot))
    service.reset_game(game_id)
    received.clear()

    old_game.press_key('a')

    assert received == []


def test_concurrent_key_presses_stay_in_bounds(service):
    game_id = service.create_new_game()
    errors = []

    def press_many():
        try:
            for _ in range(3):
                service.press_key(game_id, 'a')
        except Exception as e:
            errors.append(e)

    interval = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    try:
        for _ in range(50):
            service.reset_game(game_id)
            threads = [threading.Thread(target=press_many) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

            state = service.get_game_state(game_id)
            assert state.cursor == {'row': 0, 'col': 5}
            assert [cell['letter'] for cell in state.grid[0]] == ['A'] * 5
    finally:
        sys.setswitchinterval(interval)

    assert errors == []
