import pytest

from focail.config.game_settings import (
    KEYBOARD_LAYOUT_EN, KEYBOARD_LAYOUT_IR, LANGUAGES, WORD_LENGTH, LanguagePack,
    get_language_pack, get_word_statistics, validate_language_pack,
)


def make_pack(words, meanings=None):
    return LanguagePack(code='XX', title='Test', keyboard_layout=KEYBOARD_LAYOUT_EN,
                        words=tuple(words), meanings=meanings)


def test_both_languages_are_loaded():
    assert set(LANGUAGES) == {'EN', 'IR'}
    assert LANGUAGES['EN'].title == 'Wordle'
    assert LANGUAGES['IR'].title == 'Focail'


def test_alphabets_exclude_control_keys():
    english = LANGUAGES['EN'].alphabet
    irish = LANGUAGES['IR'].alphabet

    assert len(english) == 26
    assert 'ENTER' not in english and 'BACKSPACE' not in english
    assert len(irish) == 25
    assert 'Á' in irish and 'J' not in irish


def test_loaded_word_lists_are_valid():
    for pack in LANGUAGES.values():
        assert validate_language_pack(pack)
        assert all(len(word) == WORD_LENGTH for word in pack.words)


def test_irish_meanings():
    pack = get_language_pack('ir')

    assert pack.meaning_of('focal') == 'a word'
    assert pack.meaning_of('FOCAL') == 'a word'
    assert pack.meaning_of('eolas') is None
    assert LANGUAGES['EN'].meaning_of('apple') is None


def test_unknown_language():
    with pytest.raises(ValueError):
        get_language_pack('FR')


@pytest.mark.parametrize('words,meanings', [
    ([], None),
    (['four'], None),
    (['Apple'], None),
    (['héllo'], None),
    (['apple', 'apple'], None),
    (['apple'], {'grape': 'a fruit'}),
])
def test_validation_rejects_bad_packs(words, meanings):
    with pytest.raises(ValueError):
        validate_language_pack(make_pack(words, meanings))


def test_irish_layout_letters_accept_fadas():
    pack = LanguagePack(code='IR', title='Focail', keyboard_layout=KEYBOARD_LAYOUT_IR, words=('bláth',))

    assert validate_language_pack(pack)


def test_word_statistics():
    stats = get_word_statistics('EN')

    assert stats['total_words'] == len(LANGUAGES['EN'].words)
    assert stats['words_with_meaning'] == 0
    assert sum(stats['letter_frequency'].values()) == WORD_LENGTH * stats['total_words']
    assert len(stats['most_common_letters']) == 5
    assert get_word_statistics('IR')['words_with_meaning'] > 0
