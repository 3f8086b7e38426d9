"""
Game Configuration Constants Module

This module defines the game constants and the per-language data tables
(keyboard layout, word list, optional meanings). Word lists are loaded from
JSON files that live next to this module and are validated on import.
"""

import json
import os
from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Final, List, Mapping, Optional, Tuple

WORD_LENGTH: Final[int] = 5
"""Number of letters in every target and guess."""

MAX_GUESSES: Final[int] = 6
"""Default number of guess attempts allowed per game."""

ENTER_KEY: Final[str] = "ENTER"
BACKSPACE_KEY: Final[str] = "BACKSPACE"
CONTROL_KEYS: Final[Tuple[str, ...]] = (ENTER_KEY, BACKSPACE_KEY)

KEYBOARD_LAYOUT_EN: Final[Tuple[Tuple[str, ...], ...]] = (
    ('Q', 'W', 'E', 'R', 'T', 'Y', 'U', 'I', 'O', 'P'),
    ('A', 'S', 'D', 'F', 'G', 'H', 'J', 'K', 'L'),
    (ENTER_KEY, 'Z', 'X', 'C', 'V', 'B', 'N', 'M', BACKSPACE_KEY),
)

KEYBOARD_LAYOUT_IR: Final[Tuple[Tuple[str, ...], ...]] = (
    ('A', 'Á', 'E', 'É', 'I', 'Í', 'O', 'Ó', 'U', 'Ú'),
    ('B', 'C', 'D', 'F', 'G', 'H', 'K', 'L', 'M', 'N'),
    (ENTER_KEY, 'P', 'R', 'S', 'T', 'V', BACKSPACE_KEY),
)


@dataclass(frozen=True)
class LanguagePack:
    """Static data for one language: what to show, what to accept."""
    code: str
    title: str
    keyboard_layout: Tuple[Tuple[str, ...], ...]
    words: Tuple[str, ...]
    meanings: Optional[Mapping[str, str]] = None

    @property
    def alphabet(self) -> Tuple[str, ...]:
        return tuple(key for row in self.keyboard_layout for key in row if key not in CONTROL_KEYS)

    def meaning_of(self, word: str) -> Optional[str]:
        if not self.meanings:
            return None
        return self.meanings.get(word.lower())


def _data_path(filename: str) -> str:
    config_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(config_dir, filename)


def _load_json(filename: str):
    json_file_path = _data_path(filename)
    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")


def _load_word_list(filename: str) -> List[str]:
    """
    Load a word list from a JSON array file.

    Raises:
        FileNotFoundError: If the file is not found
        json.JSONDecodeError: If the file is malformed
        ValueError: If the word list is empty or not an array
    """
    word_list = _load_json(filename)

    if not isinstance(word_list, list):
        raise ValueError(f"{filename} must contain an array of words")

    if not word_list:
        raise ValueError(f"Word list in {filename} cannot be empty")

    return word_list


def _load_meanings(filename: str) -> Dict[str, str]:
    """Load a ``[{"word": ..., "meaning": ...}]`` table into a dict."""
    entries = _load_json(filename)

    if not isinstance(entries, list):
        raise ValueError(f"{filename} must contain an array of entries")

    return {entry['word']: entry['meaning'] for entry in entries}


def validate_language_pack(pack: LanguagePack) -> bool:
    """
    Validates the integrity and consistency of a language pack.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly WORD_LENGTH characters
    2. Alphabet validation: Only letters present on the pack's keyboard
    3. Format validation: Consistent lowercase formatting
    4. Uniqueness validation: No duplicate entries
    5. Meaning validation: Every meaning refers to a listed word

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not pack.words:
        raise ValueError(f"Word list for {pack.code} cannot be empty")

    alphabet = set(pack.alphabet)
    for index, word in enumerate(pack.words):
        if len(word) != WORD_LENGTH:
            raise ValueError(f"{pack.code} word at index {index} '{word}' is not {WORD_LENGTH} characters long")

        if word != word.lower():
            raise ValueError(f"{pack.code} word at index {index} '{word}' is not in lowercase format")

        unknown = [char for char in word.upper() if char not in alphabet]
        if unknown:
            raise ValueError(f"{pack.code} word at index {index} '{word}' uses letters not on the keyboard: {unknown}")

    duplicates = [word for word, count in Counter(pack.words).items() if count > 1]
    if duplicates:
        raise ValueError(f"Duplicate words found in {pack.code} word list: {duplicates}")

    if pack.meanings:
        orphans = sorted(set(pack.meanings) - set(pack.words))
        if orphans:
            raise ValueError(f"Meanings given for words not in {pack.code} word list: {orphans}")

    return True


def _build_languages() -> Dict[str, LanguagePack]:
    packs = (
        LanguagePack(
            code='EN',
            title='Wordle',
            keyboard_layout=KEYBOARD_LAYOUT_EN,
            words=tuple(_load_word_list('words_en.json')),
        ),
        LanguagePack(
            code='IR',
            title='Focail',
            keyboard_layout=KEYBOARD_LAYOUT_IR,
            words=tuple(_load_word_list('words_ir.json')),
            meanings=MappingProxyType(_load_meanings('words_ir_meanings.json')),
        ),
    )
    for pack in packs:
        validate_language_pack(pack)
    return {pack.code: pack for pack in packs}


LANGUAGES: Final[Mapping[str, LanguagePack]] = MappingProxyType(_build_languages())
"""Language packs keyed by code; built and validated on import."""


def get_language_pack(code: str) -> LanguagePack:
    """Look up a language pack, case-insensitively."""
    try:
        return LANGUAGES[code.upper()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown language '{code}'. Must be one of {sorted(LANGUAGES)}")


def get_word_statistics(code: str) -> dict:
    """
    Analyzes a language's word list and returns statistical information.

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of words in the list
            - words_with_meaning: Number of words that carry a definition
            - letter_frequency: Distribution of letters across all words
            - most_common_letters: Top five letters by frequency
    """
    pack = get_language_pack(code)

    letter_frequency = Counter(char.upper() for word in pack.words for char in word)

    return {
        "language": pack.code,
        "total_words": len(pack.words),
        "words_with_meaning": len(pack.meanings or {}),
        "letter_frequency": dict(letter_frequency),
        "most_common_letters": letter_frequency.most_common(5)
    }


if __name__ == "__main__":

    for language in LANGUAGES:
        print(f" {language} statistics: {get_word_statistics(language)}")

    print(" All configuration validation checks passed")
