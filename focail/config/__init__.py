"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game constants and language packs (business data)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    LANGUAGES, MAX_GUESSES, WORD_LENGTH, LanguagePack,
    get_language_pack, get_word_statistics, validate_language_pack,
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game settings
    'LANGUAGES', 'MAX_GUESSES', 'WORD_LENGTH', 'LanguagePack',
    'get_language_pack', 'get_word_statistics', 'validate_language_pack',
]
