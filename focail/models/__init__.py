"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import BoardSnapshot, Cell, CellState, Cursor, GameStatus, KeyAction

__all__ = ['BoardSnapshot', 'Cell', 'CellState', 'Cursor', 'GameStatus', 'KeyAction']
