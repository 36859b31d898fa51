# src/snake_arcade/__init__.py
"""Real-time Snake: a headless simulation core plus a pygame shell."""

from .game import Cell, Direction, GameState, Phase, Snapshot, new_game_state
from .loop import GameLoop, InputEvent, Key

__all__ = [
    "Cell", "Direction", "GameState", "Phase", "Snapshot", "new_game_state",
    "GameLoop", "InputEvent", "Key",
]
