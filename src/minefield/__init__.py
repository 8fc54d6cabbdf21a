"""
Minefield game core.

Provides board state, mine placement, reveal logic and the render
contract used by front ends.
"""
from .cell import Cell, CellState
from .board import Board, BoardConfig, GameState, Presentation
from .errors import RenderError
from .render import DEFAULT_PALETTE, STYLE_HINT, RenderSink, TextRenderer
from .session import Command, GameSession, KEY_BINDINGS

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "GameState",
    "Presentation",
    "RenderError",
    "DEFAULT_PALETTE",
    "STYLE_HINT",
    "RenderSink",
    "TextRenderer",
    "Command",
    "GameSession",
    "KEY_BINDINGS",
]
