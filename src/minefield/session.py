"""
Reference driver for a board.

Maps abstract commands onto board operations and runs the end-of-game
reveal once, the way an interactive front end is expected to.
"""
import logging
from enum import Enum, auto
from typing import Dict, Optional, Sequence

from .board import Board, GameState
from .render import DEFAULT_PALETTE, RenderSink

logger = logging.getLogger(__name__)


class Command(Enum):
    """Player commands understood by the session."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    OPEN = auto()
    QUIT = auto()


KEY_BINDINGS: Dict[str, Command] = {
    "k": Command.UP,
    "w": Command.UP,
    "j": Command.DOWN,
    "s": Command.DOWN,
    "h": Command.LEFT,
    "a": Command.LEFT,
    "l": Command.RIGHT,
    "d": Command.RIGHT,
    "o": Command.OPEN,
    "q": Command.QUIT,
}


class GameSession:
    """
    Drives one board against one render sink.

    Args:
        board: The board to play. A new game needs a new session.
        sink: Renderer receiving the draw commands.
        palette: Colors registered with the sink on start.
    """

    def __init__(
        self,
        board: Board,
        sink: RenderSink,
        palette: Optional[Sequence] = None,
    ) -> None:
        self.board = board
        self.sink = sink
        self.palette = list(palette) if palette is not None else list(DEFAULT_PALETTE)
        self.ended = False

    def start(self) -> None:
        """Register the palette and draw the initial board."""
        self.sink.register(self.palette)
        self.board.refresh(self.sink)

    def handle(self, command: Command) -> bool:
        """
        Apply a command and redraw.

        Returns:
            False when the player asked to quit.
        """
        if command == Command.QUIT:
            return False
        if command == Command.UP:
            self.board.move_up()
        elif command == Command.DOWN:
            self.board.move_down()
        elif command == Command.LEFT:
            self.board.move_left()
        elif command == Command.RIGHT:
            self.board.move_right()
        elif command == Command.OPEN:
            self.board.click()
            if self._finish():
                return True
        self.board.refresh(self.sink)
        return True

    def handle_key(self, key: str) -> bool:
        """Apply the command bound to key; unbound keys are ignored."""
        command = KEY_BINDINGS.get(key)
        if command is None:
            return True
        return self.handle(command)

    def point(self, x: int, y: int) -> bool:
        """Move the cursor to a pointer position. False if off the board."""
        if not self.board.set_cursor(x, y):
            return False
        self.board.refresh(self.sink)
        return True

    def tick(self) -> None:
        self.board.tick(self.sink)

    def show_cursor_content(self) -> None:
        """
        Tick forward to the visible half of the blink cycle.

        Front ends that redraw only on input use this so the cell under
        the cursor shows its content instead of the cursor glyph.
        """
        while self.board.is_blinking():
            self.board.tick(self.sink)

    @property
    def outcome(self) -> GameState:
        return self.board.game_state

    def _finish(self) -> bool:
        """Run the end-of-game reveal once. True if it ran now."""
        if self.ended or not self.board.is_end:
            return False
        self.ended = True
        logger.info("Game over: %s", self.board.game_state.name)
        self.board.reveal_all(self.sink)
        return True
