"""
Board module for the minefield core.

Implements the grid state with lazy mine placement, flood-fill reveal,
win/loss detection, cursor movement, cursor blink timing and the
per-cell presentation handed to a render sink.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from .cell import Cell, CellState, MINE
from .render import (
    CLOSED_COLORS,
    CLOSED_GLYPH,
    CURSOR_GLYPH,
    DETONATED_GLYPH,
    ENDING_COLORS,
    OPENED_COLORS,
    STYLE_HINT,
    VALUE_GLYPHS,
    RenderSink,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place. Equal to width * height means
            every cell is a mine.
        blink_period: Ticks per full cursor blink cycle.
        tick_idle: Seconds the driver should wait between ticks.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10
    blink_period: int = 80
    tick_idle: float = 0.01

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")
        if self.blink_period < 2:
            raise ValueError("Blink period must be at least 2 ticks")
        if self.tick_idle < 0:
            raise ValueError("Tick idle cannot be negative")

    @property
    def total_cells(self) -> int:
        return self.width * self.height


class Presentation(NamedTuple):
    """What one cell looks like: its glyph and color pair codes."""

    glyph: str
    background: int
    foreground: int


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper board state machine.

    Owns the grid, the cursor and the tick counter. Mines are placed on
    the first reveal so the first opened cell is safe. Once the game has
    exploded or succeeded, reveals are ignored but the cursor, ticks and
    rendering keep working so the end screen can still animate.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    rng: random.Random = field(default_factory=random.Random, repr=False)
    cursor_row: int = field(default=0, init=False)
    cursor_col: int = field(default=0, init=False)
    tick_counter: int = field(default=0, init=False)
    _grid: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _started: bool = field(default=False, init=False)
    _exploded: bool = field(default=False, init=False)
    _succeeded: bool = field(default=False, init=False)
    _opened_count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mine_count(self) -> int:
        return self.config.num_mines

    @property
    def blink_period(self) -> int:
        return self.config.blink_period

    @property
    def tick_idle(self) -> float:
        return self.config.tick_idle

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create a closed grid with no mines."""
        self._grid = [
            [Cell() for _ in range(self.width)]
            for _ in range(self.height)
        ]

    def place_mines(self, exclude_row: int, exclude_col: int) -> None:
        """
        Place mines randomly and compute neighbor counts.

        Called by the first reveal. The excluded cell stays mine-free
        unless the mine count fills the whole board.

        Args:
            exclude_row: Row of the cell to keep safe.
            exclude_col: Column of the cell to keep safe.
        """
        if self._started:
            return
        self._started = True

        fill_all = self.mine_count == self.config.total_cells
        positions = list(range(self.config.total_cells))
        self.rng.shuffle(positions)

        placed = 0
        for index in positions:
            if placed >= self.mine_count:
                break
            row, col = divmod(index, self.width)
            if not fill_all and (row, col) == (exclude_row, exclude_col):
                continue
            self._grid[row][col].set_mine()
            placed += 1

        self._calculate_adjacent_mines()
        logger.debug(
            "Placed %d mines on %dx%d board, excluding (%d, %d)",
            placed, self.width, self.height, exclude_row, exclude_col,
        )

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for row in range(self.height):
            for col in range(self.width):
                cell = self._grid[row][col]
                if not cell.is_mine:
                    cell.set_neighbor_count(self._count_adjacent_mines(row, col))

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def get_neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions, clipped at the edges.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    def _cell(self, row: int, col: int) -> Cell:
        """Bounds-checked grid access."""
        if not self._is_valid_position(row, col):
            raise IndexError(f"Cell out of range: ({row}, {col})")
        return self._grid[row][col]

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        On the first call, places mines avoiding this cell. If the cell
        is empty (0 adjacent mines), opens its whole empty region and the
        numbered cells bordering it. Does nothing once the game has ended.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            False if this call hit a mine, True otherwise.

        Raises:
            IndexError: If the position is outside the board.
        """
        cell = self._cell(row, col)
        if self.is_end:
            return True

        if not self._started:
            self.place_mines(row, col)

        if cell.is_opened:
            return True

        if cell.is_mine:
            self._exploded = True
            logger.info("Mine hit at (%d, %d)", row, col)
            return False

        opened = self._flood_open(row, col)
        logger.debug("Reveal at (%d, %d) opened %d cells", row, col, opened)

        if self._opened_count + self.mine_count == self.config.total_cells:
            self._succeeded = True
            logger.info("All safe cells opened")
        return True

    def _flood_open(self, row: int, col: int) -> int:
        """
        Open a safe cell, spreading through empty neighbors.

        A zero-count cell has no mine neighbors, so the spread never
        reaches a mine.

        Returns:
            Number of cells opened.
        """
        opened = 0
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            cell = self._grid[current_row][current_col]
            if not cell.mark_opened():
                continue
            opened += 1
            if cell.neighbor_count != 0:
                continue
            for neighbor in self.get_neighbors(current_row, current_col):
                if not self._grid[neighbor[0]][neighbor[1]].is_opened:
                    stack.append(neighbor)
        self._opened_count += opened
        return opened

    def click(self) -> bool:
        """Reveal the cell under the cursor."""
        return self.reveal(self.cursor_row, self.cursor_col)

    def reveal_all(self, sink: RenderSink) -> None:
        """
        Open every cell for the end screen, then redraw.

        Cells that were still closed are marked force-opened so they get
        their own color. The opened count is left alone.
        """
        for row in self._grid:
            for cell in row:
                cell.mark_opened(force=True)
        logger.info("Revealed whole board (%s)", self.game_state.name)
        self.refresh(sink)

    # ========================================================================
    # Cursor
    # ========================================================================

    def move_up(self) -> None:
        if self.cursor_row > 0:
            self.cursor_row -= 1

    def move_down(self) -> None:
        if self.cursor_row < self.height - 1:
            self.cursor_row += 1

    def move_left(self) -> None:
        if self.cursor_col > 0:
            self.cursor_col -= 1

    def move_right(self) -> None:
        if self.cursor_col < self.width - 1:
            self.cursor_col += 1

    def set_cursor(self, x: int, y: int) -> bool:
        """
        Move the cursor to column x, row y.

        Returns:
            False, leaving the cursor untouched, if (x, y) is off the board.
        """
        if not self._is_valid_position(y, x):
            return False
        self.cursor_col = x
        self.cursor_row = y
        return True

    # ========================================================================
    # Ticks and Rendering
    # ========================================================================

    def is_blinking(self) -> bool:
        """True during the first half of the blink period."""
        return self.tick_counter < self.blink_period // 2

    def tick(self, sink: RenderSink) -> None:
        """
        Advance the blink timer, redrawing on each half-period boundary.
        """
        self.tick_counter += 1
        if self.tick_counter == self.blink_period // 2:
            self.refresh(sink)
        elif self.tick_counter >= self.blink_period:
            self.reset_tick(sink)

    def reset_tick(self, sink: RenderSink) -> None:
        self.tick_counter = 0
        self.refresh(sink)

    def cell_presentation(self, row: int, col: int) -> Presentation:
        """
        Work out the glyph and color pair for one cell.

        The cursor cell shows the detonated glyph after an explosion on a
        mine, otherwise the cursor glyph while blinking. Nothing overrides
        the board once the game is won.
        """
        cell = self._cell(row, col)
        glyph = VALUE_GLYPHS[cell.value] if cell.is_opened else CLOSED_GLYPH

        on_cursor = (row, col) == (self.cursor_row, self.cursor_col)
        if on_cursor and not self._succeeded:
            if self._exploded and cell.is_mine:
                glyph = DETONATED_GLYPH
            elif self.is_blinking():
                glyph = CURSOR_GLYPH

        state = cell.state
        if state == CellState.FORCE_OPENED:
            background, foreground = ENDING_COLORS
        elif state == CellState.OPENED:
            background, foreground = OPENED_COLORS
        else:
            background, foreground = CLOSED_COLORS
        return Presentation(glyph, background, foreground)

    def refresh(self, sink: RenderSink) -> None:
        """Send every cell to the sink in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                glyph, background, foreground = self.cell_presentation(row, col)
                sink.write(col, row, STYLE_HINT, background, foreground, glyph)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def started(self) -> bool:
        """Whether mines have been placed."""
        return self._started

    @property
    def exploded(self) -> bool:
        return self._exploded

    @property
    def succeeded(self) -> bool:
        return self._succeeded

    @property
    def opened_count(self) -> int:
        """Safe cells opened by reveals."""
        return self._opened_count

    @property
    def is_end(self) -> bool:
        return self._exploded or self._succeeded

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        if self._exploded:
            return GameState.LOST
        if self._succeeded:
            return GameState.WON
        return GameState.PLAYING

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def get_observation(self) -> np.ndarray:
        """
        Get the raw packed cell bytes as a (height, width) uint8 array.
        """
        obs = np.zeros((self.height, self.width), dtype=np.uint8)
        for row in range(self.height):
            for col in range(self.width):
                obs[row, col] = self._grid[row][col].raw
        return obs

    def mine_mask(self) -> np.ndarray:
        """Boolean (height, width) array, True where a mine sits."""
        return (self.get_observation() & MINE) == MINE
