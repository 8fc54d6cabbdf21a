"""
Cell module for the minefield core.

A cell is packed into a single byte. The lower nibble holds the content
(0 empty, 1-8 adjacent mine count, 15 mine) and the upper nibble holds
independent flags.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

VALUE_MASK = 0x0F
MINE = 0x0F
MAX_NEIGHBORS = 8

OPENED = 0x10
# Reserved marks. They have glyphs but no operation sets them yet.
QUESTIONED = 0x20
FLAGGED = 0x40
# Opened by the end-of-game reveal rather than by the player.
FORCE_OPENED = 0x80


class CellState(Enum):
    """Visual states of a cell, used to pick its color pair."""

    HIDDEN = auto()
    OPENED = auto()
    FORCE_OPENED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single grid position stored as one packed byte.

    Attributes:
        raw: The packed byte. Callers should go through the accessors.
    """

    raw: int = 0

    @property
    def value(self) -> int:
        """Lower nibble: 0-8 neighbor count, 15 mine, 9-14 reserved."""
        return self.raw & VALUE_MASK

    @property
    def is_mine(self) -> bool:
        return self.value == MINE

    @property
    def neighbor_count(self) -> int:
        """Adjacent mine count. Meaningless for a mine cell."""
        return self.value

    @property
    def is_opened(self) -> bool:
        return self.raw & OPENED != 0

    @property
    def is_force_opened(self) -> bool:
        return self.raw & FORCE_OPENED != 0

    @property
    def is_flagged(self) -> bool:
        return self.raw & FLAGGED != 0

    @property
    def is_questioned(self) -> bool:
        return self.raw & QUESTIONED != 0

    @property
    def state(self) -> CellState:
        if self.is_force_opened:
            return CellState.FORCE_OPENED
        if self.is_opened:
            return CellState.OPENED
        return CellState.HIDDEN

    def set_mine(self) -> None:
        """Turn this cell into a mine, clearing any other content."""
        self.raw = MINE

    def set_neighbor_count(self, count: int) -> None:
        """
        Store the adjacent mine count.

        Raises:
            ValueError: If count is outside 0-8.
        """
        if not 0 <= count <= MAX_NEIGHBORS:
            raise ValueError(f"Neighbor count out of range: {count}")
        self.raw = (self.raw & ~VALUE_MASK) | count

    def mark_opened(self, force: bool = False) -> bool:
        """
        Open this cell.

        Args:
            force: Set when opened by the end-of-game reveal. Only cells
                that were still closed get the force-opened flag.

        Returns:
            True if the cell was closed before this call.
        """
        if self.is_opened:
            return False
        if force:
            self.raw |= FORCE_OPENED
        self.raw |= OPENED
        return True
