"""
Pytest configuration and shared fixtures.
"""
import random
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, TextRenderer, DEFAULT_PALETTE


# ============================================================================
# Helpers
# ============================================================================

class ScriptedRandom(random.Random):
    """Random source whose shuffle puts chosen indices first, in order."""

    def __init__(self, *, first: Iterable[int]) -> None:
        super().__init__(0)
        self.first = list(first)

    def shuffle(self, x: List[int]) -> None:  # type: ignore[override]
        rest = [i for i in x if i not in self.first]
        x[:] = [i for i in self.first if i in x] + rest


def rigged_board(
    width: int,
    height: int,
    mines: Iterable[Tuple[int, int]],
    blink_period: int = 80,
) -> Board:
    """Board whose mines land on the given (row, col) positions."""
    positions = list(mines)
    rng = ScriptedRandom(first=[row * width + col for row, col in positions])
    config = BoardConfig(width, height, len(positions), blink_period=blink_period)
    return Board(config, rng=rng)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board(rng=random.Random(1234))


@pytest.fixture
def small_board() -> Board:
    """3x3 board with its single mine in the bottom-right corner."""
    return rigged_board(3, 3, [(2, 2)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def full_board() -> Board:
    """Board where every cell is a mine."""
    return Board(BoardConfig(3, 2, 6), rng=random.Random(7))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    cell = Cell()
    cell.set_mine()
    return cell


# ============================================================================
# Renderer Fixtures
# ============================================================================

@pytest.fixture
def renderer() -> TextRenderer:
    """9x9 text renderer with the default palette registered."""
    sink = TextRenderer(9, 9)
    sink.register(DEFAULT_PALETTE)
    return sink


@pytest.fixture
def small_renderer() -> TextRenderer:
    sink = TextRenderer(3, 3)
    sink.register(DEFAULT_PALETTE)
    return sink


@pytest.fixture
def rigged():
    """Factory for boards with chosen mine positions."""
    return rigged_board
