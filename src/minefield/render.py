"""
Render contract between the board and a concrete display.

The board never draws anything itself. It emits one write per cell to a
RenderSink, passing a glyph and a pair of numeric color codes that the
sink resolves against the palette it was given at registration.
"""
from typing import Dict, Generic, List, Optional, Protocol, Sequence, Tuple, TypeVar

from .errors import RenderError


# ============================================================================
# Constants
# ============================================================================

# Opaque style value passed through on every write.
STYLE_HINT = 3

# Indexed by mark: closed, detonated, questioned, flagged, cursor.
MARK_GLYPHS = "L*??PPPP++++++++"
# Indexed by cell value: empty, counts, reserved, mine.
VALUE_GLYPHS = "_12345678......@"

CLOSED_GLYPH = MARK_GLYPHS[0]
DETONATED_GLYPH = MARK_GLYPHS[1]
QUESTION_GLYPH = MARK_GLYPHS[2]
FLAG_GLYPH = MARK_GLYPHS[4]
CURSOR_GLYPH = MARK_GLYPHS[15]

# Color pair codes (background, foreground).
CLOSED_COLORS = (0, 1)
OPENED_COLORS = (2, 3)
ENDING_COLORS = (4, 5)

# Palette for TextRenderer, indexed by the codes above.
DEFAULT_PALETTE = ("blue", "white", "black", "white", "red", "yellow")

ANSI_COLORS: Dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}

T = TypeVar("T")


# ============================================================================
# Render Sink Protocol
# ============================================================================

class RenderSink(Protocol[T]):
    """
    Capabilities a renderer must offer the board.

    Any method may raise; the board lets the exception propagate to its
    caller without undoing the state change that led to the render.
    """

    def write(
        self,
        x: int,
        y: int,
        style: int,
        background: int,
        foreground: int,
        text: str,
    ) -> None:
        """Draw one cell's text at grid coordinate (x, y)."""
        ...

    def register(self, colors: Sequence[T]) -> None:
        """Register the palette, indexed by color code."""
        ...

    def lookup_color(self, code: int) -> T:
        """Resolve a color code to the renderer's own color type."""
        ...


# ============================================================================
# Text Renderer
# ============================================================================

class TextRenderer(Generic[T]):
    """
    In-memory render sink that keeps the last write per coordinate.

    Useful for terminals without cursor addressing and for tests. Colors
    are only resolved when rendering with ANSI output enabled.
    """

    def __init__(self, width: int, height: int, ansi: bool = False) -> None:
        self.width = width
        self.height = height
        self.ansi = ansi
        self.write_count = 0
        self._colors: Optional[List[T]] = None
        self._cells: List[List[Tuple[str, int, int]]] = [
            [(" ", 0, 0) for _ in range(width)] for _ in range(height)
        ]

    def register(self, colors: Sequence[T]) -> None:
        self._colors = list(colors)

    def lookup_color(self, code: int) -> T:
        if self._colors is None:
            raise RenderError("No palette registered")
        if not 0 <= code < len(self._colors):
            raise RenderError(f"Unknown color code: {code}")
        return self._colors[code]

    def write(
        self,
        x: int,
        y: int,
        style: int,
        background: int,
        foreground: int,
        text: str,
    ) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise RenderError(f"Write outside renderer bounds: ({x}, {y})")
        self.lookup_color(background)
        self.lookup_color(foreground)
        self._cells[y][x] = (text, background, foreground)
        self.write_count += 1

    def glyph_at(self, x: int, y: int) -> str:
        """Get the last glyph written at (x, y)."""
        return self._cells[y][x][0]

    def colors_at(self, x: int, y: int) -> Tuple[int, int]:
        """Get the last (background, foreground) codes written at (x, y)."""
        _, background, foreground = self._cells[y][x]
        return background, foreground

    def render(self) -> str:
        """Render the board as text, one line per row."""
        lines = []
        for row in self._cells:
            if self.ansi:
                lines.append("".join(self._colorize(*cell) for cell in row))
            else:
                lines.append("".join(text for text, _, _ in row))
        return "\n".join(lines)

    def _colorize(self, text: str, background: int, foreground: int) -> str:
        """Wrap text in ANSI SGR codes for its color pair."""
        bg = ANSI_COLORS.get(str(self.lookup_color(background)), 0)
        fg = ANSI_COLORS.get(str(self.lookup_color(foreground)), 7)
        return f"\x1b[{40 + bg};{30 + fg}m{text}\x1b[0m"
