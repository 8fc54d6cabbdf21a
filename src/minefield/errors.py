"""
Exceptions raised by the minefield package.
"""


class RenderError(Exception):
    """A render sink could not draw or look up a color."""
