"""Kisyu - a minimal terminal text editor."""

from .row import Row, Rendering, render_text
from .buffer import Buffer, CursorMove, RowOutOfRangeError

__all__ = [
    'Row',
    'Rendering',
    'render_text',
    'Buffer',
    'CursorMove',
    'RowOutOfRangeError',
]
