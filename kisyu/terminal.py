"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import os
import select
import sys
from typing import Optional

import blessed

from .constants import EditorConstants

logger = logging.getLogger(__name__)

RESIZE = object()  # Returned by poll_event when the terminal was resized


class TerminalInterface:
    """Cell-addressed terminal screen.

    Drawing goes into a back buffer of (glyph, style) cells via set_cell;
    flush writes the rows that changed since the last frame and places the
    cursor.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._cells: list[list[tuple[str, int]]] = []
        self._last_lines: Optional[list[str]] = None
        self._cursor: Optional[tuple[int, int]] = None
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None
        self.clear()

    def setup(self):
        """Enter fullscreen mode and start reading keys."""
        print(self.term.enter_fullscreen + self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        self._last_lines = None
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            # Enter raw mode immediately so reads work
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen + self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        for fd in (self._resize_pipe_r, self._resize_pipe_w):
            if fd is not None:
                os.close(fd)
        self._resize_pipe_r = self._resize_pipe_w = None

    def notify_resize(self):
        """Wake up poll_event; safe to call from a signal handler."""
        if self._resize_pipe_w is not None:
            os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    @property
    def size(self) -> tuple[int, int]:
        """Terminal size as (columns, rows)."""
        return self.term.width, self.term.height

    def clear(self):
        """Blank the back buffer, resizing it to the current terminal size."""
        width, height = self.size
        if len(self._cells) != height or (self._cells and len(self._cells[0]) != width):
            self._last_lines = None
        self._cells = [[(' ', EditorConstants.STYLE_NORMAL)] * width for _ in range(height)]
        self._cursor = None

    def set_cell(self, x: int, y: int, glyph: str, style: int = EditorConstants.STYLE_NORMAL):
        """Put one glyph in the back buffer; positions off screen are dropped."""
        if 0 <= y < len(self._cells) and 0 <= x < len(self._cells[y]):
            self._cells[y][x] = (glyph, style)

    def get_cell(self, x: int, y: int) -> tuple[str, int]:
        return self._cells[y][x]

    def show_cursor(self, x: int, y: int):
        self._cursor = (x, y)

    def _compose_line(self, cells: list[tuple[str, int]]) -> str:
        """Compose a row of cells into a printable string with styles."""
        out = []
        active_reverse = False
        skip = 0
        for x, (glyph, style) in enumerate(cells):
            if skip:
                # Padding cell already covered by a double-width glyph
                skip -= 1
                continue
            reverse = bool(style & EditorConstants.STYLE_REVERSE)
            if reverse != active_reverse:
                out.append(self.term.reverse if reverse else self.term.normal)
                active_reverse = reverse
            glyph_width = self.term.length(glyph)
            if x + glyph_width > len(cells):
                # Would spill past the right edge
                out.append(' ')
                continue
            out.append(glyph)
            skip = max(0, glyph_width - 1)
        if active_reverse:
            out.append(self.term.normal)
        return ''.join(out)

    def flush(self):
        """Write changed rows to the terminal and position the cursor."""
        lines = [self._compose_line(row) for row in self._cells]
        if self._last_lines is None or len(self._last_lines) != len(lines):
            print(self.term.home + self.term.clear, end='')
            self._last_lines = [None] * len(lines)
        for y, line in enumerate(lines):
            if line != self._last_lines[y]:
                print(self.term.move_yx(y, 0) + line, end='')
                self._last_lines[y] = line
        if self._cursor is not None:
            x, y = self._cursor
            print(self.term.move_yx(y, x) + self.term.normal_cursor, end='')
        else:
            print(self.term.hide_cursor, end='')
        sys.stdout.flush()

    def get_key(self, timeout=None):
        """Get a single keypress as a curtsies token string.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)
        """
        if self._curtsies_input is None:
            return None
        evt = self._curtsies_input.send(timeout)  # type: ignore
        return str(evt) if evt is not None else None

    def poll_event(self):
        """Block until a key arrives or the terminal is resized.

        Returns the key token, or RESIZE.
        """
        watched = [sys.stdin]
        if self._resize_pipe_r is not None:
            watched.append(self._resize_pipe_r)
        while True:
            # Curtsies may already hold bytes that select cannot see
            key = self.get_key(timeout=0)
            if key:
                return key
            ready, _, _ = select.select(watched, [], [])
            if self._resize_pipe_r is not None and self._resize_pipe_r in ready:
                os.read(self._resize_pipe_r, 1024)
                logger.debug("Terminal resized to %s", self.size)
                return RESIZE
