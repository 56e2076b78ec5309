"""The in-memory document: an ordered list of rows plus the edit cursor."""

import logging
import os
import stat
import tempfile
from enum import Enum
from typing import Sequence

from .constants import EditorConstants
from .row import Row

logger = logging.getLogger(__name__)


class CursorMove(Enum):
    """Directions accepted by :meth:`Buffer.move_cursor` and :meth:`Buffer.move_cx`."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"


class RowOutOfRangeError(IndexError):
    """Raised when a row index points past the end of the buffer.

    Callers drawing the screen treat this as "draw a filler marker".
    """

    def __init__(self, row_index: int, row_count: int):
        super().__init__(f"row {row_index} out of range (buffer has {row_count} rows)")
        self.row_index = row_index
        self.row_count = row_count


def _target_mode(path: str) -> int:
    """Permission bits for a saved file: keep an existing file's, else 0666 less umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def split_rows(text: str) -> list[Row]:
    """Split text on newlines into rows.

    The delimiter is dropped. A trailing segment without a newline becomes
    the final row. Empty text still yields a single empty row.
    """
    segments = text.split("\n")
    if segments[-1] == "" and len(segments) > 1:
        segments.pop()
    return [Row(segment) for segment in segments]


class Buffer:
    """Rows of text and a logical cursor (row, column).

    The buffer always holds at least one row, and the cursor always
    satisfies ``0 <= cy < row_count`` and ``0 <= col <= len(rows[cy])``.
    """

    def __init__(self, rows: Sequence[str] = ("",)):
        self._rows: list[Row] = [Row(text) for text in rows] or [Row()]
        self._cx = 0
        self._cy = 0

    # --- Loading and saving ---

    def load_text(self, text: str):
        """Replace the contents with ``text`` and reset the cursor."""
        self._rows = split_rows(text)
        self._cx = 0
        self._cy = 0

    def open(self, path: str):
        """Load a file, replacing all rows.

        Raises OSError or UnicodeDecodeError if the file cannot be read; the
        previous contents are left untouched in that case.
        """
        with open(path, "r", encoding=EditorConstants.ENCODING, newline="") as f:
            text = f.read()
        self.load_text(text)
        logger.info("Opened %s (%d rows)", path, len(self._rows))

    def to_string(self) -> str:
        """Serialize rows, each terminated by a newline."""
        return "".join(row.text + "\n" for row in self._rows)

    def save(self, path: str):
        """Write the buffer to ``path`` atomically.

        The content goes to a temporary file in the same directory which then
        replaces the target. Errors propagate after the temporary file is
        removed.
        """
        content = self.to_string()
        mode = _target_mode(path)
        dir_name = os.path.dirname(path) or "."
        fd, temp_filename = tempfile.mkstemp(
            dir=dir_name,
            prefix=EditorConstants.ATOMIC_SAVE_PREFIX,
            suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
        )
        try:
            with os.fdopen(fd, "w", encoding=EditorConstants.ENCODING, newline="") as temp_file:
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            # mkstemp creates 0600 files
            os.chmod(temp_filename, mode)
            os.replace(temp_filename, path)
        except Exception:
            if os.path.exists(temp_filename):
                os.remove(temp_filename)
            raise
        logger.info("Saved %s (%d rows)", path, len(self._rows))

    # --- Queries ---

    @property
    def rows(self) -> tuple[Row, ...]:
        return tuple(self._rows)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def cy(self) -> int:
        """Cursor row."""
        return self._cy

    @property
    def col(self) -> int:
        """Cursor position as a text index within the cursor row."""
        return self._cx

    @property
    def cursor(self) -> tuple[int, int]:
        return (self._cy, self._cx)

    @property
    def cx(self) -> int:
        """Cursor position as a display column within the cursor row."""
        return self._rows[self._cy].columns[self._cx]

    def _row(self, row_index: int) -> Row:
        if not 0 <= row_index < len(self._rows):
            raise RowOutOfRangeError(row_index, len(self._rows))
        return self._rows[row_index]

    def render(self, row_index: int) -> str:
        """Return the display cells for a row.

        Raises RowOutOfRangeError past the end of the buffer.
        """
        return self._row(row_index).render

    def col_len(self, row_index: int) -> int:
        """Number of code points in a row."""
        return len(self._row(row_index))

    def cursor_end(self, row_index: int) -> int:
        """Total display width of a row."""
        return self._row(row_index).width

    # --- Editing ---

    def insert_rune(self, ch: str):
        """Insert a character at the cursor and advance past it."""
        self._rows[self._cy].insert_rune(self._cx, ch)
        self._cx += 1

    def delete_rune(self):
        """Backspace: delete before the cursor, joining rows at column 0."""
        if self._cx > 0:
            self._rows[self._cy].delete_rune(self._cx)
            self._cx -= 1
        elif self._cy > 0:
            current = self._rows.pop(self._cy)
            previous = self._rows[self._cy - 1]
            self._cy -= 1
            self._cx = len(previous)
            previous.append_text(current.text)

    def insert_new_line(self):
        """Split the cursor row at the cursor; move to the start of the new row."""
        current = self._rows[self._cy]
        left, right = current.text[:self._cx], current.text[self._cx:]
        current.set_text(left)
        self._rows.insert(self._cy + 1, Row(right))
        self._cy += 1
        self._cx = 0

    # --- Cursor movement ---

    def _clamp_col(self):
        self._cx = max(0, min(self._cx, len(self._rows[self._cy])))

    def move_cursor(self, direction: CursorMove):
        """Move one step. Vertical moves keep no memory of the previous column."""
        if direction == CursorMove.UP:
            if self._cy > 0:
                self._cy -= 1
        elif direction == CursorMove.DOWN:
            if self._cy < len(self._rows) - 1:
                self._cy += 1
        elif direction == CursorMove.LEFT:
            if self._cx > 0:
                self._cx -= 1
            elif self._cy > 0:
                self._cy -= 1
                self._cx = len(self._rows[self._cy])
        elif direction == CursorMove.RIGHT:
            if self._cx < len(self._rows[self._cy]):
                self._cx += 1
            elif self._cy < len(self._rows) - 1:
                self._cy += 1
                self._cx = 0
        self._clamp_col()

    def move_cy(self, y: int):
        """Jump to row ``y``, clamped to the buffer."""
        self._cy = max(0, min(y, len(self._rows) - 1))
        self._clamp_col()

    def move_cx(self, direction: CursorMove):
        """Jump to the start or end of the cursor row."""
        if direction == CursorMove.HOME:
            self._cx = 0
        elif direction == CursorMove.END:
            self._cx = len(self._rows[self._cy])
