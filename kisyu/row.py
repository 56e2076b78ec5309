"""A single line of text and its cached display rendering."""

from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants


def is_wide(ch: str) -> bool:
    """Return True if ``ch`` is drawn two cells wide.

    Any code point that needs more than one byte in UTF-8 counts as wide.
    This is a coarse stand-in for East Asian width rules.
    """
    return len(ch.encode("utf-8", "surrogatepass")) > 1


@dataclass(frozen=True)
class Rendering:
    """Display cells of a row plus the text-index to display-column map.

    ``columns`` has ``len(text) + 1`` entries; the last one is the total
    display width of the row.
    """
    cells: str
    columns: list[int]


def render_text(text: str, tab_stop: int = EditorConstants.TAB_STOP) -> Rendering:
    """Expand tabs and pad wide glyphs in a single left-to-right pass."""
    cells: list[str] = []
    columns: list[int] = []
    column = 0
    for ch in text:
        columns.append(column)
        if ch == "\t":
            cells.append(" ")
            column += 1
            while len(cells) % tab_stop != 0:
                cells.append(" ")
                column += 1
        elif is_wide(ch):
            cells.append(ch)
            cells.append(" ")
            column += 2
        else:
            cells.append(ch)
            column += 1
    columns.append(column)
    return Rendering("".join(cells), columns)


class Row:
    """One line of the buffer.

    The rendering is computed lazily: ``_rendering`` is ``None`` while the
    row is stale and holds a :class:`Rendering` once computed. Every text
    mutation drops it.
    """

    def __init__(self, text: str = ""):
        self.text = text
        self._rendering: Optional[Rendering] = None

    def __repr__(self):
        return f"Row({self.text!r})"

    def __eq__(self, other):
        if isinstance(other, Row):
            return self.text == other.text
        return NotImplemented

    def __len__(self):
        return len(self.text)

    @property
    def dirty(self) -> bool:
        return self._rendering is None

    def update_render(self) -> Rendering:
        """Recompute the rendering if stale and return it."""
        if self._rendering is None:
            self._rendering = render_text(self.text)
        return self._rendering

    @property
    def render(self) -> str:
        return self.update_render().cells

    @property
    def columns(self) -> list[int]:
        return self.update_render().columns

    @property
    def width(self) -> int:
        """Total display width of the row."""
        return self.update_render().columns[-1]

    def set_text(self, text: str):
        self.text = text
        self._rendering = None

    def insert_rune(self, col: int, ch: str):
        """Insert ``ch`` before text index ``col``; out-of-range is ignored."""
        if 0 <= col <= len(self.text):
            self.set_text(self.text[:col] + ch + self.text[col:])

    def delete_rune(self, col: int):
        """Delete the code point before text index ``col``.

        ``col == 0`` removes the last code point instead.
        """
        if not self.text or col < 0 or col > len(self.text):
            return
        if col == 0:
            self.set_text(self.text[:-1])
        else:
            self.set_text(self.text[:col - 1] + self.text[col:])

    def append_text(self, text: str):
        self.set_text(self.text + text)
