"""Shared fixtures: an in-memory terminal standing in for blessed/curtsies."""

import pytest

from kisyu.constants import EditorConstants
from kisyu.editor import Editor


class FakeTerminal:
    """Records cells and cursor instead of writing to a real terminal."""

    def __init__(self, width=20, height=6, keys=()):
        self.width = width
        self.height = height
        self.keys = list(keys)
        self.cells = {}
        self.cursor = None
        self.flushes = 0
        self.setup_called = False
        self.cleanup_called = False

    @property
    def size(self):
        return self.width, self.height

    def setup(self):
        self.setup_called = True

    def cleanup(self):
        self.cleanup_called = True

    def clear(self):
        self.cells = {}
        self.cursor = None

    def set_cell(self, x, y, glyph, style=EditorConstants.STYLE_NORMAL):
        self.cells[(x, y)] = (glyph, style)

    def show_cursor(self, x, y):
        self.cursor = (x, y)

    def flush(self):
        self.flushes += 1

    def notify_resize(self):
        pass

    def poll_event(self):
        return self.keys.pop(0)

    def line(self, y):
        """Text drawn on screen row y, trailing blanks stripped."""
        chars = [self.cells.get((x, y), (' ', 0))[0] for x in range(self.width)]
        return ''.join(chars).rstrip()


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def editor(terminal):
    return Editor(terminal=terminal)


def make_editor(rows, width=20, height=6, keys=()):
    terminal = FakeTerminal(width=width, height=height, keys=keys)
    editor = Editor(terminal=terminal)
    editor.buffer.load_text('\n'.join(rows) + '\n')
    return editor, terminal
