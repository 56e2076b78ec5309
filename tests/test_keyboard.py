"""Test keyboard token parsing."""

import pytest

from kisyu.keyboard import KeyboardHandler, KeyEvent, KeyType
from kisyu.terminal import RESIZE


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self, tokens=()):
        self._queue = list(tokens)

    def poll_event(self):
        return self._queue.pop(0)


@pytest.mark.parametrize("token, key_type, value", [
    ('<UP>', KeyType.SPECIAL, 'up'),
    ('<DOWN>', KeyType.SPECIAL, 'down'),
    ('<LEFT>', KeyType.SPECIAL, 'left'),
    ('<RIGHT>', KeyType.SPECIAL, 'right'),
    ('<PAGEUP>', KeyType.SPECIAL, 'page_up'),
    ('<PAGEDOWN>', KeyType.SPECIAL, 'page_down'),
    ('<HOME>', KeyType.SPECIAL, 'home'),
    ('<END>', KeyType.SPECIAL, 'end'),
    ('<BACKSPACE>', KeyType.SPECIAL, 'backspace'),
    ('<Ctrl-h>', KeyType.SPECIAL, 'backspace'),
    ('<Ctrl-j>', KeyType.SPECIAL, 'enter'),
    ('<Ctrl-m>', KeyType.SPECIAL, 'enter'),
    ('<Ctrl-q>', KeyType.CTRL, 'q'),
    ('<Ctrl-s>', KeyType.CTRL, 's'),
    ('<SPACE>', KeyType.REGULAR, ' '),
    ('<TAB>', KeyType.REGULAR, '\t'),
    ('<ESC>', KeyType.SPECIAL, 'escape'),
])
def test_curtsies_tokens(token, key_type, value):
    event = KeyboardHandler(None).parse_key(token)
    assert event.key_type == key_type
    assert event.value == value
    assert event.raw == token


@pytest.mark.parametrize("raw, key_type, value", [
    ('a', KeyType.REGULAR, 'a'),
    ('日', KeyType.REGULAR, '日'),
    ('<', KeyType.REGULAR, '<'),
    ('\t', KeyType.REGULAR, '\t'),
    ('\r', KeyType.SPECIAL, 'enter'),
    ('\n', KeyType.SPECIAL, 'enter'),
    ('\x7f', KeyType.SPECIAL, 'backspace'),
    ('\x11', KeyType.CTRL, 'q'),
    ('\x13', KeyType.CTRL, 's'),
    ('\x1b', KeyType.SPECIAL, 'escape'),
])
def test_raw_characters(raw, key_type, value):
    event = KeyboardHandler(None).parse_key(raw)
    assert event.key_type == key_type
    assert event.value == value


def test_modified_special_is_not_a_plain_arrow():
    event = KeyboardHandler(None).parse_key('<Alt-LEFT>')
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'alt-left'


def test_next_event_reads_from_terminal():
    handler = KeyboardHandler(MockTerminal(['x', RESIZE, '<UP>']))
    assert handler.next_event() == KeyEvent(KeyType.REGULAR, 'x', 'x')
    assert handler.next_event() is RESIZE
    assert handler.next_event().value == 'up'
