"""Keyboard input handling using curtsies-style tokens."""

from dataclasses import dataclass
from enum import Enum

from .terminal import RESIZE


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The token as delivered by the terminal


# Names curtsies uses for special keys, mapped to our base key names
_SPECIAL_NAMES = {
    'left': 'left',
    'right': 'right',
    'up': 'up',
    'down': 'down',
    'home': 'home',
    'end': 'end',
    'pageup': 'page_up',
    'page_up': 'page_up',
    'pagedown': 'page_down',
    'page_down': 'page_down',
    'backspace': 'backspace',
    'delete': 'delete',
    'enter': 'enter',
    'return': 'enter',
    'insert': 'insert',
    'esc': 'escape',
    'escape': 'escape',
}


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def next_event(self):
        """Block for the next input; returns a KeyEvent or terminal.RESIZE."""
        key = self.terminal.poll_event()
        if key is RESIZE:
            return RESIZE
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token (e.g. '<UP>', '<Ctrl-q>') or raw character."""
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_token(key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if o in (10, 13):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if o == 9:
                return KeyEvent(KeyType.REGULAR, '\t', key_str)
            if o in (8, 127):
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            if o == 27:
                return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                return KeyEvent(KeyType.CTRL, chr(ord('a') + o - 1), key_str)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)

    def _parse_token(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1].lower().replace('+', '-')
        parts = name.split('-')
        base = parts[-1]
        mods = set(parts[:-1])

        if not mods:
            if base in ('space', 'spacebar', 'spc'):
                return KeyEvent(KeyType.REGULAR, ' ', key_str)
            if base == 'tab':
                return KeyEvent(KeyType.REGULAR, '\t', key_str)
        if 'ctrl' in mods and len(base) == 1:
            if base in ('j', 'm'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if base == 'h':
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            return KeyEvent(KeyType.CTRL, base, key_str)
        if base in _SPECIAL_NAMES and not mods:
            return KeyEvent(KeyType.SPECIAL, _SPECIAL_NAMES[base], key_str)
        # Unknown or modified token, e.g. '<Alt-left>'
        return KeyEvent(KeyType.SPECIAL, name, key_str)
