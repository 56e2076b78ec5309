"""Command pattern implementation for editor actions."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .buffer import CursorMove
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent

logger = logging.getLogger(__name__)


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """


class MovementCommand(EditorCommand):
    """Moves the cursor one step in a fixed direction."""

    def __init__(self, direction: CursorMove):
        self.direction = direction

    def execute(self, editor, key_event):
        editor.buffer.move_cursor(self.direction)
        return False


class LineEdgeCommand(MovementCommand):
    """Jumps to the start (HOME) or end (END) of the cursor row."""

    def execute(self, editor, key_event):
        editor.buffer.move_cx(self.direction)
        return False


class PageUpCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.buffer.move_cy(editor.rowoff)
        return False


class PageDownCommand(EditorCommand):
    def execute(self, editor, key_event):
        _, height = editor.screen_size()
        editor.buffer.move_cy(editor.rowoff + height - 1)
        return False


class BackspaceCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.buffer.delete_rune()
        return True


class InsertNewlineCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.buffer.insert_new_line()
        return True


class InsertTextCommand(EditorCommand):
    """Inserts a printable character (or tab) at the cursor."""

    def execute(self, editor, key_event):
        char = key_event.value
        if len(char) == 1 and (char == '\t' or char.isprintable()):
            editor.buffer.insert_rune(char)
            return True
        return False


class SaveCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.save()
        return False


class QuitCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.running = False
        return False


class CommandRegistry:
    """Maps (KeyType, value) pairs to commands."""

    def __init__(self):
        self.commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self.insert_text = InsertTextCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        # Movement
        self.register((KeyType.SPECIAL, 'left'), MovementCommand(CursorMove.LEFT))
        self.register((KeyType.SPECIAL, 'right'), MovementCommand(CursorMove.RIGHT))
        self.register((KeyType.SPECIAL, 'up'), MovementCommand(CursorMove.UP))
        self.register((KeyType.SPECIAL, 'down'), MovementCommand(CursorMove.DOWN))
        self.register((KeyType.SPECIAL, 'home'), LineEdgeCommand(CursorMove.HOME))
        self.register((KeyType.SPECIAL, 'end'), LineEdgeCommand(CursorMove.END))
        self.register((KeyType.CTRL, 'a'), LineEdgeCommand(CursorMove.HOME))
        self.register((KeyType.CTRL, 'e'), LineEdgeCommand(CursorMove.END))
        self.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())
        self.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())

        # Editing
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

        # System
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'q'), QuitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        self.commands[key] = command

    def lookup(self, key_event: 'KeyEvent') -> Optional[EditorCommand]:
        command = self.commands.get((key_event.key_type, key_event.value))
        if command is None and key_event.key_type == KeyType.REGULAR:
            command = self.insert_text
        return command

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Run the command bound to ``key_event``.

        Returns:
            True if the document was modified
        """
        command = self.lookup(key_event)
        if command is None:
            logger.debug("Unbound key %r", key_event.raw)
            return False
        return command.execute(editor, key_event)
