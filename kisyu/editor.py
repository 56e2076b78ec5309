"""Main editor controller: viewport scrolling, drawing and the event loop."""

import logging
import signal
import sys
import termios
from typing import Optional

from .buffer import Buffer, RowOutOfRangeError
from .commands import CommandRegistry
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent
from .terminal import RESIZE, TerminalInterface

logger = logging.getLogger(__name__)


class Editor:
    """Editing session: one buffer, a viewport onto it, and a terminal.

    ``rowoff``/``coloff`` are the buffer row and display column shown at the
    top-left corner of the screen.
    """

    def __init__(self, terminal: Optional[TerminalInterface] = None):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.buffer = Buffer()
        self.command_registry = CommandRegistry()
        self.rowoff = 0
        self.coloff = 0
        self.filename: Optional[str] = None
        self.running = False

    # --- Files ---

    def load_file(self, filename: str):
        """Open ``filename`` into the buffer and make it the save target.

        OSError and UnicodeDecodeError propagate; the session cannot start.
        """
        try:
            self.buffer.open(filename)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Cannot open %s: %s", filename, e)
            raise
        self.filename = filename
        self.rowoff = self.coloff = 0

    def save(self):
        """Write the buffer to the save target; no-op without one."""
        if not self.filename:
            return
        try:
            self.buffer.save(self.filename)
        except OSError as e:
            logger.error("Cannot save %s: %s", self.filename, e)
            raise

    # --- Viewport ---

    def screen_size(self) -> tuple[int, int]:
        """Text area size as (columns, rows); the last line is the status bar."""
        width, height = self.terminal.size
        return width, height - 1

    def scroll(self):
        """Adjust offsets so the cursor's display position is on screen."""
        width, height = self.screen_size()
        cx, cy = self.buffer.cx, self.buffer.cy
        if cy < self.rowoff:
            self.rowoff = cy
        if cy >= self.rowoff + height:
            self.rowoff = cy - height + 1
        if cx < self.coloff:
            self.coloff = cx
        if cx >= self.coloff + width:
            self.coloff = cx - width + 1

    def draw_rows(self):
        width, height = self.screen_size()
        for y in range(height):
            filerow = self.rowoff + y
            try:
                cells = self.buffer.render(filerow)
            except RowOutOfRangeError:
                self.terminal.set_cell(0, y, EditorConstants.FILLER)
                continue
            # A short row may end before coloff, which was set by a longer one
            start = min(self.coloff, self.buffer.cursor_end(filerow))
            for x, glyph in enumerate(cells[start:start + width]):
                self.terminal.set_cell(x, y, glyph)

    def status_text(self) -> str:
        return EditorConstants.STATUS_FORMAT.format(
            row=self.buffer.cy + 1, rows=self.buffer.row_count)

    def draw_status_bar(self):
        width, y = self.screen_size()
        status = self.status_text()
        for x in range(width):
            glyph = status[x] if x < len(status) else ' '
            self.terminal.set_cell(x, y, glyph, EditorConstants.STYLE_REVERSE)

    def refresh_screen(self):
        self.terminal.clear()
        self.scroll()
        self.draw_rows()
        self.draw_status_bar()
        self.terminal.show_cursor(self.buffer.cx - self.coloff, self.buffer.cy - self.rowoff)
        self.terminal.flush()

    # --- Events ---

    def handle_key_event(self, key_event: KeyEvent):
        self.command_registry.execute(self, key_event)

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        self.terminal.notify_resize()

    def _disable_flow_control(self):
        """Let Ctrl-S and Ctrl-Q reach us instead of the tty driver.

        Returns the previous termios settings, or None if unchanged.
        """
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, OSError) as e:
            logger.warning("Could not disable flow control: %s", e)
            return None

    def run(self):
        """Run the main editor loop until quit."""
        self.terminal.setup()
        self.running = True
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        old_settings = self._disable_flow_control()
        try:
            while self.running:
                self.refresh_screen()
                event = self.keyboard.next_event()
                if event is RESIZE:
                    continue
                self.handle_key_event(event)
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError) as e:
                    logger.warning("Could not restore terminal settings: %s", e)
            signal.signal(signal.SIGWINCH, original_winch_handler)
            self.terminal.cleanup()
