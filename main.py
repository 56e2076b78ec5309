#!/usr/bin/env python3
"""Kisyu - a minimal terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys: Move cursor
    Page Up/Down: Jump to top/bottom of the screen
    Home/End: Start/end of line
    Ctrl-S: Save file
    Ctrl-Q: Quit (no prompt, unsaved changes are lost)
    Type to insert text
    Backspace: Delete character, joins lines at line start
    Enter: Split line
"""

import sys
from kisyu.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
