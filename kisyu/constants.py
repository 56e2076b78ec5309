"""Constants and configuration for the kisyu editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Rendering
    TAB_STOP = 4  # Tabs expand to the next multiple of this many cells
    FILLER = "~"  # Marker drawn on screen rows past the end of the buffer

    # Status bar
    STATUS_FORMAT = "{row}/{rows}"  # 1-based cursor row / total rows

    # Cell styles (bitmask)
    STYLE_NORMAL = 0
    STYLE_REVERSE = 1

    # File operations
    ENCODING = "utf-8"
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Logging
    APP_NAME = "kisyu"
    LOG_FILE_NAME = "kisyu.log"
    LOG_LEVEL_ENV = "KISYU_LOG_LEVEL"
    LOG_FILE_ENV = "KISYU_LOG_FILE"
    DEFAULT_LOG_LEVEL = "WARNING"
