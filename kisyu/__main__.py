"""Kisyu CLI entry point.

Allows running via `python -m kisyu` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys

logger = logging.getLogger("kisyu")


def get_version_string() -> str:
    try:
        return importlib.metadata.version("kisyu")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def main(argv: list[str] | None = None) -> int:
    # Very small arg parsing: version flag and an optional filename
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    from .log import configure_logging

    configure_logging()
    editor = Editor()
    try:
        if args:
            editor.load_file(args[0])
        editor.run()
    except (OSError, UnicodeDecodeError) as e:
        print(f"kisyu: {e}", file=sys.stderr)
        return 1
    logger.info("Session ended")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
