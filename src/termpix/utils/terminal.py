"""Display-surface size query."""

import os
import sys

from loguru import logger


def query_surface_size() -> tuple[int, int] | None:
    """Return the attached terminal's size as ``(columns, rows)``.

    stdout is asked first, then stderr, so the size is still found when
    only one of them is redirected. No default size is substituted.

    Returns:
        ``(columns, rows)``, or None when neither stream is a terminal
    """
    for stream in (sys.stdout, sys.stderr):
        try:
            size = os.get_terminal_size(stream.fileno())
        except (AttributeError, ValueError, OSError):
            continue
        logger.debug(f"Terminal size: {size.columns}x{size.lines}")
        return size.columns, size.lines

    logger.debug("No terminal attached to stdout or stderr")
    return None
