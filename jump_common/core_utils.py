import os
import sys
import traceback
from datetime import datetime

_debug_logging_enabled = False


def set_debug_logging(enabled: bool) -> None:
    global _debug_logging_enabled
    _debug_logging_enabled = enabled


def LOG(*values: object, sep: str = " ", end: str = "\n", file=None, highlight: bool = False, show_time=True, flush: bool = True) -> None:
    # stdout carries the paths the shell consumes, so logs default to stderr
    if file is None:
        file = sys.stderr

    message = sep.join(str(value) for value in values)

    if show_time:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        message = f"[{timestamp}] {message}"

    if highlight:
        HIGHLIGHT_COLOR = "\033[92m"  # green
        BOLD = "\033[1m"
        RESET = "\033[0m"
        print(f"{BOLD}{HIGHLIGHT_COLOR}", end="", file=file, flush=flush)
        print(message, end="", file=file, flush=flush)
        print(f"{RESET}", end=end, file=file, flush=flush)
    else:
        print(message, end=end, file=file, flush=flush)


def LOG_DEBUG(*values: object, sep: str = " ") -> None:
    if _debug_logging_enabled:
        LOG("[DEBUG]", sep.join(str(value) for value in values), file=sys.stderr)


def LOG_EXCEPTION(exception: BaseException, msg=None, exit: bool = True):
    """Log error with essential info to stderr."""

    LOG(f"{type(exception).__name__}: {exception}", file=sys.stderr, highlight=True)
    if msg:
        LOG(f"- Context: {msg}", file=sys.stderr, highlight=True)

    if isinstance(exception, (FileNotFoundError, PermissionError, OSError)):
        if getattr(exception, 'filename', None):
            LOG(f"File: {exception.filename}", file=sys.stderr)

    # Full traceback only in debug mode, the one-line header is enough for shell users
    tb = traceback.extract_tb(exception.__traceback__)
    if tb and _debug_logging_enabled:
        LOG("- Call stack:", file=sys.stderr)

        main_dir = os.path.dirname(os.path.abspath(sys.argv[0]))
        for frame in tb:
            is_local = frame.filename.startswith(main_dir)
            prefix = "  →" if is_local else "   "
            display_filename = frame.filename
            if is_local:
                display_filename = os.path.relpath(frame.filename, main_dir)

            LOG(f"{prefix} {display_filename}:{frame.lineno} in {frame.name}()",
                file=sys.stderr, highlight=is_local)

    if exit:
        sys.exit(1)
