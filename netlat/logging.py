"""Logging setup shared by every netlat module.

Every logger sits under the ``netlat`` namespace and inherits one handler from
the ``netlat`` logger. The handler writes to stderr by default, which keeps
stdout free for command output (plain text or JSON).

Example:
    >>> from netlat.logging import get_logger
    >>> get_logger("netlat.algorithms.spf").name
    'netlat.algorithms.spf'
    >>> get_logger("my_script").name
    'netlat.my_script'
"""

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "netlat"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handler: Optional[logging.Handler] = None


def _root() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER_NAME)


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """Attach the netlat handler once and return it.

    Later calls return the installed handler unchanged until
    ``reset_logging()`` drops it.

    Args:
        level: Level for the ``netlat`` logger.
        format_string: Record format; defaults to ``DEFAULT_FORMAT``.
        handler: Handler to install instead of a stream handler.
        stream: Target of the default stream handler; stderr if omitted.
    """
    global _handler

    if _handler is not None:
        return _handler

    if handler is None:
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    root = _root()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)
    # records still propagate so pytest's caplog sees them
    root.propagate = True

    _handler = handler
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``netlat`` namespace.

    Names outside the namespace (scripts, ``__main__``) are nested under it,
    so they share the netlat handler and level.
    """
    setup_root_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the ``netlat`` logger and its handlers."""
    setup_root_logger()
    root = _root()
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)


def level_for_flags(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI's ``--verbose``/``--quiet`` flags to a level; verbose wins."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def redirect_output(stream: TextIO) -> None:
    """Point the netlat stream handler at ``stream``.

    Raises:
        TypeError: If a custom non-stream handler was installed.
    """
    handler = setup_root_logger()
    if not isinstance(handler, logging.StreamHandler):
        raise TypeError(f"Installed handler {handler!r} does not write to a stream")
    handler.setStream(stream)


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Remove the netlat handler so the next setup call installs a new one."""
    global _handler
    _handler = None

    root = _root()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


setup_root_logger()
