"""Logging configuration for git-worktree-assistant

Everything goes to stderr or the log file; stdout is reserved for the paths
the shell consumes.
"""
import copy
import logging
import os
import sys
from pathlib import Path

PACKAGE_PREFIXES = ('git_worktree_assistant.', 'services.')

# GitPython logs every Popen at DEBUG; the runner already logs each git call.
# Named precisely since our own loggers live under "git." too (git.refs, ...)
THIRD_PARTY_LOGGERS = ('git.cmd', 'git.util')

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Colors the level name when stderr is a terminal and NO_COLOR is unset."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color and sys.stderr.isatty() and not os.environ.get('NO_COLOR'):
            # Other handlers (the log file) must see the plain level name
            record = copy.copy(record)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def get_log_file() -> Path:
    """Location of the log file written in debug and TUI mode."""
    return Path.home() / '.git-worktree-assistant' / 'git-worktree-assistant.log'


def _file_handler() -> logging.Handler:
    log_file = get_log_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='w')  # Overwrite each run
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(verbose: bool = False, debug: bool = False, tui_mode: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages and write the log file
        tui_mode: If True, log to file only (the picker owns the terminal)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    # The file handler takes everything; each handler filters on its own level
    root_logger.setLevel(logging.DEBUG if tui_mode else level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if debug else logging.WARNING)

    if tui_mode or debug:
        root_logger.addHandler(_file_handler())

    if not tui_mode:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        if debug:
            console_handler.setFormatter(ColoredFormatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
        else:
            console_handler.setFormatter(ColoredFormatter(fmt='%(levelname)s [%(name)s] %(message)s'))
        root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named without the package prefix (``git.refs``, ``core``)."""
    for prefix in PACKAGE_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
