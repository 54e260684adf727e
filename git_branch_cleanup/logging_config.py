"""Logging configuration for git-branch-cleanup

Console logging goes to stderr so it never interleaves with the rich tables
on stdout. The TUI owns the terminal, so in TUI mode everything is written to
a log file instead and the TUI points users at that file when something fails.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

LOG_DIR = Path.home() / '.git-branch-cleanup'
LOG_FILE_NAME = 'git-branch-cleanup.log'

# GitPython logs every git subprocess call under this logger
GIT_LOGGER = 'git'

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Formatter that colors level names when stderr is a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        if sys.stderr.isatty():
            levelname = record.levelname
            if levelname in self.COLORS:
                record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        return super().format(record)


def get_log_file() -> Path:
    """Path of the log file written in TUI and debug mode."""
    return LOG_DIR / LOG_FILE_NAME


def setup_logging(verbose: bool = False, debug: bool = False, tui_mode: bool = False) -> Optional[Path]:
    """
    Configure logging for the application.

    Args:
        verbose: If True, show INFO level messages (deletions, prunes)
        debug: If True, show DEBUG level messages including git commands
        tui_mode: If True, log to file only (the TUI owns the terminal)

    Returns:
        Path of the log file, or None when only logging to the console
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    # The file handler gets everything in TUI mode; handlers filter the rest
    root_logger.setLevel(logging.DEBUG if tui_mode else level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Categorization runs several git commands per branch; only show them when debugging
    logging.getLogger(GIT_LOGGER).setLevel(logging.DEBUG if debug else logging.WARNING)

    log_file = None
    if tui_mode or debug:
        log_file = get_log_file()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w')  # Overwrite each run
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    if not tui_mode:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        if debug:
            formatter = ColoredFormatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT)
        else:
            formatter = ColoredFormatter(fmt='[%(name)s] %(message)s')
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    ``git_branch_cleanup.services.risk_service`` becomes ``risk_service``.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    if name.startswith('git_branch_cleanup.'):
        name = name[len('git_branch_cleanup.'):]
    if name.startswith('services.'):
        name = name[len('services.'):]

    return logging.getLogger(name)
