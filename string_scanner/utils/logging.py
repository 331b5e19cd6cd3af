"""Logging setup for string scanner.

Modules log through the ``string_scanner`` hierarchy
(``logging.getLogger('string_scanner.scanner')`` and so on). The CLI calls
``configure_logging`` once; library users can attach their own handlers
instead. Console output goes to stderr because stdout carries the JSON report.
"""

import logging
import sys
from typing import Optional, Union
from pathlib import Path
from .colors import Colors

ROOT_LOGGER_NAME = 'string_scanner'

CONSOLE_FORMAT = '%(message)s'
FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Wrap each console line in the ANSI color of its level."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.OKCYAN,
        logging.INFO: Colors.OKGREEN,
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.FAIL,
        logging.CRITICAL: Colors.FAIL + Colors.BOLD,
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_colors:
            return message
        return Colors.paint(message, self.LEVEL_COLORS.get(record.levelno, ''))


def console_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI's -v/-q flags to a level; quiet wins."""
    if quiet:
        return logging.WARNING
    return logging.DEBUG if verbose else logging.INFO


def console_handler(level: int = logging.INFO, use_colors: bool = True) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, use_colors=use_colors))
    return handler


def file_handler(path: Union[str, Path]) -> logging.Handler:
    """Plain-text handler that records everything from DEBUG up."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return handler


class Logger:
    """
    Singleton owning the handlers of the package root logger.

    The root logger does not propagate, so configuring the CLI never
    duplicates output through handlers an embedding application installed.
    """

    _instance: Optional['Logger'] = None
    _initialized: bool = False

    def __new__(cls) -> 'Logger':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Logger._initialized:
            return

        self.root = logging.getLogger(ROOT_LOGGER_NAME)
        self.root.setLevel(logging.DEBUG)
        self.root.propagate = False
        self.root.handlers = []
        self._console: logging.Handler = self._swap(None, console_handler())
        self._file: Optional[logging.Handler] = None

        Logger._initialized = True

    def _swap(self, old: Optional[logging.Handler], new: logging.Handler) -> logging.Handler:
        if old is not None:
            self.root.removeHandler(old)
            old.close()
        self.root.addHandler(new)
        return new

    def configure(
        self,
        verbose: bool = False,
        quiet: bool = False,
        log_file: Optional[Union[str, Path]] = None,
        use_colors: bool = True
    ) -> None:
        """
        Replace the console handler and optionally add a log file.

        Args:
            verbose: DEBUG on the console
            quiet: WARNING and above only; overrides verbose
            log_file: Also write every record to this file
            use_colors: Color console lines by level
        """
        level = console_level(verbose=verbose, quiet=quiet)
        self._console = self._swap(self._console, console_handler(level, use_colors))
        if log_file:
            self._file = self._swap(self._file, file_handler(log_file))

    @property
    def console_level(self) -> int:
        return self._console.level

    def close(self) -> None:
        for handler in self.root.handlers[:]:
            self.root.removeHandler(handler)
            handler.close()
        self.root.propagate = True


_logger: Optional[Logger] = None


def _instance() -> Logger:
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return ``string_scanner`` or ``string_scanner.<name>``.

    The first call installs the default console handler.
    """
    root = _instance().root
    return root.getChild(name) if name else root


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Union[str, Path]] = None,
    use_colors: Optional[bool] = None
) -> None:
    """Configure package logging; colors default to stderr being a terminal."""
    if use_colors is None:
        use_colors = sys.stderr.isatty()
    _instance().configure(verbose=verbose, quiet=quiet, log_file=log_file, use_colors=use_colors)


def reset_logger() -> None:
    """Close all handlers and forget the singleton (mainly for testing)."""
    global _logger
    if _logger is not None:
        _logger.close()
    _logger = None
    Logger._instance = None
    Logger._initialized = False
