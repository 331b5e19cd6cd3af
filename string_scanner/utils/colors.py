"""ANSI color codes for terminal output."""

import re

_ANSI_ESCAPE = re.compile(r'\033\[[0-9;]*m')


class Colors:
    """ANSI color codes used by the console log formatter and the CLI."""

    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

    @classmethod
    def paint(cls, text: str, color: str) -> str:
        return f"{color}{text}{cls.ENDC}"

    @classmethod
    def success(cls, text: str) -> str:
        """Return text in green color."""
        return cls.paint(text, cls.OKGREEN)

    @classmethod
    def error(cls, text: str) -> str:
        """Return text in red color."""
        return cls.paint(text, cls.FAIL)

    @classmethod
    def warning(cls, text: str) -> str:
        """Return text in yellow color."""
        return cls.paint(text, cls.WARNING)

    @classmethod
    def bold(cls, text: str) -> str:
        return cls.paint(text, cls.BOLD)

    @staticmethod
    def strip(text: str) -> str:
        """Remove ANSI escape sequences."""
        return _ANSI_ESCAPE.sub('', text)
