"""Exceptions raised while scanning a project."""

from pathlib import Path
from typing import Union


class ScanError(Exception):
    """Base class for scan failures tied to a path."""

    kind = 'scan'

    def __init__(self, path: Union[str, Path], message: str):
        self.path = str(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class ReadError(ScanError):
    """A source file could not be read or is not valid UTF-8."""

    kind = 'read'


class ParseError(ScanError):
    """A source file could not be turned into a syntax tree."""

    kind = 'parse'


class DiscoveryError(ScanError):
    """The scan root cannot be enumerated. Fatal for the whole scan."""

    kind = 'discovery'
