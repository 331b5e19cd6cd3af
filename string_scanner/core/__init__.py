"""Core modules for string extraction."""

from .errors import ScanError, ReadError, ParseError, DiscoveryError
from .models import (
    Segment,
    Literal,
    CallSite,
    LiteralContext,
    Classification,
    StringRecord,
    FileError,
    ScanEvent,
    ScanResult,
)
from .classifier import LiteralClassifier
from .deduplicator import deduplicate, sort_records

__all__ = [
    'ScanError',
    'ReadError',
    'ParseError',
    'DiscoveryError',
    'Segment',
    'Literal',
    'CallSite',
    'LiteralContext',
    'Classification',
    'StringRecord',
    'FileError',
    'ScanEvent',
    'ScanResult',
    'LiteralClassifier',
    'deduplicate',
    'sort_records',
]
