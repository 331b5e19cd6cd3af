"""
String Scanner
==============

Find user-facing string literals in Swift projects.

Every string literal in every source file is parsed with tree-sitter,
normalized (interpolations become a placeholder), filtered, and merged into
a deduplicated list ready for a localization workflow.

Usage:
    from string_scanner import ProjectScanner

    scanner = ProjectScanner()
    result = scanner.scan('./MyApp')
    for record in result.records:
        print(record.file, record.line, record.normalized_text)

CLI:
    string-scanner init
    string-scanner scan ./MyApp --json strings.json
"""

from .__version__ import __version__, __author__, __description__

# Core exports
from .core.models import Segment, Literal, StringRecord, FileError, ScanEvent, ScanResult
from .core.classifier import LiteralClassifier
from .core.deduplicator import deduplicate
from .core.scanner import ProjectScanner, discover_files

# Framework adapters
from .frameworks.base import BaseAdapter
from .frameworks.swift import SwiftAdapter

# Reports
from .reports.json_reporter import JSONReporter

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'Segment',
    'Literal',
    'StringRecord',
    'FileError',
    'ScanEvent',
    'ScanResult',
    'LiteralClassifier',
    'deduplicate',
    'ProjectScanner',
    'discover_files',
    'BaseAdapter',
    'SwiftAdapter',
    'JSONReporter',
]
