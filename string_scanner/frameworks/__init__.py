"""Language adapters over tree-sitter grammars."""

from .base import BaseAdapter, PositionResolver
from .swift import SwiftAdapter

__all__ = [
    'BaseAdapter',
    'PositionResolver',
    'SwiftAdapter',
]
