"""Base adapter interface for source languages."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from ..core.models import CallSite, Segment


class PositionResolver:
    """
    Map syntax-tree byte offsets to 1-based (line, column) positions.

    Columns are counted in characters, not bytes, so a literal that follows
    CJK text on the same line gets the column a reader would count.
    """

    def __init__(self, source: bytes):
        self.source = source
        self._lines: Optional[List[str]] = None

    def position(self, node: Any) -> Tuple[int, int]:
        """
        Resolve a tree-sitter style node to (line, column).

        Args:
            node: Object exposing ``start_byte`` and ``start_point``

        Returns:
            1-based line and character column
        """
        row, byte_column = node.start_point
        line_start = node.start_byte - byte_column
        prefix = self.source[line_start:node.start_byte].decode('utf-8', errors='replace')
        return row + 1, len(prefix) + 1

    def line_text(self, line: int) -> str:
        """Return the text of a 1-based line, or '' when out of range."""
        if self._lines is None:
            self._lines = self.source.decode('utf-8', errors='replace').split('\n')
        if 1 <= line <= len(self._lines):
            return self._lines[line - 1].rstrip('\r')
        return ''


class BaseAdapter(ABC):
    """
    Base adapter for language-specific parsing.

    An adapter supplies the capabilities the visitor needs: turning source
    into a syntax tree, telling literal nodes apart, decoding them into
    segments and describing the call a literal is an argument of.
    """

    name = 'base'

    @abstractmethod
    def parse(self, source: bytes, path: str = '<memory>', strict: bool = False) -> Any:
        """
        Parse source into a syntax tree.

        Args:
            source: UTF-8 encoded source text
            path: File path used in error messages
            strict: Reject trees that contain syntax errors

        Returns:
            Syntax tree; use root() to get its root node

        Raises:
            ParseError: If the source cannot be parsed
        """
        pass

    @abstractmethod
    def literal_kind(self, node: Any) -> Optional[str]:
        """Return 'string' or 'regex' for literal nodes, None for anything else."""
        pass

    @abstractmethod
    def segments(self, node: Any, source: bytes) -> List[Segment]:
        """Split a literal node into static text and expression segments."""
        pass

    @abstractmethod
    def call_site(self, node: Any, source: bytes) -> Optional[CallSite]:
        """Describe the call a literal is a direct argument of, if any."""
        pass

    def root(self, tree: Any) -> Any:
        """Root node of a parsed tree."""
        return tree.root_node

    def children(self, node: Any) -> List[Any]:
        """Child nodes in source order."""
        return list(node.children)

    def node_text(self, node: Any, source: bytes) -> str:
        """Exact source text of a node."""
        return source[node.start_byte:node.end_byte].decode('utf-8', errors='replace')
