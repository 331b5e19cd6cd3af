"""Syntax-tree visitor that collects classified string literals from one file."""

from collections import Counter
from typing import Any, List, Optional

from ..frameworks.base import BaseAdapter, PositionResolver
from .classifier import LiteralClassifier
from .models import Literal, LiteralContext, StringRecord


class StringVisitor:
    """
    Walk one file's syntax tree and collect included literals.

    The visitor only writes to its own ``strings`` list and ``excluded``
    counter, so any number of visitors can run side by side.
    """

    def __init__(
        self,
        file_path: str,
        source: bytes,
        adapter: BaseAdapter,
        classifier: LiteralClassifier,
        strict: bool = False,
    ):
        """
        Initialize visitor.

        Args:
            file_path: Path recorded on every StringRecord
            source: UTF-8 source bytes of the file
            adapter: Language adapter used to parse and inspect nodes
            classifier: Literal classifier
            strict: Reject sources whose tree contains syntax errors
        """
        self.file_path = file_path
        self.source = source
        self.adapter = adapter
        self.classifier = classifier
        self.strict = strict
        self.positions = PositionResolver(source)
        self.strings: List[StringRecord] = []
        self.excluded: Counter = Counter()

    def visit(self) -> List[StringRecord]:
        """
        Parse the source and walk the whole tree.

        Returns:
            Records for every literal that passed classification, in source order

        Raises:
            ParseError: If the adapter cannot parse the source
        """
        tree = self.adapter.parse(self.source, path=self.file_path, strict=self.strict)
        self.walk(self.adapter.root(tree))
        return self.strings

    def walk(self, root: Any) -> None:
        """Pre-order walk; literal nodes are handled and their children skipped."""
        stack = [root]
        while stack:
            node = stack.pop()
            kind = self.adapter.literal_kind(node)
            if kind is not None:
                self.visit_literal(node, kind)
                continue
            stack.extend(reversed(self.adapter.children(node)))

    def visit_literal(self, node: Any, kind: str) -> Optional[StringRecord]:
        """Classify one literal node and record it when included."""
        line, column = self.positions.position(node)
        literal = Literal(
            raw_text=self.adapter.node_text(node, self.source),
            segments=tuple(self.adapter.segments(node, self.source)),
            kind=kind,
        )
        context = LiteralContext(
            file_path=self.file_path,
            line_text=self.positions.line_text(line),
            call=self.adapter.call_site(node, self.source),
        )

        result = self.classifier.classify(literal, context)
        if not result.included:
            self.excluded[result.excluded_by] += 1
            return None

        record = StringRecord(
            file=self.file_path,
            line=line,
            column=column,
            raw_text=literal.raw_text,
            normalized_text=result.normalized_text,
            is_localized=result.is_localized,
        )
        self.strings.append(record)
        return record


def scan_source(
    source: str,
    adapter: BaseAdapter,
    classifier: Optional[LiteralClassifier] = None,
    file_path: str = '<memory>',
) -> List[StringRecord]:
    """
    Extract records from source text without touching the filesystem.

    Example:
        records = scan_source('let t = "确定"', SwiftAdapter())
    """
    visitor = StringVisitor(
        file_path=file_path,
        source=source.encode('utf-8'),
        adapter=adapter,
        classifier=classifier or LiteralClassifier(),
    )
    return visitor.visit()
