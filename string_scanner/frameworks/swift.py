"""Swift adapter backed by the tree-sitter Swift grammar."""

import re
from typing import Any, List, Optional, Tuple

from tree_sitter import Language, Parser, Tree
from tree_sitter_language_pack import get_language

from ..core.errors import ParseError
from ..core.models import CallSite, Segment
from .base import BaseAdapter

STRING_LITERAL_TYPES = frozenset({
    'line_string_literal',
    'multi_line_string_literal',
    'raw_string_literal',
})
REGEX_LITERAL_TYPES = frozenset({'regex_literal'})

# Opening/closing delimiter tokens of non-raw string literals
QUOTE_TOKENS = frozenset({'"', '"""'})
INTERPOLATION_START = '\\('
RAW_INTERPOLATION = 'raw_str_interpolation'

_RAW_DELIMITERS = re.compile(r'^(#+)("""|")(?P<body>.*)\2\1$', re.DOTALL)
_REGEX_DELIMITERS = re.compile(r'^(#*)/(?P<body>.*)/\1$', re.DOTALL)
_CALLEE_NOISE = re.compile(r'[\s?!]')


class SwiftAdapter(BaseAdapter):
    """Adapter for Swift sources.

    Objective-C files listed in the scan extensions are parsed with the same
    grammar; tree-sitter recovers from the syntax errors and literals inside
    the recovered regions are still reported.
    """

    name = 'swift'

    # Class-level language cache
    _language: Optional[Language] = None

    @classmethod
    def _get_language(cls) -> Language:
        if cls._language is None:
            cls._language = get_language('swift')
        return cls._language

    def parse(self, source: bytes, path: str = '<memory>', strict: bool = False) -> Tree:
        # Parsers are not thread-safe; one per call
        parser = Parser(self._get_language())
        try:
            tree = parser.parse(source)
        except (ValueError, RuntimeError) as e:
            raise ParseError(path, f"tree-sitter failed: {e}") from e

        if strict and tree.root_node.has_error:
            line = self._first_error_line(tree.root_node)
            raise ParseError(path, f"syntax error near line {line}")
        return tree

    def literal_kind(self, node: Any) -> Optional[str]:
        if node.type in STRING_LITERAL_TYPES:
            return 'string'
        if node.type in REGEX_LITERAL_TYPES:
            return 'regex'
        return None

    def segments(self, node: Any, source: bytes) -> List[Segment]:
        """
        Decode a literal node into segments.

        Static text is kept exactly as written (escape sequences are not
        expanded); every ``\\(...)`` interpolation becomes one expression
        segment holding the expression source.

        Args:
            node: String or regex literal node
            source: Source bytes the node was parsed from

        Returns:
            Segments in source order
        """
        if node.type in REGEX_LITERAL_TYPES:
            text = self.node_text(node, source)
            match = _REGEX_DELIMITERS.match(text)
            return [Segment(match.group('body') if match else text)]

        start, end = self._content_bounds(node)
        result: List[Segment] = []
        cursor = start
        for span_start, span_end, expr_start, expr_end in self._interpolation_spans(node):
            span_start = max(span_start, start)
            span_end = min(span_end, end)
            if span_start < cursor:
                continue
            if span_start > cursor:
                result.append(Segment(source[cursor:span_start].decode('utf-8', errors='replace')))
            expression = source[expr_start:expr_end].decode('utf-8', errors='replace').strip()
            result.append(Segment(expression, is_expression=True))
            cursor = span_end
        if cursor < end:
            result.append(Segment(source[cursor:end].decode('utf-8', errors='replace')))

        if node.type == 'raw_string_literal':
            result = self._strip_raw_delimiters(result)
        elif node.type == 'multi_line_string_literal':
            result = self._dedent_multiline(result)
        return result

    def call_site(self, node: Any, source: bytes) -> Optional[CallSite]:
        """
        Describe the call when the literal is directly one of its arguments.

        ``foo("x")`` and ``a.b.foo(label: "x")`` qualify; ``foo("x" + y)``
        and subscripts such as ``table["x"]`` do not.
        """
        argument = node.parent
        if argument is None or argument.type != 'value_argument':
            return None
        arguments = argument.parent
        if arguments is None or arguments.type != 'value_arguments':
            return None
        if not arguments.children or arguments.children[0].type != '(':
            return None
        suffix = arguments.parent
        if suffix is None or suffix.type != 'call_suffix':
            return None
        call = suffix.parent
        if call is None or call.type != 'call_expression' or not call.named_children:
            return None

        callee = _CALLEE_NOISE.sub('', self.node_text(call.named_children[0], source))
        if '.' in callee:
            receiver, name = callee.rsplit('.', 1)
        else:
            receiver, name = None, callee

        siblings = [child for child in arguments.named_children if child.type == 'value_argument']
        index = next(
            (i for i, child in enumerate(siblings) if self._same_node(child, argument)),
            0,
        )

        label = None
        for child in argument.children:
            if child.start_byte >= node.start_byte:
                break
            if child.type == 'value_argument_label':
                label = self.node_text(child, source)

        return CallSite(
            callee=callee,
            name=name,
            receiver=receiver or None,
            text=self.node_text(call, source),
            argument_index=index,
            argument_label=label,
        )

    def _content_bounds(self, node: Any) -> Tuple[int, int]:
        start, end = node.start_byte, node.end_byte
        children = node.children
        if children and children[0].type in QUOTE_TOKENS:
            start = children[0].end_byte
        if len(children) > 1 and children[-1].type in QUOTE_TOKENS:
            end = children[-1].start_byte
        return start, end

    def _interpolation_spans(self, node: Any) -> List[Tuple[int, int, int, int]]:
        """(span_start, span_end, expr_start, expr_end) for each interpolation."""
        spans = []
        opened = None
        for child in node.children:
            if child.type == RAW_INTERPOLATION:
                named = child.named_children
                expr = [c for c in named if c.type == 'interpolated_expression'] or named or [child]
                spans.append((child.start_byte, child.end_byte, expr[0].start_byte, expr[-1].end_byte))
            elif child.type == INTERPOLATION_START and opened is None:
                opened = child
            elif child.type == ')' and opened is not None:
                spans.append((opened.start_byte, child.end_byte, opened.end_byte, child.start_byte))
                opened = None
        if opened is not None:
            # Unterminated interpolation in a recovered tree
            spans.append((opened.start_byte, node.end_byte, opened.end_byte, node.end_byte))
        return spans

    @staticmethod
    def _strip_raw_delimiters(segments: List[Segment]) -> List[Segment]:
        if not segments:
            return segments
        head, tail = segments[0], segments[-1]
        if len(segments) == 1:
            match = _RAW_DELIMITERS.match(head.text)
            return [Segment(match.group('body'))] if match else segments

        opening = re.match(r'^#+("""|")', head.text)
        closing = re.search(r'("""|")#+$', tail.text)
        if opening and not head.is_expression:
            head = Segment(head.text[opening.end():])
        if closing and not tail.is_expression:
            tail = Segment(tail.text[:closing.start()])
        stripped = [head] + segments[1:-1] + [tail]
        return [segment for segment in stripped if segment.is_expression or segment.text]

    @staticmethod
    def _dedent_multiline(segments: List[Segment]) -> List[Segment]:
        """Apply Swift's multi-line rules: drop the delimiter lines and the closing indentation."""
        if not segments or segments[-1].is_expression:
            return segments
        tail = segments[-1].text
        closing = re.search(r'\n([ \t]*)$', tail)
        indent = closing.group(1) if closing else ''

        result = []
        for i, segment in enumerate(segments):
            if segment.is_expression:
                result.append(segment)
                continue
            text = segment.text
            if i == 0 and text.startswith('\n'):
                text = text[1:]
            elif i == 0 and text.startswith('\r\n'):
                text = text[2:]
            if i == len(segments) - 1 and closing:
                text = text[:len(text) - len(closing.group(0))]
            if indent:
                if i == 0 and text.startswith(indent):
                    text = text[len(indent):]
                text = text.replace('\n' + indent, '\n')
            if text:
                result.append(Segment(text))
        return result

    @staticmethod
    def _same_node(a: Any, b: Any) -> bool:
        return a.start_byte == b.start_byte and a.end_byte == b.end_byte and a.type == b.type

    @staticmethod
    def _first_error_line(root: Any) -> int:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.is_error or node.is_missing:
                return node.start_point[0] + 1
            stack.extend(reversed(node.children))
        return root.start_point[0] + 1
