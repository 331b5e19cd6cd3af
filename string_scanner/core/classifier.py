"""Heuristic classification of string literals.

The classifier decides whether one literal is localizable text and, if so,
produces its normalized form. It is a pure function of the literal and its
syntactic context: no I/O, no shared state.

Exclusion rules are evaluated in order and the first match wins:

1. ``empty``          - nothing left after normalization
2. ``target_script``  - no character from the target script (CJK by default)
3. ``domain_prefix``  - reverse-domain identifiers such as ``com.example``
4. ``image_asset``    - image file names
5. ``punctuation``    - punctuation/symbol characters only
6. ``emoji``          - emoji only
7. ``path``           - path-shaped strings
8. ``logging``        - literal is part of a log statement

Logging detection is a list of predicates over the literal and its
``LiteralContext``; any predicate returning True marks the literal as log
noise. The default list is built from ``LoggingConfig`` by
``default_logging_rules`` and can be replaced per classifier.
"""

import re
import unicodedata
from typing import Callable, Iterable, List, Optional, Sequence

from ..utils.config import ClassifierConfig, LoggingConfig
from .models import Classification, Literal, LiteralContext, Segment

LoggingRule = Callable[[Literal, LiteralContext], bool]

EMOJI_PATTERN = re.compile(
    r'[\U0001F300-\U0001F9FF'  # Misc Symbols & Pictographs, Emoticons, etc.
    r'\U0001F600-\U0001F64F'   # Emoticons
    r'\U0001F680-\U0001F6FF'   # Transport & Map
    r'\U0001FA00-\U0001FAFF'   # Chess symbols, Symbols & Pictographs Extended-A
    r'\U00002600-\U000026FF'   # Misc symbols
    r'\U00002700-\U000027BF'   # Dingbats
    r'\U0001F1E0-\U0001F1FF'   # Flags
    r'\U00002300-\U000023FF'   # Misc Technical
    r'\U00002194-\U00002199'   # Arrows
    r'\U000021A9-\U000021AA'   # More arrows
    r'\U000025AA-\U000025AB'   # Squares
    r'\U000025B6\U000025C0'    # Play buttons
    r'\U000025FB-\U000025FE'   # Squares
    r'\U00002934-\U00002935'   # Arrows
    r'\U00002B05-\U00002B07'   # Arrows
    r'\U00002B1B-\U00002B1C'   # Squares
    r'\U00002B50\U00002B55'    # Star, circle
    r'\U00003030\U0000303D'    # Wavy dash, part alternation mark
    r'\U00003297\U00003299'    # Circled ideographs
    r'\U0000200D'              # Zero Width Joiner (compound emojis)
    r'\U0000FE00-\U0000FE0F'   # Variation Selectors
    r'\U0001F3FB-\U0001F3FF'   # Skin tone modifiers
    r'\U000E0020-\U000E007F'   # Tag characters (subdivision flags)
    r']+'
)


def normalize_segments(segments: Iterable[Segment], placeholder: str = '%@') -> str:
    """
    Join literal segments, replacing each expression with the placeholder.

    Args:
        segments: Decoded literal segments in source order
        placeholder: Token substituted for every embedded expression

    Returns:
        Normalized text used as the identity key of a literal
    """
    return ''.join(placeholder if segment.is_expression else segment.text for segment in segments)


def call_text_rule(config: LoggingConfig) -> LoggingRule:
    """Match calls whose rendering or callee shape looks like a logger call."""
    patterns = tuple(config.call_patterns)
    logger_names = frozenset(config.logger_names)
    log_methods = frozenset(config.log_methods)

    def rule(literal: Literal, context: LiteralContext) -> bool:
        call = context.call
        if call is None:
            return False
        if any(pattern in call.text for pattern in patterns):
            return True
        if call.receiver is None:
            return False

        receiver = call.receiver
        if receiver in logger_names:
            return True
        if receiver == 'self.logger':
            return True
        lowered = receiver.lower()
        if 'logger' in lowered or 'log' in lowered:
            return True
        return call.name in log_methods

    return rule


def print_function_rule(config: LoggingConfig) -> LoggingRule:
    """Match direct calls to diagnostic print functions (print, NSLog, ...)."""
    functions = frozenset(config.print_functions)

    def rule(literal: Literal, context: LiteralContext) -> bool:
        call = context.call
        return call is not None and call.receiver is None and call.name in functions

    return rule


def line_keyword_rule(config: LoggingConfig) -> LoggingRule:
    """Match when the literal's source line mentions a logging keyword anywhere."""
    keywords = tuple(keyword.lower() for keyword in config.line_keywords)

    def rule(literal: Literal, context: LiteralContext) -> bool:
        line = (context.line_text or literal.raw_text).lower()
        return any(keyword in line for keyword in keywords)

    return rule


def entry_point_rule(config: LoggingConfig) -> LoggingRule:
    """Match known log messages inside application entry-point files."""
    files = tuple(config.entry_point_files)
    messages = tuple(config.entry_point_messages)

    def rule(literal: Literal, context: LiteralContext) -> bool:
        # Substring of the path, so MyAppDelegate.swift counts too
        if not any(name in context.file_path for name in files):
            return False
        return any(message in literal.raw_text for message in messages)

    return rule


def default_logging_rules(config: LoggingConfig) -> List[LoggingRule]:
    """Build the standard logging predicates from configuration."""
    return [
        call_text_rule(config),
        print_function_rule(config),
        entry_point_rule(config),
        line_keyword_rule(config),
    ]


class LiteralClassifier:
    """
    Decide inclusion of literals and compute their normalized text.

    Usage:
        classifier = LiteralClassifier()
        result = classifier.classify(Literal.from_text("确定"), LiteralContext())
        if result.included:
            print(result.normalized_text)
    """

    def __init__(
        self,
        config: Optional[ClassifierConfig] = None,
        logging_rules: Optional[Sequence[LoggingRule]] = None,
    ):
        """
        Initialize classifier.

        Args:
            config: Rule table; defaults to ClassifierConfig()
            logging_rules: Replaces the default logging predicates when given
        """
        self.config = config or ClassifierConfig()
        if logging_rules is None:
            logging_rules = default_logging_rules(self.config.logging)
        self.logging_rules: List[LoggingRule] = list(logging_rules)

        self._target_script = re.compile(self.config.target_script) if self.config.target_script else None
        self._path_patterns = [re.compile(p) for p in self.config.path_patterns]
        self._domain_prefixes = tuple(self.config.domain_prefixes)
        self._image_suffixes = tuple(f'.{ext.lower()}' for ext in self.config.image_extensions)
        self._symbols = frozenset(self.config.symbol_characters)
        self._localization_functions = frozenset(self.config.localization_functions)

    def normalize(self, literal: Literal) -> str:
        """Return the literal's normalized text."""
        return normalize_segments(literal.segments, self.config.placeholder)

    def exclusion_reason(self, text: str) -> Optional[str]:
        """
        Apply the content rules (1-7) to normalized text.

        Returns:
            Name of the first matching rule, or None if the text passes
        """
        if not text:
            return 'empty'
        if self._target_script is not None and not self._target_script.search(text):
            return 'target_script'
        if text.startswith(self._domain_prefixes):
            return 'domain_prefix'
        if self._image_suffixes and text.lower().endswith(self._image_suffixes):
            return 'image_asset'
        if all(self._is_symbol(char) for char in text):
            return 'punctuation'
        if not EMOJI_PATTERN.sub('', text).strip():
            return 'emoji'
        if any(pattern.search(text) for pattern in self._path_patterns):
            return 'path'
        return None

    def is_logging(self, literal: Literal, context: LiteralContext) -> bool:
        """True if any logging predicate recognises the literal's context."""
        return any(rule(literal, context) for rule in self.logging_rules)

    def is_localized(self, context: LiteralContext) -> bool:
        """True if the literal is the first positional argument of a localization call."""
        call = context.call
        return (
            call is not None
            and call.receiver is None
            and call.name in self._localization_functions
            and call.argument_index == 0
            and call.is_positional
        )

    def is_policy_text(self, text: str) -> bool:
        """Long text mentioning privacy/consent keywords."""
        policy = self.config.policy
        return len(text) > policy.min_length and any(keyword in text for keyword in policy.keywords)

    def classify(self, literal: Literal, context: Optional[LiteralContext] = None) -> Classification:
        """
        Classify one literal.

        Args:
            literal: Decoded literal
            context: Syntactic context; an empty context when omitted

        Returns:
            Classification; check ``included`` before using ``normalized_text``
        """
        if context is None:
            context = LiteralContext()

        text = self.normalize(literal)
        reason = self.exclusion_reason(text)
        if reason is not None:
            return Classification(normalized_text=text, excluded_by=reason)

        if self.is_logging(literal, context):
            return Classification(normalized_text=text, excluded_by='logging')

        is_policy = self.is_policy_text(text)
        if is_policy:
            text = f"{self.config.policy.marker}{text}"

        return Classification(
            normalized_text=text,
            is_localized=self.is_localized(context),
            is_policy_text=is_policy,
        )

    def _is_symbol(self, char: str) -> bool:
        return char in self._symbols or unicodedata.category(char).startswith('P')
