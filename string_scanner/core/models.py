"""Data types shared by the scanning pipeline."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Segment:
    """One piece of a decoded literal: static text or an embedded expression."""
    text: str
    is_expression: bool = False


@dataclass(frozen=True)
class Literal:
    """A literal node as handed from the visitor to the classifier."""
    raw_text: str
    segments: Tuple[Segment, ...]
    kind: str = 'string'  # string | regex

    @classmethod
    def from_text(cls, text: str, raw_text: Optional[str] = None, kind: str = 'string') -> 'Literal':
        """Build a literal without interpolation."""
        if raw_text is None:
            raw_text = f'"{text}"' if kind == 'string' else text
        return cls(raw_text=raw_text, segments=(Segment(text),), kind=kind)


@dataclass(frozen=True)
class CallSite:
    """The call expression a literal is a direct argument of."""
    callee: str  # rendered callee, e.g. "self.logger.info"
    name: str  # last component of the callee, e.g. "info"
    receiver: Optional[str]  # everything before the last ".", None for bare calls
    text: str  # rendered text of the whole call
    argument_index: int
    argument_label: Optional[str] = None

    @property
    def is_positional(self) -> bool:
        return self.argument_label is None


@dataclass(frozen=True)
class LiteralContext:
    """Syntactic surroundings of a literal, as seen by the classifier."""
    file_path: str = ''
    line_text: str = ''
    call: Optional[CallSite] = None


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying one literal."""
    normalized_text: str
    is_localized: bool = False
    excluded_by: Optional[str] = None
    is_policy_text: bool = False

    @property
    def included(self) -> bool:
        return self.excluded_by is None


@dataclass(frozen=True)
class StringRecord:
    """One observed literal occurrence that passed classification."""
    file: str
    line: int
    column: int
    raw_text: str
    normalized_text: str
    is_localized: bool = False

    def __post_init__(self):
        if not self.normalized_text:
            raise ValueError("normalized_text must not be empty")
        if self.line < 1 or self.column < 1:
            raise ValueError(f"invalid position {self.line}:{self.column}")

    @property
    def sort_key(self) -> Tuple[str, int, int]:
        return (self.file, self.line, self.column)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': self.file,
            'line': self.line,
            'column': self.column,
            'raw_text': self.raw_text,
            'normalized_text': self.normalized_text,
            'is_localized': self.is_localized,
        }


@dataclass(frozen=True)
class FileError:
    """A per-file failure that was recovered from."""
    path: str
    kind: str  # read | parse
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {'path': self.path, 'kind': self.kind, 'message': self.message}


@dataclass(frozen=True)
class ScanEvent:
    """Progress notification emitted during a scan."""
    kind: str  # discovered | file_started | file_finished
    path: Optional[str] = None
    processed: int = 0
    total: int = 0


@dataclass
class ScanResult:
    """Aggregate outcome of scanning one root directory."""
    root: str
    records: List[StringRecord] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)
    files_scanned: int = 0
    total_before_dedupe: int = 0
    excluded: Dict[str, int] = field(default_factory=dict)  # rule name -> count
    fatal_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.fatal_error is None

    @property
    def error_count(self) -> int:
        return len(self.errors) + (0 if self.ok else 1)
