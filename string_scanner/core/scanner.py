"""Project scanner: discovery, parallel extraction and merge."""

import logging
import os
import queue
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from threading import Event, Lock, Thread
from typing import Callable, Dict, List, Optional, Union

from ..frameworks.base import BaseAdapter
from ..frameworks.swift import SwiftAdapter
from ..utils.config import ScanConfig, Config
from .classifier import LiteralClassifier
from .deduplicator import deduplicate
from .errors import DiscoveryError, ReadError, ScanError
from .models import FileError, ScanEvent, ScanResult, StringRecord
from .visitor import StringVisitor

logger = logging.getLogger('string_scanner.scanner')

EventCallback = Callable[[ScanEvent], None]


def read_source(path: Path) -> bytes:
    """
    Read a file and make sure it is valid UTF-8.

    Raises:
        ReadError: On I/O failure or undecodable content
    """
    try:
        data = path.read_bytes()
        data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise ReadError(path, f"not valid UTF-8: {e.reason} at byte {e.start}") from e
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e
    return data


def discover_files(root: Union[str, Path], config: Optional[ScanConfig] = None) -> List[Path]:
    """
    Find all source files under root.

    Args:
        root: Directory to scan
        config: Discovery settings

    Returns:
        Sorted list of eligible files

    Raises:
        DiscoveryError: If root is missing, not a directory or unreadable
    """
    config = config or ScanConfig()
    root = Path(root)

    if not root.exists():
        raise DiscoveryError(root, "path does not exist")
    if not root.is_dir():
        raise DiscoveryError(root, "path is not a directory")
    try:
        with os.scandir(root):
            pass
    except OSError as e:
        raise DiscoveryError(root, e.strerror or str(e)) from e

    extensions = {ext.lower() for ext in config.extensions}
    excluded = [segment for segment in config.exclude_paths if segment.strip()]
    packages = tuple(ext.lower() for ext in config.package_extensions)

    def on_walk_error(error: OSError):
        logger.warning(f"Cannot list {error.filename}: {error.strerror or error}")

    files: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_walk_error):
        # Prune in place so os.walk never descends into skipped directories
        dirnames[:] = [
            name for name in dirnames
            if not (config.skip_hidden and name.startswith('.'))
            and not (packages and name.lower().endswith(packages))
        ]

        for name in filenames:
            if config.skip_hidden and name.startswith('.'):
                continue
            if os.path.splitext(name)[1].lower() not in extensions:
                continue
            path = Path(dirpath) / name
            relative = '/' + path.relative_to(root).as_posix()
            if any(segment in relative for segment in excluded):
                continue
            files.append(path)

    return sorted(files)


class ResultAccumulator:
    """
    Append-only sink shared by the workers of one scan.

    Every method takes the lock for the duration of a single append, so no
    worker ever sees another worker's partial update.
    """

    def __init__(self):
        self._lock = Lock()
        self._records: List[StringRecord] = []
        self._errors: List[FileError] = []
        self._excluded: Counter = Counter()
        self._processed = 0

    def add(self, records: List[StringRecord], excluded: Optional[Counter] = None) -> int:
        """Add one file's results. Returns the number of files processed so far."""
        with self._lock:
            self._records.extend(records)
            if excluded:
                self._excluded.update(excluded)
            self._processed += 1
            return self._processed

    def add_error(self, error: FileError) -> int:
        """Record a failed file. Returns the number of files processed so far."""
        with self._lock:
            self._errors.append(error)
            self._processed += 1
            return self._processed

    @property
    def records(self) -> List[StringRecord]:
        with self._lock:
            return list(self._records)

    @property
    def errors(self) -> List[FileError]:
        with self._lock:
            return sorted(self._errors, key=lambda error: error.path)

    @property
    def excluded(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._excluded)


class EventDispatcher:
    """
    Deliver scan events to a consumer on its own thread.

    Workers call ``publish``, which never waits: when the backlog is full the
    event is dropped. A slow consumer therefore only delays its own view of
    the scan.
    """

    _POLL_INTERVAL = 0.05

    def __init__(self, callback: EventCallback, maxsize: int = 1024):
        self._callback = callback
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._closed = Event()
        self._abandoned = Event()
        self._lock = Lock()
        self.dropped = 0
        self._thread = Thread(target=self._run, name='string-scanner-events', daemon=True)
        self._thread.start()

    def publish(self, event: ScanEvent) -> None:
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            with self._lock:
                self.dropped += 1

    def close(self, timeout: Optional[float] = None) -> None:
        """
        Stop accepting work and wait for queued events to be delivered.

        Args:
            timeout: Seconds to wait; undelivered events are dropped after it
        """
        self._closed.set()
        self._thread.join(timeout)
        if self._thread.is_alive():
            self._abandoned.set()
            logger.debug(f"Progress consumer still busy after {timeout}s; remaining events dropped")
        if self.dropped:
            logger.debug(f"Dropped {self.dropped} progress events")

    def _run(self) -> None:
        while not self._abandoned.is_set():
            try:
                event = self._queue.get(timeout=self._POLL_INTERVAL)
            except queue.Empty:
                if self._closed.is_set():
                    return
                continue
            if self._abandoned.is_set():
                return
            try:
                self._callback(event)
            except Exception as e:
                # A failing consumer only loses the event
                logger.debug(f"Progress callback failed for {event.kind}: {e}")


class ProjectScanner:
    """
    Scan a project tree for localizable string literals.

    Features:
    - Parallel per-file extraction on a thread pool
    - Per-file read/parse failures are reported, never fatal
    - Output independent of worker scheduling
    - Progress events delivered on their own thread, never blocking workers

    Usage:
        scanner = ProjectScanner()
        result = scanner.scan('./MyApp')
        for record in result.records:
            print(record.file, record.line, record.normalized_text)
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        adapter: Optional[BaseAdapter] = None,
        classifier: Optional[LiteralClassifier] = None,
    ):
        """
        Initialize scanner.

        Args:
            config: Scanner configuration (defaults to Config())
            adapter: Language adapter (defaults to SwiftAdapter)
            classifier: Literal classifier (defaults to one built from config)
        """
        self.config = config or Config()
        self.adapter = adapter or SwiftAdapter()
        self.classifier = classifier or LiteralClassifier(self.config.classifier)

    def scan(self, root: Union[str, Path, None] = None, on_event: Optional[EventCallback] = None) -> ScanResult:
        """
        Scan every eligible file under root.

        Args:
            root: Directory to scan (defaults to config.scan.root)
            on_event: Optional progress callback, run on a separate thread.
                Events it cannot keep up with are dropped, and the scan waits
                at most ``scan.event_drain_timeout`` seconds for it at the end.

        Returns:
            ScanResult with deduplicated records and per-file errors. A
            missing or unreadable root yields no records and ``fatal_error``.
        """
        root = Path(root if root is not None else self.config.scan.root)
        logger.info(f"Scanning project at: {root}")

        try:
            files = discover_files(root, self.config.scan)
        except DiscoveryError as e:
            logger.error(f"Cannot enumerate directory contents: {e}")
            return ScanResult(root=str(root), fatal_error=str(e))

        total = len(files)
        logger.debug(f"Found {total} source files")

        dispatcher = None
        if on_event is not None:
            dispatcher = EventDispatcher(on_event, maxsize=self.config.scan.event_queue_size)

        def emit(event: ScanEvent):
            if dispatcher is not None:
                dispatcher.publish(event)

        emit(ScanEvent('discovered', total=total))
        accumulator = ResultAccumulator()

        def work(path: Path):
            emit(ScanEvent('file_started', path=str(path), total=total))
            processed = self._scan_one(path, accumulator)
            emit(ScanEvent('file_finished', path=str(path), processed=processed, total=total))

        try:
            if files:
                with ThreadPoolExecutor(max_workers=self.config.scan.max_workers) as executor:
                    # list() re-raises anything unexpected from a worker
                    list(executor.map(work, files))
        finally:
            if dispatcher is not None:
                dispatcher.close(self.config.scan.event_drain_timeout)

        records = accumulator.records
        unique = deduplicate(records)
        errors = accumulator.errors

        logger.info(
            f"Scanned {total} files: {len(records)} strings, "
            f"{len(unique)} unique, {len(errors)} failed"
        )

        return ScanResult(
            root=str(root),
            records=unique,
            errors=errors,
            files_scanned=total - len(errors),
            total_before_dedupe=len(records),
            excluded=accumulator.excluded,
        )

    def scan_file(self, path: Path) -> StringVisitor:
        """
        Read, parse and visit one file.

        Returns:
            The visitor, holding ``strings`` and ``excluded``

        Raises:
            ReadError: File unreadable or not UTF-8
            ParseError: Source could not be parsed
        """
        source = read_source(path)
        visitor = StringVisitor(
            file_path=str(path),
            source=source,
            adapter=self.adapter,
            classifier=self.classifier,
            strict=self.config.scan.strict_parse,
        )
        visitor.visit()
        return visitor

    def _scan_one(self, path: Path, accumulator: ResultAccumulator) -> int:
        try:
            visitor = self.scan_file(path)
        except ScanError as e:
            logger.warning(f"Error scanning {e.path}: {e.message}")
            return accumulator.add_error(FileError(path=e.path, kind=e.kind, message=e.message))
        return accumulator.add(visitor.strings, visitor.excluded)
