"""Progress bar for scans, driven by ScanEvent notifications."""

import sys
from typing import Optional, TextIO

from tqdm import tqdm

from ..core.models import ScanEvent


class ScanProgress:
    """
    tqdm progress bar fed by ``ProjectScanner.scan(on_event=...)``.

    Events arrive on the scanner's event thread, not on the workers. The bar
    only counts finished files, so a dropped or reordered event costs at most
    one tick.

    Usage:
        with ScanProgress() as progress:
            result = scanner.scan(root, on_event=progress)
    """

    def __init__(
        self,
        desc: str = 'Scanning',
        disable: bool = False,
        unit: str = 'files',
        leave: bool = False,
        file: Optional[TextIO] = None,
    ):
        """
        Initialize progress bar.

        Args:
            desc: Description prefix for the progress bar
            disable: If True, don't show progress output
            unit: Unit of items
            leave: Whether to leave progress bar after completion
            file: Output stream (default: sys.stderr)
        """
        self.desc = desc
        self.disable = disable
        self.unit = unit
        self.leave = leave
        self.file = file or sys.stderr
        self.current_file: Optional[str] = None
        self._bar: Optional[tqdm] = None

    def __call__(self, event: ScanEvent) -> None:
        if event.kind == 'discovered':
            self._open(event.total)
        elif event.kind == 'file_started':
            self.current_file = event.path
        elif event.kind == 'file_finished' and self._bar is not None:
            self._bar.update(1)

    @property
    def count(self) -> int:
        """Files finished so far."""
        return self._bar.n if self._bar is not None else 0

    def _open(self, total: int) -> None:
        self.close()
        self._bar = tqdm(
            total=total,
            desc=self.desc,
            unit=self.unit,
            leave=self.leave,
            file=self.file,
            disable=self.disable,
        )

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()

    def __enter__(self) -> 'ScanProgress':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
