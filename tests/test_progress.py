"""Tests for the scan progress bar."""

import tempfile
from io import StringIO
from pathlib import Path
from unittest.mock import patch

import pytest

from string_scanner.core.models import ScanEvent
from string_scanner.core.scanner import ProjectScanner
from string_scanner.utils.progress import ScanProgress


class TestScanProgress:
    """Test cases for ScanProgress."""

    def test_counts_finished_files(self):
        progress = ScanProgress(file=StringIO())
        progress(ScanEvent('discovered', total=3))
        progress(ScanEvent('file_started', path='a.swift', total=3))
        progress(ScanEvent('file_finished', path='a.swift', processed=1, total=3))
        progress(ScanEvent('file_started', path='b.swift', total=3))

        assert progress.count == 1
        assert progress.current_file == 'b.swift'
        progress.close()

    def test_total_from_discovery(self):
        with ScanProgress(file=StringIO()) as progress:
            progress(ScanEvent('discovered', total=7))
            assert progress._bar.total == 7

    def test_events_before_discovery_ignored(self):
        progress = ScanProgress(file=StringIO())
        progress(ScanEvent('file_finished', path='a.swift', processed=1))
        assert progress.count == 0

    def test_writes_to_given_stream(self):
        output = StringIO()
        with ScanProgress(desc='Scanning', file=output) as progress:
            progress(ScanEvent('discovered', total=2))
            progress(ScanEvent('file_finished', processed=1, total=2))
            progress(ScanEvent('file_finished', processed=2, total=2))
        assert 'Scanning' in output.getvalue()

    def test_disabled_no_output(self, capfd):
        """Disabled progress should not output anything."""
        output = StringIO()
        with ScanProgress(disable=True, file=output) as progress:
            progress(ScanEvent('discovered', total=1))
            progress(ScanEvent('file_finished', processed=1, total=1))
        assert output.getvalue() == ''
        captured = capfd.readouterr()
        assert captured.out == ''

    def test_close_without_events(self):
        progress = ScanProgress()
        progress.close()
        assert progress.count == 0

    def test_close_on_exception(self):
        with patch('string_scanner.utils.progress.tqdm') as mock_tqdm:
            with pytest.raises(RuntimeError):
                with ScanProgress() as progress:
                    progress(ScanEvent('discovered', total=1))
                    raise RuntimeError('boom')
            mock_tqdm.return_value.close.assert_called_once()


class TestScanProgressWithScanner:
    """ScanProgress as the scanner's event consumer."""

    def test_tracks_whole_scan(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            for i in range(4):
                (root / f'F{i}.swift').write_text(f'let a = "第{i}项"\n', encoding='utf-8')

            with ScanProgress(file=StringIO()) as progress:
                ProjectScanner().scan(root, on_event=progress)
                assert progress.count == 4
