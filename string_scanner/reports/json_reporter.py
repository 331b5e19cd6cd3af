"""JSON report generator."""

import json
import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, Optional

from ..__version__ import __version__
from ..core.deduplicator import deduplicate
from ..core.models import ScanResult

logger = logging.getLogger('string_scanner.reports')


class JSONReporter:
    """Generate JSON reports for scan results."""

    @staticmethod
    def render(result: ScanResult) -> Dict[str, Any]:
        """
        Build the report structure.

        Records are deduplicated again on ``normalized_text``, so a result
        assembled by hand still produces one entry per text.

        Args:
            result: Scan result

        Returns:
            Report dictionary
        """
        records = deduplicate(result.records)

        return {
            'metadata': {
                'generated_at': datetime.now().isoformat(),
                'version': __version__,
                'root': result.root,
                'files_scanned': result.files_scanned,
                'total_before_dedupe': result.total_before_dedupe,
                'unique_strings': len(records),
            },
            'strings': [
                dict(sorted(record.to_dict().items()))
                for record in records
            ],
            'errors': [error.to_dict() for error in result.errors],
            'fatal_error': result.fatal_error,
        }

    @staticmethod
    def generate(
        result: ScanResult,
        output_path: Optional[Path] = None,
        pretty: bool = True
    ) -> Optional[Path]:
        """
        Generate JSON report.

        Args:
            result: Scan result
            output_path: Output file path; stdout when None
            pretty: Pretty print JSON

        Returns:
            Path to generated report, or None when written to stdout
        """
        report = JSONReporter.render(result)
        indent = 2 if pretty else None

        if output_path is None:
            json.dump(report, sys.stdout, indent=indent, ensure_ascii=False)
            sys.stdout.write('\n')
            sys.stdout.flush()
            return None

        output_path = Path(output_path)

        # Create output directory if needed
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=indent, ensure_ascii=False)
            f.write('\n')

        logger.info(f"JSON report: {output_path}")

        return output_path

    @staticmethod
    def load(report_path: Path) -> dict:
        """
        Load JSON report from file.

        Args:
            report_path: Path to JSON report

        Returns:
            Report dictionary
        """
        with open(report_path, 'r', encoding='utf-8') as f:
            return json.load(f)
