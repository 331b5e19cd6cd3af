"""Command-line interface for string scanner."""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from .__version__ import __version__
from .utils.colors import Colors
from .utils.config import Config, CONFIG_FILE_NAME, create_default_config, ConfigValidationError
from .utils.logging import configure_logging, get_logger
from .utils.progress import ScanProgress
from .core.scanner import ProjectScanner
from .reports.json_reporter import JSONReporter

logger = get_logger('cli')

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_FILE_ERRORS = 2


def load_and_validate_config(config_path: Optional[Path] = None, validate: bool = True) -> Config:
    """
    Load configuration and optionally validate it.

    Args:
        config_path: Explicit config file; defaults to .string-scanner.yml in cwd
        validate: Whether to validate the config

    Returns:
        Loaded Config object

    Raises:
        ConfigValidationError: If the file is unreadable or validation fails
    """
    if config_path is not None and not Path(config_path).is_file():
        raise ConfigValidationError([f"Config file not found: {config_path}"])

    config = Config.from_file(Path(config_path) if config_path else None)

    if validate:
        errors, warnings = config.validate()

        for warning in warnings:
            logger.warning(f"Config warning: {warning}")

        if errors:
            raise ConfigValidationError(errors)

    return config


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def cmd_init(args):
    """Initialize configuration file."""
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if config_path.exists() and not args.force:
        print(f"{Colors.error('❌')} Config already exists: {config_path}")
        print("   Use --force to overwrite")
        return EXIT_FAILURE

    config = create_default_config()
    config.save(config_path)

    print(f"{Colors.success('✅')} Created: {config_path}")
    print(f"\n{Colors.bold('Next steps:')}")
    print(f"1. Edit {CONFIG_FILE_NAME} to configure your project")
    print("2. Run: string-scanner scan")

    return EXIT_OK


def cmd_scan(args):
    """Scan a project and emit the JSON report."""
    configure_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    try:
        config = load_and_validate_config(args.config)
    except ConfigValidationError as e:
        logger.error("Configuration errors:")
        for error in e.errors:
            logger.error(f"   • {error}")
        return EXIT_FAILURE

    # Command line wins over the config file
    if args.workers:
        config.scan.max_workers = args.workers
    if args.strict:
        config.scan.strict_parse = True
    root = Path(args.path) if args.path else Path(config.scan.root)

    scanner = ProjectScanner(config)
    with ScanProgress(disable=args.no_progress or args.quiet) as progress:
        result = scanner.scan(root, on_event=progress)

    output = args.json or config.reports.output
    JSONReporter.generate(
        result,
        output_path=Path(output) if output else None,
        pretty=config.reports.pretty,
    )

    if not result.ok:
        logger.error(f"Scan failed: {result.fatal_error}")
        return EXIT_FAILURE

    logger.info(
        f"{len(result.records)} unique strings from {result.files_scanned} files "
        f"({result.total_before_dedupe} before deduplication)"
    )
    for rule, count in sorted(result.excluded.items()):
        logger.debug(f"   excluded by {rule}: {count}")

    if result.errors:
        logger.warning(f"{len(result.errors)} files could not be scanned")
        for error in result.errors:
            logger.warning(f"   • {error.path} ({error.kind}): {error.message}")
        if args.fail_on_errors:
            return EXIT_FILE_ERRORS

    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='string-scanner',
        description='Extract user-facing string literals from Swift projects',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # init command
    init_parser = subparsers.add_parser('init', help='Initialize configuration file')
    init_parser.add_argument('--force', action='store_true', help='Overwrite existing config')

    # scan command
    scan_parser = subparsers.add_parser('scan', help='Scan a project for string literals')
    scan_parser.add_argument('path', nargs='?', help='Project root (default: scan.root from config)')
    scan_parser.add_argument('--config', metavar='PATH', help=f'Config file (default: ./{CONFIG_FILE_NAME})')
    scan_parser.add_argument('--json', metavar='PATH', help='Write JSON report to file instead of stdout')
    scan_parser.add_argument('--workers', type=_positive_int, metavar='N', help='Number of worker threads')
    scan_parser.add_argument('--strict', action='store_true', help='Treat files with syntax errors as failures')
    scan_parser.add_argument('--no-progress', action='store_true', help='Hide the progress bar')
    scan_parser.add_argument('--verbose', '-v', action='store_true', help='Show detailed output')
    scan_parser.add_argument('--quiet', '-q', action='store_true', help='Minimal output')
    scan_parser.add_argument('--log-file', metavar='PATH', help='Also write a debug log to file')
    scan_parser.add_argument('--fail-on-errors', action='store_true',
                             help='Exit with code 2 if any file could not be scanned')

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Execute command
    if args.command == 'init':
        return cmd_init(args)
    elif args.command == 'scan':
        return cmd_scan(args)
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(main())
