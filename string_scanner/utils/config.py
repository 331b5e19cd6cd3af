"""Configuration management for string scanner."""

import os
import re
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, asdict


CONFIG_FILE_NAME = '.string-scanner.yml'


def _is_int(value: Any) -> bool:
    """YAML gives bools for yes/no, which are ints to isinstance."""
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class ScanConfig:
    """File discovery and execution settings."""
    root: str = "."
    extensions: List[str] = field(default_factory=lambda: ['.swift', '.m', '.h'])
    # Substrings of the root-relative path ("/Sources/App.swift") that exclude a file
    exclude_paths: List[str] = field(default_factory=lambda: [
        '/Pods/', '/Carthage/', '/.swiftpm/',
        '/Tests/', '/Test/', '/Specs/',
        '/DerivedData/', '/build/',
    ])
    # Directories treated as opaque bundles; nothing below them is scanned
    package_extensions: List[str] = field(default_factory=lambda: [
        '.app', '.bundle', '.framework', '.xcodeproj', '.xcworkspace',
        '.xcassets', '.playground', '.xcdatamodeld',
    ])
    skip_hidden: bool = True
    max_workers: Optional[int] = None  # None = ThreadPoolExecutor default
    strict_parse: bool = False  # treat syntax-error trees as parse failures
    # Progress events beyond this backlog are dropped
    event_queue_size: int = 1024
    # Seconds to wait for queued events after the last file; 0 = do not wait
    event_drain_timeout: float = 1.0


@dataclass
class LoggingConfig:
    """Heuristics that recognise log statements."""
    call_patterns: List[str] = field(default_factory=lambda: [
        'logger.debug', 'logger.info', 'logger.warning', 'logger.error',
        'logger.critical', 'Logger', '.log(', 'self.logger.',
    ])
    logger_names: List[str] = field(default_factory=lambda: [
        'logger', 'log', 'Logger', 'Log', 'os_log',
    ])
    log_methods: List[str] = field(default_factory=lambda: [
        'debug', 'info', 'warning', 'error', 'critical',
        'log', 'verbose', 'trace', 'fatal',
    ])
    print_functions: List[str] = field(default_factory=lambda: [
        'print', 'debugPrint', 'NSLog', 'os_log',
    ])
    line_keywords: List[str] = field(default_factory=lambda: [
        'logger', ' log', 'debug', 'info', 'warning', 'error',
    ])
    entry_point_files: List[str] = field(default_factory=lambda: ['AppDelegate.swift'])
    entry_point_messages: List[str] = field(default_factory=lambda: [
        '应用启动完成', '初始化', '权限', '通知权限', 'GameCenter',
        '已授权', '未确定', '被拒绝', '受限',
    ])


@dataclass
class PolicyConfig:
    """Tagging of long privacy-policy style text."""
    min_length: int = 100
    keywords: List[str] = field(default_factory=lambda: [
        '隐私政策', '个人信息', '收集', '使用', '保护',
        '权限', '同意', '条款', '协议', '数据',
    ])
    marker: str = '[POLICY_TEXT] '


@dataclass
class ClassifierConfig:
    """Rule table for the literal classifier."""
    # Character class a literal must hit at least once; empty disables the filter
    target_script: str = '[一-龥]'
    placeholder: str = '%@'
    domain_prefixes: List[str] = field(default_factory=lambda: ['com.'])
    image_extensions: List[str] = field(default_factory=lambda: [
        'png', 'jpg', 'jpeg', 'gif', 'bmp', 'tiff', 'webp',
    ])
    symbol_characters: str = '!@#$%^&*()_+-=[]{}|;:,.<>?/~`'
    path_patterns: List[str] = field(default_factory=lambda: [
        r'^[\\/].*[\\/][a-z]*$',
        r'^[\\/].*[\\/]$',
        r'^[\\/].*$',
        r'^.*[\\/]$',
    ])
    localization_functions: List[str] = field(default_factory=lambda: ['NSLocalizedString'])
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClassifierConfig':
        """Build from a YAML mapping, including the nested sections."""
        data = dict(data or {})
        logging_data = data.pop('logging', None) or {}
        policy_data = data.pop('policy', None) or {}
        return cls(
            logging=LoggingConfig(**logging_data),
            policy=PolicyConfig(**policy_data),
            **data,
        )


@dataclass
class ReportsConfig:
    """Reports configuration."""
    output: str = ""  # empty = print JSON to stdout
    pretty: bool = True


@dataclass
class Config:
    """Main configuration class."""
    scan: ScanConfig = field(default_factory=ScanConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    reports: ReportsConfig = field(default_factory=ReportsConfig)

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from YAML file."""
        if config_path is None:
            # Look for .string-scanner.yml in current directory
            config_path = Path.cwd() / CONFIG_FILE_NAME

            if not config_path.exists():
                # Return default config
                return cls()

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError([f"Cannot parse {config_path}: {e}"]) from e

        if not isinstance(data, dict):
            raise ConfigValidationError([f"{config_path} must contain a mapping"])

        try:
            return cls.from_dict(data)
        except TypeError as e:
            # Unknown keys surface as unexpected dataclass arguments
            raise ConfigValidationError([f"Invalid configuration in {config_path}: {e}"]) from e

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Build configuration from a parsed YAML mapping."""
        return cls(
            scan=ScanConfig(**(data.get('scan') or {})),
            classifier=ClassifierConfig.from_dict(data.get('classifier') or {}),
            reports=ReportsConfig(**(data.get('reports') or {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'scan': asdict(self.scan),
            'classifier': asdict(self.classifier),
            'reports': asdict(self.reports),
        }

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def validate(self, raise_on_error: bool = False) -> tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            raise_on_error: If True, raise ConfigValidationError on validation errors

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        # Scan root
        if not os.path.isdir(self.scan.root):
            warnings.append(ConfigValidationWarning(
                f"Scan root does not exist or is not a directory: {self.scan.root}"
            ))

        if not self.scan.extensions:
            errors.append("scan.extensions cannot be empty")
        for ext in self.scan.extensions:
            if not ext.startswith('.') or len(ext) < 2:
                errors.append(f"Invalid file extension '{ext}'. Use the '.swift' form")

        max_workers = self.scan.max_workers
        if max_workers is not None:
            if not _is_int(max_workers):
                errors.append(f"scan.max_workers must be an integer, got {max_workers!r}")
            elif max_workers < 1:
                errors.append(f"scan.max_workers must be at least 1, got {max_workers}")

        if not _is_int(self.scan.event_queue_size) or self.scan.event_queue_size < 1:
            errors.append(
                f"scan.event_queue_size must be a positive integer, got {self.scan.event_queue_size!r}"
            )
        drain = self.scan.event_drain_timeout
        if isinstance(drain, bool) or not isinstance(drain, (int, float)) or drain < 0:
            errors.append(f"scan.event_drain_timeout must be a number >= 0, got {drain!r}")

        for segment in self.scan.exclude_paths:
            if not segment.strip():
                warnings.append(ConfigValidationWarning(
                    "Empty scan.exclude_paths entry would exclude every file; it is ignored"
                ))

        # Classifier regexes must compile, the classifier itself never raises
        classifier = self.classifier
        if classifier.target_script:
            error = self._check_regex(classifier.target_script)
            if error:
                errors.append(f"Invalid classifier.target_script: {error}")

        for pattern in classifier.path_patterns:
            error = self._check_regex(pattern)
            if error:
                errors.append(f"Invalid classifier.path_patterns entry '{pattern}': {error}")

        if not classifier.placeholder:
            errors.append("classifier.placeholder cannot be empty")

        if not classifier.localization_functions:
            warnings.append(ConfigValidationWarning(
                "classifier.localization_functions is empty; no string will be marked localized"
            ))

        if not _is_int(classifier.policy.min_length):
            errors.append(
                f"classifier.policy.min_length must be an integer, got {classifier.policy.min_length!r}"
            )
        elif classifier.policy.min_length < 0:
            errors.append(
                f"classifier.policy.min_length must be >= 0, got {classifier.policy.min_length}"
            )
        if classifier.policy.keywords and not classifier.policy.marker:
            warnings.append(ConfigValidationWarning(
                "classifier.policy.marker is empty; policy text will not be distinguishable"
            ))

        # Raise error if requested
        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings

    @staticmethod
    def _check_regex(pattern: str) -> Optional[str]:
        """Return the compile error for a pattern, or None if it is valid."""
        try:
            re.compile(pattern)
        except re.error as e:
            return str(e)
        return None


def create_default_config(root: str = '.') -> Config:
    """Create default configuration for a project root."""
    config = Config()
    config.scan.root = root
    return config
