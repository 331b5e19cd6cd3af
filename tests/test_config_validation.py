"""Tests for configuration loading and validation."""

import pytest
from pathlib import Path
import tempfile
import yaml

from string_scanner.utils.config import (
    Config,
    ConfigValidationError,
    ConfigValidationWarning,
    ClassifierConfig,
    ScanConfig,
    create_default_config,
)


class TestConfigValidation:
    """Test cases for Config.validate() method."""

    def test_valid_default_config(self):
        """Default config should pass validation."""
        config = Config()
        errors, warnings = config.validate()
        assert len(errors) == 0

    def test_missing_root_is_warning(self):
        config = Config()
        config.scan.root = '/nonexistent/path/for/scanner'
        errors, warnings = config.validate()
        assert len(errors) == 0
        assert any('Scan root' in str(w) for w in warnings)

    def test_empty_extensions(self):
        config = Config()
        config.scan.extensions = []
        errors, warnings = config.validate()
        assert "scan.extensions cannot be empty" in errors

    def test_invalid_extension(self):
        config = Config()
        config.scan.extensions = ['swift']
        errors, warnings = config.validate()
        assert len(errors) == 1
        assert "Invalid file extension 'swift'" in errors[0]

    def test_invalid_worker_count(self):
        config = Config()
        config.scan.max_workers = 0
        errors, warnings = config.validate()
        assert any('max_workers' in e for e in errors)

    def test_empty_exclude_entry_warns(self):
        config = Config()
        config.scan.exclude_paths = ['/Pods/', '  ']
        errors, warnings = config.validate()
        assert len(errors) == 0
        assert len(warnings) == 1

    def test_invalid_target_script_regex(self):
        config = Config()
        config.classifier.target_script = '[一-'
        errors, warnings = config.validate()
        assert len(errors) == 1
        assert 'classifier.target_script' in errors[0]

    def test_invalid_path_pattern(self):
        config = Config()
        config.classifier.path_patterns = ['(unclosed']
        errors, warnings = config.validate()
        assert any('path_patterns' in e for e in errors)

    def test_empty_placeholder(self):
        config = Config()
        config.classifier.placeholder = ''
        errors, warnings = config.validate()
        assert "classifier.placeholder cannot be empty" in errors

    def test_no_localization_functions_warns(self):
        config = Config()
        config.classifier.localization_functions = []
        errors, warnings = config.validate()
        assert len(errors) == 0
        assert any('localization_functions' in str(w) for w in warnings)

    def test_negative_policy_length(self):
        config = Config()
        config.classifier.policy.min_length = -1
        errors, warnings = config.validate()
        assert any('policy.min_length' in e for e in errors)

    @pytest.mark.parametrize('value', ['four', 2.5, True, [4]])
    def test_non_integer_worker_count(self, value):
        config = Config()
        config.scan.max_workers = value
        errors, warnings = config.validate()
        assert any('max_workers must be an integer' in e for e in errors)

    @pytest.mark.parametrize('value', ['long', None, 10.0])
    def test_non_integer_policy_length(self, value):
        config = Config()
        config.classifier.policy.min_length = value
        errors, warnings = config.validate()
        assert any('policy.min_length must be an integer' in e for e in errors)

    def test_wrong_types_from_yaml_reported(self):
        """Type mistakes in the file end up in errors, not as a TypeError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / '.string-scanner.yml'
            path.write_text(
                'scan:\n  max_workers: four\nclassifier:\n  policy:\n    min_length: long\n',
                encoding='utf-8',
            )
            config = Config.from_file(path)

            with pytest.raises(ConfigValidationError) as exc_info:
                config.validate(raise_on_error=True)
        assert len(exc_info.value.errors) == 2

    @pytest.mark.parametrize('option,value', [
        ('event_queue_size', 0),
        ('event_queue_size', 'big'),
        ('event_drain_timeout', -1),
        ('event_drain_timeout', 'soon'),
    ])
    def test_invalid_event_settings(self, option, value):
        config = Config()
        setattr(config.scan, option, value)
        errors, warnings = config.validate()
        assert any(option in e for e in errors)

    def test_raise_on_error(self):
        """Should raise ConfigValidationError when raise_on_error=True."""
        config = Config()
        config.scan.extensions = []
        with pytest.raises(ConfigValidationError) as exc_info:
            config.validate(raise_on_error=True)
        assert len(exc_info.value.errors) >= 1


class TestConfigValidationWarning:
    """Test cases for ConfigValidationWarning class."""

    def test_warning_str(self):
        """Warning should have string representation."""
        warning = ConfigValidationWarning("Test warning message")
        assert str(warning) == "Test warning message"


class TestConfigValidationError:
    """Test cases for ConfigValidationError class."""

    def test_error_with_multiple_errors(self):
        """Error should handle multiple errors."""
        errors = ["Error 1", "Error 2", "Error 3"]
        error = ConfigValidationError(errors)
        assert len(error.errors) == 3
        assert "Error 1" in str(error)
        assert "Error 2" in str(error)


class TestConfigDefaults:
    """Test cases for default values."""

    def test_scan_defaults(self):
        scan = ScanConfig()
        assert scan.extensions == ['.swift', '.m', '.h']
        assert '/Pods/' in scan.exclude_paths
        assert scan.skip_hidden
        assert scan.max_workers is None
        assert scan.event_queue_size == 1024
        assert scan.event_drain_timeout == 1.0
        assert not scan.strict_parse

    def test_classifier_defaults(self):
        classifier = ClassifierConfig()
        assert classifier.placeholder == '%@'
        assert classifier.localization_functions == ['NSLocalizedString']
        assert classifier.policy.min_length == 100
        assert classifier.policy.marker == '[POLICY_TEXT] '
        assert 'AppDelegate.swift' in classifier.logging.entry_point_files

    def test_create_default_config(self):
        config = create_default_config('./MyApp')
        assert config.scan.root == './MyApp'


class TestConfigFromFile:
    """Test cases for loading and saving config files."""

    def test_load_partial_config(self):
        """Sections not present in the file keep their defaults."""
        config_data = {
            'scan': {'root': 'Sources', 'max_workers': 4},
            'classifier': {
                'placeholder': '{}',
                'policy': {'min_length': 50},
                'logging': {'print_functions': ['dump']},
            },
        }

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / '.string-scanner.yml'
            path.write_text(yaml.dump(config_data, allow_unicode=True), encoding='utf-8')

            config = Config.from_file(path)

        assert config.scan.root == 'Sources'
        assert config.scan.max_workers == 4
        assert config.scan.extensions == ['.swift', '.m', '.h']
        assert config.classifier.placeholder == '{}'
        assert config.classifier.policy.min_length == 50
        assert config.classifier.policy.marker == '[POLICY_TEXT] '
        assert config.classifier.logging.print_functions == ['dump']
        assert config.reports.pretty

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / '.string-scanner.yml'
            config = create_default_config(tmpdir)
            config.classifier.policy.keywords = ['隐私政策']
            config.save(path)

            assert '隐私政策' in path.read_text(encoding='utf-8')
            reloaded = Config.from_file(path)

        assert reloaded.to_dict() == config.to_dict()

    def test_empty_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / '.string-scanner.yml'
            path.write_text('', encoding='utf-8')
            assert Config.from_file(path).to_dict() == Config().to_dict()

    def test_unknown_key_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / '.string-scanner.yml'
            path.write_text('scan:\n  roots: Sources\n', encoding='utf-8')
            with pytest.raises(ConfigValidationError) as exc_info:
                Config.from_file(path)
        assert 'roots' in str(exc_info.value)

    def test_malformed_yaml_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / '.string-scanner.yml'
            path.write_text('scan: [unclosed\n', encoding='utf-8')
            with pytest.raises(ConfigValidationError):
                Config.from_file(path)

    def test_non_mapping_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / '.string-scanner.yml'
            path.write_text('- a\n- b\n', encoding='utf-8')
            with pytest.raises(ConfigValidationError):
                Config.from_file(path)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
