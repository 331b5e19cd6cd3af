"""Utility modules."""

from .colors import Colors
from .config import Config, ConfigValidationError, ConfigValidationWarning, create_default_config

__all__ = [
    'Colors',
    'Config',
    'ConfigValidationError',
    'ConfigValidationWarning',
    'create_default_config',
]
