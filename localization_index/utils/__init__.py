"""Utility modules."""

from .config import Config, ConfigValidationError
from .logging import get_logger, configure_logging
from .validators import is_valid_language_code, is_valid_key

__all__ = [
    'Config',
    'ConfigValidationError',
    'get_logger',
    'configure_logging',
    'is_valid_language_code',
    'is_valid_key',
]
