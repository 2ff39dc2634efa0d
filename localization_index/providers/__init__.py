"""Storage providers for localization files."""

from .base import BaseProvider
from .strings import StringsFileProvider

__all__ = [
    'BaseProvider',
    'StringsFileProvider',
]
