"""
Localization Index
==================

In-memory index, search and export for Apple .strings localization tables.

Usage:
    from localization_index import LocalizationSession, Filter

    with LocalizationSession() as session:
        session.load(Path('./MyApp'), on_loaded)
        session.run_pending(timeout=10)
        session.filter(Filter.MISSING, search='cafe')
        for row in range(session.row_count()):
            print(session.get_key(row))
"""

from .__version__ import __version__, __author__, __description__

# Core exports
from .core.models import (
    Filter,
    Group,
    Localization,
    LoadResult,
    Slot,
    SlotState,
    TranslationEntry,
)
from .core.index import LocalizationIndex
from .core.session import LocalizationSession
from .core.dispatch import MainThreadQueue
from .core.errors import (
    LocalizationIndexError,
    RowNotFoundError,
    EmptyGroupError,
    ProviderError,
    ExportError,
    SessionClosedError,
)

# Providers
from .providers.base import BaseProvider
from .providers.strings import StringsFileProvider

# Export
from .export.excel_exporter import ExcelExporter

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'Filter',
    'Group',
    'Localization',
    'LoadResult',
    'Slot',
    'SlotState',
    'TranslationEntry',
    'LocalizationIndex',
    'LocalizationSession',
    'MainThreadQueue',
    'LocalizationIndexError',
    'RowNotFoundError',
    'EmptyGroupError',
    'ProviderError',
    'ExportError',
    'SessionClosedError',
    'BaseProvider',
    'StringsFileProvider',
    'ExcelExporter',
]
