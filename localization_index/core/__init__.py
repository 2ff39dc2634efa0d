"""Core modules: entity model, index, search, mutations and session."""

from .models import Filter, Group, Localization, LoadResult, Slot, SlotState, TranslationEntry
from .index import LocalizationIndex
from .search import filter_keys, normalize
from .mutations import MutationCoordinator
from .session import LocalizationSession

__all__ = [
    'Filter',
    'Group',
    'Localization',
    'LoadResult',
    'Slot',
    'SlotState',
    'TranslationEntry',
    'LocalizationIndex',
    'filter_keys',
    'normalize',
    'MutationCoordinator',
    'LocalizationSession',
]
