"""Base provider interface for localization storage backends."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional

from ..core.models import Group, Localization, TranslationEntry

DEFAULT_EXCLUDE_DIRS = (
    'build', 'Build', 'DerivedData', '.build',
    'Pods', 'Carthage', 'vendor', '.git',
    'node_modules', 'dist',
)


class BaseProvider(ABC):
    """
    Base provider that reads and persists localization groups.

    A provider owns the on-disk format. The session only ever asks it to scan
    a directory and to apply single-entry edits; every edit method mutates the
    in-memory ``Localization`` and persists it.
    """

    def __init__(self, exclude_dirs: Optional[Iterable[str]] = None):
        self.exclude_dirs = set(DEFAULT_EXCLUDE_DIRS if exclude_dirs is None else exclude_dirs)

    @abstractmethod
    def get_localizations(self, root: Path) -> List[Group]:
        """
        Scan a directory for localization groups.

        Args:
            root: Directory to scan

        Returns:
            Groups found, empty if there is no localization data

        Raises:
            ProviderError: If a file cannot be read
        """
        pass

    @abstractmethod
    def update_localization(
        self,
        localization: Localization,
        key: str,
        value: str,
        message: Optional[str] = None
    ) -> TranslationEntry:
        """
        Set the value (and message) of one entry and persist it.

        Args:
            localization: Localization to edit
            key: Localization key
            value: New value
            message: New message; None keeps the current one

        Returns:
            The updated (or newly created) entry
        """
        pass

    @abstractmethod
    def delete_key_from_localization(self, localization: Localization, key: str) -> None:
        """Remove one entry and persist the localization."""
        pass

    @abstractmethod
    def add_key_to_localization(
        self,
        localization: Localization,
        key: str,
        message: Optional[str] = None
    ) -> TranslationEntry:
        """
        Create an entry with an empty value and persist it.

        Returns:
            The new entry, or the existing one if the key is already present
        """
        pass

    def should_exclude_path(self, path: Path) -> bool:
        """
        Check if a file lives under an excluded directory.

        Args:
            path: File path to check

        Returns:
            True if file should be skipped
        """
        return any(part in self.exclude_dirs for part in path.parts)
