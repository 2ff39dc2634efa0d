"""Add, update and delete operations that keep provider data and index in step."""

from typing import Dict, Optional

from ..providers.base import BaseProvider
from ..utils.logging import get_logger
from .index import LocalizationIndex
from .models import TranslationEntry


class MutationCoordinator:
    """
    Applies edits to the selected group.

    Writes go to the provider first; the index is then patched in place. None
    of the operations recompute the filtered key list; call
    ``LocalizationIndex.filter`` again to refresh visible rows.
    """

    def __init__(self, provider: BaseProvider, index: LocalizationIndex):
        self.provider = provider
        self.index = index

    def update_localization(
        self,
        language: str,
        key: str,
        value: str,
        message: Optional[str] = None
    ) -> Optional[TranslationEntry]:
        """
        Update one entry in the selected group.

        Args:
            language: Language to update
            key: Localization key
            value: New value
            message: New message (None keeps the current one)

        Returns:
            The persisted entry, or None if there is no selected group or the
            language is not part of it
        """
        group = self.index.group
        localization = group.localization_for(language) if group else None
        if localization is None:
            return None

        entry = self.provider.update_localization(localization, key, value, message)
        self.index.put_entry(language, entry)

        get_logger().debug(f"Updated {key} [{language}]")
        return entry

    def delete_localization(self, key: str) -> None:
        """Delete a key from every localization of the selected group."""
        group = self.index.group
        if group is None:
            return

        for localization in group.localizations:
            self.provider.delete_key_from_localization(localization, key)
        self.index.remove(key)

        get_logger().debug(f"Deleted {key} from {len(group.localizations)} localizations")

    def add_localization_key(self, key: str, message: Optional[str] = None) -> None:
        """
        Add a key with an empty value to every localization of the selected group.

        The index row gets one slot per language, installed after every
        provider call succeeded.
        """
        group = self.index.group
        if group is None:
            return

        entries: Dict[str, TranslationEntry] = {}
        for localization in group.localizations:
            entries[localization.language] = self.provider.add_key_to_localization(
                localization, key, message
            )
        self.index.set_row(key, entries)

        get_logger().debug(f"Added {key} to {len(entries)} localizations")
