"""Key x language lookup table for the selected localization group."""

from typing import Dict, List, Optional

from ..utils.logging import get_logger
from .errors import EmptyGroupError
from .models import (
    Filter,
    Group,
    KNOWN_ABSENT,
    LANGUAGE_UNKNOWN,
    Localization,
    Slot,
    TranslationEntry,
)
from .search import filter_keys

BASE_LANGUAGE = 'base'


def sort_localizations(localizations: List[Localization]) -> List[Localization]:
    """
    Order localizations so the most likely master comes first.

    "Base" (any case) always sorts first; the rest by descending entry count.
    The sort is stable, so equal counts keep their stored order.
    """
    return sorted(
        localizations,
        key=lambda loc: (loc.language.lower() != BASE_LANGUAGE, -len(loc)),
    )


class LocalizationIndex:
    """
    Derived lookup table for one group.

    Rows are indexed by key on the first level and by language on the second.
    Every row holds exactly one slot per language of the selected group; a
    language that lacks the key gets a KNOWN_ABSENT slot.

    Usage:
        index = LocalizationIndex()
        languages = index.select(group)
        index.filter(Filter.MISSING, "cafe")
        for key in index.filtered_keys:
            ...
    """

    def __init__(self):
        self.group: Optional[Group] = None
        self.master: Optional[Localization] = None
        self.languages: List[str] = []
        self.languages_count = 0
        self.rows: Dict[str, Dict[str, Slot]] = {}
        self.filtered_keys: List[str] = []

    def select(self, group: Group) -> List[str]:
        """
        Build the index for a group, discarding any previous state.

        Args:
            group: Group to select

        Returns:
            Languages in index order (base first, then by entry count)

        Raises:
            EmptyGroupError: If the group has no localizations
        """
        if not group.localizations:
            raise EmptyGroupError(group.name)

        localizations = sort_localizations(group.localizations)

        self.group = group
        self.master = localizations[0]
        self.languages = [loc.language for loc in localizations]
        self.languages_count = len(group.localizations)

        lookups = [
            (loc.language, {entry.key: entry for entry in loc.entries})
            for loc in localizations
        ]

        self.rows = {}
        for key in self.master.keys():
            row = {}
            for language, entries in lookups:
                entry = entries.get(key)
                row[language] = Slot.present(entry) if entry is not None else KNOWN_ABSENT
            self.rows[key] = row

        get_logger().debug(
            f"Selected group {group.name}: master={self.master.language}, "
            f"{len(self.rows)} keys, {self.languages_count} languages"
        )

        self.filter(Filter.ALL, None)

        return list(self.languages)

    def filter(self, mode: Filter = Filter.ALL, search: Optional[str] = None) -> List[str]:
        """Recompute ``filtered_keys`` for a filter mode and search string."""
        log = get_logger()
        log.debug(f"Filtering by {mode.name}")
        if search:
            log.debug(f"Searching for {search}")

        self.filtered_keys = filter_keys(self.rows, self.languages_count, mode, search)
        return self.filtered_keys

    def keys(self) -> List[str]:
        return list(self.rows)

    def __contains__(self, key: str) -> bool:
        return key in self.rows

    def __len__(self) -> int:
        return len(self.rows)

    def slots(self, key: str) -> Optional[Dict[str, Slot]]:
        """Return all slots for a key, or None if the key is not indexed."""
        return self.rows.get(key)

    def slot(self, key: str, language: str) -> Optional[Slot]:
        """
        Return the slot for a (key, language) pair.

        Returns:
            The slot; LANGUAGE_UNKNOWN if the language is not part of the
            selected group; None if the key is not indexed
        """
        row = self.rows.get(key)
        if row is None:
            return None
        return row.get(language, LANGUAGE_UNKNOWN)

    def get_key(self, row: int) -> Optional[str]:
        if 0 <= row < len(self.filtered_keys):
            return self.filtered_keys[row]
        return None

    def get_row_for_key(self, key: str) -> Optional[int]:
        try:
            return self.filtered_keys.index(key)
        except ValueError:
            return None

    def put_entry(self, language: str, entry: TranslationEntry) -> None:
        """Mark an entry as present for its key, if that key is indexed."""
        row = self.rows.get(entry.key)
        if row is not None and language in row:
            row[language] = Slot.present(entry)

    def set_row(self, key: str, entries: Dict[str, TranslationEntry]) -> None:
        """
        Install a full row in one assignment.

        Args:
            key: Localization key
            entries: {language: entry}; languages not given become KNOWN_ABSENT
        """
        self.rows[key] = {
            language: Slot.present(entries[language]) if language in entries else KNOWN_ABSENT
            for language in self.languages
        }

    def remove(self, key: str) -> None:
        self.rows.pop(key, None)

    def missing_count(self, language: str) -> int:
        """Count indexed keys whose slot for ``language`` is absent or empty."""
        count = 0
        for row in self.rows.values():
            slot = row.get(language, LANGUAGE_UNKNOWN)
            if not slot.is_present or not slot.entry.value:
                count += 1
        return count
