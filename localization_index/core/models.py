"""Entity model for localization groups, localizations and entries."""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Iterator
from dataclasses import dataclass, field


class Filter(Enum):
    """Row filter applied to the index."""
    ALL = 0
    MISSING = 1


@dataclass
class TranslationEntry:
    """Single translated string."""
    key: str
    value: str = ""
    message: Optional[str] = None  # developer comment, shared across languages


@dataclass
class Localization:
    """One language's view of a group."""
    language: str
    entries: List[TranslationEntry] = field(default_factory=list)
    path: Optional[Path] = None

    def __len__(self) -> int:
        return len(self.entries)

    def entry_for(self, key: str) -> Optional[TranslationEntry]:
        """Return the entry with the given key, if any."""
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    def keys(self) -> Iterator[str]:
        return (entry.key for entry in self.entries)


@dataclass
class Group:
    """Named localization table spanning several languages."""
    name: str
    localizations: List[Localization] = field(default_factory=list)
    path: Optional[Path] = None

    def localization_for(self, language: str) -> Optional[Localization]:
        """Return the localization for a language, if the group has it."""
        for localization in self.localizations:
            if localization.language == language:
                return localization
        return None

    @property
    def languages(self) -> List[str]:
        return [localization.language for localization in self.localizations]


class SlotState(Enum):
    """State of one (key, language) cell in the index."""
    PRESENT = 'present'
    KNOWN_ABSENT = 'known_absent'
    LANGUAGE_UNKNOWN = 'language_unknown'


@dataclass(frozen=True)
class Slot:
    """Index cell: either a present entry or one of the two absent states."""
    state: SlotState
    entry: Optional[TranslationEntry] = None

    @classmethod
    def present(cls, entry: TranslationEntry) -> 'Slot':
        return cls(SlotState.PRESENT, entry)

    @property
    def is_present(self) -> bool:
        return self.state is SlotState.PRESENT


KNOWN_ABSENT = Slot(SlotState.KNOWN_ABSENT)
LANGUAGE_UNKNOWN = Slot(SlotState.LANGUAGE_UNKNOWN)


@dataclass
class LoadResult:
    """Outcome of loading a directory.

    An empty dataset (or a failed scan) is reported as empty lists and no
    selected group; ``error`` carries the failure when there was one.
    """
    languages: List[str] = field(default_factory=list)
    selected_group_name: Optional[str] = None
    groups: List[Group] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def is_empty(self) -> bool:
        return not self.groups
