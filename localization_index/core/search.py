"""Filtering and full-text search over index rows."""

import unicodedata
from typing import Dict, List, Mapping, Optional

from .models import Filter, Slot

# Letters that NFKD leaves intact but should match their plain ASCII form
FOLD_MAP = {
    'ı': 'i', 'İ': 'I',
    'ø': 'o', 'Ø': 'O',
    'ł': 'l', 'Ł': 'L',
    'đ': 'd', 'Đ': 'D',
    'ð': 'd', 'Ð': 'D',
    'æ': 'ae', 'Æ': 'AE',
    'œ': 'oe', 'Œ': 'OE',
    'þ': 'th', 'Þ': 'TH',
}

_FOLD_TABLE = str.maketrans(FOLD_MAP)


def normalize(text: str) -> str:
    """
    Normalize text for matching: diacritic- and case-insensitive.

    Examples:
        normalize("Café") -> "cafe"
        normalize("ŁÓDŹ") -> "lodz"
    """
    text = text.translate(_FOLD_TABLE)
    text = unicodedata.normalize('NFKD', text)
    text = ''.join(c for c in text if not unicodedata.combining(c))
    return text.casefold()


def is_missing(slots: Mapping[str, Slot], languages_count: int) -> bool:
    """
    Check whether a row counts as a missing translation.

    A row is missing when fewer languages than ``languages_count`` hold an
    entry for it, or when any entry that is present has an empty value.
    """
    present = [slot.entry for slot in slots.values() if slot.is_present]
    if len(present) < languages_count:
        return True
    return any(not entry.value for entry in present)


def matches(key: str, slots: Mapping[str, Slot], needle: str) -> bool:
    """Check a row against an already normalized search string."""
    if needle in normalize(key):
        return True

    return any(
        needle in normalize(slot.entry.value)
        for slot in slots.values()
        if slot.is_present
    )


def filter_keys(
    rows: Dict[str, Dict[str, Slot]],
    languages_count: int,
    mode: Filter = Filter.ALL,
    search: Optional[str] = None,
) -> List[str]:
    """
    Compute the visible, sorted key list.

    Args:
        rows: Index rows, {key: {language: Slot}}
        languages_count: Number of languages in the selected group
        mode: Filter mode
        search: Optional search string; empty means no search

    Returns:
        Keys sorted by code point
    """
    if mode is Filter.MISSING:
        candidates = {
            key: slots for key, slots in rows.items()
            if is_missing(slots, languages_count)
        }
    else:
        candidates = rows

    if not search:
        return sorted(candidates)

    needle = normalize(search)
    return sorted(key for key, slots in candidates.items() if matches(key, slots, needle))
