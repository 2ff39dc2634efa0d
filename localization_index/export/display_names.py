"""Language display names for spreadsheet column headers."""

from functools import lru_cache
from typing import Optional

from babel import Locale, UnknownLocaleError


@lru_cache(maxsize=256)
def display_name(language: str, display_locale: str = 'en') -> Optional[str]:
    """
    Resolve a language identifier to a human readable name.

    Args:
        language: Identifier as used by the .lproj directory (e.g. "pt-BR")
        display_locale: Locale the name is rendered in

    Returns:
        Display name, or None when the identifier is not a known locale
        (e.g. "Base")
    """
    try:
        locale = Locale.parse(language.replace('_', '-'), sep='-')
        target = Locale.parse(display_locale.replace('_', '-'), sep='-')
    except (ValueError, UnknownLocaleError):
        return None

    return locale.get_display_name(target) or None


def column_title(language: str, display_locale: str = 'en') -> str:
    """Header text for a language column: ``DisplayName(code)`` or ``code``."""
    name = display_name(language, display_locale)
    return f"{name}({language})" if name else language
