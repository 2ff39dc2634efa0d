"""Validation utilities."""

import re

LANGUAGE_CODE_PATTERN = re.compile(r'^[a-z]{2,3}(-[A-Z][a-z]{3})?(-([A-Z]{2}|[0-9]{3}))?$')


def is_valid_language_code(code: str) -> bool:
    """
    Validate an .lproj language identifier.

    Examples: Base, en, tr, pt-BR, zh-Hans, zh-Hant-TW, es-419
    """
    if not code:
        return False
    if code.lower() == 'base':
        return True
    return bool(LANGUAGE_CODE_PATTERN.match(code))


def is_valid_key(key: str) -> bool:
    """
    Validate a localization key.

    Any non-blank single-line string is accepted; a raw double quote must be
    escaped so the key survives a round trip through the file.
    """
    if not key or not key.strip():
        return False

    if '\n' in key or '\r' in key:
        return False

    return not re.search(r'(?<!\\)"', key)
