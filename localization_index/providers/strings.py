"""Provider for Apple .strings tables stored in *.lproj directories."""

import re
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..core.errors import ProviderError
from ..core.models import Group, Localization, TranslationEntry
from ..utils.logging import get_logger
from ..utils.validators import is_valid_language_code
from .base import BaseProvider

# Optional preceding comment, then "key" = "value";
# Supports escaped characters in key and value (e.g. \", \\, \n)
ENTRY_PATTERN = re.compile(
    r'(?:/\*(?P<block>(?:(?!\*/).)*)\*/\s*|//(?P<line>[^\n]*)\n\s*)?'
    r'"(?P<key>(?:[^"\\]|\\.)*)"\s*=\s*"(?P<value>(?:[^"\\]|\\.)*)"\s*;',
    re.DOTALL
)

LPROJ_SUFFIX = '.lproj'


class StringsFileProvider(BaseProvider):
    """
    Reads and writes ``<language>.lproj/<Table>.strings`` files.

    Every table name found under the root becomes one group, with one
    localization per ``.lproj`` directory that contains it.
    """

    def __init__(self, exclude_dirs: Optional[Iterable[str]] = None, extension: str = '.strings'):
        super().__init__(exclude_dirs)
        self.extension = extension

    def get_localizations(self, root: Path) -> List[Group]:
        root = Path(root)
        log = get_logger()

        if not root.is_dir():
            log.warning(f"Localization directory not found: {root}")
            return []

        tables: Dict[str, List[Path]] = defaultdict(list)
        for file_path in root.rglob(f'*{self.extension}'):
            if self.should_exclude_path(file_path.relative_to(root)):
                continue
            if not file_path.parent.name.endswith(LPROJ_SUFFIX):
                continue
            tables[file_path.name].append(file_path)

        groups = []
        for name in sorted(tables):
            localizations = [self.read_localization(path) for path in tables[name]]
            localizations.sort(key=lambda loc: loc.language)
            group_path = tables[name][0].parent.parent
            groups.append(Group(name=name, localizations=localizations, path=group_path))
            log.debug(f"Found {name}: {', '.join(loc.language for loc in localizations)}")

        return groups

    def read_localization(self, file_path: Path) -> Localization:
        """
        Parse one .strings file.

        Raises:
            ProviderError: If the file cannot be read or decoded
        """
        language = self.extract_language_code(file_path)
        if not is_valid_language_code(language):
            get_logger().warning(f"Unrecognized language directory: {file_path.parent.name}")
        try:
            content = self._decode(file_path.read_bytes())
        except (OSError, UnicodeDecodeError) as e:
            raise ProviderError(f"Cannot read localization file ({e})", file_path) from e

        return Localization(language=language, entries=self.parse(content), path=file_path)

    @staticmethod
    def _decode(raw: bytes) -> str:
        # Xcode may save tables as UTF-16 with a BOM
        if raw.startswith((b'\xff\xfe', b'\xfe\xff')):
            return raw.decode('utf-16')
        return raw.decode('utf-8-sig')

    def parse(self, content: str) -> List[TranslationEntry]:
        """
        Parse .strings content into entries, keeping file order.

        A comment directly before an entry becomes its message. A repeated key
        keeps its first position and takes the later value.
        """
        entries: List[TranslationEntry] = []
        by_key: Dict[str, TranslationEntry] = {}

        for match in ENTRY_PATTERN.finditer(content):
            comment = match.group('block')
            if comment is None:
                comment = match.group('line')
            message = comment.strip() if comment is not None else None

            key, value = match.group('key'), match.group('value')
            existing = by_key.get(key)
            if existing is not None:
                get_logger().warning(f"Duplicate key '{key}', keeping last value")
                existing.value = value
                if message is not None:
                    existing.message = message
                continue

            entry = TranslationEntry(key=key, value=value, message=message)
            by_key[key] = entry
            entries.append(entry)

        return entries

    def serialize(self, localization: Localization) -> str:
        """Render a localization back to .strings text."""
        blocks = []
        for entry in localization.entries:
            line = f'"{entry.key}" = "{entry.value}";'
            if entry.message:
                # a literal */ would close the comment early
                message = entry.message.replace('*/', '* /')
                line = f'/* {message} */\n{line}'
            blocks.append(line)
        return '\n\n'.join(blocks) + '\n' if blocks else ''

    def write_localization(self, localization: Localization) -> None:
        """
        Persist a localization to its file.

        In-memory localizations (no path) are left alone.

        Raises:
            ProviderError: If the file cannot be written
        """
        if localization.path is None:
            return

        try:
            localization.path.write_text(self.serialize(localization), encoding='utf-8')
        except OSError as e:
            raise ProviderError(f"Cannot write localization file ({e})", localization.path) from e

    def update_localization(
        self,
        localization: Localization,
        key: str,
        value: str,
        message: Optional[str] = None
    ) -> TranslationEntry:
        entry = localization.entry_for(key)
        if entry is None:
            entry = TranslationEntry(key=key, value=value, message=message)
            localization.entries.append(entry)
        else:
            entry.value = value
            if message is not None:
                entry.message = message

        self.write_localization(localization)
        return entry

    def delete_key_from_localization(self, localization: Localization, key: str) -> None:
        remaining = [entry for entry in localization.entries if entry.key != key]
        if len(remaining) == len(localization.entries):
            return

        localization.entries[:] = remaining
        self.write_localization(localization)

    def add_key_to_localization(
        self,
        localization: Localization,
        key: str,
        message: Optional[str] = None
    ) -> TranslationEntry:
        existing = localization.entry_for(key)
        if existing is not None:
            return existing

        entry = TranslationEntry(key=key, value='', message=message)
        localization.entries.append(entry)
        self.write_localization(localization)
        return entry

    def extract_language_code(self, file_path: Path) -> str:
        """
        Extract language code from the .lproj directory.

        Example: /path/to/en.lproj/Localizable.strings -> en
        """
        lproj_dir = file_path.parent
        if lproj_dir.name.endswith(LPROJ_SUFFIX):
            return lproj_dir.name[:-len(LPROJ_SUFFIX)]
        return 'unknown'
