"""Session object that owns the loaded groups, the index and background work."""

from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from ..export.excel_exporter import ExcelExporter
from ..providers.base import BaseProvider
from ..providers.strings import StringsFileProvider
from ..utils.config import Config
from ..utils.logging import get_logger
from ..utils.validators import is_valid_key
from .dispatch import MainThreadQueue, ResumeOn
from .errors import RowNotFoundError, SessionClosedError
from .index import LocalizationIndex
from .models import Filter, Group, LoadResult, TranslationEntry
from .mutations import MutationCoordinator


class LocalizationSession:
    """
    Entry point for presentation layers.

    Owns the loaded groups, the index of the selected group and a small worker
    pool. ``load`` and ``export`` run on the pool and report back through
    ``resume_on``; everything else is synchronous and must be called from the
    consumer thread (the one ``resume_on`` delivers to). There is no internal
    locking.

    Usage:
        with LocalizationSession() as session:
            session.load(Path('MyApp'), on_loaded)
            session.run_pending(timeout=10)
            session.filter(Filter.MISSING)
            for row in range(session.row_count()):
                print(session.get_key(row))
    """

    def __init__(
        self,
        provider: Optional[BaseProvider] = None,
        config: Optional[Config] = None,
        resume_on: Optional[ResumeOn] = None,
        exporter: Optional[ExcelExporter] = None,
    ):
        """
        Initialize session.

        Args:
            provider: Storage provider (defaults to StringsFileProvider)
            config: Configuration (read from ``.localization-index.yml`` in
                the working directory when omitted)
            resume_on: Callable scheduling ``fn(*args)`` on the consumer
                thread; defaults to this session's own MainThreadQueue,
                drained with ``run_pending``
            exporter: Spreadsheet exporter (defaults to ExcelExporter)

        Raises:
            ConfigValidationError: If the configuration is invalid
        """
        self.config = config or Config.from_file()
        _, warnings = self.config.validate(raise_on_error=True)
        for warning in warnings:
            get_logger().warning(f"Config warning: {warning}")

        self.provider = provider or StringsFileProvider(
            exclude_dirs=self.config.paths.exclude,
            extension=self.config.paths.extension,
        )
        self.exporter = exporter or ExcelExporter(self.config.export)

        self.main_queue = MainThreadQueue()
        self.resume_on = resume_on or self.main_queue.post

        self.groups: List[Group] = []
        self.folder: Optional[Path] = None
        self.index = LocalizationIndex()
        self._mutations = MutationCoordinator(self.provider, self.index)

        self._executor = ThreadPoolExecutor(
            max_workers=self.config.session.max_workers,
            thread_name_prefix='localization-index',
        )
        self._closed = False

    # Lifecycle

    def __enter__(self) -> 'LocalizationSession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self, wait: bool = True) -> None:
        """Shut down the worker pool; in-flight work runs to completion."""
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=wait)

    def run_pending(self, timeout: Optional[float] = None) -> int:
        """Run callbacks queued for the consumer thread (default ``resume_on`` only)."""
        return self.main_queue.run_pending(timeout)

    def _submit(self, fn: Callable, *args) -> Future:
        if self._closed:
            raise SessionClosedError("Session is closed")
        return self._executor.submit(fn, *args)

    # Loading and selection

    def load(self, folder: Path, on_completion: Callable[[LoadResult], None]) -> 'Future[LoadResult]':
        """
        Load localization data from a directory in the background.

        The scan and the new index are built on a worker thread. They are
        installed, and ``on_completion`` is called, on the consumer thread via
        ``resume_on``. Visible state only changes when the scan produced at
        least one group; otherwise an empty LoadResult is delivered.

        Args:
            folder: Directory to scan
            on_completion: Called with the LoadResult

        Returns:
            Future resolving to the LoadResult once the scan finished
        """
        folder = Path(folder)
        scan = self._submit(self._scan, folder)
        loaded: 'Future[LoadResult]' = Future()

        def scanned(done: Future) -> None:
            result, index = done.result()
            self.resume_on(self._finish_load, folder, result, index, on_completion)
            loaded.set_result(result)

        scan.add_done_callback(scanned)
        return loaded

    def reload(self, on_completion: Callable[[LoadResult], None]) -> 'Future[LoadResult]':
        """Load the most recently loaded folder again."""
        if self.folder is None:
            raise ValueError("Nothing loaded yet")
        return self.load(self.folder, on_completion)

    def _scan(self, folder: Path) -> Tuple[LoadResult, Optional[LocalizationIndex]]:
        log = get_logger()
        try:
            groups = self.provider.get_localizations(folder)
        except Exception as e:
            log.error(f"Loading {folder} failed: {e}")
            return LoadResult(error=e), None

        group = self._default_group(groups)
        if group is None:
            log.error(f"No localization data found in {folder}")
            return LoadResult(), None

        index = LocalizationIndex()
        try:
            languages = index.select(group)
        except Exception as e:
            log.error(f"Indexing {group.name} failed: {e}")
            return LoadResult(error=e), None

        log.info(f"Loaded {len(groups)} groups from {folder}, selected {group.name}")
        return LoadResult(languages, group.name, groups), index

    def _default_group(self, groups: List[Group]) -> Optional[Group]:
        if not groups:
            return None
        preferred = self.config.session.default_group
        return next((g for g in groups if g.name == preferred), groups[0])

    def _finish_load(
        self,
        folder: Path,
        result: LoadResult,
        index: Optional[LocalizationIndex],
        on_completion: Callable[[LoadResult], None],
    ) -> None:
        if index is not None:
            self.folder = folder
            self.groups = result.groups
            self._install(index)
        on_completion(result)

    def _install(self, index: LocalizationIndex) -> None:
        self.index = index
        self._mutations = MutationCoordinator(self.provider, index)

    def select_group_and_get_languages(self, group_name: str) -> List[str]:
        """
        Select a loaded group by name and rebuild the index.

        Returns:
            Languages in index order, or an empty list if no group has that
            name (the current selection is kept)
        """
        group = next((g for g in self.groups if g.name == group_name), None)
        if group is None:
            get_logger().warning(f"Unknown localization group: {group_name}")
            return []

        return self.index.select(group)

    @property
    def selected_group(self) -> Optional[Group]:
        return self.index.group

    @property
    def languages(self) -> List[str]:
        return list(self.index.languages)

    # Filtering and row access

    def filter(self, mode: Filter = Filter.ALL, search: Optional[str] = None) -> None:
        """Recompute the visible rows for a filter mode and search string."""
        self.index.filter(mode, search)

    def row_count(self) -> int:
        return len(self.index.filtered_keys)

    def get_key(self, row: int) -> Optional[str]:
        """Key at a row, or None when the row is out of range."""
        return self.index.get_key(row)

    def get_message(self, row: int) -> Optional[str]:
        """Message of the first language (in index order) that has the key."""
        key = self.get_key(row)
        slots = self.index.slots(key) if key is not None else None
        if not slots:
            return None

        for slot in slots.values():
            if slot.is_present:
                return slot.entry.message
        return None

    def get_localization(self, language: str, row: int) -> TranslationEntry:
        """
        Entry for a language at a row.

        A language without an entry for the key yields a blank entry, so every
        cell can be rendered the same way.

        Raises:
            RowNotFoundError: If no key is visible at ``row``
        """
        key = self.get_key(row)
        if key is None:
            raise RowNotFoundError(row, self.row_count())

        slot = self.index.slot(key, language)
        if slot is None or not slot.is_present:
            return TranslationEntry(key=key, value='', message='')
        return slot.entry

    def get_row_for_key(self, key: str) -> Optional[int]:
        return self.index.get_row_for_key(key)

    def language_stats(self) -> Dict[str, Dict[str, int]]:
        """
        Per-language counts for the selected group.

        Returns:
            {language: {total_keys, missing_keys}} in index language order
        """
        total = len(self.index)
        return {
            language: {
                'total_keys': total,
                'missing_keys': self.index.missing_count(language),
            }
            for language in self.index.languages
        }

    # Mutations

    def update_localization(
        self,
        language: str,
        key: str,
        value: str,
        message: Optional[str] = None
    ) -> Optional[TranslationEntry]:
        """Persist a new value for one (language, key); see MutationCoordinator."""
        return self._mutations.update_localization(language, key, value, message)

    def delete_localization(self, key: str) -> None:
        """Delete a key from every language of the selected group."""
        self._mutations.delete_localization(key)

    def add_localization_key(self, key: str, message: Optional[str] = None) -> None:
        """
        Add a key to every language of the selected group.

        Raises:
            ValueError: If the key is blank, multi-line or has an unescaped quote
        """
        if not is_valid_key(key):
            raise ValueError(f"Invalid localization key: {key!r}")
        self._mutations.add_localization_key(key, message)

    # Export

    def export(
        self,
        destination: Path,
        on_completion: Callable[[Path], None],
        on_failure: Optional[Callable[[Exception], None]] = None,
    ) -> 'Future[Path]':
        """
        Export every loaded group to an .xlsx file in the background.

        The group list is captured when this is called. ``on_completion`` (or
        ``on_failure``) is delivered through ``resume_on``.

        Args:
            destination: Target .xlsx path
            on_completion: Called with the destination path on success
            on_failure: Called with the ExportError on failure; when omitted
                the failure is logged and left on the returned future

        Returns:
            Future resolving to the destination path
        """
        groups = list(self.groups)
        future = self._submit(self.exporter.export, groups, Path(destination))

        def deliver(done: Future) -> None:
            error = done.exception()
            if error is None:
                self.resume_on(on_completion, done.result())
            elif on_failure is not None:
                self.resume_on(on_failure, error)
            else:
                get_logger().error(f"Export to {destination} failed: {error}")

        future.add_done_callback(deliver)
        return future
