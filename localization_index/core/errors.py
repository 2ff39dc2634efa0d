"""Exception hierarchy for localization index operations."""

from pathlib import Path
from typing import Optional


class LocalizationIndexError(Exception):
    """Base class for all localization index errors."""


class RowNotFoundError(LocalizationIndexError):
    """Raised when a row has no corresponding key in the filtered view."""

    def __init__(self, row: int, row_count: int):
        self.row = row
        self.row_count = row_count
        super().__init__(f"No key for row {row} (visible rows: {row_count})")


class EmptyGroupError(LocalizationIndexError):
    """Raised when selecting a group that has no localizations."""

    def __init__(self, group_name: str):
        self.group_name = group_name
        super().__init__(f"Group '{group_name}' has no localizations")


class ProviderError(LocalizationIndexError):
    """Raised when the provider cannot read or persist localization data."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)


class ExportError(LocalizationIndexError):
    """Raised when writing the spreadsheet fails.

    ``sheets_written`` counts the sheets completed in memory before the
    failure. Nothing reaches the destination unless the final save succeeds.
    """

    def __init__(self, destination: Path, sheets_written: int, reason: str):
        self.destination = destination
        self.sheets_written = sheets_written
        super().__init__(
            f"Export to {destination} failed after {sheets_written} sheet(s): {reason}"
        )


class SessionClosedError(LocalizationIndexError):
    """Raised when background work is requested on a closed session."""
