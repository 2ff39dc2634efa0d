"""Spreadsheet sink used by the exporter."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Set

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

MAX_SHEET_TITLE = 31
INVALID_TITLE_CHARS = re.compile(r'[\[\]:*?/\\]')


@dataclass(frozen=True)
class CellStyle:
    """Cell formatting independent of the spreadsheet backend."""
    font_name: str = "Verdana"
    font_size: Optional[float] = None
    bold: bool = False
    horizontal: Optional[str] = None
    vertical: Optional[str] = None
    wrap_text: bool = False
    font_color: Optional[str] = None  # ARGB hex
    fill_color: Optional[str] = None  # ARGB hex


def header_style(font_name: str = "Verdana", font_size: float = 18) -> CellStyle:
    """Bold, centered, white on black."""
    return CellStyle(
        font_name=font_name,
        font_size=font_size,
        bold=True,
        horizontal='center',
        vertical='center',
        font_color='FFFFFFFF',
        fill_color='FF000000',
    )


def body_style(font_name: str = "Verdana") -> CellStyle:
    """Wrapped text, vertically distributed."""
    return CellStyle(font_name=font_name, vertical='distributed', wrap_text=True)


def sanitize_sheet_title(name: str, taken: Set[str]) -> str:
    """
    Make a group name usable as a worksheet title.

    Titles are limited to 31 characters, may not contain ``[]:*?/\\`` and
    must be unique within a workbook (case-insensitively).
    """
    base = INVALID_TITLE_CHARS.sub('_', name).strip("'") or 'Sheet'
    title = base[:MAX_SHEET_TITLE]

    counter = 2
    while title.lower() in taken:
        suffix = f" ({counter})"
        title = base[:MAX_SHEET_TITLE - len(suffix)] + suffix
        counter += 1

    taken.add(title.lower())
    return title


class SpreadsheetSink(ABC):
    """
    Write-only spreadsheet interface.

    Rows and columns are zero-based. Sheets are addressed by the handle that
    ``add_sheet`` returns.
    """

    @abstractmethod
    def add_sheet(self, name: str):
        """Add a worksheet and return its handle."""
        pass

    @abstractmethod
    def set_column(self, sheet, column: int, width: float) -> None:
        pass

    @abstractmethod
    def set_row(self, sheet, row: int, height: float) -> None:
        pass

    @abstractmethod
    def write_string(self, sheet, row: int, column: int, text: str, style: CellStyle) -> None:
        pass

    @abstractmethod
    def freeze_panes(self, sheet, row: int, column: int) -> None:
        """Freeze everything above ``row`` and left of ``column``."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Flush the workbook to its destination."""
        pass


class OpenpyxlSink(SpreadsheetSink):
    """SpreadsheetSink writing an .xlsx file with openpyxl."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._workbook = Workbook()
        self._workbook.remove(self._workbook.active)
        self._titles: Set[str] = set()
        self._styles: Dict[CellStyle, tuple] = {}

    def add_sheet(self, name: str) -> Worksheet:
        return self._workbook.create_sheet(title=sanitize_sheet_title(name, self._titles))

    def set_column(self, sheet: Worksheet, column: int, width: float) -> None:
        sheet.column_dimensions[get_column_letter(column + 1)].width = width

    def set_row(self, sheet: Worksheet, row: int, height: float) -> None:
        sheet.row_dimensions[row + 1].height = height

    def write_string(self, sheet: Worksheet, row: int, column: int, text: str, style: CellStyle) -> None:
        cell = sheet.cell(row=row + 1, column=column + 1)
        cell.value = ILLEGAL_CHARACTERS_RE.sub('', text)
        # A value starting with "=" is text, not a formula
        if cell.data_type == 'f':
            cell.data_type = 's'
        font, alignment, fill = self._resolve(style)
        cell.font = font
        cell.alignment = alignment
        if fill is not None:
            cell.fill = fill

    def freeze_panes(self, sheet: Worksheet, row: int, column: int) -> None:
        sheet.freeze_panes = f"{get_column_letter(column + 1)}{row + 1}"

    def close(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._workbook.save(self.path)

    def _resolve(self, style: CellStyle) -> tuple:
        resolved = self._styles.get(style)
        if resolved is None:
            font = Font(
                name=style.font_name,
                size=style.font_size,
                bold=style.bold,
                color=style.font_color,
            )
            alignment = Alignment(
                horizontal=style.horizontal,
                vertical=style.vertical,
                wrap_text=style.wrap_text,
            )
            fill = None
            if style.fill_color:
                fill = PatternFill(fill_type='solid', start_color=style.fill_color, end_color=style.fill_color)
            resolved = (font, alignment, fill)
            self._styles[style] = resolved
        return resolved
