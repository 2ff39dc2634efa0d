"""Spreadsheet export."""

from .excel_exporter import ExcelExporter
from .workbook import SpreadsheetSink, OpenpyxlSink, CellStyle
from .display_names import display_name, column_title

__all__ = [
    'ExcelExporter',
    'SpreadsheetSink',
    'OpenpyxlSink',
    'CellStyle',
    'display_name',
    'column_title',
]
