"""Export of localization groups to an .xlsx workbook."""

from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

from ..core.errors import ExportError
from ..core.models import Group
from ..utils.config import ExportConfig
from ..utils.logging import get_logger
from .display_names import column_title
from .workbook import OpenpyxlSink, SpreadsheetSink, body_style, header_style

SinkFactory = Callable[[Path], SpreadsheetSink]

# xlsx needs at least one visible sheet
EMPTY_SHEET_TITLE = 'Sheet1'


class ExcelExporter:
    """
    Writes every group to its own worksheet.

    Layout per sheet:
    - Column 0 holds the key, one column per localization follows in the
      group's stored order
    - Row 0 is the header; panes are frozen below it and right of the key column
    - A key gets one row, allocated the first time any localization
      mentions it; later localizations fill their column of that row

    Usage:
        exporter = ExcelExporter()
        exporter.export(groups, Path('translations.xlsx'))
    """

    def __init__(
        self,
        config: Optional[ExportConfig] = None,
        sink_factory: SinkFactory = OpenpyxlSink,
    ):
        """
        Initialize exporter.

        Args:
            config: Export configuration (defaults when omitted)
            sink_factory: Creates the spreadsheet sink for a destination path
        """
        self.config = config or ExportConfig()
        self.sink_factory = sink_factory
        self.header_style = header_style(self.config.font_name, self.config.header_font_size)
        self.body_style = body_style(self.config.font_name)

    def export(self, groups: Sequence[Group], destination: Path) -> Path:
        """
        Write all groups to ``destination``.

        Args:
            groups: Groups to export, one sheet each, in this order
            destination: Target .xlsx path

        Returns:
            The destination path

        An empty group list still produces a valid workbook with one blank
        sheet.

        Raises:
            ExportError: If the sink fails; ``sheets_written`` counts the sheets
                completed in memory before the failure
        """
        destination = Path(destination)
        log = get_logger()
        log.info(f"Exporting {len(groups)} groups to {destination}")

        sheets_written = 0
        try:
            sink = self.sink_factory(destination)
            for group in groups:
                rows = self.write_group(sink, group)
                sheets_written += 1
                log.debug(f"Wrote sheet {group.name}: {rows} rows")
            if not groups:
                sink.add_sheet(EMPTY_SHEET_TITLE)
            sink.close()
        except ExportError:
            raise
        except Exception as e:
            log.error(f"Export to {destination} failed: {e}")
            raise ExportError(destination, sheets_written, str(e)) from e

        log.info(f"Exported {sheets_written} sheets to {destination}")
        return destination

    def write_group(self, sink: SpreadsheetSink, group: Group) -> int:
        """
        Write one group as a sheet.

        Returns:
            Number of key rows written
        """
        config = self.config
        sheet = sink.add_sheet(group.name)

        sink.set_column(sheet, 0, config.column_width)
        sink.set_row(sheet, 0, config.header_row_height)
        sink.write_string(sheet, 0, 0, config.key_header, self.header_style)
        sink.freeze_panes(sheet, 1, 1)

        key_rows: Dict[str, int] = {}

        for index, localization in enumerate(group.localizations):
            column = index + 1
            sink.set_column(sheet, column, config.column_width)
            sink.write_string(
                sheet, 0, column,
                column_title(localization.language, config.display_locale),
                self.header_style,
            )

            for entry in localization.entries:
                row = key_rows.get(entry.key)
                if row is None:
                    row = len(key_rows) + 1
                    key_rows[entry.key] = row
                    sink.set_row(sheet, row, config.row_height)
                    sink.write_string(sheet, row, 0, entry.key, self.body_style)
                sink.write_string(sheet, row, column, entry.value, self.body_style)

        return len(key_rows)
