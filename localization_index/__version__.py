"""Version information for localization-index."""

__version__ = "0.4.0"
__author__ = "Sezgin Paksoy"
__description__ = "Indexing, search and spreadsheet export for .strings localization tables"

# Changelog:
# 0.4.0 - Spreadsheet export through a sink interface (openpyxl backend)
#        - Header titles use babel display names: "English(en)"
#        - One row per key across languages, no duplicate rows
#        - Export failures reported through on_failure with sheets_written
#
# 0.3.0 - add_localization_key installs one slot per language
#        - update_localization refreshes the index slot in place
#        - getLocalization on a stale row raises RowNotFoundError
#
# 0.2.0 - Diacritic-insensitive search ("cafe" finds "café")
#        - Missing filter: incomplete coverage or blank values
#
# 0.1.0 - LocalizationSession with background load and resume-on delivery
#        - .strings provider with comment/message support
