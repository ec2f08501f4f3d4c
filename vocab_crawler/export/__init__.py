"""Spreadsheet export of harvested entries."""

from vocab_crawler.export.sheet import ENTRY_HEADER, create_sheet, write_entries

__all__ = ["ENTRY_HEADER", "create_sheet", "write_entries"]
