"""Write vocabulary rows to ``.xlsx`` workbooks.

Failures are logged and reported through the boolean return value; nothing
here raises for I/O problems or unwritable cell values.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence, Union

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from vocab_crawler.crawl.models import VocabEntry

logger = logging.getLogger(__name__)

ENTRY_HEADER = ("Word", "Definition", "Level", "ExampleUsage")


def _write_row(sheet, row: int, fields: Sequence[str]) -> None:
    for col, value in enumerate(fields, start=1):
        sheet.cell(row=row, column=col, value=value)


def create_sheet(name: str, *fields: str) -> bool:
    """Save ``<name>.xlsx`` with *fields* in the first row, from column A."""
    path = Path(f"{name}.xlsx")
    try:
        workbook = Workbook()
        _write_row(workbook.active, 1, fields)
        workbook.save(path)
    except (OSError, IllegalCharacterError) as exc:
        logger.error("[export] Failed to write %s: %s", path, exc)
        return False
    logger.info("[export] Wrote %s", path)
    return True


def write_entries(path: Union[str, Path], entries: Iterable[VocabEntry]) -> bool:
    """Save *entries* to *path*: a header row, then one row per entry.

    Entries whose text cannot be stored in a cell are skipped with a warning.
    """
    path = Path(path)
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Vocabulary"
    _write_row(sheet, 1, ENTRY_HEADER)

    row = 2
    for entry in entries:
        fields = (entry.word, entry.definition, entry.level.value, entry.example_usage)
        try:
            _write_row(sheet, row, fields)
        except IllegalCharacterError:
            logger.warning("[export] Skipping %r: illegal characters", entry.word)
            sheet.delete_rows(row)
            continue
        row += 1

    try:
        workbook.save(path)
    except OSError as exc:
        logger.error("[export] Failed to write %s: %s", path, exc)
        return False
    logger.info("[export] Wrote %d entr(ies) to %s", row - 2, path)
    return True
