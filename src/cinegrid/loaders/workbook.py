"""Decode .xlsx workbooks into plain rows for the schedule parsers."""

import logging
from io import BytesIO
from pathlib import Path

from openpyxl import load_workbook

from cinegrid.parsers.models import SheetRows

logger = logging.getLogger(__name__)


class WorkbookLoadError(ValueError):
    """The file is not a readable .xlsx workbook."""


def load_workbook_rows(source: bytes | str | Path) -> list[SheetRows]:
    """
    Read every worksheet of a workbook as rows of raw cell values.

    Formulas are read as their cached values. Cells keep their native types
    (str, int, float, datetime.time, datetime.datetime, None); the parsers
    stringify them.

    Args:
        source: Workbook content or a path to an .xlsx file

    Returns:
        One SheetRows per worksheet, in workbook order

    Raises:
        WorkbookLoadError: If openpyxl cannot open the file
    """
    handle = BytesIO(source) if isinstance(source, bytes) else source
    try:
        workbook = load_workbook(handle, data_only=True, read_only=True)
    except Exception as e:
        raise WorkbookLoadError(f"Could not read workbook: {e}") from e

    try:
        sheets = [
            SheetRows(name=sheet.title, rows=[list(row) for row in sheet.iter_rows(values_only=True)])
            for sheet in workbook.worksheets
        ]
    finally:
        workbook.close()

    logger.debug(f"Loaded {len(sheets)} sheet(s): {', '.join(s.name for s in sheets)}")
    return sheets
