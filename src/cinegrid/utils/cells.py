"""Helpers for reading raw spreadsheet cells."""

from datetime import datetime, time
from typing import Any, Sequence

Cell = Any
Row = Sequence[Cell]


def cell_to_string(cell: Cell) -> str:
    """
    Render a raw cell value as trimmed text.

    Workbook decoders hand us strings, numbers, ``None`` and, for time-typed
    cells, ``datetime.time``/``datetime.datetime`` objects. Times are rendered
    as ``HH:MM`` so they flow through the same show-time parsing as text cells.
    Integral floats lose their trailing ``.0`` ("162.0" would not parse as a
    duration).

    Args:
        cell: Raw cell value

    Returns:
        Cell text, or an empty string for blank cells
    """
    if cell is None:
        return ""
    if isinstance(cell, str):
        return cell.strip()
    if isinstance(cell, bool):
        return str(cell)
    if isinstance(cell, datetime):
        if cell.time() == time(0, 0):
            return cell.date().isoformat()
        return cell.strftime("%H:%M")
    if isinstance(cell, time):
        return cell.strftime("%H:%M")
    if isinstance(cell, float) and cell.is_integer():
        return str(int(cell))
    return str(cell).strip()


def get_cell(row: Row, index: int | None) -> str:
    """Return the text of ``row[index]``, or "" when the column is absent or out of range."""
    if index is None or index < 0 or index >= len(row):
        return ""
    return cell_to_string(row[index])


def is_row_empty(row: Row) -> bool:
    """True when every cell in the row is blank."""
    return all(cell_to_string(cell) == "" for cell in row)


def row_text(row: Row, separator: str = " | ") -> str:
    """Join the non-blank cells of a row into one searchable string."""
    return separator.join(text for text in (cell_to_string(c) for c in row) if text)

