"""Typed cell values and the immutable sheet grid they live in."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Iterable, Iterator, Sequence, Tuple, Union

import numpy as np

# Day zero of the 1900 date system as spreadsheets count it (1900-02-29 included).
EXCEL_EPOCH = datetime(1899, 12, 30)


@dataclass(frozen=True)
class Empty:
    """A cell holding nothing."""

    def text(self) -> str:
        return ""


@dataclass(frozen=True)
class Number:
    """A numeric cell."""

    value: float

    def text(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Text:
    """A textual cell, kept exactly as typed."""

    value: str

    def text(self) -> str:
        return self.value


Cell = Union[Empty, Number, Text]
Row = Tuple[Cell, ...]

EMPTY = Empty()


def format_number(value: float) -> str:
    """Render ``value`` the way a spreadsheet shows it in a plain cell."""

    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def date_to_serial(value: Union[date, datetime]) -> float:
    """Convert a calendar date (or datetime) to its spreadsheet serial number."""

    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    delta = value.replace(tzinfo=None) - EXCEL_EPOCH
    return delta.days + delta.seconds / 86400


def to_cell(value: Any) -> Cell:
    """Wrap a raw worksheet value into the matching :data:`Cell` variant."""

    if isinstance(value, (Empty, Number, Text)):
        return value
    if value is None:
        return EMPTY
    if isinstance(value, (bool, np.bool_)):
        return Number(float(value))
    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
        if math.isnan(number):
            return EMPTY
        return Number(number)
    if isinstance(value, (datetime, date)):
        return Number(date_to_serial(value))
    if isinstance(value, time):
        return Text(value.isoformat())
    text = str(value)
    if text == "":
        return EMPTY
    return Text(text)


def is_blank(cell: Cell) -> bool:
    """Return ``True`` for empty cells and whitespace-only text."""

    if isinstance(cell, Empty):
        return True
    if isinstance(cell, Text):
        return not cell.value.strip()
    return False


def to_row(values: Iterable[Any]) -> Row:
    """Convert raw values into a row, dropping trailing empty cells."""

    cells = [to_cell(value) for value in values]
    while cells and isinstance(cells[-1], Empty):
        cells.pop()
    return tuple(cells)


@dataclass(frozen=True)
class Grid:
    """Rows of cells read from exactly one worksheet."""

    sheet_name: str
    rows: Tuple[Row, ...]

    @classmethod
    def from_values(cls, rows: Iterable[Iterable[Any]], sheet_name: str = "Sheet1") -> "Grid":
        return cls(sheet_name=sheet_name, rows=tuple(to_row(row) for row in rows))

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def row(self, index: int) -> Row:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return ()

    def cell(self, row: int, column: int) -> Cell:
        cells = self.row(row)
        if 0 <= column < len(cells):
            return cells[column]
        return EMPTY


def cell_at(row: Sequence[Cell], column: int) -> Cell:
    if 0 <= column < len(row):
        return row[column]
    return EMPTY


def row_text(row: Sequence[Cell]) -> str:
    """Join a row into one lowercase string for keyword tests."""

    return " ".join(cell.text() for cell in row).lower()


__all__ = [
    "Cell",
    "EMPTY",
    "EXCEL_EPOCH",
    "Empty",
    "Grid",
    "Number",
    "Row",
    "Text",
    "cell_at",
    "date_to_serial",
    "format_number",
    "is_blank",
    "row_text",
    "to_cell",
    "to_row",
]
