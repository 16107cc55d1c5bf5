"""Tolerant parsers for the numeric formats found in AN01 reports.

Every parser accepts a :data:`~an01studio.grid.Cell` (raw values are wrapped
first) and degrades to zero instead of raising, so one malformed cell never
blocks the rest of an analysis.
"""
from __future__ import annotations

import math
import re
from datetime import date, timedelta
from typing import Any, Optional

from .grid import EXCEL_EPOCH, Empty, Number, Text, to_cell

_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INTEGER = re.compile(r"^[+-]?\d+")
_CURRENCY_TOKENS = re.compile(r"(?i)(eur|€|usd|\$|gbp|£|chf)")

# Largest serial a spreadsheet accepts (9999-12-31).
_MAX_SERIAL = 2958465


def _leading_float(text: str) -> Optional[float]:
    match = _LEADING_NUMBER.match(text.strip())
    if not match:
        return None
    return float(match.group(0))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_currency(value: Any) -> float:
    """Parse an amount such as ``"1 036 593,62 €"`` into ``1036593.62``."""

    cell = to_cell(value)
    if isinstance(cell, Number):
        return cell.value
    if isinstance(cell, Empty):
        return 0.0

    cleaned = re.sub(r"\s+", "", cell.value)
    cleaned = _CURRENCY_TOKENS.sub("", cleaned)
    if "," in cleaned and "." in cleaned:
        # whichever separator comes last is the decimal one
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "")
        else:
            cleaned = cleaned.replace(",", "")
    cleaned = cleaned.replace(",", ".")

    parsed = _leading_float(cleaned)
    return parsed if parsed is not None else 0.0


def parse_score(value: Any) -> float:
    """Parse a score written with either decimal separator."""

    cell = to_cell(value)
    if isinstance(cell, Number):
        return cell.value
    if isinstance(cell, Empty):
        return 0.0
    parsed = _leading_float(cell.value.replace(",", "."))
    return parsed if parsed is not None else 0.0


def parse_rank(value: Any) -> int:
    """Parse an integer rank; ``0`` means the cell held no usable rank."""

    cell = to_cell(value)
    if isinstance(cell, Number):
        return int(cell.value) if math.isfinite(cell.value) else 0
    if isinstance(cell, Empty):
        return 0
    match = _LEADING_INTEGER.match(cell.value.strip())
    return int(match.group(0)) if match else 0


def parse_percentage(value: Any) -> int:
    """Parse a rate into a whole percentage.

    Values below 1 are read as fractions (``0.2`` is 20 %), anything else is
    taken as already expressed in percent. Text may carry a trailing ``%`` and
    a decimal comma.
    """

    cell = to_cell(value)
    if isinstance(cell, Number):
        number: Optional[float] = cell.value
    elif isinstance(cell, Text):
        number = _leading_float(cell.value.replace("%", "").replace(",", "."))
    else:
        number = None

    if number is None or not math.isfinite(number) or number == 0:
        return 0
    if number < 1:
        number *= 100
    return _round_half_up(number)


def looks_numeric(value: Any) -> bool:
    """Return ``True`` for cells that could hold a rate or an amount."""

    cell = to_cell(value)
    if isinstance(cell, Number):
        return True
    if isinstance(cell, Text):
        return "%" in cell.value or _leading_float(cell.value) is not None
    return False


def serial_to_date(value: Any) -> Optional[date]:
    """Convert a spreadsheet date serial (``"45292"``) into a calendar date.

    Returns ``None`` when the value is not a plausible serial number.
    """

    cell = to_cell(value)
    if isinstance(cell, Number):
        serial = cell.value
    elif isinstance(cell, Text):
        try:
            serial = float(cell.value.strip().replace(",", "."))
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(serial) or serial < 1 or serial > _MAX_SERIAL:
        return None
    return (EXCEL_EPOCH + timedelta(days=math.floor(serial))).date()


__all__ = [
    "looks_numeric",
    "parse_currency",
    "parse_percentage",
    "parse_rank",
    "parse_score",
    "serial_to_date",
]
