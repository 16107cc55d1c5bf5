"""Exceptions raised while analysing AN01 workbooks."""

from __future__ import annotations

from typing import Optional


class AN01Error(Exception):
    """Base exception for failures that invalidate a whole analysis."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class WorkbookReadError(AN01Error):
    """The uploaded bytes could not be opened as a spreadsheet."""


class StructureError(AN01Error):
    """The workbook has no sheets or no recognisable offer table."""


class EmptyResultError(AN01Error):
    """The offer table header was found but no offer rows followed it."""


__all__ = [
    "AN01Error",
    "EmptyResultError",
    "StructureError",
    "WorkbookReadError",
]
