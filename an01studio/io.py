"""Workbook loading: raw spreadsheet bytes to a single-sheet :class:`Grid`."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from .config import AppConfig
from .errors import StructureError, WorkbookReadError
from .grid import Grid, to_row

logger = logging.getLogger(__name__)


def select_sheet(names: Sequence[str], hint: str = "AN01") -> str:
    """Return the first sheet whose name contains ``hint``, else the first sheet."""

    if not names:
        raise StructureError("The workbook does not contain any sheet")

    needle = hint.casefold()
    for name in names:
        if needle and needle in str(name).casefold():
            return name

    logger.debug("No sheet name contains '%s'; falling back to '%s'", hint, names[0])
    return names[0]


def load_grid(data: bytes, config: Optional[AppConfig] = None, source: Optional[str] = None) -> Grid:
    """Open ``data`` as a workbook and materialise the target sheet as a grid.

    Both the XML (``.xlsx``) and the legacy binary (``.xls``) containers are
    accepted; the format is detected from the bytes, not from a file name.
    """

    config = config or AppConfig()
    try:
        excel = pd.ExcelFile(BytesIO(data))
    except Exception as exc:
        raise WorkbookReadError(f"Unable to read the workbook: {exc}", source=source) from exc

    with excel:
        sheet_names = [str(name) for name in excel.sheet_names]
        try:
            sheet_name = select_sheet(sheet_names, config.sheet.name_hint)
        except StructureError as exc:
            exc.source = source
            raise
        logger.info("Reading sheet '%s' (%d sheet(s) in workbook)", sheet_name, len(sheet_names))
        frame = excel.parse(sheet_name, header=None, dtype=object, keep_default_na=False)

    rows = tuple(to_row(values) for values in frame.itertuples(index=False, name=None))
    logger.debug("Loaded %d row(s) from sheet '%s'", len(rows), sheet_name)
    return Grid(sheet_name=sheet_name, rows=rows)


def load_grid_from_path(path: Path, config: Optional[AppConfig] = None) -> Grid:
    """Read a workbook from disk and delegate to :func:`load_grid`."""

    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise FileNotFoundError(f"Workbook '{file_path}' does not exist")

    logger.info("Loading workbook from %s", file_path)
    return load_grid(file_path.read_bytes(), config, source=file_path.name)


__all__ = ["load_grid", "load_grid_from_path", "select_sheet"]
