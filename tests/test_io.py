from datetime import datetime

import pytest

from an01studio.config import AppConfig
from an01studio.errors import StructureError, WorkbookReadError
from an01studio.grid import EMPTY, Number, Text
from an01studio.io import load_grid, load_grid_from_path, select_sheet


def test_select_sheet_prefers_an01_case_insensitively():
    assert select_sheet(["Synthèse", "rapport an01 v2", "AN01 bis"]) == "rapport an01 v2"


def test_select_sheet_falls_back_to_first_sheet():
    assert select_sheet(["Feuil1", "Feuil2"]) == "Feuil1"


def test_select_sheet_without_sheets_raises_structure_error():
    with pytest.raises(StructureError):
        select_sheet([])


def test_load_grid_reads_the_an01_sheet(report_bytes):
    grid = load_grid(report_bytes)

    assert grid.sheet_name == "Rapport AN01"
    assert grid.cell(1, 2) == Text("AOO-2024-017")
    assert grid.cell(8, 7) == Number(0.2)
    assert grid.cell(15, 1) == Number(3.0)
    # blank rows are kept so that row indexes match the sheet
    assert grid.row(7) == ()
    assert grid.cell(12, 0) == Text("Acme")


def test_load_grid_keeps_text_and_number_types_apart(workbook_factory):
    data = workbook_factory({"Feuil1": [["1", 1, None, "x"]]})
    grid = load_grid(data)

    assert grid.row(0) == (Text("1"), Number(1.0), EMPTY, Text("x"))


def test_load_grid_converts_dates_to_serials(workbook_factory):
    data = workbook_factory({"AN01": [["Délai maxi décision", datetime(2024, 1, 1)]]})
    grid = load_grid(data)

    assert grid.cell(0, 1) == Number(45292.0)
    assert grid.cell(0, 1).text() == "45292"


def test_load_grid_honours_sheet_hint(workbook_factory):
    data = workbook_factory({"AN01": [["a"]], "Lot 2": [["b"]]})
    config = AppConfig()
    config.sheet.name_hint = "lot 2"

    assert load_grid(data, config).sheet_name == "Lot 2"


def test_load_grid_rejects_non_workbook_bytes():
    with pytest.raises(WorkbookReadError) as excinfo:
        load_grid(b"this is not a spreadsheet", source="notes.txt")

    assert excinfo.value.source == "notes.txt"


def test_load_grid_from_path(tmp_path, report_bytes):
    path = tmp_path / "an01.xlsx"
    path.write_bytes(report_bytes)

    grid = load_grid_from_path(path)
    assert grid.sheet_name == "Rapport AN01"

    with pytest.raises(FileNotFoundError):
        load_grid_from_path(tmp_path / "missing.xlsx")
