from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any, Callable, List, Mapping, Sequence
import sys

import pytest
from openpyxl import Workbook

# Ensure project root is on sys.path for absolute imports
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from an01studio.grid import Grid


REPORT_ROWS: List[List[Any]] = [
    ["Rapport d'analyse des offres"],
    ["N° de consultation", "Réf.", "AOO-2024-017"],
    ["Description", "Fourniture de mobilier de bureau"],
    ["Acheteur", "Ministère X"],
    ["Demandeur", "Direction Y"],
    ["Valideur technique", "M. Dupont"],
    ["Délai maxi décision", 45292],
    [],
    ["Taux de TVA", None, None, None, None, None, None, 0.2],
    [],
    [
        "Raison sociale",
        "Classement final",
        "Note finale",
        "Classement financier",
        "Note financière",
        "Classement technique",
        "Note technique",
        "Montant TTC",
    ],
    [None, None, "/100", None, "/60", None, "/40", "€"],
    ["Acme", "1", "85,5", "1", "50", "1", "35,5", "120 000,00 €"],
    ["Beta", "2", "72", "2", "40", "2", "32", "110 000,00 €"],
    ["Gamma (offre irrégulière)", None, None, None, None, None, None, "99 000,00 €"],
    ["Delta", 3, 60.25, 3, 30, 3, 30.25, 95000],
    ["Calcul des gains"],
    ["Zeta", "4", "10", "4", "5", "4", "5", "1,00 €"],
]


def build_workbook(sheets: Mapping[str, Sequence[Sequence[Any]]]) -> bytes:
    """Write ``sheets`` (name -> rows) into an in-memory .xlsx file."""

    workbook = Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        worksheet = workbook.create_sheet(title=name)
        for row_idx, row in enumerate(rows, start=1):
            for col_idx, value in enumerate(row, start=1):
                if value is not None:
                    worksheet.cell(row=row_idx, column=col_idx, value=value)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def report_rows() -> List[List[Any]]:
    return [list(row) for row in REPORT_ROWS]


@pytest.fixture
def report_grid(report_rows) -> Grid:
    return Grid.from_values(report_rows, sheet_name="AN01")


@pytest.fixture
def workbook_factory() -> Callable[[Mapping[str, Sequence[Sequence[Any]]]], bytes]:
    return build_workbook


@pytest.fixture
def report_bytes(report_rows) -> bytes:
    return build_workbook({"Synthèse": [["Sommaire"]], "Rapport AN01": report_rows})
