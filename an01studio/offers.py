"""Offer table discovery and row extraction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Dict, List, Optional, Sequence

from .config import AppConfig, TableConfig
from .errors import EmptyResultError, StructureError
from .grid import Cell, Grid, cell_at, is_blank
from .normalize import parse_currency, parse_rank, parse_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SupplierOffer:
    """One evaluated supplier, identified by its row in the source sheet."""

    id: int
    name: str
    rank_final: int = 0
    score_final: float = 0.0
    rank_financial: int = 0
    score_financial: float = 0.0
    rank_technical: int = 0
    score_technical: float = 0.0
    amount_ttc: float = 0.0

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "rank_final": self.rank_final,
            "score_final": self.score_final,
            "rank_financial": self.rank_financial,
            "score_financial": self.score_financial,
            "rank_technical": self.rank_technical,
            "score_technical": self.score_technical,
            "amount_ttc": self.amount_ttc,
        }


OFFER_COLUMNS = tuple(field_info.name for field_info in fields(SupplierOffer))


def find_header_row(grid: Grid, label: str = "raison sociale") -> int:
    """Return the index of the row naming the supplier column."""

    needle = label.lower()
    for index, row in enumerate(grid):
        if any(needle in cell.text().lower() for cell in row):
            logger.debug("Offer table header found on row %d", index)
            return index
    raise StructureError(f"Table structure not recognized (no '{label}' column found)")


def is_terminator(row: Sequence[Cell], terminator: str) -> bool:
    """Return ``True`` when ``row`` ends the offer table."""

    if not row:
        return True
    first = cell_at(row, 0)
    if is_blank(first):
        return True
    return bool(terminator) and terminator.lower() in first.text().lower()


def parse_offer_row(row: Sequence[Cell], index: int) -> SupplierOffer:
    """Map the positional columns of a data row onto an offer."""

    return SupplierOffer(
        id=index,
        name=cell_at(row, 0).text().strip(),
        rank_final=parse_rank(cell_at(row, 1)),
        score_final=parse_score(cell_at(row, 2)),
        rank_financial=parse_rank(cell_at(row, 3)),
        score_financial=parse_score(cell_at(row, 4)),
        rank_technical=parse_rank(cell_at(row, 5)),
        score_technical=parse_score(cell_at(row, 6)),
        amount_ttc=parse_currency(cell_at(row, 7)),
    )


def extract_offers(grid: Grid, config: Optional[AppConfig] = None) -> List[SupplierOffer]:
    """Read the offer rows following the table header.

    Rows without a rank are skipped; an empty row, a nameless row or the gains
    summary section ends the table.
    """

    table: TableConfig = (config or AppConfig()).table
    header_index = find_header_row(grid, table.header_label)

    offers: List[SupplierOffer] = []
    for index in range(header_index + table.first_row_offset, len(grid)):
        row = grid.row(index)
        if is_terminator(row, table.terminator):
            logger.debug("Offer table ends before row %d", index)
            break
        if is_blank(cell_at(row, 1)):
            continue
        offers.append(parse_offer_row(row, index))

    if not offers:
        raise EmptyResultError("No offers found in the table")

    logger.info("Extracted %d offer(s) from sheet '%s'", len(offers), grid.sheet_name)
    return offers


__all__ = [
    "OFFER_COLUMNS",
    "SupplierOffer",
    "extract_offers",
    "find_header_row",
    "is_terminator",
    "parse_offer_row",
]
