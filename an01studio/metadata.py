"""Best-effort extraction of tender metadata from the report header area."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import reduce
from typing import Callable, Dict, Optional, Sequence, Tuple

from .config import AppConfig, MetadataConfig
from .grid import Cell, Empty, Grid, cell_at, is_blank, row_text
from .normalize import looks_numeric, parse_percentage

logger = logging.getLogger(__name__)

TENDER_REFERENCE_PREFIX = "AOO"


@dataclass(frozen=True)
class TenderMetadata:
    """Header fields of an AN01 report; every field may stay at its default."""

    consultation_no: str = ""
    description: str = ""
    buyer: str = ""
    requester: str = ""
    technician: str = ""
    decision_date: str = ""
    vat_rate: int = 0

    def as_dict(self) -> Dict[str, object]:
        return {
            "consultation_no": self.consultation_no,
            "description": self.description,
            "buyer": self.buyer,
            "requester": self.requester,
            "technician": self.technician,
            "decision_date": self.decision_date,
            "vat_rate": self.vat_rate,
        }


Reader = Callable[[Sequence[Cell], str], str]


def read_beside(row: Sequence[Cell], keyword: str) -> str:
    """Return the text right of the first cell containing ``keyword``.

    When nothing sits there but the keyword is in the first column, the second
    column is used instead.
    """

    for index, cell in enumerate(row):
        if keyword in cell.text().lower():
            neighbour = cell_at(row, index + 1)
            if not is_blank(neighbour):
                return neighbour.text()
            break

    if keyword in cell_at(row, 0).text().lower():
        fallback = cell_at(row, 1)
        if not is_blank(fallback):
            return fallback.text()
    return ""


def read_reference(row: Sequence[Cell], keyword: str) -> str:
    """Prefer a cell carrying a tender reference, else read beside the label."""

    for cell in row:
        if TENDER_REFERENCE_PREFIX in cell.text():
            return cell.text()
    return read_beside(row, keyword)


@dataclass(frozen=True)
class LabelRule:
    """Fill ``field`` from a row mentioning one of ``keywords``."""

    field: str
    keywords: Tuple[str, ...]
    reader: Reader = read_beside

    def apply(self, row: Sequence[Cell], text: str) -> str:
        for keyword in self.keywords:
            if keyword and keyword in text:
                value = self.reader(row, keyword)
                if value:
                    return value
        return ""


def build_rules(config: MetadataConfig) -> Tuple[LabelRule, ...]:
    readers: Dict[str, Reader] = {"consultation_no": read_reference}
    fields = ("consultation_no", "description", "buyer", "requester", "technician", "decision_date")
    return tuple(
        LabelRule(
            field=name,
            keywords=tuple(config.keywords_for(name)),
            reader=readers.get(name, read_beside),
        )
        for name in fields
    )


def read_vat_from_row(row: Sequence[Cell], text: str, keywords: Sequence[str]) -> int:
    """Take the first rate-like cell of a row that mentions VAT."""

    if not any(keyword and keyword in text for keyword in keywords):
        return 0
    for cell in row:
        if looks_numeric(cell):
            return parse_percentage(cell)
    return 0


def read_fixed_vat(grid: Grid, config: MetadataConfig) -> int:
    """Read the VAT rate from its conventional cell (H9 in the report)."""

    row_index, column_index = config.vat_cell
    cell = grid.cell(row_index, column_index)
    if isinstance(cell, Empty):
        return 0
    return parse_percentage(cell)


def apply_row(
    partial: TenderMetadata,
    row: Sequence[Cell],
    rules: Sequence[LabelRule],
    vat_keywords: Sequence[str],
) -> TenderMetadata:
    """Fold step: fill the fields of ``partial`` that are still empty."""

    if not row:
        return partial

    text = row_text(row)
    updates: Dict[str, object] = {}
    for rule in rules:
        if getattr(partial, rule.field):
            continue
        value = rule.apply(row, text)
        if value:
            logger.debug("Metadata field '%s' set to %r", rule.field, value)
            updates[rule.field] = value

    if partial.vat_rate == 0:
        vat_rate = read_vat_from_row(row, text, vat_keywords)
        if vat_rate:
            updates["vat_rate"] = vat_rate

    return replace(partial, **updates) if updates else partial


def extract_metadata(grid: Grid, config: Optional[AppConfig] = None) -> TenderMetadata:
    """Scan the top of ``grid`` for labelled tender fields.

    Never raises: a field that cannot be found keeps its empty/zero default.
    """

    settings = (config or AppConfig()).metadata
    rules = build_rules(settings)
    vat_keywords = settings.keywords_for("vat_rate")

    initial = TenderMetadata(vat_rate=read_fixed_vat(grid, settings))
    header_rows = grid.rows[: max(settings.row_limit, 0)]
    metadata = reduce(
        lambda partial, row: apply_row(partial, row, rules, vat_keywords),
        header_rows,
        initial,
    )

    found = sum(1 for value in metadata.as_dict().values() if value)
    logger.info("Extracted %d metadata field(s) from sheet '%s'", found, grid.sheet_name)
    return metadata


__all__ = [
    "LabelRule",
    "TenderMetadata",
    "apply_row",
    "build_rules",
    "extract_metadata",
    "read_beside",
    "read_fixed_vat",
    "read_reference",
    "read_vat_from_row",
]
