"""End-to-end analysis of one AN01 workbook."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from .config import AppConfig
from .grid import Grid
from .io import load_grid, load_grid_from_path
from .metadata import TenderMetadata, extract_metadata
from .offers import OFFER_COLUMNS, SupplierOffer, extract_offers
from .stats import FinancialStats, compute_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Structured output from :func:`analyse_workbook`."""

    metadata: TenderMetadata
    offers: Tuple[SupplierOffer, ...]
    stats: FinancialStats
    sheet_name: str = ""

    def offers_frame(self) -> pd.DataFrame:
        """Return the offers as a dataframe ordered by final rank."""

        frame = pd.DataFrame(
            [offer.as_dict() for offer in self.offers],
            columns=list(OFFER_COLUMNS),
        )
        return frame.sort_values("rank_final", kind="stable").reset_index(drop=True)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "sheet_name": self.sheet_name,
            "metadata": self.metadata.as_dict(),
            "offers": [offer.as_dict() for offer in self.offers],
            "stats": self.stats.as_dict(),
        }


def analyse_grid(grid: Grid, config: Optional[AppConfig] = None) -> AnalysisResult:
    """Run metadata, table and statistics extraction over an already loaded grid."""

    config = config or AppConfig()
    metadata = extract_metadata(grid, config)
    offers = tuple(extract_offers(grid, config))
    stats = compute_stats(offers)
    logger.info(
        "Selected supplier '%s' out of %d offer(s)",
        stats.selected_supplier_name,
        len(offers),
    )
    return AnalysisResult(
        metadata=metadata,
        offers=offers,
        stats=stats,
        sheet_name=grid.sheet_name,
    )


def analyse_workbook(data: bytes, config: Optional[AppConfig] = None) -> AnalysisResult:
    """Analyse the raw bytes of an uploaded workbook."""

    return analyse_grid(load_grid(data, config), config)


def analyse_file(path: Path, config: Optional[AppConfig] = None) -> AnalysisResult:
    """Analyse a workbook stored on disk."""

    return analyse_grid(load_grid_from_path(path, config), config)


__all__ = ["AnalysisResult", "analyse_file", "analyse_grid", "analyse_workbook"]
