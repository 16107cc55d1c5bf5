"""AN01 Studio core package.

This package turns the loosely structured procurement evaluation workbooks
known as AN01 reports into typed records: tender metadata, the ranked list of
supplier offers, and the financial statistics derived from them.  It powers
the command line interface shipped with this repository and is meant to be
embedded by any upload or dashboard front end.
"""

from .analysis import AnalysisResult, analyse_file, analyse_grid, analyse_workbook
from .config import (
    AppConfig,
    MetadataConfig,
    OutputConfig,
    SheetConfig,
    TableConfig,
    load_config,
)
from .errors import AN01Error, EmptyResultError, StructureError, WorkbookReadError
from .grid import Grid
from .io import load_grid, load_grid_from_path
from .metadata import TenderMetadata, extract_metadata
from .offers import SupplierOffer, extract_offers
from .reporting import export_analysis
from .stats import FinancialStats, compute_stats

__all__ = [
    "AN01Error",
    "AnalysisResult",
    "AppConfig",
    "EmptyResultError",
    "FinancialStats",
    "Grid",
    "MetadataConfig",
    "OutputConfig",
    "SheetConfig",
    "StructureError",
    "SupplierOffer",
    "TableConfig",
    "TenderMetadata",
    "WorkbookReadError",
    "analyse_file",
    "analyse_grid",
    "analyse_workbook",
    "compute_stats",
    "export_analysis",
    "extract_metadata",
    "extract_offers",
    "load_config",
    "load_grid",
    "load_grid_from_path",
]
