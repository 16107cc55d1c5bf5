"""Configuration loading utilities for AN01 Studio."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

METADATA_FIELDS: Tuple[str, ...] = (
    "consultation_no",
    "description",
    "buyer",
    "requester",
    "technician",
    "decision_date",
    "vat_rate",
)

DEFAULT_KEYWORDS: Dict[str, List[str]] = {
    "consultation_no": ["consultation"],
    "description": ["description"],
    "buyer": ["acheteur"],
    "requester": ["demandeur"],
    "technician": ["valideur"],
    "decision_date": ["délai", "delai"],
    "vat_rate": ["tva"],
}


@dataclass
class SheetConfig:
    """How the target worksheet is picked inside a workbook."""

    name_hint: str = "AN01"


@dataclass
class MetadataConfig:
    """Bounds and label keywords used by the metadata scan."""

    row_limit: int = 20
    vat_cell: Tuple[int, int] = (8, 7)
    keywords: Dict[str, List[str]] = field(
        default_factory=lambda: {key: list(value) for key, value in DEFAULT_KEYWORDS.items()}
    )

    def keywords_for(self, field_name: str) -> List[str]:
        return [keyword.lower() for keyword in self.keywords.get(field_name, [])]


@dataclass
class TableConfig:
    """Markers delimiting the offer table."""

    header_label: str = "raison sociale"
    first_row_offset: int = 2
    terminator: str = "calcul des gains"


@dataclass
class OutputConfig:
    """Where exported reports should be written."""

    directory: Optional[Path] = None
    offers_report: str = "offers.csv"
    summary_report: str = "analysis_summary.json"

    def resolved(self, base_path: Path) -> "OutputConfig":
        directory = _resolve_path(self.directory, base_path) if self.directory else None
        return OutputConfig(
            directory=directory,
            offers_report=self.offers_report,
            summary_report=self.summary_report,
        )


@dataclass
class AppConfig:
    """Container for every setting used by the extraction pipeline."""

    sheet: SheetConfig = field(default_factory=SheetConfig)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    table: TableConfig = field(default_factory=TableConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def resolved(self, base_path: Path) -> "AppConfig":
        return AppConfig(
            sheet=self.sheet,
            metadata=self.metadata,
            table=self.table,
            output=self.output.resolved(base_path),
        )


def load_config(path: Path) -> AppConfig:
    """Load :class:`AppConfig` from a YAML file.

    Sections that are absent keep their built-in defaults, so an empty file is
    a valid configuration.
    """

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file '{config_path}' does not exist")

    with config_path.open("r", encoding="utf-8") as stream:
        raw_config = yaml.safe_load(stream) or {}

    if not isinstance(raw_config, Mapping):
        raise ValueError("Configuration root must be a mapping")

    sheet = SheetConfig(**_section(raw_config, "sheet"))
    metadata = _parse_metadata_section(_section(raw_config, "metadata"))
    table = TableConfig(**_section(raw_config, "table"))
    output = OutputConfig(**_parse_output_section(_section(raw_config, "output")))

    config = AppConfig(sheet=sheet, metadata=metadata, table=table, output=output)
    return config.resolved(config_path.parent)


def _section(raw_config: Mapping[str, Any], name: str) -> Dict[str, Any]:
    section = raw_config.get(name) or {}
    if not isinstance(section, Mapping):
        raise ValueError(f"Configuration section '{name}' must be a mapping")
    return dict(section)


def _parse_metadata_section(section: Mapping[str, Any]) -> MetadataConfig:
    parsed: Dict[str, Any] = {}
    if "row_limit" in section:
        parsed["row_limit"] = int(section["row_limit"])

    if "vat_cell" in section:
        vat_cell = section["vat_cell"]
        if not isinstance(vat_cell, (list, tuple)) or len(vat_cell) != 2:
            raise ValueError("metadata.vat_cell must be a [row, column] pair")
        parsed["vat_cell"] = (int(vat_cell[0]), int(vat_cell[1]))

    keywords = {key: list(value) for key, value in DEFAULT_KEYWORDS.items()}
    overrides = section.get("keywords") or {}
    for name, values in overrides.items():
        if name not in METADATA_FIELDS:
            raise ValueError(f"Unknown metadata field '{name}' in metadata.keywords")
        if isinstance(values, str):
            values = [values]
        keywords[name] = [str(value) for value in values if str(value).strip()]
    parsed["keywords"] = keywords

    return MetadataConfig(**parsed)


def _parse_output_section(section: Mapping[str, Any]) -> Dict[str, Any]:
    parsed: Dict[str, Any] = {}
    if section.get("directory"):
        parsed["directory"] = Path(section["directory"])
    for key in ("offers_report", "summary_report"):
        if key in section:
            parsed[key] = section[key]
    return parsed


def _resolve_path(path: Path, base_path: Path) -> Path:
    expanded = Path(path).expanduser()
    if expanded.is_absolute():
        return expanded
    return (base_path / expanded).resolve()


__all__ = [
    "AppConfig",
    "MetadataConfig",
    "OutputConfig",
    "SheetConfig",
    "TableConfig",
    "load_config",
]
