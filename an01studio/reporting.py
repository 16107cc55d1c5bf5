"""Utilities for exporting analysis outputs to disk."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from .analysis import AnalysisResult
from .config import OutputConfig
from .normalize import serial_to_date

logger = logging.getLogger(__name__)


def build_summary(result: AnalysisResult) -> Dict[str, Any]:
    """Return the JSON-ready summary written next to the offers table."""

    payload = result.as_dict()
    payload.pop("offers")
    decision_date = serial_to_date(result.metadata.decision_date)
    payload["metadata"]["decision_date_iso"] = decision_date.isoformat() if decision_date else None
    payload["offer_count"] = len(result.offers)
    payload["generated_at"] = datetime.now(timezone.utc).replace(microsecond=0).isoformat()
    return payload


def export_analysis(result: AnalysisResult, output: OutputConfig) -> Dict[str, Path]:
    """Persist the offers table and the summary to the configured directory."""

    if output.directory is None:
        raise ValueError("No output directory configured for the export")

    output_dir = Path(output.directory)
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Writing reports to %s", output_dir)

    paths: Dict[str, Path] = {}

    offers_path = output_dir / output.offers_report
    result.offers_frame().to_csv(offers_path, index=False)
    paths["offers"] = offers_path

    summary_path = output_dir / output.summary_report
    with summary_path.open("w", encoding="utf-8") as handle:
        json.dump(build_summary(result), handle, ensure_ascii=False, indent=2)
    paths["summary"] = summary_path

    return paths


__all__ = ["build_summary", "export_analysis"]
