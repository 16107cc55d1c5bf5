"""Command line interface for analysing AN01 evaluation reports."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, Optional

import numpy as np

from .analysis import AnalysisResult, analyse_file
from .config import AppConfig, load_config
from .errors import AN01Error
from .normalize import serial_to_date
from .reporting import export_analysis

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Analyse an AN01 procurement evaluation workbook")
    parser.add_argument("workbook", type=Path, help="Path to the .xlsx/.xls report")
    parser.add_argument("--config", type=Path, help="Path to YAML configuration")
    parser.add_argument("--output-dir", type=Path, help="Directory for generated reports")
    parser.add_argument("--sheet", help="Substring identifying the sheet to analyse")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING)")
    parser.add_argument("--quiet", action="store_true", help="Suppress console summary output")
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else AppConfig()
        _apply_overrides(config, args)
    except Exception as exc:  # pragma: no cover - CLI validation
        logger.error("Failed to load configuration: %s", exc)
        return 1

    try:
        result = analyse_file(args.workbook, config)
    except (AN01Error, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1

    if config.output.directory is not None:
        try:
            export_analysis(result, config.output)
        except OSError as exc:
            logger.exception("Failed to export analysis results: %s", exc)
            return 1

    if not args.quiet:
        _print_summary(result)

    return 0


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    if args.output_dir:
        config.output.directory = _resolve_override_path(args.output_dir)

    if args.sheet:
        config.sheet.name_hint = args.sheet


def _resolve_override_path(path: Path) -> Path:
    path = Path(path).expanduser()
    if path.is_absolute():
        return path
    return (Path.cwd() / path).resolve()


def _print_summary(result: AnalysisResult) -> None:
    metadata = result.metadata
    stats = result.stats

    decision_date = serial_to_date(metadata.decision_date)
    print(f"Consultation: {metadata.consultation_no or '-'}")
    if metadata.description:
        print(f"Description: {metadata.description}")
    print(f"Decision deadline: {decision_date.isoformat() if decision_date else metadata.decision_date or '-'}")
    print(f"VAT rate: {f'{metadata.vat_rate} %' if metadata.vat_rate else 'not detected'}")
    print()
    print(f"Selected supplier: {stats.selected_supplier_name} ({_format_float(stats.selected_offer_amount)})")
    print(
        "Average / min / max offer: "
        f"{_format_float(stats.average_offer)} / {_format_float(stats.min_offer)} / {_format_float(stats.max_offer)}"
    )
    print(
        f"Saving vs. average: {_format_float(stats.saving_vs_average)} "
        f"({_format_float(stats.saving_percent)} %)"
    )
    print()

    frame = result.offers_frame()
    for column in ("score_final", "amount_ttc"):
        frame[column] = frame[column].apply(_format_float)
    print("Offers by final rank:")
    print(frame[["rank_final", "name", "score_final", "amount_ttc"]].to_string(index=False))


def _format_float(value: Optional[float]) -> str:
    try:
        if value is None or (isinstance(value, float) and np.isnan(value)):
            return "-"
        return f"{float(value):,.2f}"
    except (TypeError, ValueError):  # pragma: no cover - formatting fallback
        return str(value)


if __name__ == "__main__":  # pragma: no cover - manual execution entry point
    raise SystemExit(main())
