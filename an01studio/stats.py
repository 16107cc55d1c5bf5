"""Financial comparison statistics derived from the extracted offers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from operator import attrgetter
from typing import Dict, Optional, Sequence

import numpy as np

from .errors import EmptyResultError
from .offers import SupplierOffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinancialStats:
    """Aggregate amounts and the saving achieved by the selected offer.

    ``saving_percent`` is ``None`` when the average offer is zero, since the
    ratio is not defined in that case.
    """

    average_offer: float
    min_offer: float
    max_offer: float
    selected_offer_amount: float
    selected_supplier_name: str
    saving_vs_average: float
    saving_percent: Optional[float]

    def as_dict(self) -> Dict[str, object]:
        return {
            "average_offer": self.average_offer,
            "min_offer": self.min_offer,
            "max_offer": self.max_offer,
            "selected_offer_amount": self.selected_offer_amount,
            "selected_supplier_name": self.selected_supplier_name,
            "saving_vs_average": self.saving_vs_average,
            "saving_percent": self.saving_percent,
        }


def select_winner(offers: Sequence[SupplierOffer]) -> SupplierOffer:
    """Return the offer with the lowest final rank (first one on ties)."""

    if not offers:
        raise EmptyResultError("No offers found in the table")
    return sorted(offers, key=attrgetter("rank_final"))[0]


def compute_stats(offers: Sequence[SupplierOffer]) -> FinancialStats:
    """Compute average/min/max amounts and the winner's saving vs. the average."""

    winner = select_winner(offers)
    amounts = np.array([offer.amount_ttc for offer in offers], dtype=float)

    average = float(amounts.mean())
    saving = average - winner.amount_ttc
    saving_percent = (saving / average * 100.0) if average else None
    if saving_percent is None:
        logger.warning("Average offer is zero; saving percentage is not applicable")

    return FinancialStats(
        average_offer=average,
        min_offer=float(amounts.min()),
        max_offer=float(amounts.max()),
        selected_offer_amount=winner.amount_ttc,
        selected_supplier_name=winner.name,
        saving_vs_average=saving,
        saving_percent=saving_percent,
    )


__all__ = ["FinancialStats", "compute_stats", "select_winner"]
