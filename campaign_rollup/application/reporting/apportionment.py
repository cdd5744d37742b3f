"""Traffic-share apportionment of campaign spend/revenue onto breakdown records.

Breakdowns such as demographics report only traffic counts. Each record's
monetary contribution is estimated from its share of the campaign's clicks,
or of its impressions when the campaign recorded no clicks at all (e.g.
awareness campaigns). Shares of one campaign sum to 1, so apportioned spend
always reconstructs the campaign spend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal, Protocol, Sequence


logger = logging.getLogger(__name__)

Basis = Literal["clicks", "impressions"]


class TrafficCounts(Protocol):
    impressions: float
    clicks: float


@dataclass(frozen=True)
class ApportionedShare:
    share: float
    spend: float
    revenue: float


def apportionment_basis(records: Sequence[TrafficCounts]) -> tuple[Basis, float]:
    """Return the basis metric and the denominator to divide by (never 0)."""
    total_clicks = sum(record.clicks for record in records)
    if total_clicks > 0:
        return "clicks", total_clicks
    total_impressions = sum(record.impressions for record in records)
    # All-zero traffic keeps every share at 0 instead of dividing by zero.
    return "impressions", total_impressions or 1.0


def apportion(spend: float, revenue: float, records: Sequence[TrafficCounts]) -> List[ApportionedShare]:
    if not records:
        return []

    basis, denominator = apportionment_basis(records)
    if basis == "impressions":
        logger.debug("No clicks across %d records, apportioning by impressions", len(records))

    shares: List[ApportionedShare] = []
    for record in records:
        basis_value = record.clicks if basis == "clicks" else record.impressions
        share = basis_value / denominator
        shares.append(ApportionedShare(share=share, spend=spend * share, revenue=revenue * share))
    return shares
