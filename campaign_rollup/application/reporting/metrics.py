"""Shared numeric/formatting utilities for rollups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from campaign_rollup.domain.models import Campaign
from campaign_rollup.domain.rollups import RollupRow


@dataclass(frozen=True)
class DerivedMetrics:
    ctr: float
    conversion_rate: float
    roas: float


def safe_divide(num: float, den: float) -> float:
    if den == 0:
        return 0.0
    return num / den


def derive_metrics(
    impressions: float,
    clicks: float,
    conversions: float,
    spend: float,
    revenue: float,
) -> DerivedMetrics:
    """CTR and conversion rate are percentages; ROAS stays a plain multiplier."""
    return DerivedMetrics(
        ctr=safe_divide(clicks, impressions) * 100,
        conversion_rate=safe_divide(conversions, clicks) * 100,
        roas=safe_divide(revenue, spend),
    )


def average(total: float, count: int) -> float:
    return safe_divide(total, count)


def _totals_row(
    impressions: float,
    clicks: float,
    conversions: float,
    spend: float,
    revenue: float,
) -> RollupRow:
    derived = derive_metrics(impressions, clicks, conversions, spend, revenue)
    return RollupRow(
        impressions=impressions,
        clicks=clicks,
        conversions=conversions,
        spend=spend,
        revenue=revenue,
        ctr=derived.ctr,
        conversion_rate=derived.conversion_rate,
        roas=derived.roas,
    )


def grand_totals(rows: Iterable[RollupRow]) -> RollupRow:
    """Sum any rollup rows into one top-line row with recomputed ratios."""
    impressions = clicks = conversions = spend = revenue = 0.0
    for row in rows:
        impressions += row.impressions
        clicks += row.clicks
        conversions += row.conversions
        spend += row.spend
        revenue += row.revenue
    return _totals_row(impressions, clicks, conversions, spend, revenue)


def campaign_totals(campaigns: Sequence[Campaign]) -> RollupRow:
    """Top-line totals from campaign-level aggregates rather than breakdowns."""
    return _totals_row(
        sum(campaign.impressions for campaign in campaigns),
        sum(campaign.clicks for campaign in campaigns),
        sum(campaign.conversions for campaign in campaigns),
        sum(campaign.spend for campaign in campaigns),
        sum(campaign.revenue for campaign in campaigns),
    )


def fmt_money(value: float | None) -> str:
    if value is None:
        return "$0"
    abs_value = abs(value)
    if abs_value >= 1_000_000:
        return f"${abs_value / 1_000_000:.1f}M"
    if abs_value >= 1_000:
        return f"${abs_value / 1_000:.0f}K"
    return f"${abs_value:.0f}"


def fmt_roas(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.1f}x"


def fmt_rate(value: float | None) -> str:
    # Rates are already expressed as percentages.
    if value is None:
        return "N/A"
    return f"{value:.2f}%"
