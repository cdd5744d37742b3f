"""Mutable per-key accumulators; finalize() turns each into an immutable rollup row."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from campaign_rollup.application.reporting.metrics import average, derive_metrics, safe_divide
from campaign_rollup.domain.models import DevicePerformance, RegionalPerformance, WeeklyPerformance
from campaign_rollup.domain.rollups import (
    AgeGroupRollup,
    DeviceRollup,
    GenderAgeRollup,
    GenderRollup,
    RegionRollup,
    WeekRollup,
)


@dataclass
class MetricAccumulator:
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    spend: float = 0.0
    revenue: float = 0.0

    def add(
        self,
        impressions: float = 0.0,
        clicks: float = 0.0,
        conversions: float = 0.0,
        spend: float = 0.0,
        revenue: float = 0.0,
    ) -> None:
        self.impressions += impressions
        self.clicks += clicks
        self.conversions += conversions
        self.spend += spend
        self.revenue += revenue

    def metric_fields(self) -> Dict[str, Any]:
        # Ratios are derived here from the totals, never summed.
        derived = derive_metrics(self.impressions, self.clicks, self.conversions, self.spend, self.revenue)
        return {
            "impressions": self.impressions,
            "clicks": self.clicks,
            "conversions": self.conversions,
            "spend": self.spend,
            "revenue": self.revenue,
            "ctr": derived.ctr,
            "conversion_rate": derived.conversion_rate,
            "roas": derived.roas,
        }


@dataclass
class AgeGroupAccumulator(MetricAccumulator):
    age_group: str = ""

    def finalize(self) -> AgeGroupRollup:
        return AgeGroupRollup(age_group=self.age_group, **self.metric_fields())


@dataclass
class GenderAccumulator(MetricAccumulator):
    gender: str = ""

    def finalize(self) -> GenderRollup:
        return GenderRollup(gender=self.gender, **self.metric_fields())


@dataclass
class GenderAgeAccumulator(MetricAccumulator):
    gender: str = ""
    age_group: str = ""

    def finalize(self) -> GenderAgeRollup:
        return GenderAgeRollup(gender=self.gender, age_group=self.age_group, **self.metric_fields())


@dataclass
class DeviceAccumulator(MetricAccumulator):
    device: str = ""
    ctr_sum: float = 0.0
    conversion_rate_sum: float = 0.0
    traffic_percentage_sum: float = 0.0
    record_count: int = 0

    def add_record(self, record: DevicePerformance) -> None:
        self.add(
            impressions=record.impressions,
            clicks=record.clicks,
            conversions=record.conversions,
            spend=record.spend,
            revenue=record.revenue,
        )
        # Records without a reported ratio fall back to their own counts.
        ctr = record.ctr
        if ctr is None:
            ctr = safe_divide(record.clicks, record.impressions) * 100
        conversion_rate = record.conversion_rate
        if conversion_rate is None:
            conversion_rate = safe_divide(record.conversions, record.clicks) * 100
        self.ctr_sum += ctr
        self.conversion_rate_sum += conversion_rate
        self.traffic_percentage_sum += record.percentage_of_traffic
        self.record_count += 1

    def finalize(self) -> DeviceRollup:
        return DeviceRollup(
            device=self.device,
            avg_ctr=average(self.ctr_sum, self.record_count),
            avg_conversion_rate=average(self.conversion_rate_sum, self.record_count),
            avg_traffic_percentage=average(self.traffic_percentage_sum, self.record_count),
            record_count=self.record_count,
            **self.metric_fields(),
        )


@dataclass
class RegionAccumulator(MetricAccumulator):
    region: str = ""
    country: str = ""

    def add_record(self, record: RegionalPerformance) -> None:
        self.add(
            impressions=record.impressions,
            clicks=record.clicks,
            conversions=record.conversions,
            spend=record.spend,
            revenue=record.revenue,
        )

    def finalize(self) -> RegionRollup:
        return RegionRollup(region=self.region, country=self.country, **self.metric_fields())


@dataclass
class WeekAccumulator(MetricAccumulator):
    week: str = ""
    week_start: str = ""
    week_end: str | None = None

    def add_record(self, record: WeeklyPerformance) -> None:
        self.add(
            impressions=record.impressions,
            clicks=record.clicks,
            conversions=record.conversions,
            spend=record.spend,
            revenue=record.revenue,
        )

    def finalize(self) -> WeekRollup:
        return WeekRollup(
            week=self.week,
            week_start=self.week_start,
            week_end=self.week_end,
            **self.metric_fields(),
        )
