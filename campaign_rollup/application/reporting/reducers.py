"""Per-dimension reducers folding a campaign list into keyed rollup rows."""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Sequence

from campaign_rollup.application.reporting.accumulators import (
    AgeGroupAccumulator,
    DeviceAccumulator,
    GenderAccumulator,
    GenderAgeAccumulator,
    RegionAccumulator,
    WeekAccumulator,
)
from campaign_rollup.application.reporting.apportionment import apportion
from campaign_rollup.domain.models import Campaign
from campaign_rollup.domain.rollups import DemographicRollup, DeviceRollup, RegionRollup, WeekRollup


def reduce_demographics(campaigns: Sequence[Campaign]) -> DemographicRollup:
    by_age: Dict[str, AgeGroupAccumulator] = {}
    by_gender: Dict[str, GenderAccumulator] = {}
    by_gender_age: Dict[tuple[str, str], GenderAgeAccumulator] = {}

    for campaign in campaigns:
        breakdown = campaign.demographic_breakdown
        if not breakdown:
            continue

        shares = apportion(campaign.spend, campaign.revenue, [item.performance for item in breakdown])
        for item, share in zip(breakdown, shares):
            perf = item.performance
            gender_node = by_gender.get(item.gender)
            if gender_node is None:
                gender_node = by_gender[item.gender] = GenderAccumulator(gender=item.gender)
            age_node = by_age.get(item.age_group)
            if age_node is None:
                age_node = by_age[item.age_group] = AgeGroupAccumulator(age_group=item.age_group)
            pair = (item.gender, item.age_group)
            pair_node = by_gender_age.get(pair)
            if pair_node is None:
                pair_node = by_gender_age[pair] = GenderAgeAccumulator(gender=item.gender, age_group=item.age_group)

            for node in (gender_node, age_node, pair_node):
                node.add(
                    impressions=perf.impressions,
                    clicks=perf.clicks,
                    conversions=perf.conversions,
                    spend=share.spend,
                    revenue=share.revenue,
                )

    return DemographicRollup(
        by_age_group={key: node.finalize() for key, node in by_age.items()},
        by_gender={key: node.finalize() for key, node in by_gender.items()},
        by_gender_age={key: node.finalize() for key, node in by_gender_age.items()},
    )


def reduce_devices(campaigns: Sequence[Campaign]) -> Dict[str, DeviceRollup]:
    nodes: Dict[str, DeviceAccumulator] = {}
    for campaign in campaigns:
        for record in campaign.device_performance:
            node = nodes.get(record.device)
            if node is None:
                node = nodes[record.device] = DeviceAccumulator(device=record.device)
            node.add_record(record)
    return {key: node.finalize() for key, node in nodes.items()}


def reduce_regions(campaigns: Sequence[Campaign]) -> Dict[str, RegionRollup]:
    nodes: Dict[str, RegionAccumulator] = {}
    for campaign in campaigns:
        for record in campaign.regional_performance:
            node = nodes.get(record.region)
            if node is None:
                # First record seen decides the country for the region.
                node = nodes[record.region] = RegionAccumulator(region=record.region, country=record.country)
            node.add_record(record)
    return {key: node.finalize() for key, node in nodes.items()}


def reduce_weeks(campaigns: Sequence[Campaign]) -> Dict[str, WeekRollup]:
    nodes: Dict[str, WeekAccumulator] = {}
    for campaign in campaigns:
        for record in campaign.weekly_performance:
            key = record.label
            node = nodes.get(key)
            if node is None:
                node = nodes[key] = WeekAccumulator(week=key, week_start=record.week_start, week_end=record.week_end)
            node.add_record(record)
    return {key: node.finalize() for key, node in nodes.items()}


DIMENSION_REDUCERS: Mapping[str, Callable[[Sequence[Campaign]], object]] = {
    "demographic": reduce_demographics,
    "device": reduce_devices,
    "region": reduce_regions,
    "weekly": reduce_weeks,
}
