"""Application service building every dimension rollup from one snapshot."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence

from campaign_rollup.application.reporting.metrics import grand_totals
from campaign_rollup.application.reporting.reducers import DIMENSION_REDUCERS
from campaign_rollup.application.reporting.selectors import (
    leaderboard,
    order_age_groups,
    order_gender_age_groups,
    order_genders,
    order_weeks,
)
from campaign_rollup.domain.models import Campaign, MarketingSnapshot, coerce_snapshot
from campaign_rollup.domain.rollups import (
    AgeGroupRollup,
    DemographicRollup,
    DeviceRollup,
    GenderAgeRollup,
    GenderRollup,
    RegionRollup,
    RollupRow,
    WeekRollup,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RollupResult:
    demographics: DemographicRollup
    age_groups: List[AgeGroupRollup]
    genders: List[GenderRollup]
    gender_age_groups: List[GenderAgeRollup]
    devices: List[DeviceRollup]
    regions: List[RegionRollup]
    weeks: List[WeekRollup]

    def totals(self) -> Dict[str, RollupRow]:
        """Top-line totals per dimension, each summed from that dimension's rows."""
        return {
            "demographic": grand_totals(self.genders),
            "device": grand_totals(self.devices),
            "region": grand_totals(self.regions),
            "weekly": grand_totals(self.weeks),
        }


def _reduce_all(campaigns: Sequence[Campaign], parallel: bool) -> Dict[str, Any]:
    if not parallel:
        return {name: reducer(campaigns) for name, reducer in DIMENSION_REDUCERS.items()}

    # Reducers share nothing mutable; the snapshot is frozen.
    with ThreadPoolExecutor(max_workers=len(DIMENSION_REDUCERS), thread_name_prefix="rollup") as pool:
        futures = {name: pool.submit(reducer, campaigns) for name, reducer in DIMENSION_REDUCERS.items()}
        return {name: future.result() for name, future in futures.items()}


def build_rollups(
    snapshot: MarketingSnapshot | Mapping[str, Any] | Sequence[Campaign],
    parallel: bool = False,
) -> RollupResult:
    """Run every dimension reducer over the snapshot and order the finalized rows."""
    campaigns = coerce_snapshot(snapshot).campaigns
    reduced = _reduce_all(campaigns, parallel=parallel)

    demographics: DemographicRollup = reduced["demographic"]
    result = RollupResult(
        demographics=demographics,
        age_groups=order_age_groups(demographics.by_age_group.values()),
        genders=order_genders(demographics.by_gender.values()),
        gender_age_groups=order_gender_age_groups(demographics.by_gender_age.values()),
        devices=leaderboard(reduced["device"].values()),
        regions=leaderboard(reduced["region"].values()),
        weeks=order_weeks(reduced["weekly"].values()),
    )
    logger.debug(
        "Rollups built: campaigns=%d, age_groups=%d, devices=%d, regions=%d, weeks=%d",
        len(campaigns),
        len(result.age_groups),
        len(result.devices),
        len(result.regions),
        len(result.weeks),
    )
    return result
