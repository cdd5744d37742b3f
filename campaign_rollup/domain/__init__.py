"""Domain layer package."""

from .models import Campaign, MarketingSnapshot, SnapshotShapeError, normalize_gender
from .rollups import DemographicRollup, RollupRow

__all__ = [
    "Campaign",
    "MarketingSnapshot",
    "SnapshotShapeError",
    "normalize_gender",
    "DemographicRollup",
    "RollupRow",
]
