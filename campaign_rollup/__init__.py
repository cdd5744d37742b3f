"""Campaign rollup package."""

from .application import RollupResult, build_rollups, run_rollup_pipeline
from .domain import MarketingSnapshot, SnapshotShapeError
from .infrastructure import load_snapshot

__all__ = [
    "MarketingSnapshot",
    "SnapshotShapeError",
    "load_snapshot",
    "RollupResult",
    "build_rollups",
    "run_rollup_pipeline",
]
