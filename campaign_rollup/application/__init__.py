"""Application layer package."""

from .report_service import run_rollup_pipeline
from .rollup_service import RollupResult, build_rollups

__all__ = ["RollupResult", "build_rollups", "run_rollup_pipeline"]
