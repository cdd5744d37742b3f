"""Campaign rollup pipeline: snapshot file in, summary JSON + workbook out."""

from __future__ import annotations

from dataclasses import asdict
from time import perf_counter
from typing import Any, Dict, List, Sequence, Type

import polars as pl

from campaign_rollup.application.reporting.metrics import campaign_totals, fmt_money, fmt_rate, fmt_roas
from campaign_rollup.application.reporting.selectors import leaderboard, top_row, weekly_series
from campaign_rollup.application.rollup_service import RollupResult, build_rollups
from campaign_rollup.config import RollupSettings, configure_logging, load_settings
from campaign_rollup.domain.models import GENDERS, MarketingSnapshot
from campaign_rollup.domain.rollups import (
    AgeGroupRollup,
    DeviceRollup,
    GenderAgeRollup,
    GenderRollup,
    RegionRollup,
    RollupRow,
    WeekRollup,
)
from campaign_rollup.infrastructure.report_exporter import save_output_workbook, save_summary_json
from campaign_rollup.infrastructure.snapshot_repository import load_snapshot


def _row_dict(row: RollupRow) -> Dict[str, Any]:
    data = asdict(row)
    return {column: data.get(column) for column in row.columns()}


def rows_to_frame(rows: Sequence[RollupRow], row_type: Type[RollupRow]) -> pl.DataFrame:
    """Frame in the row type's column order; no rows still yields the columns."""
    columns = list(row_type.columns())
    if not rows:
        return pl.DataFrame({col: [] for col in columns})
    return pl.DataFrame([_row_dict(row) for row in rows]).select(columns)


def _top_row_dict(row: RollupRow | None) -> Dict[str, Any] | None:
    if row is None:
        return None
    return _row_dict(row)


def build_summary(
    snapshot: MarketingSnapshot,
    result: RollupResult,
    leaderboard_limit: int,
) -> Dict[str, Any]:
    totals = result.totals()
    return {
        "campaign_count": len(snapshot.campaigns),
        "campaign_totals": asdict(campaign_totals(snapshot.campaigns)),
        "reported_marketing_stats": dict(snapshot.marketing_stats),
        "dimension_totals": {name: asdict(row) for name, row in totals.items()},
        "demographic": {
            "headline": {
                gender: _row_dict(result.demographics.headline(gender)) for gender in GENDERS
            },
            "age_groups": [_row_dict(row) for row in result.age_groups],
            "gender_age_groups": [_row_dict(row) for row in result.gender_age_groups],
        },
        "device": {
            "rows": [_row_dict(row) for row in result.devices],
        },
        "region": {
            "top_region": _top_row_dict(top_row(result.regions)),
            "leaderboard": [_row_dict(row) for row in leaderboard(result.regions, limit=leaderboard_limit)],
            "rows": [_row_dict(row) for row in result.regions],
        },
        "weekly": {
            "series": weekly_series(result.weeks),
            "rows": [_row_dict(row) for row in result.weeks],
        },
    }


def build_sheets(result: RollupResult) -> Dict[str, pl.DataFrame]:
    return {
        "age_groups": rows_to_frame(result.age_groups, AgeGroupRollup),
        "genders": rows_to_frame(result.genders, GenderRollup),
        "gender_age_groups": rows_to_frame(result.gender_age_groups, GenderAgeRollup),
        "devices": rows_to_frame(result.devices, DeviceRollup),
        "regions": rows_to_frame(result.regions, RegionRollup),
        "weeks": rows_to_frame(result.weeks, WeekRollup),
    }


def run_rollup_pipeline(settings: RollupSettings | None = None) -> Dict[str, Any]:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    pipeline_start = perf_counter()
    stage_start = pipeline_start
    stage_timings: List[tuple[str, float]] = []

    def _mark(stage_name: str) -> None:
        nonlocal stage_start
        now = perf_counter()
        stage_timings.append((stage_name, now - stage_start))
        stage_start = now

    snapshot = load_snapshot(settings.input_path)
    _mark("load_snapshot")
    result = build_rollups(snapshot, parallel=settings.parallel)
    _mark("build_rollups")
    summary = build_summary(snapshot, result, leaderboard_limit=settings.leaderboard_limit)
    _mark("build_summary")

    save_summary_json(settings.summary_json_path, summary)
    _mark("save_json")
    workbook_saved, workbook_error_message = save_output_workbook(settings.workbook_path, build_sheets(result))
    _mark("save_workbook")
    total_elapsed = perf_counter() - pipeline_start

    device_totals = result.totals()["device"]
    print(
        "Summary prepared: "
        f"campaigns={len(snapshot.campaigns)}, "
        f"age_groups={len(result.age_groups)}, "
        f"devices={len(result.devices)}, "
        f"regions={len(result.regions)}, "
        f"weeks={len(result.weeks)}"
    )
    print(
        f"Device Revenue: {fmt_money(device_totals.revenue)}, "
        f"ROAS {fmt_roas(device_totals.roas)}, "
        f"CTR {fmt_rate(device_totals.ctr)}, "
        f"CVR {fmt_rate(device_totals.conversion_rate)}"
    )
    stage_text = ", ".join([f"{name}={seconds:.3f}s" for name, seconds in stage_timings])
    print(f"Stage Timing: {stage_text}")
    print(f"Total Elapsed: {total_elapsed:.3f}s")
    print(f"Saved JSON: {settings.summary_json_path}")
    if workbook_saved:
        print(f"Saved Excel: {settings.workbook_path}")
    else:
        print(f"Excel save skipped (file may be open/locked): {workbook_error_message}")
    return summary
