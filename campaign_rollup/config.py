"""Environment-driven settings for the command-line rollup pipeline."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_LEADERBOARD_LIMIT = 7
TRUTHY_VALUES = {"1", "true", "yes", "on"}
FALSY_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class RollupSettings:
    input_path: Path
    output_dir: Path
    leaderboard_limit: int = DEFAULT_LEADERBOARD_LIMIT
    parallel: bool = False
    log_level: str = "INFO"

    @property
    def summary_json_path(self) -> Path:
        return self.output_dir / "rollup_summary.json"

    @property
    def workbook_path(self) -> Path:
        return self.output_dir / "rollup_summary.xlsx"


def _leaderboard_limit() -> int:
    raw = os.getenv("ROLLUP_LEADERBOARD_LIMIT", str(DEFAULT_LEADERBOARD_LIMIT))
    try:
        limit = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid ROLLUP_LEADERBOARD_LIMIT: {raw}") from exc
    if limit <= 0:
        raise ValueError(f"ROLLUP_LEADERBOARD_LIMIT must be positive, got {limit}")
    return limit


def _parallel() -> bool:
    raw = os.getenv("ROLLUP_PARALLEL", "0").strip().lower()
    if raw in TRUTHY_VALUES:
        return True
    if raw in FALSY_VALUES:
        return False
    raise ValueError(f"Invalid ROLLUP_PARALLEL: {raw}")


def _log_level() -> str:
    raw = os.getenv("ROLLUP_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(raw), int):
        raise ValueError(f"Invalid ROLLUP_LOG_LEVEL: {raw}")
    return raw


def load_settings() -> RollupSettings:
    return RollupSettings(
        input_path=Path(os.getenv("ROLLUP_INPUT_PATH", str(PROJECT_ROOT / "data" / "raw" / "campaigns.json"))),
        output_dir=Path(os.getenv("ROLLUP_OUTPUT_DIR", str(PROJECT_ROOT / "output"))),
        leaderboard_limit=_leaderboard_limit(),
        parallel=_parallel(),
        log_level=_log_level(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
