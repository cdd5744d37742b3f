"""Infrastructure adapter loading campaign snapshots from JSON fixtures."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from campaign_rollup.domain.models import MarketingSnapshot, SnapshotShapeError


logger = logging.getLogger(__name__)


def load_snapshot(path: str | Path) -> MarketingSnapshot:
    """Read a `{"campaigns": [...]}` JSON file into a typed snapshot."""
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {snapshot_path}")

    try:
        payload = json.loads(snapshot_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SnapshotShapeError(f"Snapshot file is not valid JSON: {snapshot_path} ({exc})") from exc

    snapshot = MarketingSnapshot.from_payload(payload)
    logger.info("Loaded snapshot %s with %d campaigns", snapshot_path, len(snapshot.campaigns))
    return snapshot
