"""Infrastructure layer package."""

from .report_exporter import save_output_workbook, save_summary_json
from .snapshot_repository import load_snapshot

__all__ = ["load_snapshot", "save_output_workbook", "save_summary_json"]
