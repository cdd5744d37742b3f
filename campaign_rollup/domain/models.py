"""Domain models for campaign snapshots and their breakdowns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Sequence


UNKNOWN_LABEL = "UNKNOWN"
GENDERS: tuple[str, ...] = ("male", "female")
WEEK_LABEL_SEPARATOR = " → "


class SnapshotShapeError(ValueError):
    """Raised when the upstream snapshot does not have the expected structure."""


def _to_float(value: Any, field_name: str) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise SnapshotShapeError(f"Invalid numeric value for {field_name}: {value!r}")
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if value == "":
            return 0.0
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise SnapshotShapeError(f"Invalid numeric value for {field_name}: {value!r}") from exc


def _to_optional_float(value: Any, field_name: str) -> float | None:
    if value is None:
        return None
    return _to_float(value, field_name)


def _label(value: Any) -> str:
    if value is None:
        return UNKNOWN_LABEL
    text = str(value)
    if not text.strip():
        return UNKNOWN_LABEL
    return text


def _require_mapping(value: Any, context: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SnapshotShapeError(f"Expected an object for {context}, got {type(value).__name__}")
    return value


def _records(row: Mapping[str, Any], key: str, context: str) -> tuple[Mapping[str, Any], ...]:
    value = row.get(key)
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise SnapshotShapeError(f"Expected a list for {context}.{key}, got {type(value).__name__}")
    return tuple(_require_mapping(item, f"{context}.{key}[{idx}]") for idx, item in enumerate(value))


def normalize_gender(value: Any) -> str:
    """Anything that does not mention "female" counts as male."""
    if value is not None and "female" in str(value).lower():
        return "female"
    return "male"


@dataclass(frozen=True)
class PerformanceCounts:
    impressions: float
    clicks: float
    conversions: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any] | None) -> "PerformanceCounts":
        if row is None:
            return cls(impressions=0.0, clicks=0.0, conversions=0.0)
        row = _require_mapping(row, "performance")
        return cls(
            impressions=_to_float(row.get("impressions"), "impressions"),
            clicks=_to_float(row.get("clicks"), "clicks"),
            conversions=_to_float(row.get("conversions"), "conversions"),
        )


@dataclass(frozen=True)
class DemographicBreakdown:
    gender: str
    age_group: str
    performance: PerformanceCounts

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DemographicBreakdown":
        return cls(
            gender=normalize_gender(row.get("gender")),
            age_group=_label(row.get("age_group")),
            performance=PerformanceCounts.from_row(row.get("performance")),
        )


@dataclass(frozen=True)
class DevicePerformance:
    device: str
    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float
    ctr: float | None
    conversion_rate: float | None
    percentage_of_traffic: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DevicePerformance":
        return cls(
            device=_label(row.get("device")),
            impressions=_to_float(row.get("impressions"), "impressions"),
            clicks=_to_float(row.get("clicks"), "clicks"),
            conversions=_to_float(row.get("conversions"), "conversions"),
            spend=_to_float(row.get("spend"), "spend"),
            revenue=_to_float(row.get("revenue"), "revenue"),
            ctr=_to_optional_float(row.get("ctr"), "ctr"),
            conversion_rate=_to_optional_float(row.get("conversion_rate"), "conversion_rate"),
            percentage_of_traffic=_to_float(row.get("percentage_of_traffic"), "percentage_of_traffic"),
        )


@dataclass(frozen=True)
class RegionalPerformance:
    region: str
    country: str
    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float
    ctr: float | None
    conversion_rate: float | None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RegionalPerformance":
        return cls(
            region=_label(row.get("region")),
            country=_label(row.get("country")),
            impressions=_to_float(row.get("impressions"), "impressions"),
            clicks=_to_float(row.get("clicks"), "clicks"),
            conversions=_to_float(row.get("conversions"), "conversions"),
            spend=_to_float(row.get("spend"), "spend"),
            revenue=_to_float(row.get("revenue"), "revenue"),
            ctr=_to_optional_float(row.get("ctr"), "ctr"),
            conversion_rate=_to_optional_float(row.get("conversion_rate"), "conversion_rate"),
        )


@dataclass(frozen=True)
class WeeklyPerformance:
    week_start: str
    week_end: str | None
    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float

    @property
    def label(self) -> str:
        if self.week_end is None:
            return self.week_start
        return f"{self.week_start}{WEEK_LABEL_SEPARATOR}{self.week_end}"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "WeeklyPerformance":
        week_end = row.get("week_end")
        return cls(
            week_start=_label(row.get("week_start")),
            week_end=None if week_end is None or not str(week_end).strip() else str(week_end),
            impressions=_to_float(row.get("impressions"), "impressions"),
            clicks=_to_float(row.get("clicks"), "clicks"),
            conversions=_to_float(row.get("conversions"), "conversions"),
            spend=_to_float(row.get("spend"), "spend"),
            revenue=_to_float(row.get("revenue"), "revenue"),
        )


@dataclass(frozen=True)
class Campaign:
    """One campaign; its spend and revenue are authoritative over any breakdown."""

    id: str
    name: str
    spend: float
    revenue: float
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    demographic_breakdown: tuple[DemographicBreakdown, ...] = ()
    device_performance: tuple[DevicePerformance, ...] = ()
    regional_performance: tuple[RegionalPerformance, ...] = ()
    weekly_performance: tuple[WeeklyPerformance, ...] = ()

    @classmethod
    def from_row(cls, row: Mapping[str, Any], position: int = 0) -> "Campaign":
        row = _require_mapping(row, f"campaigns[{position}]")
        context = f"campaigns[{position}]"
        return cls(
            id=str(row.get("id") if row.get("id") is not None else position),
            name=str(row.get("name", "") or ""),
            spend=_to_float(row.get("spend"), "spend"),
            revenue=_to_float(row.get("revenue"), "revenue"),
            impressions=_to_float(row.get("impressions"), "impressions"),
            clicks=_to_float(row.get("clicks"), "clicks"),
            conversions=_to_float(row.get("conversions"), "conversions"),
            demographic_breakdown=tuple(
                DemographicBreakdown.from_row(item) for item in _records(row, "demographic_breakdown", context)
            ),
            device_performance=tuple(
                DevicePerformance.from_row(item) for item in _records(row, "device_performance", context)
            ),
            regional_performance=tuple(
                RegionalPerformance.from_row(item) for item in _records(row, "regional_performance", context)
            ),
            weekly_performance=tuple(
                WeeklyPerformance.from_row(item) for item in _records(row, "weekly_performance", context)
            ),
        )


@dataclass(frozen=True)
class MarketingSnapshot:
    campaigns: tuple[Campaign, ...]
    marketing_stats: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "MarketingSnapshot":
        payload = _require_mapping(payload, "snapshot")
        campaigns = payload.get("campaigns")
        if not isinstance(campaigns, (list, tuple)):
            raise SnapshotShapeError(
                f"Expected 'campaigns' to be a list, got {type(campaigns).__name__}"
            )
        stats = payload.get("marketing_stats")
        return cls(
            campaigns=tuple(Campaign.from_row(row, position=idx) for idx, row in enumerate(campaigns)),
            marketing_stats=dict(stats) if isinstance(stats, Mapping) else {},
        )


def coerce_snapshot(source: MarketingSnapshot | Mapping[str, Any] | Sequence[Campaign]) -> MarketingSnapshot:
    """Accept a parsed snapshot, a raw payload, or an already-typed campaign list."""
    if isinstance(source, MarketingSnapshot):
        return source
    if isinstance(source, (list, tuple)) and all(isinstance(item, Campaign) for item in source):
        return MarketingSnapshot(campaigns=tuple(source))
    return MarketingSnapshot.from_payload(source)
