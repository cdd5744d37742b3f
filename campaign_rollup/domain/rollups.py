"""Finalized rollup rows, one per dimension key."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Mapping


METRIC_FIELDS: tuple[str, ...] = (
    "impressions",
    "clicks",
    "conversions",
    "spend",
    "revenue",
    "ctr",
    "conversion_rate",
    "roas",
)


@dataclass(frozen=True)
class RollupRow:
    """Accumulated totals plus ratios derived from those totals."""

    IDENTITY_FIELDS: ClassVar[tuple[str, ...]] = ()
    EXTRA_FIELDS: ClassVar[tuple[str, ...]] = ()

    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float
    ctr: float
    conversion_rate: float
    roas: float

    @property
    def label(self) -> str:
        return " ".join(str(getattr(self, name)) for name in self.IDENTITY_FIELDS)

    @classmethod
    def columns(cls) -> tuple[str, ...]:
        return (*cls.IDENTITY_FIELDS, *METRIC_FIELDS, *cls.EXTRA_FIELDS)


@dataclass(frozen=True)
class AgeGroupRollup(RollupRow):
    IDENTITY_FIELDS: ClassVar[tuple[str, ...]] = ("age_group",)

    age_group: str


@dataclass(frozen=True)
class GenderRollup(RollupRow):
    IDENTITY_FIELDS: ClassVar[tuple[str, ...]] = ("gender",)

    gender: str


@dataclass(frozen=True)
class GenderAgeRollup(RollupRow):
    IDENTITY_FIELDS: ClassVar[tuple[str, ...]] = ("gender", "age_group")

    gender: str
    age_group: str


@dataclass(frozen=True)
class DeviceRollup(RollupRow):
    """Device totals; the avg_* fields average the per-record ratios unweighted."""

    IDENTITY_FIELDS: ClassVar[tuple[str, ...]] = ("device",)
    EXTRA_FIELDS: ClassVar[tuple[str, ...]] = (
        "avg_ctr",
        "avg_conversion_rate",
        "avg_traffic_percentage",
        "record_count",
    )

    device: str
    avg_ctr: float
    avg_conversion_rate: float
    avg_traffic_percentage: float
    record_count: int


@dataclass(frozen=True)
class RegionRollup(RollupRow):
    IDENTITY_FIELDS: ClassVar[tuple[str, ...]] = ("region", "country")

    region: str
    country: str

    @property
    def label(self) -> str:
        return self.region


@dataclass(frozen=True)
class WeekRollup(RollupRow):
    IDENTITY_FIELDS: ClassVar[tuple[str, ...]] = ("week", "week_start", "week_end")

    week: str
    week_start: str
    week_end: str | None

    @property
    def label(self) -> str:
        return self.week


def empty_gender_rollup(gender: str) -> GenderRollup:
    return GenderRollup(
        impressions=0.0,
        clicks=0.0,
        conversions=0.0,
        spend=0.0,
        revenue=0.0,
        ctr=0.0,
        conversion_rate=0.0,
        roas=0.0,
        gender=gender,
    )


@dataclass(frozen=True)
class DemographicRollup:
    by_age_group: Mapping[str, AgeGroupRollup]
    by_gender: Mapping[str, GenderRollup]
    by_gender_age: Mapping[tuple[str, str], GenderAgeRollup]

    def headline(self, gender: str) -> GenderRollup:
        """Gender totals for headline cards, zero-filled when no campaign reported that gender."""
        row = self.by_gender.get(gender)
        if row is None:
            return empty_gender_rollup(gender)
        return row
