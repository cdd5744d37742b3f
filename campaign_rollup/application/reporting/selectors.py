"""Ordering and leaderboard selection for rollup rows."""

from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache
from typing import Iterable, List, Sequence, TypeVar

from pyuca import Collator

from campaign_rollup.domain.models import GENDERS
from campaign_rollup.domain.rollups import AgeGroupRollup, GenderAgeRollup, GenderRollup, RollupRow, WeekRollup


RowT = TypeVar("RowT", bound=RollupRow)
DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y")


def parse_week_start(value: str) -> date | None:
    """Parse a week start into a calendar date; "2024-1-1" and "2024-01-01" are equal."""
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def _label_key(label: str) -> tuple[tuple[int, ...], str]:
    """Unicode collation order ("adults" before "Teens"); control characters are ignorable."""
    return tuple(_collator().sort_key(label)), label


def order_weeks(rows: Iterable[WeekRollup]) -> List[WeekRollup]:
    """Chronological by start date; unparseable starts go last, by label."""

    def _key(row: WeekRollup) -> tuple[int, date, str]:
        parsed = parse_week_start(row.week_start)
        if parsed is None:
            return 1, date.max, row.week
        return 0, parsed, row.week

    return sorted(rows, key=_key)


def order_age_groups(rows: Iterable[AgeGroupRollup]) -> List[AgeGroupRollup]:
    return sorted(rows, key=lambda row: _label_key(row.age_group))


def _gender_rank(gender: str) -> int:
    return GENDERS.index(gender) if gender in GENDERS else len(GENDERS)


def order_genders(rows: Iterable[GenderRollup]) -> List[GenderRollup]:
    return sorted(rows, key=lambda row: (_gender_rank(row.gender), row.gender))


def order_gender_age_groups(rows: Iterable[GenderAgeRollup]) -> List[GenderAgeRollup]:
    return sorted(rows, key=lambda row: (_gender_rank(row.gender), *_label_key(row.age_group)))


def leaderboard(rows: Iterable[RowT], limit: int | None = None) -> List[RowT]:
    """Highest revenue first; equal revenue falls back to the label."""
    ordered = sorted(rows, key=lambda row: (-row.revenue, row.label))
    if limit is None:
        return ordered
    return ordered[: max(limit, 0)]


def top_row(rows: Iterable[RowT]) -> RowT | None:
    ordered = leaderboard(rows, limit=1)
    return ordered[0] if ordered else None


def weekly_series(rows: Sequence[WeekRollup]) -> dict[str, list]:
    """Chart-ready parallel lists in chronological order."""
    ordered = order_weeks(rows)
    return {
        "labels": [row.week for row in ordered],
        "revenue": [row.revenue for row in ordered],
        "spend": [row.spend for row in ordered],
    }
