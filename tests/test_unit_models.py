import copy

import pytest

from campaign_rollup.domain.models import (
    UNKNOWN_LABEL,
    Campaign,
    MarketingSnapshot,
    SnapshotShapeError,
    coerce_snapshot,
    normalize_gender,
)

from conftest import campaign_payload, demographic, performance


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("female", "female"),
        ("Female", "female"),
        ("FEMALE ", "female"),
        ("non-female-identified", "female"),
        ("male", "male"),
        ("Male", "male"),
        ("woman", "male"),
        ("unknown", "male"),
        ("", "male"),
        (None, "male"),
    ],
)
def test_normalize_gender(raw, expected):
    assert normalize_gender(raw) == expected


def test_missing_numeric_fields_default_to_zero():
    campaign = Campaign.from_row({"id": "c1", "name": "x", "device_performance": [{"device": "Mobile"}]})
    assert campaign.spend == 0.0
    assert campaign.revenue == 0.0
    device = campaign.device_performance[0]
    assert (device.impressions, device.clicks, device.conversions, device.spend, device.revenue) == (0, 0, 0, 0, 0)
    assert device.ctr is None
    assert device.conversion_rate is None


def test_missing_breakdowns_are_empty():
    campaign = Campaign.from_row({"id": 7, "spend": 10, "weekly_performance": None})
    assert campaign.id == "7"
    assert campaign.demographic_breakdown == ()
    assert campaign.device_performance == ()
    assert campaign.regional_performance == ()
    assert campaign.weekly_performance == ()


def test_demographic_without_performance_record():
    campaign = Campaign.from_row({"demographic_breakdown": [{"gender": "Female", "age_group": "65+"}]})
    item = campaign.demographic_breakdown[0]
    assert item.gender == "female"
    assert item.age_group == "65+"
    assert item.performance.clicks == 0.0


def test_arbitrary_age_group_strings_are_kept():
    campaign = Campaign.from_row({"demographic_breakdown": [demographic("male", "13-17"), demographic("male", None)]})
    assert [item.age_group for item in campaign.demographic_breakdown] == ["13-17", UNKNOWN_LABEL]


def test_numeric_strings_are_parsed():
    campaign = Campaign.from_row({"spend": "1,200.50", "revenue": " 300 "})
    assert campaign.spend == 1200.5
    assert campaign.revenue == 300.0


def test_weekly_label_uses_end_date_when_present():
    campaign = Campaign.from_row(
        {
            "weekly_performance": [
                performance(week_start="2024-01-01", week_end="2024-01-07"),
                performance(week_start="2024-01-08"),
            ]
        }
    )
    labels = [week.label for week in campaign.weekly_performance]
    assert labels == ["2024-01-01 → 2024-01-07", "2024-01-08"]


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [],
        "campaigns",
        {},
        {"campaigns": None},
        {"campaigns": "not a list"},
        {"campaigns": {"id": 1}},
        {"campaigns": [1, 2]},
        {"campaigns": [{"device_performance": {"device": "Mobile"}}]},
        {"campaigns": [{"regional_performance": ["Riyadh"]}]},
        {"campaigns": [{"spend": "lots"}]},
        {"campaigns": [{"spend": True}]},
        {"campaigns": [campaign_payload(devices=[performance(device="Mobile", clicks=False)])]},
        {"campaigns": [campaign_payload(demographics=[demographic("male", "18-24", impressions=True)])]},
    ],
)
def test_structurally_invalid_snapshots_fail_fast(payload):
    with pytest.raises(SnapshotShapeError):
        MarketingSnapshot.from_payload(payload)


def test_shape_error_is_value_error():
    assert issubclass(SnapshotShapeError, ValueError)


def test_coerce_snapshot_accepts_all_input_forms():
    payload = {"campaigns": [campaign_payload(spend=5.0)]}
    parsed = MarketingSnapshot.from_payload(payload)
    assert coerce_snapshot(parsed) is parsed
    assert coerce_snapshot(payload) == parsed
    assert coerce_snapshot(list(parsed.campaigns)).campaigns == parsed.campaigns
    assert coerce_snapshot([]).campaigns == ()


def test_parsing_does_not_mutate_payload(sample_payload):
    before = copy.deepcopy(sample_payload)
    MarketingSnapshot.from_payload(sample_payload)
    assert sample_payload == before


def test_marketing_stats_passthrough(sample_payload):
    snapshot = MarketingSnapshot.from_payload(sample_payload)
    assert snapshot.marketing_stats["total_revenue"] == 1080.0
    assert MarketingSnapshot.from_payload({"campaigns": []}).marketing_stats == {}
