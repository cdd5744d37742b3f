"""Pytest fixtures and payload factories for campaign snapshots."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Ensure project root on sys.path so 'campaign_rollup' resolves without an install
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


def campaign_payload(
    campaign_id: Any = 1,
    name: str = "Campaign",
    spend: float = 0.0,
    revenue: float = 0.0,
    demographics: Optional[List[Dict[str, Any]]] = None,
    devices: Optional[List[Dict[str, Any]]] = None,
    regions: Optional[List[Dict[str, Any]]] = None,
    weeks: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"id": campaign_id, "name": name, "spend": spend, "revenue": revenue}
    if demographics is not None:
        payload["demographic_breakdown"] = demographics
    if devices is not None:
        payload["device_performance"] = devices
    if regions is not None:
        payload["regional_performance"] = regions
    if weeks is not None:
        payload["weekly_performance"] = weeks
    return payload


def demographic(gender: str, age_group: str, impressions: float = 0, clicks: float = 0, conversions: float = 0):
    return {
        "gender": gender,
        "age_group": age_group,
        "performance": {"impressions": impressions, "clicks": clicks, "conversions": conversions},
    }


def performance(**fields: Any) -> Dict[str, Any]:
    base = {"impressions": 0, "clicks": 0, "conversions": 0, "spend": 0.0, "revenue": 0.0}
    base.update(fields)
    return base


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    return {
        "campaigns": [
            campaign_payload(
                campaign_id=1,
                name="Summer Sale",
                spend=100.0,
                revenue=1000.0,
                demographics=[
                    demographic("Male", "18-24", impressions=1000, clicks=80, conversions=8),
                    demographic("Female", "25-34", impressions=500, clicks=20, conversions=4),
                ],
                devices=[
                    performance(device="Mobile", impressions=1000, clicks=50, conversions=5, spend=10.0, revenue=100.0,
                                ctr=5.0, conversion_rate=10.0, percentage_of_traffic=60),
                    performance(device="Desktop", impressions=500, clicks=50, conversions=10, spend=90.0, revenue=900.0,
                                ctr=10.0, conversion_rate=20.0, percentage_of_traffic=40),
                ],
                regions=[
                    performance(region="Riyadh", country="Saudi Arabia", impressions=900, clicks=60, conversions=7,
                                spend=60.0, revenue=700.0),
                    performance(region="Dubai", country="UAE", impressions=600, clicks=40, conversions=5,
                                spend=40.0, revenue=300.0),
                ],
                weeks=[
                    performance(week_start="2024-01-08", impressions=700, clicks=50, conversions=6, spend=50.0,
                                revenue=400.0),
                    performance(week_start="2024-01-01", impressions=800, clicks=50, conversions=6, spend=50.0,
                                revenue=600.0),
                ],
            ),
            campaign_payload(
                campaign_id=2,
                name="Brand Awareness",
                spend=40.0,
                revenue=80.0,
                demographics=[
                    demographic("male", "35-44", impressions=300),
                    demographic("female", "35-44", impressions=100),
                ],
                devices=[
                    performance(device="Mobile", impressions=400, clicks=20, conversions=1, spend=20.0, revenue=200.0,
                                ctr=5.0, conversion_rate=5.0, percentage_of_traffic=100),
                ],
                regions=[
                    performance(region="Riyadh", country="KSA", impressions=400, clicks=20, conversions=1,
                                spend=20.0, revenue=200.0),
                ],
                weeks=[
                    performance(week_start="2024-1-1", impressions=400, clicks=20, conversions=1, spend=20.0,
                                revenue=200.0),
                ],
            ),
        ],
        "marketing_stats": {"total_campaigns": 2, "total_spend": 140.0, "total_revenue": 1080.0},
    }
