"""
Shared fixtures for dining bot tests
"""

import json
from typing import Any, Dict, List, Optional, Tuple

import pytest

from diningbot_core.config import Config
from diningbot_core.menu_models import StationSpec


STATIONS = (
    StationSpec("Home Zone 1"),
    StationSpec("True Balance"),
    StationSpec("Soup Station", show_total=False),
)


def menu_payload(
    periods: List[Tuple[str, str]] = (),
    stations: List[Tuple[str, str, str]] = (),
    products: List[Tuple[str, str, str, str]] = (),
) -> Dict[str, Any]:
    """Build a GetMenus-shaped payload.

    periods:  (PeriodId, Name)
    stations: (PeriodId, StationId, Name)
    products: (PeriodId, StationId, MarketingName, Calories)
    """
    return {
        "Menu": {
            "MenuPeriods": [{"PeriodId": pid, "Name": name} for pid, name in periods],
            "MenuStations": [
                {"PeriodId": pid, "StationId": sid, "Name": name}
                for pid, sid, name in stations
            ],
            "MenuProducts": [
                {
                    "PeriodId": pid,
                    "StationId": sid,
                    "Product": {
                        "MarketingName": name,
                        "ShortDescription": "",
                        "Calories": cal,
                    },
                }
                for pid, sid, name, cal in products
            ],
        }
    }


DINNER_PAYLOAD = menu_payload(
    periods=[("P1", "Dinner")],
    stations=[
        ("P1", "S1", "Home Zone 1"),
        ("P1", "S2", "True Balance"),
        ("P1", "S3", "Soup Station"),
    ],
    products=[
        ("P1", "S1", "Grilled Chicken (large)", "450"),
        ("P1", "S2", "Rice Bowl", "300"),
    ],
)


class RecordingSender:
    """Delivery double that records messages, optionally failing"""

    def __init__(self, error: Optional[Exception] = None):
        self.sent: List[Tuple[int, str]] = []
        self.error = error

    async def send(self, recipient_id: int, text: str) -> None:
        self.sent.append((recipient_id, text))
        if self.error is not None:
            raise self.error


@pytest.fixture
def stations():
    return STATIONS


@pytest.fixture
def dinner_payload_text():
    return json.dumps(DINNER_PAYLOAD)


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def config():
    return Config(
        telegram_bot_token="123:abc",
        personal_id=42,
        interception_timeout=1.0,
        element_timeout_ms=100,
        settle_timeout_ms=100,
    )
