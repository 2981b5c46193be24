import json

import httpx
import pytest
from fastapi.testclient import TestClient

from trip_planner.config import Settings
from trip_planner.main import create_app

GATEWAY_URL = "https://gateway.test/v1/chat/completions"

KYOTO_TRIP = {
    "destination": "Kyoto",
    "startDate": "2025-04-01",
    "endDate": "2025-04-03",
    "budget": "moderate",
    "interests": ["culture", "food"],
}

KYOTO_ITINERARY = {
    "summary": "Temples, tea houses and night markets across two unhurried days.",
    "days": [
        {
            "day": 1,
            "title": "Eastern Kyoto",
            "activities": [
                {
                    "time": "9:00 AM",
                    "activity": "Kiyomizu-dera",
                    "description": "Walk up through Sannenzaka to the temple terrace.",
                    "tip": "Arrive before the tour buses.",
                    "estimatedCost": "$3",
                }
            ],
        },
        {
            "day": 2,
            "title": "Markets and {curly} lanterns",
            "activities": [
                {
                    "time": "7:00 PM",
                    "activity": "Nishiki Market",
                    "description": "Graze through pickles, tamagoyaki and matcha sweets.",
                }
            ],
        },
    ],
    "packingTips": ["Comfortable walking shoes", "A small towel"],
    "budgetBreakdown": {
        "accommodation": "$150/night",
        "food": "$60/day",
        "activities": "$40 total",
        "transportation": "$25 total",
    },
}


def completion_body(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


class GatewayStub:
    """Records outbound gateway calls and replies with a canned response."""

    def __init__(self, status_code=200, json_body=None, text=None, exc=None):
        self.status_code = status_code
        self.json_body = json_body
        self.text = text
        self.exc = exc
        self.requests = []

    @property
    def call_count(self):
        return len(self.requests)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)

    def last_payload(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def settings():
    return Settings(api_key="test-key", gateway_url=GATEWAY_URL, model="test/model", timeout_s=5.0)


@pytest.fixture
def make_client(settings):
    """Build a TestClient for the service wired to a gateway stub."""
    opened = []

    def _make(stub, app_settings=None):
        app = create_app(settings=app_settings or settings, transport=stub.transport)
        client = TestClient(app)
        client.__enter__()
        opened.append(client)
        return client

    yield _make
    for client in opened:
        client.__exit__(None, None, None)
