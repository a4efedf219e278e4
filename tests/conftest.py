"""Pytest fixtures for testing"""

import json
import pytest
from typing import Any, Callable, Dict, List
import httpx
from fastapi.testclient import TestClient

from shelters_gateway.api.main import create_app
from shelters_gateway.api.dependencies import get_airtable_client, get_lead_webhook_client
from shelters_gateway.infrastructure.clients.airtable import AirtableClient
from shelters_gateway.infrastructure.clients.lead_webhook import LeadWebhookClient

AIRTABLE_BASE = "https://airtable.test/v0"
BASE_ID = "appTESTBASE"
WEBHOOK_URL = "https://hook.test/leads"


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every request it served"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    def json_bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.content]


@pytest.fixture
def sample_property_record() -> Dict[str, Any]:
    """Airtable record for a single property"""
    return {
        "id": "recABC123def456GH",
        "fields": {
            "Title": "<b>Sea View</b> 2BHK",
            "Location": "Bandra West",
            "Price": 25000000,
            "Status": "Available",
            "Bedrooms": 2,
            "Bathrooms": 2,
            "Size (sqft)": 1100,
            "Property Type": "Apartment",
            "Offer Type": "Sale",
            "Description": "Bright flat <script>alert(1)</script>near the promenade",
            "Amenities": ["Gym", "<i>Pool</i>"],
            "Image": [{"url": "https://img.test/1.jpg"}, {"url": "https://img.test/2.jpg"}],
            "Agent Name": "Priya Shah",
            "Agent Phone": "+91 98600-12345",
            "Latitude": 19.06,
            "Longitude": 72.83,
        },
    }


@pytest.fixture
def airtable_records(sample_property_record: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Airtable list response records"""
    return [
        sample_property_record,
        {"id": "recXYZ987wvu654TS", "fields": {"Title": "Plot in Alibaug", "Price": 4500000}},
    ]


@pytest.fixture
def airtable_transport(airtable_records, sample_property_record) -> RecordingTransport:
    """Fake Airtable API: lists, fetches by ID, and creates lead records"""

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if request.method == "POST":
            return httpx.Response(200, json={"records": [{"id": "recLEAD0000000001", "fields": {}}]})
        if path.endswith("/Properties"):
            return httpx.Response(200, json={"records": airtable_records})
        if path.endswith(f"/Properties/{sample_property_record['id']}"):
            return httpx.Response(200, json=sample_property_record)
        return httpx.Response(404, json={"error": "NOT_FOUND"})

    return RecordingTransport(handler)


@pytest.fixture
def webhook_transport() -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(200, json={"accepted": True}))


@pytest.fixture
def airtable_client(airtable_transport: RecordingTransport) -> AirtableClient:
    return AirtableClient(api_key="keyTEST", base_id=BASE_ID, api_base=AIRTABLE_BASE, transport=airtable_transport)


@pytest.fixture
def webhook_client(webhook_transport: RecordingTransport) -> LeadWebhookClient:
    return LeadWebhookClient(webhook_url=WEBHOOK_URL, max_retries=3, backoff_base=0, transport=webhook_transport)


@pytest.fixture
def client(airtable_client: AirtableClient, webhook_client: LeadWebhookClient) -> TestClient:
    """Create FastAPI test client with fake upstreams"""
    app = create_app()
    app.dependency_overrides[get_airtable_client] = lambda: airtable_client
    app.dependency_overrides[get_lead_webhook_client] = lambda: webhook_client
    return TestClient(app)


@pytest.fixture
def recording_transport() -> Callable[..., RecordingTransport]:
    """Factory for ad-hoc recording transports"""
    return RecordingTransport
