"""Unit tests for the Airtable and lead webhook HTTP clients"""

import asyncio
import pytest
import httpx
from urllib.parse import unquote_plus

from shelters_gateway.domain.exceptions import (
    AirtableAPIError,
    AirtableConfigError,
    InvalidRecordIdError,
    LeadWebhookError,
    RecordNotFoundError,
)
from shelters_gateway.infrastructure.clients.airtable import AirtableClient
from shelters_gateway.infrastructure.clients.lead_webhook import LeadWebhookClient

AIRTABLE_BASE = "https://airtable.test/v0"
BASE_ID = "appTESTBASE"


def test_search_listings_builds_query(airtable_client, airtable_transport):
    """Filter formula and view go to Airtable; records are renamed"""
    listings = asyncio.run(airtable_client.search_listings(location="Bandra West", max_price="30000000"))

    assert [l.listing_id for l in listings] == ["recABC123def456GH", "recXYZ987wvu654TS"]
    assert listings[1].title == "Plot in Alibaug"

    request = airtable_transport.requests[0]
    assert request.headers["Authorization"] == "Bearer keyTEST"
    assert request.url.path == f"/v0/{BASE_ID}/Properties"
    assert request.url.params["view"] == "Grid view"
    assert request.url.params["filterByFormula"] == 'AND({Location} = "Bandra West",{Price} <= 30000000)'


def test_search_listings_without_filters_omits_formula(airtable_client, airtable_transport):
    asyncio.run(airtable_client.search_listings())
    assert "filterByFormula" not in airtable_transport.requests[0].url.params


def test_get_property_not_found(airtable_client):
    with pytest.raises(RecordNotFoundError):
        asyncio.run(airtable_client.get_property("recMISSING00000000"))


def test_get_property_rejects_malformed_id(airtable_client, airtable_transport):
    """Malformed IDs never reach Airtable"""
    for record_id in ("bad-id", "rec123", "../Leads"):
        with pytest.raises(InvalidRecordIdError):
            asyncio.run(airtable_client.get_property(record_id))

    assert airtable_transport.requests == []


def test_upstream_error_carries_status_and_body():
    transport = httpx.MockTransport(lambda request: httpx.Response(401, text="AUTHENTICATION_REQUIRED"))
    client = AirtableClient(api_key="bad", base_id=BASE_ID, api_base=AIRTABLE_BASE, transport=transport)

    with pytest.raises(AirtableAPIError) as exc_info:
        asyncio.run(client.search_listings())

    assert exc_info.value.status_code == 401
    assert exc_info.value.details == "AUTHENTICATION_REQUIRED"


def test_network_failure_is_airtable_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = AirtableClient(api_key="k", base_id=BASE_ID, api_base=AIRTABLE_BASE, transport=httpx.MockTransport(handler))

    with pytest.raises(AirtableAPIError):
        asyncio.run(client.get_property("recABC123def456GH"))


def test_missing_credentials_raise_config_error():
    client = AirtableClient(api_key="", base_id="", api_base=AIRTABLE_BASE)

    with pytest.raises(AirtableConfigError):
        asyncio.run(client.search_listings())


def test_create_record_posts_single_record(airtable_client, airtable_transport):
    record_id = asyncio.run(airtable_client.create_record("Leads", {"Name": "Asha"}))

    assert record_id == "recLEAD0000000001"
    assert airtable_transport.json_bodies() == [{"records": [{"fields": {"Name": "Asha"}}]}]
    assert unquote_plus(airtable_transport.requests[0].url.path).endswith("/Leads")


def test_webhook_retries_then_succeeds(recording_transport):
    """Two 500s then success: three attempts, no error"""
    responses = iter([500, 500, 200])
    transport = recording_transport(lambda request: httpx.Response(next(responses)))
    client = LeadWebhookClient(webhook_url="https://hook.test/x", max_retries=5, backoff_base=0, transport=transport)

    asyncio.run(client.send_lead({"referral_id": "SR-1-ABCDE"}))

    assert len(transport.requests) == 3


def test_webhook_gives_up_after_max_retries(recording_transport):
    transport = recording_transport(lambda request: httpx.Response(503))
    client = LeadWebhookClient(webhook_url="https://hook.test/x", max_retries=3, backoff_base=0, transport=transport)

    with pytest.raises(LeadWebhookError):
        asyncio.run(client.send_lead({"referral_id": "SR-1-ABCDE"}))

    assert len(transport.requests) == 3


def test_webhook_disabled_without_url(recording_transport):
    transport = recording_transport(lambda request: httpx.Response(200))
    client = LeadWebhookClient(webhook_url="", transport=transport)

    asyncio.run(client.send_lead({"referral_id": "SR-1-ABCDE"}))

    assert not client.enabled
    assert transport.requests == []
